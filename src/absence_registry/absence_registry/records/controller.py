from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..core.exceptions import DuplicateIdentificationError, NotFoundError, ValidationError
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    service = container.record_service

    @app.route("/api/registros", methods=["POST"], endpoint="create_records")
    @app.route("/api/records", methods=["POST"], endpoint="create_records")
    def create_records():
        try:
            total = service.submit(request.get_json(silent=True))
            return jsonify({"message": "Registros guardados correctamente.", "total": total}), 201
        except ValidationError as e:
            return jsonify({"message": str(e), "errors": e.to_dict()}), 400
        except DuplicateIdentificationError as e:
            return jsonify({"message": str(e), "conflict": e.conflict.to_api()}), 409
        except Exception:
            logger.exception("Error saving records")
            return jsonify({"message": "Error interno al guardar los registros. Revisa los logs."}), 500

    @app.route("/api/registros", methods=["GET"], endpoint="list_records")
    @app.route("/api/records", methods=["GET"], endpoint="list_records")
    def list_records():
        try:
            rows = service.list_for_user(request.args.get("usuario", ""))
            return jsonify({"registros": [r.to_api() for r in rows]})
        except ValidationError as e:
            return jsonify({"message": str(e)}), 400
        except Exception:
            logger.exception("Error listing records")
            return jsonify({"message": "Error interno al obtener los registros."}), 500

    @app.route("/api/registros/por-dependencia", methods=["GET"], endpoint="records_by_unit")
    @app.route("/api/records/by-unit", methods=["GET"], endpoint="records_by_unit")
    def records_by_unit():
        try:
            totals = service.totals_by_unit()
            return jsonify({"dependencias": [t.to_api() for t in totals]})
        except Exception:
            logger.exception("Error aggregating records by unit")
            return jsonify({"message": "Error interno al obtener los agregados."}), 500

    @app.route("/api/registros/<record_id>", methods=["DELETE"], endpoint="delete_record")
    @app.route("/api/records/<record_id>", methods=["DELETE"], endpoint="delete_record")
    def delete_record(record_id: str):
        try:
            parsed_id = int(record_id)
        except ValueError:
            return jsonify({"message": "Identificador inválido."}), 400

        try:
            service.delete(record_id=parsed_id, usuario=request.args.get("usuario", ""))
            return jsonify({"message": "Registro eliminado correctamente."})
        except ValidationError as e:
            return jsonify({"message": str(e)}), 400
        except NotFoundError as e:
            return jsonify({"message": str(e)}), 404
        except Exception:
            logger.exception("Error deleting record %s", record_id)
            return jsonify({"message": "Error interno al eliminar el registro."}), 500
