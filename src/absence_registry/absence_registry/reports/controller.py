from __future__ import annotations

import io
import logging

from flask import Flask, jsonify, request, send_file

from ..core.exceptions import ValidationError
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/registros/pdf", methods=["GET"], endpoint="records_pdf")
    @app.route("/api/records/pdf", methods=["GET"], endpoint="records_pdf")
    def records_pdf():
        # The document is fully rendered before the response starts, so any
        # failure here can still be answered with a JSON error.
        try:
            report = container.report_service.build_user_report(request.args.get("usuario", ""))
        except ValidationError as e:
            return jsonify({"message": str(e)}), 400
        except Exception:
            logger.exception("Error generating records PDF")
            return jsonify({"message": "Error interno al generar el PDF."}), 500

        return send_file(
            io.BytesIO(report.content),
            mimetype="application/pdf",
            as_attachment=True,
            download_name=report.filename,
        )
