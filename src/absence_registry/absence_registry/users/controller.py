from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..core.exceptions import AuthenticationError, ValidationError
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/health", methods=["GET"], endpoint="health")
    def health():
        return jsonify({"status": "ok"})

    @app.route("/api/login", methods=["POST"], endpoint="login")
    def login():
        payload = request.get_json(silent=True) or {}
        try:
            email, password = container.auth_service.validate_credentials(payload)
            result = container.auth_service.authenticate(email, password)
            return jsonify({
                "message": "Inicio de sesión exitoso",
                "token": result.token,
                "user": result.user_payload(),
            })
        except ValidationError as e:
            return jsonify({"message": str(e), "errors": e.to_dict()}), 400
        except AuthenticationError as e:
            return jsonify({"message": str(e)}), 401
        except Exception:
            logger.exception("Internal error during login")
            return jsonify({"message": "Error interno del servidor. Revisa los logs."}), 500
