from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .container import Container, build_container
from .core.constants import DEFAULT_HEADER_IMAGE_PATH, DEFAULT_REPORT_TITLE, DEFAULT_WATERMARK_PATH
from .database.bootstrap import apply_schema, ensure_seed_user, list_tables
from .records.controller import register as register_records
from .reports.controller import register as register_reports
from .users.controller import register as register_users

logger = logging.getLogger(__name__)

REPO_ROOT = Path(__file__).resolve().parents[3]


def _repo_path(value: str) -> str:
    path = Path(value)
    return str(path if path.is_absolute() else REPO_ROOT / path)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app(*, container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.json.ensure_ascii = False

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"), db_config.get("host"), db_config.get("port", 3306), db_config.get("database"),
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            ensure_seed_user(
                db_config,
                email=settings.SEED_USER_EMAIL,
                password=settings.SEED_USER_PASSWORD,
                name=settings.SEED_USER_NAME,
                unidad=getattr(settings, "SEED_USER_UNIDAD", None),
            )

        container = build_container(
            db_config=db_config,
            report_title=getattr(settings, "REPORT_TITLE", DEFAULT_REPORT_TITLE),
            watermark_path=_repo_path(getattr(settings, "WATERMARK_PATH", DEFAULT_WATERMARK_PATH)),
            header_image_path=_repo_path(getattr(settings, "HEADER_IMAGE_PATH", DEFAULT_HEADER_IMAGE_PATH)),
        )

    app.extensions["absence_registry"] = container

    register_users(app, container)
    register_records(app, container)
    register_reports(app, container)

    return app
