import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "absence_registry_test"),
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

REPORT_TITLE = "Reporte de prueba"
WATERMARK_PATH = "static/logo.png"
HEADER_IMAGE_PATH = "static/cabecera.png"

SEED_USER_EMAIL = "admin@example.com"
SEED_USER_PASSWORD = "changeme"
SEED_USER_NAME = "Administrador"
SEED_USER_UNIDAD = None

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
