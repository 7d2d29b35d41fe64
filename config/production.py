import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "absence_registry"),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

REPORT_TITLE = os.getenv("REPORT_TITLE", "Personal que no laboró en el Referéndum y Consulta Popular 2025")
WATERMARK_PATH = os.getenv("WATERMARK_PATH", "static/logo.png")
HEADER_IMAGE_PATH = os.getenv("HEADER_IMAGE_PATH", "static/cabecera.png")

SEED_USER_EMAIL = os.getenv("SEED_USER_EMAIL", "admin@example.com")
SEED_USER_PASSWORD = os.getenv("SEED_USER_PASSWORD", "changeme")
SEED_USER_NAME = os.getenv("SEED_USER_NAME", "Administrador")
SEED_USER_UNIDAD = os.getenv("SEED_USER_UNIDAD")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
