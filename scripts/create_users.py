"""Create many accounts sharing one temporary password.

Input file (``EMAILS_FILE``, default ``./emails.txt``), one user per line::

    usuario1@ejemplo.com,Juan Pérez,Unidad Operativa
    usuario2@ejemplo.com,,Unidad Administrativa
    usuario3@ejemplo.com

A missing name is derived from the e-mail, a missing unit falls back to
``DEFAULT_UNIDAD``. Credentials of the created accounts are written to
``OUTPUT_FILE`` (default ``./usuarios-creados.csv``).
"""
from __future__ import annotations

import importlib
import logging
import os
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.absence_registry.absence_registry.container import build_container
from src.absence_registry.absence_registry.users.service import parse_user_lines, write_credentials_csv


def main() -> int:
    load_dotenv(override=False)
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")

    temp_password = os.getenv("TEMP_PASSWORD", "TempPass123!")
    emails_file = Path(os.getenv("EMAILS_FILE", Path.cwd() / "emails.txt"))
    output_file = Path(os.getenv("OUTPUT_FILE", Path.cwd() / "usuarios-creados.csv"))
    default_unidad = os.getenv("DEFAULT_UNIDAD", "")

    if not emails_file.exists():
        print(f"ERROR: {emails_file} not found. Expected lines: correo,nombre,unidad")
        return 1

    entries = parse_user_lines(emails_file.read_text(encoding="utf-8").splitlines(), default_unidad=default_unidad)
    if not entries:
        print(f"ERROR: no valid e-mails in {emails_file}")
        return 1

    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=dict(settings.DB_CONFIG))
    summary = container.user_import_service.import_users(entries, temp_password=temp_password)

    if summary.created:
        write_credentials_csv(output_file, summary.created, temp_password=temp_password)
        print(f"OK: credentials written to {output_file}")

    print(f"Users in file:      {summary.total_in_file}")
    print(f"Unique users:       {summary.unique}")
    print(f"Already existing:   {summary.existing}")
    print(f"Created:            {len(summary.created)}")
    if summary.failed_batches:
        print(f"Failed batches:     {', '.join(map(str, summary.failed_batches))}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
