from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.absence_registry.absence_registry.database.bootstrap import ensure_seed_user


def main() -> None:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    created = ensure_seed_user(
        db_config,
        email=settings.SEED_USER_EMAIL,
        password=settings.SEED_USER_PASSWORD,
        name=settings.SEED_USER_NAME,
        unidad=settings.SEED_USER_UNIDAD,
    )

    if created:
        print(f"OK: Seed user created: {settings.SEED_USER_EMAIL} / {settings.SEED_USER_PASSWORD}")
    else:
        print(f"OK: {settings.SEED_USER_EMAIL} already exists, nothing to do")


if __name__ == "__main__":
    main()
