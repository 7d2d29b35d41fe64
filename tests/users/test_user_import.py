from __future__ import annotations

import csv

from werkzeug.security import check_password_hash

from src.absence_registry.absence_registry.users.model import User
from src.absence_registry.absence_registry.users.service import (
    UserEntry,
    UserImportService,
    generate_user_name,
    parse_user_lines,
    write_credentials_csv,
)
from tests.fakes import InMemoryUsers


def test_generate_user_name_from_local_part():
    assert generate_user_name("juan.perez@ejemplo.com") == "Juan Perez"
    assert generate_user_name("maria_jose-lopez@ejemplo.com") == "Maria Jose Lopez"


def test_parse_user_lines():
    lines = [
        "Usuario1@Ejemplo.com,Juan Pérez,Unidad Operativa",
        "usuario2@ejemplo.com,,Unidad Administrativa",
        "ana.rios@ejemplo.com",
        "",
        "sin correo aqui",
        "a@b",
    ]

    entries = parse_user_lines(lines, default_unidad="General")

    assert entries == [
        UserEntry("usuario1@ejemplo.com", "Juan Pérez", "Unidad Operativa"),
        UserEntry("usuario2@ejemplo.com", "Usuario2", "Unidad Administrativa"),
        UserEntry("ana.rios@ejemplo.com", "Ana Rios", "General"),
    ]


def test_import_skips_existing_and_duplicates():
    repo = InMemoryUsers([User(user_id=1, email="old@x.com", password_hash="h", name="Old", unidad=None)])
    entries = [
        UserEntry("old@x.com", "Old"),
        UserEntry("new@x.com", "New", "U1"),
        UserEntry("new@x.com", "Repeated"),
    ]

    summary = UserImportService(repo).import_users(entries, temp_password="TempPass123!")

    assert summary.total_in_file == 3
    assert summary.unique == 2
    assert summary.existing == 1
    assert summary.duplicates == ["new@x.com"]
    assert [e.email for e in summary.created] == ["new@x.com"]
    assert repo.users["new@x.com"].name == "New"
    assert check_password_hash(repo.users["new@x.com"].password_hash, "TempPass123!")


def test_failed_batch_is_skipped():
    repo = InMemoryUsers(failing_batches=[2])
    entries = [UserEntry(f"u{i}@x.com", f"U{i}") for i in range(5)]

    summary = UserImportService(repo, batch_size=2).import_users(entries, temp_password="TempPass123!")

    assert summary.failed_batches == [2]
    assert [e.email for e in summary.created] == ["u0@x.com", "u1@x.com", "u4@x.com"]
    assert set(repo.users) == {"u0@x.com", "u1@x.com", "u4@x.com"}


def test_write_credentials_csv(tmp_path):
    out = tmp_path / "usuarios.csv"

    write_credentials_csv(out, [UserEntry("a@x.com", "A", None)], temp_password="Temp!")

    with open(out, encoding="utf-8", newline="") as fh:
        rows = list(csv.reader(fh))
    assert rows == [["Email", "Nombre", "Unidad", "Contraseña Temporal"], ["a@x.com", "A", "", "Temp!"]]
