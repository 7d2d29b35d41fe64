from __future__ import annotations

import pytest
from werkzeug.security import generate_password_hash

from src.absence_registry.absence_registry.core.exceptions import AuthenticationError, ValidationError
from src.absence_registry.absence_registry.users.model import User
from src.absence_registry.absence_registry.users.service import AuthService
from tests.fakes import InMemoryUsers


def _users() -> InMemoryUsers:
    return InMemoryUsers([
        User(
            user_id=1,
            email="jefe@unidad.gob.ec",
            password_hash=generate_password_hash("secreto123"),
            name="Jefe de Unidad",
            unidad="Distrito Norte",
        ),
        User(user_id=2, email="legacy@unidad.gob.ec", password_hash="CHANGE_ME", name="Legacy", unidad=None),
    ])


def test_authenticate_returns_token_and_profile():
    result = AuthService(_users()).authenticate("jefe@unidad.gob.ec", "secreto123")

    assert result.token
    assert result.user_payload() == {
        "id": 1,
        "email": "jefe@unidad.gob.ec",
        "name": "Jefe de Unidad",
        "unidad": "Distrito Norte",
    }


def test_tokens_differ_between_logins():
    svc = AuthService(_users())

    assert svc.authenticate("jefe@unidad.gob.ec", "secreto123").token != svc.authenticate(
        "jefe@unidad.gob.ec", "secreto123"
    ).token


@pytest.mark.parametrize("email,password", [
    ("jefe@unidad.gob.ec", "incorrecta"),
    ("nadie@unidad.gob.ec", "secreto123"),
    ("legacy@unidad.gob.ec", "cualquiera"),
])
def test_bad_credentials_share_one_message(email, password):
    with pytest.raises(AuthenticationError) as exc:
        AuthService(_users()).authenticate(email, password)

    assert str(exc.value) == "Credenciales inválidas"


def test_validate_credentials_shape():
    assert AuthService.validate_credentials({"email": " a@b.co ", "password": "123456"}) == ("a@b.co", "123456")

    with pytest.raises(ValidationError) as exc:
        AuthService.validate_credentials({"email": "nope", "password": "123"})

    assert [v.field for v in exc.value.violations] == ["email", "password"]
