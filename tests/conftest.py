from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from agenda_medica.api_main import create_app
from agenda_medica.config import Settings
from agenda_medica.db import Database


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(database_url=f"sqlite:///{tmp_path / 'agenda_test.sqlite'}")


@pytest.fixture
def database(settings):
    db = Database.from_settings(settings)
    db.create_all()
    yield db
    db.dispose()


@pytest.fixture
def app(settings, database):
    return create_app(settings, database=database)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def doctor_ana() -> dict:
    return {
        "id_profesional": 1,
        "nombre": "Ana",
        "apellido": "Ruiz",
        "correo": "a@x.com",
        "telefono": "555",
        "especialidad": "medicina_general",
    }


@pytest.fixture
def paciente_lucia() -> dict:
    return {
        "id_numeroCedula": 10,
        "nombre": "Lucía",
        "apellido": "Gómez",
        "telefono": "555-0201",
        "fecha_nacimiento": "1990-04-12",
    }
