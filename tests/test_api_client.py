from __future__ import annotations

from datetime import datetime, timezone

import pytest

from agenda_medica.api_client import AgendaClient, ApiError


class FakeResponse:
    def __init__(self, status_code: int, body=None, text: str = "") -> None:
        self.status_code = status_code
        self._body = body
        self.text = text

    def json(self):
        if self._body is None:
            raise ValueError("sin JSON")
        return self._body


class FakeSession:
    def __init__(self, *responses: FakeResponse) -> None:
        self.responses = list(responses)
        self.calls: list[tuple] = []

    def request(self, method, url, params=None, json=None, timeout=None):
        self.calls.append((method, url, params, json))
        return self.responses.pop(0)


def test_listar_doctores():
    session = FakeSession(FakeResponse(200, {"message": "Operación exitosa", "data": [{"id_profesional": 1}]}))
    client = AgendaClient("http://api.local/", session=session)

    assert client.listar_doctores() == [{"id_profesional": 1}]
    assert session.calls == [("GET", "http://api.local/doctores", None, None)]


def test_obtener_inexistente_devuelve_none():
    session = FakeSession(FakeResponse(404, {"message": "Paciente no encontrado"}))
    assert AgendaClient("http://api.local", session=session).obtener_paciente(3) is None


def test_error_del_servidor():
    session = FakeSession(FakeResponse(500, {"message": "No se pudo crear la cita", "error": "FOREIGN KEY constraint failed"}))
    client = AgendaClient("http://api.local", session=session)

    with pytest.raises(ApiError) as exc:
        client.crear_cita({"id_profesional": 9})
    assert exc.value.status_code == 500
    assert exc.value.error == "FOREIGN KEY constraint failed"


def test_respuesta_sin_json():
    session = FakeSession(FakeResponse(502, None, text="Bad Gateway"))
    with pytest.raises(ApiError) as exc:
        AgendaClient("http://api.local", session=session).listar_citas()
    assert exc.value.message == "Bad Gateway"


def test_eliminar_cita_usa_la_clave_en_query():
    session = FakeSession(FakeResponse(200, {"message": "Cita eliminada"}))
    client = AgendaClient("http://api.local", session=session)

    fecha = datetime(2024, 1, 1, 10, 0, tzinfo=timezone.utc)
    assert client.eliminar_cita(1, 10, fecha) == "Cita eliminada"
    assert session.calls == [
        (
            "DELETE",
            "http://api.local/citas",
            {"profesional": 1, "paciente": 10, "fecha": "2024-01-01T10:00:00+00:00"},
            None,
        )
    ]
