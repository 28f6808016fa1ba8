from __future__ import annotations

import pytest

CLAVE = {"profesional": 1, "paciente": 10, "fecha": "2024-01-01T10:00:00Z"}
CITA = {"fecha_hora": "2024-01-01T10:00:00Z", "id_profesional": 1, "id_numeroCedula": 10}


@pytest.fixture
def con_doctor_y_paciente(client, doctor_ana, paciente_lucia):
    assert client.post("/pacientes", json=paciente_lucia).status_code == 201
    assert client.post("/doctores", json=doctor_ana).status_code == 201
    return client


def test_crear_y_buscar(con_doctor_y_paciente):
    client = con_doctor_y_paciente

    r = client.post("/citas", json=CITA)
    assert r.status_code == 201
    assert r.json() == {"message": "Cita creada!", "data": CITA}

    r = client.get("/citas/uno", params=CLAVE)
    assert r.status_code == 200
    assert r.json() == {"message": "Cita encontrada", "data": CITA}

    assert client.get("/citas").json() == {"message": "Operación exitosa", "data": [CITA]}


def test_busqueda_con_otra_zona_horaria(con_doctor_y_paciente):
    client = con_doctor_y_paciente
    client.post("/citas", json=CITA)

    r = client.get("/citas/uno", params={**CLAVE, "fecha": "2024-01-01T07:00:00-03:00"})
    assert r.status_code == 200
    assert r.json()["data"] == CITA


def test_no_encontrada(con_doctor_y_paciente):
    r = con_doctor_y_paciente.get("/citas/uno", params=CLAVE)
    assert r.status_code == 404
    assert r.json() == {"message": "Cita no encontrada"}


def test_parametros_obligatorios(client):
    r = client.get("/citas/uno", params={"profesional": 1, "paciente": 10})
    assert r.status_code == 422
    assert r.json()["message"] == "Solicitud inválida"
    assert "fecha" in r.json()["error"]


@pytest.mark.parametrize("campo, valor", [("id_profesional", 99), ("id_numeroCedula", 99)])
def test_referencia_inexistente_rechazada(con_doctor_y_paciente, campo, valor):
    client = con_doctor_y_paciente

    r = client.post("/citas", json={**CITA, campo: valor})
    assert r.status_code == 500
    body = r.json()
    assert body["message"] == "No se pudo crear la cita"
    assert "FOREIGN KEY" in body["error"]

    assert client.get("/citas").json()["data"] == []


def test_clave_compuesta_duplicada(con_doctor_y_paciente):
    client = con_doctor_y_paciente
    assert client.post("/citas", json=CITA).status_code == 201

    r = client.post("/citas", json=CITA)
    assert r.status_code == 500
    assert r.json()["message"] == "No se pudo crear la cita"
    assert len(client.get("/citas").json()["data"]) == 1


def test_mismo_doctor_misma_hora_con_otro_paciente(con_doctor_y_paciente, paciente_lucia):
    # la unicidad abarca la terna completa
    client = con_doctor_y_paciente
    client.post("/pacientes", json={**paciente_lucia, "id_numeroCedula": 11})

    assert client.post("/citas", json=CITA).status_code == 201
    assert client.post("/citas", json={**CITA, "id_numeroCedula": 11}).status_code == 201
    assert len(client.get("/doctores/1/citas").json()["data"]) == 2


def test_reprogramar(con_doctor_y_paciente):
    client = con_doctor_y_paciente
    client.post("/citas", json=CITA)

    r = client.put("/citas", params=CLAVE, json={"fecha_hora": "2024-01-02T10:00:00Z"})
    assert r.status_code == 200
    assert r.json() == {"message": "Cita actualizada"}

    assert client.get("/citas/uno", params=CLAVE).status_code == 404
    r = client.get("/citas/uno", params={**CLAVE, "fecha": "2024-01-02T10:00:00Z"})
    assert r.json()["data"]["fecha_hora"] == "2024-01-02T10:00:00Z"


def test_actualizar_hacia_doctor_inexistente(con_doctor_y_paciente):
    client = con_doctor_y_paciente
    client.post("/citas", json=CITA)

    r = client.put("/citas", params=CLAVE, json={"id_profesional": 42})
    assert r.status_code == 500
    assert r.json()["message"] == "Error al modificar la cita"
    assert client.get("/citas/uno", params=CLAVE).status_code == 200


def test_null_en_actualizacion_se_rechaza(con_doctor_y_paciente):
    client = con_doctor_y_paciente
    client.post("/citas", json=CITA)

    r = client.put("/citas", params=CLAVE, json={"fecha_hora": None})
    assert r.status_code == 422
    assert "fecha_hora" in r.json()["error"]
    assert client.get("/citas/uno", params=CLAVE).status_code == 200


def test_actualizar_inexistente(con_doctor_y_paciente):
    r = con_doctor_y_paciente.put("/citas", params=CLAVE, json={"fecha_hora": "2024-01-02T10:00:00Z"})
    assert r.status_code == 404
    assert r.json() == {"message": "Cita no existe"}
    assert con_doctor_y_paciente.get("/citas").json()["data"] == []


def test_eliminar_dos_veces(con_doctor_y_paciente):
    client = con_doctor_y_paciente
    client.post("/citas", json=CITA)

    r = client.delete("/citas", params=CLAVE)
    assert r.status_code == 200
    assert r.json() == {"message": "Cita eliminada"}

    r = client.delete("/citas", params=CLAVE)
    assert r.status_code == 404
    assert r.json() == {"message": "Cita no existe"}
