from __future__ import annotations


def test_crear_y_obtener(client, paciente_lucia):
    r = client.post("/pacientes", json=paciente_lucia)
    assert r.status_code == 201
    assert r.json() == {"message": "Paciente creado!", "data": paciente_lucia}

    r = client.get("/pacientes/10")
    assert r.status_code == 200
    assert r.json()["data"] == paciente_lucia

    assert client.get("/pacientes").json()["data"] == [paciente_lucia]


def test_inexistente(client):
    assert client.get("/pacientes/99").json() == {"message": "Paciente no encontrado"}
    assert client.put("/pacientes/99", json={"nombre": "X"}).status_code == 404
    r = client.delete("/pacientes/99")
    assert r.status_code == 404
    assert r.json() == {"message": "Paciente no existe"}
    assert client.get("/pacientes").json()["data"] == []


def test_fecha_nacimiento_invalida(client, paciente_lucia):
    r = client.post("/pacientes", json={**paciente_lucia, "fecha_nacimiento": "no-es-fecha"})
    assert r.status_code == 422
    assert "fecha_nacimiento" in r.json()["error"]


def test_actualizar(client, paciente_lucia):
    client.post("/pacientes", json=paciente_lucia)

    r = client.put("/pacientes/10", json={"telefono": "111", "fecha_nacimiento": "1991-01-01"})
    assert r.status_code == 200
    assert r.json() == {"message": "Paciente actualizado"}

    data = client.get("/pacientes/10").json()["data"]
    assert data["telefono"] == "111"
    assert data["fecha_nacimiento"] == "1991-01-01"
    assert data["nombre"] == "Lucía"


def test_null_en_actualizacion_se_rechaza(client, paciente_lucia):
    client.post("/pacientes", json=paciente_lucia)

    r = client.put("/pacientes/10", json={"telefono": None})
    assert r.status_code == 422
    assert "telefono" in r.json()["error"]
    assert client.get("/pacientes/10").json()["data"]["telefono"] == paciente_lucia["telefono"]


def test_clave_primaria_no_cambia_por_body(client, paciente_lucia):
    client.post("/pacientes", json=paciente_lucia)
    client.put("/pacientes/10", json={"id_numeroCedula": 20, "nombre": "Lu"})

    assert client.get("/pacientes/20").status_code == 404
    assert client.get("/pacientes/10").json()["data"]["nombre"] == "Lu"


def test_eliminar_dos_veces(client, paciente_lucia):
    client.post("/pacientes", json=paciente_lucia)
    r = client.delete("/pacientes/10")
    assert r.status_code == 200
    assert r.json() == {"message": "Paciente eliminado"}
    assert client.delete("/pacientes/10").status_code == 404


def test_citas_del_paciente(client, doctor_ana, paciente_lucia):
    assert client.get("/pacientes/10/citas").json() == {"message": "Paciente no encontrado"}

    client.post("/doctores", json=doctor_ana)
    client.post("/pacientes", json=paciente_lucia)
    client.post("/citas", json={"fecha_hora": "2024-03-05T15:30:00Z", "id_profesional": 1, "id_numeroCedula": 10})

    r = client.get("/pacientes/10/citas")
    assert r.status_code == 200
    assert r.json()["data"] == [
        {"fecha_hora": "2024-03-05T15:30:00Z", "id_profesional": 1, "id_numeroCedula": 10}
    ]
