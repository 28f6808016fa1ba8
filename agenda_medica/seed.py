from __future__ import annotations

from datetime import date, datetime

from .db import Database
from .models import Cita, Doctor, Especialidad, Paciente

DOCTORES = [
    (1, "Ana", "Ruiz", "a.ruiz@consultorio.local", "555-0101", Especialidad.MEDICINA_GENERAL),
    (2, "Carlos", "Pérez", "c.perez@consultorio.local", "555-0102", Especialidad.MEDICINA_INTERNA),
]

PACIENTES = [
    (10, "Lucía", "Gómez", "555-0201", date(1990, 4, 12)),
    (11, "Jorge", "Martínez", "555-0202", date(1978, 11, 3)),
]

CITAS = [
    (datetime(2024, 1, 1, 10, 0), 1, 10),
    (datetime(2024, 1, 1, 11, 0), 2, 11),
]


def seed_base(db: Database) -> int:
    """
    Carga datos mínimos de demostración (idempotente):
    - doctores
    - pacientes
    - citas
    Devuelve cuántas filas se insertaron.
    """
    added = 0
    with db.session() as s:
        for id_, nombre, apellido, correo, tel, esp in DOCTORES:
            if s.get(Doctor, id_) is None:
                s.add(Doctor(id_profesional=id_, nombre=nombre, apellido=apellido, correo=correo, telefono=tel, especialidad=esp))
                added += 1

        for cedula, nombre, apellido, tel, nacimiento in PACIENTES:
            if s.get(Paciente, cedula) is None:
                s.add(Paciente(id_numeroCedula=cedula, nombre=nombre, apellido=apellido, telefono=tel, fecha_nacimiento=nacimiento))
                added += 1

        # las citas referencian doctores y pacientes recién agregados
        s.flush()

        for fecha, doctor_id, cedula in CITAS:
            if s.get(Cita, (fecha, doctor_id, cedula)) is None:
                s.add(Cita(fecha_hora=fecha, id_profesional=doctor_id, id_numeroCedula=cedula))
                added += 1

    return added
