from __future__ import annotations

import enum
from datetime import date, datetime

from sqlalchemy import Date, DateTime, Enum, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from .db import Base


class Especialidad(str, enum.Enum):
    MEDICINA_INTERNA = "medicina_interna"
    MEDICINA_GENERAL = "medicina_general"


# Las relaciones (doctor -> citas, paciente -> citas) no se mapean con
# relationship(): se resuelven con consultas explícitas en repositories.py.


class Doctor(Base):
    __tablename__ = "doctor"

    id_profesional: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    nombre: Mapped[str] = mapped_column(String(255), nullable=False)
    apellido: Mapped[str] = mapped_column(String(255), nullable=False)
    correo: Mapped[str] = mapped_column(String(255), nullable=False)
    telefono: Mapped[str] = mapped_column(String(255), nullable=False)
    especialidad: Mapped[Especialidad] = mapped_column(
        Enum(
            Especialidad,
            name="especialidad",
            values_callable=lambda e: [m.value for m in e],
            native_enum=False,
            create_constraint=True,
            validate_strings=True,
        ),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"Doctor({self.id_profesional}, {self.nombre} {self.apellido}, {self.especialidad.value})"


class Paciente(Base):
    __tablename__ = "paciente"

    id_numeroCedula: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    nombre: Mapped[str] = mapped_column(String(255), nullable=False)
    apellido: Mapped[str] = mapped_column(String(255), nullable=False)
    fecha_nacimiento: Mapped[date] = mapped_column(Date, nullable=False)
    telefono: Mapped[str] = mapped_column(String(255), nullable=False)

    def __repr__(self) -> str:
        return f"Paciente({self.id_numeroCedula}, {self.nombre} {self.apellido})"


class Cita(Base):
    __tablename__ = "cita"

    # Clave primaria compuesta: la unicidad abarca la terna completa, no
    # impide que un doctor tenga dos citas a la misma hora con pacientes distintos.
    fecha_hora: Mapped[datetime] = mapped_column(DateTime, primary_key=True)
    id_profesional: Mapped[int] = mapped_column(
        ForeignKey("doctor.id_profesional"), primary_key=True, autoincrement=False
    )
    id_numeroCedula: Mapped[int] = mapped_column(
        ForeignKey("paciente.id_numeroCedula"), primary_key=True, autoincrement=False
    )

    def __repr__(self) -> str:
        return f"Cita({self.fecha_hora.isoformat()}, doctor={self.id_profesional}, paciente={self.id_numeroCedula})"
