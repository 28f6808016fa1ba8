from __future__ import annotations

from datetime import date, datetime, timezone

from pydantic import BaseModel, ConfigDict, field_validator

from .models import Especialidad


def a_utc_naive(value: datetime) -> datetime:
    """Las fechas se guardan en UTC sin tzinfo; un valor naive ya se asume UTC."""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


class _CambiosParciales(BaseModel):
    """Update parcial: un campo se omite o trae valor; `null` no es un cambio válido."""

    @field_validator("*")
    @classmethod
    def _sin_nulos(cls, v):
        if v is None:
            raise ValueError("no puede ser null")
        return v


# =========================
# Doctor
# =========================
class DoctorCreateIn(BaseModel):
    id_profesional: int
    nombre: str
    apellido: str
    correo: str
    telefono: str
    especialidad: Especialidad


class DoctorUpdateIn(_CambiosParciales):
    # la clave primaria no se modifica desde el body
    nombre: str | None = None
    apellido: str | None = None
    correo: str | None = None
    telefono: str | None = None
    especialidad: Especialidad | None = None


class DoctorOut(DoctorCreateIn):
    model_config = ConfigDict(from_attributes=True)


# =========================
# Paciente
# =========================
class PacienteCreateIn(BaseModel):
    id_numeroCedula: int
    nombre: str
    apellido: str
    telefono: str
    fecha_nacimiento: date


class PacienteUpdateIn(_CambiosParciales):
    nombre: str | None = None
    apellido: str | None = None
    telefono: str | None = None
    fecha_nacimiento: date | None = None


class PacienteOut(PacienteCreateIn):
    model_config = ConfigDict(from_attributes=True)


# =========================
# Cita
# =========================
class CitaCreateIn(BaseModel):
    fecha_hora: datetime
    id_profesional: int
    id_numeroCedula: int

    @field_validator("fecha_hora")
    @classmethod
    def _fecha_utc(cls, v: datetime) -> datetime:
        return a_utc_naive(v)


class CitaUpdateIn(_CambiosParciales):
    """Cualquier campo de la clave puede cambiar (reprogramar, cambiar doctor o paciente)."""

    fecha_hora: datetime | None = None
    id_profesional: int | None = None
    id_numeroCedula: int | None = None

    @field_validator("fecha_hora")
    @classmethod
    def _fecha_utc(cls, v: datetime | None) -> datetime | None:
        return a_utc_naive(v) if v is not None else None


class CitaOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    fecha_hora: datetime
    id_profesional: int
    id_numeroCedula: int

    @field_validator("fecha_hora")
    @classmethod
    def _fecha_con_tz(cls, v: datetime) -> datetime:
        # en la base queda naive; hacia afuera se expone como UTC ("...Z")
        return v.replace(tzinfo=timezone.utc) if v.tzinfo is None else v.astimezone(timezone.utc)
