"""
Capa de acceso a datos.

Los handlers HTTP dependen solo de ``CrudRepository``; las
implementaciones de este módulo traducen a SQLAlchemy y devuelven
registros pydantic ya desacoplados de la sesión.

Update y delete son una única sentencia condicional (``UPDATE``/``DELETE``
con ``WHERE`` por clave): "no existe" se decide por filas afectadas,
dentro de la misma transacción.
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Generic, Protocol, TypeVar

from pydantic import BaseModel
from sqlalchemy import delete, select, update

from .db import Base, Database
from .models import Cita, Doctor, Paciente
from .schemas import (
    CitaCreateIn,
    CitaOut,
    CitaUpdateIn,
    DoctorCreateIn,
    DoctorOut,
    DoctorUpdateIn,
    PacienteCreateIn,
    PacienteOut,
    PacienteUpdateIn,
    a_utc_naive,
)

logger = logging.getLogger(__name__)

K = TypeVar("K")
R = TypeVar("R", bound=BaseModel)


@dataclass(frozen=True)
class CitaKey:
    fecha_hora: datetime
    id_profesional: int
    id_numeroCedula: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "fecha_hora", a_utc_naive(self.fecha_hora))


class CrudRepository(Protocol[K, R]):
    def list(self) -> list[R]: ...

    def get(self, key: K) -> R | None: ...

    def create(self, data: BaseModel) -> R: ...

    def update(self, key: K, data: BaseModel) -> bool: ...

    def delete(self, key: K) -> bool: ...


class SqlRepository(ABC, Generic[K, R]):
    """CRUD genérico sobre un modelo ORM; las subclases definen la clave."""

    model: type[Base]
    out: type[R]

    def __init__(self, db: Database) -> None:
        self.db = db

    @abstractmethod
    def _where(self, key: K) -> tuple[Any, ...]:
        """Condiciones WHERE que identifican una fila por su clave."""

    def list(self) -> list[R]:
        with self.db.session() as s:
            return [self.out.model_validate(row) for row in s.scalars(select(self.model))]

    def get(self, key: K) -> R | None:
        with self.db.session() as s:
            row = s.scalars(select(self.model).where(*self._where(key))).first()
            return self.out.model_validate(row) if row is not None else None

    def create(self, data: BaseModel) -> R:
        with self.db.session() as s:
            row = self.model(**data.model_dump())
            s.add(row)
            s.flush()
            created = self.out.model_validate(row)
        logger.info("Creado %r", row)
        return created

    def update(self, key: K, data: BaseModel) -> bool:
        values = data.model_dump(exclude_unset=True)
        with self.db.session() as s:
            if not values:
                # nada que escribir: solo se informa si la clave existe
                return s.scalars(select(self.model).where(*self._where(key))).first() is not None

            result = s.execute(
                update(self.model)
                .where(*self._where(key))
                .values(**values)
                .execution_options(synchronize_session=False)
            )
            found = result.rowcount > 0

        if found:
            logger.info("Actualizado %s %s: %s", self.model.__name__, key, sorted(values))
        return found

    def delete(self, key: K) -> bool:
        with self.db.session() as s:
            result = s.execute(
                delete(self.model).where(*self._where(key)).execution_options(synchronize_session=False)
            )
            found = result.rowcount > 0

        if found:
            logger.info("Eliminado %s %s", self.model.__name__, key)
        return found


# =========================
# Doctor
# =========================
class DoctorRepository(SqlRepository[int, DoctorOut]):
    model = Doctor
    out = DoctorOut

    def _where(self, key: int) -> tuple[Any, ...]:
        return (Doctor.id_profesional == key,)

    def create(self, data: DoctorCreateIn) -> DoctorOut:
        return super().create(data)

    def update(self, key: int, data: DoctorUpdateIn) -> bool:
        return super().update(key, data)

    def citas(self, id_profesional: int) -> list[CitaOut] | None:
        """Citas del doctor; ``None`` si el doctor no existe."""
        with self.db.session() as s:
            if s.get(Doctor, id_profesional) is None:
                return None
            q = select(Cita).where(Cita.id_profesional == id_profesional).order_by(Cita.fecha_hora.asc())
            return [CitaOut.model_validate(c) for c in s.scalars(q)]


# =========================
# Paciente
# =========================
class PacienteRepository(SqlRepository[int, PacienteOut]):
    model = Paciente
    out = PacienteOut

    def _where(self, key: int) -> tuple[Any, ...]:
        return (Paciente.id_numeroCedula == key,)

    def create(self, data: PacienteCreateIn) -> PacienteOut:
        return super().create(data)

    def update(self, key: int, data: PacienteUpdateIn) -> bool:
        return super().update(key, data)

    def citas(self, id_numeroCedula: int) -> list[CitaOut] | None:
        """Citas del paciente; ``None`` si el paciente no existe."""
        with self.db.session() as s:
            if s.get(Paciente, id_numeroCedula) is None:
                return None
            q = select(Cita).where(Cita.id_numeroCedula == id_numeroCedula).order_by(Cita.fecha_hora.asc())
            return [CitaOut.model_validate(c) for c in s.scalars(q)]


# =========================
# Cita
# =========================
class CitaRepository(SqlRepository[CitaKey, CitaOut]):
    model = Cita
    out = CitaOut

    def _where(self, key: CitaKey) -> tuple[Any, ...]:
        return (
            Cita.fecha_hora == key.fecha_hora,
            Cita.id_profesional == key.id_profesional,
            Cita.id_numeroCedula == key.id_numeroCedula,
        )

    def create(self, data: CitaCreateIn) -> CitaOut:
        return super().create(data)

    def update(self, key: CitaKey, data: CitaUpdateIn) -> bool:
        return super().update(key, data)

    def doctor(self, key: CitaKey) -> DoctorOut | None:
        with self.db.session() as s:
            q = select(Doctor).join(Cita, Cita.id_profesional == Doctor.id_profesional).where(*self._where(key))
            row = s.scalars(q).first()
            return DoctorOut.model_validate(row) if row is not None else None

    def paciente(self, key: CitaKey) -> PacienteOut | None:
        with self.db.session() as s:
            q = select(Paciente).join(Cita, Cita.id_numeroCedula == Paciente.id_numeroCedula).where(*self._where(key))
            row = s.scalars(q).first()
            return PacienteOut.model_validate(row) if row is not None else None
