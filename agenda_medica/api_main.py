from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Any, AsyncIterator

from fastapi import APIRouter, Depends, FastAPI, Query, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .config import Settings
from .db import Database
from .logging_config import setup_logging
from .repositories import (
    CitaKey,
    CitaRepository,
    CrudRepository,
    DoctorRepository,
    PacienteRepository,
)
from .schemas import (
    CitaCreateIn,
    CitaUpdateIn,
    DoctorCreateIn,
    DoctorUpdateIn,
    PacienteCreateIn,
    PacienteUpdateIn,
)

logger = logging.getLogger(__name__)

router = APIRouter()


# Respuestas JSON: {message, data?} / {message, error}

def _ok(message: str, data: Any = None, status_code: int = status.HTTP_200_OK) -> JSONResponse:
    body: dict[str, Any] = {"message": message}
    if data is not None:
        body["data"] = data
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body))


def _no_encontrado(message: str) -> JSONResponse:
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"message": message})


def _error(message: str, exc: Exception) -> JSONResponse:
    logger.exception(message)
    # el texto del driver es más útil que el wrapper de SQLAlchemy;
    # errores ajenos a la base (OverflowError, etc.) se informan tal cual
    detalle = str(getattr(exc, "orig", None) or exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": message, "error": detalle},
    )



# Dependencias

def get_database(request: Request) -> Database:
    return request.app.state.database


def doctor_repo(db: Database = Depends(get_database)) -> DoctorRepository:
    return DoctorRepository(db)


def paciente_repo(db: Database = Depends(get_database)) -> PacienteRepository:
    return PacienteRepository(db)


def cita_repo(db: Database = Depends(get_database)) -> CitaRepository:
    return CitaRepository(db)


def cita_key(
    profesional: int = Query(..., description="ID del profesional"),
    paciente: int = Query(..., description="Número de cédula del paciente"),
    fecha: datetime = Query(..., description="Fecha y hora de la cita (ISO 8601)"),
) -> CitaKey:
    return CitaKey(fecha_hora=fecha, id_profesional=profesional, id_numeroCedula=paciente)



# Doctores

@router.get("/doctores")
def listar_doctores(repo: CrudRepository = Depends(doctor_repo)) -> JSONResponse:
    try:
        doctores = repo.list()
    except Exception as e:
        return _error("Error al obtener los doctores", e)
    return _ok("Operación exitosa", doctores)


@router.get("/doctores/{id}")
def obtener_doctor(id: int, repo: CrudRepository = Depends(doctor_repo)) -> JSONResponse:
    try:
        doctor = repo.get(id)
    except Exception as e:
        return _error("Error al obtener los doctores", e)
    if doctor is None:
        return _no_encontrado("Doctor no encontrado")
    return _ok("Doctor encontrado", doctor)


@router.post("/doctores")
def crear_doctor(payload: DoctorCreateIn, repo: CrudRepository = Depends(doctor_repo)) -> JSONResponse:
    try:
        doctor = repo.create(payload)
    except Exception as e:
        return _error("No se pudo crear el doctor", e)
    return _ok("Doctor creado!", doctor, status_code=status.HTTP_201_CREATED)


@router.put("/doctores/{id}")
def actualizar_doctor(
    id: int, payload: DoctorUpdateIn, repo: CrudRepository = Depends(doctor_repo)
) -> JSONResponse:
    try:
        found = repo.update(id, payload)
    except Exception as e:
        return _error("Error al modificar el doctor", e)
    if not found:
        return _no_encontrado("Doctor no existe")
    return _ok("Doctor actualizado")


@router.delete("/doctores/{id}")
def eliminar_doctor(id: int, repo: CrudRepository = Depends(doctor_repo)) -> JSONResponse:
    try:
        found = repo.delete(id)
    except Exception as e:
        return _error("Error al eliminar el doctor", e)
    if not found:
        return _no_encontrado("Doctor no existe")
    return _ok("Doctor eliminado")


@router.get("/doctores/{id}/citas")
def citas_de_doctor(id: int, repo: DoctorRepository = Depends(doctor_repo)) -> JSONResponse:
    try:
        citas = repo.citas(id)
    except Exception as e:
        return _error("Error al obtener las citas del doctor", e)
    if citas is None:
        return _no_encontrado("Doctor no encontrado")
    return _ok("Operación exitosa", citas)



# Pacientes

@router.get("/pacientes")
def listar_pacientes(repo: CrudRepository = Depends(paciente_repo)) -> JSONResponse:
    try:
        pacientes = repo.list()
    except Exception as e:
        return _error("Error al obtener los pacientes", e)
    return _ok("Operación exitosa", pacientes)


@router.get("/pacientes/{id}")
def obtener_paciente(id: int, repo: CrudRepository = Depends(paciente_repo)) -> JSONResponse:
    try:
        paciente = repo.get(id)
    except Exception as e:
        return _error("Error al obtener los pacientes", e)
    if paciente is None:
        return _no_encontrado("Paciente no encontrado")
    return _ok("Paciente encontrado", paciente)


@router.post("/pacientes")
def crear_paciente(payload: PacienteCreateIn, repo: CrudRepository = Depends(paciente_repo)) -> JSONResponse:
    try:
        paciente = repo.create(payload)
    except Exception as e:
        return _error("No se pudo crear el paciente", e)
    return _ok("Paciente creado!", paciente, status_code=status.HTTP_201_CREATED)


@router.put("/pacientes/{id}")
def actualizar_paciente(
    id: int, payload: PacienteUpdateIn, repo: CrudRepository = Depends(paciente_repo)
) -> JSONResponse:
    try:
        found = repo.update(id, payload)
    except Exception as e:
        return _error("Error al modificar el paciente", e)
    if not found:
        return _no_encontrado("Paciente no existe")
    return _ok("Paciente actualizado")


@router.delete("/pacientes/{id}")
def eliminar_paciente(id: int, repo: CrudRepository = Depends(paciente_repo)) -> JSONResponse:
    try:
        found = repo.delete(id)
    except Exception as e:
        return _error("Error al eliminar el paciente", e)
    if not found:
        return _no_encontrado("Paciente no existe")
    return _ok("Paciente eliminado")


@router.get("/pacientes/{id}/citas")
def citas_de_paciente(id: int, repo: PacienteRepository = Depends(paciente_repo)) -> JSONResponse:
    try:
        citas = repo.citas(id)
    except Exception as e:
        return _error("Error al obtener las citas del paciente", e)
    if citas is None:
        return _no_encontrado("Paciente no encontrado")
    return _ok("Operación exitosa", citas)



# Citas

@router.get("/citas")
def listar_citas(repo: CrudRepository = Depends(cita_repo)) -> JSONResponse:
    try:
        citas = repo.list()
    except Exception as e:
        return _error("Error al obtener las citas", e)
    return _ok("Operación exitosa", citas)


@router.get("/citas/uno")
def obtener_cita(key: CitaKey = Depends(cita_key), repo: CrudRepository = Depends(cita_repo)) -> JSONResponse:
    try:
        cita = repo.get(key)
    except Exception as e:
        return _error("Error al obtener la cita", e)
    if cita is None:
        return _no_encontrado("Cita no encontrada")
    return _ok("Cita encontrada", cita)


@router.post("/citas")
def crear_cita(payload: CitaCreateIn, repo: CrudRepository = Depends(cita_repo)) -> JSONResponse:
    try:
        cita = repo.create(payload)
    except Exception as e:
        return _error("No se pudo crear la cita", e)
    return _ok("Cita creada!", cita, status_code=status.HTTP_201_CREATED)


@router.put("/citas")
def actualizar_cita(
    payload: CitaUpdateIn,
    key: CitaKey = Depends(cita_key),
    repo: CrudRepository = Depends(cita_repo),
) -> JSONResponse:
    try:
        found = repo.update(key, payload)
    except Exception as e:
        return _error("Error al modificar la cita", e)
    if not found:
        return _no_encontrado("Cita no existe")
    return _ok("Cita actualizada")


@router.delete("/citas")
def eliminar_cita(key: CitaKey = Depends(cita_key), repo: CrudRepository = Depends(cita_repo)) -> JSONResponse:
    try:
        found = repo.delete(key)
    except Exception as e:
        return _error("Error al eliminar la cita", e)
    if not found:
        return _no_encontrado("Cita no existe")
    return _ok("Cita eliminada")


@router.get("/salud")
def salud() -> dict[str, Any]:
    return {"message": "ok"}



# App

async def _solicitud_invalida(request: Request, exc: RequestValidationError) -> JSONResponse:
    detalle = "; ".join(
        f"{'.'.join(str(p) for p in err.get('loc', ()))}: {err.get('msg', '')}" for err in exc.errors()
    )
    return JSONResponse(
        status_code=422,
        content={"message": "Solicitud inválida", "error": detalle},
    )


def create_app(settings: Settings | None = None, database: Database | None = None) -> FastAPI:
    """
    Arma la aplicación con su propio handle de base de datos.

    Con ``uvicorn agenda_medica.api_main:create_app --factory`` todo sale
    del entorno; los tests pasan un ``Database`` ya construido.
    """
    settings = settings or Settings.from_env()
    setup_logging(settings.log_level, settings.log_file)

    database = database or Database.from_settings(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        # crea las tablas si faltan (idempotente)
        database.create_all()
        yield
        database.dispose()

    app = FastAPI(title=settings.api_title, version=settings.api_version, lifespan=lifespan)
    app.state.database = database
    app.include_router(router)
    app.add_exception_handler(RequestValidationError, _solicitud_invalida)

    return app
