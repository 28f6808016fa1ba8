from __future__ import annotations

import os
from datetime import datetime
from typing import Any

import requests

API_BASE = os.getenv("API_BASE", "http://127.0.0.1:8000")


class ApiError(Exception):
    """Respuesta no 2xx de la API, con el sobre {message, error}."""

    def __init__(self, status_code: int, message: str, error: Any = None) -> None:
        super().__init__(f"{status_code}: {message}" + (f" ({error})" if error else ""))
        self.status_code = status_code
        self.message = message
        self.error = error


def _cita_params(profesional: int, paciente: int, fecha: datetime | str) -> dict[str, Any]:
    if isinstance(fecha, datetime):
        fecha = fecha.isoformat()
    return {"profesional": profesional, "paciente": paciente, "fecha": fecha}


class AgendaClient:
    """Cliente HTTP mínimo de la API (lo usa la consola Streamlit)."""

    def __init__(self, base_url: str = API_BASE, timeout: float = 10, session: requests.Session | None = None) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def _request(self, method: str, path: str, params: dict | None = None, payload: dict | None = None) -> dict:
        r = self.session.request(
            method,
            f"{self.base_url}{path}",
            params=params,
            json=payload,
            timeout=self.timeout,
        )
        try:
            body = r.json()
        except ValueError:
            body = {"message": r.text}

        if r.status_code >= 400:
            raise ApiError(r.status_code, body.get("message", ""), body.get("error"))
        return body

    def _get_or_none(self, path: str, params: dict | None = None) -> dict | None:
        try:
            return self._request("GET", path, params=params)["data"]
        except ApiError as e:
            if e.status_code == 404:
                return None
            raise

    # Doctores
    def listar_doctores(self) -> list[dict]:
        return self._request("GET", "/doctores")["data"]

    def obtener_doctor(self, id_profesional: int) -> dict | None:
        return self._get_or_none(f"/doctores/{id_profesional}")

    def crear_doctor(self, payload: dict) -> dict:
        return self._request("POST", "/doctores", payload=payload)["data"]

    def actualizar_doctor(self, id_profesional: int, cambios: dict) -> str:
        return self._request("PUT", f"/doctores/{id_profesional}", payload=cambios)["message"]

    def eliminar_doctor(self, id_profesional: int) -> str:
        return self._request("DELETE", f"/doctores/{id_profesional}")["message"]

    def citas_de_doctor(self, id_profesional: int) -> list[dict]:
        return self._request("GET", f"/doctores/{id_profesional}/citas")["data"]

    # Pacientes
    def listar_pacientes(self) -> list[dict]:
        return self._request("GET", "/pacientes")["data"]

    def obtener_paciente(self, id_numero_cedula: int) -> dict | None:
        return self._get_or_none(f"/pacientes/{id_numero_cedula}")

    def crear_paciente(self, payload: dict) -> dict:
        return self._request("POST", "/pacientes", payload=payload)["data"]

    def actualizar_paciente(self, id_numero_cedula: int, cambios: dict) -> str:
        return self._request("PUT", f"/pacientes/{id_numero_cedula}", payload=cambios)["message"]

    def eliminar_paciente(self, id_numero_cedula: int) -> str:
        return self._request("DELETE", f"/pacientes/{id_numero_cedula}")["message"]

    def citas_de_paciente(self, id_numero_cedula: int) -> list[dict]:
        return self._request("GET", f"/pacientes/{id_numero_cedula}/citas")["data"]

    # Citas
    def listar_citas(self) -> list[dict]:
        return self._request("GET", "/citas")["data"]

    def obtener_cita(self, profesional: int, paciente: int, fecha: datetime | str) -> dict | None:
        return self._get_or_none("/citas/uno", params=_cita_params(profesional, paciente, fecha))

    def crear_cita(self, payload: dict) -> dict:
        return self._request("POST", "/citas", payload=payload)["data"]

    def actualizar_cita(self, profesional: int, paciente: int, fecha: datetime | str, cambios: dict) -> str:
        params = _cita_params(profesional, paciente, fecha)
        return self._request("PUT", "/citas", params=params, payload=cambios)["message"]

    def eliminar_cita(self, profesional: int, paciente: int, fecha: datetime | str) -> str:
        params = _cita_params(profesional, paciente, fecha)
        return self._request("DELETE", "/citas", params=params)["message"]
