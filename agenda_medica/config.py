from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv
from sqlalchemy.engine import URL

load_dotenv()

# SQLite por defecto en la raíz del proyecto (junto a streamlit_app.py)
DEFAULT_SQLITE_PATH = Path(__file__).resolve().parents[1] / "agenda_medica.sqlite"


def _flag(value: str | None) -> bool:
    return (value or "").strip().lower() in {"1", "true", "yes", "si"}


def build_database_url(env: Mapping[str, str]) -> str:
    """
    Orden de precedencia:
    - DATABASE_URL completa
    - MySQL armado desde HOST / DATABASE_PORT / DB_USER / PASSWORD / DATABASE
    - SQLite local
    """
    url = env.get("DATABASE_URL")
    if url:
        return url

    host = env.get("HOST")
    if host:
        return URL.create(
            "mysql+pymysql",
            username=env.get("DB_USER", "root"),
            password=env.get("PASSWORD") or None,
            host=host,
            port=int(env.get("DATABASE_PORT") or 3306),
            database=env.get("DATABASE") or None,
        ).render_as_string(hide_password=False)

    return f"sqlite:///{DEFAULT_SQLITE_PATH}"


@dataclass(frozen=True)
class Settings:
    """Configuración leída del entorno (una sola vez, al arrancar)."""

    database_url: str
    db_echo: bool = False
    log_level: str = "INFO"
    log_file: str | None = None
    api_title: str = "Agenda Medica API"
    api_version: str = "1.0.0"
    api_host: str = "127.0.0.1"
    api_port: int = 8000

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> "Settings":
        env = os.environ if env is None else env
        return cls(
            database_url=build_database_url(env),
            db_echo=_flag(env.get("DB_ECHO")),
            log_level=env.get("LOG_LEVEL", "INFO"),
            log_file=env.get("LOG_FILE") or None,
            api_title=env.get("API_TITLE", "Agenda Medica API"),
            api_version=env.get("API_VERSION", "1.0.0"),
            api_host=env.get("API_HOST", "127.0.0.1"),
            api_port=int(env.get("API_PORT", "8000")),
        )
