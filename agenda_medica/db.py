from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING, Iterator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

if TYPE_CHECKING:
    from .config import Settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Base ORM para todos los modelos."""
    pass


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    # SQLite ignora REFERENCES si no se activa en cada conexión
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """
    Handle explícito del almacenamiento: engine + fábrica de sesiones.

    Se construye una vez al arrancar (``create_app``, CLI, tests) y se pasa
    a quien lo necesite; ``dispose`` libera el pool al apagar.
    """

    def __init__(self, url: str, echo: bool = False) -> None:
        connect_args: dict = {}
        if url.startswith("sqlite"):
            # los handlers sync de FastAPI corren en un threadpool
            connect_args["check_same_thread"] = False

        self.url = url
        self.engine: Engine = create_engine(
            url,
            echo=echo,               # True para ver las queries
            future=True,
            connect_args=connect_args,
        )
        if self.engine.dialect.name == "sqlite":
            event.listen(self.engine, "connect", _enable_sqlite_foreign_keys)

        self.SessionLocal = sessionmaker(
            bind=self.engine,
            autoflush=False,
            autocommit=False,
            future=True,
            expire_on_commit=False,
        )

    @classmethod
    def from_settings(cls, settings: "Settings") -> "Database":
        return cls(settings.database_url, echo=settings.db_echo)

    def create_all(self) -> None:
        """Crea las tablas si no existen."""
        # registra los modelos en el metadata
        from . import models  # noqa: F401

        Base.metadata.create_all(bind=self.engine)
        logger.info("Esquema verificado en %s", self.engine.url.render_as_string(hide_password=True))

    def drop_all(self) -> None:
        from . import models  # noqa: F401

        Base.metadata.drop_all(bind=self.engine)

    def dispose(self) -> None:
        self.engine.dispose()

    @contextmanager
    def session(self) -> Iterator[Session]:
        """
        Context manager para manejar la sesión:
        - commit si todo sale bien
        - rollback ante excepciones
        - close siempre
        """
        session: Session = self.SessionLocal()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()
