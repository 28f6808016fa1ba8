from __future__ import annotations

import argparse

from .config import Settings
from .db import Database
from .logging_config import setup_logging
from .repositories import CitaRepository, DoctorRepository, PacienteRepository
from .seed import seed_base


def cmd_init(args: argparse.Namespace, db: Database) -> None:
    db.create_all()
    print("Base de datos inicializada.")


def cmd_seed(args: argparse.Namespace, db: Database) -> None:
    n = seed_base(db)
    print(f"Seed completado ({n} filas nuevas).")


def cmd_list(args: argparse.Namespace, db: Database) -> None:
    if args.entity == "doctores":
        for d in DoctorRepository(db).list():
            print(f"{d.id_profesional} | {d.apellido} {d.nombre} | {d.especialidad.value} | {d.correo}")
    elif args.entity == "pacientes":
        for p in PacienteRepository(db).list():
            print(f"{p.id_numeroCedula} | {p.apellido} {p.nombre} | {p.fecha_nacimiento.isoformat()} | {p.telefono}")
    elif args.entity == "citas":
        for c in CitaRepository(db).list():
            print(f"{c.fecha_hora.isoformat()} | doctor {c.id_profesional} | paciente {c.id_numeroCedula}")


def cmd_db_url(args: argparse.Namespace, db: Database) -> None:
    print("ENGINE URL:", db.engine.url.render_as_string(hide_password=True))


def cmd_serve(args: argparse.Namespace, db: Database) -> None:
    import uvicorn

    from .api_main import create_app

    settings: Settings = args.settings
    uvicorn.run(
        create_app(settings, database=db),
        host=args.host or settings.api_host,
        port=args.port or settings.api_port,
    )


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="agenda_medica", description="CLI Agenda Médica")
    sub = p.add_subparsers(required=True)

    p_init = sub.add_parser("init", help="Crea las tablas")
    p_init.set_defaults(func=cmd_init)

    p_seed = sub.add_parser("seed", help="Carga datos de demostración")
    p_seed.set_defaults(func=cmd_seed)

    p_list = sub.add_parser("list", help="Lista entidades")
    p_list.add_argument("entity", choices=["doctores", "pacientes", "citas"])
    p_list.set_defaults(func=cmd_list)

    p_url = sub.add_parser("db-url", help="Muestra la base de datos en uso")
    p_url.set_defaults(func=cmd_db_url)

    p_serve = sub.add_parser("serve", help="Levanta la API con uvicorn")
    p_serve.add_argument("--host", default=None)
    p_serve.add_argument("--port", type=int, default=None)
    p_serve.set_defaults(func=cmd_serve)

    return p


def main(argv: list[str] | None = None, settings: Settings | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    args.settings = settings or Settings.from_env()
    setup_logging(args.settings.log_level, args.settings.log_file)

    db = Database.from_settings(args.settings)
    try:
        db.create_all()  # garantiza las tablas
        args.func(args, db)
    finally:
        db.dispose()


if __name__ == "__main__":
    main()
