"""
Backend Agenda Médica (doctores, pacientes, citas).

Estructura:
- config.py         : configuración desde el entorno (.env)
- logging_config.py : logging de la aplicación
- db.py             : handle Database (engine y sesiones SQLAlchemy)
- models.py         : modelos ORM y enum de especialidades
- schemas.py        : registros pydantic de entrada/salida
- repositories.py   : acceso a datos por entidad
- api_main.py       : API REST (FastAPI)
- seed.py           : datos de demostración
- cli.py            : utilidades de línea de comandos
- api_client.py     : cliente HTTP usado por streamlit_app.py
"""
