from __future__ import annotations

from datetime import date, datetime, time, timezone

import streamlit as st

from agenda_medica.api_client import API_BASE, AgendaClient, ApiError

st.set_page_config(page_title="Agenda Médica", layout="wide")

client = AgendaClient(API_BASE)

ESPECIALIDADES = ["medicina_general", "medicina_interna"]


def mostrar_error(e: Exception) -> None:
    if isinstance(e, ApiError):
        st.error(f"{e.message}" + (f": {e.error}" if e.error else ""))
    else:
        st.error(f"API no disponible o error: {e}")



# Sidebar

with st.sidebar:
    st.header("Agenda Médica")
    st.caption(f"API: {API_BASE}")
    if st.button("Refrescar", key="refresh_btn"):
        st.cache_data.clear()
        st.rerun()



# Datos base

@st.cache_data(ttl=10)
def load_doctores() -> list[dict]:
    return client.listar_doctores()


@st.cache_data(ttl=10)
def load_pacientes() -> list[dict]:
    return client.listar_pacientes()


st.title("Consultorio (API REST + Streamlit)")

tab1, tab2, tab3 = st.tabs(["Citas", "Doctores", "Pacientes"])



# TAB 1 - Citas

with tab1:
    st.subheader("Agendar cita")

    try:
        doctores = load_doctores()
        pacientes = load_pacientes()
    except Exception as e:
        mostrar_error(e)
        st.stop()

    colA, colB = st.columns(2)
    with colA:
        doctor = st.selectbox(
            "Doctor",
            options=doctores,
            format_func=lambda d: f"{d['apellido']} {d['nombre']} ({d['especialidad']})",
            key="cita_doctor",
        )
        paciente = st.selectbox(
            "Paciente",
            options=pacientes,
            format_func=lambda p: f"{p['apellido']} {p['nombre']} | {p['id_numeroCedula']}",
            key="cita_paciente",
        )
    with colB:
        dia = st.date_input("Fecha", value=date.today(), key="cita_dia")
        hora = st.time_input("Hora (UTC)", value=time(9, 0), key="cita_hora")

    if st.button("Crear cita", key="cita_submit", disabled=not (doctores and pacientes)):
        fecha = datetime.combine(dia, hora, tzinfo=timezone.utc)
        try:
            cita = client.crear_cita(
                {
                    "fecha_hora": fecha.isoformat(),
                    "id_profesional": doctor["id_profesional"],
                    "id_numeroCedula": paciente["id_numeroCedula"],
                }
            )
            st.success(f"Cita creada para {cita['fecha_hora']}")
        except Exception as e:
            mostrar_error(e)

    st.divider()
    st.write("Citas registradas:")

    try:
        citas = client.listar_citas()
    except Exception as e:
        mostrar_error(e)
        citas = []

    if not citas:
        st.info("No hay citas.")
    for c in citas:
        c1, c2 = st.columns([5, 1])
        c1.write(f"- **{c['fecha_hora']}** | doctor {c['id_profesional']} | paciente {c['id_numeroCedula']}")
        clave = f"del_cita_{c['fecha_hora']}_{c['id_profesional']}_{c['id_numeroCedula']}"
        if c2.button("Eliminar", key=clave):
            try:
                st.success(client.eliminar_cita(c["id_profesional"], c["id_numeroCedula"], c["fecha_hora"]))
                st.rerun()
            except Exception as e:
                mostrar_error(e)



# TAB 2 - Doctores

with tab2:
    st.subheader("Doctores")

    with st.expander("Registrar doctor"):
        c1, c2 = st.columns(2)
        id_prof = c1.number_input("ID profesional", min_value=1, step=1, key="doc_id")
        esp = c2.selectbox("Especialidad", ESPECIALIDADES, key="doc_esp")
        nombre = c1.text_input("Nombre", key="doc_nombre")
        apellido = c2.text_input("Apellido", key="doc_apellido")
        correo = c1.text_input("Correo", key="doc_correo")
        tel = c2.text_input("Teléfono", key="doc_tel")

        if st.button("Crear doctor", key="doc_submit"):
            if not all(v.strip() for v in (nombre, apellido, correo, tel)):
                st.error("Todos los campos son obligatorios.")
            else:
                try:
                    d = client.crear_doctor(
                        {
                            "id_profesional": int(id_prof),
                            "nombre": nombre.strip(),
                            "apellido": apellido.strip(),
                            "correo": correo.strip(),
                            "telefono": tel.strip(),
                            "especialidad": esp,
                        }
                    )
                    load_doctores.clear()
                    st.success(f"Doctor creado: {d['id_profesional']}")
                except Exception as e:
                    mostrar_error(e)

    st.divider()

    try:
        for d in client.listar_doctores():
            st.write(f"- {d['id_profesional']} | **{d['apellido']} {d['nombre']}** | {d['especialidad']} | {d['correo']}")
    except Exception as e:
        mostrar_error(e)



# TAB 3 - Pacientes

with tab3:
    st.subheader("Pacientes")

    with st.expander("Registrar paciente"):
        c1, c2 = st.columns(2)
        cedula = c1.number_input("Número de cédula", min_value=1, step=1, key="pac_cedula")
        nacimiento = c2.date_input("Fecha de nacimiento", value=date(1990, 1, 1), key="pac_nac")
        nombre = c1.text_input("Nombre", key="pac_nombre")
        apellido = c2.text_input("Apellido", key="pac_apellido")
        tel = c1.text_input("Teléfono", key="pac_tel")

        if st.button("Crear paciente", key="pac_submit"):
            if not all(v.strip() for v in (nombre, apellido, tel)):
                st.error("Nombre, apellido y teléfono son obligatorios.")
            else:
                try:
                    p = client.crear_paciente(
                        {
                            "id_numeroCedula": int(cedula),
                            "nombre": nombre.strip(),
                            "apellido": apellido.strip(),
                            "telefono": tel.strip(),
                            "fecha_nacimiento": nacimiento.isoformat(),
                        }
                    )
                    load_pacientes.clear()
                    st.success(f"Paciente creado: {p['id_numeroCedula']}")
                except Exception as e:
                    mostrar_error(e)

    st.divider()

    try:
        for p in client.listar_pacientes():
            with st.expander(f"{p['apellido']} {p['nombre']} | {p['id_numeroCedula']}"):
                st.write(f"Teléfono: {p['telefono']} | Nacimiento: {p['fecha_nacimiento']}")
                citas_p = client.citas_de_paciente(p["id_numeroCedula"])
                if not citas_p:
                    st.caption("Sin citas.")
                for c in citas_p:
                    st.write(f"- {c['fecha_hora']} con doctor {c['id_profesional']}")
    except Exception as e:
        mostrar_error(e)
