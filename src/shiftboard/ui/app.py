"""Streamlit entry point: sign-in and navigation.

Run with ``streamlit run src/shiftboard/ui/app.py``.
"""
import streamlit as st
from pydantic import ValidationError
from shiftboard.ui.api_client import get_client, APIError
from shiftboard.ui.state import init_session, get_profile, set_profile, clear_session
from shiftboard.ui.validation import run_all_checks

st.set_page_config(page_title="Shiftboard", layout="wide")
init_session()

st.title("Dashboard operacional")

errors = run_all_checks()
if errors:
    for err in errors:
        st.error(err)
    st.stop()

client = get_client()
profile = get_profile()

if client.is_authenticated and profile:
    st.success(f"Conectado como {profile.name or 'Usuario'} ({profile.base or 'SEM BASE'})")
    if st.button("Sair"):
        try:
            client.logout()
        except APIError as e:
            st.warning(f"Logout failed: {e.detail}")
        clear_session()
        st.rerun()
    st.page_link("pages/1_dashboard.py", label="Horas extras")
    st.page_link("pages/2_planning.py", label="Planejamento de equipes")
    st.stop()

with st.form("login"):
    email = st.text_input("Email")
    password = st.text_input("Senha", type="password")
    submitted = st.form_submit_button("Entrar")

if submitted:
    if not email or not password:
        st.error("Email and password are required.")
    else:
        try:
            client.login(email, password)
            set_profile(client.me())
            st.rerun()
        except ValidationError as e:
            st.error(f"Invalid form: {e.errors()[0]['msg']}")
        except APIError as e:
            st.error(f"Login failed: {e.detail}")

st.page_link("pages/3_signup.py", label="Criar conta")
