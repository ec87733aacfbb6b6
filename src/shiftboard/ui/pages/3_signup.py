import streamlit as st
from pydantic import ValidationError
from shiftboard.api.schemas.signup import SignupRequest
from shiftboard.ui.api_client import get_client, APIError

st.title("Criar conta")

client = get_client()

# --- Registry lookup ---
employee_id = st.text_input("Matricula")
employee = None
if employee_id.strip():
    try:
        employee = client.lookup_employee(employee_id.strip())
    except APIError as e:
        st.error(f"Lookup failed: {e.detail}")

if employee is not None:
    st.write(f"**{employee.name}** · {employee.base or '-'} · {employee.job_title or '-'}")
    if not employee.allow_signup:
        st.warning(employee.allow_reason or "Signup not allowed.")
        st.stop()

    # --- Account form ---
    with st.form("signup"):
        email = st.text_input("Email")
        password = st.text_input("Senha", type="password")
        captcha_token = st.text_input("Verification token")
        submitted = st.form_submit_button("Cadastrar")

    if submitted:
        try:
            payload = SignupRequest(
                employee_id=employee_id, email=email, password=password, captcha_token=captcha_token,
            )
            result = client.signup(payload)
            st.success(result.message)
        except ValidationError as e:
            st.error(f"Invalid form: {e.errors()[0]['msg']}")
        except APIError as e:
            st.error(f"Signup failed: {e.detail}")
