import streamlit as st
from shiftboard.ui.api_client import get_client, APIError

st.title("Planejamento de equipes")

client = get_client()
if not client.is_authenticated:
    st.warning("Please sign in first.")
    st.stop()

try:
    planning = client.planning_bases()
except APIError as e:
    st.error(f"Failed to load bases: {e.detail}")
    st.stop()

c1, c2 = st.columns(2)
if planning.bases:
    c1.selectbox(
        "Base", planning.bases,
        index=planning.bases.index(planning.selected_base) if planning.selected_base in planning.bases else 0,
        disabled=not planning.can_view_all_bases,
    )
else:
    c1.info("Nenhuma base disponivel.")
c2.date_input("Data", value=planning.planning_date)

st.info("Planejamento de equipes em construcao.")
