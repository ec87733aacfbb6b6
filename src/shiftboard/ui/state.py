"""Session-state helpers for the Streamlit UI.

No services, no backend access. Only reads/writes ``st.session_state``.
"""
import streamlit as st
from typing import Optional

from shiftboard.api.schemas.auth import ProfileRead


def init_session() -> None:
    """Initialize session state variables."""
    if "profile" not in st.session_state:
        st.session_state["profile"] = None


def get_profile() -> Optional[ProfileRead]:
    """Profile of the signed-in viewer, or None."""
    return st.session_state.get("profile")


def set_profile(profile: ProfileRead) -> None:
    st.session_state["profile"] = profile


def clear_session() -> None:
    """Forget the viewer (after logout)."""
    st.session_state["profile"] = None
