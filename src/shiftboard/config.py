"""Application settings, loaded from the environment and ``.env``."""
from __future__ import annotations

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Hosted backend (database REST + auth REST)
    SUPABASE_URL: str = "http://127.0.0.1:54321"
    SUPABASE_ANON_KEY: SecretStr = SecretStr("")
    SUPABASE_SERVICE_ROLE_KEY: SecretStr = SecretStr("")
    BACKEND_TIMEOUT_SECONDS: float = 30.0

    # Public URL of the portal, used for the signup confirmation redirect
    SITE_URL: str = ""

    # Streamlit UI -> FastAPI
    API_BASE_URL: str = "http://127.0.0.1:8000"

    # Dashboard feed
    DASHBOARD_RPC: str = "get_dashboard"
    DASHBOARD_PAGE_SIZE: int = 1000
    REFRESH_INTERVAL_SECONDS: float = 300.0
    FETCH_PAGE_TIMEOUT_SECONDS: float = 30.0
    FETCH_MAX_RETRIES: int = 2
    FETCH_RETRY_BACKOFF_SECONDS: float = 0.5

    # Punch times are rendered in this zone
    DISPLAY_TIMEZONE: str = "America/Sao_Paulo"

    # Lookup tables
    FULL_TIME_HOURS: list[float] = [180, 210, 220]
    HEAD_OFFICE_BASES: list[str] = ["SEDE", "HQ2"]
    ADMIN_EMPLOYEE_IDS: list[str] = []
    SIGNUP_ALLOWED_TITLE_TERMS: list[str] = ["GERENTE", "COORDENADOR", "SUPERVISOR"]

    LOG_LEVEL: str = "INFO"


settings = Settings()
