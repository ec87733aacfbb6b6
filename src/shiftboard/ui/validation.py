"""Pre-flight validation for the Streamlit UI.

No services, no backend access. Uses the API client for checks.
"""
from typing import List


def validate_api_url() -> List[str]:
    """Validate that the API base URL is configured."""
    from shiftboard.config import settings

    errors = []
    if not settings.API_BASE_URL.startswith(("http://", "https://")):
        errors.append(f"API_BASE_URL is not an http(s) URL: {settings.API_BASE_URL!r}")
    return errors


def validate_backend_connection() -> List[str]:
    """Validate that the FastAPI backend is reachable."""
    errors = []
    try:
        from shiftboard.ui.api_client import ShiftboardClient
        client = ShiftboardClient()
        client.health()
    except Exception as e:
        errors.append(f"Backend connection failed: {e}")
    return errors


def run_all_checks() -> List[str]:
    """Run all validation checks."""
    errors = []
    errors.extend(validate_api_url())
    if not errors:
        errors.extend(validate_backend_connection())
    return errors
