class ShiftboardError(Exception):
    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class NotFoundError(ShiftboardError):
    """Requested resource does not exist."""


class ConflictError(ShiftboardError):
    """Operation conflicts with existing state (e.g. employee already registered)."""


class ForbiddenError(ShiftboardError):
    """Caller is known but not allowed to perform the operation."""


class InvalidRequestError(ShiftboardError):
    """Request is well-formed but refers to data the backend rejects."""


class AuthenticationError(ShiftboardError):
    """Missing, expired or invalid credentials."""


class ProfileLoadError(ShiftboardError):
    """Viewer profile could not be loaded; the dashboard cannot be shown."""


class FetchError(ShiftboardError):
    """Dashboard feed could not be fetched; last good rows stay in place."""


class BackendError(ShiftboardError):
    """Hosted backend answered with an error or could not be reached."""

    def __init__(self, status_code: int, detail: str) -> None:
        self.status_code = status_code
        self.detail = detail
        super().__init__(f"[{status_code}] {detail}")

    @property
    def is_transient(self) -> bool:
        return self.status_code >= 500
