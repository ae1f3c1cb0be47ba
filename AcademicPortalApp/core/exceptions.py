"""Error types shared by the service and page layers."""


class ApiError(Exception):
    """A backend call failed: transport error, error envelope or non-2xx status.

    ``message`` is always a human-readable string suitable for showing inline
    next to the action that triggered the call.
    """

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class LoginRequired(Exception):
    """Raised by page gating when no authenticated session is present."""


class RoleNotAllowed(Exception):
    """Raised by page gating when the session role may not open the page."""
