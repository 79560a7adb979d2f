"""Error taxonomy shared by the auth pipeline and the domain services.

Errors are raised where they are detected and travel unchanged up to the
exception handler registered in ``ideaboard.main``, which turns them into
JSON responses using ``status_code`` and ``detail``.
"""


class IdeaBoardError(Exception):
    status_code = 500
    default_detail = "Internal error"

    def __init__(self, detail: str | None = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)

    @property
    def headers(self) -> dict[str, str] | None:
        return None


class Unauthenticated(IdeaBoardError):
    status_code = 401
    default_detail = "Authentication token missing or invalid"

    @property
    def headers(self) -> dict[str, str] | None:
        return {"WWW-Authenticate": "Bearer"}


class InvalidToken(Unauthenticated):
    default_detail = "Invalid token"


class Forbidden(IdeaBoardError):
    status_code = 403
    default_detail = "You do not have permission to perform this action"


class NotFound(IdeaBoardError):
    status_code = 404
    default_detail = "Not found"


class Conflict(IdeaBoardError):
    status_code = 409
    default_detail = "Conflict"


class ValidationError(IdeaBoardError):
    status_code = 400
    default_detail = "Invalid input"


class ConfigurationError(RuntimeError):
    """Raised at startup when the process cannot be configured to serve."""
