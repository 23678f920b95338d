"""Error taxonomy for request handling.

Terminal request conditions map to fixed HTTP responses:
- Unauthorized: no caller identity (401)
- Forbidden: caller role not permitted (403)

Anything else raised during a request is internal and surfaces as 500.
"""


class PeerEvalError(Exception):
    """Base class for request-terminating conditions."""

    status_code: int = 500


class Unauthorized(PeerEvalError):
    """Raised when a request carries no caller identity."""

    status_code = 401

    def __init__(self, detail: str = "Unauthorized") -> None:
        super().__init__(detail)
        self.detail = detail


class Forbidden(PeerEvalError):
    """Raised when the caller's role is not in the allowed set."""

    status_code = 403

    def __init__(self, role: str | None = None) -> None:
        super().__init__(f"Access denied for role: {role!r}")
        self.role = role
