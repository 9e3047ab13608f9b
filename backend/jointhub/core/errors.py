# jointhub/core/errors.py
"""
Error taxonomy shared by the stores, the generation gateway and the HTTP layer.

Each error carries the HTTP status it maps to and a machine-readable code that
the API returns in the ``status`` field of the error body, so the client can
tell a datastore outage apart from a bad request.
"""


class JointHubError(Exception):
    """Base class for errors that are surfaced to API callers as-is."""

    status_code: int = 500
    code: str = "INTERNAL_ERROR"
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_body(self) -> dict:
        return {"error": self.message, "status": self.code}


class InvalidInput(JointHubError):
    status_code = 400
    code = "INVALID_INPUT"
    default_message = "Invalid request"


class DuplicateUser(JointHubError):
    status_code = 400
    code = "USERNAME_EXISTS"
    default_message = "Username already exists"


class InvalidCredentials(JointHubError):
    """Raised for unknown usernames and wrong passwords alike."""

    status_code = 401
    code = "AUTH_INVALID_CREDENTIALS"
    default_message = "Invalid credentials"


class Unauthenticated(JointHubError):
    status_code = 401
    code = "AUTH_REQUIRED"
    default_message = "Unauthorized"


class Forbidden(JointHubError):
    status_code = 403
    code = "AUTH_INVALID_TOKEN"
    default_message = "Forbidden"


class Unavailable(JointHubError):
    status_code = 503
    code = "DB_DISCONNECTED"
    default_message = "Database not connected. Please check your DATABASE_URL configuration."


class UpstreamError(JointHubError):
    """A generation provider failed; the message is passed through verbatim."""

    status_code = 500
    code = "UPSTREAM_ERROR"
    default_message = "Upstream provider error"
