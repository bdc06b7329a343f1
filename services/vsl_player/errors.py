"""
Errors raised by the VSL player services.
"""


class VSLPlayerError(Exception):
    """Base class for every error the service reports to callers."""
    status_code = 500
    code = "internal_error"

    def to_dict(self) -> dict:
        return {"status": "error", "code": self.code, "error": str(self)}


class ProjectNotFoundError(VSLPlayerError):
    """Project doesn't exist, or belongs to another owner."""
    status_code = 404
    code = "not_found"


class PersistenceError(VSLPlayerError):
    """The project store could not complete an operation."""
    code = "persistence_error"

    def __init__(self, message: str, transient: bool = False):
        super().__init__(message)
        self.transient = transient
        self.status_code = 503 if transient else 500

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["transient"] = self.transient
        return data


class AuthenticationError(VSLPlayerError):
    status_code = 401
    code = "unauthenticated"


class SessionExpiredError(AuthenticationError):
    """Token was valid once but has outlived its TTL; the user must log in again."""
    code = "session_expired"
