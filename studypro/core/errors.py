"""
Domain errors raised by the services.

Each error carries the HTTP status it maps to; the API layer installs a single
handler that turns any of them into ``{"detail": message}``.
"""


class StudyProError(Exception):
    status_code = 500
    default_message = "Internal error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(StudyProError):
    status_code = 400
    default_message = "Invalid input"


class InvalidPlan(ValidationError):
    default_message = "Invalid plan"


class InvalidReference(ValidationError):
    default_message = "Invalid UTR format"


class InvalidSection(ValidationError):
    default_message = "Invalid section"


class NotFound(StudyProError):
    status_code = 404
    default_message = "Not found"


class InvalidState(StudyProError):
    status_code = 409
    default_message = "Operation not allowed in current state"


class Conflict(StudyProError):
    status_code = 409
    default_message = "Already exists"


class Unauthorized(StudyProError):
    status_code = 401
    default_message = "Unauthorized"


class Forbidden(StudyProError):
    status_code = 403
    default_message = "Admin only"
