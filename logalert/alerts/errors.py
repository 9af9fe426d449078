"""Alert workflow errors, mapped to HTTP statuses by the API layer."""


class AlertError(Exception):
    """Base exception for alert workflow failures."""


class ValidationError(AlertError):
    """Raised when an alert definition or request argument is malformed (422)."""


class NotFoundError(AlertError):
    """Raised when a host, item or trigger does not exist (404)."""


class ConflictError(AlertError):
    """Raised when an alert with the same name already exists (409)."""
