class DomainError(Exception):
    """Base exception for registry rule violations.

    ``code`` is the stable name reported to callers, ``http_status`` the status
    the API layer answers with.
    """

    code = "DomainError"
    http_status = 400


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    code = "ValidationError"


class AuthorizationError(DomainError):
    """Raised when a caller lacks permission for an action."""

    code = "AuthorizationError"
    http_status = 403


class ConflictError(DomainError):
    """Raised when a write-once key is already taken."""

    code = "ConflictError"
    http_status = 409


class Unauthorized(AuthorizationError):
    """Caller is not the admin / not a registered participant."""

    code = "Unauthorized"


class InvalidTimeRange(ValidationError):
    code = "InvalidTimeRange"


class InvalidIdentity(ValidationError):
    code = "InvalidIdentity"


class AlreadyRegistered(ConflictError):
    code = "AlreadyRegistered"


class AlreadyMarked(ConflictError):
    code = "AlreadyMarked"


class EventNotActive(DomainError):
    """Target event id does not correspond to an active (existing) event."""

    code = "EventNotActive"
    http_status = 404


class OutsideEventWindow(DomainError):
    code = "OutsideEventWindow"
    http_status = 422


class RegistryConfigurationError(DomainError):
    """Raised when the registry cannot be set up from the given settings/store."""

    code = "RegistryConfigurationError"
    http_status = 500
