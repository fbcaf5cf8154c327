"""Domain exceptions raised by the service layer."""


class ServiceError(Exception):
    """Base class for domain failures reported to the caller."""

    pass


class NotFoundError(ServiceError):
    """Raised when a SUDS type, contract, category, definition or record is missing."""

    pass


class DuplicateError(ServiceError):
    """Raised when a name already exists where it must be unique."""

    pass


class InvalidInputError(ServiceError):
    """Raised when a request is well-formed but not acceptable."""

    pass


class ReorderError(ServiceError):
    """Raised when a reorder could not be saved; the stored order is unchanged."""

    pass
