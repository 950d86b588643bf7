"""
Domain exceptions.
"""
from typing import Optional


class DomainException(Exception):
    """Base exception for domain layer."""

    status: Optional[int] = None

    def __init__(self, message: str, code: str = None):
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(self.message)


class EntityNotFoundError(DomainException):
    """Raised when an entity is not found."""

    status = 404

    def __init__(self, entity_name: str, entity_id: str, code: str = "ENTITY_NOT_FOUND"):
        super().__init__(
            message=f"{entity_name} with id '{entity_id}' not found",
            code=code
        )
        self.entity_name = entity_name
        self.entity_id = entity_id


class ValidationError(DomainException):
    """Raised when validation fails."""

    def __init__(self, message: str, field: str = None):
        super().__init__(message=message, code="VALIDATION_ERROR")
        self.field = field


class RemoteCallError(DomainException):
    """Raised when a remote service call fails or the remote replies with an error."""

    def __init__(self, message: str, pattern: str = None, status: Optional[int] = None):
        super().__init__(message=message, code="REMOTE_CALL_FAILED")
        self.pattern = pattern
        self.status = status


class RemoteUnavailableError(RemoteCallError):
    """Raised when a remote service does not answer in time or the broker is unreachable."""

    def __init__(self, message: str, pattern: str = None):
        super().__init__(message=message, pattern=pattern, status=503)
        self.code = "REMOTE_UNAVAILABLE"


class PersistenceError(DomainException):
    """Raised when the backing store rejects a read or write."""

    def __init__(self, message: str, operation: str = None):
        super().__init__(message=message, code="PERSISTENCE_FAILED")
        self.operation = operation
