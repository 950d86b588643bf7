"""
Error envelope builders.

Every failure leaving the service is reported as {'status': int, 'message': str}.
"""
from typing import Any, Dict, Mapping

from shared.application import UseCaseResult, DEFAULT_ERROR_STATUS
from shared.domain.exceptions import (
    DomainException,
    EntityNotFoundError,
    RemoteCallError,
    RemoteUnavailableError,
)


def error_payload(status: int, message: str) -> Dict[str, Any]:
    return {'status': status, 'message': message}


def exception_payload(exc: Exception) -> Dict[str, Any]:
    """Translate an exception into the error envelope."""
    if isinstance(exc, EntityNotFoundError):
        return error_payload(404, exc.message)

    if isinstance(exc, RemoteUnavailableError):
        return error_payload(503, exc.message)

    if isinstance(exc, RemoteCallError):
        return error_payload(exc.status or DEFAULT_ERROR_STATUS, exc.message)

    if isinstance(exc, DomainException):
        return error_payload(exc.status or DEFAULT_ERROR_STATUS, exc.message)

    # No explicit status: raw error text with the default status
    return error_payload(DEFAULT_ERROR_STATUS, str(exc))


def result_payload(result: UseCaseResult) -> Dict[str, Any]:
    """Error envelope of a failed use case result."""
    return error_payload(result.status or DEFAULT_ERROR_STATUS, result.error)


def validation_payload(errors: Mapping[str, Any]) -> Dict[str, Any]:
    """Flatten serializer errors into one message."""
    return error_payload(DEFAULT_ERROR_STATUS, _flatten(errors))


def _flatten(errors: Any, prefix: str = '') -> str:
    if isinstance(errors, Mapping):
        parts = [
            _flatten(value, _join_key(prefix, key))
            for key, value in errors.items()
        ]
        return '; '.join(part for part in parts if part)
    if isinstance(errors, (list, tuple)):
        if all(isinstance(error, str) for error in errors):
            text = ' '.join(str(error) for error in errors)
            return f"{prefix}: {text}" if prefix else text
        parts = [
            _flatten(error, f"{prefix}[{index}]")
            for index, error in enumerate(errors)
        ]
        return '; '.join(part for part in parts if part)
    return f"{prefix}: {errors}" if prefix else str(errors)


def _join_key(prefix: str, key: Any) -> str:
    # list errors may come keyed by index
    if isinstance(key, int):
        return f"{prefix}[{key}]"
    return f"{prefix}.{key}" if prefix else str(key)
