# Shared domain module
from .base_entity import BaseEntity, AggregateRoot
from .clock import utcnow
from .base_value_object import ValueObject
from .domain_event import DomainEvent
from .exceptions import (
    DomainException,
    EntityNotFoundError,
    ValidationError,
    RemoteCallError,
    RemoteUnavailableError,
    PersistenceError,
)

__all__ = [
    'BaseEntity',
    'AggregateRoot',
    'ValueObject',
    'DomainEvent',
    'DomainException',
    'EntityNotFoundError',
    'ValidationError',
    'RemoteCallError',
    'RemoteUnavailableError',
    'PersistenceError',
    'utcnow',
]
