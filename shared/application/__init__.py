# Shared application module
from .base_use_case import UseCase, UseCaseResult, DEFAULT_ERROR_STATUS
from .events import dispatch_domain_events

__all__ = ['UseCase', 'UseCaseResult', 'DEFAULT_ERROR_STATUS', 'dispatch_domain_events']
