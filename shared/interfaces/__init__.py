# Shared interfaces module
from .exception_handlers import (
    error_payload,
    exception_payload,
    result_payload,
    validation_payload,
)
from .pagination import PageMeta, page_offset

__all__ = [
    'error_payload',
    'exception_payload',
    'result_payload',
    'validation_payload',
    'PageMeta',
    'page_offset',
]
