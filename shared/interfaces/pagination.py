"""
Page/limit pagination helpers.
"""
import math
from dataclasses import dataclass

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100


@dataclass
class PageMeta:
    """Pagination metadata returned next to a page of results."""
    total: int
    page: int
    last_page: int

    @classmethod
    def build(cls, total: int, page: int, limit: int) -> 'PageMeta':
        return cls(total=total, page=page, last_page=math.ceil(total / limit))


def page_offset(page: int, limit: int) -> int:
    """Row offset of the first item on a 1-based page."""
    return (page - 1) * limit
