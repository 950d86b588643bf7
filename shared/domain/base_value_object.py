"""
Base value object class for DDD.
"""
from abc import ABC
from dataclasses import asdict, dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class ValueObject(ABC):
    """
    Immutable value compared by its attributes.

    Subclasses are frozen dataclasses; equality and hashing come from the
    generated dataclass methods.
    """

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
