"""
Base use case classes.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Generic, TypeVar, Optional

from shared.domain.exceptions import DomainException

InputDTO = TypeVar('InputDTO')
OutputDTO = TypeVar('OutputDTO')

DEFAULT_ERROR_STATUS = 400


@dataclass
class UseCaseResult(Generic[OutputDTO]):
    """Result wrapper for use cases."""
    success: bool
    data: Optional[OutputDTO] = None
    error: Optional[str] = None
    error_code: Optional[str] = None
    status: Optional[int] = None

    @classmethod
    def ok(cls, data: OutputDTO) -> 'UseCaseResult[OutputDTO]':
        """Create a successful result."""
        return cls(success=True, data=data)

    @classmethod
    def fail(
        cls,
        error: str,
        error_code: str = None,
        status: int = DEFAULT_ERROR_STATUS,
    ) -> 'UseCaseResult[OutputDTO]':
        """Create a failed result."""
        return cls(success=False, error=error, error_code=error_code, status=status)

    @classmethod
    def from_exception(cls, exc: DomainException) -> 'UseCaseResult[OutputDTO]':
        """Create a failed result carrying the exception's message, code and status."""
        return cls.fail(
            error=exc.message,
            error_code=exc.code,
            status=exc.status or DEFAULT_ERROR_STATUS,
        )

    def unwrap(self) -> OutputDTO:
        """Return the data of a successful result, raise on a failed one."""
        if not self.success:
            raise ValueError(f"Cannot unwrap failed result: {self.error_code}: {self.error}")
        return self.data


class UseCase(ABC, Generic[InputDTO, OutputDTO]):
    """Base use case class."""

    @abstractmethod
    def execute(self, input_dto: InputDTO) -> UseCaseResult[OutputDTO]:
        """Execute the use case."""
        pass
