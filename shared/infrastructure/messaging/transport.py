"""
Message transport interface.
"""
from abc import ABC, abstractmethod
from typing import Any


class MessageTransport(ABC):
    """Request/reply channel to another service."""

    @abstractmethod
    def send(self, pattern: str, payload: Any) -> Any:
        """
        Send a request and block until its reply arrives.

        Returns the reply data. Raises RemoteCallError when the remote side
        answers with an error and RemoteUnavailableError when no answer comes.
        """
        pass

    def close(self) -> None:
        """Release the underlying connection, if any."""
        pass
