"""
JSON envelope codec for messages.

Replies are either {"data": ...} or {"error": {"status": int, "message": str}}.
"""
import json
from typing import Any, Dict

from django.core.serializers.json import DjangoJSONEncoder

from shared.domain.exceptions import RemoteCallError


def encode(payload: Any) -> bytes:
    """Serialize a payload, handling Decimal, UUID and datetime values."""
    return json.dumps(payload, cls=DjangoJSONEncoder).encode("utf-8")


def decode(body: bytes) -> Any:
    """Deserialize a message body. Raises ValueError on malformed input."""
    if isinstance(body, bytes):
        body = body.decode("utf-8")
    return json.loads(body)


def success_reply(data: Any) -> Dict[str, Any]:
    return {"data": data}


def error_reply(status: int, message: Any) -> Dict[str, Any]:
    return {"error": {"status": status, "message": message}}


def unwrap_reply(body: bytes, pattern: str = None) -> Any:
    """Return the data of a reply envelope or raise the error it carries."""
    try:
        envelope = decode(body)
    except ValueError as exc:
        raise RemoteCallError(f"Malformed reply to '{pattern}': {exc}", pattern=pattern) from exc

    if not isinstance(envelope, dict) or ("data" not in envelope and "error" not in envelope):
        raise RemoteCallError(f"Malformed reply to '{pattern}'", pattern=pattern)

    error = envelope.get("error")
    if error is not None:
        if isinstance(error, dict) and "message" in error:
            raise RemoteCallError(
                str(error["message"]),
                pattern=pattern,
                status=error.get("status"),
            )
        raise RemoteCallError(str(error), pattern=pattern)

    return envelope["data"]
