# Messaging infrastructure
from .transport import MessageTransport
from .codec import encode, decode, success_reply, error_reply, unwrap_reply

__all__ = [
    'MessageTransport',
    'encode',
    'decode',
    'success_reply',
    'error_reply',
    'unwrap_reply',
]
