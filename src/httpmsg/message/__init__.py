"""Message value objects: requests, server requests and responses."""

from .base import MessageMixin
from .request import Request, RequestMixin
from .server_request import ServerRequest
from .response import Response
from .wire import send_message, to_bytes

__all__ = [
    "MessageMixin",
    "Request",
    "RequestMixin",
    "ServerRequest",
    "Response",
    "send_message",
    "to_bytes",
]
