"""Type-safe ASGI and WSGI protocol definitions.

The sampling middleware only inspects HTTP request scopes; everything else is
typed so it can be passed through without casts.
"""

from typing import Callable, Awaitable

from .http import (
    HTTPRequestScope,
    HTTPMessage,
    HTTPResponseMessage,
    HTTPMethod,
    HTTPRequestMessage,
    HTTPResponseStartMessage,
    HTTPResponseBodyMessage,
)
from .ws import WebSocketScope, WebSocketMessage
from .lifespan import LifespanScope, LifespanMessage
from .wsgi import StartResponse, WSGIApp, WSGIEnvironment


Scope = HTTPRequestScope | WebSocketScope | LifespanScope
Message = HTTPMessage | HTTPResponseMessage | WebSocketMessage | LifespanMessage
Receive = Callable[[], Awaitable[Message]]
Send = Callable[[Message], Awaitable[None]]
ASGIApp = Callable[[Scope, Receive, Send], Awaitable[None]]

__all__: tuple[str, ...] = (
    # Core ASGI types
    "Scope",
    "Message",
    "Receive",
    "Send",
    "ASGIApp",
    # HTTP types
    "HTTPRequestScope",
    "HTTPMessage",
    "HTTPResponseMessage",
    "HTTPMethod",
    "HTTPRequestMessage",
    "HTTPResponseStartMessage",
    "HTTPResponseBodyMessage",
    # Other scopes
    "WebSocketScope",
    "WebSocketMessage",
    "LifespanScope",
    "LifespanMessage",
    # WSGI types
    "WSGIApp",
    "WSGIEnvironment",
    "StartResponse",
)
