"""WebSocket scope type for ASGI.

WebSocket connections are never profiled; the scope is typed only so the
middleware can route it past the sampling gate.
"""

from typing import Any, TypedDict, Literal, Required, NotRequired, TypeAlias

WebSocketScheme: TypeAlias = Literal["ws", "wss"]


class WebSocketScope(TypedDict):
    type: Literal["websocket"]
    asgi: Required[dict[str, str]]
    scheme: NotRequired[WebSocketScheme]
    path: Required[str]
    query_string: NotRequired[bytes]
    headers: Required[list[tuple[bytes, bytes]]]
    subprotocols: NotRequired[list[str]]


# Connection, data and close events are forwarded untouched.
WebSocketMessage: TypeAlias = dict[str, Any]
