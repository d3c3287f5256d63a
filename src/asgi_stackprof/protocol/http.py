"""HTTP scope and message types for ASGI.

Only the parts of the HTTP protocol the sampling middleware reads or forwards
are modelled here: the request scope and the request/response messages.
"""

from typing import TypedDict, Literal, Required, NotRequired, TypeAlias

HTTPMethod: TypeAlias = Literal["GET", "POST", "PUT", "DELETE", "PATCH", "HEAD", "OPTIONS", "TRACE", "CONNECT"]
HTTPVersion: TypeAlias = Literal["1.0", "1.1", "2", "3"]
HTTPScheme: TypeAlias = Literal["http", "https"]


class HTTPRequestScope(TypedDict):
    type: Literal["http"]
    asgi: Required[dict[str, str]]
    http_version: Required[HTTPVersion]
    method: Required[HTTPMethod]
    scheme: NotRequired[HTTPScheme]
    path: Required[str]  # percent-decoded, without query string
    raw_path: NotRequired[bytes | None]
    query_string: Required[bytes]
    root_path: NotRequired[str]
    headers: Required[list[tuple[bytes, bytes]]]
    client: NotRequired[tuple[str, int] | None]
    server: NotRequired[tuple[str, int | None] | None]
    state: NotRequired[dict[str, object]]


class HTTPRequestMessage(TypedDict):
    type: Literal["http.request"]
    body: NotRequired[bytes]
    more_body: NotRequired[bool]


class HTTPDisconnectMessage(TypedDict):
    type: Literal["http.disconnect"]


class HTTPResponseStartMessage(TypedDict):
    type: Literal["http.response.start"]
    status: Required[int]
    headers: NotRequired[list[tuple[bytes, bytes]]]
    trailers: NotRequired[bool]


class HTTPResponseBodyMessage(TypedDict):
    type: Literal["http.response.body"]
    body: NotRequired[bytes]
    more_body: NotRequired[bool]


HTTPMessage: TypeAlias = HTTPRequestMessage | HTTPDisconnectMessage
HTTPResponseMessage: TypeAlias = HTTPResponseStartMessage | HTTPResponseBodyMessage
