"""Lifespan scope and message types for ASGI."""

from typing import TypedDict, Literal, Required, NotRequired


class LifespanScope(TypedDict):
    type: Literal["lifespan"]
    asgi: Required[dict[str, str]]
    state: NotRequired[dict[str, object]]


class LifespanStartupMessage(TypedDict):
    type: Literal["lifespan.startup"]


class LifespanShutdownMessage(TypedDict):
    type: Literal["lifespan.shutdown"]


LifespanMessage = LifespanStartupMessage | LifespanShutdownMessage
