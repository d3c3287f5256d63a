"""Minimal WSGI (PEP 3333) callable types."""

from collections.abc import Callable, Iterable
from typing import Any, TypeAlias

WSGIEnvironment: TypeAlias = dict[str, Any]
StartResponse: TypeAlias = Callable[..., Callable[[bytes], object]]
WSGIApp: TypeAlias = Callable[[WSGIEnvironment, StartResponse], Iterable[bytes]]
