"""Capability protocols for matrix element types."""

from __future__ import annotations

from typing import Any, Protocol, TypeVar


class Ring(Protocol):
    """Elements closed under ``+``, ``-`` and ``*`` (e.g. ``int``)."""

    def __add__(self, other: Any) -> Any:
        ...

    def __sub__(self, other: Any) -> Any:
        ...

    def __mul__(self, other: Any) -> Any:
        ...


class Field(Ring, Protocol):
    """Ring elements that also divide and compare (``float``, ``Fraction``)."""

    def __truediv__(self, other: Any) -> Any:
        ...

    def __lt__(self, other: Any) -> bool:
        ...


R = TypeVar("R", bound=Ring)
