"""SQL identifiers and dotted object names."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Tuple


@dataclass(frozen=True)
class Ident:
    """An SQL identifier, optionally quoted."""

    value: str
    quote_style: Optional[str] = None

    def __str__(self) -> str:
        if self.quote_style is None:
            return self.value
        if self.quote_style == "[":
            return f"[{self.value}]"
        return f"{self.quote_style}{self.value}{self.quote_style}"


@dataclass(frozen=True)
class ObjectName:
    """A possibly qualified name such as ``schema.table``."""

    parts: Tuple[Ident, ...]

    def __init__(self, parts: Iterable[Ident]) -> None:
        object.__setattr__(self, "parts", tuple(parts))

    def __str__(self) -> str:
        return ".".join(str(part) for part in self.parts)


def to_object_name(text: str) -> ObjectName:
    """Split a dotted name into unquoted identifiers."""
    return ObjectName(Ident(part) for part in text.split("."))


def ident_to_lowercase(ident: Ident) -> Ident:
    """Lower-case the identifier's value, keeping its quote style."""
    return Ident(ident.value.lower(), ident.quote_style)


def object_name_to_lowercase(object_name: ObjectName) -> ObjectName:
    """Lower-case every part of an object name."""
    return ObjectName(ident_to_lowercase(part) for part in object_name.parts)