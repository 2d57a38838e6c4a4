"""Statements handled by the server itself and their SQL rendering."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List


def _comma_separated(items: List[Any]) -> str:
    return ", ".join(str(item) for item in items)


@dataclass
class CreateTable:
    """A ``CREATE TABLE`` statement."""

    table_name: str
    if_not_exists: bool = False
    columns: List[Any] = field(default_factory=list)
    constraints: List[Any] = field(default_factory=list)

    def __str__(self) -> str:
        text = "CREATE TABLE "
        if self.if_not_exists:
            text += "IF NOT EXISTS "
        text += str(self.table_name)
        if self.columns or self.constraints:
            text += " (" + _comma_separated(self.columns)
            if self.columns and self.constraints:
                text += ", "
            text += _comma_separated(self.constraints) + ")"
        return text