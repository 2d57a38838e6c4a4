"""Providers of system (``@@name``) and user-defined (``@name``) variables."""

from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence


def _trim_leading(text: str, prefix: str) -> str:
    while prefix and text.startswith(prefix):
        text = text[len(prefix) :]
    return text


class SystemVariables:
    """Looks up system variables, falling back to a version-tagged string."""

    def __init__(self, variables: Optional[Mapping[str, Any]], version: str) -> None:
        self.variables = dict(variables or {})
        self.version = version

    def get_value(self, var_names: Sequence[str]) -> Any:
        """Value of a variable given as its dotted name parts."""
        names = list(var_names)
        if len(names) > 1:
            name = ".".join(names[1:])
            names = names[:1]
        else:
            name = _trim_leading(".".join(names), "@@")

        if name in self.variables:
            return self.variables[name]
        return f"{self.version}-{''.join(names)}"


class UserDefinedVariables:
    """Resolves user-defined variables to a descriptive placeholder string."""

    def get_value(self, var_names: Sequence[str]) -> str:
        return f"user-defined-var-{''.join(var_names)}"