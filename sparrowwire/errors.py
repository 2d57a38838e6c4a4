"""Errors reported to MySQL clients as ERR packets."""

from __future__ import annotations

UNKNOWN_ERROR = 1105
CR_MALFORMED_PACKET = 2027
GENERAL_SQL_STATE = "HY000"


def _quoted(text: str) -> str:
    """Render text as a double-quoted, escaped string literal."""
    parts = ['"']
    for char in text:
        if char == "\\":
            parts.append("\\\\")
        elif char == '"':
            parts.append('\\"')
        elif char == "\n":
            parts.append("\\n")
        elif char == "\r":
            parts.append("\\r")
        elif char == "\t":
            parts.append("\\t")
        elif char == "\0":
            parts.append("\\0")
        elif ord(char) < 0x20 or ord(char) == 0x7F:
            parts.append(f"\\u{{{ord(char):x}}}")
        else:
            parts.append(char)
    parts.append('"')
    return "".join(parts)


class MysqlError(Exception):
    """A server error carrying a MySQL error number, SQLSTATE and message."""

    def __init__(self, error_number: int, sql_state: str, message: str) -> None:
        super().__init__(message)
        self.error_number = error_number
        self.sql_state = sql_state
        self.message = message

    def __str__(self) -> str:
        return (
            f"MySQL error, Error number: {self.error_number}, "
            f"SQLSTATE: {_quoted(self.sql_state)}, "
            f"Message: {_quoted(self.message)}"
        )

    def __repr__(self) -> str:
        return (
            f"MysqlError(error_number={self.error_number!r}, "
            f"sql_state={self.sql_state!r}, message={self.message!r})"
        )


def global_error(error_number: int, message: str) -> MysqlError:
    """Build an error with the generic SQLSTATE ``HY000``."""
    return MysqlError(error_number, GENERAL_SQL_STATE, message)