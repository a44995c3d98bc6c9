"""Exception hierarchy for enum declarations, lookups and assignments."""

from __future__ import annotations


class EnumFieldError(Exception):
    """Base class for every error raised by enumfield."""


class DefinitionError(EnumFieldError):
    """Raised when an enum declaration is malformed."""


class InvalidKeyError(EnumFieldError):
    """Raised when a lookup key is neither an integer id nor a name."""

    def __init__(self, key: object) -> None:
        super().__init__(f"key is not an integer or name: {key!r} ({type(key).__name__})")
        self.key = key


class NotFoundError(EnumFieldError, KeyError):
    """Raised when a well-typed key matches no registered value."""

    def __init__(self, key: int | str, field: str | None = None) -> None:
        where = f" in enum '{field}'" if field else ""
        super().__init__(f"no value{where} for key {key!r}")
        self.key = key
        self.field = field

    def __str__(self) -> str:
        return str(self.args[0])


class InvalidAssignmentError(EnumFieldError, TypeError):
    """Raised when an enum attribute is assigned a value of the wrong type."""
