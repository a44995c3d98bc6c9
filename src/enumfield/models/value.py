"""EnumValue – the immutable descriptor of a single enumeration member."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator

from enumfield.errors import DefinitionError
from enumfield.inflection import titleize


class EnumValue(BaseModel):
    """One member of an enum field: id, name, display title, position, default flag.

    ``title`` defaults to the titleized name and ``position`` to the id.
    """

    model_config = ConfigDict(frozen=True, strict=True, extra="forbid")

    id: int
    name: str
    title: str
    position: int
    default: bool = False

    @model_validator(mode="before")
    @classmethod
    def _derive_defaults(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        name = data.get("name")
        if not isinstance(name, str) or not name:
            raise DefinitionError(f"enum value {data.get('id')!r} has no name")
        data = dict(data)
        if data.get("title") is None:
            data["title"] = titleize(name)
        if data.get("position") is None:
            data["position"] = data.get("id")
        if data.get("default") is None:
            data["default"] = False
        return data

    def is_default(self) -> bool:
        return self.default

    def matches(self, key: int | str) -> bool:
        """True when ``key`` is this value's id (int) or name (str)."""
        if isinstance(key, bool):
            return False
        if isinstance(key, int):
            return key == self.id
        if isinstance(key, str):
            return key == self.name
        return False

    def __repr__(self) -> str:
        return f"EnumValue(id={self.id}, name={self.name!r}, title={self.title!r}, position={self.position})"
