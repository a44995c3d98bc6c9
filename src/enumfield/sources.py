"""Enum sources – the two accepted declaration shapes and the adapter between them.

A declaration is either

  * ``StaticSource`` – a mapping of integer id to a bare name or to an
    attribute bag (``name`` plus optional ``title``, ``position``, ``default``)
  * ``RecordSource`` – already-loaded entities (typically ORM rows) exposing
    ``id``, ``name``, ``title``, ``position`` and ``default``

``build_members()`` turns either shape into the ordered member list an
``EnumRegistry`` is built from. Static entries become ``EnumValue`` objects;
records are used as they are.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Sequence, Union

import yaml
from pydantic import ValidationError

from enumfield.errors import DefinitionError
from enumfield.logging import get_logger
from enumfield.models.registry import EnumMember, EnumRegistry
from enumfield.models.value import EnumValue

log = get_logger("sources")

_RECORD_ATTRIBUTES = ("id", "name", "title", "position", "default")


@dataclass(frozen=True)
class StaticSource:
    entries: Mapping[int, Any]


@dataclass(frozen=True)
class RecordSource:
    records: Sequence[Any]


EnumSource = Union[StaticSource, RecordSource]


def as_source(declared: Any) -> EnumSource:
    """Classify a raw declaration by its static type."""
    if isinstance(declared, (StaticSource, RecordSource)):
        return declared
    if isinstance(declared, Mapping):
        return StaticSource(dict(declared))
    if isinstance(declared, Iterable) and not isinstance(declared, (str, bytes)):
        return RecordSource(tuple(declared))
    raise DefinitionError(
        f"enum source must be a mapping of id to name/attributes or a collection of records, "
        f"got {type(declared).__name__}"
    )


def build_members(source: EnumSource) -> list[EnumMember]:
    """Produce the ordered member list for ``source``."""
    if isinstance(source, StaticSource):
        return [_static_member(key, value) for key, value in source.entries.items()]
    if isinstance(source, RecordSource):
        for record in source.records:
            missing = [a for a in _RECORD_ATTRIBUTES if not hasattr(record, a)]
            if missing:
                raise DefinitionError(
                    f"{type(record).__name__} cannot be used as an enum value; "
                    f"missing {', '.join(missing)}"
                )
        return list(source.records)
    raise DefinitionError(f"unsupported enum source: {source!r}")


def build_registry(declared: Any, *, field: str | None = None) -> EnumRegistry:
    """Adapt a raw declaration and build its registry."""
    return EnumRegistry(build_members(as_source(declared)), field=field)


def _static_member(key: Any, value: Any) -> EnumValue:
    if isinstance(key, bool) or not isinstance(key, int):
        raise DefinitionError(f"enum id must be an integer, got {key!r}")

    if isinstance(value, str):
        attributes: dict[str, Any] = {"name": value}
    elif isinstance(value, Mapping):
        attributes = dict(value)
    else:
        raise DefinitionError(
            f"enum value {key}: value must be a name or an attribute bag, got {value!r}"
        )

    attributes.pop("id", None)
    try:
        return EnumValue(id=key, **attributes)
    except ValidationError as exc:
        raise DefinitionError(f"enum value {key}: {exc}") from exc


# ── YAML declarations ───────────────────────────────────

def load_declarations(path: str | Path) -> dict[str, StaticSource]:
    """Load static enum declarations from a YAML file.

    The top level maps field names to ``id: name`` / ``id: {name: ...}`` mappings::

        status:
          1: new
          2: {name: in_progress, title: Continuing}

    Raises ``DefinitionError`` when the file is missing or malformed.
    """
    path = Path(path)
    if not path.exists():
        raise DefinitionError(f"Enum declaration file not found: {path}")

    with open(path, "r", encoding="utf-8") as fh:
        try:
            raw = yaml.safe_load(fh)
        except yaml.YAMLError as exc:
            raise DefinitionError(f"{path}: invalid YAML: {exc}") from exc

    if not isinstance(raw, dict):
        raise DefinitionError(f"{path}: enum declarations must be a YAML mapping at the top level")

    declarations: dict[str, StaticSource] = {}
    for field, entries in raw.items():
        if not isinstance(field, str) or not field.isidentifier():
            raise DefinitionError(f"{path}: invalid field name {field!r}")
        if not isinstance(entries, dict):
            raise DefinitionError(f"{path}: field '{field}' must map ids to values")
        declarations[field] = StaticSource(entries)

    log.info("declarations_loaded", path=str(path), fields=list(declarations))
    return declarations
