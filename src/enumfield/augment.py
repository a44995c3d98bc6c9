"""Enum fields on record classes.

``belongs_to_enum`` turns the integer column ``<field>_id`` of a record class
into a named enumeration.  For ``@belongs_to_enum("status", {...})`` on
``User`` it installs:

  * ``User.statuses()``        – every value in display order
  * ``User.status(key)``       – lookup by id or name
  * ``User.default_status()``  – the default value, or ``None``
  * ``user.status``            – the resolved value (read / write)
  * ``user.status_is(name)``   – generic name check
  * ``user.is_<name>()``       – one predicate per declared value

Only ``status_id`` is ever stored; ``user.status`` is resolved on every read.
"""

from __future__ import annotations

from typing import Any, Callable, TypeVar

from enumfield.config import get_settings
from enumfield.errors import DefinitionError, InvalidAssignmentError
from enumfield.inflection import pluralize
from enumfield.logging import get_logger
from enumfield.models.registry import EnumMember, EnumRegistry, register
from enumfield.sources import build_registry

log = get_logger("augment")

C = TypeVar("C", bound=type)

# Names installed per (class, field), so a re-declaration can remove them.
_installed: dict[tuple[type, str], list[str]] = {}


class EnumAttribute:
    """Descriptor behind ``<field>``.

    On the class it is the lookup function (``User.status("new")``); on an
    instance it reads and writes ``<field>_id`` through the registry.
    """

    def __init__(self, field: str, registry: EnumRegistry) -> None:
        self.field = field
        self.id_attribute = f"{field}_id"
        self.registry = registry

    def __get__(self, instance: Any, owner: type | None = None) -> Any:
        if instance is None:
            return self.registry.lookup
        return self.resolve(instance)

    def __set__(self, instance: Any, value: Any) -> None:
        setattr(instance, self.id_attribute, self.coerce(value))

    def resolve(self, instance: Any) -> EnumMember | None:
        raw = getattr(instance, self.id_attribute, None)
        if raw is None:
            return None
        if isinstance(raw, bool) or not isinstance(raw, int):
            log.debug("enum_id_unresolved", model=type(instance).__name__, field=self.field, raw=repr(raw))
            return None
        member = self.registry.get(raw)
        if member is None:
            log.debug("enum_id_unresolved", model=type(instance).__name__, field=self.field, raw=raw)
        return member

    def coerce(self, value: Any) -> int | None:
        """Raw id to store for an assigned value."""
        if value is None:
            return None
        if self.registry.member_types and isinstance(value, self.registry.member_types):
            return value.id
        if isinstance(value, str):
            return self.registry.lookup(value).id
        raise InvalidAssignmentError(
            f"{self.field} must be set to an enum value, a name or None, got {type(value).__name__}"
        )


def belongs_to_enum(field: str, source: Any) -> Callable[[C], C]:
    """Class decorator declaring ``field`` as an enum backed by ``<field>_id``."""

    def decorate(cls: C) -> C:
        declare_enum(cls, field, source)
        return cls

    return decorate


def declare_enum(cls: type, field: str, source: Any) -> EnumRegistry:
    """Declare (or re-declare) ``field`` on ``cls`` and return its registry.

    The registry is built before anything on the class is touched, so a
    declaration that fails leaves a previous one intact.
    """
    if not field.isidentifier():
        raise DefinitionError(f"invalid enum field name: {field!r}")
    if pluralize(field) == field:
        raise DefinitionError(
            f"enum field '{field}' has no distinct plural, so the all-values accessor "
            f"{cls.__name__}.{field}() would replace the lookup {cls.__name__}.{field}(key); pick another field name"
        )

    registry = build_registry(source, field=field)
    methods = _build_methods(field, registry)

    previous = _installed.get((cls, field), [])
    inherited = {
        name
        for (owner, installed_field), names in _installed.items()
        if installed_field == field and owner is not cls and owner in cls.__mro__
        for name in names
    }
    for name in methods:
        if name in previous or name in inherited:
            continue
        if any(name in klass.__dict__ for klass in cls.__mro__):
            raise DefinitionError(f"{cls.__name__}.{name} already exists; cannot declare enum '{field}'")

    for name in previous:
        if name not in methods and name in cls.__dict__:
            delattr(cls, name)
    for name, attribute in methods.items():
        setattr(cls, name, attribute)

    register(cls, field, registry)
    _installed[(cls, field)] = list(methods)
    log.info(
        "enum_redeclared" if previous else "enum_declared",
        model=cls.__name__,
        field=field,
        values=len(registry),
    )
    return registry


def _build_methods(field: str, registry: EnumRegistry) -> dict[str, Any]:
    prefix = get_settings().predicate_prefix
    attribute = EnumAttribute(field, registry)

    def all_values(cls: type) -> tuple[EnumMember, ...]:
        return registry.values()

    def default_value(cls: type) -> EnumMember | None:
        return registry.default()

    def value_is(self: Any, name: str) -> bool:
        current = attribute.resolve(self)
        return current is not None and current.name == name

    methods: dict[str, Any] = {
        field: attribute,
        pluralize(field): classmethod(all_values),
        f"default_{field}": classmethod(default_value),
        f"{field}_is": value_is,
    }
    for name in registry.names():
        methods[f"{prefix}{name}"] = _predicate(value_is, name, f"{prefix}{name}")

    if len(methods) != 4 + len(registry):
        raise DefinitionError(f"enum '{field}' has a value whose predicate clashes with a generated method")
    return methods


def _predicate(value_is: Callable[[Any, str], bool], name: str, method_name: str) -> Callable[[Any], bool]:
    def predicate(self: Any) -> bool:
        return value_is(self, name)

    predicate.__name__ = predicate.__qualname__ = method_name
    predicate.__doc__ = f"True when the current value is '{name}'."
    return predicate
