"""EnumRegistry – the ordered, dual-indexed collection behind one enum field.

Also holds the process-wide registry table: one registry per
(owning class, field name), filled in when a class declares the field.
"""

from __future__ import annotations

from typing import Any, Iterator, Protocol, Sequence

from enumfield.errors import DefinitionError, InvalidKeyError, NotFoundError


class EnumMember(Protocol):
    """What the registry needs from a member: an EnumValue or a wrapped record."""

    id: int
    name: str
    title: str
    position: int | None
    default: bool | None


def _sort_position(member: EnumMember) -> int:
    position = member.position
    return member.id if position is None else position


class EnumRegistry:
    """Members of one enum field, sorted by position and keyed by id and by name."""

    def __init__(self, members: Sequence[EnumMember], *, field: str | None = None) -> None:
        self.field = field
        by_id: dict[int, EnumMember] = {}
        by_name: dict[str, EnumMember] = {}

        for member in members:
            member_id, name = member.id, member.name
            if isinstance(member_id, bool) or not isinstance(member_id, int):
                raise DefinitionError(f"enum id must be an integer, got {member_id!r}")
            if not isinstance(name, str) or not name.isidentifier():
                raise DefinitionError(f"enum value {member_id} has an invalid name: {name!r}")
            if member_id in by_id:
                raise DefinitionError(f"duplicate enum id {member_id}")
            if name in by_name:
                raise DefinitionError(f"duplicate enum name '{name}'")
            by_id[member_id] = member
            by_name[name] = member

        # sorted() is stable: equal positions keep declaration order
        self._values: tuple[EnumMember, ...] = tuple(sorted(members, key=_sort_position))
        self._by_id = by_id
        self._by_name = by_name
        self.member_types: tuple[type, ...] = tuple(dict.fromkeys(type(m) for m in members))

    # ── Ordered view ────────────────────────────────────

    def values(self) -> tuple[EnumMember, ...]:
        return self._values

    def ids(self) -> list[int]:
        return [m.id for m in self._values]

    def names(self) -> list[str]:
        return [m.name for m in self._values]

    def __iter__(self) -> Iterator[EnumMember]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    # ── Lookup ──────────────────────────────────────────

    def get(self, key: Any) -> EnumMember | None:
        """Resolve ``key`` like :meth:`lookup`, returning ``None`` when nothing matches.

        Still raises ``InvalidKeyError`` for keys that are neither ids nor names.
        """
        if self.is_member(key):
            return key
        if self.member_types and isinstance(key, self.member_types):
            return self._by_id.get(key.id)
        if isinstance(key, bool):
            raise InvalidKeyError(key)
        if isinstance(key, int):
            return self._by_id.get(key)
        if isinstance(key, str):
            return self._by_name.get(key)
        raise InvalidKeyError(key)

    def lookup(self, key: Any) -> EnumMember:
        """Resolve an integer id or a name; raise ``NotFoundError`` when nothing matches."""
        member = self.get(key)
        if member is None:
            raise NotFoundError(key, self.field)
        return member

    def contains(self, member_id: Any) -> bool:
        if isinstance(member_id, bool) or not isinstance(member_id, int):
            return False
        return member_id in self._by_id

    def is_member(self, value: Any) -> bool:
        """True when ``value`` is one of this registry's members (not merely equal to one)."""
        member_id = getattr(value, "id", None)
        if isinstance(member_id, bool) or not isinstance(member_id, int):
            return False
        return self._by_id.get(member_id) is value

    def default(self) -> EnumMember | None:
        """First member in display order flagged as default; lowest position wins ties."""
        for member in self._values:
            if member.default:
                return member
        return None

    def __repr__(self) -> str:
        return f"EnumRegistry(field={self.field!r}, names={self.names()!r})"


# ── Registry table ──────────────────────────────────────

_registries: dict[tuple[type, str], EnumRegistry] = {}


def register(owner: type, field: str, registry: EnumRegistry) -> None:
    """Store (or replace) the registry of ``owner.field``."""
    _registries[(owner, field)] = registry


def get_registry(owner: type, field: str) -> EnumRegistry:
    """Return the registry of ``owner.field``, searching base classes too."""
    for klass in owner.__mro__:
        registry = _registries.get((klass, field))
        if registry is not None:
            return registry
    declared = ", ".join(registered_fields(owner)) or "none"
    raise DefinitionError(f"{owner.__name__} declares no enum field '{field}' (declared: {declared})")


def registered_fields(owner: type) -> list[str]:
    """Enum field names declared on ``owner`` or its bases."""
    fields: list[str] = []
    for klass in reversed(owner.__mro__):
        for (registered_owner, field) in _registries:
            if registered_owner is klass and field not in fields:
                fields.append(field)
    return fields
