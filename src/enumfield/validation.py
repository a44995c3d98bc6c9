"""Record validation and the enum inclusion constraint.

The validation layer is deliberately small: a record class mixes in
``Validatable``, rules are registered on the class with ``add_rule()`` and
``is_valid()`` runs them, collecting messages into ``Errors``.  Failing
validation never raises; ``validate_on_flush()`` is the opt-in bridge that
turns an invalid record into a ``RecordInvalid`` when SQLAlchemy flushes it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Iterator, Sequence, TypeVar

from sqlalchemy import event
from sqlalchemy.orm import Session

from enumfield.config import get_settings
from enumfield.errors import DefinitionError, EnumFieldError
from enumfield.inflection import humanize
from enumfield.logging import get_logger
from enumfield.models.registry import get_registry

log = get_logger("validation")

C = TypeVar("C", bound=type)
Rule = Callable[[Any, "Errors"], None]

_RULES_ATTRIBUTE = "__validation_rules__"


# ── Error collection ────────────────────────────────────

class Errors:
    """Ordered (attribute, message) pairs collected during one validation run."""

    def __init__(self) -> None:
        self._items: list[tuple[str, str]] = []

    def add(self, attribute: str, message: str) -> None:
        self._items.append((attribute, message))

    def on(self, attribute: str) -> list[str]:
        return [message for attr, message in self._items if attr == attribute]

    def clear(self) -> None:
        self._items.clear()

    @property
    def full_messages(self) -> list[str]:
        """Messages prefixed with the humanized attribute: ``Status is not valid``."""
        return [f"{humanize(attr)} {message}" for attr, message in self._items]

    def __iter__(self) -> Iterator[tuple[str, str]]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"Errors({self._items!r})"


class Validatable:
    """Mixin giving a record class ``errors`` and ``is_valid()``."""

    @property
    def errors(self) -> Errors:
        errors = self.__dict__.get("_validation_errors")
        if errors is None:
            errors = Errors()
            self.__dict__["_validation_errors"] = errors
        return errors

    def is_valid(self) -> bool:
        """Run every registered rule; True when none of them added an error."""
        errors = self.errors
        errors.clear()
        for rule in getattr(type(self), _RULES_ATTRIBUTE, ()):
            rule(self, errors)
        return not errors


def add_rule(cls: type, rule: Rule) -> None:
    """Register ``rule`` to run when instances of ``cls`` are validated."""
    if not issubclass(cls, Validatable):
        raise DefinitionError(f"{cls.__name__} must mix in Validatable to declare validation rules")
    # Copy inherited rules so subclasses extend rather than mutate their parents.
    rules = list(getattr(cls, _RULES_ATTRIBUTE, ()))
    rules.append(rule)
    setattr(cls, _RULES_ATTRIBUTE, tuple(rules))


# ── Enum inclusion ──────────────────────────────────────

def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


@dataclass
class InclusionConstraint:
    """Restrict the raw column ``<field>_id`` to registered (or explicitly allowed) values.

    Names in ``allowed`` are resolved to ids when the rule runs, so the
    constraint may be declared before the enum itself.
    """

    column: str
    allowed: Sequence[int | str] | None = None
    message: str | None = None
    allow_blank: bool = False
    enum_field: str = field(init=False)

    def __post_init__(self) -> None:
        if not self.column.endswith("_id") or len(self.column) <= len("_id"):
            raise DefinitionError(f"inclusion constraint needs a '<field>_id' column, got '{self.column}'")
        self.enum_field = self.column[: -len("_id")]
        if self.message is None:
            self.message = get_settings().invalid_message
        if self.allowed is not None:
            self.allowed = tuple(self.allowed)

    def allowed_ids(self, owner: type) -> set[int]:
        registry = get_registry(owner, self.enum_field)
        if self.allowed is None:
            return set(registry.ids())
        return {key if isinstance(key, int) and not isinstance(key, bool) else registry.lookup(key).id
                for key in self.allowed}

    def __call__(self, record: Any, errors: Errors) -> None:
        raw = getattr(record, self.column, None)
        if self.allow_blank and _is_blank(raw):
            return
        allowed = self.allowed_ids(type(record))
        if isinstance(raw, bool) or not isinstance(raw, int) or raw not in allowed:
            log.debug("inclusion_failed", model=type(record).__name__, column=self.column, raw=repr(raw))
            errors.add(self.column, self.message)


def validates_inclusion_of_enum(
    column: str,
    *,
    allowed: Sequence[int | str] | None = None,
    message: str | None = None,
    allow_blank: bool = False,
) -> Callable[[C], C]:
    """Class decorator adding an ``InclusionConstraint`` on ``column``."""
    constraint = InclusionConstraint(column, allowed=allowed, message=message, allow_blank=allow_blank)

    def decorate(cls: C) -> C:
        add_rule(cls, constraint)
        return cls

    return decorate


# ── Flush integration ───────────────────────────────────

class RecordInvalid(EnumFieldError):
    """Raised by the flush listener when a pending record fails validation."""

    def __init__(self, record: Any) -> None:
        self.record = record
        self.errors = record.errors
        super().__init__(
            f"{type(record).__name__} is invalid: " + "; ".join(self.errors.full_messages)
        )


def _validate_pending(session: Session, flush_context: Any, instances: Any) -> None:
    for record in list(session.new) + list(session.dirty):
        if isinstance(record, Validatable) and not record.is_valid():
            log.warning(
                "record_invalid_on_flush",
                model=type(record).__name__,
                errors=record.errors.full_messages,
            )
            raise RecordInvalid(record)


def validate_on_flush(target: Any) -> None:
    """Validate new and dirty records before ``target`` (a Session, sessionmaker or Session class) flushes."""
    if not event.contains(target, "before_flush", _validate_pending):
        event.listen(target, "before_flush", _validate_pending)


def stop_validating_on_flush(target: Any) -> None:
    if event.contains(target, "before_flush", _validate_pending):
        event.remove(target, "before_flush", _validate_pending)
