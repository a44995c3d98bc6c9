"""String inflections used to name generated methods and render messages.

Field and value names are snake_case identifiers, so only the last word of a
name is ever pluralized (``order_status`` -> ``order_statuses``).
"""

from __future__ import annotations

_IRREGULAR_PLURALS = {
    "person": "people",
    "child": "children",
    "man": "men",
    "woman": "women",
    "datum": "data",
    "medium": "media",
    "criterion": "criteria",
    "index": "indices",
    "matrix": "matrices",
    "vertex": "vertices",
}

_UNCOUNTABLE = {"equipment", "information", "series", "species", "news"}


def pluralize(word: str) -> str:
    """Return the plural of a snake_case word.

    >>> pluralize("status")
    'statuses'
    >>> pluralize("priority")
    'priorities'
    >>> pluralize("order_category")
    'order_categories'
    """
    if not word:
        return word

    head, sep, last = word.rpartition("_")
    lower = last.lower()

    if lower in _UNCOUNTABLE:
        plural = last
    elif lower in _IRREGULAR_PLURALS:
        plural = _IRREGULAR_PLURALS[lower]
    elif lower.endswith(("s", "x", "z", "ch", "sh")):
        plural = last + "es"
    elif lower.endswith("y") and len(lower) > 1 and lower[-2] not in "aeiou":
        plural = last[:-1] + "ies"
    elif lower.endswith("fe"):
        plural = last[:-2] + "ves"
    elif lower.endswith(("elf", "alf", "olf", "eaf", "oaf", "arf")):
        plural = last[:-1] + "ves"
    else:
        plural = last + "s"

    return head + sep + plural


def titleize(name: str) -> str:
    """``in_progress`` -> ``In Progress``."""
    return " ".join(part.capitalize() for part in name.split("_") if part)


def humanize(attribute: str) -> str:
    """Render an attribute name for messages: ``status_id`` -> ``Status``."""
    if attribute.endswith("_id"):
        attribute = attribute[: -len("_id")]
    text = attribute.replace("_", " ").strip()
    return text[:1].upper() + text[1:]
