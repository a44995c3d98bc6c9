"""enumfield – named, metadata-bearing enumerations over integer columns."""

from enumfield.augment import EnumAttribute, belongs_to_enum, declare_enum
from enumfield.errors import (
    DefinitionError,
    EnumFieldError,
    InvalidAssignmentError,
    InvalidKeyError,
    NotFoundError,
)
from enumfield.models.registry import EnumRegistry, get_registry
from enumfield.models.value import EnumValue
from enumfield.sources import RecordSource, StaticSource, load_declarations
from enumfield.validation import (
    Errors,
    InclusionConstraint,
    RecordInvalid,
    Validatable,
    validate_on_flush,
    validates_inclusion_of_enum,
)

__all__ = [
    "DefinitionError",
    "EnumAttribute",
    "EnumFieldError",
    "EnumRegistry",
    "EnumValue",
    "Errors",
    "InclusionConstraint",
    "InvalidAssignmentError",
    "InvalidKeyError",
    "NotFoundError",
    "RecordInvalid",
    "RecordSource",
    "StaticSource",
    "Validatable",
    "belongs_to_enum",
    "declare_enum",
    "get_registry",
    "load_declarations",
    "validate_on_flush",
    "validates_inclusion_of_enum",
]
