"""Translate protobuf field validation rules into JSON Schema."""

from .context import Context, GenerationError
from .rules import (
    BoolRules,
    BytesRules,
    FieldConstraints,
    NumericRules,
    ScalarKind,
    StringRules,
    WellKnownFormat,
)
from .scalar import schema_for_scalar
from .schema import Schema, StringFormat

__version__ = '0.1.0'

__all__ = [
    'BoolRules',
    'BytesRules',
    'Context',
    'FieldConstraints',
    'GenerationError',
    'NumericRules',
    'ScalarKind',
    'Schema',
    'StringFormat',
    'StringRules',
    'WellKnownFormat',
    'schema_for_scalar',
]
