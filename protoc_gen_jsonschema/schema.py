"""
JSON Schema object model.

A small tree of schema nodes, enough to express what the scalar translators
produce: typed string/boolean nodes with keyword constraints, and the four
composition keywords (allOf, anyOf, oneOf, not).

Each node owns its children; nodes are never shared between parents.
"""

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class SchemaType(str, Enum):
    """Primitive JSON types used by the translators."""
    BOOLEAN = "boolean"
    INTEGER = "integer"
    NUMBER = "number"
    STRING = "string"


class StringFormat(str, Enum):
    """Values for the `format` keyword understood by common validators."""
    EMAIL = "email"
    HOSTNAME = "hostname"
    IPV4 = "ipv4"
    IPV6 = "ipv6"
    URI = "uri"
    URI_REFERENCE = "uri-reference"


@dataclass
class Schema:
    """
    A single JSON Schema node.

    Unset attributes are None (or an empty list for the composition
    keywords) and are left out of the serialised form.

    Attributes:
        type: The `type` keyword
        title: Human readable title
        const: The `const` keyword; None means absent
        enum: Allowed values
        pattern: ECMAScript regular expression the value must match
        min_length: Minimum number of characters
        max_length: Maximum number of characters
        format: Well-known string format
        all_of: Schemas that must all hold
        any_of: Schemas of which at least one must hold
        one_of: Schemas of which exactly one must hold
        not_: Schema that must not hold
    """
    type: Optional[SchemaType] = None
    title: Optional[str] = None
    const: Any = None
    enum: Optional[List[Any]] = None
    pattern: Optional[str] = None
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    format: Optional[StringFormat] = None
    all_of: List['Schema'] = field(default_factory=list)
    any_of: List['Schema'] = field(default_factory=list)
    one_of: List['Schema'] = field(default_factory=list)
    not_: Optional['Schema'] = None

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert the node (and its children) to plain JSON-compatible data.

        Keys follow JSON Schema spelling (`minLength`, `allOf`, ...) and are
        emitted in a fixed order so output is deterministic.
        """
        out: Dict[str, Any] = {}
        if self.title is not None:
            out['title'] = self.title
        if self.type is not None:
            out['type'] = self.type.value
        if self.const is not None:
            out['const'] = self.const
        if self.enum is not None:
            out['enum'] = list(self.enum)
        if self.format is not None:
            out['format'] = self.format.value
        if self.min_length is not None:
            out['minLength'] = self.min_length
        if self.max_length is not None:
            out['maxLength'] = self.max_length
        if self.pattern is not None:
            out['pattern'] = self.pattern
        if self.all_of:
            out['allOf'] = [s.to_dict() for s in self.all_of]
        if self.any_of:
            out['anyOf'] = [s.to_dict() for s in self.any_of]
        if self.one_of:
            out['oneOf'] = [s.to_dict() for s in self.one_of]
        if self.not_ is not None:
            out['not'] = self.not_.to_dict()
        return out

    def to_json(self, indent: Optional[int] = None) -> str:
        return json.dumps(self.to_dict(), indent=indent)


def new_string_schema() -> Schema:
    return Schema(type=SchemaType.STRING)


def new_boolean_schema() -> Schema:
    return Schema(type=SchemaType.BOOLEAN)


def all_of(*schemas: Schema) -> Schema:
    """Conjunction of the given schemas; a single schema is returned as is."""
    if len(schemas) == 1:
        return schemas[0]
    return Schema(all_of=list(schemas))


def any_of(*schemas: Schema) -> Schema:
    """Disjunction of the given schemas; a single schema is returned as is."""
    if len(schemas) == 1:
        return schemas[0]
    return Schema(any_of=list(schemas))


def one_of(*schemas: Schema) -> Schema:
    """Exactly one of the given schemas must hold."""
    return Schema(one_of=list(schemas))


def not_(schema: Schema) -> Schema:
    return Schema(not_=schema)
