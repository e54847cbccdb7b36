#!/usr/bin/env python3
# kate: replace-tabs on; indent-width 4;

"""
Scalar Field Constraint Translation
===================================

Translates the validation rules attached to a scalar protobuf field into a
JSON Schema fragment that enforces the same constraints on the field's JSON
form.

Every translator returns a pair (schema, required). `required` reports that
the rules exclude the field's empty/default value, so the enclosing message
schema should list the field as required. The `ignore_empty` setting of a
rule set suppresses that outcome.

Translators
-----------
- bool: `const`
- bytes: the value must be base64 in either alphabet; the rules themselves
  only decide `required`, since they constrain the decoded bytes
- string: each rule is translated independently; rules that produce a
  pattern are kept as separate patterns and combined with allOf when more
  than one is present
- numeric kinds are handed to the numeric translator on the context
"""

from typing import List, Optional, Tuple

from .context import Context
from .regex import make_regexp_compatible_with_ecmascript, matches_empty_string, quote_meta
from .rules import BoolRules, BytesRules, FieldConstraints, ScalarKind, StringRules, WellKnownFormat
from .schema import (
    Schema,
    StringFormat,
    all_of,
    any_of,
    new_boolean_schema,
    new_string_schema,
    not_,
)

# =============================================================================
# MODULE CONSTANTS
# =============================================================================

BASE64_STANDARD_TITLE = "Standard base64 encoding"
BASE64_STANDARD_PATTERN = r'^[\r\nA-Za-z0-9+/]*$'

BASE64_URL_SAFE_TITLE = "URL-safe base64 encoding"
BASE64_URL_SAFE_PATTERN = r'^[\r\nA-Za-z0-9_-]*$'

# Well-known formats that map onto a single `format` keyword.
SINGLE_FORMATS = {
    WellKnownFormat.EMAIL: StringFormat.EMAIL,
    WellKnownFormat.HOSTNAME: StringFormat.HOSTNAME,
    WellKnownFormat.IPV4: StringFormat.IPV4,
    WellKnownFormat.IPV6: StringFormat.IPV6,
    WellKnownFormat.URI: StringFormat.URI,
    WellKnownFormat.URI_REF: StringFormat.URI_REFERENCE,
}

# Well-known formats that accept any one of several formats.
FORMAT_CHOICES = {
    WellKnownFormat.ADDRESS: (StringFormat.HOSTNAME, StringFormat.IPV4, StringFormat.IPV6),
    WellKnownFormat.IP: (StringFormat.IPV4, StringFormat.IPV6),
}


# =============================================================================
# DISPATCH
# =============================================================================

def schema_for_scalar(ctx: Context, scalar: ScalarKind,
                      constraints: Optional[FieldConstraints]) -> Tuple[Schema, bool]:
    """
    Translate the constraints of a scalar field.

    Args:
        ctx: Translation context
        scalar: The field's protobuf type
        constraints: The field's rule set, or None when it has none

    Returns:
        A tuple of (schema, required).

    Raises:
        GenerationError: for non-scalar kinds, a missing numeric translator,
                         or a malformed `pattern` rule
    """
    ctx.debug("schema_for_scalar %s", scalar.proto_name)
    if scalar.is_numeric:
        if ctx.numeric is None:
            ctx.fail("no numeric translator configured for scalar type %r", scalar.proto_name)
        return ctx.numeric(ctx, scalar, constraints)

    ignore_empty = False
    if constraints is not None:
        ignore_empty = constraints.ignore_empty

    if scalar == ScalarKind.BOOL:
        return schema_for_bool(ctx, constraints.bool_rules if constraints else None)
    if scalar == ScalarKind.BYTES:
        return schema_for_bytes(ctx, constraints.bytes_rules if constraints else None, ignore_empty)
    if scalar == ScalarKind.STRING:
        return schema_for_string(ctx, constraints.string_rules if constraints else None, ignore_empty)

    ctx.fail("unexpected scalar type %r", scalar.proto_name)


# =============================================================================
# TRANSLATORS
# =============================================================================

def schema_for_bool(ctx: Context, rules: Optional[BoolRules]) -> Tuple[Schema, bool]:
    ctx.debug("schema_for_bool")
    required = False
    schema = new_boolean_schema()

    if rules is not None and rules.const is not None:
        schema.const = rules.const
        required = True

    return schema, required


def schema_for_bytes(ctx: Context, rules: Optional[BytesRules],
                     ignore_empty: bool) -> Tuple[Schema, bool]:
    """
    Bytes travel as base64 text. The schema accepts either alphabet; only
    the required flag depends on the rules.
    """
    ctx.debug("schema_for_bytes")
    required = False

    standard = new_string_schema()
    standard.title = BASE64_STANDARD_TITLE
    standard.pattern = BASE64_STANDARD_PATTERN

    url_safe = new_string_schema()
    url_safe.title = BASE64_URL_SAFE_TITLE
    url_safe.pattern = BASE64_URL_SAFE_PATTERN

    schema = new_string_schema()
    schema.any_of = [standard, url_safe]

    if rules is not None:
        # An upper bound alone (max_len, len) does not exclude the empty value
        required = not ignore_empty and (
            bool(rules.const)
            or bool(rules.contains)
            or len(rules.in_) > 0
            or rules.min_len is not None
            or rules.pattern is not None
            or bool(rules.prefix)
            or bool(rules.suffix)
            or rules.well_known is not None
        )

    return schema, required


def schema_for_string(ctx: Context, rules: Optional[StringRules],
                      ignore_empty: bool) -> Tuple[Schema, bool]:
    """
    Translate string rules.

    Rules are applied one at a time to a base schema. Rules that cannot be
    expressed on the base schema add further schemas to an allOf; rules that
    produce a pattern are collected and only placed on the base schema when
    there is exactly one of them.
    """
    ctx.debug("schema_for_string")
    required = False
    schema = new_string_schema()
    schemas: List[Schema] = [schema]
    patterns: List[str] = []

    if rules is not None:
        if rules.const is not None:
            schema.const = rules.const
            required = not ignore_empty

        if rules.contains is not None:
            patterns.append(quote_meta(rules.contains))
            required = not ignore_empty

        if rules.in_:
            schema.enum = list(rules.in_)
            required = not ignore_empty

        if rules.len is not None:
            schema.max_length = rules.len
            schema.min_length = rules.len
            required = not ignore_empty

        # Byte lengths have no JSON Schema keyword, but still exclude ""
        if rules.len_bytes is not None or rules.min_bytes is not None:
            required = not ignore_empty

        if rules.max_len is not None:
            schema.max_length = rules.max_len

        if rules.min_len is not None:
            schema.min_length = rules.min_len
            required = not ignore_empty

        if rules.not_contains is not None:
            contains = new_string_schema()
            contains.pattern = quote_meta(rules.not_contains)
            schemas.append(not_(contains))

        if rules.not_in:
            in_ = new_string_schema()
            in_.enum = list(rules.not_in)
            schemas.append(not_(in_))

        if rules.pattern is not None:
            patterns.append(make_regexp_compatible_with_ecmascript(ctx, rules.pattern))
            if not matches_empty_string(ctx, rules.pattern):
                required = not ignore_empty

        if rules.prefix is not None:
            patterns.append('^' + quote_meta(rules.prefix))
            required = not ignore_empty

        if rules.suffix is not None:
            patterns.append(quote_meta(rules.suffix) + '$')
            required = not ignore_empty

        if rules.well_known is not None:
            if rules.well_known in FORMAT_CHOICES:
                schemas.append(schema_for_string_formats(ctx, *FORMAT_CHOICES[rules.well_known]))
            else:
                schema.format = SINGLE_FORMATS[rules.well_known]
            required = not ignore_empty

    if len(patterns) == 1:
        schema.pattern = patterns[0]
    else:
        for pattern in patterns:
            match = new_string_schema()
            match.pattern = pattern
            schemas.append(match)

    return all_of(*schemas), required


def schema_for_string_formats(ctx: Context, *formats: StringFormat) -> Schema:
    """Schema accepting a string in any one of the given formats."""
    ctx.debug("schema_for_string_formats")
    schemas = []
    for fmt in formats:
        schema = new_string_schema()
        schema.format = fmt
        schemas.append(schema)
    return any_of(*schemas)
