"""
Field constraint rule sets.

These dataclasses mirror the scalar parts of `buf.validate.FieldRules`.
Every rule is independently optional: None means the rule is absent, while
an empty string or zero is a rule that is present with that value.

Rule sets can be loaded from the protobuf JSON mapping (`from_dict`) or
from a protobuf message of the same shape (`from_proto`).
"""

import base64
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any, Dict, List, Mapping, Optional, Union

from google.protobuf import descriptor_pb2
from google.protobuf import json_format

_T = descriptor_pb2.FieldDescriptorProto


class ScalarKind(IntEnum):
    """Protobuf field types, numbered as in `FieldDescriptorProto.Type`."""
    DOUBLE = _T.TYPE_DOUBLE
    FLOAT = _T.TYPE_FLOAT
    INT64 = _T.TYPE_INT64
    UINT64 = _T.TYPE_UINT64
    INT32 = _T.TYPE_INT32
    FIXED64 = _T.TYPE_FIXED64
    FIXED32 = _T.TYPE_FIXED32
    BOOL = _T.TYPE_BOOL
    STRING = _T.TYPE_STRING
    GROUP = _T.TYPE_GROUP
    MESSAGE = _T.TYPE_MESSAGE
    BYTES = _T.TYPE_BYTES
    UINT32 = _T.TYPE_UINT32
    ENUM = _T.TYPE_ENUM
    SFIXED32 = _T.TYPE_SFIXED32
    SFIXED64 = _T.TYPE_SFIXED64
    SINT32 = _T.TYPE_SINT32
    SINT64 = _T.TYPE_SINT64

    @property
    def proto_name(self) -> str:
        """Name as written in a .proto file, e.g. 'sfixed32'."""
        return self.name.lower()

    @property
    def is_numeric(self) -> bool:
        return self in NUMERIC_KINDS

    @classmethod
    def from_name(cls, name: str) -> 'ScalarKind':
        """
        Look up a kind by its .proto spelling.

        Raises:
            KeyError: if the name is not a protobuf field type
        """
        return cls[name.upper()]


NUMERIC_KINDS = frozenset([
    ScalarKind.DOUBLE, ScalarKind.FLOAT,
    ScalarKind.INT32, ScalarKind.INT64,
    ScalarKind.UINT32, ScalarKind.UINT64,
    ScalarKind.SINT32, ScalarKind.SINT64,
    ScalarKind.FIXED32, ScalarKind.FIXED64,
    ScalarKind.SFIXED32, ScalarKind.SFIXED64,
])


class WellKnownFormat(Enum):
    """Semantic string shapes selectable through the `well_known` oneof."""
    ADDRESS = 'address'
    EMAIL = 'email'
    HOSTNAME = 'hostname'
    IP = 'ip'
    IPV4 = 'ipv4'
    IPV6 = 'ipv6'
    URI = 'uri'
    URI_REF = 'uri_ref'


@dataclass(frozen=True)
class BoolRules:
    const: Optional[bool] = None


@dataclass(frozen=True)
class BytesRules:
    const: Optional[bytes] = None
    len: Optional[int] = None
    min_len: Optional[int] = None
    max_len: Optional[int] = None
    pattern: Optional[str] = None
    prefix: Optional[bytes] = None
    suffix: Optional[bytes] = None
    contains: Optional[bytes] = None
    in_: List[bytes] = field(default_factory=list)
    not_in: List[bytes] = field(default_factory=list)
    well_known: Optional[WellKnownFormat] = None


@dataclass(frozen=True)
class StringRules:
    const: Optional[str] = None
    len: Optional[int] = None
    min_len: Optional[int] = None
    max_len: Optional[int] = None
    len_bytes: Optional[int] = None
    min_bytes: Optional[int] = None
    max_bytes: Optional[int] = None
    pattern: Optional[str] = None
    prefix: Optional[str] = None
    suffix: Optional[str] = None
    contains: Optional[str] = None
    not_contains: Optional[str] = None
    in_: List[str] = field(default_factory=list)
    not_in: List[str] = field(default_factory=list)
    well_known: Optional[WellKnownFormat] = None


@dataclass(frozen=True)
class NumericRules:
    """
    Rules for a numeric kind, kept in their raw mapping form.

    Numeric translation is done by a collaborator outside this package, so
    the values are passed through untouched.
    """
    type_name: str
    params: Dict[str, Any] = field(default_factory=dict)


ScalarRules = Union[BoolRules, BytesRules, StringRules, NumericRules]


@dataclass(frozen=True)
class FieldConstraints:
    """
    The constraint set attached to one field.

    Attributes:
        ignore_empty: Suppress the "required" outcome the rules would imply
        rules: The type-specific rule set, or None
    """
    ignore_empty: bool = False
    rules: Optional[ScalarRules] = None

    @property
    def bool_rules(self) -> Optional[BoolRules]:
        return self.rules if isinstance(self.rules, BoolRules) else None

    @property
    def bytes_rules(self) -> Optional[BytesRules]:
        return self.rules if isinstance(self.rules, BytesRules) else None

    @property
    def string_rules(self) -> Optional[StringRules]:
        return self.rules if isinstance(self.rules, StringRules) else None

    @property
    def numeric_rules(self) -> Optional[NumericRules]:
        return self.rules if isinstance(self.rules, NumericRules) else None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'FieldConstraints':
        """
        Build a constraint set from the protobuf JSON mapping of FieldRules.

        Both camelCase (`minLen`) and snake_case (`min_len`) keys are accepted.
        At most one type key (`bool`, `bytes`, `string` or a numeric type
        name) is expected; unknown keys are ignored.

        Examples:
            >>> FieldConstraints.from_dict({'string': {'minLen': '3'}}).string_rules.min_len
            3
        """
        data = _normalize_keys(data)
        ignore_empty = bool(data.get('ignore_empty', False))

        rules: Optional[ScalarRules] = None
        if 'bool' in data:
            rules = _parse_bool_rules(_normalize_keys(data['bool']))
        elif 'bytes' in data:
            rules = _parse_bytes_rules(_normalize_keys(data['bytes']))
        elif 'string' in data:
            rules = _parse_string_rules(_normalize_keys(data['string']))
        else:
            for kind in sorted(NUMERIC_KINDS):
                if kind.proto_name in data:
                    rules = NumericRules(kind.proto_name, _normalize_keys(data[kind.proto_name]))
                    break

        return cls(ignore_empty=ignore_empty, rules=rules)

    @classmethod
    def from_proto(cls, message: Any) -> 'FieldConstraints':
        """
        Build a constraint set from a FieldRules-shaped protobuf message.

        Only fields that are set on the message appear in the JSON form, so
        rule presence carries over unchanged.
        """
        return cls.from_dict(json_format.MessageToDict(message, preserving_proto_field_name=True))


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def _snake_case(name: str) -> str:
    out = []
    for ch in name:
        if ch.isupper():
            out.append('_')
            out.append(ch.lower())
        else:
            out.append(ch)
    return ''.join(out)


def _normalize_keys(data: Mapping[str, Any]) -> Dict[str, Any]:
    return {_snake_case(k): v for k, v in data.items()}


def _opt_int(data: Dict[str, Any], key: str) -> Optional[int]:
    # 64-bit integers are strings in the JSON mapping
    value = data.get(key)
    return int(value) if value is not None else None


def _opt_bytes(data: Dict[str, Any], key: str) -> Optional[bytes]:
    value = data.get(key)
    return _decode_bytes(value) if value is not None else None


def _decode_bytes(value: Any) -> bytes:
    if isinstance(value, bytes):
        return value
    # The JSON mapping accepts both standard and URL-safe base64
    text = str(value).replace('-', '+').replace('_', '/')
    return base64.b64decode(text + '=' * (-len(text) % 4))


def _well_known(data: Dict[str, Any]) -> Optional[WellKnownFormat]:
    for fmt in WellKnownFormat:
        if fmt.value in data:
            return fmt
    return None


def _parse_bool_rules(data: Dict[str, Any]) -> BoolRules:
    const = data.get('const')
    return BoolRules(const=bool(const) if const is not None else None)


def _parse_bytes_rules(data: Dict[str, Any]) -> BytesRules:
    return BytesRules(
        const=_opt_bytes(data, 'const'),
        len=_opt_int(data, 'len'),
        min_len=_opt_int(data, 'min_len'),
        max_len=_opt_int(data, 'max_len'),
        pattern=data.get('pattern'),
        prefix=_opt_bytes(data, 'prefix'),
        suffix=_opt_bytes(data, 'suffix'),
        contains=_opt_bytes(data, 'contains'),
        in_=[_decode_bytes(v) for v in data.get('in', [])],
        not_in=[_decode_bytes(v) for v in data.get('not_in', [])],
        well_known=_well_known(data),
    )


def _parse_string_rules(data: Dict[str, Any]) -> StringRules:
    return StringRules(
        const=data.get('const'),
        len=_opt_int(data, 'len'),
        min_len=_opt_int(data, 'min_len'),
        max_len=_opt_int(data, 'max_len'),
        len_bytes=_opt_int(data, 'len_bytes'),
        min_bytes=_opt_int(data, 'min_bytes'),
        max_bytes=_opt_int(data, 'max_bytes'),
        pattern=data.get('pattern'),
        prefix=data.get('prefix'),
        suffix=data.get('suffix'),
        contains=data.get('contains'),
        not_contains=data.get('not_contains'),
        in_=list(data.get('in', [])),
        not_in=list(data.get('not_in', [])),
        well_known=_well_known(data),
    )
