"""
Pytest configuration and shared fixtures for the translator tests.

Key concepts:
    - Every translator call takes an explicit Context; the `ctx` fixture
      provides one that logs to this module's logger
    - Protobuf rule messages are built at runtime from a hand-written
      FileDescriptorProto, so no protoc run is needed
"""

import logging
from pathlib import Path
from typing import List, Optional, Tuple

import pytest
from google.protobuf import descriptor_pb2, descriptor_pool, message_factory

from protoc_gen_jsonschema.context import Context
from protoc_gen_jsonschema.rules import FieldConstraints, ScalarKind
from protoc_gen_jsonschema.schema import Schema, SchemaType


# =============================================================================
# Path Constants
# =============================================================================

# Repository root directory
REPO_ROOT = Path(__file__).parent.parent.absolute()

# Tests directory
TESTS_DIR = Path(__file__).parent.absolute()


# =============================================================================
# Utility Functions
# =============================================================================

def build_rules_file() -> descriptor_pb2.FileDescriptorProto:
    """
    Describe a cut-down copy of the validate.proto rule messages.

    Only the fields exercised by the tests are present; names and numbers
    follow buf.validate.
    """
    F = descriptor_pb2.FieldDescriptorProto
    fdp = descriptor_pb2.FileDescriptorProto(
        name='testing/rules.proto', package='testing', syntax='proto2')

    bool_rules = fdp.message_type.add(name='BoolRules')
    bool_rules.field.add(name='const', number=1, type=F.TYPE_BOOL, label=F.LABEL_OPTIONAL)

    bytes_rules = fdp.message_type.add(name='BytesRules')
    bytes_rules.field.add(name='const', number=1, type=F.TYPE_BYTES, label=F.LABEL_OPTIONAL)
    bytes_rules.field.add(name='min_len', number=2, type=F.TYPE_UINT64, label=F.LABEL_OPTIONAL)
    bytes_rules.field.add(name='max_len', number=3, type=F.TYPE_UINT64, label=F.LABEL_OPTIONAL)
    bytes_rules.field.add(name='prefix', number=5, type=F.TYPE_BYTES, label=F.LABEL_OPTIONAL)

    string_rules = fdp.message_type.add(name='StringRules')
    string_rules.oneof_decl.add(name='well_known')
    string_rules.field.add(name='const', number=1, type=F.TYPE_STRING, label=F.LABEL_OPTIONAL)
    string_rules.field.add(name='min_len', number=2, type=F.TYPE_UINT64, label=F.LABEL_OPTIONAL)
    string_rules.field.add(name='max_len', number=3, type=F.TYPE_UINT64, label=F.LABEL_OPTIONAL)
    string_rules.field.add(name='min_bytes', number=4, type=F.TYPE_UINT64, label=F.LABEL_OPTIONAL)
    string_rules.field.add(name='pattern', number=6, type=F.TYPE_STRING, label=F.LABEL_OPTIONAL)
    string_rules.field.add(name='prefix', number=7, type=F.TYPE_STRING, label=F.LABEL_OPTIONAL)
    string_rules.field.add(name='contains', number=9, type=F.TYPE_STRING, label=F.LABEL_OPTIONAL)
    string_rules.field.add(name='in', number=10, type=F.TYPE_STRING, label=F.LABEL_REPEATED)
    string_rules.field.add(name='not_in', number=11, type=F.TYPE_STRING, label=F.LABEL_REPEATED)
    string_rules.field.add(name='email', number=12, type=F.TYPE_BOOL,
                           label=F.LABEL_OPTIONAL, oneof_index=0)
    string_rules.field.add(name='uri_ref', number=18, type=F.TYPE_BOOL,
                           label=F.LABEL_OPTIONAL, oneof_index=0)

    field_rules = fdp.message_type.add(name='FieldRules')
    field_rules.oneof_decl.add(name='type')
    field_rules.field.add(name='bool', number=13, type=F.TYPE_MESSAGE, label=F.LABEL_OPTIONAL,
                          type_name='.testing.BoolRules', oneof_index=0)
    field_rules.field.add(name='string', number=14, type=F.TYPE_MESSAGE, label=F.LABEL_OPTIONAL,
                          type_name='.testing.StringRules', oneof_index=0)
    field_rules.field.add(name='bytes', number=15, type=F.TYPE_MESSAGE, label=F.LABEL_OPTIONAL,
                          type_name='.testing.BytesRules', oneof_index=0)
    field_rules.field.add(name='ignore_empty', number=26, type=F.TYPE_BOOL, label=F.LABEL_OPTIONAL)

    return fdp


def string_schema(**attrs) -> Schema:
    """A string-typed schema with the given attributes set."""
    return Schema(type=SchemaType.STRING, **attrs)


class NumericStub:
    """Records calls made to the numeric translator collaborator."""

    def __init__(self):
        self.calls: List[Tuple[ScalarKind, Optional[FieldConstraints]]] = []

    def __call__(self, ctx: Context, kind: ScalarKind,
                 constraints: Optional[FieldConstraints]) -> Tuple[Schema, bool]:
        self.calls.append((kind, constraints))
        return Schema(type=SchemaType.INTEGER), True


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def ctx() -> Context:
    """Context without a numeric translator."""
    return Context(logger=logging.getLogger('tests'))


@pytest.fixture
def numeric_stub() -> NumericStub:
    return NumericStub()


@pytest.fixture
def numeric_ctx(numeric_stub: NumericStub) -> Context:
    """Context whose numeric translator records its calls."""
    return Context(logger=logging.getLogger('tests'), numeric=numeric_stub)


@pytest.fixture(scope="session")
def field_rules_class():
    """Message class for the cut-down FieldRules message."""
    pool = descriptor_pool.DescriptorPool()
    pool.AddSerializedFile(build_rules_file().SerializeToString())
    return message_factory.GetMessageClass(pool.FindMessageTypeByName('testing.FieldRules'))


# =============================================================================
# Pytest Markers
# =============================================================================

def pytest_configure(config):
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "regex: marks tests of the regular expression rewriter"
    )
    config.addinivalue_line(
        "markers", "translator: marks tests of the scalar translators"
    )
    config.addinivalue_line(
        "markers", "cli: marks tests of the command line front end"
    )
