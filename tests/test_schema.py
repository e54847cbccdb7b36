"""
Tests for the JSON Schema object model.
"""

import json

from protoc_gen_jsonschema.schema import (
    Schema,
    SchemaType,
    StringFormat,
    all_of,
    any_of,
    new_boolean_schema,
    new_string_schema,
    not_,
    one_of,
)


class TestSchema:

    def test_empty_schema(self):
        assert Schema().to_dict() == {}

    def test_keyword_spelling_and_order(self):
        schema = Schema(
            type=SchemaType.STRING,
            title='t',
            const='c',
            enum=['c'],
            pattern='^c',
            min_length=1,
            max_length=2,
            format=StringFormat.URI_REFERENCE,
        )
        out = schema.to_dict()
        assert list(out) == [
            'title', 'type', 'const', 'enum', 'format', 'minLength', 'maxLength', 'pattern',
        ]
        assert out['format'] == 'uri-reference'
        assert out['type'] == 'string'

    def test_false_and_empty_const_are_kept(self):
        assert new_boolean_schema().to_dict() == {'type': 'boolean'}
        schema = new_boolean_schema()
        schema.const = False
        assert schema.to_dict() == {'type': 'boolean', 'const': False}
        schema = new_string_schema()
        schema.const = ''
        assert schema.to_dict() == {'type': 'string', 'const': ''}

    def test_to_json(self):
        schema = new_string_schema()
        schema.min_length = 3
        assert json.loads(schema.to_json()) == {'type': 'string', 'minLength': 3}


class TestComposition:

    def test_all_of(self):
        a, b = new_string_schema(), new_boolean_schema()
        assert all_of(a, b).to_dict() == {'allOf': [{'type': 'string'}, {'type': 'boolean'}]}

    def test_single_schema_is_not_wrapped(self):
        a = new_string_schema()
        assert all_of(a) is a
        assert any_of(a) is a

    def test_any_of(self):
        a, b = new_string_schema(), new_string_schema()
        b.format = StringFormat.IPV6
        assert any_of(a, b).to_dict() == {
            'anyOf': [{'type': 'string'}, {'type': 'string', 'format': 'ipv6'}],
        }

    def test_one_of(self):
        assert one_of(new_string_schema()).to_dict() == {'oneOf': [{'type': 'string'}]}

    def test_not(self):
        inner = new_string_schema()
        inner.enum = ['x']
        assert not_(inner).to_dict() == {'not': {'type': 'string', 'enum': ['x']}}

    def test_nested(self):
        inner = new_string_schema()
        inner.pattern = 'a'
        schema = all_of(new_string_schema(), not_(inner))
        assert schema.to_dict() == {
            'allOf': [{'type': 'string'}, {'not': {'type': 'string', 'pattern': 'a'}}],
        }
