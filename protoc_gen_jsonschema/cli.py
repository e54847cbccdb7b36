#!/usr/bin/env python3
# kate: replace-tabs on; indent-width 4;

"""
Command line front end.

Translates the rule set of a single scalar field and prints the resulting
schema together with the required flag:

    $ echo '{"string": {"prefix": "abc"}}' | python -m protoc_gen_jsonschema string
    {"required": true, "schema": {"type": "string", "pattern": "^abc"}}

Any fatal translation error is reported on stderr and the exit status is 1;
nothing is written to stdout in that case.

Environment:
    PROTOC_GEN_JSONSCHEMA_DEBUG: set to 1 to enable debug tracing
"""

import argparse
import json
import logging
import os
import sys
from typing import List, Optional

from .context import Context, GenerationError
from .rules import FieldConstraints, ScalarKind
from .scalar import schema_for_scalar

logger = logging.getLogger(__name__)


def _parse_kind(name: str) -> ScalarKind:
    try:
        return ScalarKind.from_name(name)
    except KeyError:
        raise argparse.ArgumentTypeError(f"unknown protobuf type {name!r}")


def _load_rules(path: Optional[str]) -> Optional[FieldConstraints]:
    if path is None or path == '-':
        text = sys.stdin.read()
    else:
        with open(path, 'r', encoding='utf-8') as f:
            text = f.read()

    if not text.strip():
        return None
    data = json.loads(text)
    if not isinstance(data, dict):
        raise ValueError("rules must be a JSON object")
    return FieldConstraints.from_dict(data)


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog='protoc-gen-jsonschema-scalar',
        description='Translate validation rules of a scalar protobuf field into JSON Schema'
    )
    parser.add_argument('kind', type=_parse_kind,
                        help='Protobuf type of the field (e.g. string, bytes, bool)')
    parser.add_argument('--rules', '-r', default=None,
                        help='JSON file with the field rules (default: stdin)')
    parser.add_argument('--indent', type=int, default=None,
                        help='Indent the output document')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Enable debug tracing on stderr')

    args = parser.parse_args(argv)

    verbose = args.verbose or bool(int(os.getenv('PROTOC_GEN_JSONSCHEMA_DEBUG', default=0)))
    logging.basicConfig(
        stream=sys.stderr,
        level=logging.DEBUG if verbose else logging.WARNING,
        format='%(name)s: %(message)s',
    )

    try:
        constraints = _load_rules(args.rules)
    except (OSError, ValueError) as e:
        print(f"error: failed to load rules: {e}", file=sys.stderr)
        return 1

    try:
        schema, required = schema_for_scalar(Context(), args.kind, constraints)
    except GenerationError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    logger.debug("translated %s field, required=%s", args.kind.proto_name, required)
    document = {'required': required, 'schema': schema.to_dict()}
    print(json.dumps(document, indent=args.indent))
    return 0


if __name__ == '__main__':
    sys.exit(main())
