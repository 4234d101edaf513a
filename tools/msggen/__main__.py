"""
CLI entry point for msggen (IPC message header generator).

Usage:
    python3 -m tools.msggen lib/ipc/messages.yaml --out gen/ipc_messages.h
    python3 -m tools.msggen lib/ipc/messages.yaml --list-tags
"""

import argparse
import os
import sys

from .schema import parse_schema_yaml, SchemaError, ValidationError
from .decls import enum_name, message_tags
from .emitter import generate


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="IPC message header generator"
    )
    parser.add_argument("schema", help="Input message schema .yaml file")
    parser.add_argument("--out", help="Output header (default: stdout)")
    parser.add_argument("--list-tags", action="store_true",
                        help="Print the enum tags, one per line, and exit")
    args = parser.parse_args(argv)

    with open(args.schema) as f:
        yaml_str = f.read()

    try:
        schema = parse_schema_yaml(yaml_str)
        if args.list_tags:
            for tag in message_tags(schema):
                print(tag)
            return 0
        code = generate(schema)
    except (SchemaError, ValidationError) as e:
        print(f"error: {args.schema}: {e}", file=sys.stderr)
        return 1

    if not args.out:
        sys.stdout.write(code)
        return 0

    outdir = os.path.dirname(args.out)
    if outdir:
        os.makedirs(outdir, exist_ok=True)
    with open(args.out, "w") as f:
        f.write(code)

    count = len(schema.structs) + len(schema.protos)
    print(f"  wrote {args.out}")
    print(f"\nGenerated {count} messages for port '{schema.port_name}' "
          f"({enum_name(schema.port_name)})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
