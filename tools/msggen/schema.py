"""
YAML message schema parser and validator for msggen.

Parses a YAML schema into a Schema dataclass, validating required fields
and types.
"""

import yaml
from dataclasses import dataclass, field
from typing import List, Optional


class SchemaError(Exception):
    """Raised when a schema is structurally invalid."""
    pass


class ValidationError(Exception):
    """Raised when a name is too short to derive a tag from."""
    pass


@dataclass(frozen=True)
class Struct:
    """A message struct. ``suffix`` is the part dropped to form its tag."""
    name: str
    fields: List[str]
    suffix: Optional[str] = None


@dataclass(frozen=True)
class Proto:
    """A protocol message, e.g. ``fwpb_wipe_state_cmd``."""
    name: str
    namespace: Optional[str] = None
    short_name: Optional[str] = None


@dataclass(frozen=True)
class Schema:
    """Parsed message schema."""
    port_name: str
    proto_headers: List[str] = field(default_factory=list)
    structs: List[Struct] = field(default_factory=list)
    protos: List[Proto] = field(default_factory=list)


def _require(data: dict, key: str, context: str = "root") -> object:
    """Require a key in a dict, raising SchemaError if missing."""
    if key not in data or data[key] is None:
        raise SchemaError(
            f"Missing required field '{key}' in {context} section"
        )
    return data[key]


def _str(value: object, context: str) -> str:
    if not isinstance(value, str):
        raise SchemaError(f"{context} must be a string, got {value!r}")
    return value


def _optional_str(data: dict, key: str, context: str) -> Optional[str]:
    if data.get(key) is None:
        return None
    return _str(data[key], f"{context}.{key}")


def _list(data: dict, key: str, context: str) -> list:
    """Optional list field, defaulting to empty."""
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise SchemaError(f"'{key}' in {context} section must be a list")
    return value


def _parse_struct(entry: object, index: int) -> Struct:
    context = f"messages.structs[{index}]"
    if not isinstance(entry, dict):
        raise SchemaError(f"{context} must be a mapping with name and fields")

    name = _str(_require(entry, "name", context), f"{context}.name")
    raw_fields = _require(entry, "fields", context)
    if not isinstance(raw_fields, list):
        raise SchemaError(f"{context}.fields must be a list")
    fields = [_str(f, f"{context}.fields[{i}]") for i, f in enumerate(raw_fields)]

    return Struct(name=name, fields=fields,
                  suffix=_optional_str(entry, "suffix", context))


def _parse_proto(entry: object, index: int) -> Proto:
    context = f"messages.protos[{index}]"
    # Bare strings are accepted as shorthand for {name: ...}.
    if isinstance(entry, str):
        return Proto(name=entry)
    if not isinstance(entry, dict):
        raise SchemaError(f"{context} must be a mapping or a string")

    return Proto(
        name=_str(_require(entry, "name", context), f"{context}.name"),
        namespace=_optional_str(entry, "namespace", context),
        short_name=_optional_str(entry, "short_name", context),
    )


def schema_from_dict(data: dict) -> Schema:
    """Build a Schema from an already-loaded mapping.

    Raises:
        SchemaError: If required fields are missing or mistyped.
    """
    if not isinstance(data, dict):
        raise SchemaError("Schema root must be a mapping")

    port_name = _str(_require(data, "port_name"), "port_name")
    if not port_name.strip():
        raise SchemaError("port_name must not be empty")

    proto_headers = [_str(h, f"proto_headers[{i}]")
                     for i, h in enumerate(_list(data, "proto_headers", "root"))]

    # ---- messages section (optional) ----
    messages = data.get("messages")
    if messages is None:
        messages = {}
    if not isinstance(messages, dict):
        raise SchemaError("messages section must be a mapping")

    structs = [_parse_struct(s, i)
               for i, s in enumerate(_list(messages, "structs", "messages"))]
    protos = [_parse_proto(p, i)
              for i, p in enumerate(_list(messages, "protos", "messages"))]

    return Schema(
        port_name=port_name,
        proto_headers=proto_headers,
        structs=structs,
        protos=protos,
    )


def parse_schema_yaml(yaml_str: str) -> Schema:
    """Parse a YAML schema string into a Schema.

    Args:
        yaml_str: YAML string containing the message schema.

    Returns:
        Schema with all parsed fields.

    Raises:
        SchemaError: If the YAML is invalid or required fields are missing.
    """
    if not yaml_str or not yaml_str.strip():
        raise SchemaError("Empty YAML input")

    try:
        data = yaml.safe_load(yaml_str)
    except yaml.YAMLError as e:
        raise SchemaError(f"Invalid YAML: {e}")

    return schema_from_dict(data)
