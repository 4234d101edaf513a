"""
Declarations: the typed intermediate form a header is built from.

``build_declarations()`` derives every enum tag and validates the schema;
the emitter only formats what it is given.
"""

from collections import Counter
from dataclasses import dataclass
from typing import List

from .schema import Proto, Schema, SchemaError, Struct, ValidationError

# Characters dropped from a struct name when it declares no explicit suffix.
SUFFIX_LEN = 2

TAG_PREFIX = "IPC_"
PROTO_TAG_PREFIX = "IPC_PROTO_"
SENTINEL_SUFFIX = "_END"
PORT_TYPE = "ipc_port_t"


@dataclass(frozen=True)
class Include:
    path: str
    system: bool = False   # <path> rather than "path"


@dataclass(frozen=True)
class Typedef:
    c_type: str
    alias: str


@dataclass(frozen=True)
class StructDecl:
    name: str
    fields: List[str]   # declarations without the trailing ';'


@dataclass(frozen=True)
class EnumDecl:
    name: str
    members: List[str]


@dataclass(frozen=True)
class HeaderDecls:
    includes: List[Include]
    typedefs: List[Typedef]
    structs: List[StructDecl]
    enum: EnumDecl


# ── Tag derivation ───────────────────────────────────────────────────

def struct_tag(struct: Struct) -> str:
    """``FooMsg`` -> ``IPC_FOOM``; with ``suffix="Msg"`` -> ``IPC_FOO``."""
    if struct.suffix is None:
        if len(struct.name) < SUFFIX_LEN:
            raise ValidationError(
                f"struct name {struct.name!r} is shorter than the "
                f"{SUFFIX_LEN}-character suffix it must carry")
        body = struct.name.upper()[:-SUFFIX_LEN]
    else:
        if len(struct.name) < len(struct.suffix):
            raise ValidationError(
                f"struct name {struct.name!r} is shorter than its "
                f"suffix {struct.suffix!r}")
        if not struct.name.endswith(struct.suffix):
            raise SchemaError(
                f"struct name {struct.name!r} does not end with its "
                f"suffix {struct.suffix!r}")
        body = struct.name[:len(struct.name) - len(struct.suffix)].upper()

    if not body:
        raise SchemaError(f"struct {struct.name!r} derives an empty tag")
    return TAG_PREFIX + body


def proto_tag(proto: Proto) -> str:
    """``fwpb_wipe_state_cmd`` -> ``IPC_PROTO_WIPE_STATE_CMD``."""
    if proto.short_name is not None:
        body = proto.short_name.upper()
    else:
        # First token is the namespace.
        body = "_".join(proto.name.upper().split("_")[1:])

    if not body:
        raise SchemaError(f"proto {proto.name!r} derives an empty tag")
    return PROTO_TAG_PREFIX + body


def sentinel_tag(port_name: str) -> str:
    return f"{TAG_PREFIX}{port_name.upper()}{SENTINEL_SUFFIX}"


def enum_name(port_name: str) -> str:
    return f"ipc_{port_name}_msg_t"


def message_tags(schema: Schema) -> List[str]:
    """
    All enum members in order: structs, protos, then the sentinel.

    Raises SchemaError if any two tags collide.
    """
    if not schema.port_name.strip():
        raise SchemaError("port_name must not be empty")

    tags = [struct_tag(s) for s in schema.structs]
    tags.extend(proto_tag(p) for p in schema.protos)
    tags.append(sentinel_tag(schema.port_name))

    dupes = sorted(t for t, n in Counter(tags).items() if n > 1)
    if dupes:
        raise SchemaError(f"duplicate enum tags: {', '.join(dupes)}")
    return tags


# ── IR construction ──────────────────────────────────────────────────

def _struct_decl(struct: Struct) -> StructDecl:
    if not struct.fields:
        raise SchemaError(f"struct {struct.name!r} has no fields")

    fields = []
    for f in struct.fields:
        decl = f.strip().rstrip(";").rstrip()
        if not decl:
            raise SchemaError(f"struct {struct.name!r} has an empty field")
        fields.append(decl)
    return StructDecl(name=struct.name, fields=fields)


def build_declarations(schema: Schema) -> HeaderDecls:
    """
    Validate ``schema`` and lower it to a HeaderDecls.

    Raises SchemaError or ValidationError; nothing is built on failure.
    """
    members = message_tags(schema)

    names = Counter(s.name for s in schema.structs)
    dupes = sorted(n for n, count in names.items() if count > 1)
    if dupes:
        raise SchemaError(f"duplicate struct names: {', '.join(dupes)}")

    # Struct typedefs share the ordinary identifier namespace with the
    # port typedef, the enum type and its members.
    reserved = {PORT_TYPE, enum_name(schema.port_name)}
    reserved.update(members)
    clashes = sorted(n for n in names if n in reserved)
    if clashes:
        raise SchemaError(
            f"struct names clash with generated identifiers: {', '.join(clashes)}")

    includes = [Include(path=h) for h in schema.proto_headers]
    includes.append(Include(path="stdint.h", system=True))

    return HeaderDecls(
        includes=includes,
        typedefs=[Typedef(c_type="uint32_t", alias=PORT_TYPE)],
        structs=[_struct_decl(s) for s in schema.structs],
        enum=EnumDecl(name=enum_name(schema.port_name), members=members),
    )
