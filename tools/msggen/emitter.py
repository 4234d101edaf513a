"""
Header emitter: formats HeaderDecls as C header text.
"""

from typing import List

from .decls import EnumDecl, HeaderDecls, Include, StructDecl, build_declarations
from .schema import Schema

NOTICE = "// Autogenerated - do not modify"
INDENT = "  "


def _emit_include(inc: Include) -> str:
    if inc.system:
        return f"#include <{inc.path}>"
    return f'#include "{inc.path}"'


def _emit_struct(decl: StructDecl) -> List[str]:
    lines = ["typedef struct {"]
    for f in decl.fields:
        lines.append(f"{INDENT}{f};")
    lines.append(f"}} {decl.name};")
    return lines


def _emit_enum(decl: EnumDecl) -> List[str]:
    lines = ["typedef enum {"]
    for member in decl.members:
        lines.append(f"{INDENT}{member},")
    lines.append(f"}} {decl.name};")
    return lines


def emit_header(decls: HeaderDecls) -> str:
    """Format a HeaderDecls. Output always ends with a single newline."""
    lines = ["#pragma once", "", NOTICE, ""]

    if decls.includes:
        lines.extend(_emit_include(inc) for inc in decls.includes)
        lines.append("")

    if decls.typedefs:
        for td in decls.typedefs:
            lines.append(f"typedef {td.c_type} {td.alias};")
        lines.append("")

    for s in decls.structs:
        lines.extend(_emit_struct(s))
        lines.append("")

    lines.extend(_emit_enum(decls.enum))
    return "\n".join(lines) + "\n"


def generate(schema: Schema) -> str:
    """Generate the message header for ``schema``. Pure and deterministic."""
    return emit_header(build_declarations(schema))
