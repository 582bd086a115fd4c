from __future__ import annotations

import io
import keyword
from typing import AbstractSet, Callable, Final, Optional, TextIO

from .validate import OpcodeTable


def camelize(identifier: str) -> str:
    return "".join(seg.capitalize() for seg in identifier.split("_"))


def py_ident(name: str, reserved: AbstractSet[str] = frozenset()) -> str:
    if keyword.iskeyword(name) or name in reserved:
        return f"{name}_"
    return name


def py_docstring(text: str) -> str:
    return text.replace("\\", "\\\\").replace('"', '\\"')


RUST_PRELUDE: Final[str] = """\
use crate::vm_types::{
\tCell,
\tread_cell,
\twrite_cell
};

use byteorder::{
\tReadBytesExt,
\tWriteBytesExt
};
use std::io::{
\tError as IoError,
\tErrorKind as IoErrorKind,
\tResult as IoResult
};
"""


def gen_rust(table: OpcodeTable, f: TextIO, docs: bool = True) -> None:
    p = lambda *args, **kwargs: print(*args, **kwargs, file=f)

    p(RUST_PRELUDE)
    p("/// Enumeration of every possible SourcePawn instruction.")
    p("/// ")
    p("/// This type is generated automatically by a script.")
    p("#[derive(Debug, Clone, Copy, PartialEq, Eq)]")
    p("#[repr(C)]")
    p("pub enum Instruction {")
    for entry in table.sized:
        name = camelize(entry.identifier)
        args = table.args(entry.identifier)
        desc = table.description(entry.identifier)
        if docs and desc:
            for line in desc.splitlines():
                p(f"\t/// {line}")
        if args:
            p(f"\t{name} {{")
            for arg in args:
                p(f"\t\t{arg}: Cell,")
            p("\t},")
        else:
            p(f"\t{name},")
    p("}")
    p()

    p("impl Instruction {")

    p("\tpub fn read_from(r: &mut impl ReadBytesExt) -> IoResult<Self> {")
    p("\t\tmatch read_cell(r)? {")
    for entry in table.sized:
        name = camelize(entry.identifier)
        args = table.args(entry.identifier)
        if args:
            p(f"\t\t\t{entry.position} => {{")
            for arg in args:
                p(f"\t\t\t\tlet {arg} = read_cell(r)?;")
            p(f"\t\t\t\tOk(Self::{name} {{")
            for arg in args:
                p(f"\t\t\t\t\t{arg},")
            p("\t\t\t\t})")
            p("\t\t\t}")
        else:
            p(f"\t\t\t{entry.position} => Ok(Self::{name}),")
    p("\t\t\topcode => Err(IoError::new(")
    p('\t\t\t\tIoErrorKind::InvalidData, format!("invalid opcode: {opcode:?}")')
    p("\t\t\t))")
    p("\t\t}")
    p("\t}")
    p()

    p("\tpub fn write_to(&self, w: &mut impl WriteBytesExt) -> IoResult<()> {")
    p("\t\tmatch self {")
    for entry in table.sized:
        name = camelize(entry.identifier)
        args = table.args(entry.identifier)
        if args:
            p(f"\t\t\tSelf::{name} {{ {''.join(f'{a}, ' for a in args)}}} => {{")
            p(f"\t\t\t\twrite_cell(w, {entry.position})?;")
            for arg in args:
                p(f"\t\t\t\twrite_cell(w, *{arg})?;")
            p("\t\t\t\tOk(())")
            p("\t\t\t}")
        else:
            p(f"\t\t\tSelf::{name} => write_cell(w, {entry.position}),")
    p("\t\t}")
    p("\t}")

    p("}")


PYTHON_PRELUDE: Final[str] = '''\
# Generated by smx-opgen from the SourcePawn opcode list. Do not edit.

from dataclasses import dataclass, fields
from typing import BinaryIO, ClassVar

from smx_opgen.cells import Cell, InvalidOpcode, read_cell, write_cell


class Instruction:
    """Every possible SourcePawn instruction derives from this."""

    __slots__ = ()
    opcode: ClassVar[int]

    def write_to(self, w: BinaryIO) -> None:
        write_cell(w, self.opcode)
        for field in fields(self):
            write_cell(w, getattr(self, field.name))
'''


# module-level names of the generated Python codec
PY_MODULE_NAMES: Final[frozenset[str]] = frozenset(
    {
        "BinaryIO",
        "Cell",
        "ClassVar",
        "InvalidOpcode",
        "Instruction",
        "OPCODES",
        "dataclass",
        "fields",
        "read_cell",
        "read_from",
        "write_cell",
    }
)
# attributes every generated instruction class inherits
PY_CLASS_NAMES: Final[frozenset[str]] = frozenset({"opcode", "write_to"})


def gen_python(table: OpcodeTable, f: TextIO, docs: bool = True) -> None:
    p = lambda *args, **kwargs: print(*args, **kwargs, file=f)

    p(PYTHON_PRELUDE)
    for entry in table.sized:
        name = py_ident(camelize(entry.identifier), PY_MODULE_NAMES)
        args = table.args(entry.identifier)
        desc = table.description(entry.identifier)
        p()
        p("@dataclass(frozen=True)")
        p(f"class {name}(Instruction):")
        if docs and desc:
            p(f'    """{py_docstring(desc)}"""')
            p()
        p(f"    opcode: ClassVar[int] = {entry.position}")
        if args:
            p()
            for arg in args:
                p(f"    {py_ident(arg, PY_CLASS_NAMES)}: Cell")
        p()

    p()
    p("OPCODES: dict[int, type[Instruction]] = {")
    for entry in table.sized:
        p(f"    {entry.position}: {py_ident(camelize(entry.identifier), PY_MODULE_NAMES)},")
    p("}")
    p()
    p()
    p("def read_from(r: BinaryIO) -> Instruction:")
    p("    opcode = read_cell(r)")
    p("    cls = OPCODES.get(opcode)")
    p("    if cls is None:")
    p("        raise InvalidOpcode(opcode)")
    p("    return cls(*[read_cell(r) for _ in fields(cls)])")


GENERATORS: Final[dict[str, Callable[[OpcodeTable, TextIO, bool], None]]] = {
    "rust": gen_rust,
    "python": gen_python,
}

TARGETS: Final[tuple[str, ...]] = tuple(GENERATORS)


def generate(
    table: OpcodeTable,
    target: str = "rust",
    f: Optional[TextIO] = None,
    docs: bool = True,
):
    try:
        gen = GENERATORS[target]
    except KeyError:
        raise ValueError(f"unknown target {target!r}, expected one of {TARGETS}")
    if f is None:
        f = io.StringIO()
        gen(table, f, docs)
        return f.getvalue()
    gen(table, f, docs)
    return None
