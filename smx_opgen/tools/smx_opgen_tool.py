import argparse
import io
import os
import sys

from path import Path
from rich.markup import escape

from smx_opgen.catalog import VARIABLE_LENGTH_OPCODES
from smx_opgen.codegen import TARGETS, generate
from smx_opgen.errors import OpcodeGenError
from smx_opgen.header import read_opcode_list
from smx_opgen.highlight import src_str_term256
from smx_opgen.listing import format_listing
from smx_opgen.utils import eprint, null_print
from smx_opgen.validate import unused_catalog_entries, validate


def real_main(args) -> int:
    dprint = eprint if args.verbose else null_print

    if args.header == "-":
        src = sys.stdin
        if isinstance(src, io.TextIOWrapper):
            src.reconfigure(encoding="utf-8")
    else:
        src = Path(args.header)
    variable_length = frozenset(args.variable_length or VARIABLE_LENGTH_OPCODES)
    try:
        entries = read_opcode_list(src)
        dprint(f"read {len(entries)} opcode list entries from {escape(args.header)}")
        table = validate(entries, variable_length=variable_length)
    except (OpcodeGenError, OSError, UnicodeDecodeError) as e:
        eprint(f"[bold red]error:[/bold red] {escape(str(e))}")
        return 1

    dprint(f"{len(table.sized)} sized, gaps at {escape(str(list(table.gaps)))}")
    for name in unused_catalog_entries(table):
        dprint(f"[yellow]warning:[/yellow] {name} is documented but not listed")

    color = args.color
    if color is None:
        color = args.output is None and sys.stdout.isatty()

    if args.list:
        out = format_listing(table, color=color)
    else:
        out = generate(table, args.target, docs=args.docs)
        if color:
            out = src_str_term256(out, args.target)

    if args.output is None:
        sys.stdout.write(out)
    else:
        with open(Path(args.output), "w", encoding="utf-8") as f:
            f.write(out)
        dprint(f"wrote {escape(str(args.output))}")
    return 0


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="smx-opgen")
    parser.add_argument(
        "header",
        nargs="?",
        default="-",
        help="smx-v1-opcodes.h, or - for stdin",
        metavar="HEADER",
    )
    parser.add_argument("-o", "--output", help="Output file", metavar="OUT")
    parser.add_argument(
        "-t",
        "--target",
        default=os.getenv("SMX_OPGEN_TARGET", "rust"),
        choices=TARGETS,
        help="Language of the generated codec",
    )
    parser.add_argument(
        "-V",
        "--variable-length",
        action="append",
        help="Opcode allowed to declare a non-literal or non-positive size",
        metavar="OPCODE",
    )
    parser.add_argument(
        "--docs",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Emit catalog descriptions as doc comments",
    )
    parser.add_argument(
        "-l", "--list", help="Print the opcode map instead", action="store_true"
    )
    parser.add_argument(
        "--color",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Colorize output (default: when writing to a terminal)",
    )
    parser.add_argument(
        "-v", "--verbose", default=False, help="Debug output", action="store_true"
    )
    args = parser.parse_args(argv)
    return real_main(args)


if __name__ == "__main__":
    sys.exit(main())
