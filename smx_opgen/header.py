from __future__ import annotations

import enum
import re
from dataclasses import dataclass
from typing import IO, Iterable, Optional, Union

from path import Path

from .errors import MissingMarker, UnrecognizedEntry

OPCODE_LIST_MARKER = "#define OPCODE_LIST"

SIZED_TAG = "_G"
UNSIZED_TAG = "_U"

PREFIX_RE = re.compile(r"^([^(]+)\(")
SIZED_ARGS_RE = re.compile(r'^\s*([^,\s]+)\s*,\s*"([^"]*)"\s*,\s*([^)]+?)\s*\)')
UNSIZED_ARGS_RE = re.compile(r'^\s*([^,\s]+)\s*,\s*"([^"]*)"\s*\)')


class EntryKind(enum.Enum):
    SIZED = SIZED_TAG
    UNSIZED = UNSIZED_TAG


@dataclass(frozen=True)
class OpcodeEntry:
    identifier: str
    display_name: str
    kind: EntryKind
    position: int
    size_expr: Optional[str] = None
    line: Optional[int] = None

    @property
    def sized(self) -> bool:
        return self.kind is EntryKind.SIZED

    @property
    def cell_count(self) -> Optional[int]:
        """Declared width in cells, or None if unsized or not an integer literal."""
        if self.size_expr is None:
            return None
        try:
            return int(self.size_expr, 0)
        except ValueError:
            return None

    def __str__(self):
        size = f", {self.size_expr}" if self.sized else ""
        return f'{self.kind.value}({self.identifier}, "{self.display_name}"{size})'


def _skip_to_marker(lines) -> int:
    for lineno, line in lines:
        if line.startswith(OPCODE_LIST_MARKER):
            return lineno
    raise MissingMarker(OPCODE_LIST_MARKER)


def parse_opcode_list(lines: Iterable[str]) -> list[OpcodeEntry]:
    numbered = enumerate(lines, start=1)
    _skip_to_marker(numbered)

    entries: list[OpcodeEntry] = []
    for lineno, raw in numbered:
        line = raw.strip()
        if not line:
            break
        if line.startswith("/"):
            continue

        m = PREFIX_RE.match(line)
        if m is None:
            raise UnrecognizedEntry(line, lineno, line)
        tag, rest = m.group(1).strip(), line[m.end() :]

        if tag == SIZED_TAG:
            args = SIZED_ARGS_RE.match(rest)
            if args is None:
                raise UnrecognizedEntry(tag, lineno, line)
            identifier, display_name, size_expr = args.groups()
            kind = EntryKind.SIZED
        elif tag == UNSIZED_TAG:
            args = UNSIZED_ARGS_RE.match(rest)
            if args is None:
                raise UnrecognizedEntry(tag, lineno, line)
            identifier, display_name = args.groups()
            size_expr = None
            kind = EntryKind.UNSIZED
        else:
            raise UnrecognizedEntry(tag, lineno, line)

        entries.append(
            OpcodeEntry(
                identifier,
                display_name,
                kind,
                position=len(entries),
                size_expr=size_expr,
                line=lineno,
            )
        )
    return entries


def read_opcode_list(src: Union[str, Path, IO[str]]) -> list[OpcodeEntry]:
    if not isinstance(src, str):
        return parse_opcode_list(src)
    with open(Path(src), encoding="utf-8") as f:
        return parse_opcode_list(f)
