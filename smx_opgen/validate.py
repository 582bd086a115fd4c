from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import AbstractSet, Optional

from bidict import bidict

from .catalog import OPCODE_CATALOG, VARIABLE_LENGTH_OPCODES, CatalogEntry
from .errors import (
    ArgumentCountMismatch,
    DuplicateOpcode,
    InvalidSize,
    UndocumentedOpcode,
)
from .header import OpcodeEntry
from .utils import first_where_attr_is


class OpcodeTable:
    """
    The header's opcode list after it has been checked against the catalog.

    `entries` is the full list, unsized entries included, so that an entry's
    index in it is always its discriminant. `discriminants` only maps the
    sized entries; every position missing from its inverse is a gap that a
    decoder must reject.
    """

    entries: tuple[OpcodeEntry, ...]
    catalog: Mapping[str, CatalogEntry]
    discriminants: bidict[str, int]

    def __init__(
        self, entries: Sequence[OpcodeEntry], catalog: Mapping[str, CatalogEntry]
    ):
        self.entries = tuple(entries)
        self.catalog = catalog
        self.discriminants = bidict(
            {e.identifier: e.position for e in self.entries if e.sized}
        )

    def __len__(self):
        return len(self.entries)

    def __iter__(self):
        return iter(self.entries)

    @property
    def sized(self) -> tuple[OpcodeEntry, ...]:
        return tuple(e for e in self.entries if e.sized)

    @property
    def gaps(self) -> tuple[int, ...]:
        return tuple(e.position for e in self.entries if not e.sized)

    def args(self, identifier: str) -> tuple[str, ...]:
        return self.catalog[identifier].args

    def description(self, identifier: str) -> Optional[str]:
        return self.catalog[identifier].description

    def entry(self, identifier: str) -> Optional[OpcodeEntry]:
        return first_where_attr_is(self.entries, "identifier", identifier)

    def lookup(self, discriminant: int) -> Optional[OpcodeEntry]:
        identifier = self.discriminants.inverse.get(discriminant)
        if identifier is None:
            return None
        return self.entries[discriminant]


def check_entry(
    entry: OpcodeEntry,
    catalog: Mapping[str, CatalogEntry],
    variable_length: AbstractSet[str] = VARIABLE_LENGTH_OPCODES,
) -> None:
    n_cells = entry.cell_count
    if entry.sized and entry.identifier not in variable_length:
        if n_cells is None:
            raise InvalidSize(entry.identifier, entry.size_expr)
        if n_cells < 1:
            raise InvalidSize(entry.identifier, n_cells)

    doc = catalog.get(entry.identifier)
    if doc is None:
        raise UndocumentedOpcode(entry.identifier)

    if entry.sized and n_cells is not None and n_cells > 1:
        arg_n = n_cells - 1
        if len(doc.args) != arg_n:
            raise ArgumentCountMismatch(entry.identifier, arg_n, len(doc.args))


def validate(
    entries: Sequence[OpcodeEntry],
    catalog: Mapping[str, CatalogEntry] = OPCODE_CATALOG,
    variable_length: AbstractSet[str] = VARIABLE_LENGTH_OPCODES,
) -> OpcodeTable:
    seen: dict[str, int] = {}
    for pos, entry in enumerate(entries):
        # discriminant == index in the full list
        assert entry.position == pos, f"{entry} at index {pos}"
        if entry.identifier in seen:
            raise DuplicateOpcode(entry.identifier, seen[entry.identifier], pos)
        seen[entry.identifier] = pos
        check_entry(entry, catalog, variable_length)
    return OpcodeTable(entries, catalog)


def unused_catalog_entries(table: OpcodeTable) -> list[str]:
    listed = {e.identifier for e in table}
    return [name for name in table.catalog if name not in listed]
