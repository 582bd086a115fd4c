import struct
from typing import BinaryIO, Final

# cell_t, native endian like the VM that wrote the code section
CELL: Final[struct.Struct] = struct.Struct("=i")

CELL_SIZE: Final[int] = CELL.size

Cell = int


class InvalidOpcode(ValueError):
    def __init__(self, opcode: int):
        self.opcode = opcode
        super().__init__(f"invalid opcode: {opcode!r}")


def _read_exact(r: BinaryIO, n: int) -> bytes:
    buf = r.read(n)
    if len(buf) != n:
        raise EOFError(f"wanted {n} bytes, got {len(buf)}")
    return buf


def read_cell(r: BinaryIO) -> Cell:
    return CELL.unpack(_read_exact(r, CELL_SIZE))[0]


def write_cell(w: BinaryIO, cell: Cell) -> None:
    w.write(CELL.pack(cell))
