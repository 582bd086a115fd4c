import colorful as cf
import pytest

from smx_opgen.catalog import op
from smx_opgen.header import parse_opcode_list
from smx_opgen.listing import format_listing
from smx_opgen.validate import validate


@pytest.fixture
def small_table():
    entries = parse_opcode_list(
        [
            "#define OPCODE_LIST(_G, _U) \\",
            '  _U(NOP,    "nop")       \\',
            '  _G(PUSH_C, "push.c", 2)',
        ]
    )
    return validate(entries, {"NOP": op(), "PUSH_C": op(None, "const_1")})


class TestListing:
    def test_small(self, small_table):
        assert format_listing(small_table).splitlines() == [
            "   #  opcode  name    cells  variant  args",
            "   0  NOP     nop         -  -",
            "   1  PUSH_C  push.c      2  PushC    const_1",
            "1 sized, 1 gaps, 2 total",
        ]

    def test_sample(self, sample_table):
        lines = format_listing(sample_table).splitlines()
        assert len(lines) == 1 + 192 + 1
        assert lines[-1] == "149 sized, 43 gaps, 192 total"
        casetbl = lines[1 + 130].split()
        assert casetbl[:4] == ["130", "CASETBL", "casetbl", "-1"]
        assert casetbl[4:] == ["Casetbl", "const_1,", "jump_1"]
        lref_pri = lines[1 + 5].split()
        assert lref_pri == ["5", "LREF_PRI", "lref.pri", "-", "-"]

    def test_color(self, small_table):
        plain = format_listing(small_table)
        colored = format_listing(small_table, color=True)
        assert "\x1b[" in colored
        assert colored != plain
        assert f"{cf.lawnGreen}   1{cf.reset}" in colored
        assert f"{cf.red}   0{cf.reset}" in colored
        assert colored.splitlines()[-1] == plain.splitlines()[-1]
