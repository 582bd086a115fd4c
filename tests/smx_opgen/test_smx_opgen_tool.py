import io

from path import Path

from smx_opgen.tools.smx_opgen_tool import main

SAMPLES_DIR = Path(__file__).parent / "samples"

UNDOCUMENTED = """\
#define OPCODE_LIST(_G, _U) \\
  _G(NONE,    "none", 1)  \\
  _G(FROB,    "frob", 2)
"""


class TestTool:
    def test_rust_to_stdout(self, sample_header, capsys):
        assert main([sample_header, "--no-docs", "--no-color"]) == 0
        out = capsys.readouterr().out
        assert out == (SAMPLES_DIR / "opcodes.rs").read_text(encoding="utf-8")

    def test_stdin(self, sample_header, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO(sample_header.read_text(encoding="utf-8")))
        assert main(["--no-color"]) == 0
        assert "pub enum Instruction {" in capsys.readouterr().out

    def test_python_to_file(self, sample_header, tmp_path, capsys):
        out_path = tmp_path / "opcodes.py"
        assert main([sample_header, "-t", "python", "-o", str(out_path)]) == 0
        assert capsys.readouterr().out == ""
        src = out_path.read_text(encoding="utf-8")
        assert "OPCODES: dict[int, type[Instruction]] = {" in src
        assert "\x1b[" not in src

    def test_target_from_env(self, sample_header, monkeypatch, capsys):
        monkeypatch.setenv("SMX_OPGEN_TARGET", "python")
        assert main([sample_header, "--no-color"]) == 0
        assert "def read_from(r: BinaryIO) -> Instruction:" in capsys.readouterr().out

    def test_list(self, sample_header, capsys):
        assert main([sample_header, "--list", "--no-color"]) == 0
        out = capsys.readouterr().out
        assert "149 sized, 43 gaps, 192 total" in out
        assert "casetbl" in out

    def test_color(self, sample_header, capsys):
        assert main([sample_header, "--color"]) == 0
        assert "\x1b[" in capsys.readouterr().out

    def test_undocumented_fails_without_output(self, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO(UNDOCUMENTED))
        assert main(["-", "--no-color"]) == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "instruction FROB is undocumented" in captured.err

    def test_missing_marker(self, tmp_path, capsys):
        header = tmp_path / "empty.h"
        header.write_text("#pragma once\n", encoding="utf-8")
        assert main([str(header)]) == 1
        assert "OPCODE_LIST" in capsys.readouterr().err

    def test_variable_length_override(self, sample_header, capsys):
        assert main([sample_header, "-V", "NONE"]) == 1
        assert "instruction CASETBL has invalid size -1" in capsys.readouterr().err

    def test_verbose(self, sample_header, capsys):
        assert main([sample_header, "-v", "--no-color"]) == 0
        assert "read 192 opcode list entries" in capsys.readouterr().err

    def test_missing_header(self, tmp_path, capsys):
        assert main([str(tmp_path / "nope.h")]) == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err.startswith("error:")
        assert "nope.h" in captured.err

    def test_header_not_utf8(self, tmp_path, capsys):
        header = tmp_path / "latin1.h"
        header.write_bytes(b"// \xa9 AlliedModders\n#define OPCODE_LIST(_G, _U)\n")
        assert main([str(header)]) == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err.startswith("error:")

    def test_stdin_is_utf8(self, sample_header, monkeypatch, capsys):
        text = "// © AlliedModders\n" + sample_header.read_text(encoding="utf-8")
        stdin = io.TextIOWrapper(io.BytesIO(text.encode("utf-8")), encoding="ascii")
        monkeypatch.setattr("sys.stdin", stdin)
        assert main(["--no-color"]) == 0
        assert "pub enum Instruction {" in capsys.readouterr().out
