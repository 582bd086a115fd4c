import importlib.util
import sys

import pytest
from path import Path

from smx_opgen.header import read_opcode_list
from smx_opgen.validate import validate

SAMPLES_DIR = Path(__file__).parent / "samples"


@pytest.fixture
def sample_header() -> Path:
    return SAMPLES_DIR / "smx-v1-opcodes.h"


@pytest.fixture
def sample_table(sample_header):
    return validate(read_opcode_list(sample_header))


@pytest.fixture
def load_codec(tmp_path):
    loaded = []

    def load(source: str, name: str = "generated_opcodes"):
        mod_path = tmp_path / f"{name}.py"
        mod_path.write_text(source, encoding="utf-8")
        spec = importlib.util.spec_from_file_location(name, mod_path)
        mod = importlib.util.module_from_spec(spec)
        sys.modules[name] = mod
        loaded.append(name)
        spec.loader.exec_module(mod)
        return mod

    yield load
    for name in loaded:
        sys.modules.pop(name, None)
