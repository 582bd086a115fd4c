from pygments import highlight
from pygments.formatters import Terminal256Formatter
from pygments.lexers import PythonLexer, RustLexer

LEXERS = {
    "rust": RustLexer,
    "python": PythonLexer,
}


def src_str_term256(bland_src: str, target: str) -> str:
    colorful = highlight(bland_src, LEXERS[target](), Terminal256Formatter(style="inkpot"))
    trimmed = colorful.rstrip() + "\n"
    return trimmed
