from typing import Optional, Union


class OpcodeGenError(Exception):
    pass


class MissingMarker(OpcodeGenError):
    def __init__(self, marker: str):
        self.marker = marker
        super().__init__(f"couldn't find at least `{marker}` in input")


class UnrecognizedEntry(OpcodeGenError):
    def __init__(self, prefix: str, line: Optional[int] = None, text: str = ""):
        self.prefix = prefix
        self.line = line
        self.text = text
        where = f"line {line}: " if line is not None else ""
        msg = f"{where}unrecognized opcode type: {prefix!r}"
        if text:
            msg += f" in {text!r}"
        super().__init__(msg)


class DuplicateOpcode(OpcodeGenError):
    def __init__(self, identifier: str, first: int, second: int):
        self.identifier = identifier
        self.first = first
        self.second = second
        super().__init__(
            f"instruction {identifier} is listed twice (positions {first} and {second})"
        )


class UndocumentedOpcode(OpcodeGenError):
    def __init__(self, identifier: str):
        self.identifier = identifier
        super().__init__(f"instruction {identifier} is undocumented")


class InvalidSize(OpcodeGenError):
    def __init__(self, identifier: str, cell_count: Union[int, str]):
        self.identifier = identifier
        self.cell_count = cell_count
        super().__init__(f"instruction {identifier} has invalid size {cell_count}")


class ArgumentCountMismatch(OpcodeGenError):
    def __init__(self, identifier: str, expected: int, documented: int):
        self.identifier = identifier
        self.expected = expected
        self.documented = documented
        super().__init__(
            f"instruction {identifier} has {expected} argument(s), "
            f"however the documented count is {documented}"
        )
