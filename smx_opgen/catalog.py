from typing import Final, NamedTuple, Optional

# PRI is R[0], ALT is R[1]. Frame[] is relative to FRM, Stack[] to STK.
# See Interpreter::visit* in sourcepawn/vm/interpreter.cpp and
# sourcepawn/vm/pcode-reader.h for the operand order of each opcode.


class CatalogEntry(NamedTuple):
    description: Optional[str] = None
    args: tuple[str, ...] = ()


def op(description: Optional[str] = None, *args: str) -> CatalogEntry:
    return CatalogEntry(description, args)


VARIABLE_LENGTH_OPCODES: Final[frozenset[str]] = frozenset({"CASETBL"})

OPCODE_CATALOG: Final[dict[str, CatalogEntry]] = {
    "NONE": op("`;`"),
    "LOAD_PRI": op("`R[0] = R[offset]`", "offset"),
    "LOAD_ALT": op("`R[1] = R[offset]`", "offset"),
    "LOAD_S_PRI": op("`R[0] = Frame[offset]`", "offset"),
    "LOAD_S_ALT": op("`R[1] = Frame[offset]`", "offset"),
    "LREF_PRI": op(),
    "LREF_ALT": op(),
    "LREF_S_PRI": op("`R[0] = &Memory[offset]`", "offset"),
    "LREF_S_ALT": op("`R[1] = &Memory[offset]`", "offset"),
    "LOAD_I": op("`R[0] = Memory[R[0]]`"),
    "LODB_I": op(
        "`let value = Memory[R[0]]; R[0] = match width { 1 => value & 0xff, "
        "2 => value & 0xffff, 4 => value, _ => panic!() };`",
        "width",
    ),
    "CONST_PRI": op("`R[0] = value;`", "value"),
    "CONST_ALT": op("`R[1] = value;`", "value"),
    "ADDR_PRI": op("`R[0] = &Frame[offset];`", "offset"),
    "ADDR_ALT": op("`R[1] = &Frame[offset];`", "offset"),
    "STOR_PRI": op("`Memory[offset] = R[0];`", "offset"),
    "STOR_ALT": op("`Memory[offset] = R[1];`", "offset"),
    "STOR_S_PRI": op("`Frame[offset] = R[0];`", "offset"),
    "STOR_S_ALT": op("`Frame[offset] = R[1];`", "offset"),
    "SREF_PRI": op(),
    "SREF_ALT": op(),
    "SREF_S_PRI": op("`Memory[Frame[offset]] = R[0]`", "offset"),
    "SREF_S_ALT": op("`Memory[Frame[offset]] = R[1]`", "offset"),
    "STOR_I": op("`Memory[R[1]] = R[0]`"),
    "STRB_I": op(
        "`Memory[R[1]] = match width { 1 => R[0] & 0xff, 2 => R[0] & 0xffff, "
        "4 => R[0], _ => panic!() };`",
        "width",
    ),
    "LIDX": op("`R[0] = Memory[R[1] + R[0] * size_of::<Cell>()]`"),
    "LIDX_B": op(),
    "IDXADDR": op("`R[0] = R[1] + R[0] * size_of::<Cell>()`"),
    "IDXADDR_B": op(),
    "ALIGN_PRI": op(),
    "ALIGN_ALT": op(),
    "LCTRL": op(),
    "SCTRL": op(),
    "MOVE_PRI": op("`R[0] = R[1]`"),
    "MOVE_ALT": op("`R[1] = R[0]`"),
    "XCHG": op("`swap(R[0], R[1])`"),
    "PUSH_PRI": op("`push(R[0])`"),
    "PUSH_ALT": op("`push(R[1])`"),
    "PUSH_R": op(),
    "PUSH_C": op("`push(const_1)`", "const_1"),
    "PUSH": op("`push(Memory[addr_1])`", "addr_1"),
    "PUSH_S": op("`push(Frame[stack_1])`", "stack_1"),
    "POP_PRI": op("`R[0] = pop()`"),
    "POP_ALT": op("`R[1] = pop()`"),
    "STACK": op("`STK += const_1; R[1] = STK`", "const_1"),
    "HEAP": op("`R[1] = HEA; HEA += const_1`", "const_1"),
    "PROC": op('Indicates the start of a function (or "procedure").'),
    "RET": op(),
    "RETN": op("Return from a function, popping its frame and arguments."),
    "CALL": op("`push(CIP); CIP = func_1`", "func_1"),
    "CALL_PRI": op(),
    "JUMP": op("`CIP = jump_1`", "jump_1"),
    "JREL": op(),
    "JZER": op("`if R[0] == 0 { CIP = jump_1 }`", "jump_1"),
    "JNZ": op("`if R[0] != 0 { CIP = jump_1 }`", "jump_1"),
    "JEQ": op("`if R[0] == R[1] { CIP = jump_1 }`", "jump_1"),
    "JNEQ": op("`if R[0] != R[1] { CIP = jump_1 }`", "jump_1"),
    "JLESS": op(),
    "JLEQ": op(),
    "JGRTR": op(),
    "JGEQ": op(),
    "JSLESS": op("`if R[0] < R[1] { CIP = jump_1 }` (signed)", "jump_1"),
    "JSLEQ": op("`if R[0] <= R[1] { CIP = jump_1 }` (signed)", "jump_1"),
    "JSGRTR": op("`if R[0] > R[1] { CIP = jump_1 }` (signed)", "jump_1"),
    "JSGEQ": op("`if R[0] >= R[1] { CIP = jump_1 }` (signed)", "jump_1"),
    "SHL": op("`R[0] <<= R[1]`"),
    "SHR": op("`R[0] >>= R[1]` (logical)"),
    "SSHR": op("`R[0] >>= R[1]` (arithmetic)"),
    "SHL_C_PRI": op("`R[0] <<= const_1`", "const_1"),
    "SHL_C_ALT": op("`R[1] <<= const_1`", "const_1"),
    "SHR_C_PRI": op(),
    "SHR_C_ALT": op(),
    "SMUL": op("`R[0] *= R[1]`"),
    "SDIV": op("`(R[0], R[1]) = (R[0] / R[1], R[0] % R[1])`"),
    "SDIV_ALT": op("`(R[0], R[1]) = (R[1] / R[0], R[1] % R[0])`"),
    "UMUL": op(),
    "UDIV": op(),
    "UDIV_ALT": op(),
    "ADD": op("`R[0] += R[1]`"),
    "SUB": op("`R[0] -= R[1]`"),
    "SUB_ALT": op("`R[0] = R[1] - R[0]`"),
    "AND": op("`R[0] &= R[1]`"),
    "OR": op("`R[0] |= R[1]`"),
    "XOR": op("`R[0] ^= R[1]`"),
    "NOT": op("`R[0] = !R[0] as Cell` (logical)"),
    "NEG": op("`R[0] = -R[0]`"),
    "INVERT": op("`R[0] = !R[0]` (bitwise)"),
    "ADD_C": op("`R[0] += const_1`", "const_1"),
    "SMUL_C": op("`R[0] *= const_1`", "const_1"),
    "ZERO_PRI": op("`R[0] = 0`"),
    "ZERO_ALT": op("`R[1] = 0`"),
    "ZERO": op("`Memory[addr_1] = 0`", "addr_1"),
    "ZERO_S": op("`Frame[stack_1] = 0`", "stack_1"),
    "SIGN_PRI": op(),
    "SIGN_ALT": op(),
    "EQ": op("`R[0] = (R[0] == R[1]) as Cell`"),
    "NEQ": op("`R[0] = (R[0] != R[1]) as Cell`"),
    "LESS": op(),
    "LEQ": op(),
    "GRTR": op(),
    "GEQ": op(),
    "SLESS": op("`R[0] = (R[0] < R[1]) as Cell` (signed)"),
    "SLEQ": op("`R[0] = (R[0] <= R[1]) as Cell` (signed)"),
    "SGRTR": op("`R[0] = (R[0] > R[1]) as Cell` (signed)"),
    "SGEQ": op("`R[0] = (R[0] >= R[1]) as Cell` (signed)"),
    "EQ_C_PRI": op("`R[0] = (R[0] == const_1) as Cell`", "const_1"),
    "EQ_C_ALT": op("`R[0] = (R[1] == const_1) as Cell`", "const_1"),
    "INC_PRI": op("`R[0] += 1`"),
    "INC_ALT": op("`R[1] += 1`"),
    "INC": op("`Memory[addr_1] += 1`", "addr_1"),
    "INC_S": op("`Frame[stack_1] += 1`", "stack_1"),
    "INC_I": op("`Memory[R[0]] += 1`"),
    "DEC_PRI": op("`R[0] -= 1`"),
    "DEC_ALT": op("`R[1] -= 1`"),
    "DEC": op("`Memory[addr_1] -= 1`", "addr_1"),
    "DEC_S": op("`Frame[stack_1] -= 1`", "stack_1"),
    "DEC_I": op("`Memory[R[0]] -= 1`"),
    "MOVS": op("`memcpy(&Memory[R[1]], &Memory[R[0]], const_1)`", "const_1"),
    "CMPS": op(),
    "FILL": op("Fill `const_1` bytes at `Memory[R[1]]` with the cell `R[0]`.", "const_1"),
    "HALT": op("Stop execution with error code `const_1`.", "const_1"),
    "BOUNDS": op("Abort if `R[0]` is not within `0..=const_1`.", "const_1"),
    "SYSREQ_PRI": op(),
    "SYSREQ_C": op("Invoke native `native_1`.", "native_1"),
    "FILE": op(),
    "LINE": op(),
    "SYMBOL": op(),
    "SRANGE": op(),
    "JUMP_PRI": op(),
    "SWITCH": op("Jump through the case table located at `jump_1` using `R[0]`.", "jump_1"),
    "CASETBL": op(
        "Case table with `const_1` records, defaulting to `jump_1`.",
        "const_1",
        "jump_1",
    ),
    "SWAP_PRI": op("`let top = pop(); push(R[0]); R[0] = top;`"),
    "SWAP_ALT": op("`let top = pop(); push(R[1]); R[1] = top;`"),
    "PUSH_ADR": op("`push(&Frame[stack_1])`", "stack_1"),
    "NOP": op("`;`"),
    "SYSREQ_N": op("Invoke native `native` with `n_args` arguments.", "native", "n_args"),
    "SYMTAG": op(),
    "BREAK": op("Invoke a debug line break."),
    "PUSH2_C": op("`push(const_1); push(const_2)`", "const_1", "const_2"),
    "PUSH2": op("`push(Memory[addr_1]); push(Memory[addr_2])`", "addr_1", "addr_2"),
    "PUSH2_S": op("`push(Frame[stack_1]); push(Frame[stack_2])`", "stack_1", "stack_2"),
    "PUSH2_ADR": op(
        "`push(&Frame[stack_1]); push(&Frame[stack_2])`", "stack_1", "stack_2"
    ),
    "PUSH3_C": op("Push three constants.", "const_1", "const_2", "const_3"),
    "PUSH3": op("Push three global cells.", "addr_1", "addr_2", "addr_3"),
    "PUSH3_S": op("Push three frame cells.", "stack_1", "stack_2", "stack_3"),
    "PUSH3_ADR": op(
        "Push the addresses of three frame cells.", "stack_1", "stack_2", "stack_3"
    ),
    "PUSH4_C": op("Push four constants.", "const_1", "const_2", "const_3", "const_4"),
    "PUSH4": op("Push four global cells.", "addr_1", "addr_2", "addr_3", "addr_4"),
    "PUSH4_S": op(
        "Push four frame cells.", "stack_1", "stack_2", "stack_3", "stack_4"
    ),
    "PUSH4_ADR": op(
        "Push the addresses of four frame cells.",
        "stack_1",
        "stack_2",
        "stack_3",
        "stack_4",
    ),
    "PUSH5_C": op(
        "Push five constants.", "const_1", "const_2", "const_3", "const_4", "const_5"
    ),
    "PUSH5": op(
        "Push five global cells.", "addr_1", "addr_2", "addr_3", "addr_4", "addr_5"
    ),
    "PUSH5_S": op(
        "Push five frame cells.",
        "stack_1",
        "stack_2",
        "stack_3",
        "stack_4",
        "stack_5",
    ),
    "PUSH5_ADR": op(
        "Push the addresses of five frame cells.",
        "stack_1",
        "stack_2",
        "stack_3",
        "stack_4",
        "stack_5",
    ),
    "LOAD_BOTH": op("`R[0] = Memory[addr_1]; R[1] = Memory[addr_2]`", "addr_1", "addr_2"),
    "LOAD_S_BOTH": op(
        "`R[0] = Frame[stack_1]; R[1] = Frame[stack_2]`", "stack_1", "stack_2"
    ),
    "CONST": op("`Memory[addr_1] = const_1`", "addr_1", "const_1"),
    "CONST_S": op("`Frame[stack_1] = const_1`", "stack_1", "const_1"),
    "SYSREQ_D": op(),
    "SYSREQ_ND": op(),
    "TRACKER_PUSH_C": op("Push `const_1` bytes onto the heap tracker.", "const_1"),
    "TRACKER_POP_SETHEAP": op("Pop the heap tracker and restore HEA."),
    "GENARRAY": op("Allocate an array with `const_1` dimensions on the heap.", "const_1"),
    "GENARRAY_Z": op(
        "Allocate a zero-filled array with `const_1` dimensions on the heap.", "const_1"
    ),
    "STRADJUST_PRI": op("`R[0] = (R[0] + size_of::<Cell>()) / size_of::<Cell>()`"),
    "STKADJUST": op(),
    "ENDPROC": op("Indicates the end of a function."),
    "LDGFN_PRI": op(),
    "REBASE": op(),
    "INITARRAY_PRI": op(
        "Initialize the array at `R[0]` from the data section.",
        "addr_1",
        "const_1",
        "const_2",
        "const_3",
        "const_4",
    ),
    "INITARRAY_ALT": op(
        "Initialize the array at `R[1]` from the data section.",
        "addr_1",
        "const_1",
        "const_2",
        "const_3",
        "const_4",
    ),
    "HEAP_SAVE": op("Save HEA onto the heap scope stack."),
    "HEAP_RESTORE": op("Restore HEA from the heap scope stack."),
    "FIRST_FAKE": op(),
    "FABS": op("`R[0] = f32::from_bits(pop()).abs().to_bits()`"),
    "FLOAT": op("`R[0] = (pop() as f32).to_bits()`"),
    "FLOATADD": op("`R[0] = (a + b).to_bits()` for two popped floats"),
    "FLOATSUB": op("`R[0] = (a - b).to_bits()` for two popped floats"),
    "FLOATMUL": op("`R[0] = (a * b).to_bits()` for two popped floats"),
    "FLOATDIV": op("`R[0] = (a / b).to_bits()` for two popped floats"),
    "RND_TO_NEAREST": op("`R[0] = f32::from_bits(pop()).round() as Cell`"),
    "RND_TO_FLOOR": op("`R[0] = f32::from_bits(pop()).floor() as Cell`"),
    "RND_TO_CEIL": op("`R[0] = f32::from_bits(pop()).ceil() as Cell`"),
    "RND_TO_ZERO": op("`R[0] = f32::from_bits(pop()).trunc() as Cell`"),
    "FLOATCMP": op("`R[0] = a.partial_cmp(&b) as Cell` for two popped floats"),
    "FLOAT_GT": op("`R[0] = (a > b) as Cell` for two popped floats"),
    "FLOAT_GE": op("`R[0] = (a >= b) as Cell` for two popped floats"),
    "FLOAT_LT": op("`R[0] = (a < b) as Cell` for two popped floats"),
    "FLOAT_LE": op("`R[0] = (a <= b) as Cell` for two popped floats"),
    "FLOAT_NE": op("`R[0] = (a != b) as Cell` for two popped floats"),
    "FLOAT_EQ": op("`R[0] = (a == b) as Cell` for two popped floats"),
    "FLOAT_NOT": op("`R[0] = (f32::from_bits(pop()) == 0.0) as Cell`"),
}
