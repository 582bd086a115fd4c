import colorful as cf

from .codegen import camelize
from .validate import OpcodeTable

cf.use_true_colors()


def format_listing(table: OpcodeTable, color: bool = False) -> str:
    if color:
        paint = lambda style, s: f"{getattr(cf, style)}{s}{cf.reset}"
    else:
        paint = lambda style, s: s

    id_w = max([len(e.identifier) for e in table] + [len("opcode")])
    name_w = max([len(e.display_name) for e in table] + [len("name")])
    ctor_w = max([len(camelize(e.identifier)) for e in table.sized] + [len("variant")])

    res = f"{'#':>4s}  {'opcode':{id_w}s}  {'name':{name_w}s}  {'cells':>5s}  {'variant':{ctor_w}s}  args\n"
    for entry in table:
        if entry.sized:
            pos = paint("lawnGreen", f"{entry.position:4d}")
            ctor = camelize(entry.identifier)
            width = entry.size_expr
            args = ", ".join(table.args(entry.identifier))
        else:
            # gap: the slot exists on the wire but nothing decodes to it
            pos = paint("red", f"{entry.position:4d}")
            ctor = "-"
            width = "-"
            args = ""
        ident = paint("bold", f"{entry.identifier:{id_w}s}")
        res += f"{pos}  {ident}  {entry.display_name:{name_w}s}  {width:>5s}  {ctor:{ctor_w}s}  {args}".rstrip()
        res += "\n"
    res += f"{len(table.sized)} sized, {len(table.gaps)} gaps, {len(table)} total\n"
    return res
