"""Fault diagnostics: the codebox with the fish highlighted, plus stack dumps."""

from __future__ import annotations

from typing import List, Optional, TextIO

from tabulate import tabulate

from .codebox import CodeBox
from .interpreter import Interpreter
from .io import format_number
from .state import FishState

HIGHLIGHT_ON = "\u001b[42m"
HIGHLIGHT_OFF = "\u001b[0m"
FAULT_TRAILER = "something smells fishy..."


def _cell_text(byte: int) -> str:
    # control bytes and bytes written by `p` render blank
    return chr(byte) if 0x20 <= byte < 0x7F else " "


def render_codebox(codebox: CodeBox, x: int, y: int, *, color: bool = True) -> str:
    """Return the grid as text with the cell at (x, y) marked."""
    lines: List[str] = []
    for row_idx, row in enumerate(codebox.cells):
        parts: List[str] = []
        for col_idx, byte in enumerate(row):
            text = _cell_text(byte)
            if row_idx == y and col_idx == x:
                text = f"{HIGHLIGHT_ON}{text}{HIGHLIGHT_OFF}" if color else f"[{text}]"
            parts.append(text)
        lines.append("".join(parts))
    return "\n".join(lines)


def format_values(values: List[float]) -> str:
    return "[" + " ".join(format_number(v) for v in values) + "]"


def render_stacks(state: FishState) -> str:
    """Table of the reachable stack-of-stacks, active stack first."""
    rows = []
    for depth in range(state.active, -1, -1):
        stack = state.stacks[depth]
        register = format_number(stack.register) if stack.has_register else "-"
        marker = "*" if depth == state.active else ""
        rows.append([marker, depth, len(stack), register, format_values(stack.values())])
    return tabulate(rows, headers=["", "depth", "size", "register", "values"], tablefmt="github")


def report_fault(vm: Interpreter, stream: TextIO, *, color: bool = True, detail: Optional[str] = None) -> None:
    """Write the full fault report for ``vm`` to ``stream``."""
    state = vm.state
    stream.write("\n")
    stream.write(render_codebox(vm.codebox, state.x, state.y, color=color) + "\n")
    if detail:
        stream.write(detail + "\n")
    stream.write(render_stacks(state) + "\n")
    stream.write(f"Stack: {format_values(vm.stack)}\n")
    stream.write(FAULT_TRAILER + "\n")
    stream.flush()


__all__ = ["render_codebox", "render_stacks", "report_fault", "format_values", "FAULT_TRAILER"]
