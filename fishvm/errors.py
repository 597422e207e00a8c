"""Error taxonomy for the fish VM.

``EmptyProgram`` is raised while loading, before any instruction runs. Every
other error derives from :class:`FishFault` and is fatal for the run: the
stepper stamps the pointer position and instruction onto the fault and the
caller decides how to report it.
"""

from __future__ import annotations

from typing import Optional


class FishError(Exception):
    """Base class for fish VM failures."""

    code: str = "fish_error"


class EmptyProgram(FishError):
    """Raised for empty or whitespace-only program text."""

    code = "empty_program"


class FishFault(FishError):
    """Runtime fault; aborts the whole run."""

    code = "fault"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.x: Optional[int] = None
        self.y: Optional[int] = None
        self.instruction: Optional[int] = None

    def locate(self, x: int, y: int, instruction: int) -> "FishFault":
        if self.x is None:
            self.x = x
            self.y = y
            self.instruction = instruction
        return self

    def describe(self) -> str:
        text = str(self)
        if self.x is None:
            return text
        return f"{text} (at {self.x},{self.y} on {_format_instruction(self.instruction)})"


class EmptyStack(FishFault):
    code = "empty_stack"


class NoParentStack(FishFault):
    code = "no_parent_stack"


class InvalidInstruction(FishFault):
    code = "invalid_instruction"


class OutOfBounds(FishFault):
    code = "out_of_bounds"


class DivisionByZero(FishFault):
    code = "division_by_zero"


class InvalidNumber(FishFault):
    code = "invalid_number"


def _format_instruction(value: Optional[int]) -> str:
    if value is None:
        return "?"
    if 0x20 <= value < 0x7F:
        return repr(chr(value))
    return f"0x{value:02X}"


__all__ = [
    "FishError",
    "EmptyProgram",
    "FishFault",
    "EmptyStack",
    "NoParentStack",
    "InvalidInstruction",
    "OutOfBounds",
    "DivisionByZero",
    "InvalidNumber",
]
