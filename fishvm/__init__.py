"""
fishvm - a ><> (fish) virtual machine.

The machine is split into small modules, each in its own file:

    stack.py         → a single stack and its register
    codebox.py       → the padded program grid
    state.py         → pointer, direction, string mode, stack-of-stacks
    instructions.py  → byte → handler dispatch table
    interpreter.py   → the stepper / run driver
    io.py            → input queue, stdin reader thread, number formatting
    diagnostics.py   → fault report rendering
    cli.py           → command-line entry point
"""

from .codebox import CodeBox  # noqa: F401
from .errors import (  # noqa: F401
    DivisionByZero,
    EmptyProgram,
    EmptyStack,
    FishError,
    FishFault,
    InvalidInstruction,
    InvalidNumber,
    NoParentStack,
    OutOfBounds,
)
from .interpreter import Interpreter  # noqa: F401
from .io import InputQueue, StreamReader  # noqa: F401
from .stack import Stack  # noqa: F401
from .state import Direction, FishState  # noqa: F401

__all__ = [
    "CodeBox",
    "Direction",
    "FishState",
    "Interpreter",
    "InputQueue",
    "StreamReader",
    "Stack",
    "FishError",
    "FishFault",
    "EmptyProgram",
    "EmptyStack",
    "NoParentStack",
    "InvalidInstruction",
    "OutOfBounds",
    "DivisionByZero",
    "InvalidNumber",
]

__version__ = "0.1.0"
