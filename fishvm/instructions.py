#!/usr/bin/env python3
"""Instruction table for the fish VM.

Every byte value maps to a handler; bytes outside the ><> alphabet map to
``invalid`` so dispatch is total. Handlers take the running
:class:`~fishvm.interpreter.Interpreter` and return a :class:`Flow` telling
the stepper whether to advance, halt, or leave the pointer where a jump put
it.
"""

from __future__ import annotations

import enum
import math
from typing import TYPE_CHECKING, Callable, Dict, Iterable, Tuple

from .errors import DivisionByZero, InvalidInstruction, InvalidNumber
from .io import format_number
from .state import Direction

if TYPE_CHECKING:  # pragma: no cover
    from .interpreter import Interpreter


class Flow(enum.Enum):
    NEXT = "next"
    HALT = "halt"
    JUMP = "jump"


Handler = Callable[["Interpreter"], Flow]


def to_int(value: float, what: str = "value") -> int:
    """Truncate toward zero; non-finite values cannot index anything."""
    if not math.isfinite(value):
        raise InvalidNumber(f"{what} must be finite, got {format_number(value)}")
    return int(value)


# ---------------------------------------------------------------------------
# Movement

_MIRRORS: Dict[str, Dict[Direction, Direction]] = {
    "/": {
        Direction.RIGHT: Direction.UP,
        Direction.DOWN: Direction.LEFT,
        Direction.LEFT: Direction.DOWN,
        Direction.UP: Direction.RIGHT,
    },
    "\\": {
        Direction.RIGHT: Direction.DOWN,
        Direction.DOWN: Direction.RIGHT,
        Direction.LEFT: Direction.UP,
        Direction.UP: Direction.LEFT,
    },
    "|": {
        Direction.RIGHT: Direction.LEFT,
        Direction.LEFT: Direction.RIGHT,
    },
    "_": {
        Direction.DOWN: Direction.UP,
        Direction.UP: Direction.DOWN,
    },
    "#": {
        Direction.RIGHT: Direction.LEFT,
        Direction.DOWN: Direction.UP,
        Direction.LEFT: Direction.RIGHT,
        Direction.UP: Direction.DOWN,
    },
}


def _heading(direction: Direction) -> Handler:
    def op(vm: "Interpreter") -> Flow:
        vm.state.direction = direction
        return Flow.NEXT

    return op


def _mirror(symbol: str) -> Handler:
    table = _MIRRORS[symbol]

    def op(vm: "Interpreter") -> Flow:
        state = vm.state
        state.direction = table.get(state.direction, state.direction)
        return Flow.NEXT

    return op


def op_random(vm: "Interpreter") -> Flow:
    vm.state.direction = Direction(vm.rng.randrange(4))
    return Flow.NEXT


def op_trampoline(vm: "Interpreter") -> Flow:
    vm.move()
    return Flow.NEXT


def op_conditional_trampoline(vm: "Interpreter") -> Flow:
    if vm.state.stack.pop() == 0:
        vm.move()
    return Flow.NEXT


def op_jump(vm: "Interpreter") -> Flow:
    stack = vm.state.stack
    y = to_int(stack.pop(), "jump y")
    x = to_int(stack.pop(), "jump x")
    vm.jump(x, y)
    return Flow.JUMP


# ---------------------------------------------------------------------------
# Literals and string mode

def _literal(value: int) -> Handler:
    def op(vm: "Interpreter") -> Flow:
        vm.state.stack.push(value)
        return Flow.NEXT

    return op


def op_string_mode(vm: "Interpreter") -> Flow:
    state = vm.state
    if state.string_mode is None:
        state.string_mode = vm.instruction
    elif state.string_mode == vm.instruction:
        state.string_mode = None
    return Flow.NEXT


# ---------------------------------------------------------------------------
# Arithmetic and comparison

def _binary(fn: Callable[[float, float], float]) -> Handler:
    def op(vm: "Interpreter") -> Flow:
        stack = vm.state.stack
        a = stack.pop()
        b = stack.pop()
        stack.push(fn(b, a))
        return Flow.NEXT

    return op


def _divide(b: float, a: float) -> float:
    if a == 0:
        if b == 0 or math.isnan(b):
            return math.nan
        return math.copysign(math.inf, b) * math.copysign(1.0, a)
    return b / a


def _modulo(b: float, a: float) -> float:
    dividend = to_int(b, "dividend")
    divisor = to_int(a, "divisor")
    if divisor == 0:
        raise DivisionByZero("modulo by zero")
    remainder = abs(dividend) % abs(divisor)
    return float(-remainder if dividend < 0 else remainder)


def _compare(fn: Callable[[float, float], bool]) -> Callable[[float, float], float]:
    return lambda b, a: 1.0 if fn(b, a) else 0.0


# ---------------------------------------------------------------------------
# Stack manipulation

def _stack_method(name: str) -> Handler:
    def op(vm: "Interpreter") -> Flow:
        getattr(vm.state.stack, name)()
        return Flow.NEXT

    op.__name__ = f"op_{name}"
    return op


def op_drop(vm: "Interpreter") -> Flow:
    vm.state.stack.pop()
    return Flow.NEXT


def op_new_stack(vm: "Interpreter") -> Flow:
    state = vm.state
    count = to_int(state.stack.pop(), "stack size")
    state.new_stack(count)
    return Flow.NEXT


def op_close_stack(vm: "Interpreter") -> Flow:
    vm.state.close_stack()
    return Flow.NEXT


def op_length(vm: "Interpreter") -> Flow:
    state = vm.state
    state.stack.push(state.stack_length())
    return Flow.NEXT


# ---------------------------------------------------------------------------
# Input / output

def op_output_char(vm: "Interpreter") -> Flow:
    code = to_int(vm.state.stack.pop(), "character")
    if not 0 <= code <= 0x10FFFF or 0xD800 <= code <= 0xDFFF:
        raise InvalidNumber(f"{code} is not a valid character code")
    vm.write(chr(code))
    return Flow.NEXT


def op_output_number(vm: "Interpreter") -> Flow:
    vm.write(format_number(vm.state.stack.pop()))
    return Flow.NEXT


def op_input(vm: "Interpreter") -> Flow:
    byte = vm.input.poll() if vm.input is not None else None
    vm.state.stack.push(-1 if byte is None else byte)
    return Flow.NEXT


# ---------------------------------------------------------------------------
# Codebox access

def op_get(vm: "Interpreter") -> Flow:
    stack = vm.state.stack
    y = to_int(stack.pop(), "get y")
    x = to_int(stack.pop(), "get x")
    stack.push(vm.codebox.get(x, y))
    return Flow.NEXT


def op_put(vm: "Interpreter") -> Flow:
    stack = vm.state.stack
    y = to_int(stack.pop(), "put y")
    x = to_int(stack.pop(), "put x")
    value = to_int(stack.pop(), "put value")
    vm.codebox.put(x, y, value)
    return Flow.NEXT


# ---------------------------------------------------------------------------
# Control

def op_nop(vm: "Interpreter") -> Flow:
    return Flow.NEXT


def op_halt(vm: "Interpreter") -> Flow:
    return Flow.HALT


def op_invalid(vm: "Interpreter") -> Flow:
    raise InvalidInstruction(f"invalid instruction 0x{vm.instruction:02X}")


def _digits(chars: str, base: int) -> Iterable[Tuple[str, Handler, str]]:
    for offset, char in enumerate(chars):
        yield (char, _literal(base + offset), f"push {base + offset}")


# Ordered list so docs and tooling can iterate in a stable order.
INSTRUCTION_LIST: Tuple[Tuple[str, Handler, str], ...] = (
    (" ", op_nop, "no-op"),
    (";", op_halt, "halt"),
    (">", _heading(Direction.RIGHT), "swim right"),
    ("v", _heading(Direction.DOWN), "swim down"),
    ("<", _heading(Direction.LEFT), "swim left"),
    ("^", _heading(Direction.UP), "swim up"),
    ("/", _mirror("/"), "diagonal mirror"),
    ("\\", _mirror("\\"), "diagonal mirror"),
    ("|", _mirror("|"), "vertical mirror"),
    ("_", _mirror("_"), "horizontal mirror"),
    ("#", _mirror("#"), "four-way mirror"),
    ("x", op_random, "random direction"),
    ("!", op_trampoline, "skip next"),
    ("?", op_conditional_trampoline, "skip next if zero"),
    (".", op_jump, "jump to (x, y)"),
    ('"', op_string_mode, "string mode"),
    ("'", op_string_mode, "string mode"),
    *_digits("0123456789", 0),
    *_digits("abcdef", 10),
    ("+", _binary(lambda b, a: b + a), "add"),
    ("-", _binary(lambda b, a: b - a), "subtract"),
    ("*", _binary(lambda b, a: b * a), "multiply"),
    (",", _binary(_divide), "divide"),
    ("%", _binary(_modulo), "modulo"),
    ("=", _binary(_compare(lambda b, a: b == a)), "equal"),
    (")", _binary(_compare(lambda b, a: b > a)), "greater than"),
    ("(", _binary(_compare(lambda b, a: b < a)), "less than"),
    (":", _stack_method("duplicate_top"), "duplicate"),
    ("~", op_drop, "drop"),
    ("$", _stack_method("swap_top_two"), "swap two"),
    ("@", _stack_method("rotate_top_three"), "rotate three"),
    ("}", _stack_method("shift_right"), "shift right"),
    ("{", _stack_method("shift_left"), "shift left"),
    ("r", _stack_method("reverse"), "reverse"),
    ("&", _stack_method("register_toggle"), "register"),
    ("l", op_length, "stack length"),
    ("[", op_new_stack, "new stack"),
    ("]", op_close_stack, "close stack"),
    ("o", op_output_char, "output character"),
    ("n", op_output_number, "output number"),
    ("i", op_input, "read input"),
    ("g", op_get, "get cell"),
    ("p", op_put, "put cell"),
)

INSTRUCTIONS: Dict[int, Handler] = {ord(symbol): handler for symbol, handler, _ in INSTRUCTION_LIST}
INSTRUCTION_NAMES: Dict[int, str] = {ord(symbol): name for symbol, _, name in INSTRUCTION_LIST}

DISPATCH: Tuple[Handler, ...] = tuple(INSTRUCTIONS.get(byte, op_invalid) for byte in range(256))


def dispatch(vm: "Interpreter", byte: int) -> Flow:
    vm.instruction = byte
    return DISPATCH[byte](vm)


def is_instruction(byte: int) -> bool:
    return byte in INSTRUCTIONS


__all__ = [
    "Flow",
    "DISPATCH",
    "INSTRUCTION_LIST",
    "INSTRUCTIONS",
    "INSTRUCTION_NAMES",
    "dispatch",
    "is_instruction",
    "to_int",
]
