#!/usr/bin/env python3
"""Stepper and run driver for the fish VM."""

from __future__ import annotations

import logging
import random
import sys
import time
from typing import Any, Dict, Iterable, List, Optional, TextIO, Union

from .codebox import CodeBox
from .errors import FishFault, InvalidNumber, OutOfBounds
from .instructions import INSTRUCTION_NAMES, Flow, dispatch
from .io import InputQueue, format_number
from .state import FishState

LOGGER = logging.getLogger("fishvm.interpreter")


class Interpreter:
    """Runs one ><> program, one instruction per :meth:`step`.

    The interpreter owns the execution state, the random source used by
    ``x`` and the input queue polled by ``i``; nothing is shared between
    instances.
    """

    def __init__(
        self,
        codebox: CodeBox,
        stack: Optional[Iterable[float]] = None,
        *,
        compat: bool = False,
        input_queue: Optional[InputQueue] = None,
        output: Optional[TextIO] = None,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
        trace: bool = False,
        trace_file: Optional[TextIO] = None,
        tick: float = 0.0,
    ) -> None:
        self.codebox = codebox
        self.state = FishState.initial(stack, compat=compat)
        self.rng = rng if rng is not None else random.Random(seed)
        self.input = input_queue
        self.output = output if output is not None else sys.stdout
        self.trace = trace
        self.trace_out = trace_file
        self.tick = max(0.0, float(tick))
        self.instruction: Optional[int] = None
        self.running = True
        self.halted = False
        self.fault: Optional[FishFault] = None
        self.steps = 0

    @classmethod
    def from_source(cls, source: Union[str, bytes], stack: Optional[Iterable[float]] = None, **kwargs: Any) -> "Interpreter":
        return cls(CodeBox.from_source(source), stack, **kwargs)

    @property
    def stack(self) -> List[float]:
        """Values of the active stack, bottom first."""
        return self.state.stack.values()

    def _log(self, msg: str) -> None:
        if self.trace_out:
            self.trace_out.write(msg + "\n")
            self.trace_out.flush()
        if self.trace:
            LOGGER.info(msg)

    def write(self, text: str) -> None:
        try:
            self.output.write(text)
        except UnicodeEncodeError as exc:
            raise InvalidNumber(f"cannot encode {text!r} for output: {exc.reason}") from exc
        self.output.flush()

    def move(self) -> None:
        self.state.advance(self.codebox.width, self.codebox.height)

    def jump(self, x: int, y: int) -> None:
        if not self.codebox.contains(x, y):
            raise OutOfBounds(f"jump target ({x},{y}) outside {self.codebox.width}x{self.codebox.height} codebox")
        self.state.x = x
        self.state.y = y

    def _trace_step(self, byte: int) -> None:
        state = self.state
        if state.string_mode is not None and byte != state.string_mode:
            name = "literal"
        else:
            name = INSTRUCTION_NAMES.get(byte, "invalid")
        values = " ".join(format_number(v) for v in state.stack.cells)
        self._log(
            f"[TRACE] {self.steps:6d} ({state.x},{state.y}) {chr(byte)!r} {name:<16} "
            f"{state.direction.name:<5} depth={state.depth} stack=[{values}]"
        )

    def step(self) -> bool:
        """Execute the instruction under the pointer, then move.

        Returns ``True`` once the program has halted. Faults propagate to the
        caller after the interpreter is marked as stopped.
        """
        if not self.running:
            return self.halted
        state = self.state
        x, y = state.x, state.y
        byte = self.codebox.cells[y][x]
        self.instruction = byte
        if self.trace or self.trace_out:
            self._trace_step(byte)
        try:
            if state.string_mode is not None and byte != state.string_mode:
                state.stack.push(byte)
                flow = Flow.NEXT
            else:
                flow = dispatch(self, byte)
        except FishFault as exc:
            self.running = False
            self.fault = exc.locate(x, y, byte)
            LOGGER.debug("fault after %d steps: %s", self.steps, self.fault.describe())
            raise
        self.steps += 1
        if flow is Flow.HALT:
            self.running = False
            self.halted = True
            LOGGER.debug("halted after %d steps at (%d,%d)", self.steps, x, y)
            return True
        if flow is Flow.NEXT:
            self.move()
        return False

    swim = step

    def run(self, max_steps: Optional[int] = None) -> bool:
        """Step until ``;``, a fault, or ``max_steps`` cycles.

        Returns ``True`` if the program halted normally.
        """
        while self.running and (max_steps is None or self.steps < max_steps):
            self.step()
            if self.tick and self.running:
                time.sleep(self.tick)
        return self.halted

    def snapshot_state(self) -> Dict[str, Any]:
        snapshot = self.state.snapshot()
        snapshot.update(
            {
                "steps": self.steps,
                "running": self.running,
                "halted": self.halted,
                "fault": self.fault.code if self.fault else None,
            }
        )
        return snapshot


__all__ = ["Interpreter"]
