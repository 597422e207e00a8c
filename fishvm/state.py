"""Execution state: the pointer and the stack-of-stacks."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from .errors import EmptyStack, InvalidNumber, NoParentStack
from .stack import Stack

LOGGER = logging.getLogger("fishvm.state")


class Direction(enum.IntEnum):
    RIGHT = 0
    DOWN = 1
    LEFT = 2
    UP = 3

    @property
    def delta(self) -> tuple:
        return _DELTAS[self]


_DELTAS = {
    Direction.RIGHT: (1, 0),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
    Direction.UP: (0, -1),
}


@dataclass
class FishState:
    """Pointer position, facing, string mode and the stack-of-stacks.

    ``stacks[active]`` is the only stack instructions can reach. Slots above
    ``active`` are kept after ``]`` and reused by the next ``[`` at that
    depth.
    """

    x: int = 0
    y: int = 0
    direction: Direction = Direction.RIGHT
    string_mode: Optional[int] = None
    stacks: List[Stack] = field(default_factory=lambda: [Stack()])
    active: int = 0
    compat: bool = False

    @classmethod
    def initial(cls, values: Optional[Iterable[float]] = None, *, compat: bool = False) -> "FishState":
        return cls(stacks=[Stack(values or ())], compat=compat)

    @property
    def stack(self) -> Stack:
        return self.stacks[self.active]

    @property
    def depth(self) -> int:
        return self.active + 1

    def stack_length(self) -> int:
        return len(self.stacks[self.active])

    def new_stack(self, count: int) -> None:
        parent = self.stacks[self.active]
        if count < 0:
            raise InvalidNumber(f"cannot move {count} values to a new stack")
        if count > len(parent):
            raise EmptyStack(f"new stack: needs {count} values, stack has {len(parent)}")
        split = len(parent.cells) - count
        moved = parent.cells[split:]
        del parent.cells[split:]
        self.active += 1
        if self.active == len(self.stacks):
            self.stacks.append(Stack(moved))
        else:
            self.stacks[self.active].replace(moved)
        if self.compat:
            self.stacks[self.active].reverse()
        LOGGER.debug("opened stack %d with %d values", self.active, count)

    def close_stack(self) -> None:
        if self.active == 0:
            raise NoParentStack("cannot close the bottom stack")
        closing = self.stacks[self.active]
        if self.compat:
            closing.reverse()
        self.active -= 1
        self.stacks[self.active].cells.extend(closing.cells)
        closing.cells = []
        LOGGER.debug("closed stack %d", self.active + 1)

    def advance(self, width: int, height: int) -> None:
        dx, dy = self.direction.delta
        self.x = (self.x + dx) % width
        self.y = (self.y + dy) % height

    def snapshot(self) -> Dict[str, Any]:
        return {
            "x": self.x,
            "y": self.y,
            "direction": self.direction.name,
            "string_mode": chr(self.string_mode) if self.string_mode is not None else None,
            "active": self.active,
            "stacks": [
                {"values": stack.values(), "register": stack.register}
                for stack in self.stacks[: self.active + 1]
            ],
        }


__all__ = ["Direction", "FishState"]
