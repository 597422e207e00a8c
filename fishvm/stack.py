"""Single ><> stack with its register slot."""

from __future__ import annotations

from typing import Iterable, List, Optional

from .errors import EmptyStack


class Stack:
    """Ordered float cells plus one optional register value.

    Values are appended and removed at the end of ``cells``; only the rotate
    and shift operations reorder the whole sequence.
    """

    __slots__ = ("cells", "_register")

    def __init__(self, values: Optional[Iterable[float]] = None) -> None:
        self.cells: List[float] = [float(v) for v in values] if values is not None else []
        self._register: Optional[float] = None

    def __len__(self) -> int:
        return len(self.cells)

    def __repr__(self) -> str:
        return f"Stack({self.cells!r}, register={self._register!r})"

    @property
    def register(self) -> Optional[float]:
        return self._register

    @property
    def has_register(self) -> bool:
        return self._register is not None

    def values(self) -> List[float]:
        return list(self.cells)

    def replace(self, values: Iterable[float]) -> None:
        self.cells = list(values)
        self._register = None

    def _require(self, count: int, op: str) -> None:
        if len(self.cells) < count:
            if count == 1:
                raise EmptyStack(f"{op}: stack is empty")
            raise EmptyStack(f"{op}: needs {count} values, stack has {len(self.cells)}")

    def push(self, value: float) -> None:
        self.cells.append(float(value))

    def pop(self) -> float:
        self._require(1, "pop")
        return self.cells.pop()

    def register_toggle(self) -> None:
        if self._register is not None:
            self.cells.append(self._register)
            self._register = None
        else:
            self._register = self.pop()

    def duplicate_top(self) -> None:
        self._require(1, "duplicate")
        self.cells.append(self.cells[-1])

    def reverse(self) -> None:
        self.cells.reverse()

    def swap_top_two(self) -> None:
        self._require(2, "swap")
        cells = self.cells
        cells[-1], cells[-2] = cells[-2], cells[-1]

    def rotate_top_three(self) -> None:
        # [.., w, y, z] -> [.., y, z, w]
        self._require(3, "rotate")
        cells = self.cells
        cells[-3], cells[-2], cells[-1] = cells[-2], cells[-1], cells[-3]

    def shift_right(self) -> None:
        self._require(1, "shift right")
        self.cells.insert(0, self.cells.pop())

    def shift_left(self) -> None:
        self._require(1, "shift left")
        self.cells.append(self.cells.pop(0))


__all__ = ["Stack"]
