"""
Tape store and per-run session state.

The tape is a fixed-size numpy array of narrow (int16) cells. Cell values stay
inside [0, cell_max]: decrementing a zero cell does nothing and incrementing a
cell at cell_max wraps it back to 0.

The cursor is not bounds-checked. It may wander off either end of the tape;
while it is outside, reads see 0 and writes are dropped.
"""

from dataclasses import dataclass

import numpy as np

DEFAULT_TAPE_SIZE = 16777216
DEFAULT_CELL_MAX = 32767


class Tape:
    def __init__(self, size: int = DEFAULT_TAPE_SIZE, cell_max: int = DEFAULT_CELL_MAX):
        self.size = size
        self.cell_max = cell_max
        self.cells = np.zeros(size, dtype=np.int16)

    def in_range(self, index: int) -> bool:
        return 0 <= index < self.size

    def get(self, index: int) -> int:
        if not self.in_range(index):
            return 0
        return int(self.cells[index])

    def set(self, index: int, value: int) -> None:
        if self.in_range(index):
            self.cells[index] = value % (self.cell_max + 1)

    def increment(self, index: int) -> None:
        value = self.get(index)
        self.set(index, 0 if value >= self.cell_max else value + 1)

    def decrement(self, index: int) -> None:
        value = self.get(index)
        if value > 0:
            self.set(index, value - 1)

    def window(self, stop: int):
        """Values of cells 0..stop inclusive, clipped to the tape."""
        stop = min(stop, self.size - 1)
        if stop < 0:
            return []
        return self.cells[:stop + 1].tolist()


@dataclass
class SessionState:
    """Everything one execution mutates. A fresh instance is a full reset."""
    tape: Tape
    cursor: int = 0
    watermark: int = 0
    debug_counter: int = 1
    memory_counter: int = 1

    @classmethod
    def fresh(cls, tape_size: int = DEFAULT_TAPE_SIZE, cell_max: int = DEFAULT_CELL_MAX) -> "SessionState":
        return cls(tape=Tape(tape_size, cell_max))

    @property
    def cell(self) -> int:
        return self.tape.get(self.cursor)

    def move_right(self) -> None:
        self.cursor += 1
        if self.cursor > self.watermark:
            self.watermark = self.cursor

    def move_left(self) -> None:
        self.cursor -= 1
