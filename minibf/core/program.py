"""
Program buffer.

Holds the raw instruction bytes of one Brainfuck program. Every byte is kept,
including comments; the interpreter and the jump table builder skip anything
that is not an instruction symbol.
"""

from dataclasses import dataclass
from typing import Optional

from minibf.core.errors import ProgramLoadError

DEFAULT_CAPACITY = 16777216


@dataclass(frozen=True)
class Program:
    source: bytes

    def __len__(self) -> int:
        return len(self.source)

    @classmethod
    def from_text(cls, text, capacity: int = DEFAULT_CAPACITY) -> "Program":
        """Build a program from str or bytes, capped at capacity bytes."""
        if isinstance(text, str):
            text = text.encode("utf-8")
        return cls(bytes(text[:capacity]))

    def as_text(self) -> str:
        return self.source.decode("utf-8", errors="replace")


def load_program(path: str, capacity: Optional[int] = DEFAULT_CAPACITY) -> Program:
    """Read up to capacity bytes of a file in one shot (the whole file if capacity is None)."""
    try:
        with open(path, "rb") as f:
            data = f.read() if capacity is None else f.read(capacity)
    except OSError as e:
        raise ProgramLoadError(f"Could not open file {path}") from e
    return Program(data)
