#!/usr/bin/env python3
"""
Brainfuck Debug Instrumentation

Read-only views of the tape, triggered from inside a running program:
    #   Report the current cell (index and value)
    @   Dump every cell from 0 up to the highest cell the cursor reached,
        five per line

Each kind keeps its own sequence number, starting at 1 for every fresh
session state.
"""

from typing import BinaryIO

from minibf.core.tape import SessionState

COLOR_RESET = "\x1b[0m"
COLOR_GREEN = "\x1b[32m"
COLOR_YELLOW = "\x1b[33m"

CELLS_PER_LINE = 5


class BrainfuckDebugger:
    """Formats '#' and '@' reports for one session state."""

    def __init__(self, out: BinaryIO, color: bool = False):
        self.out = out
        self.color = color

    def _paint(self, text: str, color: str) -> str:
        return f"{color}{text}{COLOR_RESET}" if self.color else text

    def cell_report(self, state: SessionState) -> str:
        header = self._paint(f"\n\n# DEBUG INFO ({state.debug_counter}):\n", COLOR_YELLOW)
        state.debug_counter += 1
        return f"{header}cell #{state.cursor}: {state.cell}\n"

    def memory_report(self, state: SessionState) -> str:
        header = self._paint(f"\n\n@ DEBUG INFO ({state.memory_counter}):\n", COLOR_GREEN)
        state.memory_counter += 1
        parts = [header]
        for i, value in enumerate(state.tape.window(state.watermark)):
            parts.append(f"#{i}: {value}  ")
            if i % CELLS_PER_LINE == CELLS_PER_LINE - 1:
                parts.append("\n")
        parts.append("\n")
        return "".join(parts)

    def show_cell(self, state: SessionState) -> None:
        self.out.write(self.cell_report(state).encode("utf-8"))

    def show_memory(self, state: SessionState) -> None:
        self.out.write(self.memory_report(state).encode("utf-8"))
