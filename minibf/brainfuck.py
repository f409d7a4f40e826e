#!/usr/bin/env python3
"""
MiniBf execution engine.

Walks a program byte by byte using the precomputed bracket table and
mutates one session state (tape, cursor, watermark, debug counters).

Instruction set, one byte each:
    + -     bump the active cell up, or down unless it already holds 0
    > <     step the cursor to the next or previous cell
    . ,     write the active cell as a byte / read one byte into it
    [ ]     skip the loop body when the cell is 0 / repeat it while it is not
    # @     print the active cell / print the tape up to the watermark

Any other byte is a comment. When the program counter runs off the end a
single newline is written as an end-of-run marker.
"""

import sys
from typing import BinaryIO, Optional, TextIO

from minibf.brainfuck_debugger import BrainfuckDebugger
from minibf.core.config import RuntimeConfig
from minibf.core.jump_table import build_jump_table
from minibf.core.program import Program
from minibf.core.tape import SessionState

PLUS, MINUS, LEFT, RIGHT = 0x2B, 0x2D, 0x3C, 0x3E
READ, WRITE, OPEN, CLOSE = 0x2C, 0x2E, 0x5B, 0x5D
DEBUG_CELL, DEBUG_MEMORY = 0x23, 0x40
LINE_FEED = 0x0A


class BrainfuckInterpreter:
    def __init__(
        self,
        config: Optional[RuntimeConfig] = None,
        stdin: Optional[BinaryIO] = None,
        stdout: Optional[BinaryIO] = None,
        stderr: Optional[TextIO] = None,
    ):
        self.config = config or RuntimeConfig()
        self.stdin = stdin if stdin is not None else sys.stdin.buffer
        self.stdout = stdout if stdout is not None else sys.stdout.buffer
        self.stderr = stderr if stderr is not None else sys.stderr
        self.debugger = BrainfuckDebugger(self.stdout, color=self.config.color)
        self.instruction_pointer = 0
        self.input_reads = 0
        self.output_writes = 0
        self.hit_step_limit = False

    def new_state(self) -> SessionState:
        return SessionState.fresh(self.config.tape_size, self.config.cell_max)

    def run(self, program: Program, state: Optional[SessionState] = None) -> SessionState:
        """Execute a program against state (a fresh one if not given).

        Bracket diagnostics go to stderr but never stop the run. A newline is
        written to stdout once the program counter falls off the end.
        """
        state = state if state is not None else self.new_state()
        jump_table, diagnostics = build_jump_table(program)
        for diag in diagnostics:
            self.stderr.write(diag.render(self.config.color))
        self.stderr.flush()

        code = program.source
        tape = state.tape
        step_limit = self.config.step_limit
        self.instruction_pointer = 0
        self.input_reads = 0
        self.output_writes = 0
        self.hit_step_limit = False
        step_count = 0

        while self.instruction_pointer < len(code):
            if step_limit and step_count >= step_limit:
                self.hit_step_limit = True
                break
            cmd = code[self.instruction_pointer]

            if cmd == PLUS:
                tape.increment(state.cursor)

            elif cmd == MINUS:
                tape.decrement(state.cursor)

            elif cmd == LEFT:
                state.move_left()

            elif cmd == RIGHT:
                state.move_right()

            elif cmd == READ:
                self._read_into(state)

            elif cmd == WRITE:
                self.stdout.write(bytes((tape.get(state.cursor) & 0xFF,)))
                self.output_writes += 1

            elif cmd == OPEN:
                # Unmatched brackets have no entry and act as no-ops.
                if tape.get(state.cursor) == 0:
                    self.instruction_pointer = jump_table.get(self.instruction_pointer, self.instruction_pointer)

            elif cmd == CLOSE:
                if tape.get(state.cursor) != 0:
                    self.instruction_pointer = jump_table.get(self.instruction_pointer, self.instruction_pointer)

            elif cmd == DEBUG_CELL:
                self.debugger.show_cell(state)

            elif cmd == DEBUG_MEMORY:
                self.debugger.show_memory(state)

            self.instruction_pointer += 1
            step_count += 1

        self.stdout.write(b"\n")
        self.stdout.flush()
        return state

    def _read_into(self, state: SessionState) -> None:
        # Pending output should be visible before blocking on input.
        self.stdout.flush()
        data = self.stdin.read(1)
        if not data:
            # End of input: leave the cell unchanged
            return
        value = data[0]
        if value == LINE_FEED:
            value = 10
        state.tape.set(state.cursor, value)
        self.input_reads += 1


def run_source(text, config: Optional[RuntimeConfig] = None, stdin: Optional[BinaryIO] = None,
               stdout: Optional[BinaryIO] = None, stderr: Optional[TextIO] = None) -> SessionState:
    """Execute program text once with a fresh tape."""
    config = config or RuntimeConfig()
    interpreter = BrainfuckInterpreter(config, stdin=stdin, stdout=stdout, stderr=stderr)
    return interpreter.run(Program.from_text(text, config.tape_size))
