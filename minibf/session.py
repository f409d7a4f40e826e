#!/usr/bin/env python3
"""
Interactive Brainfuck session.

Program text is typed (or piped) on stdin. End-of-transmission (Ctrl+D)
runs the buffered text, then the tape, cursor, watermark and debug counters
start over from scratch. An end-of-transmission with nothing buffered means
the stream is closed and the session ends. Ctrl+C ends it at once.
"""

import signal
import sys
from typing import BinaryIO, Optional, TextIO

from minibf.brainfuck import BrainfuckInterpreter
from minibf.core.config import RuntimeConfig
from minibf.core.errors import SessionInterrupted
from minibf.core.program import Program

VERSION = "0.3"


def banner(config: RuntimeConfig) -> str:
    return (
        f"\n    MiniBf {VERSION}\n"
        f"\n    TAPE SIZE: {config.tape_size}"
        f"\n    CELL SIZE: 0-{config.cell_max}\n"
        f"\n    Input 'minibf -h' for help\n"
    )


class Session:
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
        self.interpreter = BrainfuckInterpreter(self.config, self.stdin, self.stdout, self.stderr)
        self.capacity = self.config.tape_size - 1
        self.cancelled = False
        self.iterations = 0

    def request_stop(self) -> None:
        self.cancelled = True

    def read_chunk(self) -> Optional[bytes]:
        """Buffer bytes until end-of-transmission.

        Returns None when the stream is closed (nothing arrived before the
        end-of-transmission, or the stream can no longer be read).
        """
        buf = bytearray()
        try:
            while len(buf) < self.capacity:
                data = self.stdin.read(1)
                if not data:
                    return bytes(buf) if buf else None
                buf += data
            dropped = self._drain()
        except (ValueError, OSError):
            return None
        if not buf:
            return None
        if dropped:
            self.stderr.write(f"⚠️ Program truncated to {self.capacity} bytes ({dropped} bytes dropped)\n")
            self.stderr.flush()
        return bytes(buf)

    def _drain(self) -> int:
        dropped = 0
        while self.stdin.read(1):
            dropped += 1
        return dropped

    def run_once(self, chunk: bytes) -> None:
        # A new state per iteration is the whole reset.
        self.interpreter.run(Program(chunk), self.interpreter.new_state())
        self.iterations += 1

    def run(self) -> int:
        """Loop fill -> execute -> reset until the stream closes or a stop is requested."""
        try:
            while not self.cancelled:
                chunk = self.read_chunk()
                if chunk is None:
                    break
                self.run_once(chunk)
        except SessionInterrupted:
            self.cancelled = True
        return self.iterations


def install_interrupt_handler(session: Session, out: Optional[TextIO] = None):
    """Route SIGINT to the session: set its stop flag, print a notice, unwind.

    Returns the previous handler so callers can restore it.
    """
    out = out if out is not None else sys.stdout

    def handle_sigint(signum, frame):
        session.request_stop()
        out.write("\nProcess Terminated\n")
        out.flush()
        raise SessionInterrupted()

    return signal.signal(signal.SIGINT, handle_sigint)
