"""
Bracket matching.

A single left-to-right scan with a position stack pairs every '[' with its
']'. Unmatched brackets never abort the scan; they are collected as
diagnostics and simply get no entry in the table.
"""

from dataclasses import dataclass
from typing import Dict, List, Tuple

from minibf.core.program import Program

COLOR_RESET = "\x1b[0m"
COLOR_RED = "\x1b[31m"

UNMATCHED_CLOSE = "close"
UNMATCHED_OPEN = "open"


@dataclass(frozen=True)
class BracketDiagnostic:
    kind: str
    position: int
    source: str
    column: int = -1

    @property
    def caret_column(self) -> int:
        """Character column of the offending byte within the decoded source."""
        return self.position if self.column < 0 else self.column

    @property
    def message(self) -> str:
        if self.kind == UNMATCHED_CLOSE:
            return f"Error: couldn't find matching '[' for ']' at byte {self.position}"
        return f"Error: couldn't find matching ']' for '[' at byte {self.position}"

    @property
    def marker(self) -> str:
        return "^ missing '['" if self.kind == UNMATCHED_CLOSE else "^ missing ']'"

    def render(self, color: bool = False) -> str:
        """Message line, full source echo, and a caret under the offset."""
        red, reset = (COLOR_RED, COLOR_RESET) if color else ("", "")
        return (
            f"\n\n{red}{self.message}{reset}\n"
            f"{self.source}\n"
            f"{' ' * self.caret_column}{red}{self.marker}{reset}\n"
        )


def _column(program: Program, pos: int) -> int:
    # Multi-byte UTF-8 in comments makes byte offsets and columns differ.
    return len(program.source[:pos].decode("utf-8", errors="replace"))


def build_jump_table(program: Program) -> Tuple[Dict[int, int], List[BracketDiagnostic]]:
    """Map each matched bracket position to its counterpart.

    Returns (table, diagnostics). The table is sparse: only bracket positions
    appear as keys, and for matched pairs table[table[p]] == p.
    """
    table: Dict[int, int] = {}
    diagnostics: List[BracketDiagnostic] = []
    stack: List[int] = []
    text = None

    for pos, byte in enumerate(program.source):
        if byte == 0x5B:  # '['
            stack.append(pos)
        elif byte == 0x5D:  # ']'
            if not stack:
                text = text if text is not None else program.as_text()
                diagnostics.append(BracketDiagnostic(UNMATCHED_CLOSE, pos, text, _column(program, pos)))
                continue
            start = stack.pop()
            table[start] = pos
            table[pos] = start

    while stack:
        text = text if text is not None else program.as_text()
        pos = stack.pop()
        diagnostics.append(BracketDiagnostic(UNMATCHED_OPEN, pos, text, _column(program, pos)))

    return table, diagnostics
