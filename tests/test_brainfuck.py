import io
import unittest

from helpers import BRAINFUCK_PRINTER, SMALL

from minibf.brainfuck import BrainfuckInterpreter, run_source
from minibf.core.config import RuntimeConfig
from minibf.core.program import Program


def run(code, stdin=b"", config=SMALL):
    out, err = io.BytesIO(), io.StringIO()
    itp = BrainfuckInterpreter(config, stdin=io.BytesIO(stdin), stdout=out, stderr=err)
    state = itp.run(Program.from_text(code))
    return out.getvalue(), err.getvalue(), state, itp


class TestExecution(unittest.TestCase):

    def test_increment_and_output(self):
        out, err, _, _ = run("+" * 65 + ".")
        self.assertEqual(out, b"A\n")
        self.assertEqual(err, "")

    def test_output_independent_of_tape_position(self):
        out, _, _, _ = run(">>>>" + "+" * 66 + ".")
        self.assertEqual(out, b"B\n")

    def test_decrement_below_zero_is_noop(self):
        out, _, state, _ = run("-.")
        self.assertEqual(out, b"\x00\n")
        self.assertEqual(state.cell, 0)

    def test_increment_past_cell_max_wraps(self):
        out, _, state, _ = run("+" * 32767 + ".")
        self.assertEqual(state.cell, 32767)
        self.assertEqual(out, bytes([32767 & 0xFF]) + b"\n")
        out, _, state, _ = run("+" * 32768 + ".")
        self.assertEqual(state.cell, 0)
        self.assertEqual(out, b"\x00\n")

    def test_loop_doubles_input(self):
        out, _, _, itp = run(",[->++<]>.", stdin=bytes([21]))
        self.assertEqual(out, b"*\n")
        self.assertEqual(itp.input_reads, 1)
        self.assertEqual(itp.output_writes, 1)

    def test_zero_cell_skips_loop_body(self):
        out, _, _, _ = run("[+++.]+.")
        self.assertEqual(out, b"\x01\n")

    def test_brainfuck_printer(self):
        out, err, state, _ = run(BRAINFUCK_PRINTER)
        self.assertEqual(out, b"brainfuck\n\n")
        self.assertEqual(err, "")
        self.assertEqual(state.watermark, 24)

    def test_read_at_end_of_input_leaves_cell(self):
        out, _, _, itp = run("+++,.", stdin=b"")
        self.assertEqual(out, b"\x03\n")
        self.assertEqual(itp.input_reads, 0)

    def test_read_line_feed(self):
        out, _, _, _ = run(",.", stdin=b"\n")
        self.assertEqual(out, b"\n\n")

    def test_comments_are_ignored(self):
        out, _, _, _ = run("add one: +, then print it: .")
        self.assertEqual(out, b"\x01\n")

    def test_unmatched_close_reports_and_continues(self):
        out, err, _, _ = run("]" + "+" * 65 + ".")
        self.assertEqual(out, b"A\n")
        self.assertEqual(err.count("Error:"), 1)
        self.assertIn("at byte 0", err)

    def test_unmatched_open_is_noop(self):
        out, err, _, _ = run("+[+.")
        self.assertEqual(out, b"\x02\n")
        self.assertIn("couldn't find matching ']' for '[' at byte 1", err)

    def test_cursor_left_of_tape_reads_zero(self):
        out, _, state, _ = run("<+.>+.")
        self.assertEqual(out, b"\x00\x01\n")
        self.assertEqual(state.cursor, 0)

    def test_step_limit(self):
        config = RuntimeConfig(tape_size=100, step_limit=50)
        out, _, _, itp = run("+[]", config=config)
        self.assertTrue(itp.hit_step_limit)
        self.assertEqual(out, b"\n")

    def test_state_can_be_supplied(self):
        out = io.BytesIO()
        itp = BrainfuckInterpreter(SMALL, stdin=io.BytesIO(), stdout=out, stderr=io.StringIO())
        state = itp.new_state()
        itp.run(Program(b"+++"), state)
        itp.run(Program(b"."), state)
        self.assertEqual(out.getvalue(), b"\n\x03\n")

    def test_run_source(self):
        out = io.BytesIO()
        run_source("++.", config=SMALL, stdin=io.BytesIO(), stdout=out, stderr=io.StringIO())
        self.assertEqual(out.getvalue(), b"\x02\n")


class TestDebugCommands(unittest.TestCase):

    def test_cell_reports_are_numbered(self):
        out, _, _, _ = run(">+#+#")
        text = out.decode()
        self.assertIn("\n\n# DEBUG INFO (1):\ncell #1: 1\n", text)
        self.assertIn("\n\n# DEBUG INFO (2):\ncell #1: 2\n", text)

    def test_memory_dump_covers_watermark(self):
        out, _, _, _ = run("+>++>>>>+++++<<<<@")
        text = out.decode()
        self.assertIn("@ DEBUG INFO (1):\n", text)
        self.assertIn("#0: 1  #1: 2  #2: 0  #3: 0  #4: 0  \n#5: 5  \n", text)

    def test_debug_output_is_plain_without_color(self):
        out, _, _, _ = run("#@")
        self.assertNotIn(b"\x1b[", out)

    def test_debug_output_colored(self):
        out, _, _, _ = run("#@", config=RuntimeConfig(tape_size=10, color=True))
        self.assertIn(b"\x1b[33m", out)
        self.assertIn(b"\x1b[32m", out)


if __name__ == "__main__":
    unittest.main()
