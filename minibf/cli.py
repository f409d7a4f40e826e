#!/usr/bin/env python3
"""
MiniBf command line.

    minibf                      Run the interpreter interactively.
    minibf -f <filename>        Execute Brainfuck code from a file.
    minibf -t <filename>        Convert Brainfuck code to C code.
    minibf -c <input> <output>  Compile Brainfuck code to an executable.
"""

import argparse
import signal
import sys

from minibf.bf_to_c import translate_file
from minibf.brainfuck import BrainfuckInterpreter
from minibf.core.config import load_config
from minibf.core.errors import MiniBfError
from minibf.core.jump_table import COLOR_RED, COLOR_RESET
from minibf.core.program import load_program
from minibf.session import VERSION, Session, banner, install_interrupt_handler
from minibf.toolchain import compile_file

COMMANDS_HELP = """
Commands:
  +                       Increment the current cell
  -                       Decrement the current cell
  >                       Move the pointer to the right
  <                       Move the pointer to the left
  [                       Jump past the matching ] if the cell at the pointer is 0
  ]                       Jump back to the matching [ if the cell at the pointer is nonzero
  .                       Output the character at the pointer
  ,                       Input a character and store it in the cell at the pointer
  #                       Output the value of the current cell for debugging
  @                       Output the values of all cells used so far for debugging

Controls:
  Ctrl + D                Execute the entered code.
  Ctrl + C                Exit the interpreter.
"""


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="minibf",
        description=f"MiniBf {VERSION}\nA simple Brainfuck interpreter / compiler.",
        epilog=COMMANDS_HELP,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    mode = ap.add_mutually_exclusive_group()
    mode.add_argument("-f", dest="run_file", metavar="FILENAME", help="Execute Brainfuck code from a file")
    mode.add_argument("-t", dest="translate", metavar="FILENAME", help="Convert Brainfuck code to C code")
    mode.add_argument("-c", dest="compile", nargs=2, metavar=("INPUT", "OUTPUT"),
                      help="Compile Brainfuck code to an executable")
    ap.add_argument("-o", dest="c_output", default=None, help="C output path for -t (default from config)")
    ap.add_argument("--config", default=None, help="Path to YAML file with runtime settings")
    return ap


def _error(message: str, color: bool) -> None:
    if color:
        message = f"{COLOR_RED}{message}{COLOR_RESET}"
    print(message, file=sys.stderr)


def run_interactive(config) -> int:
    print(banner(config))
    session = Session(config)
    previous = install_interrupt_handler(session)
    try:
        session.run()
    finally:
        signal.signal(signal.SIGINT, previous)
    return 0


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    try:
        config = load_config(args.config)
    except MiniBfError as e:
        _error(f"Error: {e}", False)
        return 1

    try:
        if args.run_file:
            program = load_program(args.run_file, config.tape_size)
            BrainfuckInterpreter(config).run(program)
        elif args.translate:
            translate_file(args.translate, args.c_output or config.c_output, config.tape_size)
        elif args.compile:
            compile_file(args.compile[0], args.compile[1], config.compiler, config.tape_size)
        else:
            return run_interactive(config)
    except MiniBfError as e:
        _error(f"Error: {e}", config.color)
        return 1
    except KeyboardInterrupt:
        print("\nProcess Terminated")
    return 0


if __name__ == "__main__":
    sys.exit(main())
