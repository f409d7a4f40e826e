"""
Brainfuck to C translation.

One statement per instruction, loops become native while blocks. No bracket
checking is done here: an unbalanced program gives unbalanced C, and the C
compiler reports it. Debug commands and comments are dropped.
"""

from typing import Iterable, Iterator

from minibf.core.errors import OutputWriteError
from minibf.core.program import DEFAULT_CAPACITY, Program, load_program

C_PREAMBLE = (
    "#include <stdio.h>\n"
    "#include <stdlib.h>\n\n"
    "int main(int argc, char **argv)\n{{\n"
    "\tunsigned char *cell = calloc({size}, 1);\n"
    "\tunsigned char *cells = cell;\n"
    "\tif (!cell) {{\n"
    "\t\tfprintf(stderr, \"Error allocating memory.\\n\");\n"
    "\t\treturn 1;\n"
    "\t}}\n\n"
)

C_EPILOGUE = "\n\tfree(cells);\n\treturn 0;\n}\n\n"

C_STATEMENTS = {
    ord(">"): "\t\t++cell;\n",
    ord("<"): "\t\t--cell;\n",
    ord("+"): "\t\t++*cell;\n",
    ord("-"): "\t\t--*cell;\n",
    ord("."): "\t\tputchar(*cell);\n",
    ord(","): "\t\t*cell = getchar();\n",
    ord("["): "\twhile (*cell) {\n",
    ord("]"): "\t}\n",
}


def iter_c_source(source: Iterable[int], tape_size: int = DEFAULT_CAPACITY) -> Iterator[str]:
    yield C_PREAMBLE.format(size=tape_size)
    for byte in source:
        stmt = C_STATEMENTS.get(byte)
        if stmt is not None:
            yield stmt
    yield C_EPILOGUE


def translate(program: Program, tape_size: int = DEFAULT_CAPACITY) -> str:
    """Return the complete C translation unit for program."""
    return "".join(iter_c_source(program.source, tape_size))


def translate_file(input_path: str, output_path: str, tape_size: int = DEFAULT_CAPACITY) -> str:
    # The whole file is translated; tape_size only sizes the generated buffer.
    program = load_program(input_path, capacity=None)
    try:
        with open(output_path, "w") as f:
            f.writelines(iter_c_source(program.source, tape_size))
    except OSError as e:
        raise OutputWriteError(f"Could not open output file {output_path}") from e
    print(f"Brainfuck code converted to C code in {output_path}")
    return output_path
