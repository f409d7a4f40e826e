"""
Native compilation of translated programs through an external C compiler.
"""

import os
import subprocess
import tempfile

from minibf.bf_to_c import translate_file
from minibf.core.errors import CompilerError
from minibf.core.program import DEFAULT_CAPACITY


def compile_c(c_path: str, executable_path: str, compiler: str = "gcc") -> str:
    """Run `compiler c_path -o executable_path`."""
    try:
        result = subprocess.run([compiler, c_path, "-o", executable_path])
    except OSError as e:
        raise CompilerError(f"Compilation failed: could not run {compiler}") from e
    if result.returncode != 0:
        raise CompilerError(f"Compilation failed: {compiler} exited with status {result.returncode}")
    print(f"Executable created: {executable_path}")
    return executable_path


def compile_file(input_path: str, executable_path: str, compiler: str = "gcc",
                 tape_size: int = DEFAULT_CAPACITY) -> str:
    """Translate a Brainfuck file to C in a temp file and compile it."""
    fd, c_path = tempfile.mkstemp(suffix=".c", prefix="minibf_")
    os.close(fd)
    try:
        translate_file(input_path, c_path, tape_size)
        return compile_c(c_path, executable_path, compiler)
    finally:
        os.remove(c_path)
