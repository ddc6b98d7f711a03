__version__ = "1.0.0"

from .brainfuck import BrainfuckInterpreter, Status, run
from .config import InterpreterConfig
from .errors import (
    BrainfuckError,
    ExecutionError,
    IoFailure,
    LoadError,
    PointerUnderflow,
    TapeOverflow,
    UnmatchedClose,
    UnmatchedOpen,
)
from .program import Instruction, Program, SourcePosition, load, load_file
from .tape import Tape

__all__ = [
    "BrainfuckError",
    "BrainfuckInterpreter",
    "ExecutionError",
    "Instruction",
    "InterpreterConfig",
    "IoFailure",
    "LoadError",
    "PointerUnderflow",
    "Program",
    "SourcePosition",
    "Status",
    "Tape",
    "TapeOverflow",
    "UnmatchedClose",
    "UnmatchedOpen",
    "load",
    "load_file",
    "run",
]
