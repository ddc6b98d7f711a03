import io
from pathlib import Path
from typing import Optional, Union

from .brainfuck import run
from .config import InterpreterConfig
from .program import load, load_file


def run_source(code: Union[str, bytes], data: bytes = b"",
               config: Optional[InterpreterConfig] = None) -> bytes:
    """Execute BF code against in-memory input and return everything it wrote.
    Load and execution errors propagate unchanged.
    """
    out = io.BytesIO()
    run(load(code), io.BytesIO(data), out, config)
    return out.getvalue()


def run_file(path: Union[str, Path], data: bytes = b"",
             config: Optional[InterpreterConfig] = None) -> bytes:
    out = io.BytesIO()
    run(load_file(path), io.BytesIO(data), out, config)
    return out.getvalue()
