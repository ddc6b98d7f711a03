"""Errors raised while loading and running Brainfuck programs."""

from typing import Optional


class BrainfuckError(Exception):
    """Base class for every error raised by bfcore."""


def _where(position, filename: str = "") -> str:
    if position is None:
        return ""
    prefix = f"{filename}:" if filename else ""
    return f" ({prefix}line {position.line} col {position.column})"


class LoadError(BrainfuckError, SyntaxError):
    """The source has an unbalanced bracket structure."""

    reason = "bracket structure is unbalanced"

    def __init__(self, index: int, position=None, filename: str = ""):
        super().__init__(f"{self.reason} at instruction {index}{_where(position, filename)}")
        self.index = index
        self.position = position
        self.filename = filename
        if position is not None:
            self.lineno = position.line
            self.offset = position.column

    def __str__(self) -> str:
        # SyntaxError.__str__ would append the basename of filename
        return self.msg


class UnmatchedOpen(LoadError):
    reason = "unmatched '['"


class UnmatchedClose(LoadError):
    reason = "unmatched ']'"


class ExecutionError(BrainfuckError, RuntimeError):
    """A fault that stopped a running program.

    Carries the faulting instruction index together with the register state at
    the moment of the fault so callers can print a useful diagnostic.
    """

    reason = "execution fault"

    def __init__(self, index: int, instruction=None, position=None,
                 data_pointer: int = 0, instruction_pointer: Optional[int] = None,
                 detail: str = ""):
        self.index = index
        self.instruction = instruction
        self.position = position
        self.data_pointer = data_pointer
        self.instruction_pointer = index if instruction_pointer is None else instruction_pointer
        self.detail = detail
        op = f" '{instruction.value}'" if instruction is not None else ""
        extra = f": {detail}" if detail else ""
        super().__init__(
            f"{self.reason} at instruction {index}{op}{_where(position)}"
            f" [ip={self.instruction_pointer} dp={data_pointer}]{extra}"
        )


class PointerUnderflow(ExecutionError):
    reason = "data pointer moved below cell 0"


class TapeOverflow(ExecutionError):
    reason = "tape grew past its cell limit"


class IoFailure(ExecutionError):
    reason = "I/O failure"
