"""
Brainfuck program loading

Turns raw source text into an immutable Program: the ordered list of the eight
instructions plus a jump table pairing every '[' with its matching ']'.

    >   Move the pointer to the right
    <   Move the pointer to the left
    +   Increment the memory cell at the pointer
    -   Decrement the memory cell at the pointer
    .   Output the byte at the pointer
    ,   Input a byte and store it in the cell at the pointer
    [   Jump past the matching ] if the cell at the pointer is 0
    ]   Jump back to the matching [ if the cell at the pointer is nonzero

All other characters are treated as comments and ignored.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Dict, List, Mapping, Tuple, Union

from .errors import UnmatchedClose, UnmatchedOpen


class Instruction(Enum):
    INCREMENT_POINTER = '>'
    DECREMENT_POINTER = '<'
    INCREMENT_CELL = '+'
    DECREMENT_CELL = '-'
    WRITE_BYTE = '.'
    READ_BYTE = ','
    JUMP_IF_ZERO = '['
    JUMP_IF_NONZERO = ']'

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]


_DESCRIPTIONS = {
    Instruction.INCREMENT_POINTER: "Increment current pointer",
    Instruction.DECREMENT_POINTER: "Decrement current pointer",
    Instruction.INCREMENT_CELL: "Increment current data",
    Instruction.DECREMENT_CELL: "Decrement current data",
    Instruction.WRITE_BYTE: "Print out current data",
    Instruction.READ_BYTE: "Type into current data",
    Instruction.JUMP_IF_ZERO: "Start looping",
    Instruction.JUMP_IF_NONZERO: "End looping",
}

COMMANDS = frozenset(op.value for op in Instruction)


@dataclass(frozen=True)
class SourcePosition:
    """1-based line and column of an instruction in its source file."""
    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"


@dataclass(frozen=True)
class Program:
    """A validated program, ready to run. Never mutated after loading."""
    instructions: Tuple[Instruction, ...]
    jump_table: Mapping[int, int]
    positions: Tuple[SourcePosition, ...] = field(default=(), compare=False)
    filename: str = field(default="", compare=False)

    # the jump table is a read-only view of a dict and cannot be hashed
    __hash__ = None

    def __len__(self) -> int:
        return len(self.instructions)

    def __getitem__(self, index: int) -> Instruction:
        return self.instructions[index]

    def match(self, index: int) -> int:
        """Index of the bracket paired with the bracket at ``index``."""
        return self.jump_table[index]

    def position(self, index: int):
        if 0 <= index < len(self.positions):
            return self.positions[index]
        return None

    def source_text(self) -> str:
        return ''.join(op.value for op in self.instructions)

    def listing(self) -> List[str]:
        """One line per instruction: file, line:column and a description."""
        lines = []
        for op, pos in zip(self.instructions, self.positions):
            lines.append(f"{self.filename}: {pos.line:>5}:{pos.column:<5}> {op.description}")
        return lines


def load(source: Union[str, bytes], filename: str = "") -> Program:
    """Filter ``source`` down to instructions and build the jump table.

    Raises UnmatchedClose when a ']' has no pending '[' and UnmatchedOpen when
    a '[' is still open at the end of the source.
    """
    if isinstance(source, (bytes, bytearray)):
        source = bytes(source).decode('latin-1')

    instructions: List[Instruction] = []
    positions: List[SourcePosition] = []
    jump_table: Dict[int, int] = {}
    stack: List[int] = []

    # only '\n' ends a line; form feeds and 0x85 bytes in comments are text
    for line_no, line in enumerate(source.split('\n'), start=1):
        for col_no, ch in enumerate(line, start=1):
            if ch not in COMMANDS:
                continue
            index = len(instructions)
            op = Instruction(ch)
            pos = SourcePosition(line_no, col_no)
            instructions.append(op)
            positions.append(pos)

            if op is Instruction.JUMP_IF_ZERO:
                stack.append(index)
            elif op is Instruction.JUMP_IF_NONZERO:
                if not stack:
                    raise UnmatchedClose(index, pos, filename)
                start = stack.pop()
                jump_table[start] = index
                jump_table[index] = start

    if stack:
        unclosed = stack[-1]
        raise UnmatchedOpen(unclosed, positions[unclosed], filename)

    return Program(
        instructions=tuple(instructions),
        jump_table=MappingProxyType(jump_table),
        positions=tuple(positions),
        filename=filename,
    )


def load_file(path: Union[str, Path]) -> Program:
    """Read a program from disk. OS errors propagate to the caller."""
    path = Path(path)
    return load(path.read_bytes(), filename=str(path))
