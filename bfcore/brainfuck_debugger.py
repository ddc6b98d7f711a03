"""
Brainfuck Step-by-Step Debugger

Runs a program exactly like BrainfuckInterpreter while printing, for each
step, the instruction executed, what it did, and the state of the tape around
the data pointer.
"""

import sys
from typing import BinaryIO, Optional, TextIO

from .brainfuck import BrainfuckInterpreter, Status
from .config import InterpreterConfig
from .program import Instruction, Program


class BrainfuckDebugger(BrainfuckInterpreter):
    """Extended Brainfuck interpreter with step-by-step tracing."""

    def __init__(self, program: Program, input_stream: BinaryIO, output_stream: BinaryIO,
                 config: Optional[InterpreterConfig] = None, trace: Optional[TextIO] = None,
                 show_memory_range: int = 10, max_trace_steps: Optional[int] = 1000):
        super().__init__(program, input_stream, output_stream, config)
        self.trace = trace if trace is not None else sys.stderr
        self.show_memory_range = show_memory_range
        self.max_trace_steps = max_trace_steps
        self._announced_quiet = False

    def _tracing(self) -> bool:
        return self.max_trace_steps is None or self.steps < self.max_trace_steps

    def _print(self, text: str = "") -> None:
        print(text, file=self.trace)

    def step(self) -> Status:
        if self.status is not Status.CONTINUE or not self._tracing():
            if self.status is Status.CONTINUE and not self._announced_quiet:
                self._print(f"... tracing stopped after {self.max_trace_steps} steps, still running")
                self._announced_quiet = True
            return super().step()

        ip = self.instruction_pointer
        if ip >= len(self.program):
            status = super().step()
            self._print(f"\nHalted after {self.steps} steps")
            return status

        cmd = self.program[ip]
        before_ptr = self.pointer
        before_cell = self.current_cell
        reads_before = self.input_reads
        pos = self.program.position(ip)
        where = f" (line {pos.line} col {pos.column})" if pos else ""
        self._print(f"\nStep {self.steps + 1}: Execute '{cmd.value}' at position {ip}{where}")

        status = super().step()
        if status is Status.FAULT:
            self._print(f"  Fault: {self.fault}")
            return status

        self._print("  " + self._describe(cmd, before_ptr, before_cell, self.input_reads > reads_before))
        self._show_state()
        return status

    def _describe(self, cmd: Instruction, ptr: int, cell: int, read_byte: bool) -> str:
        if cmd is Instruction.INCREMENT_POINTER:
            return f"Move pointer right → position {self.pointer}"
        if cmd is Instruction.DECREMENT_POINTER:
            return f"Move pointer left → position {self.pointer}"
        if cmd is Instruction.INCREMENT_CELL:
            return f"Increment cell[{ptr}] → {self.current_cell}"
        if cmd is Instruction.DECREMENT_CELL:
            return f"Decrement cell[{ptr}] → {self.current_cell}"
        if cmd is Instruction.WRITE_BYTE:
            return f"Output cell[{ptr}] = {cell} ({chr(cell)!r})"
        if cmd is Instruction.READ_BYTE:
            if not read_byte:
                return f"Read input: EOF, cell[{ptr}] unchanged"
            return f"Read input → cell[{ptr}] = {self.current_cell}"
        if cmd is Instruction.JUMP_IF_ZERO:
            if cell == 0:
                return f"Loop start: cell[{ptr}] = 0, jump to position {self.instruction_pointer}"
            return f"Loop start: cell[{ptr}] ≠ 0, enter loop"
        if cell != 0:
            return f"Loop end: cell[{ptr}] ≠ 0, jump back to position {self.instruction_pointer}"
        return f"Loop end: cell[{ptr}] = 0, exit loop"

    def _show_state(self) -> None:
        """Print the cells around the data pointer, a pointer marker and the addresses."""
        width = self.show_memory_range
        # centred on the pointer, pinned to the tape's ends
        start = min(max(0, self.pointer - width // 2), max(0, len(self.memory) - width))
        cells = self.memory.window(start, start + width)
        addresses = range(start, start + len(cells))

        self._print("Memory:   [" + "|".join(f"{int(v):3d}" for v in cells) + "]")
        self._print("Pointer:   " + " ".join(" ^ " if i == self.pointer else "   " for i in addresses))
        self._print("Address:   " + " ".join(f"{i:3d}" for i in addresses))
