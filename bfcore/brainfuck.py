"""
Brainfuck Interpreter

Executes a loaded Program against a byte tape, reading from and writing to
binary streams. The interpreter is a small state machine: ``step()`` runs a
single instruction and reports whether to continue, that the program halted,
or that it faulted. ``run()`` drives ``step()`` until a terminal state.

Fixed conventions:
    - cells are 8 bit and wrap (255 + 1 == 0, 0 - 1 == 255)
    - moving left of cell 0 is a fault (PointerUnderflow)
    - the tape grows to the right up to a ceiling (TapeOverflow past it)
    - ',' at end of input leaves the current cell unchanged
"""

from enum import Enum
from typing import BinaryIO, Optional

from .config import InterpreterConfig
from .errors import ExecutionError, IoFailure, PointerUnderflow, TapeOverflow
from .program import Instruction, Program
from .tape import Tape, TapeLimitReached


class Status(Enum):
    CONTINUE = "continue"
    HALT = "halt"
    FAULT = "fault"


class BrainfuckInterpreter:
    def __init__(self, program: Program, input_stream: BinaryIO, output_stream: BinaryIO,
                 config: Optional[InterpreterConfig] = None):
        config = config or InterpreterConfig()
        self.program = program
        self.input_stream = input_stream
        self.output_stream = output_stream
        self.memory = Tape(config.cells, config.effective_limit)
        self.pointer = 0
        self.instruction_pointer = 0
        self.steps = 0
        self.input_reads = 0
        self.output_writes = 0
        self.last_output: Optional[int] = None
        self.fault: Optional[ExecutionError] = None
        self.status = Status.CONTINUE

    @property
    def halted(self) -> bool:
        return self.status is Status.HALT

    @property
    def current_cell(self) -> int:
        return self.memory[self.pointer]

    def _fault(self, error_cls, detail: str = "") -> Status:
        ip = self.instruction_pointer
        self.fault = error_cls(
            ip,
            instruction=self.program[ip],
            position=self.program.position(ip),
            data_pointer=self.pointer,
            instruction_pointer=ip,
            detail=detail,
        )
        self.status = Status.FAULT
        return self.status

    def step(self) -> Status:
        """Execute one instruction and return the resulting state."""
        if self.status is not Status.CONTINUE:
            return self.status
        if self.instruction_pointer >= len(self.program):
            self.status = Status.HALT
            return self.status

        cmd = self.program[self.instruction_pointer]
        next_ip = self.instruction_pointer + 1

        if cmd is Instruction.INCREMENT_POINTER:
            try:
                self.memory.ensure(self.pointer + 1)
            except TapeLimitReached as e:
                return self._fault(TapeOverflow, str(e))
            self.pointer += 1

        elif cmd is Instruction.DECREMENT_POINTER:
            if self.pointer == 0:
                return self._fault(PointerUnderflow)
            self.pointer -= 1

        elif cmd is Instruction.INCREMENT_CELL:
            self.memory.increment(self.pointer)

        elif cmd is Instruction.DECREMENT_CELL:
            self.memory.decrement(self.pointer)

        elif cmd is Instruction.WRITE_BYTE:
            value = self.memory[self.pointer]
            try:
                self.output_stream.write(bytes((value,)))
            except (OSError, ValueError) as e:
                status = self._fault(IoFailure, str(e))
                self.fault.__cause__ = e
                return status
            self.last_output = value
            self.output_writes += 1

        elif cmd is Instruction.READ_BYTE:
            try:
                data = self.input_stream.read(1)
            except (OSError, ValueError) as e:
                status = self._fault(IoFailure, str(e))
                self.fault.__cause__ = e
                return status
            if data:
                self.memory[self.pointer] = data[0]
                self.input_reads += 1
            # end of input: leave cell unchanged

        elif cmd is Instruction.JUMP_IF_ZERO:
            if self.memory[self.pointer] == 0:
                next_ip = self.program.match(self.instruction_pointer) + 1

        elif cmd is Instruction.JUMP_IF_NONZERO:
            if self.memory[self.pointer] != 0:
                next_ip = self.program.match(self.instruction_pointer) + 1

        self.instruction_pointer = next_ip
        self.steps += 1
        return self.status

    def run(self) -> 'BrainfuckInterpreter':
        """Step until the program halts; raise the ExecutionError if it faults."""
        status = Status.CONTINUE
        while status is Status.CONTINUE:
            status = self.step()
        if status is Status.FAULT:
            raise self.fault
        try:
            self.output_stream.flush()
        except (OSError, ValueError) as e:
            raise IoFailure(len(self.program), data_pointer=self.pointer,
                            instruction_pointer=self.instruction_pointer, detail=str(e)) from e
        return self


def run(program: Program, input_stream: BinaryIO, output_stream: BinaryIO,
        config: Optional[InterpreterConfig] = None) -> BrainfuckInterpreter:
    """Run ``program`` to completion and return the finished interpreter."""
    return BrainfuckInterpreter(program, input_stream, output_stream, config).run()
