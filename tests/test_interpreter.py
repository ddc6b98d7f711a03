from __future__ import annotations

import io

import pytest
from bfcore.brainfuck import BrainfuckInterpreter, Status, run
from bfcore.config import InterpreterConfig
from bfcore.errors import IoFailure, PointerUnderflow, TapeOverflow
from bfcore.program import Instruction, SourcePosition, load


def _run(src: str, data: bytes = b"", config: InterpreterConfig | None = None) -> bytes:
    out = io.BytesIO()
    run(load(src), io.BytesIO(data), out, config)
    return out.getvalue()


class BrokenStream(io.RawIOBase):
    def read(self, size: int = -1) -> bytes:
        raise OSError("device unplugged")

    def write(self, data) -> int:
        raise OSError("device unplugged")


def test_hello_world(hello_world: str) -> None:
    assert _run(hello_world) == b"Hello World!\n"


def test_echo_one_byte() -> None:
    assert _run(",.", b"A") == bytes([65])


def test_read_at_eof_leaves_cell_unchanged() -> None:
    assert _run(",.") == b"\x00"
    assert _run("+++,.") == b"\x03"


def test_reverse_input() -> None:
    out = _run(",>,>,>,>,>,.<.<.<.<.<.", bytes([1, 2, 3, 4, 5, 6]))
    assert out == bytes([6, 5, 4, 3, 2, 1])


def test_increment_and_decrement_after_read() -> None:
    assert _run(",+>,+>,+.<.<.", bytes([1, 2, 3])) == bytes([4, 3, 2])
    assert _run(",->,->,-.<.<.", bytes([1, 2, 3])) == bytes([2, 1, 0])


def test_countdown_loop() -> None:
    assert _run(",[-.]", bytes([6])) == bytes([5, 4, 3, 2, 1, 0])


def test_cell_wraps_both_ways() -> None:
    assert _run("-.") == b"\xff"
    assert _run("+" * 256 + ".") == b"\x00"
    assert _run(",+.", b"\xff") == b"\x00"


def test_zero_guarded_loop_is_skipped() -> None:
    vm = run(load("[<<<.]"), io.BytesIO(), io.BytesIO())
    assert vm.halted
    assert vm.steps == 1
    assert vm.output_writes == 0


def test_first_move_left_underflows() -> None:
    with pytest.raises(PointerUnderflow) as exc:
        _run("<")
    err = exc.value
    assert err.index == 0
    assert err.instruction is Instruction.DECREMENT_POINTER
    assert err.data_pointer == 0
    assert err.position == SourcePosition(1, 1)


def test_underflow_after_moving_back() -> None:
    with pytest.raises(PointerUnderflow) as exc:
        _run("+\n>><<<")
    assert exc.value.index == 5
    assert exc.value.position == SourcePosition(2, 5)


def test_tape_overflow_past_limit() -> None:
    config = InterpreterConfig(cells=2, tape_limit=4)
    assert _run(">>>.", config=config) == b"\x00"
    with pytest.raises(TapeOverflow) as exc:
        _run(">>>>", config=config)
    assert exc.value.index == 3
    assert exc.value.data_pointer == 3


def test_fixed_tape_overflows_at_initial_size() -> None:
    config = InterpreterConfig(cells=2, extensible=False)
    with pytest.raises(TapeOverflow) as exc:
        _run(">>", config=config)
    assert exc.value.index == 1


def test_runaway_pointer_hits_ceiling() -> None:
    config = InterpreterConfig(cells=16, tape_limit=64)
    with pytest.raises(TapeOverflow):
        _run("+[>+]", config=config)


def test_closed_output_is_io_failure() -> None:
    out = io.BytesIO()
    out.close()
    with pytest.raises(IoFailure) as exc:
        run(load("+."), io.BytesIO(), out)
    assert exc.value.index == 1
    assert isinstance(exc.value.__cause__, ValueError)


def test_broken_input_is_io_failure() -> None:
    with pytest.raises(IoFailure) as exc:
        run(load(","), BrokenStream(), io.BytesIO())
    assert isinstance(exc.value.__cause__, OSError)
    assert "device unplugged" in str(exc.value)


def test_step_reports_state_without_raising() -> None:
    vm = BrainfuckInterpreter(load("+<"), io.BytesIO(), io.BytesIO())
    assert vm.step() is Status.CONTINUE
    assert vm.current_cell == 1
    assert vm.step() is Status.FAULT
    assert isinstance(vm.fault, PointerUnderflow)
    assert vm.step() is Status.FAULT


def test_empty_program_halts_immediately() -> None:
    vm = BrainfuckInterpreter(load(""), io.BytesIO(), io.BytesIO())
    assert vm.step() is Status.HALT
    assert vm.halted
    assert vm.steps == 0


def test_runs_are_independent() -> None:
    program = load(",+.")
    first = io.BytesIO()
    second = io.BytesIO()
    run(program, io.BytesIO(b"\x01"), first)
    run(program, io.BytesIO(b"\x10"), second)
    assert first.getvalue() == b"\x02"
    assert second.getvalue() == b"\x11"


def test_last_output_is_tracked(hello_world: str) -> None:
    vm = run(load(hello_world), io.BytesIO(), io.BytesIO())
    assert vm.last_output == 0x0A
    assert vm.output_writes == 13
