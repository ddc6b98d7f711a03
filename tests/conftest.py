from __future__ import annotations

import sys
from pathlib import Path

import pytest

HELLO_WORLD = (
    "++++++++[>++++[>++>+++>+++>+<<<<-]>+>+>->>+[<]<-]>>.>---.+++++++..\n"
    "+++.>>.<-.<.+++.------.--------.>>+.>++."
)


def pytest_configure() -> None:
    project_root = Path(__file__).resolve().parents[1]
    sys.path.insert(0, str(project_root))


@pytest.fixture()
def hello_world() -> str:
    return HELLO_WORLD


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("BF_TAPE_CELLS", "BF_TAPE_LIMIT", "BF_EXTENSIBLE"):
        monkeypatch.delenv(name, raising=False)
