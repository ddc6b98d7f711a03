"""Interpreter settings, read from the environment (and a local .env file)."""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

from .tape import DEFAULT_CELLS, DEFAULT_LIMIT

load_dotenv()

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def _env_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def _env_bool(env: Mapping[str, str], name: str, default: bool) -> bool:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValueError(f"{name} must be a boolean, got {raw!r}")


@dataclass
class InterpreterConfig:
    cells: int = DEFAULT_CELLS
    tape_limit: int = DEFAULT_LIMIT
    extensible: bool = True

    def __post_init__(self):
        if self.cells <= 0:
            raise ValueError("cells must be greater than 0")
        if self.extensible and self.tape_limit < self.cells:
            raise ValueError(f"tape_limit ({self.tape_limit}) must be at least cells ({self.cells})")

    @property
    def effective_limit(self) -> int:
        """Ceiling passed to the tape: a fixed tape never grows."""
        return self.tape_limit if self.extensible else self.cells

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> 'InterpreterConfig':
        """Build a config from BF_TAPE_CELLS, BF_TAPE_LIMIT and BF_EXTENSIBLE."""
        env = os.environ if env is None else env
        return cls(
            cells=_env_int(env, "BF_TAPE_CELLS", DEFAULT_CELLS),
            tape_limit=_env_int(env, "BF_TAPE_LIMIT", DEFAULT_LIMIT),
            extensible=_env_bool(env, "BF_EXTENSIBLE", True),
        )
