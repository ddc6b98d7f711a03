from typing import Optional

import numpy as np

DEFAULT_CELLS = 30000
DEFAULT_LIMIT = 1 << 20


class TapeLimitReached(Exception):
    """Raised by Tape.ensure; the interpreter turns it into TapeOverflow."""

    def __init__(self, index: int, limit: int):
        self.index = index
        self.limit = limit
        super().__init__(f"cell {index} is past the tape limit of {limit} cells")


class Tape:
    """Byte cells, zero-initialised, bounded at 0 and growing to the right.

    Storage is a numpy uint8 buffer. The logical length grows on demand up to
    and including the highest cell touched; the buffer itself grows
    geometrically but never past ``limit`` cells.
    """

    def __init__(self, cells: int = DEFAULT_CELLS, limit: Optional[int] = DEFAULT_LIMIT):
        if cells <= 0:
            raise ValueError("tape must have at least one cell")
        if limit is None:
            limit = cells
        if limit < cells:
            raise ValueError(f"tape limit {limit} is smaller than the initial size {cells}")
        self.limit = limit
        self.initial_cells = cells
        self.length = cells
        self.cells = np.zeros(cells, dtype=np.uint8)

    def __len__(self) -> int:
        return self.length

    @property
    def extensible(self) -> bool:
        return self.limit > self.initial_cells

    def ensure(self, index: int) -> None:
        """Make ``index`` addressable, appending zero cells as needed."""
        if index < self.length:
            return
        if index >= self.limit:
            raise TapeLimitReached(index, self.limit)
        if index >= len(self.cells):
            capacity = min(self.limit, max(index + 1, len(self.cells) * 2))
            grown = np.zeros(capacity, dtype=np.uint8)
            grown[:self.length] = self.cells[:self.length]
            self.cells = grown
        self.length = index + 1

    def __getitem__(self, index: int) -> int:
        return int(self.cells[index])

    def __setitem__(self, index: int, value: int) -> None:
        self.cells[index] = value % 256

    def increment(self, index: int) -> None:
        self.cells[index] = (int(self.cells[index]) + 1) % 256

    def decrement(self, index: int) -> None:
        self.cells[index] = (int(self.cells[index]) - 1) % 256

    def window(self, start: int, stop: int) -> np.ndarray:
        start = max(0, start)
        stop = min(self.length, stop)
        return self.cells[start:stop].copy()

    def snapshot(self) -> bytes:
        return self.cells[:self.length].tobytes()
