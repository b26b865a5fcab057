from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Tuple

from gemboard.components.tile import Cell, GemKind

Position = Tuple[int, int]
Grid = Tuple[Tuple[Optional[int], ...], ...]


@dataclass(slots=True)
class Board:
    """Flat, row-major arena of gem cells.

    Slot ``row * cols + col`` holds the gem type, the empty flag and the gem kind
    for that cell. ``empty`` is only ever set while a cascade is in flight.
    """
    rows: int
    cols: int
    types: List[int] = field(default_factory=list)
    empty: List[bool] = field(default_factory=list)
    kinds: List[GemKind] = field(default_factory=list)

    def __post_init__(self) -> None:
        size = self.rows * self.cols
        if not self.types:
            self.types = [0] * size
        if not self.empty:
            self.empty = [False] * size
        if not self.kinds:
            self.kinds = [GemKind.NORMAL] * size

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]]) -> "Board":
        """Build a fully populated board from literal row data."""
        height = len(rows)
        width = len(rows[0]) if height else 0
        types: List[int] = []
        for row in rows:
            if len(row) != width:
                raise ValueError("all rows must have the same length")
            types.extend(int(value) for value in row)
        return cls(rows=height, cols=width, types=types)

    def index(self, row: int, col: int) -> int:
        return row * self.cols + col

    def position(self, index: int) -> Position:
        return divmod(index, self.cols)

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def cell(self, row: int, col: int) -> Cell:
        idx = self.index(row, col)
        return Cell(type=self.types[idx], empty=self.empty[idx], kind=self.kinds[idx])

    def type_at(self, row: int, col: int) -> Optional[int]:
        idx = self.index(row, col)
        if self.empty[idx]:
            return None
        return self.types[idx]

    def positions(self) -> Iterable[Position]:
        for row in range(self.rows):
            for col in range(self.cols):
                yield row, col

    def empty_count(self) -> int:
        return sum(1 for flag in self.empty if flag)

    def filled_count(self) -> int:
        return len(self.empty) - self.empty_count()

    def snapshot(self) -> Grid:
        """Immutable copy of the grid; empty cells read as ``None``."""
        return tuple(
            tuple(self.type_at(row, col) for col in range(self.cols))
            for row in range(self.rows)
        )

    def state(self) -> Tuple[Tuple[int, ...], Tuple[bool, ...], Tuple[GemKind, ...]]:
        """Exact copy of every arena slot, used to compare boards byte for byte."""
        return tuple(self.types), tuple(self.empty), tuple(self.kinds)

    def restore(self, state: Tuple[Tuple[int, ...], Tuple[bool, ...], Tuple[GemKind, ...]]) -> None:
        """Put back every slot recorded by ``state()``."""
        types, empty, kinds = state
        self.types[:] = types
        self.empty[:] = empty
        self.kinds[:] = kinds
