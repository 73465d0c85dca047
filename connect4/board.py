from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

import numpy as np

from connect4.types import (
    Column,
    EMPTY_CELL,
    Grid,
    Side,
    SideLike,
    WIN_LENGTH,
)

# Direction vectors (dr, dc): horizontal, vertical, both diagonals
_DIRS: Tuple[Tuple[int, int], ...] = ((0, 1), (1, 0), (1, 1), (1, -1))

_EMPTY_CHARS = "_.-"


def _run_lengths(grid: Grid, value: int) -> List[int]:
    """Lengths of every maximal run of ``value`` in all four directions."""
    rows, cols = grid.shape
    occupied = grid == value
    runs: List[int] = []
    for dr, dc in _DIRS:
        for r in range(rows):
            for c in range(cols):
                if not occupied[r, c]:
                    continue
                # Only start counting at the first cell of a run
                pr, pc = r - dr, c - dc
                if 0 <= pr < rows and 0 <= pc < cols and occupied[pr, pc]:
                    continue
                n = 0
                rr, cc = r, c
                while 0 <= rr < rows and 0 <= cc < cols and occupied[rr, cc]:
                    n += 1
                    rr += dr
                    cc += dc
                runs.append(n)
    return runs


@dataclass(frozen=True)
class Board:
    """Immutable Connect Four position.

    ``grid`` is a read-only int8 array, row 0 at the top. Cells hold 0 when
    empty, +1 for ``x`` and -1 for ``o``. Playing a column never changes the
    receiver; it returns the successor position.
    """

    grid: Grid
    next_move_player: Side = Side.X
    _runs: Dict[int, List[int]] = field(
        default_factory=dict, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        grid = np.array(self.grid, dtype=np.int8)
        if grid.ndim != 2 or grid.shape[0] < 1 or grid.shape[1] < 1:
            raise ValueError("Board grid must be a non-empty 2D array")
        if not np.isin(grid, (-1, 0, 1)).all():
            raise ValueError("Board cells must be -1, 0 or 1")
        # A piece may not sit above an empty cell
        filled = grid != EMPTY_CELL
        if (filled[:-1] & ~filled[1:]).any():
            raise ValueError("Board has a floating piece above an empty cell")
        grid.setflags(write=False)
        object.__setattr__(self, "grid", grid)
        object.__setattr__(self, "next_move_player", Side.parse(self.next_move_player))

    # ----------------------------
    # Construction
    # ----------------------------
    @classmethod
    def empty(cls, rows: Optional[int] = None, columns: Optional[int] = None,
              first: SideLike = Side.X) -> Board:
        """Empty position; sizes default to the configured board settings."""
        if rows is None or columns is None:
            from config import get_board_settings
            settings = get_board_settings()
            rows = settings.rows if rows is None else rows
            columns = settings.columns if columns is None else columns
        return cls(np.zeros((rows, columns), dtype=np.int8), Side.parse(first))

    @classmethod
    def from_rows(cls, rows: Iterable[str],
                  next_move_player: Optional[SideLike] = None) -> Board:
        """Parse text rows (top first) of 'x', 'o' and '_', '.' or '-'.

        Whitespace is ignored. When ``next_move_player`` is omitted, x moves if
        both sides have the same number of pieces and o if x is one ahead; any
        other count difference raises ``ValueError``.
        """
        parsed: List[List[int]] = []
        for line in rows:
            cells: List[int] = []
            for ch in line.lower():
                if ch.isspace():
                    continue
                if ch in _EMPTY_CHARS:
                    cells.append(EMPTY_CELL)
                elif ch in ("x", "o"):
                    cells.append(Side(ch).cell_value)
                else:
                    raise ValueError(f"Unknown board character {ch!r}")
            if cells:
                parsed.append(cells)
        if not parsed:
            raise ValueError("Board must have at least one row")
        if len({len(r) for r in parsed}) != 1:
            raise ValueError("Board rows must all have the same length")
        grid = np.array(parsed, dtype=np.int8)
        if next_move_player is None:
            xs = int((grid == Side.X.cell_value).sum())
            os_ = int((grid == Side.O.cell_value).sum())
            if xs - os_ not in (0, 1):
                raise ValueError(
                    f"Cannot infer side to move from {xs} x and {os_} o pieces")
            mover = Side.X if xs == os_ else Side.O
        else:
            mover = Side.parse(next_move_player)
        return cls(grid, mover)

    # ----------------------------
    # Queries
    # ----------------------------
    @property
    def rows(self) -> int:
        return int(self.grid.shape[0])

    @property
    def columns(self) -> int:
        return int(self.grid.shape[1])

    def is_full(self) -> bool:
        return bool((self.grid[0] != EMPTY_CELL).all())

    def winner(self) -> Optional[Side]:
        """Side holding a line of four or more, if any."""
        for side in (Side.X, Side.O):
            if self.num_lines(WIN_LENGTH, side) > 0:
                return side
        return None

    def is_terminal(self) -> bool:
        return self.winner() is not None or self.is_full()

    def legal_columns(self) -> List[Column]:
        """Playable columns, left to right; empty once the game is over."""
        if self.winner() is not None:
            return []
        return [c for c in range(self.columns) if self.grid[0, c] == EMPTY_CELL]

    def num_lines(self, length: int, side: Side) -> int:
        """Count maximal runs of exactly ``length`` pieces for ``side``.

        Runs are counted horizontally, vertically and along both diagonals.
        Runs longer than four count as lines of four.
        """
        value = Side.parse(side).cell_value
        runs = self._runs.get(value)
        if runs is None:
            runs = self._runs[value] = _run_lengths(self.grid, value)
        if length == WIN_LENGTH:
            return sum(1 for n in runs if n >= WIN_LENGTH)
        if length > WIN_LENGTH:
            return 0
        return sum(1 for n in runs if n == length)

    # ----------------------------
    # Moves
    # ----------------------------
    def play(self, column: Column) -> Board:
        """Drop the mover's piece into ``column`` and pass the turn."""
        if not 0 <= column < self.columns:
            raise ValueError(f"Column {column} out of range 0..{self.columns - 1}")
        if self.winner() is not None:
            raise ValueError("Game is already won")
        empty_rows = np.flatnonzero(self.grid[:, column] == EMPTY_CELL)
        if empty_rows.size == 0:
            raise ValueError(f"Column {column} is full")
        grid = self.grid.copy()
        grid[empty_rows[-1], column] = self.next_move_player.cell_value
        return Board(grid, self.next_move_player.opponent)

    def next_states(self) -> List[Board]:
        """Successor positions in column order."""
        return [self.play(c) for c in self.legal_columns()]

    # ----------------------------
    # Value semantics
    # ----------------------------
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return (self.next_move_player is other.next_move_player
                and np.array_equal(self.grid, other.grid))

    def __hash__(self) -> int:
        return hash((self.grid.shape, self.grid.tobytes(), self.next_move_player))

    def __str__(self) -> str:
        chars = {EMPTY_CELL: "_", Side.X.cell_value: "x", Side.O.cell_value: "o"}
        return "\n".join(" ".join(chars[int(v)] for v in row) for row in self.grid)
