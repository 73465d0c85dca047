"""
Type definitions and protocols for the Connect Four search core.

This module provides:
- The closed two-member ``Side`` enumeration
- Protocol definitions for the game-state collaborator and evaluators
- A dataclass for search statistics
- Type aliases and numeric constants shared by the engine
"""

from __future__ import annotations

import numpy as np
from typing import Protocol, Sequence, Union, runtime_checkable
from dataclasses import dataclass
from enum import Enum

# Basic type aliases
Score = int  # Signed evaluation; positive favors the maximizing side
Column = int  # 0-based column index, left to right
Grid = np.ndarray  # rows x columns int8 array: 0 empty, +1 x, -1 o
SideLike = Union["Side", str]


class Side(Enum):
    """One of the two players. Values match the marks drawn on the board."""

    X = "x"
    O = "o"

    @property
    def opponent(self) -> Side:
        return Side.O if self is Side.X else Side.X

    @property
    def cell_value(self) -> int:
        """Value stored in a grid cell occupied by this side."""
        return 1 if self is Side.X else -1

    @classmethod
    def parse(cls, value: SideLike) -> Side:
        """Accept a Side or a case-insensitive 'x'/'o' string."""
        if isinstance(value, Side):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise ValueError(f"Side must be 'x' or 'o', got {value!r}")

    def __str__(self) -> str:
        return self.value


@runtime_checkable
class GameStateProtocol(Protocol):
    """Contract the search core consumes from a game state.

    States are treated as immutable values: the search only reads them and
    recurses into the successors they report.
    """

    @property
    def next_move_player(self) -> Side:
        """The side to move from this state."""
        ...

    def next_states(self) -> Sequence[GameStateProtocol]:
        """Successors reachable by one legal move; empty when terminal."""
        ...

    def num_lines(self, length: int, side: Side) -> int:
        """Count of contiguous runs of exactly ``length`` held by ``side``."""
        ...


class EvaluatorProtocol(Protocol):
    """Protocol for static evaluation functions."""

    def __call__(self, state: GameStateProtocol, maximizing_side: Side) -> Score:
        ...


@dataclass
class SearchStats:
    """Counters collected during one search. Purely observational."""
    nodes: int = 0
    leaves: int = 0
    cutoffs: int = 0

    def reset(self) -> None:
        self.nodes = 0
        self.leaves = 0
        self.cutoffs = 0


# Constants
LINE_LENGTHS = (2, 3, 4)  # Line lengths the evaluator weighs
LINE_WEIGHT_BASE = 100  # A line of length n is worth LINE_WEIGHT_BASE ** n
WIN_LENGTH = 4
DEFAULT_DEPTH = 3
DEFAULT_ROWS = 6
DEFAULT_COLUMNS = 7
EMPTY_CELL = 0
