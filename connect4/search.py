"""
Minimax search over any state satisfying the game-state contract.

Two variants share one base case and produce identical values:

- ``minimax`` explores every successor down to the depth bound.
- ``minimax_alpha_beta`` carries an (alpha, beta) window and abandons sibling
  loops that can no longer influence an ancestor's choice.

Bounds are passed down by value. A frame narrows only its own
copies while iterating its children; nothing is ever written back to a parent.
"""
from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod
from typing import Optional

from connect4.eval import evaluate
from connect4.types import (
    EvaluatorProtocol,
    GameStateProtocol,
    Score,
    SearchStats,
    Side,
    SideLike,
)

logger = logging.getLogger(__name__)

ALGORITHMS = ("alphabeta", "minimax")


def is_base_case(state: GameStateProtocol, depth: int) -> bool:
    """True when the depth budget is spent or the state has no successors.

    Depth is checked first so successors are never generated at depth 0.
    """
    return depth == 0 or len(state.next_states()) == 0


def minimax(state: GameStateProtocol, depth: int, maximizing_side: Side,
            stats: Optional[SearchStats] = None,
            evaluator: EvaluatorProtocol = evaluate) -> Score:
    """Plain minimax value of ``state`` searched ``depth`` plies deep."""
    if stats is not None:
        stats.nodes += 1
    # is_base_case, with successors fetched once and reused below
    children = state.next_states() if depth != 0 else []
    if not children:
        if stats is not None:
            stats.leaves += 1
        return evaluator(state, maximizing_side)

    if state.next_move_player == maximizing_side:
        best: Optional[Score] = None
        for child in children:
            val = minimax(child, depth - 1, maximizing_side, stats, evaluator)
            if best is None or val > best:
                best = val
    else:
        best = None
        for child in children:
            val = minimax(child, depth - 1, maximizing_side, stats, evaluator)
            if best is None or val < best:
                best = val
    return best  # type: ignore[return-value]


def _alpha_beta(state: GameStateProtocol, depth: int, maximizing_side: Side,
                alpha: float, beta: float, stats: Optional[SearchStats],
                evaluator: EvaluatorProtocol) -> Score:
    """Alpha-beta recursion. ``alpha`` and ``beta`` are local to this frame."""
    if stats is not None:
        stats.nodes += 1
    children = state.next_states() if depth != 0 else []
    if not children:
        if stats is not None:
            stats.leaves += 1
        return evaluator(state, maximizing_side)

    if state.next_move_player == maximizing_side:
        best: Optional[Score] = None
        for i, child in enumerate(children):
            val = _alpha_beta(child, depth - 1, maximizing_side, alpha, beta, stats, evaluator)
            if best is None or val >= best:
                best = val
            if val >= alpha:
                alpha = val
            if val >= beta:
                if stats is not None and i < len(children) - 1:
                    stats.cutoffs += 1
                break
    else:
        best = None
        for i, child in enumerate(children):
            val = _alpha_beta(child, depth - 1, maximizing_side, alpha, beta, stats, evaluator)
            if best is None or val <= best:
                best = val
            if val <= beta:
                beta = val
            if val <= alpha:
                if stats is not None and i < len(children) - 1:
                    stats.cutoffs += 1
                break
    return best  # type: ignore[return-value]


def minimax_alpha_beta(state: GameStateProtocol, depth: int, maximizing_side: Side,
                       stats: Optional[SearchStats] = None,
                       evaluator: EvaluatorProtocol = evaluate) -> Score:
    """Minimax value of ``state`` with alpha-beta pruning.

    Returns exactly what ``minimax`` returns for the same arguments; only the
    number of states visited differs.
    """
    return _alpha_beta(state, depth, maximizing_side,
                       -math.inf, math.inf, stats, evaluator)


def _check_depth(depth: int) -> int:
    depth = int(depth)
    if depth < 0:
        raise ValueError(f"Search depth must be non-negative, got {depth}")
    return depth


class SearchStrategy(ABC):
    """Abstract interface for search strategies."""

    name: str = ""

    def __init__(self, evaluator: Optional[EvaluatorProtocol] = None) -> None:
        self.evaluator: EvaluatorProtocol = evaluator if evaluator is not None else evaluate
        self.last_stats = SearchStats()

    def search(self, state: GameStateProtocol, maximizing_side: SideLike, depth: int) -> Score:
        """Validate inputs, run the search, and record its statistics."""
        side = Side.parse(maximizing_side)
        depth = _check_depth(depth)
        self.last_stats = SearchStats()
        value = self._run(state, depth, side, self.last_stats)
        logger.debug("%s depth=%d side=%s value=%d nodes=%d leaves=%d cutoffs=%d",
                     self.name, depth, side, value, self.last_stats.nodes,
                     self.last_stats.leaves, self.last_stats.cutoffs)
        return value

    @abstractmethod
    def _run(self, state: GameStateProtocol, depth: int, side: Side,
             stats: SearchStats) -> Score:  # pragma: no cover
        raise NotImplementedError


class MinimaxSearchStrategy(SearchStrategy):
    """Exhaustive minimax."""

    name = "minimax"

    def _run(self, state: GameStateProtocol, depth: int, side: Side,
             stats: SearchStats) -> Score:
        return minimax(state, depth, side, stats, self.evaluator)


class AlphaBetaSearchStrategy(SearchStrategy):
    """Minimax with alpha-beta pruning."""

    name = "alphabeta"

    def _run(self, state: GameStateProtocol, depth: int, side: Side,
             stats: SearchStats) -> Score:
        return minimax_alpha_beta(state, depth, side, stats, self.evaluator)


def get_search_strategy(algorithm: Optional[str] = None,
                        evaluator: Optional[EvaluatorProtocol] = None) -> SearchStrategy:
    """Factory for a search strategy; defaults to the configured algorithm."""
    if algorithm is None:
        from config import get_search_settings
        algorithm = get_search_settings().algorithm
    name = algorithm.strip().lower()
    if name == "alphabeta":
        return AlphaBetaSearchStrategy(evaluator)
    if name == "minimax":
        return MinimaxSearchStrategy(evaluator)
    raise ValueError(f"Unknown search algorithm {algorithm!r}; expected one of {ALGORITHMS}")


def minimax_wrapper(state: GameStateProtocol, maximizing_side: SideLike,
                    depth: Optional[int] = None) -> Score:
    """Driver entry point: alpha-beta search at the configured default depth."""
    if depth is None:
        from config import get_search_settings
        depth = get_search_settings().default_depth
    return AlphaBetaSearchStrategy().search(state, maximizing_side, depth)


__all__ = [
    "ALGORITHMS",
    "SearchStrategy",
    "MinimaxSearchStrategy",
    "AlphaBetaSearchStrategy",
    "get_search_strategy",
    "is_base_case",
    "minimax",
    "minimax_alpha_beta",
    "minimax_wrapper",
]
