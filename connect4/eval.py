"""
Evaluation interfaces and the line-weight heuristic.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

from connect4.types import (
    GameStateProtocol,
    LINE_LENGTHS,
    LINE_WEIGHT_BASE,
    Score,
    Side,
)


def advantage(state: GameStateProtocol, side: Side,
              lengths: Sequence[int] = LINE_LENGTHS,
              base: int = LINE_WEIGHT_BASE) -> Score:
    """Weighted line count for one side: sum of num_lines(n) * base ** n."""
    return sum(state.num_lines(n, side) * base ** n for n in lengths)


def evaluate(state: GameStateProtocol, maximizing_side: Side) -> Score:
    """Score ``state`` from the perspective of ``maximizing_side``.

    Returns the maximizing side's advantage less the minimizing side's.
    Positive favors the maximizing side, negative its opponent, zero is
    neutral. A single line of four outweighs every shorter line combined.
    """
    return advantage(state, maximizing_side) - advantage(state, maximizing_side.opponent)


class Evaluator(ABC):
    """Abstract evaluator interface for position scoring."""

    @abstractmethod
    def evaluate_position(self, state: GameStateProtocol, maximizing_side: Side) -> Score:  # pragma: no cover
        """Evaluate a single state for the given maximizing side."""
        raise NotImplementedError

    def __call__(self, state: GameStateProtocol, maximizing_side: Side) -> Score:
        return self.evaluate_position(state, maximizing_side)


class LineWeightEvaluator(Evaluator):
    """Evaluator backed by the super-linear line weighting."""

    def __init__(self, lengths: Sequence[int] = LINE_LENGTHS,
                 base: int = LINE_WEIGHT_BASE) -> None:
        if base <= 1:
            raise ValueError("Line weight base must be greater than 1")
        self.lengths = tuple(lengths)
        self.base = int(base)

    def evaluate_position(self, state: GameStateProtocol, maximizing_side: Side) -> Score:
        mine = advantage(state, maximizing_side, self.lengths, self.base)
        theirs = advantage(state, maximizing_side.opponent, self.lengths, self.base)
        return mine - theirs


# Factory to get an Evaluator-conforming object

def get_evaluator() -> Evaluator:
    return LineWeightEvaluator()


__all__ = [
    "Evaluator",
    "LineWeightEvaluator",
    "get_evaluator",
    "advantage",
    "evaluate",
]
