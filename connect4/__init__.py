"""Connect4 package: minimax and alpha-beta search over line-counting game states.

Usage examples:
    from connect4 import Board, Side, minimax_wrapper
    from connect4 import minimax, minimax_alpha_beta, evaluate, is_base_case
    from connect4 import get_search_strategy
"""
from __future__ import annotations

from .types import Side, SearchStats, GameStateProtocol, Score

# Evaluation
from .eval import Evaluator, LineWeightEvaluator, evaluate, get_evaluator

# Search
from .search import (
    SearchStrategy,
    MinimaxSearchStrategy,
    AlphaBetaSearchStrategy,
    get_search_strategy,
    is_base_case,
    minimax,
    minimax_alpha_beta,
    minimax_wrapper,
)

# Reference game state
from .board import Board

__all__ = [
    "Side",
    "SearchStats",
    "GameStateProtocol",
    "Score",
    "Evaluator",
    "LineWeightEvaluator",
    "evaluate",
    "get_evaluator",
    "SearchStrategy",
    "MinimaxSearchStrategy",
    "AlphaBetaSearchStrategy",
    "get_search_strategy",
    "is_base_case",
    "minimax",
    "minimax_alpha_beta",
    "minimax_wrapper",
    "Board",
]
