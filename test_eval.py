import random

import pytest

from connect4.board import Board
from connect4.eval import LineWeightEvaluator, advantage, evaluate, get_evaluator
from connect4.types import Side

X, O = Side.X, Side.O


class LineState:
    """Minimal state exposing only fixed line counts."""

    def __init__(self, counts):
        self.counts = counts

    @property
    def next_move_player(self):
        return X

    def next_states(self):
        return []

    def num_lines(self, length, side):
        return self.counts.get((length, side), 0)


THREE_TRIPLES = Board.from_rows([
    "_ _ _ _ _ _ _",
    "_ _ _ _ _ _ _",
    "_ _ _ _ _ _ _",
    "x _ x _ x _ _",
    "x _ x _ x _ _",
    "x _ x _ x _ _",
], next_move_player="o")

ONE_FOUR = Board.from_rows([
    "_ _ _ _ _ _ _",
    "_ _ _ _ _ _ _",
    "x _ _ _ _ _ _",
    "x _ _ _ _ _ _",
    "x _ _ _ _ _ _",
    "x _ _ _ _ _ _",
], next_move_player="o")


def test_weights_are_powers_of_hundred():
    state = LineState({(2, X): 1, (3, X): 2, (4, X): 1, (2, O): 3})
    assert advantage(state, X) == 10_000 + 2 * 1_000_000 + 100_000_000
    assert advantage(state, O) == 30_000
    assert evaluate(state, X) == 102_010_000 - 30_000


def test_empty_state_is_neutral():
    state = LineState({})
    assert evaluate(state, X) == 0
    assert evaluate(state, O) == 0
    assert evaluate(Board.empty(rows=6, columns=7), X) == 0


def test_single_four_outweighs_many_shorter_lines():
    assert THREE_TRIPLES.num_lines(3, X) == 3
    assert ONE_FOUR.num_lines(4, X) == 1
    assert evaluate(ONE_FOUR, X) > evaluate(THREE_TRIPLES, X)
    assert evaluate(THREE_TRIPLES, X) == 3_000_000
    assert evaluate(ONE_FOUR, X) == 100_000_000

    shorter_only = LineState({(2, X): 99, (3, X): 99})
    four = LineState({(4, X): 1})
    assert evaluate(four, X) > evaluate(shorter_only, X)


@pytest.mark.parametrize("seed", range(8))
def test_perspective_swap_negates(seed):
    rng = random.Random(seed)
    board = Board.empty(rows=6, columns=7)
    for _ in range(rng.randint(3, 20)):
        cols = board.legal_columns()
        if not cols:
            break
        board = board.play(rng.choice(cols))
    assert evaluate(board, X) == -evaluate(board, O)


def test_line_weight_evaluator_matches_function():
    evaluator = get_evaluator()
    assert isinstance(evaluator, LineWeightEvaluator)
    assert evaluator(THREE_TRIPLES, X) == evaluate(THREE_TRIPLES, X)
    assert evaluator.evaluate_position(ONE_FOUR, O) == evaluate(ONE_FOUR, O)


def test_custom_weights():
    state = LineState({(2, X): 1, (3, O): 1})
    evaluator = LineWeightEvaluator(lengths=(2, 3), base=10)
    assert evaluator(state, X) == 100 - 1_000
    with pytest.raises(ValueError):
        LineWeightEvaluator(base=1)
