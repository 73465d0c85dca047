from __future__ import annotations

import argparse
from typing import List, Optional

from config import setup_logging, get_search_settings
from connect4.board import Board
from connect4.search import get_search_strategy
from connect4.types import Side


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    settings = get_search_settings()
    ap = argparse.ArgumentParser(description="Evaluate a Connect Four position with minimax search")
    ap.add_argument("rows", nargs="+", help="Board rows, top first, using x, o and _ (e.g. '_ _ x o _ _ _')")
    ap.add_argument("--depth", type=int, default=settings.default_depth, help="Search depth in plies")
    ap.add_argument("--side", default="x", choices=["x", "o"], help="Maximizing side")
    ap.add_argument("--to-move", default=None, choices=["x", "o"], help="Side to move (inferred by default)")
    ap.add_argument("--algorithm", default="both", choices=["both", "alphabeta", "minimax"],
                    help="Search algorithm to run")
    return ap.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    setup_logging()
    args = parse_args(argv)

    try:
        board = Board.from_rows(args.rows, args.to_move)
    except ValueError as e:
        raise SystemExit(f"analyze: error: {e}")
    if args.depth < 0:
        raise SystemExit("analyze: error: depth must be non-negative")

    side = Side.parse(args.side)
    algorithms = ["minimax", "alphabeta"] if args.algorithm == "both" else [args.algorithm]

    print(board)
    print(f"to move: {board.next_move_player}  maximizing: {side}  depth: {args.depth}")
    for name in algorithms:
        strategy = get_search_strategy(name)
        value = strategy.search(board, side, args.depth)
        stats = strategy.last_stats
        print(f"{name:>9}: {value}  (nodes={stats.nodes}, leaves={stats.leaves}, cutoffs={stats.cutoffs})")


if __name__ == "__main__":
    main()
