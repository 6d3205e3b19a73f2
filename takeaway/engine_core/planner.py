"""
Optimal-play planner.

A pool that is a multiple of (max_taken + 1) is lost by the side to move:
whatever it takes, the opponent can restore the multiple. The planner takes
just enough to hand the opponent such a pool, and takes a single token when
it is itself stuck in a losing position.
"""

from __future__ import annotations


def optimal_take(tokens_left: int, max_taken: int) -> int:
    """Number of tokens the side to move should take this turn."""
    if tokens_left < 1:
        raise ValueError(f"No move from an empty pool (tokens_left={tokens_left})")
    return tokens_left % (max_taken + 1) or 1


def is_losing_position(tokens_left: int, max_taken: int) -> bool:
    """True when the side to move loses against optimal play."""
    return tokens_left % (max_taken + 1) == 0


def tokens_after_optimal_take(tokens_left: int, max_taken: int) -> int:
    """The pool the opponent is left facing after an optimal take."""
    return tokens_left - optimal_take(tokens_left, max_taken)
