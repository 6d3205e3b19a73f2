"""
Game State - The value the engine operates on.

Design principles:
- Immutable: every transition returns a new state, never mutates
- Self-describing: feedback carries the narration for the state
- Terminal: once a winner is set, the state no longer changes
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from enum import Enum

from .rules import GameRules


START_FEEDBACK = "Start the game. Take a token or let the AI play first."


class GamePhase(Enum):
    """High-level game phases."""
    PLAYING = "playing"
    GAME_OVER = "game_over"


class TurnPhase(Enum):
    """Where the current side is within its turn."""
    JUST_ASSIGNED = "just_assigned"  # No token taken yet this turn
    MID_TURN = "mid_turn"


class InvariantViolation(Exception):
    """Raised when a state breaks one of the engine's invariants."""


@dataclass(frozen=True)
class GameState:
    """
    Complete game state at a point in time.

    All state changes go through the reducer.
    """
    tokens_left: int
    can_take: int
    player_is_human: bool = True
    top_move: int | None = None  # Planned take for the current turn
    feedback: str = ""
    winner: bool | None = None  # True: human won, False: the AI won

    @property
    def is_over(self) -> bool:
        return self.winner is not None

    @property
    def phase(self) -> GamePhase:
        return GamePhase.GAME_OVER if self.is_over else GamePhase.PLAYING

    def turn_allotment(self, rules: GameRules) -> int:
        """How many tokens the current side could take when its turn began."""
        if self.top_move is None:
            return min(rules.max_taken, rules.starting_total)
        return self.top_move

    def turn_phase(self, rules: GameRules) -> TurnPhase:
        if self.can_take == self.turn_allotment(rules):
            return TurnPhase.JUST_ASSIGNED
        return TurnPhase.MID_TURN

    def has_moved_this_turn(self, rules: GameRules) -> bool:
        return self.turn_phase(rules) == TurnPhase.MID_TURN

    def _copy_with(self, **kwargs) -> GameState:
        """Create a copy with some fields replaced."""
        return replace(self, **kwargs)

    def to_dict(self) -> dict:
        return {
            "tokens_left": self.tokens_left,
            "can_take": self.can_take,
            "player_is_human": self.player_is_human,
            "top_move": self.top_move,
            "feedback": self.feedback,
            "winner": self.winner,
        }


def new_game_state(rules: GameRules) -> GameState:
    """Create the state a fresh game starts from: full pool, human to move."""
    return GameState(
        tokens_left=rules.starting_total,
        can_take=min(rules.max_taken, rules.starting_total),
        player_is_human=True,
        feedback=START_FEEDBACK,
    )


def check_invariants(state: GameState, rules: GameRules) -> None:
    """
    Raise InvariantViolation if the state could not have been reached.

    Checks:
    - 0 <= can_take <= tokens_left <= starting_total
    - can_take <= max_taken
    - winner is set iff the pool is empty
    - top_move, when set, is a legal take
    """
    problems: list[str] = []

    if not 0 <= state.can_take <= state.tokens_left <= rules.starting_total:
        problems.append(
            f"expected 0 <= can_take ({state.can_take}) <= tokens_left "
            f"({state.tokens_left}) <= {rules.starting_total}"
        )
    if state.can_take > rules.max_taken:
        problems.append(f"can_take ({state.can_take}) exceeds max_taken ({rules.max_taken})")
    if (state.winner is not None) != (state.tokens_left == 0):
        problems.append(
            f"winner ({state.winner}) must be set exactly when the pool is empty "
            f"(tokens_left={state.tokens_left})"
        )
    if state.top_move is not None and not 1 <= state.top_move <= rules.max_taken:
        problems.append(f"top_move ({state.top_move}) outside 1..{rules.max_taken}")

    if problems:
        raise InvariantViolation("; ".join(problems))
