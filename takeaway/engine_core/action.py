"""
Action System - The closed set of requests the engine understands.

Actions represent:
1. NEW_GAME: discard the current state and start over
2. ASSIGN_SIDE: hand the turn to the human or to the AI
3. TAKE_TOKEN: the side holding the turn removes one token

All state changes flow through actions.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum


class ActionType(Enum):
    """Types of actions in the system."""
    NEW_GAME = "new_game"
    ASSIGN_SIDE = "assign_side"
    TAKE_TOKEN = "take_token"


@dataclass(frozen=True)
class Action:
    """
    A complete action to be applied to the game state.

    to_human is the payload of ASSIGN_SIDE and unused otherwise.
    """
    action_type: ActionType
    to_human: bool | None = None

    @classmethod
    def new_game(cls) -> Action:
        """Factory for restart."""
        return cls(action_type=ActionType.NEW_GAME)

    @classmethod
    def assign_side(cls, to_human: bool) -> Action:
        """Factory for a turn hand-off."""
        return cls(action_type=ActionType.ASSIGN_SIDE, to_human=to_human)

    @classmethod
    def take_token(cls) -> Action:
        """Factory for removing one token."""
        return cls(action_type=ActionType.TAKE_TOKEN)

    def describe(self) -> str:
        if self.action_type == ActionType.ASSIGN_SIDE:
            return f"assign_side(to_human={self.to_human})"
        return self.action_type.value
