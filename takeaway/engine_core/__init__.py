"""
Engine Core - Deterministic game state management.

The engine is the runtime that:
1. Holds the fixed GameRules
2. Creates and validates GameState values
3. Plans the AI's optimal take
4. Applies actions via the reducer
5. Narrates every resulting state
"""

from .rules import GameRules, RulesValidationError, STARTING_TOTAL, MAX_TAKEN
from .state import (
    GameState,
    GamePhase,
    TurnPhase,
    InvariantViolation,
    new_game_state,
    check_invariants,
)
from .action import Action, ActionType
from .planner import optimal_take, is_losing_position, tokens_after_optimal_take
from .narrator import Narrator, narrate
from .reducer import Reducer, UnknownActionError, apply_action

__all__ = [
    "GameRules",
    "RulesValidationError",
    "STARTING_TOTAL",
    "MAX_TAKEN",
    "GameState",
    "GamePhase",
    "TurnPhase",
    "InvariantViolation",
    "new_game_state",
    "check_invariants",
    "Action",
    "ActionType",
    "optimal_take",
    "is_losing_position",
    "tokens_after_optimal_take",
    "Narrator",
    "narrate",
    "Reducer",
    "UnknownActionError",
    "apply_action",
]
