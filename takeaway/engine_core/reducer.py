"""
Reducer - Applies actions to game state.

The reducer is the single point of state transition.
All state changes must go through reduce().

Design principles:
- Pure function: (state, action) -> new_state
- Out-of-turn and post-game requests are no-ops that return the
  input state itself, not a copy
- Unknown requests are programming errors and raise immediately
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging

from .rules import GameRules
from .state import GameState, new_game_state, check_invariants
from .action import Action, ActionType
from .narrator import Narrator, join_narration
from .planner import optimal_take

logger = logging.getLogger(__name__)


class UnknownActionError(TypeError):
    """Raised when the reducer is handed something outside its action vocabulary."""


@dataclass
class Reducer:
    """
    Reducer applies actions to game state.

    Stateless - all state is in GameState.
    Rules fix the pool size and the move range.
    """
    rules: GameRules = field(default_factory=GameRules)

    def __post_init__(self):
        self.narrator = Narrator(rules=self.rules)

    def reduce(self, state: GameState, action: Action) -> GameState:
        """
        Apply an action to the game state.

        Returns the new state, or the same state object when the
        action has nothing to do.
        """
        if not isinstance(action, Action):
            raise UnknownActionError(f"Not an action: {action!r}")

        if action.action_type == ActionType.NEW_GAME:
            return self.new_game()

        # Can't play after the game is over
        if state.is_over:
            logger.debug("Ignoring %s: game is over", action.describe())
            return state

        handler = self._get_handler(action.action_type)
        if handler is None:
            raise UnknownActionError(f"No handler for action type: {action.action_type}")

        new_state = handler(state, action)
        if new_state is not state:
            check_invariants(new_state, self.rules)
            logger.debug(
                "%s -> tokens_left=%d can_take=%d human=%s winner=%s",
                action.describe(),
                new_state.tokens_left,
                new_state.can_take,
                new_state.player_is_human,
                new_state.winner,
            )
        return new_state

    def new_game(self) -> GameState:
        return new_game_state(self.rules)

    def _get_handler(self, action_type: ActionType):
        """Get the handler function for an action type."""
        handlers = {
            ActionType.ASSIGN_SIDE: self._handle_assign_side,
            ActionType.TAKE_TOKEN: self._handle_take_token,
        }
        return handlers.get(action_type)

    def _handle_assign_side(self, state: GameState, action: Action) -> GameState:
        if not isinstance(action.to_human, bool):
            raise UnknownActionError(
                f"assign_side needs a boolean to_human, got {action.to_human!r}"
            )
        return self.assign_side(state, action.to_human)

    def _handle_take_token(self, state: GameState, action: Action) -> GameState:
        return self.take_token(state)

    def assign_side(
        self,
        state: GameState,
        to_human: bool,
        prior_narration: str | None = None,
    ) -> GameState:
        """
        Give the turn to the human or to the AI.

        Returns the state unchanged if that side already holds the turn
        or the game is over.
        prior_narration, when given, is what the previous side just did and
        is shown ahead of the new side's prompt.
        """
        if state.is_over or to_human == state.player_is_human:
            return state

        if to_human:
            # The human may take up to this many, but doesn't have to
            can_take = min(self.rules.max_taken, state.tokens_left)
            top_move = can_take
        else:
            # The AI commits to its whole take when the turn starts
            top_move = optimal_take(state.tokens_left, self.rules.max_taken)
            can_take = top_move

        new_state = state._copy_with(
            player_is_human=to_human,
            can_take=can_take,
            top_move=top_move,
        )
        feedback = join_narration(prior_narration, self.narrator.narrate(new_state))
        return new_state._copy_with(feedback=feedback)

    def take_token(self, state: GameState) -> GameState:
        """
        Remove one token for the side holding the turn.

        Whoever takes the last token wins. When the side has used up its
        allotment, the turn passes to the other side.
        """
        if state.is_over:
            return state

        new_state = state._copy_with(
            tokens_left=state.tokens_left - 1,
            can_take=state.can_take - 1,
        )

        if new_state.tokens_left == 0:
            new_state = new_state._copy_with(winner=state.player_is_human)
        elif new_state.can_take == 0:
            # Only the AI's closing move is narrated ahead of the human's prompt
            prior = None if state.player_is_human else self.narrator.narrate(new_state)
            return self.assign_side(new_state, not state.player_is_human, prior)

        return new_state._copy_with(feedback=self.narrator.narrate(new_state))


def apply_action(rules: GameRules, state: GameState, action: Action) -> GameState:
    """
    Convenience function to apply an action.

    Creates a Reducer and applies the action.
    """
    reducer = Reducer(rules=rules)
    return reducer.reduce(state, action)
