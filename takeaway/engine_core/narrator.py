"""
Narrator - Derives the status message for a state.

The narration is a pure function of the state. It says what just
happened and what the side holding the turn may do next.

The human's option sentence is assembled from a table of
(predicate, fragment if true, fragment if false) entries rather than
nested branches, so each clause can be checked on its own.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Callable

from .rules import GameRules, ORDINALS
from .state import GameState, InvariantViolation


STRINGS = {
    "ai_starts": "You let the AI play first.",
    "ai_turn": "Now it's the AI's turn to play.",
    "just_one": "The AI took just one token.",
    "nth_token": "The AI took a {ordinal} token.",
    "your_turn": "It's your turn now.",
    "can_take": "You can take{up_to} {count}{more} {noun}{stop}",
    "you_win": "You took the last token. You win!",
    "ai_wins": "The AI took the last token. The AI wins.",
}


@dataclass(frozen=True)
class OptionFragment:
    """One conditional clause of the "You can take ..." sentence."""
    slot: str
    applies: Callable[[int, int], bool]  # (can_take, turn_allotment) -> bool
    when_true: str
    when_false: str

    def render(self, can_take: int, allotment: int) -> str:
        return self.when_true if self.applies(can_take, allotment) else self.when_false


OPTION_FRAGMENTS = (
    # "up to 1 token" reads badly
    OptionFragment("up_to", lambda can_take, allotment: can_take != 1, " up to", ""),
    # Nothing taken yet this turn, so nothing to take "more" of
    OptionFragment("more", lambda can_take, allotment: can_take != allotment, " more", ""),
    OptionFragment("noun", lambda can_take, allotment: can_take > 1, "tokens", "token"),
    # Handing over is only offered once the human has taken a token
    OptionFragment(
        "stop", lambda can_take, allotment: can_take < allotment, " or let the AI play.", "."
    ),
)


def join_narration(*parts: str | None) -> str:
    """Join non-empty sentences with a single space."""
    return " ".join(part for part in parts if part)


@dataclass(frozen=True)
class Narrator:
    """Builds feedback strings for states played under the given rules."""
    rules: GameRules

    def narrate(self, state: GameState) -> str:
        if state.player_is_human:
            return self._narrate_human(state)
        return self._narrate_ai(state)

    def describe_options(self, state: GameState) -> str:
        """The "You can take ..." sentence for the human's current allotment."""
        allotment = state.turn_allotment(self.rules)
        fragments = {
            fragment.slot: fragment.render(state.can_take, allotment)
            for fragment in OPTION_FRAGMENTS
        }
        return STRINGS["can_take"].format(count=state.can_take, **fragments)

    def _narrate_human(self, state: GameState) -> str:
        if state.winner:
            return STRINGS["you_win"]

        prefix = None
        if not state.has_moved_this_turn(self.rules):
            prefix = STRINGS["your_turn"]
        return join_narration(prefix, self.describe_options(state))

    def _narrate_ai(self, state: GameState) -> str:
        if state.winner is False:
            return STRINGS["ai_wins"]
        if state.tokens_left == self.rules.starting_total:
            return STRINGS["ai_starts"]
        if state.top_move is None:
            raise InvariantViolation("The AI holds the turn without a planned move")
        if state.can_take == state.top_move:
            return STRINGS["ai_turn"]
        if state.top_move == 1:
            return STRINGS["just_one"]

        index = state.top_move - state.can_take - 1
        if not 0 <= index < min(self.rules.max_taken, len(ORDINALS)):
            raise InvariantViolation(
                f"Cannot name the AI's move: top_move={state.top_move}, "
                f"can_take={state.can_take}"
            )
        return STRINGS["nth_token"].format(ordinal=ORDINALS[index])


def narrate(rules: GameRules, state: GameState) -> str:
    """Convenience function: narrate a state under the given rules."""
    return Narrator(rules=rules).narrate(state)
