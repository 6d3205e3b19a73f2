"""
Game Loop - Drives a session on behalf of a presentation layer.

The loop:
1. Human takes tokens, one request per token
2. Human hands the turn to the AI (or uses up the allotment)
3. Caller asks for AI steps, one token each, at its own pace
4. Repeat until someone takes the last token

The loop guards the human-facing requests; the engine itself treats
every out-of-turn request as a no-op.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING
import logging

from ..engine_core.action import Action

if TYPE_CHECKING:
    from .manager import Session

logger = logging.getLogger(__name__)


class LoopState(Enum):
    """State of the game loop."""
    YOUR_TURN = "your_turn"
    AGENT_TURN = "agent_turn"
    GAME_OVER = "game_over"


@dataclass
class TurnResult:
    """
    Result of processing a request.

    feedback is the narration of the final state; narration holds
    one entry per state the request went through.
    """
    success: bool
    loop_state: LoopState
    tokens_left: int
    feedback: str = ""

    narration: list[str] = field(default_factory=list)
    tokens_taken: int = 0

    errors: list[str] = field(default_factory=list)
    error_code: str | None = None

    # Game over info: True when the human won, False when the AI won
    winner: bool | None = None


class GameLoop:
    """
    The main game loop driver.

    Usage:
        loop = GameLoop(session)

        result = loop.take_token()
        if loop.can_hand_to_agent():
            result = loop.hand_to_agent()

        while loop.state == LoopState.AGENT_TURN:
            wait_a_moment()
            result = loop.agent_step()
    """

    def __init__(self, session: Session):
        self.session = session

    @property
    def state(self) -> LoopState:
        game_state = self.session.game_state
        if game_state.is_over:
            return LoopState.GAME_OVER
        if game_state.player_is_human:
            return LoopState.YOUR_TURN
        return LoopState.AGENT_TURN

    def can_hand_to_agent(self) -> bool:
        """
        Whether the human may hand the turn to the AI right now.

        Before the first token is taken the human may let the AI open the
        game. After that, the human has to take at least one token first.
        """
        game_state = self.session.game_state
        if game_state.is_over:
            return False
        if game_state.tokens_left == self.session.rules.starting_total:
            return True
        return game_state.player_is_human and game_state.has_moved_this_turn(self.session.rules)

    def take_token(self) -> TurnResult:
        """Take one token for the human."""
        if self.state == LoopState.GAME_OVER:
            return self._refuse("The game is over", "GAME_OVER")
        if self.state != LoopState.YOUR_TURN:
            return self._refuse("It is not your turn", "NOT_YOUR_TURN")

        before = self.session.game_state.tokens_left
        new_state = self.session.dispatch(Action.take_token())
        return self._result(before, [new_state.feedback])

    def hand_to_agent(self) -> TurnResult:
        """Give the turn to the AI."""
        if self.state == LoopState.GAME_OVER:
            return self._refuse("The game is over", "GAME_OVER")
        if not self.can_hand_to_agent():
            return self._refuse(
                "Take at least one token before letting the AI play",
                "HAND_OVER_NOT_ALLOWED",
            )

        before = self.session.game_state.tokens_left
        new_state = self.session.dispatch(Action.assign_side(False))
        return self._result(before, [new_state.feedback])

    def agent_step(self) -> TurnResult:
        """Take one token on the AI's behalf."""
        if self.state == LoopState.GAME_OVER:
            return self._refuse("The game is over", "GAME_OVER")
        if self.state != LoopState.AGENT_TURN:
            return self._refuse("It is not the AI's turn", "NOT_AGENT_TURN")

        before = self.session.game_state.tokens_left
        new_state = self.session.dispatch(Action.take_token())
        logger.debug("AI took a token, %d left", new_state.tokens_left)
        return self._result(before, [new_state.feedback])

    def run_agent_turn(self) -> TurnResult:
        """Play AI steps until the human holds the turn or the game ends."""
        if self.state != LoopState.AGENT_TURN:
            return self.agent_step()

        before = self.session.game_state.tokens_left
        narration = []
        while self.state == LoopState.AGENT_TURN:
            narration.append(self.session.dispatch(Action.take_token()).feedback)
        return self._result(before, narration)

    def restart(self) -> TurnResult:
        """Start a new game in the same session."""
        new_state = self.session.restart()
        return self._result(new_state.tokens_left, [new_state.feedback])

    def _result(self, tokens_before: int, narration: list[str]) -> TurnResult:
        game_state = self.session.game_state
        return TurnResult(
            success=True,
            loop_state=self.state,
            tokens_left=game_state.tokens_left,
            feedback=game_state.feedback,
            narration=narration,
            tokens_taken=tokens_before - game_state.tokens_left,
            winner=game_state.winner,
        )

    def _refuse(self, error: str, error_code: str) -> TurnResult:
        game_state = self.session.game_state
        return TurnResult(
            success=False,
            loop_state=self.state,
            tokens_left=game_state.tokens_left,
            feedback=game_state.feedback,
            errors=[error],
            error_code=error_code,
            winner=game_state.winner,
        )
