"""
API Service - Business logic layer between API and engine.

The service:
1. Translates API requests to game loop calls
2. Manages sessions
3. Formats responses for clients

This layer is framework-agnostic (can be used with FastAPI, Flask, etc.)
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging

from .schemas import (
    CreateSessionRequest,
    SessionResponse,
    GameStateResponse,
    ErrorResponse,
    SessionStatus,
    ErrorCode,
    Side,
)
from ..session import SessionManager, Session, GameLoop, LoopState, TurnResult

logger = logging.getLogger(__name__)


@dataclass
class APIService:
    """
    Main API service.

    Usage:
        service = APIService()

        session_response = service.create_session(CreateSessionRequest())
        state = service.take_token(session_response.session_id)
        state = service.hand_to_agent(session_response.session_id)
        state = service.agent_step(session_response.session_id)
    """
    session_manager: SessionManager = field(default_factory=SessionManager)

    # Game loops per session
    _game_loops: dict[str, GameLoop] = field(default_factory=dict)

    def create_session(self, request: CreateSessionRequest) -> SessionResponse:
        """Create a new game session."""
        session = self.session_manager.create_session(agent_first=request.agent_first)
        self._game_loops[session.session_id] = GameLoop(session)
        return self._session_to_response(session)

    def get_session(self, session_id: str) -> SessionResponse | ErrorResponse:
        """Get session status."""
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._session_not_found(session_id)
        return self._session_to_response(session)

    def get_game_state(self, session_id: str) -> GameStateResponse | ErrorResponse:
        """Get current game state."""
        game_loop = self._game_loops.get(session_id)
        if not game_loop:
            return self._session_not_found(session_id)
        return self._build_game_state(session_id, game_loop)

    def take_token(self, session_id: str) -> GameStateResponse | ErrorResponse:
        """Take one token for the human player."""
        return self._run(session_id, lambda loop: loop.take_token())

    def hand_to_agent(self, session_id: str) -> GameStateResponse | ErrorResponse:
        """Let the AI play."""
        return self._run(session_id, lambda loop: loop.hand_to_agent())

    def agent_step(self, session_id: str) -> GameStateResponse | ErrorResponse:
        """Take one token on the AI's behalf."""
        return self._run(session_id, lambda loop: loop.agent_step())

    def restart(self, session_id: str) -> GameStateResponse | ErrorResponse:
        """Start a new game in an existing session."""
        return self._run(session_id, lambda loop: loop.restart())

    def end_session(self, session_id: str, reason: str = "user_ended") -> bool:
        """End a game session."""
        self._game_loops.pop(session_id, None)
        return self.session_manager.end_session(session_id, reason)

    def list_sessions(self) -> list[str]:
        """List active session IDs."""
        return self.session_manager.list_active_sessions()

    # =========================================================================
    # Helper methods
    # =========================================================================

    def _run(self, session_id: str, request) -> GameStateResponse | ErrorResponse:
        game_loop = self._game_loops.get(session_id)
        if not game_loop:
            return self._session_not_found(session_id)

        result: TurnResult = request(game_loop)
        if not result.success:
            logger.info("Session %s refused request: %s", session_id, result.error_code)
            return ErrorResponse(
                error=result.errors[0] if result.errors else "Request refused",
                error_code=ErrorCode(result.error_code),
                details={"status": self._loop_state_to_status(result.loop_state).value},
            )
        return self._build_game_state(session_id, game_loop, result)

    def _session_not_found(self, session_id: str) -> ErrorResponse:
        return ErrorResponse(
            error=f"Session {session_id} not found",
            error_code=ErrorCode.SESSION_NOT_FOUND,
        )

    def _session_to_response(self, session: Session) -> SessionResponse:
        """Convert Session to SessionResponse."""
        game_loop = self._game_loops.get(session.session_id) or GameLoop(session)
        return SessionResponse(
            session_id=session.session_id,
            status=self._loop_state_to_status(game_loop.state),
            created_at=session.created_at,
            games_played=session.games_played,
            moves_this_game=len(session.history),
            game_state=self._build_game_state(session.session_id, game_loop),
        )

    def _loop_state_to_status(self, loop_state: LoopState) -> SessionStatus:
        """Convert loop state to API status."""
        mapping = {
            LoopState.YOUR_TURN: SessionStatus.YOUR_TURN,
            LoopState.AGENT_TURN: SessionStatus.AGENT_TURN,
            LoopState.GAME_OVER: SessionStatus.GAME_OVER,
        }
        return mapping[loop_state]

    def _build_game_state(
        self,
        session_id: str,
        game_loop: GameLoop,
        result: TurnResult | None = None,
    ) -> GameStateResponse:
        """Build complete game state response."""
        session = game_loop.session
        game_state = session.game_state

        winner = None
        if game_state.winner is not None:
            winner = Side.HUMAN if game_state.winner else Side.AGENT

        return GameStateResponse(
            session_id=session_id,
            status=self._loop_state_to_status(game_loop.state),
            tokens_left=game_state.tokens_left,
            starting_total=session.rules.starting_total,
            max_taken=session.rules.max_taken,
            current_side=Side.HUMAN if game_state.player_is_human else Side.AGENT,
            can_take=game_state.can_take,
            feedback=game_state.feedback,
            narration=result.narration if result else [],
            tokens_taken=result.tokens_taken if result else 0,
            can_hand_to_agent=game_loop.can_hand_to_agent(),
            winner=winner,
        )
