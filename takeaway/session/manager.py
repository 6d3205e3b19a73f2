"""
Session Manager - Creates and manages game sessions.

LIFECYCLE:
1. Caller starts a session -> fresh game state, human to move
2. During the game:
   - Human takes tokens or hands the turn to the AI
   - Caller paces the AI's moves (one step per request)
   - Engine narrates every state
3. Restart -> new game state, same session
4. Session ends -> removed from memory

PERSISTENCE RULES:
- Sessions are in-memory only
- Nothing survives a process restart
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
import logging
import time
import uuid

from ..engine_core.rules import GameRules
from ..engine_core.state import GameState
from ..engine_core.action import Action
from ..engine_core.reducer import Reducer

logger = logging.getLogger(__name__)


class SessionState(Enum):
    """State of a game session."""
    ACTIVE = "active"  # Game in progress
    GAME_OVER = "game_over"  # Winner decided, restart still possible
    ABANDONED = "abandoned"  # Ended before a winner was decided


@dataclass
class Session:
    """
    An ephemeral game session.

    Holds the current state and the reducer that advances it. Each
    accepted action replaces game_state; the history is linear.
    """
    session_id: str
    rules: GameRules
    created_at: float
    game_state: GameState
    reducer: Reducer

    state: SessionState = SessionState.ACTIVE
    games_played: int = 1
    history: list[Action] = field(default_factory=list)

    def is_human_turn(self) -> bool:
        return self.game_state.player_is_human and not self.game_state.is_over

    def dispatch(self, action: Action) -> GameState:
        """
        Apply an action and store the result.

        Only actions that change the state are recorded.
        """
        new_state = self.reducer.reduce(self.game_state, action)
        if new_state is self.game_state:
            return new_state

        self.history.append(action)
        self.game_state = new_state
        self.state = SessionState.GAME_OVER if new_state.is_over else SessionState.ACTIVE
        return new_state

    def restart(self) -> GameState:
        """Discard the current game and start a new one."""
        self.games_played += 1
        new_state = self.dispatch(Action.new_game())
        self.history.clear()
        return new_state


class SessionManager:
    """
    Manages game sessions.

    Responsibilities:
    - Create sessions with fixed rules
    - Track active sessions
    - Clean up finished sessions

    No persistence - sessions are in-memory only.
    """

    def __init__(self, rules: GameRules | None = None):
        self.rules = rules or GameRules()
        self._sessions: dict[str, Session] = {}

    def create_session(self, agent_first: bool = False) -> Session:
        """
        Create a new game session.

        Args:
            agent_first: Hand the opening turn to the AI

        Returns:
            New Session with a fresh game
        """
        reducer = Reducer(rules=self.rules)
        session = Session(
            session_id=str(uuid.uuid4()),
            rules=self.rules,
            created_at=time.time(),
            game_state=reducer.new_game(),
            reducer=reducer,
        )
        if agent_first:
            session.dispatch(Action.assign_side(False))

        self._sessions[session.session_id] = session
        logger.info("Created session %s (agent_first=%s)", session.session_id, agent_first)
        return session

    def get_session(self, session_id: str) -> Session | None:
        """Get a session by ID."""
        return self._sessions.get(session_id)

    def end_session(self, session_id: str, reason: str = "completed") -> bool:
        """
        End a session and remove it from memory.

        Returns False if there was no such session.
        """
        session = self._sessions.pop(session_id, None)
        if not session:
            return False

        if not session.game_state.is_over:
            session.state = SessionState.ABANDONED
        logger.info("Ended session %s (%s)", session_id, reason)
        return True

    def list_active_sessions(self) -> list[str]:
        """List IDs of sessions still held in memory."""
        return list(self._sessions)

    def cleanup_stale_sessions(self, max_age_seconds: int = 3600) -> int:
        """
        Remove sessions older than max_age_seconds.

        Returns the number of sessions removed.
        """
        current_time = time.time()
        stale = [
            session_id for session_id, session in self._sessions.items()
            if current_time - session.created_at > max_age_seconds
        ]
        for session_id in stale:
            self.end_session(session_id, reason="stale")
        return len(stale)
