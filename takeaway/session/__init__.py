"""
Session Module - Manages ephemeral game sessions.

A session represents one player's table:
- Created when the player starts a game
- Holds the current game state
- Dispatches the player's requests and the AI's steps
- Destroyed when the player leaves

Sessions are EPHEMERAL: nothing is written to disk.
"""

from .manager import SessionManager, Session, SessionState
from .game_loop import GameLoop, LoopState, TurnResult

__all__ = [
    "SessionManager",
    "Session",
    "SessionState",
    "GameLoop",
    "LoopState",
    "TurnResult",
]
