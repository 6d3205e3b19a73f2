"""
API Module - HTTP interface.

Exposes the engine via REST API. A client:
1. Creates a game session
2. Takes tokens and hands the turn to the AI
3. Paces the AI's steps
4. Restarts or ends the session

All state is session-scoped. No user accounts.
"""

from .schemas import (
    # Requests
    CreateSessionRequest,
    # Responses
    SessionResponse,
    GameStateResponse,
    SessionListResponse,
    EndSessionResponse,
    HealthResponse,
    ErrorResponse,
    # Enums
    SessionStatus,
    ErrorCode,
    Side,
)
from .service import APIService
from .app import create_app

__all__ = [
    # Requests
    "CreateSessionRequest",
    # Responses
    "SessionResponse",
    "GameStateResponse",
    "SessionListResponse",
    "EndSessionResponse",
    "HealthResponse",
    "ErrorResponse",
    # Enums
    "SessionStatus",
    "ErrorCode",
    "Side",
    # Service
    "APIService",
    "create_app",
]
