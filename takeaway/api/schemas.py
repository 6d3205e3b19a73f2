"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the exact contract between a client and the engine.

Error Codes:
- SESSION_NOT_FOUND: Session does not exist or has expired
- NOT_YOUR_TURN: Human move requested while the AI holds the turn
- NOT_AGENT_TURN: AI step requested while the human holds the turn
- HAND_OVER_NOT_ALLOWED: Human must take a token before handing over
- GAME_OVER: The game has a winner; restart to play again
"""

from enum import Enum
from typing import Optional, Any
from pydantic import BaseModel, Field


# =============================================================================
# Enums
# =============================================================================

class SessionStatus(str, Enum):
    """Session status values."""
    YOUR_TURN = "your_turn"
    AGENT_TURN = "agent_turn"
    GAME_OVER = "game_over"


class Side(str, Enum):
    """Who holds the turn, or who won."""
    HUMAN = "human"
    AGENT = "agent"


class ErrorCode(str, Enum):
    """Structured error codes."""
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    NOT_YOUR_TURN = "NOT_YOUR_TURN"
    NOT_AGENT_TURN = "NOT_AGENT_TURN"
    HAND_OVER_NOT_ALLOWED = "HAND_OVER_NOT_ALLOWED"
    GAME_OVER = "GAME_OVER"
    VALIDATION_ERROR = "VALIDATION_ERROR"


# =============================================================================
# Request Models
# =============================================================================

class CreateSessionRequest(BaseModel):
    """Request to create a new game session."""
    agent_first: bool = Field(False, description="Let the AI make the opening move")


# =============================================================================
# Response Models
# =============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str = Field(..., description="Human-readable error message")
    error_code: ErrorCode = Field(..., description="Machine-readable error code")
    details: Optional[dict[str, Any]] = Field(None, description="Additional error context")
    api_version: str = Field("v1", description="API version")


class GameStateResponse(BaseModel):
    """Everything a client needs to render the table."""
    session_id: str
    status: SessionStatus
    tokens_left: int = Field(..., ge=0)
    starting_total: int
    max_taken: int
    current_side: Side
    can_take: int = Field(..., ge=0, description="Tokens the current side may still take this turn")
    feedback: str = Field(..., description="Narration of the latest state")
    narration: list[str] = Field(
        default_factory=list, description="Narration of each state the request went through"
    )
    tokens_taken: int = Field(0, description="Tokens removed by this request")
    can_hand_to_agent: bool = False
    winner: Optional[Side] = None
    api_version: str = "v1"


class SessionResponse(BaseModel):
    """Response containing session information."""
    session_id: str
    status: SessionStatus
    created_at: float = 0.0
    games_played: int = 1
    moves_this_game: int = 0
    game_state: GameStateResponse
    api_version: str = "v1"


class SessionListResponse(BaseModel):
    """Response listing active sessions."""
    sessions: list[str]
    count: int


class EndSessionResponse(BaseModel):
    """Response after ending a session."""
    success: bool
    session_id: str


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    service: str
    version: str
