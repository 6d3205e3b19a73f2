"""
FastAPI Application - REST API for game clients.

Endpoints:
    GET    /api/v1/health                       Health check
    POST   /api/v1/sessions                     Create game session
    GET    /api/v1/sessions                     List active sessions
    GET    /api/v1/sessions/{id}                Get session status
    DELETE /api/v1/sessions/{id}                End session
    GET    /api/v1/sessions/{id}/state          Get game state
    POST   /api/v1/sessions/{id}/take           Human takes one token
    POST   /api/v1/sessions/{id}/hand-over      Let the AI play
    POST   /api/v1/sessions/{id}/agent-step     AI takes one token
    POST   /api/v1/sessions/{id}/restart        Start a new game

AI Pacing:
    The server never sleeps on the AI's behalf. While status is
    "agent_turn" the client calls /agent-step once per token, after
    whatever delay it wants to show.

All responses are JSON with explicit Pydantic schemas.
"""

from typing import Optional, Union
import os

from .. import __version__

# Environment configuration
TAKEAWAY_ENV = os.getenv("TAKEAWAY_ENV", "development")
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*").split(",")


def create_app(service=None):
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance (creates new if not provided)

    Returns:
        FastAPI application instance
    """
    try:
        from fastapi import FastAPI, HTTPException, Query
        from fastapi.middleware.cors import CORSMiddleware
        from fastapi.encoders import jsonable_encoder
        from fastapi.exceptions import RequestValidationError
        from fastapi.responses import JSONResponse
    except ImportError:
        raise ImportError(
            "FastAPI not installed. Install with: pip install fastapi uvicorn"
        )

    from .service import APIService
    from .schemas import (
        CreateSessionRequest,
        SessionResponse,
        GameStateResponse,
        ErrorResponse,
        SessionListResponse,
        EndSessionResponse,
        HealthResponse,
        ErrorCode,
    )

    app = FastAPI(
        title="Takeaway Engine API",
        description="""
Token-depletion game against an optimal AI.

## Turn Flow

1. `POST /take` removes one token for you (up to the allotment shown in `can_take`).
2. `POST /hand-over` lets the AI play once you have taken a token
   (or before anyone has moved, to let the AI open).
3. While `status` is `agent_turn`, call `POST /agent-step` once per token.

## Error Codes

| Code | Description |
|------|-------------|
| `SESSION_NOT_FOUND` | Session does not exist |
| `NOT_YOUR_TURN` | The AI holds the turn |
| `NOT_AGENT_TURN` | You hold the turn |
| `HAND_OVER_NOT_ALLOWED` | Take a token before letting the AI play |
| `GAME_OVER` | The game is decided; restart to play again |
| `VALIDATION_ERROR` | The request body is malformed |
        """,
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    api_service = service or APIService()

    # =========================================================================
    # Error helpers
    # =========================================================================

    status_codes = {
        ErrorCode.SESSION_NOT_FOUND: 404,
        ErrorCode.NOT_YOUR_TURN: 409,
        ErrorCode.NOT_AGENT_TURN: 409,
        ErrorCode.HAND_OVER_NOT_ALLOWED: 409,
        ErrorCode.GAME_OVER: 409,
        ErrorCode.VALIDATION_ERROR: 400,
    }

    def make_error_response(error: ErrorResponse) -> JSONResponse:
        """Create a standardized error response."""
        return JSONResponse(
            status_code=status_codes.get(error.error_code, 500),
            content=error.model_dump(mode="json"),
        )

    def respond(response):
        if isinstance(response, ErrorResponse):
            return make_error_response(response)
        return response

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request, exc):
        return make_error_response(ErrorResponse(
            error_code=ErrorCode.VALIDATION_ERROR,
            error="Invalid request body",
            details={"errors": jsonable_encoder(exc.errors())},
        ))

    game_errors = {
        404: {"model": ErrorResponse, "description": "Session not found"},
        409: {"model": ErrorResponse, "description": "Not allowed in the current game state"},
    }

    # =========================================================================
    # Health
    # =========================================================================

    @app.get(
        "/api/v1/health",
        response_model=HealthResponse,
        tags=["Health"],
        summary="Health check",
    )
    async def health() -> HealthResponse:
        return HealthResponse(status="ok", service="takeaway", version=__version__)

    # =========================================================================
    # Session Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/sessions",
        response_model=SessionResponse,
        tags=["Sessions"],
        summary="Create a new game session",
        responses={400: {"model": ErrorResponse, "description": "Malformed request body"}},
    )
    async def create_session(body: Optional[CreateSessionRequest] = None) -> SessionResponse:
        """
        Create a new game session.

        The human holds the first turn unless `agent_first` is set.
        """
        return api_service.create_session(body or CreateSessionRequest())

    @app.get(
        "/api/v1/sessions",
        response_model=SessionListResponse,
        tags=["Sessions"],
        summary="List active sessions",
    )
    async def list_sessions() -> SessionListResponse:
        """List all active session IDs."""
        sessions = api_service.list_sessions()
        return SessionListResponse(sessions=sessions, count=len(sessions))

    @app.get(
        "/api/v1/sessions/{session_id}",
        response_model=SessionResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Sessions"],
        summary="Get session status",
    )
    async def get_session(session_id: str) -> Union[SessionResponse, JSONResponse]:
        """Get the current status of a game session."""
        return respond(api_service.get_session(session_id))

    @app.delete(
        "/api/v1/sessions/{session_id}",
        response_model=EndSessionResponse,
        tags=["Sessions"],
        summary="End a game session",
    )
    async def end_session(
        session_id: str,
        reason: str = Query("user_ended", description="Reason for ending"),
    ) -> EndSessionResponse:
        """End a game session and release resources."""
        success = api_service.end_session(session_id, reason)
        if not success:
            raise HTTPException(status_code=404, detail=f"Session {session_id} not found")
        return EndSessionResponse(success=success, session_id=session_id)

    # =========================================================================
    # Game Endpoints
    # =========================================================================

    @app.get(
        "/api/v1/sessions/{session_id}/state",
        response_model=GameStateResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Game"],
        summary="Get current game state",
    )
    async def get_game_state(session_id: str) -> Union[GameStateResponse, JSONResponse]:
        """Get the current game state for display."""
        return respond(api_service.get_game_state(session_id))

    @app.post(
        "/api/v1/sessions/{session_id}/take",
        response_model=GameStateResponse,
        responses=game_errors,
        tags=["Game"],
        summary="Take one token",
    )
    async def take_token(session_id: str) -> Union[GameStateResponse, JSONResponse]:
        """Remove one token from the pool for the human player."""
        return respond(api_service.take_token(session_id))

    @app.post(
        "/api/v1/sessions/{session_id}/hand-over",
        response_model=GameStateResponse,
        responses=game_errors,
        tags=["Game"],
        summary="Let the AI play",
    )
    async def hand_over(session_id: str) -> Union[GameStateResponse, JSONResponse]:
        """Hand the turn to the AI. Its first step is left to `/agent-step`."""
        return respond(api_service.hand_to_agent(session_id))

    @app.post(
        "/api/v1/sessions/{session_id}/agent-step",
        response_model=GameStateResponse,
        responses=game_errors,
        tags=["Game"],
        summary="Let the AI take one token",
    )
    async def agent_step(session_id: str) -> Union[GameStateResponse, JSONResponse]:
        """Remove one token on the AI's behalf."""
        return respond(api_service.agent_step(session_id))

    @app.post(
        "/api/v1/sessions/{session_id}/restart",
        response_model=GameStateResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Game"],
        summary="Start a new game",
    )
    async def restart(session_id: str) -> Union[GameStateResponse, JSONResponse]:
        """Discard the current game and start over in the same session."""
        return respond(api_service.restart(session_id))

    return app


# For running directly: uvicorn takeaway.api.app:app
app = create_app()
