"""
Tests for API layer.

Tests:
- API service methods
- Session lifecycle via API
- Error handling
"""

import pytest

from ..api.schemas import (
    CreateSessionRequest,
    ErrorResponse,
    ErrorCode,
    SessionStatus,
    Side,
)
from ..api.service import APIService


class TestAPIService:
    """Tests for APIService."""

    @pytest.fixture
    def service(self):
        """Create a fresh API service."""
        return APIService()

    @pytest.fixture
    def session_id(self, service):
        return service.create_session(CreateSessionRequest()).session_id

    def test_create_session(self, service):
        response = service.create_session(CreateSessionRequest())

        assert response.session_id is not None
        assert response.status == SessionStatus.YOUR_TURN
        assert response.game_state.tokens_left == 12
        assert response.game_state.current_side == Side.HUMAN
        assert response.game_state.can_hand_to_agent

    def test_create_session_agent_first(self, service):
        response = service.create_session(CreateSessionRequest(agent_first=True))

        assert response.status == SessionStatus.AGENT_TURN
        assert response.game_state.feedback == "You let the AI play first."

    def test_get_session(self, service, session_id):
        response = service.get_session(session_id)

        assert response.session_id == session_id
        assert response.moves_this_game == 0

    def test_get_nonexistent_session(self, service):
        response = service.get_session("nonexistent-id")

        assert isinstance(response, ErrorResponse)
        assert response.error_code == ErrorCode.SESSION_NOT_FOUND

    def test_take_token(self, service, session_id):
        response = service.take_token(session_id)

        assert response.tokens_left == 11
        assert response.tokens_taken == 1
        assert response.can_take == 2
        assert response.narration == [response.feedback]

    def test_hand_over_and_agent_steps(self, service, session_id):
        service.take_token(session_id)
        response = service.hand_to_agent(session_id)

        assert response.status == SessionStatus.AGENT_TURN
        assert response.current_side == Side.AGENT
        assert response.can_take == 3

        for _ in range(3):
            response = service.agent_step(session_id)

        assert response.tokens_left == 8
        assert response.status == SessionStatus.YOUR_TURN

    def test_refusals(self, service, session_id):
        response = service.agent_step(session_id)
        assert response.error_code == ErrorCode.NOT_AGENT_TURN

        service.hand_to_agent(session_id)
        response = service.take_token(session_id)
        assert response.error_code == ErrorCode.NOT_YOUR_TURN
        assert response.details == {"status": "agent_turn"}

    def test_game_over_and_restart(self, service, session_id):
        service.hand_to_agent(session_id)
        state = service.get_game_state(session_id)
        while state.status != SessionStatus.GAME_OVER:
            if state.status == SessionStatus.AGENT_TURN:
                state = service.agent_step(session_id)
            else:
                # Leave the AI a multiple of four, then hand over
                for _ in range(state.tokens_left % 4 or 1):
                    state = service.take_token(session_id)
                if state.status == SessionStatus.YOUR_TURN:
                    state = service.hand_to_agent(session_id)

        assert state.winner == Side.HUMAN
        assert service.take_token(session_id).error_code == ErrorCode.GAME_OVER

        state = service.restart(session_id)
        assert state.tokens_left == 12
        assert state.winner is None
        assert service.get_session(session_id).games_played == 2
        assert service.get_session(session_id).moves_this_game == 0

    def test_end_session(self, service, session_id):
        assert service.end_session(session_id)
        assert session_id not in service.list_sessions()
        assert isinstance(service.take_token(session_id), ErrorResponse)

    def test_list_sessions(self, service):
        for _ in range(3):
            service.create_session(CreateSessionRequest())

        assert len(service.list_sessions()) == 3
