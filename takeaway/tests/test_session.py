"""
Tests for sessions and the game loop.

Tests:
- Session lifecycle
- Human requests are guarded by turn and hand-over rules
- AI steps are paced one token at a time
"""

import time

from ..engine_core.rules import GameRules
from ..engine_core.action import Action
from ..session import SessionManager, SessionState, GameLoop, LoopState


class TestSessionManager:

    def test_create_session(self, session_manager):
        session = session_manager.create_session()

        assert session.session_id
        assert session.state == SessionState.ACTIVE
        assert session.game_state.tokens_left == 12
        assert session.is_human_turn()
        assert session.history == []

    def test_create_session_agent_first(self, session_manager):
        session = session_manager.create_session(agent_first=True)

        assert not session.game_state.player_is_human
        assert session.game_state.feedback == "You let the AI play first."
        assert len(session.history) == 1

    def test_session_lifecycle(self, session_manager):
        session = session_manager.create_session()
        session_id = session.session_id

        assert session_id in session_manager.list_active_sessions()
        assert session_manager.end_session(session_id)
        assert session_id not in session_manager.list_active_sessions()
        assert session_manager.get_session(session_id) is None
        assert session.state == SessionState.ABANDONED

    def test_finished_game_stays_listed(self, session_manager):
        """A decided game can still be restarted, so it is listed until ended."""
        session = session_manager.create_session()
        session.game_state = session.game_state._copy_with(tokens_left=0, can_take=0, winner=True)
        session.state = SessionState.GAME_OVER

        assert session.session_id in session_manager.list_active_sessions()

        session_manager.end_session(session.session_id)
        assert session.state == SessionState.GAME_OVER

    def test_restart_starts_empty_history(self, session_manager):
        session = session_manager.create_session(agent_first=True)

        session.restart()

        assert session.history == []
        assert session.games_played == 2
        assert session.game_state.tokens_left == 12

    def test_end_unknown_session(self, session_manager):
        assert not session_manager.end_session("nonexistent-id")

    def test_cleanup_stale_sessions(self, session_manager):
        old = session_manager.create_session()
        fresh = session_manager.create_session()
        old.created_at = time.time() - 7200

        removed = session_manager.cleanup_stale_sessions(max_age_seconds=3600)

        assert removed == 1
        assert session_manager.get_session(old.session_id) is None
        assert session_manager.get_session(fresh.session_id) is fresh

    def test_no_op_actions_are_not_recorded(self, session_manager):
        session = session_manager.create_session(agent_first=True)
        before = session.game_state

        session.dispatch(Action.assign_side(False))

        assert session.game_state is before
        assert len(session.history) == 1

    def test_sessions_share_rules(self):
        rules = GameRules(starting_total=9, max_taken=2)
        manager = SessionManager(rules=rules)

        session = manager.create_session()

        assert session.rules is rules
        assert session.game_state.tokens_left == 9


class TestGameLoop:

    def test_human_takes_token(self, game_loop):
        result = game_loop.take_token()

        assert result.success
        assert result.tokens_left == 11
        assert result.tokens_taken == 1
        assert result.loop_state == LoopState.YOUR_TURN
        assert result.feedback == "You can take up to 2 more tokens or let the AI play."

    def test_can_hand_over_before_first_move(self, game_loop):
        assert game_loop.can_hand_to_agent()

        result = game_loop.hand_to_agent()

        assert result.success
        assert result.loop_state == LoopState.AGENT_TURN
        assert result.tokens_taken == 0

    def test_cannot_hand_over_before_taking(self, game_loop):
        """Once the AI has moved, the human must take a token before handing back."""
        game_loop.hand_to_agent()
        game_loop.agent_step()
        assert game_loop.state == LoopState.YOUR_TURN

        result = game_loop.hand_to_agent()

        assert not result.success
        assert result.error_code == "HAND_OVER_NOT_ALLOWED"
        assert game_loop.session.game_state.player_is_human

    def test_cannot_hand_over_during_agent_turn(self, game_loop):
        game_loop.take_token()
        game_loop.hand_to_agent()

        assert not game_loop.can_hand_to_agent()

    def test_take_refused_on_agent_turn(self, game_loop):
        game_loop.hand_to_agent()

        result = game_loop.take_token()

        assert not result.success
        assert result.error_code == "NOT_YOUR_TURN"
        assert game_loop.session.game_state.tokens_left == 12

    def test_agent_step_refused_on_human_turn(self, game_loop):
        result = game_loop.agent_step()

        assert not result.success
        assert result.error_code == "NOT_AGENT_TURN"

    def test_agent_step_takes_one_token(self, game_loop):
        game_loop.take_token()
        game_loop.take_token()
        game_loop.hand_to_agent()

        result = game_loop.agent_step()

        assert result.tokens_taken == 1
        assert result.loop_state == LoopState.AGENT_TURN
        assert result.feedback == "The AI took a first token."

    def test_run_agent_turn(self, game_loop):
        game_loop.take_token()
        game_loop.take_token()
        game_loop.hand_to_agent()

        result = game_loop.run_agent_turn()

        assert result.tokens_taken == 2
        assert result.tokens_left == 8
        assert result.loop_state == LoopState.YOUR_TURN
        assert result.narration == [
            "The AI took a first token.",
            "The AI took a second token. It's your turn now. You can take up to 3 tokens.",
        ]

    def test_full_game_and_restart(self, game_loop):
        while game_loop.state != LoopState.GAME_OVER:
            if game_loop.state == LoopState.YOUR_TURN:
                game_loop.take_token()
                if game_loop.can_hand_to_agent():
                    game_loop.hand_to_agent()
            else:
                game_loop.run_agent_turn()

        assert game_loop.session.state == SessionState.GAME_OVER
        assert game_loop.session.game_state.winner is False

        refused = game_loop.take_token()
        assert refused.error_code == "GAME_OVER"
        assert not game_loop.can_hand_to_agent()

        result = game_loop.restart()
        assert result.success
        assert result.loop_state == LoopState.YOUR_TURN
        assert result.tokens_left == 12
        assert game_loop.session.games_played == 2
        assert game_loop.session.state == SessionState.ACTIVE
        assert game_loop.session.history == []

    def test_loop_for_new_session(self, session_manager):
        loop = GameLoop(session_manager.create_session(agent_first=True))
        assert loop.state == LoopState.AGENT_TURN
