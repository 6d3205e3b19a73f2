"""
Pytest fixtures for Takeaway tests.
"""

import pytest

from ..engine_core.rules import GameRules
from ..engine_core.state import GameState
from ..engine_core.action import Action
from ..engine_core.reducer import Reducer
from ..session import SessionManager, GameLoop


@pytest.fixture
def rules() -> GameRules:
    """Reference rules: 12 tokens, take up to 3."""
    return GameRules()


@pytest.fixture
def reducer(rules: GameRules) -> Reducer:
    return Reducer(rules=rules)


@pytest.fixture
def initial_state(reducer: Reducer) -> GameState:
    return reducer.new_game()


@pytest.fixture
def agent_to_move(reducer: Reducer, initial_state: GameState) -> GameState:
    """The AI has been asked to open the game."""
    return reducer.reduce(initial_state, Action.assign_side(False))


@pytest.fixture
def mid_turn_state(reducer: Reducer, initial_state: GameState) -> GameState:
    """Human has taken two tokens from the full pool."""
    state = reducer.reduce(initial_state, Action.take_token())
    return reducer.reduce(state, Action.take_token())


@pytest.fixture
def session_manager(rules: GameRules) -> SessionManager:
    return SessionManager(rules=rules)


@pytest.fixture
def game_loop(session_manager: SessionManager) -> GameLoop:
    return GameLoop(session_manager.create_session())


def play_agent_turn(reducer: Reducer, state: GameState) -> GameState:
    """Take tokens for the AI until it hands back the turn or wins."""
    while not state.player_is_human and not state.is_over:
        state = reducer.reduce(state, Action.take_token())
    return state


def take_tokens(reducer: Reducer, state: GameState, count: int) -> GameState:
    """Take up to count tokens for the human while it holds the turn."""
    while count and state.player_is_human and not state.is_over:
        state = reducer.reduce(state, Action.take_token())
        count -= 1
    return state
