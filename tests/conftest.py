"""Test configuration and shared fixtures.

Pattern: Pytest fixtures, conftest.py
"""

import pytest

from council_session.core.config import Settings
from council_session.council.discuss import CouncilDiscussController
from council_session.session.locks import SessionLockRegistry
from council_session.session.manager import SessionManager, SessionManagerConfig
from council_session.session.models import Participant, ParticipantType, Session
from council_session.session.store import InMemorySessionStore
from tests.fakes.fake_generator import FakeDraftGenerator


AMBIGUOUS_REQUEST = "help with stuff"
CLEAR_REQUEST = "How should we design the architecture for our payment system?"


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def test_settings() -> Settings:
    """Settings with the default cycle limits and no .env lookup."""
    return Settings(
        _env_file=None,
        environment="test",
        log_level="DEBUG",
        interactive_mode_enabled=True,
        debate_cycle_limit=10,
        extended_debate_cycle_limit=20,
    )


@pytest.fixture
def short_limit_settings() -> Settings:
    """Settings with small cycle limits for debate tests."""
    return Settings(
        _env_file=None,
        environment="test",
        debate_cycle_limit=2,
        extended_debate_cycle_limit=3,
    )


# ============================================================================
# Session Fixtures
# ============================================================================

@pytest.fixture
def store() -> InMemorySessionStore:
    return InMemorySessionStore()


@pytest.fixture
def manager(store: InMemorySessionStore, test_settings: Settings) -> SessionManager:
    return SessionManager(store, SessionManagerConfig.from_settings(test_settings))


@pytest.fixture
def sample_session() -> Session:
    """A fresh session that has not been stored."""
    return Session(request_text=CLEAR_REQUEST)


@pytest.fixture
def user_participant() -> Participant:
    return Participant(participant_id="user", type=ParticipantType.USER, name="User")


@pytest.fixture
def system_participant() -> Participant:
    return Participant(participant_id="system", type=ParticipantType.SYSTEM, name="System")


# ============================================================================
# Controller Fixtures
# ============================================================================

@pytest.fixture
def fake_generator() -> FakeDraftGenerator:
    return FakeDraftGenerator()


@pytest.fixture
def controller(
    manager: SessionManager,
    test_settings: Settings,
    fake_generator: FakeDraftGenerator,
) -> CouncilDiscussController:
    return CouncilDiscussController(
        manager,
        test_settings,
        draft_generator=fake_generator,
        locks=SessionLockRegistry(),
    )
