"""Test fixtures and configuration."""

import asyncio
from typing import Optional

import pytest
from fastapi.testclient import TestClient

from src.conversation.engine import DialogueEngine
from src.conversation.session import SessionManager
from src.main import app
from src.session_store import get_session_manager


class FakeSubmitter:
    """Records lead submissions instead of posting them."""

    def __init__(self, error: Optional[Exception] = None):
        self.submissions = []
        self.error = error

    async def submit(self, submission) -> None:
        self.submissions.append(submission)
        if self.error is not None:
            raise self.error


class RecordingSleep:
    """Instant sleep that remembers how often the bot "typed"."""

    def __init__(self):
        self.calls: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.calls.append(delay)


class GatedSleep:
    """Sleep that blocks until the test releases it."""

    def __init__(self):
        self.started = asyncio.Event()
        self.release = asyncio.Event()

    async def __call__(self, delay: float) -> None:
        self.started.set()
        await self.release.wait()


@pytest.fixture
def submitter():
    return FakeSubmitter()


@pytest.fixture
def sleep():
    return RecordingSleep()


@pytest.fixture
def engine(submitter, sleep):
    """DialogueEngine that never really waits."""
    return DialogueEngine(
        session_id="session-1",
        submitter=submitter,
        response_delay=1.5,
        sleep=sleep,
    )


@pytest.fixture
def session_manager():
    """SessionManager whose engines reply without delay."""
    return SessionManager(
        engine_factory=lambda session_id: DialogueEngine(session_id, response_delay=0),
    )


@pytest.fixture
def client(session_manager):
    """HTTP client with the session registry swapped for the test one."""
    app.dependency_overrides[get_session_manager] = lambda: session_manager
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def gated_sleep():
    return GatedSleep()


@pytest.fixture
def gated_engine(submitter, gated_sleep):
    """DialogueEngine whose replies hang until gated_sleep.release is set."""
    return DialogueEngine(session_id="session-2", submitter=submitter, sleep=gated_sleep)
