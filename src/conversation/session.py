"""Session manager — in-memory registry of live chat conversations."""

import time
import uuid
from typing import Callable, Optional

import structlog

from src.config import settings
from src.conversation.engine import DialogueEngine

logger = structlog.get_logger()

EngineFactory = Callable[[str], DialogueEngine]


class SessionManager:
    """Keeps one DialogueEngine per widget session with an idle TTL.

    Nothing is persisted: conversations live only as long as the process.
    """

    def __init__(
        self,
        engine_factory: Optional[EngineFactory] = None,
        ttl: Optional[int] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.engine_factory = engine_factory or (lambda session_id: DialogueEngine(session_id))
        self.ttl = settings.session_ttl_seconds if ttl is None else ttl
        self._clock = clock
        self._engines: dict[str, DialogueEngine] = {}
        self._last_seen: dict[str, float] = {}

    async def create(self) -> DialogueEngine:
        """Open a new conversation."""
        await self.prune()
        session_id = str(uuid.uuid4())
        engine = self.engine_factory(session_id)
        self._engines[session_id] = engine
        self._last_seen[session_id] = self._clock()
        logger.info("session_created", session_id=session_id, active=len(self._engines))
        return engine

    async def get(self, session_id: str) -> Optional[DialogueEngine]:
        """Get a live conversation and refresh its idle timer."""
        await self.prune()
        engine = self._engines.get(session_id)
        if engine is not None:
            self._last_seen[session_id] = self._clock()
        return engine

    async def delete(self, session_id: str) -> bool:
        """Close and forget a conversation."""
        engine = self._engines.pop(session_id, None)
        self._last_seen.pop(session_id, None)
        if engine is None:
            return False
        await engine.close()
        logger.info("session_deleted", session_id=session_id)
        return True

    async def exists(self, session_id: str) -> bool:
        await self.prune()
        return session_id in self._engines

    async def prune(self) -> int:
        """Close conversations idle for longer than the TTL."""
        now = self._clock()
        expired = [
            session_id
            for session_id, seen in self._last_seen.items()
            if now - seen > self.ttl
        ]
        for session_id in expired:
            await self.delete(session_id)
        if expired:
            logger.info("sessions_expired", count=len(expired))
        return len(expired)

    async def close_all(self) -> None:
        for session_id in list(self._engines):
            await self.delete(session_id)

    def __len__(self) -> int:
        return len(self._engines)
