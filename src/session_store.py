"""Process-wide chat session registry."""

from typing import Optional

from src.conversation.engine import DialogueEngine
from src.conversation.session import SessionManager
from src.notifications.lead_submission import get_lead_submitter

_session_manager: Optional[SessionManager] = None


def _build_engine(session_id: str) -> DialogueEngine:
    return DialogueEngine(session_id, submitter=get_lead_submitter())


def get_session_manager_instance() -> SessionManager:
    """Get or create the session manager (lazy init)."""
    global _session_manager
    if _session_manager is None:
        _session_manager = SessionManager(engine_factory=_build_engine)
    return _session_manager


async def get_session_manager() -> SessionManager:
    """FastAPI dependency for the session manager."""
    return get_session_manager_instance()
