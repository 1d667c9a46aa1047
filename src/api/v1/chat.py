"""Chat API — the website widget drives its conversation through these endpoints."""

import structlog
from fastapi import APIRouter, Depends, HTTPException, Response, status

from src.config import settings
from src.conversation.engine import DialogueEngine
from src.conversation.session import SessionManager
from src.schemas.chat import (
    CountryInput,
    OptionInput,
    SessionResponse,
    TextInput,
    WidgetConfig,
)
from src.schemas.conversation import ConversationState
from src.schemas.lead import ContactInfo
from src.session_store import get_session_manager

logger = structlog.get_logger()

router = APIRouter(prefix="/api/v1/chat", tags=["chat"])


async def _get_engine(session_id: str, sessions: SessionManager) -> DialogueEngine:
    engine = await sessions.get(session_id)
    if engine is None:
        logger.info("session_not_found", session_id=session_id)
        raise HTTPException(status_code=404, detail="Session not found")
    return engine


@router.get("/config", response_model=WidgetConfig)
async def get_widget_config() -> WidgetConfig:
    """Widget header texts and the contact card."""
    return WidgetConfig(
        title=settings.chat_title,
        subtitle=settings.chat_subtitle,
        contact=ContactInfo(
            email=settings.contact_email,
            phone=settings.contact_phone,
            whatsapp_number=settings.whatsapp_number,
            contact_page_url=settings.contact_page_url,
        ),
    )


@router.post(
    "/sessions",
    response_model=SessionResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_session(
    sessions: SessionManager = Depends(get_session_manager),
) -> SessionResponse:
    """Open a conversation for a freshly mounted widget."""
    engine = await sessions.create()
    return SessionResponse(session_id=engine.session_id, state=engine.state)


@router.get("/sessions/{session_id}", response_model=ConversationState)
async def get_session(
    session_id: str,
    sessions: SessionManager = Depends(get_session_manager),
) -> ConversationState:
    engine = await _get_engine(session_id, sessions)
    return engine.state


@router.post("/sessions/{session_id}/start", response_model=ConversationState)
async def start_conversation(
    session_id: str,
    sessions: SessionManager = Depends(get_session_manager),
) -> ConversationState:
    """The "Hi" button: skip the greeting gate."""
    engine = await _get_engine(session_id, sessions)
    return await engine.start()


@router.post("/sessions/{session_id}/messages", response_model=ConversationState)
async def send_message(
    session_id: str,
    data: TextInput,
    sessions: SessionManager = Depends(get_session_manager),
) -> ConversationState:
    """Text typed into the widget input.

    Args:
        session_id: Conversation id returned by POST /sessions
        data: The typed text
        sessions: Session registry

    Returns:
        Conversation state after the bot has replied
    """
    engine = await _get_engine(session_id, sessions)
    return await engine.submit_text(data.text)


@router.post("/sessions/{session_id}/options", response_model=ConversationState)
async def select_option(
    session_id: str,
    data: OptionInput,
    sessions: SessionManager = Depends(get_session_manager),
) -> ConversationState:
    engine = await _get_engine(session_id, sessions)
    return await engine.select_option(data.option)


@router.post("/sessions/{session_id}/countries", response_model=ConversationState)
async def select_country(
    session_id: str,
    data: CountryInput,
    sessions: SessionManager = Depends(get_session_manager),
) -> ConversationState:
    engine = await _get_engine(session_id, sessions)
    return await engine.select_country(data.country)


@router.post("/sessions/{session_id}/reset", response_model=ConversationState)
async def reset_conversation(
    session_id: str,
    sessions: SessionManager = Depends(get_session_manager),
) -> ConversationState:
    engine = await _get_engine(session_id, sessions)
    return await engine.reset()


@router.delete("/sessions/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_session(
    session_id: str,
    sessions: SessionManager = Depends(get_session_manager),
) -> Response:
    """Widget unmounted: discard the conversation."""
    if not await sessions.delete(session_id):
        raise HTTPException(status_code=404, detail="Session not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
