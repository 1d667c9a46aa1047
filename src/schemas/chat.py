"""Chat widget API schemas."""

from pydantic import BaseModel, Field

from src.schemas.conversation import ConversationState
from src.schemas.lead import ContactInfo


class TextInput(BaseModel):
    text: str = Field(max_length=2000)


class OptionInput(BaseModel):
    option: str


class CountryInput(BaseModel):
    country: str


class SessionResponse(BaseModel):
    session_id: str
    state: ConversationState


class WidgetConfig(BaseModel):
    """Static widget settings the front-end needs before the first message."""

    title: str
    subtitle: str
    contact: ContactInfo
