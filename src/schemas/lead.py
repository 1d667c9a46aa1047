"""Lead schemas for the submission endpoint and the widget API."""

from typing import Optional

from pydantic import BaseModel, Field


class LeadSubmission(BaseModel):
    """Payload posted to the lead intake endpoint when a chat completes."""

    session_id: str = Field(alias="sessionId")
    name: Optional[str] = None
    location: Optional[str] = None
    study_level: Optional[str] = Field(default=None, alias="studyLevel")
    destination_country: Optional[str] = Field(default=None, alias="destinationCountry")
    subject: Optional[str] = None
    language_score: Optional[str] = Field(default=None, alias="languageScore")
    start_date: Optional[str] = Field(default=None, alias="startDate")
    consultation_requested: bool = Field(default=False, alias="consultationRequested")
    submitted_at: str = Field(alias="submittedAt")  # ISO 8601, UTC

    model_config = {"populate_by_name": True}


class ContactInfo(BaseModel):
    """Contact card rendered after the user books a consultation."""

    email: str
    phone: str
    whatsapp_number: str
    contact_page_url: str
