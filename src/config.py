"""Application configuration via environment variables."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # App
    log_level: str = "INFO"
    environment: str = "development"
    cors_origins: list[str] = ["*"]

    # Chat widget
    chat_title: str = "Study Guru Chat"
    chat_subtitle: str = "We're here to help!"
    response_delay_seconds: float = 1.0  # "bot is typing" pause before each reply

    # Contact card shown after a consultation is booked
    contact_email: str = "support@studyguruindia.com"
    contact_phone: str = "+91 99999-99999"
    whatsapp_number: str = "919999999999"
    contact_page_url: str = "/contact"

    # Lead submission
    lead_submission_url: str = ""  # empty = submission disabled
    lead_submission_timeout_seconds: float = 10.0

    # Session
    session_ttl_seconds: int = 7200  # 2 hours

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
