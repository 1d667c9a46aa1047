"""Lead submission — posts completed chat intakes to the lead endpoint."""

from datetime import datetime, timezone
from typing import Optional

import httpx
import structlog

from src.config import settings
from src.schemas.conversation import LeadIntake
from src.schemas.lead import LeadSubmission

logger = structlog.get_logger()


class LeadSubmissionError(Exception):
    """The lead endpoint rejected the intake or could not be reached."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


def build_submission(
    session_id: str,
    intake: LeadIntake,
    consultation_requested: bool = False,
) -> LeadSubmission:
    """Flatten the intake into the payload the lead endpoint expects."""
    return LeadSubmission(
        session_id=session_id,
        consultation_requested=consultation_requested,
        submitted_at=datetime.now(timezone.utc).isoformat(),
        **intake.model_dump(),
    )


class LeadSubmitter:
    """Sends lead submissions over HTTP. One attempt per call, no retry."""

    def __init__(
        self,
        url: str,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.url = url
        self.timeout = timeout
        self.transport = transport

    async def submit(self, submission: LeadSubmission) -> None:
        """Post the submission.

        Raises:
            LeadSubmissionError: on transport errors and non-2xx responses
        """
        payload = submission.model_dump(mode="json", by_alias=True)
        async with httpx.AsyncClient(
            timeout=self.timeout, transport=self.transport
        ) as client:
            try:
                response = await client.post(self.url, json=payload)
            except httpx.HTTPError as e:
                logger.error(
                    "lead_submission_transport_error",
                    error=str(e),
                    session_id=submission.session_id,
                )
                raise LeadSubmissionError(str(e)) from e

        if not response.is_success:
            logger.error(
                "lead_submission_rejected",
                status_code=response.status_code,
                body=response.text[:500],
                session_id=submission.session_id,
            )
            raise LeadSubmissionError(
                f"Lead endpoint answered {response.status_code}",
                status_code=response.status_code,
            )

        logger.info(
            "lead_submitted",
            session_id=submission.session_id,
            consultation_requested=submission.consultation_requested,
        )


def get_lead_submitter() -> Optional[LeadSubmitter]:
    """Build the submitter from settings.

    Returns None if no submission URL is configured.
    """
    if not settings.lead_submission_url:
        return None
    return LeadSubmitter(
        settings.lead_submission_url,
        timeout=settings.lead_submission_timeout_seconds,
    )
