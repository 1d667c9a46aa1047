"""Dialogue Engine — drives the scripted lead-capture chat.

Routes user text and button presses to the current step handler,
applies the resulting state transitions, delivers bot replies after a
"typing…" pause and hands the finished intake to the lead endpoint.
"""

from __future__ import annotations

import asyncio
import itertools
import uuid
from typing import Awaitable, Callable, Optional

import structlog

from src.config import settings
from src.conversation.steps.base import (
    OTHER_OPTION,
    BaseStep,
    BotReply,
    StepResult,
    fallback,
)
from src.conversation.steps.consultation import CompletedStep, ConsultationStep
from src.conversation.steps.destination import DestinationStep
from src.conversation.steps.greeting import GreetingStep
from src.conversation.steps.language_score import LanguageScoreStep
from src.conversation.steps.personal_details import LocationStep, NameStep
from src.conversation.steps.start_date import StartDateStep
from src.conversation.steps.study_level import StudyLevelStep
from src.conversation.steps.subject import SubjectStep
from src.notifications.lead_submission import (
    LeadSubmissionError,
    LeadSubmitter,
    build_submission,
)
from src.schemas.conversation import (
    ConversationState,
    ConversationStep,
    Message,
    Prompt,
    PromptKind,
    Sender,
    SubmissionStatus,
)

logger = structlog.get_logger()

# Transition table: every step and the handler that owns its events
STEP_HANDLERS: dict[ConversationStep, BaseStep] = {
    ConversationStep.IDLE: GreetingStep(),
    ConversationStep.NAME: NameStep(),
    ConversationStep.LOCATION: LocationStep(),
    ConversationStep.STUDY_LEVEL: StudyLevelStep(),
    ConversationStep.DESTINATION: DestinationStep(),
    ConversationStep.SUBJECT: SubjectStep(),
    ConversationStep.LANGUAGE_SCORE: LanguageScoreStep(),
    ConversationStep.START_DATE: StartDateStep(),
    ConversationStep.CONSULTATION: ConsultationStep(),
    ConversationStep.COMPLETED: CompletedStep(),
}

SUBMISSION_FAILED_TEXT = (
    "We couldn't send your details to our team right now. "
    "Please reach us through the contact page and we'll get back to you."
)

Sleep = Callable[[float], Awaitable[None]]


class DialogueEngine:
    """One chat widget conversation.

    Events are processed one at a time: while a reply is being "typed"
    every new event is ignored. The pending reply is an asyncio task owned
    by the engine so reset() and close() can cancel it.
    """

    def __init__(
        self,
        session_id: Optional[str] = None,
        submitter: Optional[LeadSubmitter] = None,
        response_delay: Optional[float] = None,
        sleep: Sleep = asyncio.sleep,
    ):
        self.session_id = session_id or str(uuid.uuid4())
        self.submitter = submitter
        self.response_delay = (
            settings.response_delay_seconds if response_delay is None else response_delay
        )
        self._sleep = sleep
        self._message_ids = itertools.count(1)
        self._pending: Optional[asyncio.Task] = None
        self._closed = False
        self.state = ConversationState()

    @property
    def busy(self) -> bool:
        """True while a bot reply is still on its way."""
        return self._pending is not None and not self._pending.done()

    @property
    def closed(self) -> bool:
        return self._closed

    # ─── Public entry points ─────────────────────────────────────────

    async def start(self) -> ConversationState:
        """Skip the greeting gate and ask the first question."""
        if self._closed or self.busy or self.state.step != ConversationStep.IDLE:
            return self.state
        greeting = STEP_HANDLERS[ConversationStep.IDLE]
        return await self._apply(greeting.start())

    async def submit_text(self, text: str) -> ConversationState:
        """Process text typed into the widget input."""
        if self._closed or self.busy:
            return self.state

        text = text.strip()
        if not text:
            return self.state

        self._append(Sender.USER, text)

        # Typed while buttons are shown or after the end of the script
        if not self.state.awaiting_text_input:
            logger.info(
                "unexpected_text",
                session_id=self.session_id,
                step=self.state.step.name,
            )
            return await self._apply(fallback())

        handler = STEP_HANDLERS[self.state.step]
        return await self._apply(await handler.process_text(text, self.state))

    async def select_option(self, option: str) -> ConversationState:
        """Process a button from the pending choice set."""
        prompt = self.state.pending_prompt
        if (
            self._closed
            or self.busy
            or prompt is None
            or prompt.kind != PromptKind.OPTIONS
            or option not in prompt.choices
        ):
            return self.state

        if option == OTHER_OPTION:
            self._switch_to_text(prompt)
            return self.state

        self._append(Sender.USER, option)
        handler = STEP_HANDLERS[self.state.step]
        return await self._apply(await handler.process_option(option, self.state))

    async def select_country(self, country: str) -> ConversationState:
        """Process a button from the destination country sub-prompt."""
        prompt = self.state.pending_prompt
        if (
            self._closed
            or self.busy
            or prompt is None
            or prompt.kind != PromptKind.COUNTRIES
            or country not in prompt.choices
        ):
            return self.state

        if country == OTHER_OPTION:
            self._switch_to_text(prompt)
            return self.state

        self._append(Sender.USER, country)
        handler = STEP_HANDLERS[ConversationStep.DESTINATION]
        return await self._apply(await handler.process_country(country, self.state))

    async def reset(self) -> ConversationState:
        """Drop the conversation and return to the initial state."""
        self._cancel_pending()
        self.state = ConversationState()
        self._message_ids = itertools.count(1)
        logger.info("conversation_reset", session_id=self.session_id)
        return self.state

    async def close(self) -> None:
        """Tear the session down; a reply still being typed is discarded."""
        self._cancel_pending()
        self._closed = True
        logger.debug("conversation_closed", session_id=self.session_id)

    # ─── Transition handling ─────────────────────────────────────────

    async def _apply(self, result: StepResult) -> ConversationState:
        """Apply a step result now and deliver its replies after the pause."""
        state = self.state
        previous_prompt = state.pending_prompt
        previous_text_input = state.awaiting_text_input
        step_before = state.step

        if result.update_data:
            for key, value in result.update_data.items():
                if hasattr(state.intake, key):
                    setattr(state.intake, key, value)

        if result.consultation_requested is not None:
            state.consultation_requested = result.consultation_requested

        replies = list(result.replies)
        if result.next_step is not None:
            if result.next_step < state.step:
                logger.error(
                    "backward_transition_ignored",
                    session_id=self.session_id,
                    step=state.step.name,
                    next_step=result.next_step.name,
                )
            else:
                state.step = result.next_step
                next_message = await STEP_HANDLERS[state.step].get_initial_message(state)
                if next_message is not None:
                    replies.append(next_message)

        # Input stays hidden until the reply has been delivered
        state.awaiting_text_input = False
        state.pending_prompt = None

        logger.info(
            "message_processed",
            session_id=self.session_id,
            step_before=step_before.name,
            step=state.step.name,
            replies=len(replies),
        )

        entered_completed = (
            state.step == ConversationStep.COMPLETED
            and step_before != ConversationStep.COMPLETED
        )
        return await self._run(
            self._deliver(
                replies,
                result,
                previous_prompt,
                previous_text_input,
                entered_completed,
            )
        )

    async def _run(self, delivery: Awaitable[None]) -> ConversationState:
        """Schedule the delivery as the pending task and wait for it.

        Only reset() and close() cancel the delivery. A cancelled caller
        stops waiting, but the reply is still delivered.
        """
        task = asyncio.ensure_future(delivery)
        self._pending = task
        try:
            await asyncio.shield(task)
        except asyncio.CancelledError:
            if not task.cancelled():
                raise
        return self.state

    async def _deliver(
        self,
        replies: list[BotReply],
        result: StepResult,
        previous_prompt: Optional[Prompt],
        previous_text_input: bool,
        entered_completed: bool,
    ) -> None:
        state = self.state
        prompt: Optional[Prompt] = None

        for index, reply in enumerate(replies):
            if index == 0 or reply.follow_up:
                await self._typing_pause()
            self._append(Sender.BOT, reply.text, reply.choices or None)
            if reply.prompt_kind is not None:
                prompt = Prompt(
                    text=reply.text,
                    kind=reply.prompt_kind,
                    choices=list(reply.choices),
                )

        if result.show_contact_info:
            state.show_contact_info = True

        if prompt is not None:
            self._show_prompt(prompt)
        elif state.step == ConversationStep.COMPLETED:
            state.pending_prompt = None
            state.awaiting_text_input = False
        else:
            # Nothing new was asked: the previous question stays open
            state.pending_prompt = previous_prompt
            state.awaiting_text_input = previous_text_input

        if entered_completed:
            logger.info(
                "conversation_completed",
                session_id=self.session_id,
                consultation_requested=state.consultation_requested,
            )
            await self._submit_lead()

    async def _typing_pause(self) -> None:
        state = self.state
        state.bot_typing = True
        try:
            await self._sleep(self.response_delay)
        finally:
            state.bot_typing = False

    async def _submit_lead(self) -> None:
        """Send the intake once; a failure becomes a notice, never a retry."""
        state = self.state
        if self.submitter is None:
            logger.warning("no_lead_submitter", session_id=self.session_id)
            state.submission_status = SubmissionStatus.SKIPPED
            return

        submission = build_submission(
            self.session_id,
            state.intake,
            consultation_requested=bool(state.consultation_requested),
        )
        try:
            await self.submitter.submit(submission)
        except LeadSubmissionError as e:
            logger.warning(
                "lead_submission_failed",
                error=str(e),
                session_id=self.session_id,
            )
            state.submission_status = SubmissionStatus.FAILED
            self._append(Sender.BOT, SUBMISSION_FAILED_TEXT)
            return

        state.submission_status = SubmissionStatus.SENT

    # ─── Helpers ─────────────────────────────────────────────────────

    def _append(
        self, sender: Sender, text: str, choices: Optional[list[str]] = None
    ) -> Message:
        message = Message(
            id=next(self._message_ids),
            sender=sender,
            text=text,
            choices=list(choices) if choices else None,
        )
        self.state.transcript.append(message)
        return message

    def _show_prompt(self, prompt: Prompt) -> None:
        self.state.pending_prompt = prompt
        self.state.awaiting_text_input = prompt.kind == PromptKind.TEXT

    def _switch_to_text(self, prompt: Prompt) -> None:
        """Answer the same question by typing after "Other" was chosen."""
        self._show_prompt(Prompt(text=prompt.text, kind=PromptKind.TEXT))
        logger.info(
            "other_option_selected",
            session_id=self.session_id,
            step=self.state.step.name,
        )

    def _cancel_pending(self) -> None:
        if self.busy:
            self._pending.cancel()
        self._pending = None
