"""Consultation step — final call to action, then the conversation ends."""

from src.conversation.steps.base import BaseStep, BotReply, StepResult
from src.schemas.conversation import ConversationState, ConversationStep, PromptKind

BOOK_NOW = "Yes, Book Now"
NO_THANKS = "No, thanks"

BOOKED_TEXT = (
    "Great! Please visit our contact page to schedule your free consultation. "
    "Our experts will help you plan your study abroad journey."
)
CONTACT_DIRECTLY_TEXT = "You can also reach us directly:"
DECLINED_TEXT = (
    "No problem! Feel free to browse our website for more information about "
    "studying abroad. We're here to help whenever you're ready."
)


class ConsultationStep(BaseStep):
    """Offer a free consultation; the answer decides the closing message."""

    options = [BOOK_NOW, NO_THANKS]

    async def get_initial_message(self, state: ConversationState) -> BotReply:
        # Arrives after the thank-you message with a pause of its own
        return BotReply(
            text="Would you like to book a free consultation with our expert?",
            prompt_kind=PromptKind.OPTIONS,
            choices=list(self.options),
            follow_up=True,
        )

    async def process_option(self, option: str, state: ConversationState) -> StepResult:
        if option == BOOK_NOW:
            return StepResult(
                replies=[
                    BotReply(text=BOOKED_TEXT),
                    BotReply(text=CONTACT_DIRECTLY_TEXT),
                ],
                next_step=ConversationStep.COMPLETED,
                show_contact_info=True,
                consultation_requested=True,
            )
        return StepResult(
            replies=[BotReply(text=DECLINED_TEXT)],
            next_step=ConversationStep.COMPLETED,
            consultation_requested=False,
        )


class CompletedStep(BaseStep):
    """Terminal step: nothing more is asked."""

    async def get_initial_message(self, state: ConversationState) -> None:
        return None
