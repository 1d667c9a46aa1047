"""Destination step — does the student already have a country in mind?

"Yes" opens a secondary country picker without leaving the step;
"No" records no destination and moves on to the subject question.
"""

from src.conversation.steps.base import OTHER_OPTION, BaseStep, BotReply, StepResult
from src.schemas.conversation import ConversationState, ConversationStep, PromptKind

YES = "Yes"
NO = "No"

COUNTRY_OPTIONS = [
    "USA",
    "UK",
    "Canada",
    "Australia",
    "Germany",
    "France",
    "New Zealand",
    "Singapore",
    "Ireland",
    OTHER_OPTION,
]

NO_DESTINATION_TEXT = (
    "No problem! Some top destinations are USA, UK, Canada, Australia, "
    "and Germany. You can explore more on our country pages."
)


class DestinationStep(BaseStep):
    """Yes/No question with a country sub-prompt on "Yes"."""

    options = [YES, NO]
    countries = COUNTRY_OPTIONS

    async def get_initial_message(self, state: ConversationState) -> BotReply:
        return BotReply(
            text="Do you have a specific country in mind for your studies?",
            prompt_kind=PromptKind.OPTIONS,
            choices=list(self.options),
        )

    async def process_option(self, option: str, state: ConversationState) -> StepResult:
        if option == YES:
            return StepResult(
                replies=[
                    BotReply(
                        text="Which country are you aiming for?",
                        prompt_kind=PromptKind.COUNTRIES,
                        choices=list(self.countries),
                    )
                ],
            )
        return StepResult(
            replies=[BotReply(text=NO_DESTINATION_TEXT)],
            next_step=ConversationStep.SUBJECT,
            update_data={"destination_country": None},
        )

    async def process_country(self, country: str, state: ConversationState) -> StepResult:
        return StepResult(
            next_step=ConversationStep.SUBJECT,
            update_data={"destination_country": country},
        )

    async def process_text(self, user_message: str, state: ConversationState) -> StepResult:
        # Only reachable after "Other" in the country picker
        return await self.process_country(user_message, state)
