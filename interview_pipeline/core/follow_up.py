"""
Follow-up question generation.
"""

import logging
import re

from interview_pipeline.config.settings import Settings, get_settings
from interview_pipeline.models.analysis import FollowUpSet
from interview_pipeline.prompts.interviewer import InterviewerPrompts
from interview_pipeline.providers.base import StructuredTextProvider

logger = logging.getLogger(__name__)

FOLLOW_UP_COUNT = 3
CANNED_FOLLOW_UP = "Can you elaborate more on that point?"

# "1.", "2)", "-", "*", "•" at the start of a line
_LIST_MARKER = re.compile(r"^\s*(?:\d+[.)]|[-*•])\s*")


def parse_follow_up_questions(response: str) -> list[str]:
    """
    Parse free-form model output into exactly three questions.

    Lines are stripped of numbering and bullets; lines without "?" are
    dropped; the result is padded with a canned question or truncated.
    """
    questions = []
    for line in response.splitlines():
        cleaned = _LIST_MARKER.sub("", line.strip()).strip()
        if cleaned and "?" in cleaned:
            questions.append(cleaned)

    # Ensure we have exactly 3 questions
    while len(questions) < FOLLOW_UP_COUNT:
        questions.append(CANNED_FOLLOW_UP)

    return questions[:FOLLOW_UP_COUNT]


class FollowUpGenerator:
    """Generates three follow-up questions from a candidate's answer."""

    component = "follow_up"

    def __init__(
        self,
        provider: StructuredTextProvider,
        settings: Settings | None = None,
    ):
        self.provider = provider
        self.settings = settings or get_settings()
        self.prompts = InterviewerPrompts()

    async def generate(
        self,
        answer_text: str,
        original_question: str,
        question_type: str = "behavioral",
    ) -> FollowUpSet:
        """
        Generate follow-up questions.

        Args:
            answer_text: Transcribed answer
            original_question: The question that was asked
            question_type: "behavioral", "technical", ...

        Returns:
            FollowUpSet with exactly three questions

        Raises:
            ProviderUnavailable: Text backend not configured
            ProviderError: Text backend call failed
        """
        prompt = self.prompts.generate_followup_prompt(answer_text, original_question, question_type)

        response = await self.provider.complete(
            prompt,
            system_instruction=self.prompts.SYSTEM_CONTEXT,
            max_tokens=self.settings.followup_max_tokens,
            temperature=self.settings.followup_temperature,
        )

        questions = parse_follow_up_questions(response)
        logger.info(f"Generated follow-up questions: {questions}")

        return FollowUpSet(
            questions=questions,
            reasoning=f"Generated based on {question_type} question analysis",
        )
