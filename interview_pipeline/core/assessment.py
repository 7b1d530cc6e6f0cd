"""
Assessment Aggregator

Produces the single authoritative assessment of a finished interview.

The provider's JSON is the only source of scores. Anything missing or
malformed fails the whole aggregation with ParseError; there is no
synthetic fallback assessment.
"""

import logging
import math
from typing import Any

from interview_pipeline.config.settings import Settings, get_settings
from interview_pipeline.core.confidence import clamp
from interview_pipeline.core.errors import ParseError
from interview_pipeline.core.structured_output import StructuredResponseParser
from interview_pipeline.models.assessment import (
    InterviewAssessment,
    InterviewMetrics,
    InterviewRecord,
    QuestionTypeAnalysis,
    ScoreBreakdown,
)
from interview_pipeline.prompts.assessment import AssessmentPrompts
from interview_pipeline.providers.base import StructuredTextProvider

logger = logging.getLogger(__name__)

MIN_LIST_ITEMS = 3
MAX_LIST_ITEMS = 5

# Provider field -> ScoreBreakdown field
BREAKDOWN_FIELDS = {
    "communication": "communication",
    "technical": "technical",
    "problemSolving": "problem_solving",
    "confidence": "confidence",
}


def compute_metrics(interview: InterviewRecord) -> InterviewMetrics:
    """
    Interview statistics computed locally from the turns.

    Args:
        interview: The finished interview

    Returns:
        InterviewMetrics (percentages rounded to whole numbers)
    """
    turns = interview.turns
    total = len(turns)

    confidences = [t.confidence for t in turns if t.confidence is not None]
    average_confidence = round(sum(confidences) / len(confidences) * 100) if confidences else 0

    answered = [t for t in turns if t.answered and t.response_text.strip()]
    completion_rate = round(len(answered) / total * 100) if total else 0

    word_counts = [len(t.response_text.split()) for t in answered]
    average_word_count = round(sum(word_counts) / len(word_counts)) if word_counts else 0

    return InterviewMetrics(
        average_confidence=average_confidence,
        total_violations=sum(t.high_severity_violations for t in turns),
        completion_rate=completion_rate,
        average_word_count=average_word_count,
        questions_with_ai=sum(1 for t in turns if t.scores is not None),
        total_questions=total,
    )


class AssessmentAggregator:
    """Turns the accumulated Q/A pairs of one interview into an InterviewAssessment."""

    component = "assessment"

    def __init__(
        self,
        provider: StructuredTextProvider,
        settings: Settings | None = None,
        parser: StructuredResponseParser | None = None,
    ):
        self.provider = provider
        self.settings = settings or get_settings()
        self.parser = parser or StructuredResponseParser(component=self.component)
        self.prompts = AssessmentPrompts()

    async def aggregate(self, interview: InterviewRecord) -> InterviewAssessment:
        """
        Generate the final assessment with exactly one provider call.

        Args:
            interview: The finished interview

        Returns:
            InterviewAssessment

        Raises:
            ParseError: Provider output missing, malformed or incomplete
            ProviderUnavailable: Text backend not configured
            ProviderError: Text backend call failed
        """
        logger.info(
            f"Generating assessment for interview {interview.interview_id} "
            f"({len(interview.turns)} turns)"
        )

        response = await self.provider.complete(
            self.prompts.generate_assessment_prompt(interview),
            system_instruction=self.prompts.SYSTEM_CONTEXT,
            max_tokens=self.settings.assessment_max_tokens,
            temperature=self.settings.assessment_temperature,
        )

        provider_name = getattr(self.provider, "name", None)
        data = self.parser.extract_object(response, provider=provider_name)

        assessment = InterviewAssessment(
            interview_id=interview.interview_id,
            overall_score=self._score(data, "overallScore", response, provider_name),
            breakdown=self._breakdown(data, response, provider_name),
            strengths=self._items(data, "strengths", response, provider_name),
            improvements=self._items(data, "improvements", response, provider_name),
            recommendations=self._items(data, "recommendations", response, provider_name),
            feedback=self._feedback(data, response, provider_name),
            question_type_analysis=self._question_type_analysis(data),
            metrics=compute_metrics(interview),
        )

        logger.info(
            f"Assessment for {interview.interview_id}: overall={assessment.overall_score:.0f}"
        )
        return assessment

    # =========================================================================
    # FIELD EXTRACTION
    # =========================================================================

    def _fail(self, message: str, response: str, provider: str | None) -> ParseError:
        return ParseError(
            message,
            raw_output=response,
            component=self.component,
            provider=provider,
        )

    def _score(self, data: dict[str, Any], key: str, response: str, provider: str | None) -> float:
        value = data.get(key)
        if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
            raise self._fail(f"Assessment field '{key}' is missing or not a number", response, provider)
        return clamp(float(value), 0.0, 100.0)

    def _breakdown(self, data: dict[str, Any], response: str, provider: str | None) -> ScoreBreakdown:
        raw = data.get("breakdown")
        if not isinstance(raw, dict):
            raise self._fail("Assessment field 'breakdown' is missing", response, provider)

        return ScoreBreakdown(**{
            field: self._score(raw, key, response, provider)
            for key, field in BREAKDOWN_FIELDS.items()
        })

    def _items(self, data: dict[str, Any], key: str, response: str, provider: str | None) -> list[str]:
        raw = data.get(key)
        if not isinstance(raw, list):
            raise self._fail(f"Assessment field '{key}' is missing", response, provider)

        items = [str(item).strip() for item in raw if str(item).strip()]
        if len(items) < MIN_LIST_ITEMS:
            raise self._fail(
                f"Assessment field '{key}' has {len(items)} items, expected at least {MIN_LIST_ITEMS}",
                response,
                provider,
            )
        return items[:MAX_LIST_ITEMS]

    def _feedback(self, data: dict[str, Any], response: str, provider: str | None) -> str:
        feedback = data.get("feedback")
        if not isinstance(feedback, str) or not feedback.strip():
            raise self._fail("Assessment field 'feedback' is missing", response, provider)
        return feedback.strip()

    @staticmethod
    def _question_type_analysis(data: dict[str, Any]) -> QuestionTypeAnalysis:
        raw = data.get("questionTypeAnalysis")
        if not isinstance(raw, dict):
            return QuestionTypeAnalysis()
        return QuestionTypeAnalysis(
            behavioral=str(raw.get("behavioral") or ""),
            technical=str(raw.get("technical") or ""),
        )
