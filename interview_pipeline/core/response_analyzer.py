"""
Response Analyzer

Scores a single answer. Provider-grounded scores come from one structured
completion; local text metrics are computed independently and never depend
on the provider succeeding.
"""

import logging
import math
import re
from typing import Any

from interview_pipeline.config.settings import Settings, get_settings
from interview_pipeline.core.confidence import clamp
from interview_pipeline.core.structured_output import StructuredResponseParser
from interview_pipeline.models.analysis import (
    AnswerAnalysis,
    AnswerScores,
    QuestionType,
    ResponseMetrics,
)
from interview_pipeline.prompts.evaluator import EvaluatorPrompts
from interview_pipeline.providers.base import StructuredTextProvider

logger = logging.getLogger(__name__)

TECHNICAL_TERMS = (
    "api", "database", "algorithm", "optimization",
    "scalability", "performance", "testing", "deployment",
)
BEHAVIORAL_TERMS = (
    "team", "leadership", "communication", "problem",
    "solution", "result", "impact", "collaboration",
)
SUGGESTION_MARKERS = ("consider", "add", "include", "provide", "use", "practice")

DEFAULT_CONFIDENCE = 0.8
DEFAULT_SUGGESTION = "Continue practicing and refining your responses"

LONG_WORD_LENGTH = 6
RELEVANCE_TERM_TARGET = 3

_SENTENCE_END = re.compile(r"[.!?]+")
_DIGIT = re.compile(r"\d")
_TECHNICAL_PATTERN = re.compile("|".join(TECHNICAL_TERMS), re.IGNORECASE)
_BEHAVIORAL_PATTERN = re.compile("|".join(BEHAVIORAL_TERMS), re.IGNORECASE)


def _matched_terms(words: list[str], terms: tuple[str, ...]) -> list[str]:
    """Terms contained in at least one of the (lowercased) words."""
    return [term for term in terms if any(term in word for word in words)]


def extract_keywords(text: str) -> list[str]:
    """Technical and behavioral terms present in the answer, without duplicates."""
    words = text.lower().split()
    return _matched_terms(words, TECHNICAL_TERMS) + _matched_terms(words, BEHAVIORAL_TERMS)


def extract_suggestions(analysis: str) -> list[str]:
    """Sentences of the analysis that read like advice."""
    suggestions = []
    for sentence in analysis.split("."):
        trimmed = sentence.strip()
        if trimmed and any(marker in trimmed.lower() for marker in SUGGESTION_MARKERS):
            suggestions.append(trimmed)

    return suggestions or [DEFAULT_SUGGESTION]


class ResponseAnalyzer:
    """
    Transcript + question context to structured per-answer analysis.

    Fail-closed: if the provider output holds no JSON object the analysis
    fails with ParseError; scores are never invented.
    """

    component = "response_analyzer"

    def __init__(
        self,
        provider: StructuredTextProvider,
        settings: Settings | None = None,
        parser: StructuredResponseParser | None = None,
    ):
        self.provider = provider
        self.settings = settings or get_settings()
        self.parser = parser or StructuredResponseParser(component=self.component)
        self.prompts = EvaluatorPrompts()

    # =========================================================================
    # PROVIDER ANALYSIS
    # =========================================================================

    async def analyze(
        self,
        transcript: str,
        original_question: str,
        question_type: str = "behavioral",
    ) -> AnswerAnalysis:
        """
        Analyze one answer.

        Args:
            transcript: Transcribed answer
            original_question: The question that was asked
            question_type: "technical" selects technical relevance terms

        Returns:
            AnswerAnalysis with scores, suggestions, keywords and metrics

        Raises:
            ParseError: Provider output held no usable JSON object
            ProviderUnavailable: Text backend not configured
            ProviderError: Text backend call failed
        """
        metrics = self.compute_metrics(transcript, question_type)

        prompt = self.prompts.generate_analysis_prompt(transcript, original_question, question_type)
        response = await self.provider.complete(
            prompt,
            system_instruction=self.prompts.SYSTEM_CONTEXT,
            max_tokens=self.settings.analysis_max_tokens,
            temperature=self.settings.analysis_temperature,
        )

        data = self.parser.extract_object(response, provider=getattr(self.provider, "name", None))
        analysis = self._build_analysis(data, response, transcript, metrics)

        logger.info(
            f"Analysis complete: clarity={analysis.scores.clarity:.0f}, "
            f"relevance={analysis.scores.relevance:.0f}, depth={analysis.scores.depth:.0f}, "
            f"structure={analysis.scores.structure:.0f}"
        )
        return analysis

    def _build_analysis(
        self,
        data: dict[str, Any],
        response: str,
        transcript: str,
        metrics: ResponseMetrics,
    ) -> AnswerAnalysis:
        """Apply the named defaults for any missing field."""
        analysis_text = data.get("analysis")
        if not isinstance(analysis_text, str) or not analysis_text.strip():
            analysis_text = response

        confidence = data.get("confidence")
        if (
            isinstance(confidence, bool)
            or not isinstance(confidence, (int, float))
            or not confidence
            or not math.isfinite(confidence)
        ):
            confidence = DEFAULT_CONFIDENCE

        suggestions = data.get("suggestions")
        if isinstance(suggestions, list):
            suggestions = [str(s).strip() for s in suggestions if str(s).strip()]
        if not suggestions:
            suggestions = extract_suggestions(analysis_text)

        return AnswerAnalysis(
            analysis_text=analysis_text,
            confidence=clamp(float(confidence), 0.0, 1.0),
            scores=self._parse_scores(data.get("scores")),
            suggestions=suggestions,
            keywords=extract_keywords(transcript),
            metrics=metrics,
        )

    @staticmethod
    def _parse_scores(raw: Any) -> AnswerScores:
        if not isinstance(raw, dict):
            return AnswerScores()

        values = {}
        for key in ("clarity", "relevance", "depth", "structure"):
            value = raw.get(key, 0)
            try:
                score = float(value)
            except (TypeError, ValueError):
                score = 0.0
            # NaN and Infinity are valid JSON to json.loads but not scores
            values[key] = clamp(score, 0.0, 100.0) if math.isfinite(score) else 0.0
        return AnswerScores(**values)

    # =========================================================================
    # LOCAL METRICS
    # =========================================================================

    def compute_metrics(self, transcript: str, question_type: str = "behavioral") -> ResponseMetrics:
        """
        Text metrics computed without any provider.

        Args:
            transcript: Transcribed answer
            question_type: "technical" selects technical relevance terms

        Returns:
            ResponseMetrics
        """
        words = transcript.split()
        word_count = len(words)
        sentence_count = len(_SENTENCE_END.findall(transcript))
        avg_words_per_sentence = round(word_count / sentence_count, 1) if sentence_count else 0.0

        return ResponseMetrics(
            word_count=word_count,
            sentence_count=sentence_count,
            avg_words_per_sentence=avg_words_per_sentence,
            has_numbers=bool(_DIGIT.search(transcript)),
            has_technical_terms=bool(_TECHNICAL_PATTERN.search(transcript)),
            has_behavioral_terms=bool(_BEHAVIORAL_PATTERN.search(transcript)),
            complexity=self._complexity(words),
            relevance=self._relevance(transcript, question_type),
        )

    @staticmethod
    def _complexity(words: list[str]) -> float:
        if not words:
            return 0.0
        long_words = sum(1 for w in words if len(w) > LONG_WORD_LENGTH)
        return round(long_words / len(words) * 100)

    @staticmethod
    def _relevance(transcript: str, question_type: str) -> float:
        words = transcript.lower().split()
        is_technical = str(getattr(question_type, "value", question_type)).lower() == QuestionType.TECHNICAL.value
        terms = TECHNICAL_TERMS if is_technical else BEHAVIORAL_TERMS
        matched = len(_matched_terms(words, terms))
        return min(100.0, matched / RELEVANCE_TERM_TARGET * 100)
