"""
Per-answer analysis models.
"""

from enum import Enum

from pydantic import BaseModel, Field, field_validator


class QuestionType(str, Enum):
    """Interview question types that drive term matching."""

    BEHAVIORAL = "behavioral"
    TECHNICAL = "technical"


class AnswerScores(BaseModel):
    """Provider-grounded scores for a single answer (each 0-100)."""

    clarity: float = Field(default=0, ge=0, le=100)
    relevance: float = Field(default=0, ge=0, le=100)
    depth: float = Field(default=0, ge=0, le=100)
    structure: float = Field(default=0, ge=0, le=100)

    @property
    def average(self) -> float:
        return (self.clarity + self.relevance + self.depth + self.structure) / 4


class ResponseMetrics(BaseModel):
    """Metrics computed locally from the transcript text."""

    word_count: int = Field(..., ge=0)
    sentence_count: int = Field(..., ge=0)
    avg_words_per_sentence: float = Field(..., ge=0)
    has_numbers: bool
    has_technical_terms: bool
    has_behavioral_terms: bool
    complexity: float = Field(..., ge=0, le=100)
    relevance: float = Field(..., ge=0, le=100)


class AnswerAnalysis(BaseModel):
    """Structured analysis of one answer."""

    analysis_text: str
    confidence: float = Field(..., ge=0, le=1)
    scores: AnswerScores
    suggestions: list[str] = Field(default_factory=list)
    keywords: list[str] = Field(
        default_factory=list,
        description="Unique domain terms found in the answer"
    )
    metrics: ResponseMetrics


class FollowUpSet(BaseModel):
    """Exactly three follow-up questions for an answer."""

    questions: list[str] = Field(..., min_length=3, max_length=3)
    reasoning: str = ""

    @field_validator("questions")
    @classmethod
    def _must_be_questions(cls, value: list[str]) -> list[str]:
        for question in value:
            if "?" not in question:
                raise ValueError(f"Not a question: {question!r}")
        return value
