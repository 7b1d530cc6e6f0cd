"""
Whole-interview assessment models.

An InterviewAssessment is built exactly once per completed interview from the
ordered list of its turns.
"""

from datetime import datetime, timezone

from pydantic import BaseModel, Field

from interview_pipeline.models.analysis import AnswerScores
from interview_pipeline.models.proctoring import Severity, Violation


class TurnRecord(BaseModel):
    """One question/answer exchange as accumulated by the caller."""

    question: str
    question_type: str = "behavioral"
    response_text: str = ""
    answered: bool = True
    confidence: float | None = Field(default=None, ge=0, le=1)
    duration_seconds: float | None = Field(default=None, ge=0)
    scores: AnswerScores | None = Field(
        default=None,
        description="Per-answer scores from the response analyzer, if any"
    )
    violations: list[Violation] = Field(default_factory=list)

    @property
    def high_severity_violations(self) -> int:
        return sum(1 for v in self.violations if v.severity == Severity.HIGH)


class InterviewRecord(BaseModel):
    """A finished interview, ready for aggregation."""

    interview_id: str
    interview_type: str = "mixed"
    duration_seconds: float = Field(default=0, ge=0)
    turns: list[TurnRecord] = Field(default_factory=list)


class ScoreBreakdown(BaseModel):
    """Dimension scores for the whole interview (each 0-100)."""

    communication: float = Field(..., ge=0, le=100)
    technical: float = Field(..., ge=0, le=100)
    problem_solving: float = Field(..., ge=0, le=100)
    confidence: float = Field(..., ge=0, le=100)


class QuestionTypeAnalysis(BaseModel):
    """Narrative performance per question type."""

    behavioral: str = ""
    technical: str = ""


class InterviewMetrics(BaseModel):
    """Locally computed interview statistics."""

    average_confidence: int = Field(..., ge=0, le=100)
    total_violations: int = Field(..., ge=0)
    completion_rate: int = Field(..., ge=0, le=100)
    average_word_count: int = Field(..., ge=0)
    questions_with_ai: int = Field(..., ge=0)
    total_questions: int = Field(..., ge=0)


class InterviewAssessment(BaseModel):
    """The authoritative overall assessment of one interview."""

    interview_id: str
    overall_score: float = Field(..., ge=0, le=100)
    breakdown: ScoreBreakdown
    strengths: list[str] = Field(..., min_length=3, max_length=5)
    improvements: list[str] = Field(..., min_length=3, max_length=5)
    recommendations: list[str] = Field(..., min_length=3, max_length=5)
    feedback: str
    question_type_analysis: QuestionTypeAnalysis = Field(
        default_factory=QuestionTypeAnalysis
    )
    metrics: InterviewMetrics
    generated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
