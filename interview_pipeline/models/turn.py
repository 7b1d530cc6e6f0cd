"""
Per-turn request and result models.
"""

from pydantic import BaseModel, Field

from interview_pipeline.models.analysis import AnswerAnalysis, FollowUpSet, ResponseMetrics
from interview_pipeline.models.proctoring import Severity, Violation
from interview_pipeline.models.transcript import Transcript


class TurnContext(BaseModel):
    """The question a turn is answering."""

    question: str
    question_type: str = "behavioral"
    language: str | None = None


class TurnResult(BaseModel):
    """Everything the pipeline produced for one turn."""

    transcript: Transcript
    face_violations: list[Violation] = Field(default_factory=list)
    object_violations: list[Violation] = Field(default_factory=list)
    metrics: ResponseMetrics
    analysis: AnswerAnalysis | None = None
    follow_ups: FollowUpSet | None = None

    # Degradation markers
    vision_fallback: bool = False
    errors: dict[str, str] = Field(
        default_factory=dict,
        description="Component name to error message for optional steps that failed"
    )

    @property
    def violations(self) -> list[Violation]:
        return [*self.face_violations, *self.object_violations]

    @property
    def is_secure(self) -> bool:
        return not any(v.severity == Severity.HIGH for v in self.violations)

    @property
    def words_per_minute(self) -> int:
        return self.transcript.words_per_minute
