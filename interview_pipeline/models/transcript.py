"""
Transcript models.
"""

from pydantic import BaseModel, ConfigDict, Field


class TranscriptSegment(BaseModel):
    """A timed segment of recognized speech."""

    model_config = ConfigDict(frozen=True)

    start_time: float = 0.0
    end_time: float = 0.0
    avg_log_prob: float | None = Field(
        default=None,
        description="Mean token log-probability reported by the recognizer"
    )
    text: str = ""


class TranscriptWord(BaseModel):
    """A single recognized word with timing."""

    model_config = ConfigDict(frozen=True)

    word: str
    start_time: float = 0.0
    end_time: float = 0.0


class Transcript(BaseModel):
    """Transcription of one audio clip. Immutable once produced."""

    model_config = ConfigDict(frozen=True)

    text: str
    language_code: str = "en"
    confidence: float = Field(..., ge=0, le=1)
    duration_seconds: float = Field(..., ge=0)
    segments: tuple[TranscriptSegment, ...] = ()
    words: tuple[TranscriptWord, ...] = ()

    # Provenance
    provider: str = ""
    fallback: bool = Field(
        default=False,
        description="True when produced by the fallback transcription strategy"
    )

    @property
    def word_count(self) -> int:
        return len(self.text.split())

    @property
    def words_per_minute(self) -> int:
        """Speaking rate derived from word count and clip duration."""
        if self.duration_seconds <= 0:
            return 0
        return round(self.word_count / self.duration_seconds * 60)
