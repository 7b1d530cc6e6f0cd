"""
Transcription confidence estimation.
"""

import math
from collections.abc import Sequence

from interview_pipeline.models.transcript import TranscriptSegment

MIN_CONFIDENCE = 0.5
MAX_CONFIDENCE = 1.0

FILLER_WORDS = ("um", "uh", "like", "you know")


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


class ConfidenceEstimator:
    """
    Derives a scalar confidence for a transcript.

    Prefers the recognizer's own segment log-probabilities; falls back to a
    text heuristic when none are available.
    """

    def estimate(self, text: str, segments: Sequence[TranscriptSegment] = ()) -> float:
        if segments:
            return self.from_segments(segments)
        return self.from_text(text)

    def from_segments(self, segments: Sequence[TranscriptSegment]) -> float:
        """clamp(exp(mean(avg_log_prob)), 0.5, 1.0); missing values count as 0."""
        mean_log_prob = sum(seg.avg_log_prob or 0.0 for seg in segments) / len(segments)
        return clamp(math.exp(mean_log_prob), MIN_CONFIDENCE, MAX_CONFIDENCE)

    def from_text(self, text: str) -> float:
        """
        Heuristic confidence from the text alone.

        Penalties are applied to a 0.90 baseline and clamped once at the end.
        """
        words = text.split()
        avg_word_length = sum(len(w) for w in words) / len(words) if words else 0.0
        has_filler_words = any(filler in text.lower() for filler in FILLER_WORDS)

        confidence = 0.9
        if avg_word_length < 3:
            confidence -= 0.1
        if has_filler_words:
            confidence -= 0.05
        if len(words) < 10:
            confidence -= 0.1

        return clamp(confidence, MIN_CONFIDENCE, MAX_CONFIDENCE)
