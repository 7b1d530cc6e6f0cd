"""
Data models for the interview pipeline.

Contains Pydantic models for:
- Media artifacts and synthesized speech
- Transcripts
- Per-answer analysis and follow-ups
- Proctoring observations and violations
- Whole-interview assessment
"""

from interview_pipeline.models.media import AudioClip, ImageSnapshot, SpeechAudio
from interview_pipeline.models.transcript import Transcript, TranscriptSegment, TranscriptWord
from interview_pipeline.models.analysis import (
    AnswerAnalysis,
    AnswerScores,
    FollowUpSet,
    QuestionType,
    ResponseMetrics,
)
from interview_pipeline.models.proctoring import (
    CameraAssessment,
    CameraDevice,
    DetectedObject,
    FaceDetectionResult,
    FaceEmotions,
    FaceObservation,
    Likelihood,
    ObjectDetectionResult,
    SecurityStatus,
    Severity,
    TextBlock,
    Violation,
    ViolationAction,
    ViolationType,
)
from interview_pipeline.models.assessment import (
    InterviewAssessment,
    InterviewMetrics,
    InterviewRecord,
    QuestionTypeAnalysis,
    ScoreBreakdown,
    TurnRecord,
)
from interview_pipeline.models.turn import TurnContext, TurnResult

__all__ = [
    # Media
    "AudioClip",
    "ImageSnapshot",
    "SpeechAudio",
    # Transcript
    "Transcript",
    "TranscriptSegment",
    "TranscriptWord",
    # Analysis
    "AnswerAnalysis",
    "AnswerScores",
    "FollowUpSet",
    "QuestionType",
    "ResponseMetrics",
    # Proctoring
    "CameraAssessment",
    "CameraDevice",
    "DetectedObject",
    "FaceDetectionResult",
    "FaceEmotions",
    "FaceObservation",
    "Likelihood",
    "ObjectDetectionResult",
    "SecurityStatus",
    "Severity",
    "TextBlock",
    "Violation",
    "ViolationAction",
    "ViolationType",
    # Assessment
    "InterviewAssessment",
    "InterviewMetrics",
    "InterviewRecord",
    "QuestionTypeAnalysis",
    "ScoreBreakdown",
    "TurnRecord",
    # Turn
    "TurnContext",
    "TurnResult",
]
