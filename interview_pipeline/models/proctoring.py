"""
Proctoring models: vision observations, violations and camera checks.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Likelihood(str, Enum):
    """Likelihood buckets reported by the vision backend."""

    UNKNOWN = "UNKNOWN"
    VERY_UNLIKELY = "VERY_UNLIKELY"
    UNLIKELY = "UNLIKELY"
    POSSIBLE = "POSSIBLE"
    LIKELY = "LIKELY"
    VERY_LIKELY = "VERY_LIKELY"

    @property
    def is_likely(self) -> bool:
        return self in (Likelihood.LIKELY, Likelihood.VERY_LIKELY)


class Severity(str, Enum):
    """Violation severity."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ViolationAction(str, Enum):
    """Recommended reaction to a violation."""

    WARNING = "warning"
    PAUSE_INTERVIEW = "pause_interview"
    BLOCK_INTERVIEW = "block_interview"


class ViolationType(str, Enum):
    """Known proctoring anomalies."""

    MULTIPLE_FACES = "multiple_faces"
    NO_FACE_DETECTED = "no_face_detected"
    LOW_FACE_CONFIDENCE = "low_face_confidence"
    BLURRED_FACE = "blurred_face"
    POOR_LIGHTING = "poor_lighting"
    HEADWEAR_DETECTED = "headwear_detected"
    PROHIBITED_OBJECT = "prohibited_object"
    TEXT_MATERIAL_DETECTED = "text_material_detected"
    VIRTUAL_CAMERA_DETECTED = "virtual_camera_detected"
    MULTIPLE_CAMERAS = "multiple_cameras"


class Violation(BaseModel):
    """A detected proctoring anomaly with severity and recommended action."""

    type: ViolationType
    severity: Severity
    description: str
    confidence: float = Field(..., ge=0, le=1)
    action: ViolationAction

    # Type-specific extras
    object: str | None = None
    text_length: int | None = None
    device_id: str | None = None


# =============================================================================
# VISION OBSERVATIONS
# =============================================================================

class FaceEmotions(BaseModel):
    """Emotion likelihoods for a detected face."""

    joy: Likelihood = Likelihood.UNKNOWN
    sorrow: Likelihood = Likelihood.UNKNOWN
    anger: Likelihood = Likelihood.UNKNOWN
    surprise: Likelihood = Likelihood.UNKNOWN


class FaceObservation(BaseModel):
    """A face reported by the vision backend."""

    confidence: float = Field(..., ge=0, le=1)
    bounding_box: list[dict[str, float]] | None = None
    landmarks: list[dict[str, Any]] = Field(default_factory=list)
    emotions: FaceEmotions = Field(default_factory=FaceEmotions)
    headwear: Likelihood = Likelihood.UNKNOWN
    blurred: Likelihood = Likelihood.UNKNOWN
    under_exposed: Likelihood = Likelihood.UNKNOWN


class DetectedObject(BaseModel):
    """An object localized in the image."""

    name: str
    score: float = Field(default=0, ge=0, le=1)
    bounding_box: list[dict[str, float]] | None = None


class TextBlock(BaseModel):
    """A block of OCR text found in the image."""

    description: str
    bounding_box: list[dict[str, float]] | None = None


class FaceDetectionResult(BaseModel):
    """Outcome of inspecting a snapshot for faces."""

    face_count: int
    faces: list[FaceObservation] = Field(default_factory=list)
    violations: list[Violation] = Field(default_factory=list)
    timestamp: datetime = Field(default_factory=_utcnow)
    fallback: bool = False


class ObjectDetectionResult(BaseModel):
    """Outcome of inspecting a snapshot for objects and text."""

    objects: list[DetectedObject] = Field(default_factory=list)
    text_detected: bool = False
    text_content: str | None = None
    violations: list[Violation] = Field(default_factory=list)
    timestamp: datetime = Field(default_factory=_utcnow)
    fallback: bool = False


class SecurityStatus(BaseModel):
    """Combined proctoring verdict for a single snapshot."""

    face_count: int
    violations: list[Violation] = Field(default_factory=list)
    high_severity_count: int = 0
    fallback: bool = False

    @property
    def is_secure(self) -> bool:
        return self.high_severity_count == 0


# =============================================================================
# CAMERA VALIDATION
# =============================================================================

class CameraDevice(BaseModel):
    """An enumerated video input device."""

    device_id: str = ""
    label: str = ""
    group_id: str | None = None


class CameraAssessment(BaseModel):
    """Verdict on the candidate's camera setup."""

    is_valid: bool
    violations: list[Violation] = Field(default_factory=list)
    recommended_device: CameraDevice | None = None
    timestamp: datetime = Field(default_factory=_utcnow)
