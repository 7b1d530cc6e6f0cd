"""
Proctoring

Rule-based violation detection over vision observations, plus the
inspector that fetches those observations from the vision backend.

Detection rules are pure functions: identical input always yields an
identical, identically ordered violation list. The inspector is
degraded-available: an unconfigured or failing backend never interrupts
the interview, it yields a fallback result instead.
"""

import asyncio
import logging

from interview_pipeline.config.settings import Settings, get_settings
from interview_pipeline.models.media import ImageSnapshot
from interview_pipeline.models.proctoring import (
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
from interview_pipeline.providers.base import VisionProvider

logger = logging.getLogger(__name__)

MIN_FACE_CONFIDENCE = 0.7
MAX_TEXT_LENGTH = 50

PROHIBITED_OBJECTS = (
    "mobile phone", "laptop", "computer", "tablet", "book",
    "paper", "notebook", "document", "screen", "monitor",
)


# =============================================================================
# DETECTION RULES
# =============================================================================

def detect_face_violations(faces: list[FaceObservation]) -> list[Violation]:
    """
    Evaluate face rules in fixed order.

    Args:
        faces: Faces reported for one snapshot

    Returns:
        Violations, frame-level rules first, then per-face rules
    """
    violations = []

    if len(faces) > 1:
        violations.append(Violation(
            type=ViolationType.MULTIPLE_FACES,
            severity=Severity.HIGH,
            description=f"{len(faces)} faces detected - only one person allowed",
            confidence=0.95,
            action=ViolationAction.PAUSE_INTERVIEW,
        ))

    if not faces:
        violations.append(Violation(
            type=ViolationType.NO_FACE_DETECTED,
            severity=Severity.MEDIUM,
            description="No face detected in the frame",
            confidence=0.90,
            action=ViolationAction.WARNING,
        ))

    for face in faces:
        if face.confidence < MIN_FACE_CONFIDENCE:
            violations.append(Violation(
                type=ViolationType.LOW_FACE_CONFIDENCE,
                severity=Severity.LOW,
                description="Face detection confidence is low - improve lighting",
                confidence=face.confidence,
                action=ViolationAction.WARNING,
            ))

        if face.blurred.is_likely:
            violations.append(Violation(
                type=ViolationType.BLURRED_FACE,
                severity=Severity.MEDIUM,
                description="Face appears blurred - check camera focus",
                confidence=0.8,
                action=ViolationAction.WARNING,
            ))

        if face.under_exposed.is_likely:
            violations.append(Violation(
                type=ViolationType.POOR_LIGHTING,
                severity=Severity.LOW,
                description="Poor lighting detected - improve illumination",
                confidence=0.8,
                action=ViolationAction.WARNING,
            ))

        if face.headwear.is_likely:
            violations.append(Violation(
                type=ViolationType.HEADWEAR_DETECTED,
                severity=Severity.MEDIUM,
                description="Headwear detected - please remove hats/caps",
                confidence=0.85,
                action=ViolationAction.WARNING,
            ))

    return violations


def detect_object_violations(
    objects: list[DetectedObject],
    text_blocks: list[TextBlock],
) -> list[Violation]:
    """
    Flag prohibited objects and substantial text material.

    Args:
        objects: Objects localized in the snapshot
        text_blocks: OCR text blocks

    Returns:
        Object violations followed by text violations
    """
    violations = []

    for obj in objects:
        name = obj.name.lower()
        if any(prohibited in name for prohibited in PROHIBITED_OBJECTS):
            violations.append(Violation(
                type=ViolationType.PROHIBITED_OBJECT,
                severity=Severity.HIGH,
                description=f"{obj.name} detected - remove unauthorized items",
                confidence=obj.score,
                action=ViolationAction.PAUSE_INTERVIEW,
                object=obj.name,
            ))

    for block in text_blocks:
        text_length = len(block.description)
        if text_length > MAX_TEXT_LENGTH:
            violations.append(Violation(
                type=ViolationType.TEXT_MATERIAL_DETECTED,
                severity=Severity.HIGH,
                description="Text material detected - remove notes/books",
                confidence=0.9,
                action=ViolationAction.PAUSE_INTERVIEW,
                text_length=text_length,
            ))

    return violations


def fallback_face() -> FaceObservation:
    """A compliant face used when the vision backend is unavailable."""
    return FaceObservation(
        confidence=0.95,
        emotions=FaceEmotions(
            joy=Likelihood.POSSIBLE,
            sorrow=Likelihood.UNLIKELY,
            anger=Likelihood.UNLIKELY,
            surprise=Likelihood.UNLIKELY,
        ),
        headwear=Likelihood.UNLIKELY,
        blurred=Likelihood.UNLIKELY,
        under_exposed=Likelihood.UNLIKELY,
    )


# =============================================================================
# INSPECTOR
# =============================================================================

class ProctoringInspector:
    """Runs the detection rules against a vision backend."""

    component = "proctoring"

    def __init__(self, provider: VisionProvider, settings: Settings | None = None):
        self.provider = provider
        self.settings = settings or get_settings()

    async def inspect_faces(self, image: ImageSnapshot) -> FaceDetectionResult:
        """
        Detect faces and evaluate face rules.

        Never raises backend errors: on failure a single synthetic
        compliant face is returned with fallback=True.
        """
        try:
            faces = await self.provider.detect_faces(image.read_bytes())
        except Exception as e:
            logger.warning(f"Face detection unavailable, using fallback: {e}")
            return FaceDetectionResult(face_count=1, faces=[fallback_face()], fallback=True)

        violations = detect_face_violations(faces)
        if violations:
            logger.info(f"Face violations: {[v.type.value for v in violations]}")

        return FaceDetectionResult(face_count=len(faces), faces=faces, violations=violations)

    async def inspect_objects(self, image: ImageSnapshot) -> ObjectDetectionResult:
        """
        Localize objects, read text and evaluate object rules.

        Never raises backend errors: on failure an empty result is returned
        with fallback=True.
        """
        try:
            data = image.read_bytes()
            objects, text_blocks = await asyncio.gather(
                self.provider.detect_objects(data),
                self.provider.detect_text(data),
            )
        except Exception as e:
            logger.warning(f"Object detection unavailable, using fallback: {e}")
            return ObjectDetectionResult(fallback=True)

        violations = detect_object_violations(objects, text_blocks)
        if violations:
            logger.info(f"Object violations: {[v.type.value for v in violations]}")

        return ObjectDetectionResult(
            objects=objects,
            text_detected=bool(text_blocks),
            text_content=text_blocks[0].description if text_blocks else None,
            violations=violations,
        )

    async def monitor(self, image: ImageSnapshot) -> SecurityStatus:
        """
        Combined face and object check for one snapshot.

        Args:
            image: Webcam snapshot

        Returns:
            SecurityStatus; is_secure is False when any high-severity
            violation was found
        """
        faces, objects = await asyncio.gather(
            self.inspect_faces(image),
            self.inspect_objects(image),
        )
        violations = [*faces.violations, *objects.violations]

        return SecurityStatus(
            face_count=faces.face_count,
            violations=violations,
            high_severity_count=sum(1 for v in violations if v.severity == Severity.HIGH),
            fallback=faces.fallback or objects.fallback,
        )
