"""
Camera setup validation.
"""

import logging

from interview_pipeline.models.proctoring import (
    CameraAssessment,
    CameraDevice,
    Severity,
    Violation,
    ViolationAction,
    ViolationType,
)

logger = logging.getLogger(__name__)

VIRTUAL_CAMERA_INDICATORS = (
    "obs", "virtual", "manycam", "xsplit", "snap camera",
    "nvidia broadcast", "zoom",
)
BUILT_IN_INDICATORS = ("integrated", "built-in", "facetime", "internal")
MAX_CAMERAS = 2


class CameraValidator:
    """Checks the enumerated video inputs before an interview starts."""

    def validate(self, devices: list[CameraDevice]) -> CameraAssessment:
        """
        Validate the candidate's camera setup.

        Args:
            devices: Enumerated video input devices, in input order

        Returns:
            CameraAssessment; invalid when any high-severity violation exists
        """
        violations = []

        for device in devices:
            label = device.label.lower()
            if any(indicator in label for indicator in VIRTUAL_CAMERA_INDICATORS):
                violations.append(Violation(
                    type=ViolationType.VIRTUAL_CAMERA_DETECTED,
                    severity=Severity.HIGH,
                    description=f"Virtual camera detected: {device.label}",
                    confidence=0.95,
                    action=ViolationAction.BLOCK_INTERVIEW,
                    device_id=device.device_id,
                ))

        if len(devices) > MAX_CAMERAS:
            violations.append(Violation(
                type=ViolationType.MULTIPLE_CAMERAS,
                severity=Severity.MEDIUM,
                description=f"{len(devices)} cameras detected - use built-in camera only",
                confidence=0.9,
                action=ViolationAction.WARNING,
            ))

        is_valid = not any(v.severity == Severity.HIGH for v in violations)
        if not is_valid:
            logger.warning(f"Camera setup rejected: {[v.description for v in violations]}")

        return CameraAssessment(
            is_valid=is_valid,
            violations=violations,
            recommended_device=self.recommend(devices),
        )

    @staticmethod
    def recommend(devices: list[CameraDevice]) -> CameraDevice | None:
        """Prefer a built-in camera, else the first device."""
        for device in devices:
            label = device.label.lower()
            if any(indicator in label for indicator in BUILT_IN_INDICATORS):
                return device

        return devices[0] if devices else None
