import pytest

from interview_pipeline.core.camera import CameraValidator
from interview_pipeline.models.proctoring import CameraDevice, Severity, ViolationAction, ViolationType


@pytest.fixture
def validator():
    return CameraValidator()


def test_virtual_camera_blocks_interview(validator):
    obs = CameraDevice(device_id="obs-1", label="OBS Virtual Camera")
    webcam = CameraDevice(device_id="cam-1", label="Integrated Webcam")

    assessment = validator.validate([obs, webcam])

    assert assessment.is_valid is False
    assert assessment.recommended_device == webcam
    assert len(assessment.violations) == 1
    violation = assessment.violations[0]
    assert violation.type == ViolationType.VIRTUAL_CAMERA_DETECTED
    assert violation.action == ViolationAction.BLOCK_INTERVIEW
    assert violation.device_id == "obs-1"


@pytest.mark.parametrize("label", [
    "ManyCam Virtual Webcam",
    "XSplit VCam",
    "Snap Camera",
    "NVIDIA Broadcast",
    "Zoom Virtual Background",
])
def test_virtual_camera_indicators(validator, label):
    assessment = validator.validate([CameraDevice(label=label)])
    assert assessment.is_valid is False


def test_more_than_two_cameras_is_a_warning(validator):
    devices = [
        CameraDevice(device_id="a", label="USB Camera"),
        CameraDevice(device_id="b", label="Logitech C920"),
        CameraDevice(device_id="c", label="FaceTime HD Camera"),
    ]

    assessment = validator.validate(devices)

    assert assessment.is_valid is True
    assert [v.type for v in assessment.violations] == [ViolationType.MULTIPLE_CAMERAS]
    assert assessment.violations[0].severity == Severity.MEDIUM
    assert assessment.recommended_device.device_id == "c"


def test_first_device_recommended_without_built_in(validator):
    devices = [CameraDevice(device_id="a", label="USB Camera"), CameraDevice(device_id="b", label="Logitech")]
    assert validator.validate(devices).recommended_device.device_id == "a"


def test_no_devices(validator):
    assessment = validator.validate([])
    assert assessment.is_valid is True
    assert assessment.violations == []
    assert assessment.recommended_device is None
