import pytest

from interview_pipeline.core.errors import ProviderError
from interview_pipeline.core.proctoring import (
    ProctoringInspector,
    detect_face_violations,
    detect_object_violations,
)
from interview_pipeline.models.media import ImageSnapshot
from interview_pipeline.models.proctoring import (
    DetectedObject,
    FaceObservation,
    Likelihood,
    Severity,
    TextBlock,
    ViolationAction,
    ViolationType,
)
from interview_pipeline.providers.unconfigured import UnconfiguredVisionProvider

from conftest import FakeVisionProvider


def face(**kwargs) -> FaceObservation:
    return FaceObservation(confidence=kwargs.pop("confidence", 0.98), **kwargs)


@pytest.fixture
def snapshot():
    return ImageSnapshot(data=b"\xff\xd8\xff\xe0fake-jpeg", mime_hint="image/jpeg")


# =============================================================================
# RULES
# =============================================================================

def test_scenario_no_face_and_laptop():
    violations = [
        *detect_face_violations([]),
        *detect_object_violations([DetectedObject(name="Laptop", score=0.9)], []),
    ]

    assert [(v.type, v.severity, v.action) for v in violations] == [
        (ViolationType.NO_FACE_DETECTED, Severity.MEDIUM, ViolationAction.WARNING),
        (ViolationType.PROHIBITED_OBJECT, Severity.HIGH, ViolationAction.PAUSE_INTERVIEW),
    ]
    assert violations[1].object == "Laptop"
    assert violations[1].confidence == 0.9


@pytest.mark.parametrize("count", [2, 3, 5])
def test_multiple_faces_reported_once(count):
    violations = detect_face_violations([face() for _ in range(count)])

    multiple = [v for v in violations if v.type == ViolationType.MULTIPLE_FACES]
    assert len(multiple) == 1
    assert multiple[0].severity == Severity.HIGH
    assert multiple[0].action == ViolationAction.PAUSE_INTERVIEW
    assert multiple[0].description.startswith(f"{count} faces")


def test_single_compliant_face_has_no_violations():
    assert detect_face_violations([face()]) == []


def test_per_face_rules_in_order():
    violations = detect_face_violations([face(
        confidence=0.5,
        blurred=Likelihood.VERY_LIKELY,
        under_exposed=Likelihood.LIKELY,
        headwear=Likelihood.LIKELY,
    )])

    assert [v.type for v in violations] == [
        ViolationType.LOW_FACE_CONFIDENCE,
        ViolationType.BLURRED_FACE,
        ViolationType.POOR_LIGHTING,
        ViolationType.HEADWEAR_DETECTED,
    ]
    assert violations[0].confidence == 0.5
    assert violations[1].severity == Severity.MEDIUM


def test_possible_likelihoods_are_not_violations():
    assert detect_face_violations([face(blurred=Likelihood.POSSIBLE, headwear=Likelihood.POSSIBLE)]) == []


def test_text_blocks_checked_by_length():
    long_text = TextBlock(description="x" * 51)
    short_text = TextBlock(description="Exit")

    violations = detect_object_violations([], [short_text, long_text])

    assert len(violations) == 1
    assert violations[0].type == ViolationType.TEXT_MATERIAL_DETECTED
    assert violations[0].text_length == 51


def test_object_names_match_case_insensitively():
    objects = [
        DetectedObject(name="Mobile phone", score=0.8),
        DetectedObject(name="Computer monitor", score=0.7),
        DetectedObject(name="Person", score=0.99),
    ]
    violations = detect_object_violations(objects, [])
    assert [v.object for v in violations] == ["Mobile phone", "Computer monitor"]


def test_detectors_are_idempotent():
    faces = [face(confidence=0.6), face(headwear=Likelihood.VERY_LIKELY)]
    objects = [DetectedObject(name="Book", score=0.66)]
    text = [TextBlock(description="Lorem ipsum " * 10)]

    assert detect_face_violations(faces) == detect_face_violations(faces)
    assert detect_object_violations(objects, text) == detect_object_violations(objects, text)


# =============================================================================
# INSPECTOR
# =============================================================================

async def test_unconfigured_vision_falls_back_to_compliant_face(settings, snapshot):
    result = await ProctoringInspector(UnconfiguredVisionProvider(), settings).inspect_faces(snapshot)

    assert result.fallback is True
    assert result.face_count == 1
    assert result.violations == []
    assert result.faces[0].confidence == 0.95
    assert result.faces[0].emotions.joy == Likelihood.POSSIBLE
    assert result.faces[0].headwear == Likelihood.UNLIKELY


async def test_failing_vision_falls_back_to_empty_objects(settings, snapshot):
    provider = FakeVisionProvider(error=ProviderError("HTTP 500"))
    result = await ProctoringInspector(provider, settings).inspect_objects(snapshot)

    assert result.fallback is True
    assert result.objects == []
    assert result.violations == []


async def test_unreadable_snapshot_falls_back(settings, tmp_path):
    missing = ImageSnapshot(path=tmp_path / "missing.jpg")
    inspector = ProctoringInspector(FakeVisionProvider(), settings)

    faces = await inspector.inspect_faces(missing)
    objects = await inspector.inspect_objects(missing)
    status = await inspector.monitor(missing)

    assert faces.fallback is True
    assert objects.fallback is True
    assert objects.violations == []
    assert status.fallback is True
    assert status.is_secure is True


async def test_inspect_objects_reports_text(settings, snapshot):
    provider = FakeVisionProvider(text=[TextBlock(description="Notes: " + "a" * 60)])
    result = await ProctoringInspector(provider, settings).inspect_objects(snapshot)

    assert result.text_detected is True
    assert result.text_content.startswith("Notes:")
    assert result.violations[0].type == ViolationType.TEXT_MATERIAL_DETECTED


async def test_monitor_combines_face_and_object_checks(settings, snapshot):
    provider = FakeVisionProvider(
        faces=[face(), face()],
        objects=[DetectedObject(name="Cell phone screen", score=0.75)],
    )

    status = await ProctoringInspector(provider, settings).monitor(snapshot)

    assert status.face_count == 2
    assert status.high_severity_count == 2
    assert status.is_secure is False
    assert status.fallback is False


async def test_monitor_is_secure_when_vision_unavailable(settings, snapshot):
    status = await ProctoringInspector(UnconfiguredVisionProvider(), settings).monitor(snapshot)

    assert status.is_secure is True
    assert status.fallback is True
    assert status.face_count == 1
