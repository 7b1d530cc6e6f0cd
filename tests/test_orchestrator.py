import asyncio
import json

import pytest

from interview_pipeline.core.errors import (
    AggregationInProgressError,
    InputError,
    ProviderError,
    ProviderErrorReason,
)
from interview_pipeline.models.assessment import InterviewRecord, TurnRecord
from interview_pipeline.models.media import AudioClip, ImageSnapshot
from interview_pipeline.models.proctoring import CameraDevice, DetectedObject, ViolationType
from interview_pipeline.models.turn import TurnContext
from interview_pipeline.providers.base import ProviderTranscription
from interview_pipeline.providers.unconfigured import UnconfiguredTextProvider, UnconfiguredVisionProvider

from conftest import FakeTextProvider, FakeTranscriptionProvider, FakeVisionProvider, text_router


@pytest.fixture
def clip_file(tmp_path):
    path = tmp_path / "answer.webm"
    path.write_bytes(b"\x1a\x45\xdf\xa3" + b"\x00" * 128)
    return AudioClip(path=path, ephemeral=True)


@pytest.fixture
def image_file(tmp_path):
    path = tmp_path / "snapshot.jpg"
    path.write_bytes(b"\xff\xd8\xff\xe0" + b"\x00" * 64)
    return ImageSnapshot(path=path, ephemeral=True)


@pytest.fixture
def context():
    return TurnContext(question="Tell me about a migration you led.", question_type="behavioral")


async def test_full_turn(make_orchestrator, clip_file, image_file, context):
    orchestrator = make_orchestrator(
        vision_provider=FakeVisionProvider(objects=[DetectedObject(name="Laptop", score=0.9)]),
    )

    result = await orchestrator.process_turn(clip_file, image_file, context)

    assert result.transcript.text == "I led the team through a database migration."
    assert result.analysis is not None
    assert result.analysis.scores.clarity == 80
    assert len(result.follow_ups.questions) == 3
    assert [v.type for v in result.face_violations] == [ViolationType.NO_FACE_DETECTED]
    assert [v.type for v in result.object_violations] == [ViolationType.PROHIBITED_OBJECT]
    assert result.is_secure is False
    assert result.metrics.word_count == 8
    assert result.words_per_minute == 16
    assert result.errors == {}


async def test_media_released_after_success(make_orchestrator, clip_file, image_file, context):
    await make_orchestrator().process_turn(clip_file, image_file, context)

    assert not clip_file.path.exists()
    assert not image_file.path.exists()


async def test_media_released_when_transcription_fails(make_orchestrator, clip_file, image_file, context):
    provider = FakeTranscriptionProvider(error=ProviderError("HTTP 503", reason=ProviderErrorReason.FAILED))
    orchestrator = make_orchestrator(transcription_provider=provider)

    with pytest.raises(ProviderError):
        await orchestrator.process_turn(clip_file, image_file, context)

    assert not clip_file.path.exists()
    assert not image_file.path.exists()


async def test_empty_clip_fails_turn_and_is_released(make_orchestrator, tmp_path, context):
    path = tmp_path / "empty.webm"
    path.write_bytes(b"")
    clip = AudioClip(path=path, ephemeral=True)

    with pytest.raises(InputError):
        await make_orchestrator().process_turn(clip, context=context)

    assert not path.exists()


async def test_analysis_failures_are_recorded_not_raised(make_orchestrator, clip_file, context):
    orchestrator = make_orchestrator(text_provider=UnconfiguredTextProvider())

    result = await orchestrator.process_turn(clip_file, context=context)

    assert result.analysis is None
    assert result.follow_ups is None
    assert set(result.errors) == {"response_analyzer", "follow_up"}
    assert result.metrics.word_count == 8


async def test_parse_error_only_affects_analysis(make_orchestrator, clip_file, context):
    def respond(prompt):
        if "JSON format" in prompt:
            return "No structured output today."
        return text_router(prompt)

    result = await make_orchestrator(text_provider=FakeTextProvider(respond)).process_turn(
        clip_file, context=context,
    )

    assert result.analysis is None
    assert result.follow_ups is not None
    assert "response_analyzer" in result.errors


async def test_short_transcript_skips_analysis(make_orchestrator, clip_file, context):
    text_provider = FakeTextProvider(text_router)
    orchestrator = make_orchestrator(
        transcription_provider=FakeTranscriptionProvider(ProviderTranscription(text="Yes.")),
        text_provider=text_provider,
    )

    result = await orchestrator.process_turn(clip_file, context=context)

    assert result.analysis is None
    assert result.follow_ups is None
    assert text_provider.calls == []


async def test_vision_outage_does_not_interrupt_turn(make_orchestrator, clip_file, image_file, context):
    orchestrator = make_orchestrator(vision_provider=UnconfiguredVisionProvider())

    result = await orchestrator.process_turn(clip_file, image_file, context)

    assert result.vision_fallback is True
    assert result.violations == []
    assert result.analysis is not None


async def test_monitor_snapshot_releases_image(make_orchestrator, image_file):
    status = await make_orchestrator().monitor_snapshot(image_file)

    assert status.face_count == 0
    assert not image_file.path.exists()


def test_validate_camera(make_orchestrator):
    assessment = make_orchestrator().validate_camera([
        CameraDevice(label="OBS Virtual Camera"),
        CameraDevice(label="Integrated Webcam"),
    ])
    assert assessment.is_valid is False
    assert assessment.recommended_device.label == "Integrated Webcam"


async def test_synthesize_speech(make_orchestrator):
    speech = await make_orchestrator().synthesize_speech("Welcome to your interview.")
    assert speech.fallback is False


# =============================================================================
# FINAL ASSESSMENT
# =============================================================================

ASSESSMENT_JSON = json.dumps({
    "overallScore": 72,
    "breakdown": {"communication": 70, "technical": 75, "problemSolving": 68, "confidence": 74},
    "strengths": ["a", "b", "c"],
    "improvements": ["d", "e", "f"],
    "recommendations": ["g", "h", "i"],
    "feedback": "Good.",
})


def interview_record() -> InterviewRecord:
    return InterviewRecord(
        interview_id="int-42",
        turns=[TurnRecord(question="Q?", response_text="An answer.", confidence=0.8)],
    )


async def test_finalize_assessment_calls_provider_once(make_orchestrator):
    provider = FakeTextProvider(ASSESSMENT_JSON)

    assessment = await make_orchestrator(text_provider=provider).finalize_assessment(interview_record())

    assert assessment.overall_score == 72
    assert assessment.metrics.total_questions == 1
    assert len(provider.calls) == 1


async def test_concurrent_finalize_for_same_interview_is_rejected(make_orchestrator):
    release = asyncio.Event()

    class SlowTextProvider(FakeTextProvider):
        async def complete(self, *args, **kwargs):
            await release.wait()
            return await super().complete(*args, **kwargs)

    orchestrator = make_orchestrator(text_provider=SlowTextProvider(ASSESSMENT_JSON))

    first = asyncio.create_task(orchestrator.finalize_assessment(interview_record()))
    await asyncio.sleep(0)

    with pytest.raises(AggregationInProgressError):
        await orchestrator.finalize_assessment(interview_record())

    release.set()
    assessment = await first
    assert assessment.interview_id == "int-42"

    # Guard is cleared once the first call finishes
    again = await orchestrator.finalize_assessment(interview_record())
    assert again.overall_score == 72


async def test_aclose_closes_each_provider_once(make_orchestrator):
    provider = FakeTextProvider(text_router)
    await make_orchestrator(text_provider=provider).aclose()
    assert provider.closed is True
