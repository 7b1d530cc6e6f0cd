"""
Pipeline Orchestrator - Coordinates the per-turn and per-interview flow.

Per turn:
    transcription ─┬─> response analysis
    face check     │   follow-up generation
    object check   ┘
(the first three run concurrently; the last two run concurrently once the
transcript exists)

Per finished interview:
    assessment aggregation, exactly once

The orchestrator owns the turn's media and releases it on every exit path.
"""

import asyncio
import logging

from interview_pipeline.config.settings import Settings, get_settings
from interview_pipeline.core.assessment import AssessmentAggregator
from interview_pipeline.core.camera import CameraValidator
from interview_pipeline.core.errors import AggregationInProgressError, PipelineError
from interview_pipeline.core.follow_up import FollowUpGenerator
from interview_pipeline.core.media import owned_media
from interview_pipeline.core.proctoring import ProctoringInspector
from interview_pipeline.core.response_analyzer import ResponseAnalyzer
from interview_pipeline.core.speech import SpeechSynthesizer
from interview_pipeline.core.transcription import TranscriptionAdapter
from interview_pipeline.models.assessment import InterviewAssessment, InterviewRecord
from interview_pipeline.models.media import AudioClip, ImageSnapshot, SpeechAudio
from interview_pipeline.models.proctoring import (
    CameraAssessment,
    CameraDevice,
    FaceDetectionResult,
    ObjectDetectionResult,
    SecurityStatus,
)
from interview_pipeline.models.turn import TurnContext, TurnResult

logger = logging.getLogger(__name__)


class PipelineOrchestrator:
    """
    Coordinates the pipeline components.

    Stateless between turns; the only shared state is the set of interview
    ids whose assessment is currently being generated.
    """

    def __init__(
        self,
        transcription: TranscriptionAdapter,
        analyzer: ResponseAnalyzer,
        follow_ups: FollowUpGenerator,
        aggregator: AssessmentAggregator,
        inspector: ProctoringInspector,
        speech: SpeechSynthesizer,
        camera: CameraValidator | None = None,
        settings: Settings | None = None,
    ):
        """
        Initialize the orchestrator with component dependencies.

        Args:
            transcription: Audio to transcript adapter
            analyzer: Per-answer analysis
            follow_ups: Follow-up question generator
            aggregator: Whole-interview assessment
            inspector: Face/object proctoring
            speech: Interviewer speech synthesis
            camera: Camera setup validator
            settings: Pipeline settings
        """
        self.transcription = transcription
        self.analyzer = analyzer
        self.follow_ups = follow_ups
        self.aggregator = aggregator
        self.inspector = inspector
        self.speech = speech
        self.camera = camera or CameraValidator()
        self.settings = settings or get_settings()

        self._aggregating: set[str] = set()

    # =========================================================================
    # TURN PROCESSING
    # =========================================================================

    async def process_turn(
        self,
        clip: AudioClip,
        image: ImageSnapshot | None = None,
        context: TurnContext | None = None,
    ) -> TurnResult:
        """
        Process one answered question.

        Args:
            clip: Recorded answer (released when this call returns)
            image: Optional webcam snapshot (released when this call returns)
            context: The question being answered

        Returns:
            TurnResult; optional steps that failed are listed in errors

        Raises:
            InputError, ProviderUnavailable, ProviderError: Transcription failed
        """
        context = context or TurnContext(question="")

        with owned_media(clip, image):
            transcript, faces, objects = await self._gather_observations(clip, image, context)

            result = TurnResult(
                transcript=transcript,
                face_violations=faces.violations if faces else [],
                object_violations=objects.violations if objects else [],
                metrics=self.analyzer.compute_metrics(transcript.text, context.question_type),
                vision_fallback=bool((faces and faces.fallback) or (objects and objects.fallback)),
            )

            if len(transcript.text.strip()) < self.settings.min_analysis_chars:
                logger.info("Transcript too short for analysis, skipping")
                return result

            await self._analyze(result, context)

        logger.info(
            f"Turn processed: {transcript.word_count} words, "
            f"{len(result.violations)} violations, errors={list(result.errors)}"
        )
        return result

    async def _gather_observations(
        self,
        clip: AudioClip,
        image: ImageSnapshot | None,
        context: TurnContext,
    ) -> tuple:
        """Transcription and vision checks, concurrently."""
        tasks = [self.transcription.transcribe(clip, context.language)]
        if image is not None:
            tasks.append(self.inspector.inspect_faces(image))
            tasks.append(self.inspector.inspect_objects(image))

        # Wait for every task so nothing still reads the media after release
        results = await asyncio.gather(*tasks, return_exceptions=True)
        for outcome in results:
            if isinstance(outcome, BaseException):
                raise outcome

        transcript = results[0]
        faces: FaceDetectionResult | None = results[1] if image is not None else None
        objects: ObjectDetectionResult | None = results[2] if image is not None else None
        return transcript, faces, objects

    async def _analyze(self, result: TurnResult, context: TurnContext) -> None:
        """Analysis and follow-ups, concurrently; failures are recorded, not raised."""
        text = result.transcript.text
        analysis, follow_ups = await asyncio.gather(
            self.analyzer.analyze(text, context.question, context.question_type),
            self.follow_ups.generate(text, context.question, context.question_type),
            return_exceptions=True,
        )

        for component, outcome in (
            (self.analyzer.component, analysis),
            (self.follow_ups.component, follow_ups),
        ):
            if isinstance(outcome, PipelineError):
                logger.warning(f"{component} failed: {outcome}")
                result.errors[component] = str(outcome)
            elif isinstance(outcome, BaseException):
                raise outcome

        if not isinstance(analysis, BaseException):
            result.analysis = analysis
        if not isinstance(follow_ups, BaseException):
            result.follow_ups = follow_ups

    # =========================================================================
    # INTERVIEW LEVEL
    # =========================================================================

    async def finalize_assessment(self, interview: InterviewRecord) -> InterviewAssessment:
        """
        Generate the interview's final assessment.

        Raises:
            AggregationInProgressError: An assessment for this interview is
                already being generated
            ParseError, ProviderUnavailable, ProviderError: Aggregation failed
        """
        interview_id = interview.interview_id
        if interview_id in self._aggregating:
            raise AggregationInProgressError(
                f"Assessment for interview {interview_id} is already in progress",
                component=self.aggregator.component,
            )

        self._aggregating.add(interview_id)
        try:
            return await self.aggregator.aggregate(interview)
        finally:
            self._aggregating.discard(interview_id)

    def validate_camera(self, devices: list[CameraDevice]) -> CameraAssessment:
        return self.camera.validate(devices)

    async def monitor_snapshot(self, image: ImageSnapshot) -> SecurityStatus:
        """Standalone proctoring check; the snapshot is released afterwards."""
        with owned_media(image):
            return await self.inspector.monitor(image)

    async def synthesize_speech(self, text: str, voice: str | None = None) -> SpeechAudio:
        return await self.speech.synthesize(text, voice)

    # =========================================================================
    # LIFECYCLE
    # =========================================================================

    async def aclose(self) -> None:
        """Close every distinct provider held by the components."""
        providers = [
            self.transcription.provider,
            self.transcription.fallback_provider,
            self.analyzer.provider,
            self.follow_ups.provider,
            self.aggregator.provider,
            self.inspector.provider,
            self.speech.provider,
        ]
        seen = set()
        for provider in providers:
            if provider is None or id(provider) in seen:
                continue
            seen.add(id(provider))
            await provider.aclose()
