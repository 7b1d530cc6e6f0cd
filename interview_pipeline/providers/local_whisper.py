"""
Local Whisper transcription.

Degraded transcription strategy used when the remote provider fails. The
model is loaded lazily and inference runs in a thread pool so the event loop
is never blocked.
"""

import asyncio
import logging
import tempfile
from pathlib import Path
from typing import Any

from interview_pipeline.config.settings import Settings, get_settings
from interview_pipeline.core.errors import ProviderError, ProviderUnavailable
from interview_pipeline.models.transcript import TranscriptSegment
from interview_pipeline.providers.base import ProviderTranscription

logger = logging.getLogger(__name__)


class LocalWhisperProvider:
    """Transcription with an in-process openai-whisper model."""

    name = "local_whisper"
    component = "transcription"

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()

        # Lazy-loaded model
        self._whisper_model = None
        self._load_lock = asyncio.Lock()

    async def aclose(self) -> None:
        self._whisper_model = None

    async def _load_whisper_model(self):
        """Load Whisper model lazily."""
        async with self._load_lock:
            if self._whisper_model is not None:
                return

            try:
                import whisper
            except ImportError as e:
                logger.error("Whisper not installed. Install with: pip install openai-whisper")
                raise ProviderUnavailable(
                    "openai-whisper is not installed",
                    component=self.component,
                    provider=self.name,
                ) from e

            logger.info(f"Loading Whisper model: {self.settings.local_whisper_model}")

            # Run model loading in thread pool
            loop = asyncio.get_running_loop()
            self._whisper_model = await loop.run_in_executor(
                None,
                whisper.load_model,
                self.settings.local_whisper_model,
            )

            logger.info("Whisper model loaded successfully")

    def _run_whisper_transcription(self, audio_path: str, language: str) -> dict[str, Any]:
        """Run Whisper transcription (blocking, runs in thread pool)."""
        return self._whisper_model.transcribe(
            audio_path,
            language=language,
            fp16=False,  # Use FP32 for better compatibility
        )

    async def transcribe(
        self,
        audio: bytes,
        mime_hint: str | None,
        language_hint: str | None,
    ) -> ProviderTranscription:
        """Transcribe audio with the local model."""
        await self._load_whisper_model()

        language = language_hint or self.settings.language
        suffix = ".webm" if mime_hint and "webm" in mime_hint else ".wav"

        # Whisper reads from disk via ffmpeg
        with tempfile.NamedTemporaryFile(suffix=suffix, delete=False) as f:
            f.write(audio)
            temp_path = f.name

        try:
            loop = asyncio.get_running_loop()
            result = await loop.run_in_executor(
                None,
                self._run_whisper_transcription,
                temp_path,
                language,
            )
        except Exception as e:
            logger.error(f"Local transcription failed: {e}")
            raise ProviderError(
                f"Local transcription failed: {e}",
                component=self.component,
                provider=self.name,
            ) from e
        finally:
            # Clean up temp file
            Path(temp_path).unlink(missing_ok=True)

        return ProviderTranscription(
            text=result.get("text", "").strip(),
            language_code=result.get("language") or language,
            segments=[
                TranscriptSegment(
                    start_time=seg.get("start", 0.0),
                    end_time=seg.get("end", 0.0),
                    avg_log_prob=seg.get("avg_logprob"),
                    text=seg.get("text", "").strip(),
                )
                for seg in result.get("segments", [])
            ],
        )
