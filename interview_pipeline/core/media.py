"""
Media utilities: format checks, duration lookup and artifact release.
"""

import asyncio
import io
import logging
import wave
from contextlib import contextmanager
from collections.abc import Iterator

from interview_pipeline.config.settings import Settings, get_settings
from interview_pipeline.models.media import AudioClip, MediaArtifact

logger = logging.getLogger(__name__)

SUPPORTED_AUDIO_FORMATS = frozenset(
    {"mp3", "mp4", "mpeg", "mpga", "m4a", "wav", "webm", "ogg", "oga", "flac"}
)

_MIME_FORMATS = {
    "audio/mpeg": "mp3",
    "audio/mp3": "mp3",
    "audio/mp4": "m4a",
    "audio/m4a": "m4a",
    "audio/x-m4a": "m4a",
    "audio/wav": "wav",
    "audio/x-wav": "wav",
    "audio/wave": "wav",
    "audio/webm": "webm",
    "video/webm": "webm",
    "audio/ogg": "ogg",
    "audio/flac": "flac",
}


def audio_format(clip: AudioClip) -> str | None:
    """Best guess of the clip's container format, or None if unknown."""
    if clip.content_type in _MIME_FORMATS:
        return _MIME_FORMATS[clip.content_type]
    if clip.extension in SUPPORTED_AUDIO_FORMATS:
        return clip.extension
    return None


class MediaDurationProbe:
    """
    Looks up the duration of an audio clip.

    WAV headers are read directly; other formats go through pydub when it is
    installed. When the media cannot be inspected the probe returns
    `settings.default_media_duration_seconds`, a fixed approximation callers
    must treat as such.
    """

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()

    @property
    def default_seconds(self) -> float:
        return self.settings.default_media_duration_seconds

    async def duration_seconds(self, clip: AudioClip) -> float:
        """Duration of the clip in seconds (inspection runs in a thread pool)."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self._probe, clip)

    def _probe(self, clip: AudioClip) -> float:
        fmt = audio_format(clip)
        try:
            data = clip.read_bytes()
            if fmt == "wav":
                return self._wav_duration(data)
            return self._pydub_duration(data, fmt)
        except Exception as e:
            logger.debug(f"Duration lookup unavailable ({e}), using default")
            return self.default_seconds

    @staticmethod
    def _wav_duration(data: bytes) -> float:
        with io.BytesIO(data) as audio_io:
            with wave.open(audio_io, "rb") as wav:
                return wav.getnframes() / float(wav.getframerate())

    def _pydub_duration(self, data: bytes, fmt: str | None) -> float:
        try:
            from pydub import AudioSegment
        except ImportError:
            logger.debug("pydub not installed for duration lookup")
            return self.default_seconds

        audio = AudioSegment.from_file(io.BytesIO(data), format=fmt)
        return len(audio) / 1000.0


@contextmanager
def owned_media(*artifacts: MediaArtifact | None) -> Iterator[None]:
    """
    Release every given artifact when the block exits, however it exits.

    Args:
        artifacts: Media owned by the current turn (None entries are skipped)
    """
    try:
        yield
    finally:
        for artifact in artifacts:
            if artifact is not None:
                artifact.release()
