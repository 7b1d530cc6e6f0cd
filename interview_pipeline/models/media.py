"""
Media models for the interview pipeline.

Audio clips and webcam snapshots are ephemeral: each is owned by the turn
that created it and released once the turn has been processed.
"""

import logging
import mimetypes
from pathlib import Path

from pydantic import BaseModel, Field, model_validator

logger = logging.getLogger(__name__)


class MediaArtifact(BaseModel):
    """Raw media supplied either in memory or as a file on disk."""

    data: bytes | None = Field(default=None, description="In-memory media bytes")
    path: Path | None = Field(default=None, description="Media file on disk")
    mime_hint: str | None = Field(default=None, description="Declared MIME type")
    filename: str | None = Field(default=None, description="Original file name")
    ephemeral: bool = Field(
        default=False,
        description="Whether the file at `path` should be deleted on release"
    )

    @model_validator(mode="after")
    def _require_source(self):
        if self.data is None and self.path is None:
            raise ValueError("Either data or path must be provided")
        return self

    @property
    def size_bytes(self) -> int:
        """Size of the media in bytes (0 if the file is missing)."""
        if self.data is not None:
            return len(self.data)
        if self.path is not None and self.path.exists():
            return self.path.stat().st_size
        return 0

    @property
    def extension(self) -> str:
        """Lowercase file extension without the dot, or empty string."""
        name = self.filename or (self.path.name if self.path else "")
        return Path(name).suffix.lower().lstrip(".")

    @property
    def content_type(self) -> str | None:
        """MIME type from the hint, falling back to the file name."""
        if self.mime_hint:
            return self.mime_hint.split(";")[0].strip().lower()
        name = self.filename or (self.path.name if self.path else "")
        guessed, _ = mimetypes.guess_type(name)
        return guessed

    def read_bytes(self) -> bytes:
        """Load the media content."""
        if self.data is not None:
            return self.data
        return self.path.read_bytes()

    def release(self) -> None:
        """Delete the backing file if this artifact owns it. Idempotent."""
        if self.ephemeral and self.path is not None:
            try:
                self.path.unlink(missing_ok=True)
                logger.debug(f"Released media artifact: {self.path}")
            except OSError as e:
                logger.error(f"Failed to release media artifact {self.path}: {e}")


class AudioClip(MediaArtifact):
    """A candidate's spoken answer for one turn."""


class ImageSnapshot(MediaArtifact):
    """A webcam snapshot captured during one turn."""


class SpeechAudio(BaseModel):
    """Synthesized interviewer speech."""

    audio: bytes
    content_type: str = "audio/mpeg"
    fallback: bool = Field(
        default=False,
        description="True when the audio is the silent placeholder"
    )

    @property
    def size(self) -> int:
        return len(self.audio)
