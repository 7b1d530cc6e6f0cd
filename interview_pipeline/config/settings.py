"""
Pipeline settings and configuration management.

Uses pydantic-settings for environment variable loading.
"""

from enum import Enum
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class TTSEngine(str, Enum):
    """Recognized text-to-speech engines."""

    OPENAI = "openai"
    EDGE = "edge"


class Settings(BaseSettings):
    """Pipeline settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "interview-pipeline"
    app_version: str = "0.1.0"
    log_level: str = "INFO"

    # OpenAI-compatible API (transcription, chat completion, speech)
    openai_api_key: str = ""
    openai_base_url: str = "https://api.openai.com/v1"

    # Google Cloud Vision (face/object/text detection)
    google_vision_api_key: str = ""
    google_vision_url: str = "https://vision.googleapis.com/v1/images:annotate"

    # Model selection
    whisper_model: str = "whisper-1"
    gpt_model: str = "gpt-3.5-turbo"
    tts_model: str = "tts-1"

    # Local Whisper fallback (for STT)
    use_local_whisper_fallback: bool = True
    local_whisper_model: str = "base"

    # TTS configuration
    tts_engine: TTSEngine = TTSEngine.OPENAI
    tts_voice: str = "nova"

    # Transcription
    language: str = "en"
    transcription_temperature: float = Field(default=0.2, ge=0, le=1)
    min_audio_bytes: int = Field(
        default=0, ge=0,
        description="Clips at or below this size are rejected as empty"
    )
    max_audio_bytes: int = Field(
        default=50 * 1024 * 1024, gt=0,
        description="Clips above this size are rejected as too large"
    )
    default_media_duration_seconds: float = Field(
        default=120.0, gt=0,
        description="Duration reported when the media cannot be inspected"
    )

    # Text generation
    followup_temperature: float = Field(default=0.7, ge=0, le=2)
    followup_max_tokens: int = 300
    analysis_temperature: float = Field(default=0.3, ge=0, le=2)
    analysis_max_tokens: int = 500
    assessment_temperature: float = Field(default=0.3, ge=0, le=2)
    assessment_max_tokens: int = 1500

    # Turn processing
    min_analysis_chars: int = Field(
        default=10, ge=0,
        description="Transcripts this short are not analyzed"
    )

    # Provider calls
    request_timeout_seconds: float = Field(default=60.0, gt=0)

    @property
    def openai_configured(self) -> bool:
        """Whether OpenAI-compatible credentials are present."""
        return bool(self.openai_api_key)

    @property
    def vision_configured(self) -> bool:
        """Whether Google Vision credentials are present."""
        return bool(self.google_vision_api_key)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
