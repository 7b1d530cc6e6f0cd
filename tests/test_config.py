import logging

import pytest
from pydantic import ValidationError

from interview_pipeline.config.logging import configure_logging
from interview_pipeline.config.settings import Settings, TTSEngine
from interview_pipeline.core.errors import (
    InputError,
    InputErrorReason,
    ParseError,
    ProviderError,
    ProviderErrorReason,
)


def test_settings_defaults(settings):
    assert settings.openai_configured is False
    assert settings.vision_configured is False
    assert settings.tts_engine == TTSEngine.OPENAI
    assert settings.followup_temperature == 0.7
    assert settings.analysis_temperature == 0.3
    assert settings.assessment_max_tokens == 1500


def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    monkeypatch.setenv("TTS_ENGINE", "edge")
    monkeypatch.setenv("MAX_AUDIO_BYTES", "1024")

    settings = Settings(_env_file=None)

    assert settings.openai_configured is True
    assert settings.tts_engine == TTSEngine.EDGE
    assert settings.max_audio_bytes == 1024


def test_unknown_tts_engine_is_rejected():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, tts_engine="festival")


def test_configure_logging_sets_package_level():
    configure_logging(Settings(_env_file=None, log_level="debug"))
    assert logging.getLogger("interview_pipeline").level == logging.DEBUG
    assert logging.getLogger("httpx").level == logging.WARNING


def test_error_context_for_callers():
    error = ProviderError(
        "HTTP 429",
        reason=ProviderErrorReason.QUOTA_EXCEEDED,
        component="transcription",
        provider="openai",
        status=429,
    )

    assert str(error) == "[transcription/openai] HTTP 429"
    assert error.to_dict() == {
        "error": "ProviderError",
        "message": "HTTP 429",
        "component": "transcription",
        "provider": "openai",
        "status": 429,
        "reason": "quota_exceeded",
        "retryable": True,
    }


def test_input_and_parse_errors():
    empty = InputError("Audio file is empty", reason=InputErrorReason.EMPTY)
    parse = ParseError("No JSON", raw_output="text", component="assessment")

    assert str(empty) == "Audio file is empty"
    assert empty.to_dict()["reason"] == "empty"
    assert parse.kind == "ParseError"
    assert parse.raw_output == "text"
