"""
OpenAI-compatible HTTP providers.

- Whisper transcription (verbose JSON with segments and words)
- Chat completions for analysis, follow-ups and assessment
- Speech synthesis

All calls go through a shared httpx.AsyncClient per provider instance.
"""

import logging
from typing import Any

import httpx

from interview_pipeline.config.settings import Settings, get_settings
from interview_pipeline.core.errors import ParseError
from interview_pipeline.providers.base import ProviderTranscription, map_http_error
from interview_pipeline.models.transcript import TranscriptSegment, TranscriptWord

logger = logging.getLogger(__name__)

# MIME type to upload file name; the API infers the codec from the extension
_AUDIO_FILENAMES = {
    "audio/mpeg": "audio.mp3",
    "audio/mp3": "audio.mp3",
    "audio/mp4": "audio.m4a",
    "audio/m4a": "audio.m4a",
    "audio/x-m4a": "audio.m4a",
    "audio/wav": "audio.wav",
    "audio/x-wav": "audio.wav",
    "audio/wave": "audio.wav",
    "audio/webm": "audio.webm",
    "video/webm": "audio.webm",
    "audio/ogg": "audio.ogg",
    "audio/flac": "audio.flac",
}


class _OpenAIHTTPProvider:
    """Shared HTTP plumbing for the OpenAI-compatible endpoints."""

    name = "openai"
    component = "provider"

    def __init__(
        self,
        settings: Settings | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        """
        Args:
            settings: Pipeline settings (defaults to cached settings)
            client: Pre-built HTTP client, mainly for tests
        """
        self.settings = settings or get_settings()
        self.client = client or httpx.AsyncClient(
            base_url=self.settings.openai_base_url.rstrip("/"),
            headers={"Authorization": f"Bearer {self.settings.openai_api_key}"},
            timeout=self.settings.request_timeout_seconds,
        )

    async def aclose(self) -> None:
        """Close the HTTP client."""
        await self.client.aclose()

    async def _post(self, path: str, **kwargs: Any) -> httpx.Response:
        try:
            response = await self.client.post(path, **kwargs)
            response.raise_for_status()
            return response
        except httpx.HTTPError as e:
            logger.error(f"OpenAI API error on {path}: {e}")
            raise map_http_error(e, component=self.component, provider=self.name) from e

    def _json_body(self, response: httpx.Response) -> dict[str, Any]:
        try:
            result = response.json()
        except ValueError as e:
            raise ParseError(
                f"Response body is not JSON: {e}",
                raw_output=response.text,
                component=self.component,
                provider=self.name,
            ) from e
        if not isinstance(result, dict):
            raise ParseError(
                "Response body is not a JSON object",
                raw_output=response.text,
                component=self.component,
                provider=self.name,
            )
        return result


class OpenAITranscriptionProvider(_OpenAIHTTPProvider):
    """Whisper transcription over the audio/transcriptions endpoint."""

    component = "transcription"

    async def transcribe(
        self,
        audio: bytes,
        mime_hint: str | None,
        language_hint: str | None,
    ) -> ProviderTranscription:
        """
        Transcribe audio with timestamps.

        Args:
            audio: Raw audio bytes
            mime_hint: Declared MIME type of the audio
            language_hint: ISO language code

        Returns:
            ProviderTranscription with segments and words
        """
        mime = (mime_hint or "audio/webm").split(";")[0].strip().lower()
        filename = _AUDIO_FILENAMES.get(mime, "audio.webm")
        language = language_hint or self.settings.language

        response = await self._post(
            "/audio/transcriptions",
            files={"file": (filename, audio, mime)},
            data={
                "model": self.settings.whisper_model,
                "language": language,
                "response_format": "verbose_json",
                "temperature": str(self.settings.transcription_temperature),
                "timestamp_granularities[]": ["segment", "word"],
            },
        )
        result = self._json_body(response)

        segments = [
            TranscriptSegment(
                start_time=seg.get("start", 0.0),
                end_time=seg.get("end", 0.0),
                avg_log_prob=seg.get("avg_logprob"),
                text=seg.get("text", "").strip(),
            )
            for seg in result.get("segments") or []
        ]
        words = [
            TranscriptWord(
                word=w.get("word", ""),
                start_time=w.get("start", 0.0),
                end_time=w.get("end", 0.0),
            )
            for w in result.get("words") or []
        ]

        # verbose_json reports the language by name ("english")
        detected = result.get("language") or ""
        return ProviderTranscription(
            text=result.get("text", "").strip(),
            language_code=detected if 0 < len(detected) <= 3 else language,
            segments=segments,
            words=words,
        )


class OpenAIChatProvider(_OpenAIHTTPProvider):
    """Chat completions used as the structured-text backend."""

    component = "text_generation"

    def _extract_content(self, response: httpx.Response) -> str:
        """Extract text content from API response, handling list/dict formats."""
        result = self._json_body(response)
        choices = result.get("choices")
        message = None
        if isinstance(choices, list) and choices and isinstance(choices[0], dict):
            message = choices[0].get("message")
        if not isinstance(message, dict):
            raise ParseError(
                "Chat completion response has no choices",
                raw_output=response.text,
                component=self.component,
                provider=self.name,
            )
        content = message.get("content") or ""

        # Handle case where content is a list (multi-part response)
        if isinstance(content, list):
            text_parts = []
            for part in content:
                if isinstance(part, str):
                    text_parts.append(part)
                elif isinstance(part, dict) and "text" in part:
                    text_parts.append(part["text"])
            content = "".join(text_parts)

        return content if isinstance(content, str) else str(content)

    async def complete(
        self,
        prompt: str,
        system_instruction: str,
        max_tokens: int,
        temperature: float,
    ) -> str:
        """
        Run one chat completion.

        Args:
            prompt: User message
            system_instruction: System message
            max_tokens: Maximum tokens in response
            temperature: Sampling temperature

        Returns:
            Free-form model response text
        """
        payload = {
            "model": self.settings.gpt_model,
            "messages": [
                {"role": "system", "content": system_instruction},
                {"role": "user", "content": prompt},
            ],
            "max_tokens": max_tokens,
            "temperature": temperature,
        }

        response = await self._post("/chat/completions", json=payload)
        return self._extract_content(response)


class OpenAISpeechProvider(_OpenAIHTTPProvider):
    """Text-to-speech over the audio/speech endpoint."""

    component = "speech"
    content_type = "audio/mpeg"

    async def synthesize(self, text: str, voice: str) -> bytes:
        """Generate MP3 speech for the given text."""
        response = await self._post(
            "/audio/speech",
            json={
                "model": self.settings.tts_model,
                "voice": voice,
                "input": text,
                "response_format": "mp3",
            },
        )
        return response.content
