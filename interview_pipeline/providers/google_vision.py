"""
Google Cloud Vision provider over the images:annotate REST endpoint.

Used for proctoring: face detection, object localization and OCR.
"""

import base64
import logging
from typing import Any

import httpx

from interview_pipeline.config.settings import Settings, get_settings
from interview_pipeline.core.errors import ProviderError, ProviderErrorReason
from interview_pipeline.models.proctoring import (
    DetectedObject,
    FaceEmotions,
    FaceObservation,
    Likelihood,
    TextBlock,
)
from interview_pipeline.providers.base import map_http_error

logger = logging.getLogger(__name__)

# google.rpc.Code values returned inside per-image errors
_RPC_PERMISSION_DENIED = 7
_RPC_RESOURCE_EXHAUSTED = 8
_RPC_UNAUTHENTICATED = 16


def _likelihood(value: str | None) -> Likelihood:
    try:
        return Likelihood(value or "UNKNOWN")
    except ValueError:
        return Likelihood.UNKNOWN


def _vertices(poly: dict[str, Any] | None) -> list[dict[str, float]] | None:
    if not poly:
        return None
    points = poly.get("vertices") or poly.get("normalizedVertices") or []
    return [{"x": p.get("x", 0), "y": p.get("y", 0)} for p in points]


class GoogleVisionProvider:
    """Vision backend for face, object and text detection."""

    name = "google_vision"
    component = "vision"

    def __init__(
        self,
        settings: Settings | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        self.settings = settings or get_settings()
        self.client = client or httpx.AsyncClient(
            timeout=self.settings.request_timeout_seconds,
        )

    async def aclose(self) -> None:
        await self.client.aclose()

    async def _annotate(self, image: bytes, feature: str, max_results: int = 10) -> dict[str, Any]:
        """
        Run a single feature annotation on one image.

        Args:
            image: Raw image bytes
            feature: Vision feature type (e.g. FACE_DETECTION)
            max_results: Maximum number of results for the feature

        Returns:
            The annotation response for the image
        """
        payload = {
            "requests": [
                {
                    "image": {"content": base64.b64encode(image).decode("ascii")},
                    "features": [{"type": feature, "maxResults": max_results}],
                }
            ]
        }

        try:
            response = await self.client.post(
                self.settings.google_vision_url,
                params={"key": self.settings.google_vision_api_key},
                json=payload,
            )
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error(f"Google Vision {feature} error: {e}")
            raise map_http_error(e, component=self.component, provider=self.name) from e

        result = (response.json().get("responses") or [{}])[0]

        error = result.get("error")
        if error:
            code = error.get("code")
            if code == _RPC_RESOURCE_EXHAUSTED:
                reason = ProviderErrorReason.QUOTA_EXCEEDED
            elif code in (_RPC_PERMISSION_DENIED, _RPC_UNAUTHENTICATED):
                reason = ProviderErrorReason.AUTH_INVALID
            else:
                reason = ProviderErrorReason.FAILED
            raise ProviderError(
                error.get("message", "Vision annotation failed"),
                reason=reason,
                component=self.component,
                provider=self.name,
                status=code,
            )

        return result

    async def detect_faces(self, image: bytes) -> list[FaceObservation]:
        result = await self._annotate(image, "FACE_DETECTION")
        return [
            FaceObservation(
                confidence=face.get("detectionConfidence", 0.0),
                bounding_box=_vertices(face.get("boundingPoly")),
                landmarks=face.get("landmarks", []),
                emotions=FaceEmotions(
                    joy=_likelihood(face.get("joyLikelihood")),
                    sorrow=_likelihood(face.get("sorrowLikelihood")),
                    anger=_likelihood(face.get("angerLikelihood")),
                    surprise=_likelihood(face.get("surpriseLikelihood")),
                ),
                headwear=_likelihood(face.get("headwearLikelihood")),
                blurred=_likelihood(face.get("blurredLikelihood")),
                under_exposed=_likelihood(face.get("underExposedLikelihood")),
            )
            for face in result.get("faceAnnotations", [])
        ]

    async def detect_objects(self, image: bytes) -> list[DetectedObject]:
        result = await self._annotate(image, "OBJECT_LOCALIZATION")
        return [
            DetectedObject(
                name=obj.get("name", ""),
                score=obj.get("score", 0.0),
                bounding_box=_vertices(obj.get("boundingPoly")),
            )
            for obj in result.get("localizedObjectAnnotations", [])
        ]

    async def detect_text(self, image: bytes) -> list[TextBlock]:
        result = await self._annotate(image, "TEXT_DETECTION")
        return [
            TextBlock(
                description=block.get("description", ""),
                bounding_box=_vertices(block.get("boundingPoly")),
            )
            for block in result.get("textAnnotations", [])
        ]
