"""
Structured data extraction from free-form model output.

Models asked for JSON frequently wrap it in prose or code fences. All callers
go through StructuredResponseParser so that a stricter structured-output mode
can replace the brace matching without touching them.
"""

import json
import logging
from typing import Any

from interview_pipeline.core.errors import ParseError

logger = logging.getLogger(__name__)


class StructuredResponseParser:
    """Locates and decodes the first balanced top-level JSON object."""

    def __init__(self, component: str = "structured_output"):
        self.component = component

    @staticmethod
    def find_object(text: str) -> str | None:
        """
        Find the first balanced {...} span, ignoring braces inside strings.

        Args:
            text: Free-form model output

        Returns:
            The JSON object text, or None if no balanced object exists
        """
        start = text.find("{")
        if start == -1:
            return None

        # Open brace positions; an unbalanced brace stays on the stack and
        # the earliest brace that does close wins
        open_positions: list[int] = []
        best: tuple[int, int] | None = None
        in_string = False
        escaped = False

        for i in range(start, len(text)):
            char = text[i]
            if in_string:
                if escaped:
                    escaped = False
                elif char == "\\":
                    escaped = True
                elif char == '"':
                    in_string = False
            elif char == '"':
                in_string = True
            elif char == "{":
                open_positions.append(i)
            elif char == "}" and open_positions:
                opened = open_positions.pop()
                if not open_positions:
                    return text[opened:i + 1]
                if best is None or opened < best[0]:
                    best = (opened, i)

        return text[best[0]:best[1] + 1] if best else None

    def extract_object(self, text: str, provider: str | None = None) -> dict[str, Any]:
        """
        Extract and decode the first JSON object in the text.

        Args:
            text: Free-form model output
            provider: Provider identifier for error context

        Returns:
            Decoded JSON object

        Raises:
            ParseError: If no object is found or it cannot be decoded
        """
        json_str = self.find_object(text or "")
        if json_str is None:
            raise ParseError(
                "No JSON object found in provider output",
                raw_output=text,
                component=self.component,
                provider=provider,
            )

        try:
            data = json.loads(json_str)
        except json.JSONDecodeError as e:
            logger.warning(f"Failed to decode JSON from provider output: {e}")
            raise ParseError(
                f"Malformed JSON in provider output: {e}",
                raw_output=text,
                component=self.component,
                provider=provider,
            ) from e

        return data
