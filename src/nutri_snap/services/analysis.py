"""Meal analysis service backed by a hosted generative model."""

import base64
import logging
from dataclasses import dataclass
from typing import Protocol

from pydantic import ValidationError

from nutri_snap.domain.analysis import MealAnalysis
from nutri_snap.errors import AnalysisError

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """
You are an expert AI nutritionist. Your task is to analyze the image of the meal provided by the user.

1.  Identify every food item in the image.
2.  For each item, estimate the portion size in grams and the total calories.
3.  Calculate the total calories for the entire meal.
4.  Provide a brief "Health Analysis" (1-2 sentences) of the meal.
5.  For any unhealthy items, suggest a "Healthier Alternative".
6.  **Crucially, you MUST provide a "health_score".** This is a single integer from 1 (very unhealthy) to 10 (perfectly healthy and balanced). This is the most important field.
"""  # noqa: E501

ANALYSIS_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "food_items": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "item_name": {"type": "string"},
                    "estimated_grams": {"type": "number"},
                    "estimated_calories": {"type": "number"},
                },
                "required": ["item_name", "estimated_grams", "estimated_calories"],
                "additionalProperties": False,
            },
        },
        "total_calories": {"type": "number"},
        "health_analysis": {"type": "string"},
        "health_score": {"type": "integer", "minimum": 1, "maximum": 10},
        "healthy_alternatives": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "original_item": {"type": "string"},
                    "suggestion": {"type": "string"},
                },
                "required": ["original_item", "suggestion"],
                "additionalProperties": False,
            },
        },
    },
    "required": [
        "food_items",
        "total_calories",
        "health_analysis",
        "health_score",
        "healthy_alternatives",
    ],
    "additionalProperties": False,
}

DEFAULT_MIME_TYPE = "image/jpeg"


class AnalysisClient(Protocol):
    """Interface for the hosted analysis provider."""

    async def analyze(  # noqa: PLR0913
        self,
        *,
        model: str,
        prompt: str,
        image_bytes: bytes,
        mime_type: str,
        schema: dict[str, object],
    ) -> dict[str, object]:
        """Return the provider's structured analysis."""


@dataclass
class AnalysisService:
    """Service that sends meal photos to the provider and validates results."""

    client: AnalysisClient
    model: str

    async def analyze(
        self, image_bytes: bytes, mime_type: str | None = None
    ) -> MealAnalysis:
        """Analyze a meal photo with the fixed prompt and response schema."""
        resolved_mime = resolve_mime_type(image_bytes, mime_type)
        raw = await self.client.analyze(
            model=self.model,
            prompt=SYSTEM_PROMPT,
            image_bytes=image_bytes,
            mime_type=resolved_mime,
            schema=ANALYSIS_SCHEMA,
        )
        try:
            return MealAnalysis.model_validate(raw)
        except ValidationError as exc:
            logger.warning(
                "Provider returned an invalid analysis",
                extra={"model": self.model, "errors": exc.error_count()},
            )
            raise AnalysisError("Provider returned an invalid analysis") from exc


def resolve_mime_type(image_bytes: bytes, declared: str | None = None) -> str:
    """Prefer a declared image MIME type, else sniff the file signature."""
    if declared and declared.lower().startswith("image/"):
        return declared.lower()
    return _detect_mime_type(image_bytes)


def to_data_url(image_bytes: bytes, mime_type: str) -> str:
    """Convert bytes to a base64 data URL for image input."""
    encoded = base64.b64encode(image_bytes).decode("utf-8")
    return f"data:{mime_type};base64,{encoded}"


def _detect_mime_type(image_bytes: bytes) -> str:
    """Infer a basic image MIME type from file signatures."""
    if image_bytes.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if image_bytes.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if image_bytes[:4] == b"RIFF" and image_bytes[8:12] == b"WEBP":
        return "image/webp"
    if image_bytes[:6] in {b"GIF87a", b"GIF89a"}:
        return "image/gif"
    if image_bytes[4:8] == b"ftyp" and image_bytes[8:12] in {b"heic", b"heix"}:
        return "image/heic"
    return DEFAULT_MIME_TYPE
