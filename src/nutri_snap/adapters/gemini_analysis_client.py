"""Google Gemini client for meal analysis."""

import json
from dataclasses import dataclass

from google import genai
from google.genai import types

from nutri_snap.errors import AnalysisError
from nutri_snap.services.analysis import AnalysisClient


@dataclass
class GeminiAnalysisClient(AnalysisClient):
    """Analysis client backed by the Gemini generate_content API."""

    client: genai.Client

    @classmethod
    def create(cls, api_key: str) -> "GeminiAnalysisClient":
        """Create a Gemini analysis client."""
        return cls(client=genai.Client(api_key=api_key))

    async def analyze(  # noqa: PLR0913
        self,
        *,
        model: str,
        prompt: str,
        image_bytes: bytes,
        mime_type: str,
        schema: dict[str, object],
    ) -> dict[str, object]:
        """Call Gemini with inline image data and a JSON response schema."""
        image_part = types.Part.from_bytes(data=image_bytes, mime_type=mime_type)
        response = await self.client.aio.models.generate_content(
            model=model,
            contents=[prompt, image_part],
            config={
                "response_mime_type": "application/json",
                "response_json_schema": schema,
            },
        )
        output_text = response.text
        if not output_text:
            raise AnalysisError("Gemini returned an empty response")
        try:
            return json.loads(output_text)
        except json.JSONDecodeError as exc:
            raise AnalysisError("Gemini returned malformed JSON") from exc
