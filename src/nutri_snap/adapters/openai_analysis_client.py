"""OpenAI Responses API client for meal analysis."""

import json
from dataclasses import dataclass

from openai import AsyncOpenAI

from nutri_snap.errors import AnalysisError
from nutri_snap.services.analysis import AnalysisClient, to_data_url


@dataclass
class OpenAIAnalysisClient(AnalysisClient):
    """Analysis client backed by OpenAI Responses API."""

    client: AsyncOpenAI

    @classmethod
    def create(cls, api_key: str) -> "OpenAIAnalysisClient":
        """Create an OpenAI analysis client."""
        return cls(client=AsyncOpenAI(api_key=api_key))

    async def analyze(  # noqa: PLR0913
        self,
        *,
        model: str,
        prompt: str,
        image_bytes: bytes,
        mime_type: str,
        schema: dict[str, object],
    ) -> dict[str, object]:
        """Call OpenAI Responses API with structured outputs."""
        response = await self.client.responses.create(
            model=model,
            input=[
                {
                    "role": "user",
                    "content": [
                        {"type": "input_text", "text": prompt},
                        {
                            "type": "input_image",
                            "image_url": to_data_url(image_bytes, mime_type),
                        },
                    ],
                }
            ],
            text={
                "format": {
                    "type": "json_schema",
                    "name": "meal_analysis",
                    "strict": True,
                    "schema": schema,
                }
            },
            store=False,
        )
        output_text = response.output_text
        if not output_text:
            raise AnalysisError("OpenAI returned an empty response")
        try:
            return json.loads(output_text)
        except json.JSONDecodeError as exc:
            raise AnalysisError("OpenAI returned malformed JSON") from exc

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.client.close()
