"""HTTP client for the meal analysis backend."""

from dataclasses import dataclass
from typing import Protocol

import httpx
from pydantic import ValidationError

from nutri_snap.domain.analysis import MealAnalysis
from nutri_snap.errors import BackendError

ANALYZE_TIMEOUT_SECONDS = 60


class BackendClient(Protocol):
    """Interface for the analysis backend."""

    async def analyze_meal(
        self, image_bytes: bytes, filename: str, content_type: str | None = None
    ) -> MealAnalysis:
        """Upload a meal photo and return its analysis."""

    async def close(self) -> None:
        """Release network resources."""


@dataclass
class HttpxBackendClient(BackendClient):
    """HTTPX-backed client for the analysis backend."""

    base_url: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(cls, base_url: str) -> "HttpxBackendClient":
        """Create a backend client with a managed httpx session."""
        return cls(base_url=base_url.rstrip("/"), http_client=httpx.AsyncClient())

    async def analyze_meal(
        self, image_bytes: bytes, filename: str, content_type: str | None = None
    ) -> MealAnalysis:
        """Upload a meal photo as multipart field ``file``."""
        url = f"{self.base_url}/analyze_meal"
        files = {
            "file": (filename, image_bytes, content_type or "application/octet-stream")
        }
        try:
            response = await self.http_client.post(
                url, files=files, timeout=ANALYZE_TIMEOUT_SECONDS
            )
        except httpx.HTTPError as exc:
            raise BackendError(f"Could not reach backend: {exc}") from exc
        if response.is_error:
            raise BackendError(
                response.text or f"Backend returned {response.status_code}",
                status_code=response.status_code,
            )
        try:
            return MealAnalysis.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise BackendError(
                "Backend returned an invalid analysis",
                status_code=response.status_code,
            ) from exc

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
