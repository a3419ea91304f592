"""Shared test fixtures."""

from dataclasses import dataclass, field

import pytest

from nutri_snap.client.backend import BackendClient
from nutri_snap.config import Settings
from nutri_snap.containers import AppContainer, ClientContainer
from nutri_snap.domain.analysis import MealAnalysis
from nutri_snap.errors import BackendError
from nutri_snap.services.analysis import AnalysisClient, AnalysisService
from nutri_snap.services.meals import InMemoryStorage, MealLogService


def sample_analysis_payload() -> dict[str, object]:
    return {
        "food_items": [
            {
                "item_name": "grilled chicken",
                "estimated_grams": 150,
                "estimated_calories": 250,
            },
            {
                "item_name": "french fries",
                "estimated_grams": 100,
                "estimated_calories": 312,
            },
        ],
        "total_calories": 562,
        "health_analysis": "Lean protein paired with a fried side.",
        "health_score": 6,
        "healthy_alternatives": [
            {"original_item": "french fries", "suggestion": "roasted sweet potato"}
        ],
    }


@dataclass
class FakeAnalysisClient(AnalysisClient):
    """Fake analysis client returning a fixed payload."""

    payload: dict[str, object] = field(default_factory=sample_analysis_payload)
    error: Exception | None = None
    calls: list[dict[str, object]] = field(default_factory=list)

    async def analyze(  # noqa: PLR0913
        self,
        *,
        model: str,
        prompt: str,
        image_bytes: bytes,
        mime_type: str,
        schema: dict[str, object],
    ) -> dict[str, object]:
        self.calls.append(
            {
                "model": model,
                "prompt": prompt,
                "image_bytes": image_bytes,
                "mime_type": mime_type,
                "schema": schema,
            }
        )
        if self.error is not None:
            raise self.error
        return self.payload


@dataclass
class FakeBackendClient(BackendClient):
    """Fake backend client recording uploads."""

    payload: dict[str, object] = field(default_factory=sample_analysis_payload)
    error: BackendError | None = None
    uploads: list[tuple[str, str | None]] = field(default_factory=list)
    closed: bool = False

    async def analyze_meal(
        self, image_bytes: bytes, filename: str, content_type: str | None = None
    ) -> MealAnalysis:
        self.uploads.append((filename, content_type))
        if self.error is not None:
            raise self.error
        return MealAnalysis.model_validate(self.payload)

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def settings() -> Settings:
    return Settings(
        google_api_key="google-key",
        openai_api_key="openai-key",
        environment="test",
        _env_file=None,
    )


@pytest.fixture
def analysis_client() -> FakeAnalysisClient:
    return FakeAnalysisClient()


@pytest.fixture
def container(
    settings: Settings, analysis_client: FakeAnalysisClient
) -> AppContainer:
    analysis_service = AnalysisService(
        client=analysis_client, model=settings.gemini_model
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        analysis_service=analysis_service,
        close_resources=close_resources,
    )


@pytest.fixture
def storage() -> InMemoryStorage:
    return InMemoryStorage()


@pytest.fixture
def meal_log_service(storage: InMemoryStorage) -> MealLogService:
    return MealLogService(storage)


@pytest.fixture
def backend_client() -> FakeBackendClient:
    return FakeBackendClient()


@pytest.fixture
def client_container(
    settings: Settings,
    backend_client: FakeBackendClient,
    meal_log_service: MealLogService,
) -> ClientContainer:
    async def close_resources() -> None:
        await backend_client.close()

    return ClientContainer(
        settings=settings,
        backend_client=backend_client,
        meal_log_service=meal_log_service,
        close_resources=close_resources,
    )
