"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from nutri_snap.adapters.gemini_analysis_client import GeminiAnalysisClient
from nutri_snap.adapters.json_file_storage import JsonFileStorage
from nutri_snap.adapters.openai_analysis_client import OpenAIAnalysisClient
from nutri_snap.client.backend import BackendClient, HttpxBackendClient
from nutri_snap.config import Settings
from nutri_snap.errors import ConfigurationError
from nutri_snap.services.analysis import AnalysisService
from nutri_snap.services.meals import MealLogService


@dataclass
class AppContainer:
    """Holds server-side dependencies."""

    settings: Settings
    analysis_service: AnalysisService
    close_resources: Callable[[], Awaitable[None]]


@dataclass
class ClientContainer:
    """Holds client-side dependencies."""

    settings: Settings
    backend_client: BackendClient
    meal_log_service: MealLogService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default server container for the configured provider."""
    resolved_settings = settings or Settings()
    provider = resolved_settings.analysis_provider.strip().lower()
    if provider == "gemini":
        if not resolved_settings.google_api_key:
            raise ConfigurationError("GOOGLE_API_KEY is required for Gemini")
        gemini_client = GeminiAnalysisClient.create(resolved_settings.google_api_key)
        analysis_service = AnalysisService(
            client=gemini_client, model=resolved_settings.gemini_model
        )

        async def close_resources() -> None:
            return None

    elif provider == "openai":
        if not resolved_settings.openai_api_key:
            raise ConfigurationError("OPENAI_API_KEY is required for OpenAI")
        openai_client = OpenAIAnalysisClient.create(resolved_settings.openai_api_key)
        analysis_service = AnalysisService(
            client=openai_client, model=resolved_settings.openai_model
        )

        async def close_resources() -> None:
            await openai_client.close()

    else:
        raise ConfigurationError(f"Unknown analysis provider: {provider!r}")

    return AppContainer(
        settings=resolved_settings,
        analysis_service=analysis_service,
        close_resources=close_resources,
    )


def build_client_container(settings: Settings | None = None) -> ClientContainer:
    """Create the container used by the command-line client."""
    resolved_settings = settings or Settings()
    backend_client = HttpxBackendClient.create(resolved_settings.backend_url)
    storage = JsonFileStorage.create(resolved_settings.storage_path)
    meal_log_service = MealLogService(storage)

    async def close_resources() -> None:
        await backend_client.close()

    return ClientContainer(
        settings=resolved_settings,
        backend_client=backend_client,
        meal_log_service=meal_log_service,
        close_resources=close_resources,
    )
