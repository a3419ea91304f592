"""Application exception hierarchy."""


class NutriSnapError(Exception):
    """Base class for application errors."""


class ConfigurationError(NutriSnapError):
    """Raised when settings are missing or invalid."""


class AnalysisError(NutriSnapError):
    """Raised when the analysis provider response is unusable."""


class BackendError(NutriSnapError):
    """Raised when the analysis backend cannot be reached or rejects a request."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class MealNotFoundError(NutriSnapError):
    """Raised when a meal id is not present in the local log."""
