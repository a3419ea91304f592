"""Domain models for the local meal log."""

from datetime import UTC, datetime

from pydantic import ConfigDict, Field, field_validator

from nutri_snap.domain.analysis import MealAnalysis


class MealRecord(MealAnalysis):
    """Saved analysis with its identifier, timestamp and image reference."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    date: datetime
    image_url: str | None = Field(default=None, alias="imageUrl")

    @field_validator("date")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        """Treat timestamps stored without an offset as UTC."""
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value

    def to_storage(self) -> dict[str, object]:
        """Serialize using the stored JSON field names."""
        return self.model_dump(mode="json", by_alias=True)
