"""Local meal log service."""

import json
import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Protocol
from uuid import uuid4

from pydantic import ValidationError

from nutri_snap.domain.analysis import MealAnalysis
from nutri_snap.domain.meals import MealRecord

logger = logging.getLogger(__name__)

MEAL_LOG_KEY = "mealLog"
USER_KEY = "userMagicKey"


class LocalStorage(Protocol):
    """String key-value storage with local-storage semantics."""

    def get_item(self, key: str) -> str | None:
        """Return the stored string for a key, if present."""

    def set_item(self, key: str, value: str) -> None:
        """Store a string under a key."""

    def remove_item(self, key: str) -> None:
        """Remove a key if present."""


@dataclass
class InMemoryStorage(LocalStorage):
    """Process-local storage for ephemeral sessions."""

    items: dict[str, str] = field(default_factory=dict)

    def get_item(self, key: str) -> str | None:
        """Return the stored string for a key, if present."""
        return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        """Store a string under a key."""
        self.items[key] = value

    def remove_item(self, key: str) -> None:
        """Remove a key if present."""
        self.items.pop(key, None)


@dataclass
class MealLogService:
    """Service that keeps saved analyses as a list under one storage key."""

    storage: LocalStorage

    def ensure_user_key(self) -> str:
        """Return the anonymous user key, creating it on first use."""
        existing = self.storage.get_item(USER_KEY)
        if existing:
            return existing
        created = str(uuid4())
        self.storage.set_item(USER_KEY, created)
        return created

    def save_meal(
        self, analysis: MealAnalysis, image_url: str | None = None
    ) -> MealRecord:
        """Append a new record for the analysis and return it."""
        record = MealRecord(
            id=str(uuid4()),
            date=datetime.now(tz=UTC),
            image_url=image_url,
            **analysis.model_dump(),
        )
        log = self._read_raw()
        log.append(record.to_storage())
        self._write_raw(log)
        logger.info("Saved meal", extra={"meal_id": record.id})
        return record

    def load_meal_log(self) -> list[MealRecord]:
        """Return all saved meals, newest first."""
        records: list[MealRecord] = []
        for row in self._read_raw():
            try:
                records.append(MealRecord.model_validate(row))
            except ValidationError:
                logger.warning("Skipping malformed meal record", extra={"row": row})
        return sorted(records, key=lambda record: record.date, reverse=True)

    def get_meal(self, meal_id: str) -> MealRecord | None:
        """Return a saved meal by id."""
        for record in self.load_meal_log():
            if record.id == meal_id:
                return record
        return None

    def delete_meal(self, meal_id: str) -> list[MealRecord]:
        """Remove a meal by id and return the remaining log, newest first."""
        log = self._read_raw()
        remaining = [row for row in log if row.get("id") != meal_id]
        if len(remaining) != len(log):
            self._write_raw(remaining)
            logger.info("Deleted meal", extra={"meal_id": meal_id})
        return self.load_meal_log()

    def has_saved_meals(self) -> bool:
        """Return true when at least one readable meal is stored."""
        return bool(self.load_meal_log())

    def _read_raw(self) -> list[dict[str, object]]:
        raw = self.storage.get_item(MEAL_LOG_KEY)
        if not raw:
            return []
        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Stored meal log is not valid JSON")
            return []
        if not isinstance(data, list):
            logger.warning("Stored meal log is not a list")
            return []
        return [row for row in data if isinstance(row, dict)]

    def _write_raw(self, log: list[dict[str, object]]) -> None:
        self.storage.set_item(MEAL_LOG_KEY, json.dumps(log))
