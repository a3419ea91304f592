"""Local key-value storage persisted as a single JSON file."""

import json
import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path

from nutri_snap.services.meals import LocalStorage

logger = logging.getLogger(__name__)


@dataclass
class JsonFileStorage(LocalStorage):
    """String key-value store kept in one JSON object file."""

    path: Path

    @classmethod
    def create(cls, path: str) -> "JsonFileStorage":
        """Create a storage bound to a user-supplied path."""
        return cls(path=Path(path).expanduser())

    def get_item(self, key: str) -> str | None:
        """Return the stored string for a key, if present."""
        value = self._read().get(key)
        return value if isinstance(value, str) else None

    def set_item(self, key: str, value: str) -> None:
        """Store a string under a key."""
        data = self._read()
        data[key] = value
        self._write(data)

    def remove_item(self, key: str) -> None:
        """Remove a key if present."""
        data = self._read()
        if data.pop(key, None) is not None:
            self._write(data)

    def _read(self) -> dict[str, object]:
        if not self.path.exists():
            return {}
        text = self.path.read_text(encoding="utf-8")
        if not text.strip():
            return {}
        try:
            data = json.loads(text)
        except json.JSONDecodeError:
            data = None
        if not isinstance(data, dict):
            logger.warning(
                "Ignoring malformed storage file", extra={"path": str(self.path)}
            )
            return {}
        return data

    def _write(self, data: dict[str, object]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(data, handle, indent=2)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
