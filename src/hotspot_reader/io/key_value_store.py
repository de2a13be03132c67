"""Key-value store persisted as a single JSON file."""

import json
import logging
from pathlib import Path
from typing import Any, Optional

logger = logging.getLogger(__name__)


class KeyValueStore:
    """
    Small string-keyed store for user state that must survive a restart.

    Format:
    {
        "version": 1,
        "values": {
            "hotspots": "{...document json...}",
            "voice_uri": "..."
        }
    }

    Values are kept as strings, the file is rewritten on every ``set``.
    """

    STORE_VERSION = 1
    STORE_FILENAME = "local-storage.json"

    def __init__(self, data_dir: Path):
        self.file_path = Path(data_dir) / self.STORE_FILENAME
        self._values: Optional[dict[str, str]] = None

    def get(self, key: str) -> Optional[str]:
        """Return the stored value or None."""
        return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        """Store a value and flush to disk.

        Raises:
            OSError: if the file cannot be written.
        """
        values = self._load()
        values[key] = value
        self.file_path.parent.mkdir(parents=True, exist_ok=True)
        data = {"version": self.STORE_VERSION, "values": values}
        self.file_path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")

    def _load(self) -> dict[str, str]:
        if self._values is not None:
            return self._values

        self._values = {}
        if not self.file_path.exists():
            return self._values

        try:
            data: Any = json.loads(self.file_path.read_text(encoding="utf-8"))
            values = data.get("values", {}) if isinstance(data, dict) else {}
            self._values = {str(k): str(v) for k, v in values.items()}
        except (json.JSONDecodeError, OSError, AttributeError) as e:
            logger.warning("Error reading key-value store %s: %s", self.file_path, e)
        return self._values
