"""Settings Manager - Handles asset locations, speech and display configuration."""

import os
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv


def _truthy(value: str) -> bool:
    return value.strip().lower() in {"1", "true", "yes", "on"}


class SettingsManager:
    """
    Manages application settings.

    Reads values from the environment after loading a .env file in the
    project root. Every getter falls back to a default when a variable is
    missing or unparsable.
    """

    DEFAULT_TOTAL_PAGES = 12

    def __init__(self, project_root: Optional[Path] = None):
        """
        Initialize settings manager.

        Args:
            project_root: Path to project root where .env is located.
                         If None, searches upward from current file.
        """
        if project_root is None:
            current = Path(__file__).resolve()
            project_root = current.parent.parent.parent.parent

        env_path = project_root / ".env"
        load_dotenv(dotenv_path=env_path)

        self._project_root = project_root

    def _get(self, name: str) -> Optional[str]:
        value = os.getenv(name)
        return value.strip() if value and value.strip() else None

    def get_app_root(self) -> Path:
        """Folder holding hotspots.json and the audio manifest."""
        value = self._get("HOTSPOT_APP_ROOT")
        return Path(value).expanduser() if value else self._project_root

    def get_asset_root(self) -> Path:
        """Folder holding pages/ and hotspot_audio/."""
        value = self._get("HOTSPOT_ASSET_ROOT")
        return Path(value).expanduser() if value else self.get_app_root() / "public"

    def get_data_dir(self) -> Path:
        """Per-user folder for saved hotspots, preferences and logs."""
        value = self._get("HOTSPOT_DATA_DIR")
        return Path(value).expanduser() if value else Path.home() / ".hotspot_reader"

    def get_total_pages(self) -> int:
        value = self._get("HOTSPOT_TOTAL_PAGES")
        try:
            total = int(value) if value else self.DEFAULT_TOTAL_PAGES
        except ValueError:
            return self.DEFAULT_TOTAL_PAGES
        return total if total > 0 else self.DEFAULT_TOTAL_PAGES

    def get_audio_extensions(self) -> List[str]:
        value = self._get("HOTSPOT_AUDIO_EXTENSIONS") or "wav"
        extensions = [ext.strip().lstrip(".") for ext in value.split(",") if ext.strip().lstrip(".")]
        return extensions or ["wav"]

    def get_speech_rate(self) -> Optional[str]:
        """Raw rate value; the resolver falls back to 1.0 when unparsable."""
        return self._get("HOTSPOT_SPEECH_RATE")

    def get_speech_pitch(self) -> Optional[str]:
        return self._get("HOTSPOT_SPEECH_PITCH")

    def get_voice_id(self) -> Optional[str]:
        return self._get("HOTSPOT_VOICE")

    def get_show_outlines(self) -> bool:
        value = self._get("HOTSPOT_SHOW_OUTLINES")
        return _truthy(value) if value else False

    def get_view_mode(self) -> str:
        return (self._get("HOTSPOT_VIEW_MODE") or "spread").lower()

    def get_log_level(self) -> str:
        return (self._get("HOTSPOT_LOG_LEVEL") or "INFO").upper()

    def get_audio_start_timeout(self) -> float:
        value = self._get("HOTSPOT_AUDIO_START_TIMEOUT")
        try:
            timeout = float(value) if value else 5.0
        except ValueError:
            return 5.0
        return timeout if timeout > 0 else 5.0

    def reload_env(self) -> None:
        """Reload environment variables from .env file."""
        env_path = self._project_root / ".env"
        load_dotenv(dotenv_path=env_path, override=True)
