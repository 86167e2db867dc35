"""
Configuration service for reading settings from environment.
"""

import logging
import os
from datetime import datetime, timezone
from typing import Any, Optional

logger = logging.getLogger("app.config")

DEFAULT_SIMILARITY_THRESHOLD = 70
DEFAULT_HIGH_PLAGIARISM_THRESHOLD = 50


class ConfigService:
    """Service for managing application configuration."""

    def __init__(self):
        self._cache: dict[str, Any] = {}

    def get_setting(self, key: str, default: Any = None) -> Any:
        """
        Get setting value from environment.

        Priority: In-process override > Environment > Default
        """
        if key in self._cache:
            return self._cache[key]

        value = os.getenv(key, default)

        self._cache[key] = value

        logger.debug(f"Retrieved setting {key}={value}")
        return value

    def set_setting(self, key: str, value: Any) -> None:
        """Override a setting for the running process."""
        self._cache[key] = value
        logger.info(f"Set setting {key}={value}")

    def clear_cache(self) -> None:
        """Forget cached and overridden values so the environment is re-read."""
        self._cache.clear()

    def _get_percentage(self, key: str, default: int) -> int:
        raw = self.get_setting(key, default)
        try:
            value = int(raw)
        except (TypeError, ValueError):
            logger.warning(f"Invalid {key} value: {raw}, using {default}")
            return default

        if not 0 <= value <= 100:
            logger.warning(f"{key}={value} is outside 0-100, using {default}")
            return default

        return value

    def similarity_threshold(self) -> int:
        """Pairwise similarity percentage at which two submissions are clustered."""
        return self._get_percentage("PLAGIARISM_SIMILARITY_THRESHOLD", DEFAULT_SIMILARITY_THRESHOLD)

    def high_plagiarism_threshold(self) -> int:
        """Scores strictly above this value count as high plagiarism."""
        return self._get_percentage("PLAGIARISM_HIGH_THRESHOLD", DEFAULT_HIGH_PLAGIARISM_THRESHOLD)

    def now(self) -> datetime:
        """
        Get current time (real or fake based on APP_NOW_MODE).

        Returns:
            Current datetime (real or fake)
        """
        now_mode = self.get_setting("APP_NOW_MODE", "real")

        if now_mode == "fake":
            fake_now = self.get_fake_time()
            if fake_now:
                logger.debug(f"Using fake time: {fake_now}")
                return fake_now

        return datetime.now(timezone.utc)

    def is_fake_time_enabled(self) -> bool:
        """Check if fake time mode is enabled."""
        return self.get_setting("APP_NOW_MODE", "real") == "fake"

    def get_fake_time(self) -> Optional[datetime]:
        """Get fake time if enabled, None otherwise."""
        if not self.is_fake_time_enabled():
            return None

        fake_now_str = self.get_setting("APP_FAKE_NOW")
        if fake_now_str:
            try:
                # Parse YYYY-MM-DD format
                return datetime.strptime(fake_now_str, "%Y-%m-%d")
            except ValueError:
                logger.warning(f"Invalid APP_FAKE_NOW format: {fake_now_str}, using real time")

        return None


# Global instance
config_service = ConfigService()
