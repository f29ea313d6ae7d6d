"""
Persisted usage counter for InstaFilter.

Counts how many times the user has changed filters and asks for a review
once the count reaches the configured threshold. The count is stored in a
small JSON settings file so it survives restarts.

Functions:
    get_settings_path: Location of the settings file under a base directory
    load_settings: Load settings, falling back to defaults
    save_settings: Write settings to disk

Classes:
    FilterUsageCounter: Counter with a review-request callback
"""

import json
from pathlib import Path
from typing import Any, Callable, Dict, Optional
import logging

from IF_Libs.constants import (
    FIELD_FILTER_COUNT,
    FIELD_SCHEMA_VERSION,
    REVIEW_PROMPT_THRESHOLD,
    SCHEMA_VERSION,
    SETTINGS_DIR_NAME,
    SETTINGS_FILE_NAME,
)

logger = logging.getLogger(__name__)

FIELD_REVIEW_REQUESTED = "review_requested"


def default_settings() -> Dict[str, Any]:
    return {
        FIELD_SCHEMA_VERSION: SCHEMA_VERSION,
        FIELD_FILTER_COUNT: 0,
        FIELD_REVIEW_REQUESTED: False,
    }


def get_settings_path(base_dir: Path) -> Path:
    settings_dir = Path(base_dir) / SETTINGS_DIR_NAME
    settings_dir.mkdir(parents=True, exist_ok=True)
    return settings_dir / SETTINGS_FILE_NAME


def load_settings(settings_path: Path) -> Dict[str, Any]:
    """
    Load settings from a JSON file.

    Missing, unreadable, or malformed files yield the defaults; unknown
    fields are preserved.
    """
    settings = default_settings()
    try:
        payload = json.loads(Path(settings_path).read_text(encoding="utf-8"))
    except FileNotFoundError:
        return settings
    except (OSError, ValueError) as e:
        logger.warning(f"Could not read settings from {settings_path}: {e}")
        return settings

    if not isinstance(payload, dict):
        return settings

    settings.update(payload)
    try:
        settings[FIELD_FILTER_COUNT] = max(0, int(settings[FIELD_FILTER_COUNT]))
    except (TypeError, ValueError, OverflowError):
        settings[FIELD_FILTER_COUNT] = 0
    settings[FIELD_REVIEW_REQUESTED] = bool(settings[FIELD_REVIEW_REQUESTED])
    return settings


def save_settings(settings_path: Path, payload: Dict[str, Any]) -> None:
    payload[FIELD_SCHEMA_VERSION] = SCHEMA_VERSION
    Path(settings_path).write_text(json.dumps(payload, indent=2), encoding="utf-8")


class FilterUsageCounter:
    """
    Counts filter changes and requests a review once.

    Args:
        settings_path: JSON file to persist the count in (None = memory only)
        threshold: Number of filter changes before asking for a review
        on_review_requested: Called once when the threshold is reached
    """

    def __init__(
        self,
        settings_path: Optional[Path] = None,
        threshold: int = REVIEW_PROMPT_THRESHOLD,
        on_review_requested: Optional[Callable[[], None]] = None,
    ) -> None:
        if threshold < 1:
            raise ValueError(f"threshold must be >= 1, got {threshold}")

        self.settings_path = Path(settings_path) if settings_path is not None else None
        self.threshold = threshold
        self.on_review_requested = on_review_requested
        self._settings = load_settings(self.settings_path) if self.settings_path else default_settings()

    @property
    def count(self) -> int:
        return int(self._settings[FIELD_FILTER_COUNT])

    @property
    def review_requested(self) -> bool:
        return bool(self._settings[FIELD_REVIEW_REQUESTED])

    def record_filter_change(self, *_: Any) -> bool:
        """
        Count one filter change.

        Accepts and ignores positional arguments so it can be passed
        directly as a session's ``on_filter_changed`` callback.

        Returns:
            True if this change triggered the review request
        """
        self._settings[FIELD_FILTER_COUNT] = self.count + 1

        triggered = self.count >= self.threshold and not self.review_requested
        if triggered:
            self._settings[FIELD_REVIEW_REQUESTED] = True
            logger.info(f"Filter changed {self.count} times, requesting review")

        self._persist()

        if triggered and self.on_review_requested is not None:
            self.on_review_requested()
        return triggered

    def reset(self) -> None:
        self._settings = default_settings()
        self._persist()

    def _persist(self) -> None:
        if self.settings_path is None:
            return
        try:
            save_settings(self.settings_path, self._settings)
        except OSError as e:
            logger.warning(f"Could not save settings to {self.settings_path}: {e}")
