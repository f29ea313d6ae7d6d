"""
SessionLib - Filter session, photo loading and usage tracking

This module holds the recompute orchestrator, the asynchronous photo
loading boundary that feeds it, and the persisted usage counter.
"""

from IF_Libs.SessionLib.filter_session import (
    FilterSession,
    SessionConfig,
    validate_intensity,
)
from IF_Libs.SessionLib.photo_loader import (
    PhotoLoader,
    fetch_photo,
    read_photo_bytes,
)
from IF_Libs.SessionLib.usage_store import (
    FilterUsageCounter,
    get_settings_path,
    load_settings,
    save_settings,
)

__all__ = [
    "FilterSession",
    "SessionConfig",
    "validate_intensity",
    "PhotoLoader",
    "fetch_photo",
    "read_photo_bytes",
    "FilterUsageCounter",
    "get_settings_path",
    "load_settings",
    "save_settings",
]
