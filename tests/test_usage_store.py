"""
Unit tests for usage_store module.

Tests settings persistence and the review prompt counter.
"""

import json

import pytest

from IF_Libs.SessionLib.filter_session import FilterSession, SessionConfig
from IF_Libs.SessionLib.usage_store import (
    FilterUsageCounter,
    default_settings,
    get_settings_path,
    load_settings,
    save_settings,
)


class TestGetSettingsPath:
    """Tests for get_settings_path function."""

    def test_creates_settings_directory(self, settings_dir):
        path = get_settings_path(settings_dir)

        assert path.parent.is_dir()
        assert path.parent.name == ".instafilter"
        assert path.name == "settings.json"


class TestLoadSettings:
    """Tests for load_settings function."""

    def test_missing_file_gives_defaults(self, settings_dir):
        assert load_settings(settings_dir / "absent.json") == default_settings()

    def test_malformed_file_gives_defaults(self, settings_dir):
        path = settings_dir / "settings.json"
        path.write_text("{not json", encoding="utf-8")

        assert load_settings(path) == default_settings()

    def test_non_dict_payload_gives_defaults(self, settings_dir):
        path = settings_dir / "settings.json"
        path.write_text("[1, 2]", encoding="utf-8")

        assert load_settings(path)["filter_count"] == 0

    def test_invalid_count_reset(self, settings_dir):
        path = settings_dir / "settings.json"
        path.write_text(json.dumps({"filter_count": "lots"}), encoding="utf-8")

        assert load_settings(path)["filter_count"] == 0

    def test_undecodable_file_gives_defaults(self, settings_dir):
        path = settings_dir / "settings.json"
        path.write_bytes(b"\xff\xfe\x00garbage")

        assert load_settings(path) == default_settings()

    @pytest.mark.parametrize("count", ["Infinity", "-Infinity", "NaN"])
    def test_non_finite_count_reset(self, settings_dir, count):
        path = settings_dir / "settings.json"
        path.write_text(f'{{"filter_count": {count}}}', encoding="utf-8")

        assert load_settings(path)["filter_count"] == 0

    def test_corrupt_file_does_not_break_counter(self, settings_dir):
        path = get_settings_path(settings_dir)
        path.write_text('{"filter_count": Infinity}', encoding="utf-8")

        counter = FilterUsageCounter(settings_path=path)
        counter.record_filter_change()

        assert counter.count == 1

    def test_preserves_unknown_fields(self, settings_dir):
        path = settings_dir / "settings.json"
        path.write_text(json.dumps({"filter_count": 3, "theme": "dark"}), encoding="utf-8")

        settings = load_settings(path)

        assert settings["filter_count"] == 3
        assert settings["theme"] == "dark"


class TestSaveSettings:
    """Tests for save_settings function."""

    def test_writes_schema_version(self, settings_dir):
        path = settings_dir / "settings.json"
        save_settings(path, {"filter_count": 7})

        payload = json.loads(path.read_text(encoding="utf-8"))

        assert payload == {"filter_count": 7, "schema_version": 1}


class TestFilterUsageCounter:
    """Tests for FilterUsageCounter."""

    def test_counts_in_memory(self):
        counter = FilterUsageCounter()
        counter.record_filter_change()
        counter.record_filter_change()

        assert counter.count == 2

    def test_invalid_threshold(self):
        with pytest.raises(ValueError):
            FilterUsageCounter(threshold=0)

    def test_review_requested_at_threshold(self):
        requests = []
        counter = FilterUsageCounter(threshold=20, on_review_requested=lambda: requests.append(True))

        results = [counter.record_filter_change() for _ in range(19)]
        assert not any(results)
        assert requests == []

        assert counter.record_filter_change() is True
        assert requests == [True]

    def test_review_requested_once(self):
        requests = []
        counter = FilterUsageCounter(threshold=2, on_review_requested=lambda: requests.append(True))

        for _ in range(5):
            counter.record_filter_change()

        assert len(requests) == 1
        assert counter.review_requested

    def test_persists_between_instances(self, settings_dir):
        path = get_settings_path(settings_dir)
        first = FilterUsageCounter(settings_path=path)
        for _ in range(3):
            first.record_filter_change()

        second = FilterUsageCounter(settings_path=path)

        assert second.count == 3

    def test_threshold_reached_across_restarts(self, settings_dir):
        path = get_settings_path(settings_dir)
        save_settings(path, {"filter_count": 19, "review_requested": False})
        requests = []

        counter = FilterUsageCounter(settings_path=path, on_review_requested=lambda: requests.append(True))
        counter.record_filter_change()

        assert requests == [True]
        assert load_settings(path)["review_requested"] is True

    def test_reset(self, settings_dir):
        path = get_settings_path(settings_dir)
        counter = FilterUsageCounter(settings_path=path)
        counter.record_filter_change()

        counter.reset()

        assert counter.count == 0
        assert load_settings(path)["filter_count"] == 0

    def test_wired_into_session(self):
        """Every filter selection counts, even without a photo loaded."""
        counter = FilterUsageCounter()
        session = FilterSession(SessionConfig(on_filter_changed=counter.record_filter_change))

        session.set_filter("Edges")
        session.set_filter("Vignette")

        assert counter.count == 2
