"""Tests for graph settings persistence."""

import json

import pytest

from gitlanes.config.settings import GraphSettings
from gitlanes.constants import DEFAULT_MAX_COMMITS, LANE_PALETTE, LANE_WIDTH


@pytest.fixture
def settings_path(tmp_path):
    return tmp_path / "gitlanes" / "settings.json"


class TestGraphSettings:
    """Test defaults, merging and dot-path access."""

    def test_defaults_without_file(self, settings_path):
        """A missing file means the built-in defaults."""
        settings = GraphSettings(settings_path)
        assert settings.get_lane_width() == LANE_WIDTH
        assert settings.get_palette() == LANE_PALETTE
        assert not settings_path.exists()

    def test_load_merges_with_defaults(self, settings_path):
        """Keys in the file override defaults; the rest stay."""
        settings_path.parent.mkdir(parents=True)
        settings_path.write_text(json.dumps({"graph": {"lane_width": 20}, "extra": {"a": 1}}))
        settings = GraphSettings(settings_path)
        assert settings.get_lane_width() == 20
        assert settings.get_row_height() == 28
        assert settings.get("extra.a") == 1

    def test_save_round_trip(self, settings_path):
        """Saved settings are read back by a fresh instance."""
        settings = GraphSettings(settings_path)
        settings.set("graph.row_height", 40)
        settings.save()
        assert GraphSettings(settings_path).get_row_height() == 40

    def test_defaults_not_shared(self, tmp_path):
        """Changing one instance leaves the class defaults alone."""
        settings = GraphSettings(tmp_path / "a.json")
        settings.get_palette()
        settings.settings["graph"]["palette"].append("#000000")
        assert GraphSettings(tmp_path / "b.json").get_palette() == LANE_PALETTE

    def test_get_missing_path(self, settings_path):
        """Unknown paths return the default."""
        settings = GraphSettings(settings_path)
        assert settings.get("graph.nope") is None
        assert settings.get("graph.lane_width.deeper", "x") == "x"

    def test_set_creates_sections(self, settings_path):
        """set() creates intermediate dictionaries."""
        settings = GraphSettings(settings_path)
        settings.set("render.debug.enabled", True)
        assert settings.get("render.debug.enabled") is True

    def test_empty_palette_falls_back(self, settings_path):
        """An empty palette would make color lookup impossible."""
        settings = GraphSettings(settings_path)
        settings.set("graph.palette", [])
        assert settings.get_palette() == LANE_PALETTE

    def test_malformed_file_raises(self, settings_path):
        """Broken JSON is reported to the caller."""
        settings_path.parent.mkdir(parents=True)
        settings_path.write_text("{not json")
        with pytest.raises(json.JSONDecodeError):
            GraphSettings(settings_path)


class TestMaxCommits:
    """Test the input size cap."""

    def test_default(self, settings_path, monkeypatch):
        monkeypatch.delenv("GITLANES_MAX_COMMITS", raising=False)
        assert GraphSettings(settings_path).get_max_commits() == DEFAULT_MAX_COMMITS

    def test_from_settings(self, settings_path, monkeypatch):
        monkeypatch.delenv("GITLANES_MAX_COMMITS", raising=False)
        settings = GraphSettings(settings_path)
        settings.set("graph.max_commits", 10)
        assert settings.get_max_commits() == 10

    def test_environment_override(self, settings_path, monkeypatch):
        """The environment variable wins over the settings file."""
        monkeypatch.setenv("GITLANES_MAX_COMMITS", "25")
        settings = GraphSettings(settings_path)
        settings.set("graph.max_commits", 10)
        assert settings.get_max_commits() == 25

    def test_environment_not_an_integer(self, settings_path, monkeypatch, caplog):
        """A malformed environment value is ignored in favour of the settings file."""
        monkeypatch.setenv("GITLANES_MAX_COMMITS", "lots")
        settings = GraphSettings(settings_path)
        settings.set("graph.max_commits", 10)
        assert settings.get_max_commits() == 10
        assert "GITLANES_MAX_COMMITS" in caplog.text

    def test_negative_clamped_to_zero(self, settings_path, monkeypatch):
        """A negative limit means no rows, never slicing from the end."""
        monkeypatch.setenv("GITLANES_MAX_COMMITS", "-3")
        assert GraphSettings(settings_path).get_max_commits() == 0
