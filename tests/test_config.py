"""Unit tests for the config module."""

import pytest
from pathlib import Path
import tempfile

from reminders_handler.config import (
    ReminderSeed,
    ReviewConfig,
    GeneralConfig,
    ConfigManager,
    parse_config_data,
    load_config_file
)
from reminders_handler.handler import RemindersHandler


FIXTURES_DIR = Path(__file__).parent / "fixtures"


class TestReviewConfig:
    """Tests for ReviewConfig dataclass."""

    def test_from_dict_valid(self):
        settings = {"schedule": "0 9 * * 1-5", "snooze_duration": 120}
        config = ReviewConfig.from_dict("work", settings)

        assert config.tag == "work"
        assert config.schedule == "0 9 * * 1-5"
        assert config.snooze_duration == 120

    def test_from_dict_lowercases_tag(self):
        config = ReviewConfig.from_dict("Work", {"schedule": "0 9 * * *"})
        assert config.tag == "work"

    def test_from_dict_missing_schedule(self):
        """Test that missing schedule raises ValueError."""
        with pytest.raises(ValueError, match="missing 'schedule'"):
            ReviewConfig.from_dict("work", {"snooze_duration": 60})

    def test_from_dict_default_snooze(self):
        """Test that snooze_duration defaults to 300."""
        config = ReviewConfig.from_dict("work", {"schedule": "0 9 * * *"})
        assert config.snooze_duration == 300


class TestReminderSeed:
    """Tests for ReminderSeed dataclass."""

    def test_from_dict_valid(self):
        seed = ReminderSeed.from_dict(1, {"description": "Buy milk", "tag": "grocery"})

        assert seed.description == "Buy milk"
        assert seed.tag == "grocery"
        assert seed.completed is False

    def test_from_dict_completed(self):
        seed = ReminderSeed.from_dict(
            1, {"description": "Buy milk", "tag": "grocery", "completed": True}
        )
        assert seed.completed is True

    def test_from_dict_accepts_empty_strings(self):
        seed = ReminderSeed.from_dict(1, {"description": "", "tag": ""})
        assert seed.description == ""
        assert seed.tag == ""

    def test_from_dict_missing_description(self):
        with pytest.raises(ValueError, match="Reminder #3 is missing 'description'"):
            ReminderSeed.from_dict(3, {"tag": "grocery"})

    def test_from_dict_missing_tag(self):
        with pytest.raises(ValueError, match="missing 'tag'"):
            ReminderSeed.from_dict(1, {"description": "Buy milk"})


class TestGeneralConfig:
    """Tests for GeneralConfig dataclass."""

    def test_default_values(self):
        config = GeneralConfig()

        assert config.window_title == "Reminders"
        assert config.text_font == "Sans Serif"
        assert config.text_size == 12
        assert config.show_completed is True

    def test_from_dict_full(self):
        settings = {
            "window_title": "Todo",
            "text_font": "Roboto",
            "text_size": 16,
            "show_completed": False
        }
        config = GeneralConfig.from_dict(settings)

        assert config.window_title == "Todo"
        assert config.text_font == "Roboto"
        assert config.text_size == 16
        assert config.show_completed is False

    def test_from_dict_partial(self):
        config = GeneralConfig.from_dict({"text_font": "Arial"})

        assert config.text_font == "Arial"
        assert config.text_size == 12  # default
        assert config.show_completed is True  # default

    def test_from_dict_empty(self):
        assert GeneralConfig.from_dict({}) == GeneralConfig()


class TestParseConfigData:
    """Tests for parse_config_data function."""

    def test_parse_seeds_in_order(self):
        config_data = {
            "reminders": [
                {"description": "a", "tag": "Work"},
                {"description": "b", "tag": "home", "completed": True},
            ]
        }

        seeds, reviews, general = parse_config_data(config_data)

        assert [s.description for s in seeds] == ["a", "b"]
        assert seeds[1].completed is True
        assert reviews == {}
        assert general == GeneralConfig()

    def test_parse_reviews(self):
        config_data = {
            "review": {
                "Work": {"schedule": "0 9 * * 1-5"},
                "home": {"schedule": "0 18 * * *", "snooze_duration": 60},
            },
            "reminders": [
                {"description": "a", "tag": "work"},
                {"description": "b", "tag": "HOME"},
            ]
        }

        seeds, reviews, general = parse_config_data(config_data)

        assert set(reviews) == {"work", "home"}
        assert reviews["home"].snooze_duration == 60

    def test_parse_skips_non_dict_reviews(self):
        config_data = {
            "review": {
                "valid": {"schedule": "0 * * * *"},
                "invalid": "not a dict",
                "also_invalid": 123
            }
        }

        seeds, reviews, general = parse_config_data(config_data)

        assert list(reviews) == ["valid"]

    def test_parse_warns_about_review_without_reminders(self, capsys):
        config_data = {"review": {"garden": {"schedule": "0 8 * * 0"}}}

        parse_config_data(config_data)

        assert "review 'garden' has no seeded reminders" in capsys.readouterr().out

    def test_parse_warns_about_duplicate_review_tags(self, capsys):
        """Test that tags differing only in case keep the last review."""
        config_data = {
            "review": {
                "Work": {"schedule": "0 9 * * *"},
                "work": {"schedule": "0 10 * * *"},
            },
            "reminders": [{"description": "a", "tag": "work"}]
        }

        seeds, reviews, general = parse_config_data(config_data)

        assert list(reviews) == ["work"]
        assert reviews["work"].schedule == "0 10 * * *"
        assert "review 'work' replaces an earlier review of 'work'" in capsys.readouterr().out

    def test_parse_missing_field_in_seed(self):
        config_data = {"reminders": [{"description": "a", "tag": "x"}, {"tag": "y"}]}

        with pytest.raises(ValueError, match="Reminder #2"):
            parse_config_data(config_data)

    def test_parse_with_general_section(self):
        config_data = {"general": {"window_title": "Mine", "show_completed": False}}

        seeds, reviews, general = parse_config_data(config_data)

        assert seeds == []
        assert general.window_title == "Mine"
        assert general.show_completed is False

    def test_parse_empty(self):
        assert parse_config_data({}) == ([], {}, GeneralConfig())


class TestConfigManager:
    """Tests for ConfigManager class."""

    def test_custom_config_dir(self):
        manager = ConfigManager(Path("/custom/path"))
        assert manager.config_dir == Path("/custom/path")
        assert manager.config_file == Path("/custom/path/config.toml")

    def test_default_config_dir(self):
        manager = ConfigManager()
        assert manager.config_dir == Path.home() / ".config" / "reminders-handler"

    def test_load_config_file_not_found(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            manager = ConfigManager(Path(tmpdir))
            with pytest.raises(FileNotFoundError):
                manager.load_config()

    def test_load_config_from_fixtures(self):
        manager = ConfigManager(FIXTURES_DIR)
        seeds = manager.load_config()

        assert len(seeds) == 4
        assert set(manager.reviews) == {"work", "grocery"}
        assert manager.reviews["work"].snooze_duration == 600
        assert manager.general.window_title == "Reminders (Test)"

    def test_populate_handler(self):
        """Test that seeds land in the handler in order, completed ones toggled."""
        manager = ConfigManager(FIXTURES_DIR)
        manager.load_config()
        handler = RemindersHandler()

        manager.populate(handler)

        assert handler.size() == 4
        assert [r.description for r in handler.reminders] == [
            "Send weekly report", "Buy Milk", "Buy eggs", "Water the plants"
        ]
        assert [r.is_completed for r in handler.reminders] == [False, False, True, False]

    def test_populate_appends_to_existing(self):
        manager = ConfigManager(Path("/tmp"))
        manager.load_from_data({"reminders": [{"description": "b", "tag": "x"}]})
        handler = RemindersHandler()
        handler.add_reminder("a", "x")

        manager.populate(handler)

        assert [r.description for r in handler.group_by_tag()["x"]] == ["a", "b"]

    def test_create_example_config_is_loadable(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            manager = ConfigManager(Path(tmpdir) / "nested")
            manager.create_example_config()

            assert manager.config_file.exists()
            seeds = manager.load_config()

            assert len(seeds) == 3
            assert set(manager.reviews) == {"work", "grocery"}


class TestLoadConfigFile:
    """Tests for load_config_file function."""

    def test_load_valid_file(self):
        data = load_config_file(FIXTURES_DIR / "config.toml")

        assert isinstance(data, dict)
        assert "reminders" in data
        assert "review" in data

    def test_load_nonexistent_file(self):
        with pytest.raises(FileNotFoundError):
            load_config_file(Path("/nonexistent/config.toml"))
