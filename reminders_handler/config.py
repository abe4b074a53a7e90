"""Configuration parser for the reminders front end."""

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Dict, List, Optional

try:
    import tomllib
except ModuleNotFoundError:  # Python < 3.11
    import tomli as tomllib

if TYPE_CHECKING:
    from .handler import RemindersHandler


@dataclass
class GeneralConfig:
    """General settings for the reminders window."""
    window_title: str = "Reminders"
    text_font: str = "Sans Serif"
    text_size: int = 12
    show_completed: bool = True

    @classmethod
    def from_dict(cls, settings: dict) -> "GeneralConfig":
        """Create a GeneralConfig from a dictionary."""
        return cls(
            window_title=settings.get("window_title", "Reminders"),
            text_font=settings.get("text_font", "Sans Serif"),
            text_size=settings.get("text_size", 12),
            show_completed=settings.get("show_completed", True),
        )


@dataclass
class ReviewConfig:
    """Schedule for reviewing the reminders under one tag."""
    tag: str
    schedule: str  # Cron string
    snooze_duration: int = 300  # Seconds

    @classmethod
    def from_dict(cls, tag: str, settings: dict) -> "ReviewConfig":
        if "schedule" not in settings:
            raise ValueError(f"Review '{tag}' is missing 'schedule' field")
        return cls(
            tag=tag.lower(),
            schedule=settings["schedule"],
            snooze_duration=settings.get("snooze_duration", 300),
        )


@dataclass
class ReminderSeed:
    """A reminder to add to the handler at startup."""
    description: str
    tag: str
    completed: bool = False

    @classmethod
    def from_dict(cls, position: int, settings: dict) -> "ReminderSeed":
        for key in ("description", "tag"):
            if key not in settings:
                raise ValueError(f"Reminder #{position} is missing '{key}' field")
        return cls(
            description=settings["description"],
            tag=settings["tag"],
            completed=settings.get("completed", False),
        )


def parse_config_data(
    config_data: dict,
) -> tuple[List[ReminderSeed], Dict[str, ReviewConfig], GeneralConfig]:
    """
    Parse configuration data into seeds, review schedules and GeneralConfig.

    Args:
        config_data: Raw parsed TOML data

    Returns:
        Tuple of (seed reminders in file order, reviews keyed by lowercased
        tag, GeneralConfig)
    """
    general_config = GeneralConfig.from_dict(config_data.get("general", {}))

    seeds = [
        ReminderSeed.from_dict(position, settings)
        for position, settings in enumerate(config_data.get("reminders", []), start=1)
    ]

    seeded_tags = {seed.tag.lower() for seed in seeds}
    reviews = {}
    for tag, settings in config_data.get("review", {}).items():
        if not isinstance(settings, dict):
            continue
        review = ReviewConfig.from_dict(tag, settings)
        if review.tag not in seeded_tags:
            print(f"Warning: review '{review.tag}' has no seeded reminders")
        if review.tag in reviews:
            print(f"Warning: review '{tag}' replaces an earlier review of '{review.tag}'")
        reviews[review.tag] = review

    return seeds, reviews, general_config


def load_config_file(config_file: Path) -> dict:
    """Load and parse a TOML configuration file."""
    if not config_file.exists():
        raise FileNotFoundError(
            f"Configuration file not found: {config_file}\n"
            f"Please create a config file at {config_file}"
        )

    with open(config_file, "rb") as f:
        return tomllib.load(f)


class ConfigManager:
    """Loads the configuration and seeds a RemindersHandler from it."""

    DEFAULT_CONFIG_DIR = Path.home() / ".config" / "reminders-handler"
    CONFIG_FILE = "config.toml"

    def __init__(self, config_dir: Optional[Path] = None):
        self.config_dir = Path(config_dir) if config_dir else self.DEFAULT_CONFIG_DIR
        self.config_file = self.config_dir / self.CONFIG_FILE
        self.seeds: List[ReminderSeed] = []
        self.reviews: Dict[str, ReviewConfig] = {}
        self.general: GeneralConfig = GeneralConfig()

    def ensure_config_dir(self) -> None:
        """Create the config directory if it doesn't exist."""
        self.config_dir.mkdir(parents=True, exist_ok=True)

    def load_config(self) -> List[ReminderSeed]:
        """Load and parse the configuration file."""
        return self.load_from_data(load_config_file(self.config_file))

    def load_from_data(self, config_data: dict) -> List[ReminderSeed]:
        """Load settings from already-parsed config data."""
        self.seeds, self.reviews, self.general = parse_config_data(config_data)
        return self.seeds

    def populate(self, handler: "RemindersHandler") -> None:
        """Add every seed reminder to the handler, in file order."""
        for seed in self.seeds:
            handler.add_reminder(seed.description, seed.tag)
            if seed.completed:
                handler.toggle_completion(handler.size() - 1)

    def create_example_config(self) -> None:
        """Create an example configuration file."""
        self.ensure_config_dir()

        example_config = '''# Reminders Configuration

# General settings (optional - these are the defaults)
[general]
window_title = "Reminders"
text_font = "Sans Serif"
text_size = 12
show_completed = true     # Set to false to hide completed reminders

# Review schedules, one table per tag (tags are case-insensitive)
[review.work]
schedule = "0 9 * * 1-5"  # Weekdays at 9am
snooze_duration = 600     # 10 minutes

[review.grocery]
schedule = "0 17 * * 6"   # Saturdays at 5pm

# Reminders loaded at startup
[[reminders]]
description = "Send weekly report"
tag = "Work"

[[reminders]]
description = "Buy milk"
tag = "grocery"

[[reminders]]
description = "Buy eggs"
tag = "grocery"
completed = true
'''

        with open(self.config_file, "w") as f:
            f.write(example_config)

        print(f"Created example config at: {self.config_file}")
