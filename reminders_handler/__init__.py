"""In-memory reminders with tag search and grouping, plus a desktop front end."""

from .handler import InvalidIndexError, RemindersHandler
from .reminder import Reminder

__all__ = ["InvalidIndexError", "Reminder", "RemindersHandler"]
