"""In-memory handler that manages an ordered list of reminders."""

from typing import Dict, List

from .reminder import Reminder


class InvalidIndexError(IndexError):
    """Raised when a reminder index is out of bounds."""

    def __init__(self, index: int):
        super().__init__(f"Invalid index: {index}")
        self.index = index


class RemindersHandler:
    """
    Manages a list of reminders.

    Insertion order is preserved and doubles as the index space used by
    get_reminder(), modify_reminder() and toggle_completion().
    """

    def __init__(self):
        self._reminders: List[Reminder] = []

    @property
    def reminders(self) -> List[Reminder]:
        """A copy of the list of reminders added so far."""
        return list(self._reminders)

    def add_reminder(self, description: str, tag: str) -> None:
        """
        Create a new reminder and append it to the list.

        Args:
            description: The full description of the reminder
            tag: The keyword used to help categorize the reminder
        """
        self._reminders.append(Reminder(description, tag))

    def get_reminder(self, index: int) -> Reminder:
        """
        Return the reminder at the given index.

        Raises:
            InvalidIndexError: If the index is not valid
        """
        if not self.is_index_valid(index):
            raise InvalidIndexError(index)
        return self._reminders[index]

    def is_index_valid(self, index: int) -> bool:
        """Return True if index refers to an existing reminder."""
        if self.size() == 0:
            return False
        return 0 <= index < self.size()

    def size(self) -> int:
        """Return the number of reminders added so far."""
        return len(self._reminders)

    def __len__(self) -> int:
        return self.size()

    def modify_reminder(self, index: int, description: str) -> None:
        """
        Replace the description of the reminder at the given index.

        Silently ignores the call if the index is not valid.
        """
        if not self.is_index_valid(index):
            return
        self._reminders[index].description = description

    def toggle_completion(self, index: int) -> None:
        """
        Toggle the completion status of the reminder at the given index.

        Silently ignores the call if the index is not valid.
        """
        if not self.is_index_valid(index):
            return
        self._reminders[index].toggle_completion()

    def search(self, keyword: str) -> List[Reminder]:
        """
        Return the reminders matching a keyword.

        Reminders whose tag matches the keyword exactly (case-insensitive)
        win. Only when there are none are reminders whose description
        contains the keyword returned instead.

        Args:
            keyword: Text to search for in tags, then descriptions
        """
        keyword = keyword.lower()
        results = self._search_tags(keyword)
        if not results:
            results = self._search_descriptions(keyword)
        return results

    def group_by_tag(self) -> Dict[str, List[Reminder]]:
        """Return the reminders grouped by lowercased tag."""
        groupings: Dict[str, List[Reminder]] = {}
        for reminder in self._reminders:
            groupings.setdefault(reminder.tag.lower(), []).append(reminder)
        return groupings

    def _search_tags(self, keyword: str) -> List[Reminder]:
        return [r for r in self._reminders if r.tag.lower() == keyword]

    def _search_descriptions(self, keyword: str) -> List[Reminder]:
        return [r for r in self._reminders if keyword in r.description.lower()]
