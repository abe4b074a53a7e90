"""Reminder record for a single task note."""


class Reminder:
    """
    A reminder for a given task.

    The completion flag starts out False and can only be flipped with
    toggle_completion().
    """

    def __init__(self, description: str, tag: str):
        """
        Create a new Reminder.

        Args:
            description: The full description of the reminder
            tag: The keyword used to help categorize the reminder
        """
        self._description = description
        self._tag = tag
        self._is_completed = False

    @property
    def description(self) -> str:
        """The full description of this reminder."""
        return self._description

    @description.setter
    def description(self, description: str) -> None:
        self._description = description

    @property
    def tag(self) -> str:
        """The keyword used to categorize this reminder."""
        return self._tag

    @tag.setter
    def tag(self, tag: str) -> None:
        self._tag = tag

    @property
    def is_completed(self) -> bool:
        """True if the reminder is completed, False otherwise."""
        return self._is_completed

    def toggle_completion(self) -> None:
        """Toggle the completion status True <-> False."""
        self._is_completed = not self._is_completed

    def __repr__(self) -> str:
        return (
            f"Reminder(description={self._description!r}, tag={self._tag!r}, "
            f"is_completed={self._is_completed})"
        )
