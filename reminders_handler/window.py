"""Main window listing reminders grouped by tag."""

from typing import TYPE_CHECKING, Dict, List, Optional

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtGui import QFont
from PyQt6.QtWidgets import (
    QHBoxLayout, QInputDialog, QLabel, QLineEdit, QPushButton,
    QTreeWidget, QTreeWidgetItem, QVBoxLayout, QWidget
)

from .handler import RemindersHandler
from .reminder import Reminder

if TYPE_CHECKING:
    from .config import GeneralConfig


UNTAGGED_LABEL = "(untagged)"


class RemindersWindow(QWidget):
    """
    A window that shows the handler's reminders grouped by tag.

    Features:
    - Search box using the handler's tag-first search
    - Add, edit and toggle reminders in place
    - Review banner with Done and Snooze buttons
    """

    acknowledged = pyqtSignal(str)  # Emits the reviewed tag
    snoozed = pyqtSignal(str, int)  # Emits the tag and snooze duration

    DEFAULT_WINDOW_TITLE = "Reminders"
    DEFAULT_TEXT_FONT = "Sans Serif"
    DEFAULT_TEXT_SIZE = 12

    def __init__(self, handler: RemindersHandler, parent=None,
                 general_config: Optional["GeneralConfig"] = None):
        super().__init__(parent)

        self.handler = handler
        self.review_tag: Optional[str] = None
        self.snooze_duration: int = 300

        if general_config:
            self.window_title = general_config.window_title
            self.text_font = general_config.text_font
            self.text_size = general_config.text_size
            self.show_completed = general_config.show_completed
        else:
            self.window_title = self.DEFAULT_WINDOW_TITLE
            self.text_font = self.DEFAULT_TEXT_FONT
            self.text_size = self.DEFAULT_TEXT_SIZE
            self.show_completed = True

        self._setup_ui()
        self.refresh()

    def _setup_ui(self):
        self.setWindowTitle(self.window_title)
        self.setFont(QFont(self.text_font, self.text_size))
        self.resize(480, 560)

        main_layout = QVBoxLayout(self)

        # Review banner, hidden until a review fires
        self.banner = QWidget()
        banner_layout = QHBoxLayout(self.banner)
        self.banner_label = QLabel()
        self.done_btn = QPushButton("Done")
        self.done_btn.clicked.connect(self._on_done)
        self.snooze_btn = QPushButton("Snooze")
        self.snooze_btn.clicked.connect(self._on_snooze)
        banner_layout.addWidget(self.banner_label, 1)
        banner_layout.addWidget(self.done_btn)
        banner_layout.addWidget(self.snooze_btn)
        self.banner.hide()
        main_layout.addWidget(self.banner)

        self.search_input = QLineEdit()
        self.search_input.setPlaceholderText("Search by tag or description")
        self.search_input.textChanged.connect(lambda _text: self.refresh())
        main_layout.addWidget(self.search_input)

        self.tree = QTreeWidget()
        self.tree.setHeaderLabels(["Reminder", "Done"])
        self.tree.itemDoubleClicked.connect(self._on_item_double_clicked)
        main_layout.addWidget(self.tree, 1)

        actions_layout = QHBoxLayout()
        self.toggle_btn = QPushButton("Toggle")
        self.toggle_btn.clicked.connect(self._on_toggle)
        self.edit_btn = QPushButton("Edit")
        self.edit_btn.clicked.connect(self._on_edit)
        actions_layout.addWidget(self.toggle_btn)
        actions_layout.addWidget(self.edit_btn)
        main_layout.addLayout(actions_layout)

        add_layout = QHBoxLayout()
        self.description_input = QLineEdit()
        self.description_input.setPlaceholderText("Description")
        self.tag_input = QLineEdit()
        self.tag_input.setPlaceholderText("Tag")
        self.add_btn = QPushButton("Add")
        self.add_btn.clicked.connect(self._on_add)
        add_layout.addWidget(self.description_input, 3)
        add_layout.addWidget(self.tag_input, 1)
        add_layout.addWidget(self.add_btn)
        main_layout.addLayout(add_layout)

    def visible_groups(self) -> Dict[str, List[Reminder]]:
        """Return the groups to display for the review tag or search text."""
        keyword = self.search_input.text().strip()
        if self.review_tag is not None:
            # Reviews list the tag's own members, never description matches
            tag = self.review_tag.lower()
            groups = {tag: self.handler.group_by_tag().get(tag, [])}
        elif not keyword:
            groups = self.handler.group_by_tag()
        else:
            groups = {}
            for reminder in self.handler.search(keyword):
                groups.setdefault(reminder.tag.lower(), []).append(reminder)

        if not self.show_completed:
            groups = {
                tag: [r for r in members if not r.is_completed]
                for tag, members in groups.items()
            }
        return {tag: members for tag, members in groups.items() if members}

    def refresh(self):
        """Rebuild the tree from the handler."""
        self.tree.clear()
        positions = {id(r): i for i, r in enumerate(self.handler.reminders)}

        for tag, members in self.visible_groups().items():
            tag_item = QTreeWidgetItem([tag or UNTAGGED_LABEL, ""])
            for reminder in members:
                item = QTreeWidgetItem([
                    reminder.description,
                    "✔" if reminder.is_completed else ""
                ])
                item.setData(0, Qt.ItemDataRole.UserRole, positions[id(reminder)])
                tag_item.addChild(item)
            self.tree.addTopLevelItem(tag_item)
            tag_item.setExpanded(True)

    def selected_index(self) -> Optional[int]:
        """Handler index of the selected reminder, None for tag rows."""
        item = self.tree.currentItem()
        if item is None:
            return None
        return item.data(0, Qt.ItemDataRole.UserRole)

    def show_review(self, tag: str, snooze_duration: int = 300):
        """
        Bring the window up filtered to a tag, with the review banner.

        Args:
            tag: The tag being reviewed
            snooze_duration: Snooze duration in seconds
        """
        self.review_tag = tag
        self.snooze_duration = snooze_duration

        members = self.handler.group_by_tag().get(tag.lower(), [])
        open_count = sum(1 for r in members if not r.is_completed)
        self.banner_label.setText(f"Review '{tag}': {open_count} open")
        self.banner.show()

        self.search_input.setText(tag)
        self.refresh()
        self.show()
        self.raise_()
        self.activateWindow()

    def _clear_review(self) -> Optional[str]:
        tag = self.review_tag
        self.review_tag = None
        self.banner.hide()
        self.search_input.clear()
        return tag

    def _on_done(self):
        tag = self._clear_review()
        if tag is not None:
            self.acknowledged.emit(tag)

    def _on_snooze(self):
        duration = self.snooze_duration
        tag = self._clear_review()
        if tag is not None:
            self.snoozed.emit(tag, duration)

    def _on_add(self):
        self.handler.add_reminder(self.description_input.text(), self.tag_input.text())
        self.description_input.clear()
        self.tag_input.clear()
        self.refresh()

    def _on_toggle(self):
        index = self.selected_index()
        if index is None:
            return
        self.handler.toggle_completion(index)
        self.refresh()

    def _on_edit(self):
        index = self.selected_index()
        if index is None:
            return
        current = self.handler.get_reminder(index).description
        text, ok = QInputDialog.getText(self, "Edit reminder", "Description:", text=current)
        if ok:
            self.handler.modify_reminder(index, text)
            self.refresh()

    def _on_item_double_clicked(self, item: QTreeWidgetItem, column: int):
        index = item.data(0, Qt.ItemDataRole.UserRole)
        if index is None:
            return
        self.handler.toggle_completion(index)
        self.refresh()

    def keyPressEvent(self, event):
        if event.key() == Qt.Key.Key_Escape and self.review_tag is not None:
            self._on_snooze()
        super().keyPressEvent(event)
