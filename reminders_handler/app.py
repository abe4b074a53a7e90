"""Main application for the reminders front end."""

import sys
import signal
from pathlib import Path
from typing import List, Optional

from PyQt6.QtWidgets import QApplication, QSystemTrayIcon, QMenu
from PyQt6.QtGui import QIcon, QPixmap, QPainter, QColor, QAction
from PyQt6.QtCore import QObject, Qt, pyqtSignal, QTimer

from .config import ConfigManager
from .handler import RemindersHandler
from .scheduler import ReviewScheduler
from .window import RemindersWindow


class ReviewTrigger(QObject):
    """Bridge between scheduler thread and Qt main thread."""
    triggered = pyqtSignal(str)


class RemindersApp(QObject):
    """
    Main application class that coordinates the reminders front end.

    Manages:
    - Configuration loading and handler seeding
    - Review scheduler lifecycle
    - The reminders window
    - System tray icon
    """

    def __init__(self, config_dir: Optional[Path] = None, enable_tray: bool = True):
        """
        Initialize the RemindersApp.

        Args:
            config_dir: Optional custom config directory path
            enable_tray: Whether to enable the system tray icon
        """
        super().__init__()

        self.config_manager = ConfigManager(config_dir)
        self.handler = RemindersHandler()
        self.scheduler = ReviewScheduler()
        self.window: Optional[RemindersWindow] = None
        self.tray_icon: Optional[QSystemTrayIcon] = None
        self._enable_tray = enable_tray

        # Bridge for thread-safe Qt signal emission
        self.trigger = ReviewTrigger()
        self.trigger.triggered.connect(self._on_review_triggered)

        # Tag currently shown in the review banner
        self.active_review: Optional[str] = None

        # Reviews that fire while another one is showing
        self.review_queue: List[str] = []

    def initialize(self, skip_scheduler: bool = False) -> bool:
        """
        Initialize the application.

        Args:
            skip_scheduler: If True, don't schedule reviews (useful for testing)

        Returns:
            True on success
        """
        try:
            seeds = self.config_manager.load_config()
            self.config_manager.populate(self.handler)

            print(f"Loaded {len(seeds)} reminders:")
            for tag, members in self.handler.group_by_tag().items():
                print(f"  - {tag or '(untagged)'}: {len(members)}")

            self.window = RemindersWindow(self.handler, general_config=self.config_manager.general)
            self.window.acknowledged.connect(self._on_review_acknowledged)
            self.window.snoozed.connect(self._on_review_snoozed)

            if self._enable_tray:
                self._setup_tray()

            if not skip_scheduler:
                for tag, review in self.config_manager.reviews.items():
                    self.scheduler.add_review(
                        tag=tag,
                        cron_expression=review.schedule,
                        callback=self._trigger_review_threadsafe
                    )

            return True

        except FileNotFoundError as e:
            print(f"Error: {e}")
            print("\nCreating example configuration...")
            self.config_manager.create_example_config()
            print(f"Please edit {self.config_manager.config_file} and restart.")
            return False
        except (ValueError, OSError) as e:  # TOMLDecodeError is a ValueError
            print(f"Error initializing application: {e}")
            return False

    def trigger_review(self, tag: str) -> bool:
        """
        Manually show the review banner for a tag.

        Returns:
            True if a review is configured for the tag
        """
        tag = tag.lower()
        if tag not in self.config_manager.reviews:
            print(f"Unknown review: {tag}")
            return False

        self._show_review(tag)
        return True

    def _setup_tray(self):
        """Set up the system tray icon and its menu."""
        self.tray_icon = QSystemTrayIcon(QIcon(tray_pixmap()))
        self.tray_icon.setToolTip(self.config_manager.general.window_title)
        self.tray_icon.activated.connect(lambda _reason: self._show_window())

        # The tray does not take ownership of its menu
        self._tray_menu = QMenu()
        entries = [
            ("Show Reminders", self._show_window),
            ("Show Status", self._show_status),
            None,
            ("Quit", self._quit),
        ]
        for entry in entries:
            if entry is None:
                self._tray_menu.addSeparator()
                continue
            label, slot = entry
            action = QAction(label, self._tray_menu)
            action.triggered.connect(slot)
            self._tray_menu.addAction(action)

        self.tray_icon.setContextMenu(self._tray_menu)
        self.tray_icon.show()

    def _trigger_review_threadsafe(self, tag: str):
        """Called on the scheduler thread; forwards to the main thread."""
        self.trigger.triggered.emit(tag)

    def _on_review_triggered(self, tag: str):
        print(f"Review triggered: {tag}")

        if tag not in self.config_manager.reviews:
            print(f"Warning: Unknown review '{tag}'")
            return

        if tag == self.active_review or tag in self.review_queue:
            print(f"Review already pending: {tag}")
            return

        if self.active_review is not None:
            print(f"Queueing review: {tag}")
            self.review_queue.append(tag)
            return

        self._show_review(tag)

    def _show_review(self, tag: str):
        self.active_review = tag
        review = self.config_manager.reviews[tag]
        self.window.show_review(tag, snooze_duration=review.snooze_duration)
        if self.tray_icon is not None:
            self.tray_icon.showMessage("Review reminders", f"Time to review '{tag}'")

    def _on_review_acknowledged(self, tag: str):
        print(f"Review done: {tag}")
        self.scheduler.acknowledge_review(tag)
        self.active_review = None
        self._process_queue()

    def _on_review_snoozed(self, tag: str, duration: int):
        print(f"Review snoozed: {tag} for {duration}s")
        self.scheduler.snooze_review(tag, duration)
        self.active_review = None
        self._process_queue()

    def _process_queue(self):
        if self.review_queue:
            next_tag = self.review_queue.pop(0)
            QTimer.singleShot(500, lambda: self._show_review(next_tag))

    def _show_window(self):
        self.window.refresh()
        self.window.show()
        self.window.raise_()

    def _show_status(self):
        """Print open counts and the review schedule."""
        print("\n=== Reminders Status ===")
        for tag, members in self.handler.group_by_tag().items():
            open_count = sum(1 for r in members if not r.is_completed)
            print(f"{tag or '(untagged)'}: {open_count}/{len(members)} open")
        for tag, info in self.scheduler.get_status().items():
            print(f"\nReview '{tag}':")
            print(f"  Next run: {info['effective_next']}")
            if info['snoozed_until']:
                print(f"  Snoozed until: {info['snoozed_until']}")
        print("=" * 24 + "\n")

    def _quit(self):
        print("Shutting down...")
        self.scheduler.stop()
        QApplication.quit()

    def run(self):
        """Start the application."""
        self.scheduler.start()
        self.window.show()
        print("\nReminders are running. Use the system tray icon to access options.")
        print("Press Ctrl+C to quit.\n")


def tray_pixmap(size: int = 32) -> QPixmap:
    """Draw the tray icon: a check mark on a blue disc."""
    pixmap = QPixmap(size, size)
    pixmap.fill(Qt.GlobalColor.transparent)
    painter = QPainter(pixmap)
    painter.setRenderHint(QPainter.RenderHint.Antialiasing)
    painter.setBrush(QColor("#2196F3"))
    painter.setPen(QColor("#1976D2"))
    painter.drawEllipse(pixmap.rect().adjusted(2, 2, -2, -2))
    painter.setPen(QColor("white"))
    font = painter.font()
    font.setPixelSize(size // 2)
    font.setBold(True)
    painter.setFont(font)
    painter.drawText(pixmap.rect(), Qt.AlignmentFlag.AlignCenter, "✔")
    painter.end()
    return pixmap


def exec_app(app: QApplication, reminders_app: RemindersApp) -> int:
    """
    Start reminders_app and run the Qt event loop until quit.

    Ctrl+C quits cleanly; the idle timer gives Python a chance to run the
    SIGINT handler while Qt owns the main thread.
    """
    signal.signal(signal.SIGINT, lambda *_: reminders_app._quit())
    idle = QTimer()
    idle.timeout.connect(lambda: None)
    idle.start(500)

    reminders_app.run()
    return app.exec()


def main():
    """Main entry point."""
    app = QApplication(sys.argv)
    app.setQuitOnLastWindowClosed(False)  # The tray keeps the app alive
    app.setApplicationName("Reminders")

    reminders_app = RemindersApp()
    if not reminders_app.initialize():
        sys.exit(1)

    sys.exit(exec_app(app, reminders_app))


if __name__ == "__main__":
    main()
