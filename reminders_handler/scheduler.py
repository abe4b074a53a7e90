"""Cron-based scheduler for tag reviews."""

import threading
import time
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Callable, Dict, List, Optional

from croniter import croniter


@dataclass
class ScheduledReview:
    """A tag review with its next run time."""
    tag: str
    cron_expression: str
    callback: Callable[[str], None]
    next_run: datetime
    snoozed_until: Optional[datetime] = None

    def advance(self, base: Optional[datetime] = None) -> datetime:
        """Move next_run to the first cron time after base."""
        cron = croniter(self.cron_expression, base or datetime.now())
        self.next_run = cron.get_next(datetime)
        return self.next_run

    def snooze(self, seconds: int, now: Optional[datetime] = None) -> datetime:
        """Postpone the review for the specified duration."""
        self.snoozed_until = (now or datetime.now()) + timedelta(seconds=seconds)
        return self.snoozed_until

    def due_at(self) -> datetime:
        """The time this review fires next, snooze included."""
        return self.snoozed_until or self.next_run


class ReviewScheduler:
    """
    Triggers tag reviews based on cron expressions.

    A background thread polls fire_due(); callbacks run on that thread, so
    GUI callers must hand them over to their own event loop.
    """

    CHECK_INTERVAL = 1.0

    def __init__(self):
        self.reviews: Dict[str, ScheduledReview] = {}
        self._running = False
        self._thread: Optional[threading.Thread] = None
        self._lock = threading.Lock()

    def add_review(
        self,
        tag: str,
        cron_expression: str,
        callback: Callable[[str], None]
    ) -> None:
        """
        Schedule a review of the reminders under a tag.

        Args:
            tag: Tag to review, compared case-insensitively
            cron_expression: Cron expression for scheduling
            callback: Called with the lowercased tag when the review is due
        """
        if not croniter.is_valid(cron_expression):
            raise ValueError(f"Invalid cron expression: {cron_expression}")

        review = ScheduledReview(
            tag=tag.lower(),
            cron_expression=cron_expression,
            callback=callback,
            next_run=datetime.now()
        )
        review.advance()

        with self._lock:
            self.reviews[review.tag] = review

        print(f"Scheduled review of '{review.tag}' - next run: {review.next_run}")

    def remove_review(self, tag: str) -> None:
        with self._lock:
            self.reviews.pop(tag.lower(), None)

    def snooze_review(self, tag: str, seconds: int) -> None:
        """Snooze a review for the specified duration."""
        with self._lock:
            review = self.reviews.get(tag.lower())
            if review:
                snoozed_until = review.snooze(seconds)
                print(f"Snoozed review of '{review.tag}' until {snoozed_until}")

    def acknowledge_review(self, tag: str) -> None:
        """Mark a review as done and schedule the next occurrence."""
        with self._lock:
            review = self.reviews.get(tag.lower())
            if review:
                review.snoozed_until = None
                review.advance()
                print(f"Reviewed '{review.tag}' - next run: {review.next_run}")

    def fire_due(self, now: Optional[datetime] = None) -> List[str]:
        """
        Run the callback of every review that is due at now.

        Returns:
            The tags that fired
        """
        now = now or datetime.now()
        due = []
        with self._lock:
            for tag, review in self.reviews.items():
                if now >= review.due_at():
                    review.snoozed_until = None
                    review.advance(now)
                    due.append((tag, review.callback))

        for tag, callback in due:
            try:
                callback(tag)
            except Exception as e:
                print(f"Error in review callback for '{tag}': {e}")
        return [tag for tag, _ in due]

    def start(self) -> None:
        """Start the scheduler background thread."""
        if self._running:
            return

        self._running = True
        self._thread = threading.Thread(target=self._run_loop, daemon=True)
        self._thread.start()
        print("Scheduler started")

    def stop(self) -> None:
        self._running = False
        if self._thread:
            self._thread.join(timeout=2.0)
        print("Scheduler stopped")

    def _run_loop(self) -> None:
        while self._running:
            self.fire_due()
            time.sleep(self.CHECK_INTERVAL)

    def get_status(self) -> Dict[str, dict]:
        """Get the status of all scheduled reviews."""
        status = {}
        with self._lock:
            for tag, review in self.reviews.items():
                status[tag] = {
                    "next_run": review.next_run.isoformat(),
                    "snoozed_until": review.snoozed_until.isoformat() if review.snoozed_until else None,
                    "effective_next": review.due_at().isoformat()
                }
        return status
