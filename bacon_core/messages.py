"""Short messages shown to the user on the status line."""

from __future__ import annotations

import time
from dataclasses import dataclass

SHORT_MESSAGE_DURATION = 5.0


@dataclass
class Message:
    """A message to be displayed to the user, one line max."""

    markdown: str
    display_start: float | None = None
    """Monotonic time when the message was first displayed."""
    display_duration: float = SHORT_MESSAGE_DURATION
    """Minimal duration, in seconds, to display the message."""

    @classmethod
    def short(cls, markdown: str) -> "Message":
        """Build a short message, typically answering a user action."""
        return cls(markdown=str(markdown))

    def is_expired(self, now: float | None = None) -> bool:
        """Tell whether the message has been displayed long enough."""
        if self.display_start is None:
            return False
        if now is None:
            now = time.monotonic()
        return now - self.display_start > self.display_duration