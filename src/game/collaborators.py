from abc import ABC, abstractmethod
from enum import Enum
from typing import Callable, List, Optional, Tuple

from loguru import logger

from .board import Board


class NotificationEvent(Enum):
    """User-facing signals raised by the controller."""
    CHECK = "check"
    WIN = "win"


class Renderer(ABC):
    """Draws the board. Called after setup, every accepted move and every reset."""

    @abstractmethod
    def render(self, board: Board):
        """
        Render the board.

        Args:
            board: Current board state
        """
        pass


class Notifier(ABC):
    """Channel for check warnings and win announcements."""

    @abstractmethod
    def notify(self, event: NotificationEvent, message: str):
        """
        Deliver a notification to the user.

        Args:
            event: Kind of notification
            message: Text to show, e.g. "White is in check!"
        """
        pass


class NullRenderer(Renderer):
    """Renderer that only counts how often it was asked to draw."""

    def __init__(self):
        self.render_count = 0

    def render(self, board: Board):
        self.render_count += 1


class CallbackRenderer(Renderer):
    """Renderer that hands the board to a callable (e.g. print a text board)."""

    def __init__(self, callback: Callable[[Board], None]):
        self.callback = callback

    def render(self, board: Board):
        self.callback(board)


class EventLog(Notifier):
    """
    Notifier that keeps notifications in memory until drained.
    The web layer returns drained events to the browser, which alerts them.
    """

    def __init__(self):
        self.events: List[Tuple[NotificationEvent, str]] = []

    def notify(self, event: NotificationEvent, message: str):
        self.events.append((event, message))

    def drain(self) -> List[Tuple[NotificationEvent, str]]:
        events, self.events = self.events, []
        return events

    def last(self) -> Optional[Tuple[NotificationEvent, str]]:
        return self.events[-1] if self.events else None


class LoggingNotifier(Notifier):
    """Notifier that writes notifications to the log and forwards them."""

    def __init__(self, forward: Optional[Notifier] = None):
        self.forward = forward

    def notify(self, event: NotificationEvent, message: str):
        logger.info(f"[{event.value}] {message}")
        if self.forward is not None:
            self.forward.notify(event, message)
