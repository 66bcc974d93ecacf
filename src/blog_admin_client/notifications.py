"""Ephemeral success/error notifications with per-item expiry timers."""

from __future__ import annotations

import asyncio
import itertools

import structlog

from blog_admin_client import metrics
from blog_admin_client.models import Notification, NotificationKind

log = structlog.get_logger()


class NotificationQueue:
    """Insertion-ordered notifications, each removed by its own timer.

    Must be used from within a running event loop.
    """

    def __init__(self, success_ttl: float = 3.0, error_ttl: float = 5.0) -> None:
        self._ttl: dict[NotificationKind, float] = {"success": success_ttl, "error": error_ttl}
        self._items: dict[int, Notification] = {}
        self._timers: dict[int, asyncio.TimerHandle] = {}
        self._ids = itertools.count(1)

    @property
    def items(self) -> list[Notification]:
        return list(self._items.values())

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, notification_id: object) -> bool:
        return notification_id in self._items

    def push(self, kind: NotificationKind, title: str, description: str | None = None) -> int:
        """Enqueue a notification and schedule its removal. Returns its id."""
        loop = asyncio.get_running_loop()
        notification = Notification(
            id=next(self._ids), kind=kind, title=title, description=description
        )
        self._items[notification.id] = notification
        self._timers[notification.id] = loop.call_later(
            self._ttl[kind], self._expire, notification.id
        )
        metrics.notifications_total.add(1, {"kind": kind})
        log.debug("notification_pushed", id=notification.id, kind=kind, title=title)
        return notification.id

    def success(self, title: str, description: str | None = None) -> int:
        return self.push("success", title, description)

    def error(self, title: str, description: str | None = None) -> int:
        return self.push("error", title, description)

    def dismiss(self, notification_id: int) -> bool:
        """Remove a notification now. Unknown or expired ids are ignored."""
        timer = self._timers.pop(notification_id, None)
        if timer is not None:
            timer.cancel()
        return self._items.pop(notification_id, None) is not None

    def clear(self) -> None:
        """Drop everything and cancel pending timers (logout / shutdown)."""
        for timer in self._timers.values():
            timer.cancel()
        self._timers.clear()
        self._items.clear()

    def _expire(self, notification_id: int) -> None:
        self._timers.pop(notification_id, None)
        self._items.pop(notification_id, None)
