from __future__ import annotations

import logging

from domain.value_objects import Notice, NotifyOptions

logger = logging.getLogger(__name__)


class NotificationCenter:
    """In-memory alert list; an alert with a known key replaces the earlier one."""

    def __init__(self) -> None:
        self.alerts: list[Notice] = []

    def notify(self, message: str, options: NotifyOptions) -> None:
        level = logging.ERROR if options.severity == "error" else logging.INFO
        logger.log(level, "notify[%s]: %s", options.key or "-", message)
        if options.key:
            self.alerts = [a for a in self.alerts if a.options.key != options.key]
        self.alerts.append(Notice(message=message, options=options))

    def clear(self) -> None:
        self.alerts.clear()
