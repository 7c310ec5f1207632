"""Telemetry - logging and metrics entry point

Log format: [Component:tab[:8]] msg
Metric examples: tab.created, group.dissolved, blocks.count
"""

import logging

from .config import LOG_LEVEL
from .core.ids import short_id

_LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def get_logger(name: str) -> logging.Logger:
    """Get a module logger

    Args:
        name: Module name (usually __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)


def setup_logging(level: str | None = None) -> None:
    """Configure root logging for an embedding application."""
    logging.basicConfig(level=(level or LOG_LEVEL).upper(), format=_LOG_FORMAT)


def format_tab_log(component: str, item_id: str | None, msg: str) -> str:
    """Format a log message tagged with a tab or group id

    Args:
        component: Component name (e.g. "Tabs", "Groups")
        item_id: Tab or group id
        msg: Log message

    Returns:
        Message of the form [component:id[-8:]] msg
    """
    short = short_id(item_id) if item_id else "none"
    return f"[{component}:{short}] {msg}"


class Metrics:
    """In-memory counters and gauges."""

    def __init__(self):
        self._counters: dict[str, int] = {}
        self._gauges: dict[str, float] = {}

    def inc(self, name: str, labels: dict[str, str] | None = None, value: int = 1) -> None:
        """Increment a counter

        Args:
            name: Metric name (e.g. "tab.created")
            labels: Optional labels
            value: Increment, default 1
        """
        key = self._make_key(name, labels)
        self._counters[key] = self._counters.get(key, 0) + value

    def gauge(self, name: str, value: float, labels: dict[str, str] | None = None) -> None:
        """Set a gauge value"""
        key = self._make_key(name, labels)
        self._gauges[key] = value

    def get_counter(self, name: str, labels: dict[str, str] | None = None) -> int:
        return self._counters.get(self._make_key(name, labels), 0)

    def get_gauge(self, name: str, labels: dict[str, str] | None = None) -> float:
        return self._gauges.get(self._make_key(name, labels), 0.0)

    def reset(self) -> None:
        """Reset all metrics (tests)"""
        self._counters.clear()
        self._gauges.clear()

    def _make_key(self, name: str, labels: dict[str, str] | None) -> str:
        if not labels:
            return name
        label_str = ",".join(f"{k}={v}" for k, v in sorted(labels.items()))
        return f"{name}{{{label_str}}}"


# Global metrics instance
metrics = Metrics()
