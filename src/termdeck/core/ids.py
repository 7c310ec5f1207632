"""Workspace ID utilities

Tabs and groups use prefixed ids so the two namespaces never collide:
- tab-<ms timestamp>-<counter>    - a tab
- group-<ms timestamp>-<counter>  - a tab group

The counter is owned by an IdGenerator instance; tests inject one with a
fixed clock.
"""

import itertools
import time
from enum import Enum
from typing import Callable


class IdKind(Enum):
    """Kind of workspace item an id refers to."""

    TAB = "tab"
    GROUP = "group"


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


class IdGenerator:
    """Process-scoped id and logical clock source.

    Ids combine a millisecond timestamp with a per-generator counter, which is
    enough for uniqueness over the process lifetime. now() is strictly
    increasing even when the wall clock stalls or steps back.

    Attributes:
        clock: Millisecond clock, injectable for tests
    """

    def __init__(self, clock: Callable[[], int] | None = None):
        self._clock = clock or _now_ms
        self._serial = itertools.count(1)
        self._tab_count = 0
        self._last_tick = 0

    def now(self) -> int:
        """Return the next logical timestamp (monotonic, unique per call)."""
        tick = self._clock()
        if tick <= self._last_tick:
            tick = self._last_tick + 1
        self._last_tick = tick
        return tick

    def next_tab_id(self) -> str:
        """Allocate a new tab id."""
        self._tab_count += 1
        return make_id(IdKind.TAB, self._clock(), next(self._serial))

    def next_group_id(self) -> str:
        """Allocate a new group id."""
        return make_id(IdKind.GROUP, self._clock(), next(self._serial))

    @property
    def tab_count(self) -> int:
        """Number of tab ids handed out so far (used for default titles)."""
        return self._tab_count


def make_id(kind: IdKind | str, timestamp: int, serial: int) -> str:
    """Create a workspace id.

    Args:
        kind: IdKind or its string value ("tab", "group")
        timestamp: Millisecond timestamp
        serial: Generator counter value

    Returns:
        Id like "tab-1700000000000-3"
    """
    if isinstance(kind, IdKind):
        kind = kind.value
    return f"{kind}-{timestamp}-{serial}"


def is_group_id(item_id: str) -> bool:
    """Check if an id names a group."""
    return item_id.startswith(f"{IdKind.GROUP.value}-")


def short_id(item_id: str, length: int = 8) -> str:
    """Get a short display version of an id for logging.

    Keeps the tail, which carries the distinguishing counter.

    Args:
        item_id: The id to shorten
        length: Maximum length (default 8)
    """
    return item_id[-length:]
