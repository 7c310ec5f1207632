"""Pytest configuration"""

import itertools

import pytest

from termdeck.blocks.scanner import GridSnapshot
from termdeck.core.ids import IdGenerator
from termdeck.sessions.base import SessionError, SessionProvider, TerminalView
from termdeck.telemetry import metrics
from termdeck.workspace import GroupRegistry, TabRegistry, Workspace


class FakeView(TerminalView):
    """In-memory view: stores fed output and serves a fixed grid."""

    def __init__(self, rows: list[str] | None = None, row_height: float = 10.0):
        self.rows = rows or []
        self.row_height = row_height
        self.fed: list[bytes] = []
        self.size: tuple[int, int] | None = None
        self.disposed = False

    async def feed(self, data: bytes) -> None:
        self.fed.append(data)

    async def resize(self, rows: int, cols: int) -> None:
        self.size = (rows, cols)

    async def snapshot(self) -> GridSnapshot:
        return GridSnapshot(rows=list(self.rows), row_height=self.row_height)

    def dispose(self) -> None:
        self.disposed = True


class FakeProvider(SessionProvider):
    """Session provider recording calls, with switchable failures."""

    def __init__(self):
        self._serial = itertools.count(1)
        self.sessions: set[str] = set()
        self.writes: list[tuple[str, bytes]] = []
        self.resizes: list[tuple[str, int, int]] = []
        self.closes: list[str] = []
        self.views: dict[str, FakeView] = {}
        self.fail_create = False
        self.fail_close = False
        self.fail_write = False
        self.fail_open_view = False

    @property
    def name(self) -> str:
        return "fake"

    async def create_session(self) -> str:
        if self.fail_create:
            raise SessionError("create", "no pty available")
        session_id = f"s{next(self._serial)}"
        self.sessions.add(session_id)
        return session_id

    async def close_session(self, session_id: str) -> None:
        self.closes.append(session_id)
        if self.fail_close:
            raise SessionError("close", "kill failed", session_id)
        self.sessions.discard(session_id)

    async def write(self, session_id: str, data: bytes) -> None:
        if self.fail_write:
            raise SessionError("write", "broken pipe", session_id)
        self.writes.append((session_id, data))

    async def resize(self, session_id: str, rows: int, cols: int) -> None:
        self.resizes.append((session_id, rows, cols))

    def open_view(self, session_id: str) -> FakeView:
        if self.fail_open_view:
            raise SessionError("open_view", "renderer init failed", session_id)
        view = FakeView()
        self.views[session_id] = view
        return view


def make_clock(start: int = 1000):
    """Deterministic millisecond clock advancing by 1 per call."""
    counter = itertools.count(start)
    return lambda: next(counter)


def assert_consistent(tabs: TabRegistry, groups: GroupRegistry) -> None:
    """Check the cross-registry invariants."""
    for tab in tabs.tabs:
        assert tab.is_pinned == (tab.pinned_at is not None), tab
        if tab.group_id is not None:
            group = groups.get(tab.group_id)
            assert group is not None, f"{tab.id} points at missing group"
            assert tab.id in group.tab_ids
    for group in groups.groups:
        assert len(group.tab_ids) >= 2, group
        assert group.focused_tab_id in group.tab_ids, group
        assert group.is_pinned == (group.pinned_at is not None), group
        for tab_id in group.tab_ids:
            tab = tabs.get(tab_id)
            assert tab is not None
            assert tab.group_id == group.id


@pytest.fixture(autouse=True)
def reset_metrics():
    """Reset metrics around each test"""
    metrics.reset()
    yield
    metrics.reset()


@pytest.fixture
def ids():
    return IdGenerator(clock=make_clock())


@pytest.fixture
def tabs(ids):
    return TabRegistry(ids)


@pytest.fixture
def groups(tabs):
    return GroupRegistry(tabs)


@pytest.fixture
def make_tabs(tabs):
    """Add n tabs, returning their ids in creation order."""

    def factory(n: int) -> list[str]:
        created = []
        for _ in range(n):
            tab = tabs.add(tabs.new_tab(session_id=f"session-{len(tabs) + 1}"))
            created.append(tab.id)
        return created

    return factory


@pytest.fixture
def provider():
    return FakeProvider()


@pytest.fixture
def workspace(provider, ids):
    return Workspace(provider, ids=ids)


@pytest.fixture
def check_consistent(tabs, groups):
    """Callable asserting the invariants of the tabs/groups fixtures."""
    return lambda: assert_consistent(tabs, groups)


@pytest.fixture
def fake_view():
    """Factory for FakeView instances."""
    return FakeView


@pytest.fixture
def workspace_consistent(workspace):
    """Callable asserting the invariants of the workspace fixture."""
    return lambda: assert_consistent(workspace.tabs, workspace.groups)
