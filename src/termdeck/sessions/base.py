"""Session provider and terminal view interfaces

The workspace does not spawn processes or render text itself. It talks to:
- SessionProvider: creates, closes, writes to and resizes pseudo-terminal sessions
- TerminalView: the per-tab renderer holding the visible grid

Usage:
    provider = TmuxSessionProvider()
    session_id = await provider.create_session()
    await provider.write(session_id, b"ls\\n")
    view = provider.open_view(session_id)
    snapshot = await view.snapshot()
    await provider.close_session(session_id)
"""

from abc import ABC, abstractmethod

from ..blocks.scanner import GridSnapshot


class SessionError(Exception):
    """A session provider operation failed.

    Attributes:
        session_id: Session involved, None for creation
        operation: Operation name ("create", "close", "write", "resize")
    """

    def __init__(self, operation: str, message: str, session_id: str | None = None):
        super().__init__(f"{operation} failed: {message}")
        self.operation = operation
        self.session_id = session_id


class SessionProvider(ABC):
    """Pseudo-terminal session backend."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider name (e.g. "tmux")"""
        pass

    @abstractmethod
    async def create_session(self) -> str:
        """Start a new session.

        Returns:
            Session id

        Raises:
            SessionError: the session could not be started
        """
        pass

    @abstractmethod
    async def close_session(self, session_id: str) -> None:
        """Terminate a session.

        Raises:
            SessionError: the session could not be terminated
        """
        pass

    @abstractmethod
    async def write(self, session_id: str, data: bytes) -> None:
        """Send input bytes to a session."""
        pass

    @abstractmethod
    async def resize(self, session_id: str, rows: int, cols: int) -> None:
        """Resize a session's terminal."""
        pass

    def open_view(self, session_id: str) -> "TerminalView | None":
        """Return a view for the session, if the provider renders one itself."""
        return None


class TerminalView(ABC):
    """Renderer for one tab: consumes output bytes, exposes the visible grid."""

    @abstractmethod
    async def feed(self, data: bytes) -> None:
        """Render raw session output."""
        pass

    @abstractmethod
    async def resize(self, rows: int, cols: int) -> None:
        """Resize the rendered grid."""
        pass

    @abstractmethod
    async def snapshot(self) -> GridSnapshot:
        """Return the currently visible rows and row geometry."""
        pass

    def dispose(self) -> None:
        """Release renderer resources. Called when the tab closes."""
        return None
