"""Tmux-backed session provider.

Each tab gets its own detached tmux session. tmux renders the session output
itself, so the view reads the visible grid back with capture-pane.
"""

import asyncio
import logging

from .. import config
from ..blocks.scanner import GridSnapshot
from .base import SessionError, SessionProvider, TerminalView

logger = logging.getLogger(__name__)


class TmuxClient:
    """Thin async wrapper around the tmux command line."""

    def __init__(self, socket_path: str | None = None):
        """Initialize TmuxClient.

        Args:
            socket_path: Optional tmux socket path. If None, uses default socket.
        """
        self._socket_path = socket_path

    async def run(self, *args: str) -> str | None:
        """Execute a tmux command.

        Args:
            *args: Command arguments (e.g., "new-session", "-d")

        Returns:
            Command stdout on success, None on failure.
        """
        cmd = ["tmux"]
        if self._socket_path:
            cmd.extend(["-S", self._socket_path])
        cmd.extend(args)

        try:
            proc = await asyncio.create_subprocess_exec(
                *cmd,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
            stdout, stderr = await proc.communicate()

            if proc.returncode != 0:
                logger.warning(f"tmux command failed: {' '.join(cmd)}: {stderr.decode()}")
                return None

            return stdout.decode()

        except Exception as e:
            logger.error(f"tmux subprocess error: {e}")
            return None

    async def capture_visible(self, target: str) -> list[str] | None:
        """Capture the visible rows of a session's active pane.

        Returns:
            One string per screen row, or None on failure.
        """
        output = await self.run("capture-pane", "-t", target, "-p")
        if output is None:
            return None
        rows = output.split("\n")
        # capture-pane terminates the last row with a newline
        if rows and rows[-1] == "":
            rows.pop()
        return rows


class TmuxView(TerminalView):
    """View over a tmux session's visible pane.

    Row height is in character cells unless a pixel height is supplied.
    """

    def __init__(self, client: TmuxClient, session_id: str, row_height: float = config.TMUX_ROW_HEIGHT):
        self._client = client
        self._session_id = session_id
        self._row_height = row_height

    async def feed(self, data: bytes) -> None:
        # tmux renders session output itself
        return None

    async def resize(self, rows: int, cols: int) -> None:
        # The window is resized through TmuxSessionProvider.resize
        return None

    async def snapshot(self) -> GridSnapshot:
        rows = await self._client.capture_visible(self._session_id)
        return GridSnapshot(rows=list(rows or []), row_height=self._row_height)


class TmuxSessionProvider(SessionProvider):
    """Creates one detached tmux session per tab."""

    def __init__(
        self,
        client: TmuxClient | None = None,
        rows: int = config.TMUX_DEFAULT_ROWS,
        cols: int = config.TMUX_DEFAULT_COLS,
    ):
        self._client = client or TmuxClient(config.TMUX_SOCKET_PATH)
        self._rows = rows
        self._cols = cols
        self._created = 0

    @property
    def name(self) -> str:
        return "tmux"

    async def create_session(self) -> str:
        self._created += 1
        session_name = f"{config.TMUX_SESSION_PREFIX}-{self._created}"
        output = await self._client.run(
            "new-session", "-d",
            "-s", session_name,
            "-x", str(self._cols),
            "-y", str(self._rows),
            "-P", "-F", "#{session_id}",
        )
        session_id = output.strip() if output else ""
        if not session_id:
            raise SessionError("create", f"tmux new-session {session_name} returned no id")

        logger.debug(f"[Tmux] Created session {session_id} ({session_name})")
        return session_id

    async def close_session(self, session_id: str) -> None:
        if await self._client.run("kill-session", "-t", session_id) is None:
            raise SessionError("close", "tmux kill-session failed", session_id)

    async def write(self, session_id: str, data: bytes) -> None:
        try:
            text = data.decode("utf-8")
        except UnicodeDecodeError as e:
            # send-keys takes text; undecodable bytes become U+FFFD
            logger.warning(f"[Tmux] Non-UTF-8 input for {session_id}, replacing bytes: {e}")
            text = data.decode("utf-8", errors="replace")
        # -l sends the text literally instead of parsing key names
        if await self._client.run("send-keys", "-t", session_id, "-l", text) is None:
            raise SessionError("write", "tmux send-keys failed", session_id)

    async def resize(self, session_id: str, rows: int, cols: int) -> None:
        result = await self._client.run(
            "resize-window", "-t", session_id, "-x", str(cols), "-y", str(rows)
        )
        if result is None:
            raise SessionError("resize", "tmux resize-window failed", session_id)

    def open_view(self, session_id: str) -> TmuxView:
        return TmuxView(self._client, session_id)
