"""Session backends"""

from .base import SessionError, SessionProvider, TerminalView
from .tmux import TmuxClient, TmuxSessionProvider, TmuxView

__all__ = [
    "SessionError",
    "SessionProvider",
    "TerminalView",
    "TmuxClient",
    "TmuxSessionProvider",
    "TmuxView",
]
