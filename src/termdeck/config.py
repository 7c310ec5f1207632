"""termdeck configuration

Settings are grouped by concern:
- Tab defaults: titles for new tabs
- Group limits: member cap for tiled groups
- Block scanner: id prefix, selection export format
- Tmux: default shell size and capture behaviour
- Logging
"""

import os

# === Tab defaults ===
DEFAULT_TAB_TITLE_PREFIX = "Shell"  # New tabs are titled "Shell <n>"

# === Group limits ===
MIN_GROUP_SIZE = 2  # A group below this size is dissolved
MAX_GROUP_SIZE = 9  # 3x3 grid; add_to_group refuses beyond this

# === Block scanner ===
BLOCK_ID_PREFIX = "blk"  # Block ids look like "blk-<viewport>-<start_row>"
SELECTION_HEADER = "### Block {index}"  # Header for each block in a copied selection
SELECTION_SEPARATOR = "\n\n"

# === Tmux session provider ===
TMUX_SOCKET_PATH = os.environ.get("TERMDECK_TMUX_SOCKET") or None
TMUX_SESSION_PREFIX = "termdeck"
TMUX_DEFAULT_COLS = 80
TMUX_DEFAULT_ROWS = 24
TMUX_ROW_HEIGHT = 1.0  # Character cells; a pixel renderer overrides this

# === Tab bar rendering ===
PIN_MARKER = "📌"
GROUP_MEMBER_SEPARATOR = " | "
TAB_SELECTED_MARKER = "●"  # Tab marked for combining

# === Logging ===
LOG_LEVEL = os.environ.get("TERMDECK_LOG_LEVEL", "INFO")
