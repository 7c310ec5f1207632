"""Render module - Rich text output for the tab bar and block overlays"""

from .tabbar import render_blocks, render_tab_bar, to_svg

__all__ = [
    "render_tab_bar",
    "render_blocks",
    "to_svg",
]
