"""
Renderer component for miro-export.

This sub-package owns the headless browser: launching it, opening pages
with cookies and a fixed viewport, and tearing everything down.
"""
from .playwright_manager import PlaywrightManager

__all__ = [
    "PlaywrightManager",
]
