"""
Components sub-package for miro-export.

This package contains the building blocks of an export: the browser
renderer, the board session talking to the Miro runtime, and file storage.
"""

from .renderer.playwright_manager import PlaywrightManager
from .board.miro_board import MiroBoard
from .storage.file_storage import FileStorage, FilePathError, FileExistsError

__all__ = [
    "PlaywrightManager",
    "MiroBoard",
    "FileStorage",
    "FilePathError",
    "FileExistsError",
]
