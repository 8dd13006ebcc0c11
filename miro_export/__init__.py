"""
miro-export: export Miro boards to SVG or JSON through a headless browser.
"""
from .components.board.miro_board import MiroBoard
from .core.manager import ExportManager, ExportResult
from .models.board_objects import BoardObject, BoardQuery

__version__ = "0.1.0"
__all__ = ["MiroBoard", "ExportManager", "ExportResult", "BoardObject", "BoardQuery"]
