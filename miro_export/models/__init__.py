"""
Models sub-package for miro-export.

This package contains the record types describing Miro board objects as
returned by the in-page client runtime, plus the query model used to ask
the runtime for them.
"""

from .board_objects import (
    BOARD_OBJECT_TYPES,
    BOARD_OBJECT_MODELS,
    BoardObject,
    BoardQuery,
    CardBoardObject,
    FrameBoardObject,
    GroupBoardObject,
    ImageBoardObject,
    ShapeBoardObject,
    StickyNoteBoardObject,
    TableBoardObject,
    TextBoardObject,
    parse_board_object,
    parse_board_objects,
)

__all__ = [
    "BOARD_OBJECT_TYPES",
    "BOARD_OBJECT_MODELS",
    "BoardObject",
    "BoardQuery",
    "CardBoardObject",
    "FrameBoardObject",
    "GroupBoardObject",
    "ImageBoardObject",
    "ShapeBoardObject",
    "StickyNoteBoardObject",
    "TableBoardObject",
    "TextBoardObject",
    "parse_board_object",
    "parse_board_objects",
]
