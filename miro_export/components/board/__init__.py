"""
Board component for miro-export.

Talks to the Miro client runtime inside a loaded board page.
"""
from .filters import apply_filter, object_filter_matches
from .miro_board import MiroBoard

__all__ = [
    "MiroBoard",
    "apply_filter",
    "object_filter_matches",
]
