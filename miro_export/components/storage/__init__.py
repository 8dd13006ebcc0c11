"""
Storage component for miro-export.

Writes export output (SVG markup or JSON) to files.
"""
from .file_storage import (
    FRAME_NAME_PLACEHOLDER,
    FileStorage,
    FilePathError,
    FileExistsError,
    is_frame_template,
    resolve_output_path,
)

__all__ = [
    "FRAME_NAME_PLACEHOLDER",
    "FileStorage",
    "FilePathError",
    "FileExistsError",
    "is_frame_template",
    "resolve_output_path",
]
