"""
File system storage for export output.

This module provides the `FileStorage` class, which writes SVG markup or JSON
exports to disk and expands the `{frameName}` placeholder used to split an
export into one file per frame.
"""
import os
from typing import Optional, TYPE_CHECKING

from miro_export.core.exceptions import StorageError
from miro_export.core.logger import get_logger

if TYPE_CHECKING:
    from miro_export.core.config import ConfigurationManager

logger = get_logger(__name__)

FRAME_NAME_PLACEHOLDER = "{frameName}"


class FilePathError(StorageError):
    """Raised for errors related to file paths, such as an empty filename."""
    def __init__(self, message: str):
        super().__init__(message=message)


class FileExistsError(FilePathError):
    """
    Raised when attempting to write a file that already exists, and overwriting is disabled.

    Attributes:
        path (str): The full path to the file that already exists.
    """
    def __init__(self, path: str):
        super().__init__(f"File already exists at path: {path}. Enable overwrite to replace it.")
        self.path = path


def is_frame_template(path: Optional[str]) -> bool:
    """Whether `path` asks for one output file per frame."""
    return bool(path) and FRAME_NAME_PLACEHOLDER in path


def resolve_output_path(template: str, frame_name: str) -> str:
    """Substitutes every `{frameName}` in `template`."""
    return template.replace(FRAME_NAME_PLACEHOLDER, frame_name)


class FileStorage:
    """
    Writes export output to the local file system.
    """
    DEFAULT_ENCODING = "utf-8"

    def __init__(self, config: Optional['ConfigurationManager'] = None):
        """
        Initializes the FileStorage.

        Args:
            config (Optional[ConfigurationManager]): Source of the
                `components.file_storage.*` settings. If None, defaults are used.
        """
        if config:
            self.encoding = config.get('components.file_storage.encoding', self.DEFAULT_ENCODING)
            self.overwrite = bool(config.get('components.file_storage.overwrite', True))
        else:
            self.encoding = self.DEFAULT_ENCODING
            self.overwrite = True

    def write_text(self, content: str, path: str) -> str:
        """
        Writes `content` to `path`, creating missing parent directories.

        Args:
            content (str): SVG markup or serialized JSON.
            path (str): Destination file.

        Returns:
            str: The absolute path written.

        Raises:
            FilePathError: If `path` is empty.
            FileExistsError: If the file exists and overwriting is disabled.
            StorageError: For other IO/OS errors.
        """
        if not path or not path.strip():
            raise FilePathError("Output path cannot be empty.")

        full_path = os.path.abspath(path)
        if not self.overwrite and os.path.exists(full_path):
            logger.warning(f"File already exists at {full_path} and overwrite is disabled.")
            raise FileExistsError(path=full_path)

        try:
            directory = os.path.dirname(full_path)
            if directory:
                os.makedirs(directory, exist_ok=True)
            with open(full_path, 'w', encoding=self.encoding) as f:
                f.write(content)
        except OSError as e:
            logger.error(f"Failed to write output to '{full_path}': {e}")
            raise StorageError(message=f"Failed to write output to '{full_path}': {e}")

        logger.info(f"Wrote {len(content)} characters to {full_path}")
        return full_path
