"""
Custom exception classes for miro-export.
"""
from typing import List, Optional


class MiroExportError(Exception):
    """
    Base class for all custom exceptions in miro-export.

    Attributes:
        message (str): A human-readable description of the error.
    """
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"{self.__class__.__name__}: {self.message}"


# --- Configuration Related Exceptions ---
class ConfigurationError(MiroExportError):
    """
    Raised for errors related to application configuration.
    This could include issues with loading, accessing, or validating configuration data.
    """
    def __init__(self, message: str):
        super().__init__(message)


# --- Component Related Exceptions ---
class ComponentError(MiroExportError):
    """
    A general base class for errors originating from within a specific component
    (e.g., Renderer, Board, Storage).

    Attributes:
        component_name (str): Name of the component where the error originated.
    """
    def __init__(self, component_name: str, message: str):
        full_message = f"Error in component '{component_name}': {message}"
        super().__init__(full_message)
        self.component_name = component_name


class RendererError(ComponentError):
    """Raised for errors specific to the Renderer component (e.g., browser launch, page navigation)."""
    def __init__(self, message: str):
        super().__init__(component_name="Renderer", message=message)


class BoardError(ComponentError):
    """Raised for errors talking to the Miro client runtime inside the page."""
    def __init__(self, message: str):
        super().__init__(component_name="Board", message=message)


class BoardAuthenticationError(BoardError):
    """Raised when the board shows its sign-up prompt instead of loading."""
    DEFAULT_MESSAGE = (
        "Miro board requires authentication. Check board access settings to "
        "allow anonymous access or supply a token."
    )

    def __init__(self, message: str = DEFAULT_MESSAGE):
        super().__init__(message)


class BoardLoadTimeoutError(BoardError):
    """
    Raised when the Miro runtime did not become available in time.

    Attributes:
        timeout_ms (int): The configured bound, in milliseconds.
        elapsed_ms (float): How long the session actually waited.
    """
    def __init__(self, timeout_ms: int, elapsed_ms: Optional[float] = None):
        super().__init__(
            f"Miro board could not be loaded: application instance not available after "
            f"{timeout_ms} ms. Check your network connection, access token and board access."
        )
        self.timeout_ms = timeout_ms
        self.elapsed_ms = elapsed_ms if elapsed_ms is not None else float(timeout_ms)


class StorageError(ComponentError):
    """Raised for errors specific to the Storage component (e.g., writing export files)."""
    def __init__(self, message: str):
        super().__init__(component_name="Storage", message=message)


# --- Export Related Exceptions ---
class ExportError(MiroExportError):
    """
    Raised when an export request cannot be satisfied with the given input.
    """
    def __init__(self, message: str):
        super().__init__(message)


class FrameCountMismatchError(ExportError):
    """
    Raised when the frames found on the board do not line up with the requested names.

    Attributes:
        requested (List[str]): The frame names asked for.
        found (List[str]): Titles of the frames that matched.
    """
    def __init__(self, requested: List[str], found: List[str]):
        missing = len(requested) - len(found)
        if missing > 0:
            message = f"{missing} frame(s) could not be found on the board."
        else:
            message = (
                f"{-missing} more frame(s) than requested matched the given names; "
                f"frame titles must be unique on the board."
            )
        super().__init__(message)
        self.requested = list(requested)
        self.found = list(found)


class OutputTemplateError(ExportError):
    """Raised when a per-frame output file template is used without frame names."""
    def __init__(self, message: str = "Expected frame names to be given when the output file name format expects a frame name."):
        super().__init__(message)
