"""Custom exceptions for the rendering context with view and path references."""

from pathlib import Path
from typing import Optional


class ViewError(RuntimeError):
    """Base class for every error raised by the renderer and its extensions."""


class InvalidViewDirectory(ViewError):
    """
    Exception raised when the view root is missing or not a directory.

    Attributes:
        directory: The rejected directory (None when no directory was configured)
    """

    def __init__(self, message: str, directory: Optional[Path] = None):
        self.message = message
        self.directory = directory
        super().__init__(message)


class ViewNotFound(ViewError):
    """
    Exception raised when a view or layout file cannot be resolved.

    Attributes:
        message: Error description
        view: The view name as requested by the caller
        path: The fully resolved path that was checked
    """

    def __init__(self, message: str, view: Optional[str] = None, path: Optional[Path] = None):
        self.message = message
        self.view = view
        self.path = path

        parts = [message]
        if view is not None:
            parts.append(f"View: {view}")

        super().__init__("\n".join(parts))


class BlockError(ViewError):
    """Base class for block protocol violations."""


class NestedBlockError(BlockError):
    """Raised when a block capture is started while another one is active."""


class NoActiveBlockError(BlockError):
    """Raised when a block capture is ended without having been started."""


class UnclosedBlockError(BlockError):
    """Raised when a view finishes executing with a block capture still open."""

    def __init__(self, message: str, block_name: Optional[str] = None):
        self.block_name = block_name
        super().__init__(message)


class ReservedNameError(BlockError, ValueError):
    """Raised when a view tries to write the reserved "content" block directly."""


class ReservedVariableError(ViewError, ValueError):
    """
    Raised when a scope variable would shadow a name injected into every view.

    Attributes:
        names: The colliding variable names
    """

    def __init__(self, message: str, names: Optional[list] = None):
        self.names = names or []
        super().__init__(message)


class DuplicateGlobalError(ViewError):
    """Raised when a global variable is added twice."""

    def __init__(self, message: str, name: Optional[str] = None):
        self.name = name
        super().__init__(message)


class UndefinedFunctionError(ViewError, LookupError):
    """Raised when no registered extension declares the requested function."""

    def __init__(self, message: str, name: Optional[str] = None):
        self.name = name
        super().__init__(message)


class InvalidAssetDirectory(ViewError):
    """Raised when an asset extension is configured with a missing base path."""


class AssetNotFoundError(ViewError):
    """
    Raised when a referenced asset file does not exist.

    Attributes:
        path: The asset path that was checked
    """

    def __init__(self, message: str, path: Optional[Path] = None):
        self.message = message
        self.path = path
        super().__init__(message)


class OutputBufferError(ViewError):
    """Raised when the output buffer is written to or closed with no open frame."""


class InvalidConfigError(ViewError, ValueError):
    """Raised when a renderer config file has an unexpected structure."""
