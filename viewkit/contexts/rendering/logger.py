"""
Rendering context logger.

Provides logging interface for rendering context with automatic [view] prefix.
All rendering modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

from viewkit.utils.logger import setup_console_logger
from viewkit.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[view]"


def setup_rendering_console(verbose: bool = False) -> None:
    """Log to the console only: INFO and above, or DEBUG when verbose."""
    setup_console_logger("DEBUG" if verbose else "INFO")


def setup_rendering_logger(log_dir: Path, view_directory=None, verbose: bool = False) -> Path:
    """
    Setup logger for rendering context.

    Configures loguru with provenance tracking and rendering-specific context.

    Args:
        log_dir: Directory for this rendering session
        view_directory: View root recorded in the provenance header
        verbose: Echo DEBUG messages to the console as well

    Returns:
        Path to log file

    Example:
        from viewkit.contexts.rendering.logger import setup_rendering_logger, _log_info

        log_file = setup_rendering_logger(log_dir)
        _log_info("Rendering home...")
    """
    return _setup_logger(
        context_name="view",
        log_dir=log_dir,
        extra_provenance={"View directory": view_directory},
        console_level="DEBUG" if verbose else "INFO",
    )


# Wrapper functions with automatic [view] prefix


def _log_info(message: str) -> None:
    """Log info message with [view] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [view] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [view] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level rendering-specific logging helpers


def log_render_start(view: str, path: Path, depth: int) -> None:
    """Log start of a render pass."""
    _log_debug(f"Rendering {view} (depth {depth})")
    _log_debug(f"  Source: {path}")


def log_layout_requested(view: str, layout: str, content_length: int) -> None:
    """Log that a view asked to be wrapped in a layout."""
    _log_debug(f"{view} requested layout {layout} ({content_length} chars of content)")


def log_render_result(view: str, output: str, elapsed_time: float, passes: int) -> None:
    """
    Log the outcome of a completed render chain.

    Args:
        view: View name as requested by the caller
        output: Final rendered text
        elapsed_time: Time taken for all passes
        passes: Number of views executed (the view plus its layouts)
    """
    _log_debug(f"{view}: {len(output)} chars in {passes} pass(es) ({elapsed_time:.3f}s)")


def log_render_failure(view: str, error: BaseException, unwound: int) -> None:
    """Log a failed render pass and how many output frames were discarded."""
    _log_error(f"Rendering {view} failed: {type(error).__name__}: {error}")
    if unwound:
        _log_debug(f"  Discarded {unwound} open output frame(s)")


def log_extension_added(extension, functions) -> None:
    """Log extension registration with the functions it contributes."""
    names = ", ".join(sorted(functions)) or "(none)"
    _log_debug(f"Registered extension {type(extension).__name__}: {names}")
