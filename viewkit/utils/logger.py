"""
Generic logger setup utilities.

Provides reusable loguru configuration with provenance tracking.
Context-specific wrappers should be defined in contexts/{context}/logger.py.
"""

import sys
from pathlib import Path

from dotenv import load_dotenv
from loguru import logger

load_dotenv()

# Default level colors for console output
LEVEL_COLORS = {
    "WARNING": "<yellow>",
    "ERROR": "<red>",
    "CRITICAL": "<bold><red>",
}

CONSOLE_FORMAT = (
    "{time:YYYY-MM-DD HH:mm:ss} | <level>{level: <7}</level> | <level>{message}</level>"
)


def setup_logger(
    context_name: str,
    log_dir: Path,
    extra_provenance: dict = None,
    level_colors: dict = None,
    console_level: str = "INFO",
) -> Path:
    """
    Configure loguru for a context with provenance tracking.

    Sets up dual output (file + console) and logs execution provenance
    (script, command, working directory, Python version, etc.).

    Args:
        context_name: Context identifier (e.g., "view", "extension")
        log_dir: Directory for this logging session
        extra_provenance: Additional key-value pairs for provenance header
        level_colors: Override default level colors (e.g., {"INFO": "<cyan>"})
        console_level: Minimum level echoed to the console (file sink always gets DEBUG)

    Returns:
        Path to log file

    Example:
        from viewkit.utils.logger import setup_logger

        log_file = setup_logger(
            context_name="view",
            log_dir=Path("outs/logs/render_20260101_120000"),
            extra_provenance={"View directory": "templates"}
        )
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(exist_ok=True, parents=True)
    log_file = log_dir / f"{context_name}.log"

    # Remove default logger
    logger.remove()

    colors = {**LEVEL_COLORS, **(level_colors or {})}
    for level_name, color in colors.items():
        logger.level(level_name, color=color)

    # File handler captures everything
    logger.add(
        log_file, format="{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {message}", level="DEBUG"
    )

    add_console_sink(console_level)

    log_provenance(extra_provenance)

    return log_file


def log_provenance(extra_context: dict = None) -> None:
    """
    Log execution provenance to current logger.

    Logs standard context (script, command, working directory, Python version)
    plus any additional context provided.

    Args:
        extra_context: Additional key-value pairs to log
    """
    logger.info("=" * 80)
    logger.info(f"Script: {sys.argv[0]}")
    logger.info(f"Command: {' '.join(sys.argv)}")
    logger.info(f"Working directory: {Path.cwd()}")
    logger.info(f"Python: {sys.version.split()[0]}")

    if extra_context:
        for key, value in extra_context.items():
            logger.info(f"{key}: {value}")

    logger.info("=" * 80)


def add_console_sink(level: str = "INFO") -> None:
    """Echo messages at or above ``level`` to stderr so stdout stays clean."""
    logger.add(sys.stderr, format=CONSOLE_FORMAT, level=level, colorize=True)


def setup_console_logger(level: str = "INFO") -> None:
    """
    Replace loguru's default sink with a stderr sink at ``level``.

    Used when no session log directory is wanted.
    """
    logger.remove()
    add_console_sink(level)
