"""
Rendering Context

Responsibilities:
- Resolves view names to files under the view directory
- Executes views with a merged variable scope and captures their output
- Composes views into layouts through named blocks
- Dispatches extension function calls by name

Owns: View execution, output buffering, block/layout composition, global variables
Never: Implements helper functions itself (see the extensions context)
"""

from viewkit.contexts.rendering.buffer import OutputBuffer
from viewkit.contexts.rendering.context import CONTENT_BLOCK, RenderContext
from viewkit.contexts.rendering.exceptions import (
    AssetNotFoundError,
    BlockError,
    DuplicateGlobalError,
    InvalidAssetDirectory,
    InvalidConfigError,
    InvalidViewDirectory,
    NestedBlockError,
    NoActiveBlockError,
    OutputBufferError,
    ReservedNameError,
    ReservedVariableError,
    UnclosedBlockError,
    UndefinedFunctionError,
    ViewError,
    ViewNotFound,
)
from viewkit.contexts.rendering.renderer import Renderer

__all__ = [
    # Renderer and per-chain state
    "Renderer",
    "RenderContext",
    "OutputBuffer",
    "CONTENT_BLOCK",
    # Errors
    "ViewError",
    "InvalidViewDirectory",
    "ViewNotFound",
    "BlockError",
    "NestedBlockError",
    "NoActiveBlockError",
    "UnclosedBlockError",
    "ReservedNameError",
    "ReservedVariableError",
    "DuplicateGlobalError",
    "UndefinedFunctionError",
    "InvalidAssetDirectory",
    "AssetNotFoundError",
    "OutputBufferError",
    "InvalidConfigError",
]
