"""
viewkit - server-side views with layouts, blocks and extensions

A small view renderer. Views are plain Python source files executed with a
variable scope; their output is captured and can be wrapped in layouts via named
blocks.

Architecture:
- Rendering Context: view resolution, execution, output buffering, block/layout composition
- Extensions Context: pluggable helper functions made available to views (assets, ...)
"""

__version__ = "0.1.0"

from viewkit.contexts.extensions import AssetExtension, Extension
from viewkit.contexts.rendering import Renderer
from viewkit.contexts.rendering.config_resolver import build_renderer, load_renderer_config

__all__ = ["AssetExtension", "Extension", "Renderer", "build_renderer", "load_renderer_config"]
