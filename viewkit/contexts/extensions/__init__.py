"""
Extensions Context

Responsibilities:
- Defines the capability interface views use for pluggable helper functions
- Provides built-in extensions (asset URLs with cache-busting timestamps)

Owns: Extension contract, helper function implementations
Never: Executes views or touches the output buffer
"""

from viewkit.contexts.extensions.assets import AssetExtension
from viewkit.contexts.extensions.base import Extension

__all__ = ["AssetExtension", "Extension"]
