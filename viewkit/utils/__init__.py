"""
Shared utilities for viewkit.

Common functionality used across contexts:
- Logger setup with provenance tracking
- HTML escaping
"""

from viewkit.utils.html import escape_html

__all__ = ["escape_html"]
