"""
Default values for renderer configuration.

Provides the shape every renderer config file is merged over by
config_resolver.load_renderer_config().
"""

import os
from typing import Any, Dict

from dotenv import load_dotenv

load_dotenv()

DEFAULT_FILE_EXTENSION = os.getenv("VIEW_FILE_EXTENSION", "py")

# View resolution and block lifetime
DEFAULT_VIEWS = {
    "directory": os.getenv("VIEWS_PATH"),
    "file_extension": DEFAULT_FILE_EXTENSION,
    "isolate_blocks": True,
}

# Asset extension (registered only when base_path is set)
DEFAULT_ASSETS = {
    "base_path": None,
    "base_url": "",
    "append_timestamp": False,
}


def get_default_config() -> Dict[str, Any]:
    """
    Get complete default renderer config with all expected fields.

    Returns:
        Dict with views, globals and assets sections
    """
    return {
        "views": DEFAULT_VIEWS.copy(),
        "globals": {},
        "assets": DEFAULT_ASSETS.copy(),
    }
