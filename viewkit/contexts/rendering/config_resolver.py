"""
Renderer Config Resolution

Loads renderer settings from a YAML file merged over the defaults and builds a
ready-to-use Renderer from them.

Example config (renderer.yaml):

    views:
      directory: templates
      file_extension: py
      isolate_blocks: true
    globals:
      site_name: Acme
      copyright: "(c) ${globals.site_name}"
    assets:
      base_path: public
      base_url: /static
      append_timestamp: true

Relative paths are resolved against the directory containing the config file.
"""

import os
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv
from omegaconf import DictConfig, OmegaConf
from omegaconf.errors import OmegaConfBaseException

from viewkit.contexts.extensions.assets import AssetExtension
from viewkit.contexts.rendering.defaults import get_default_config
from viewkit.contexts.rendering.exceptions import InvalidConfigError
from viewkit.contexts.rendering.logger import _log_debug, _log_info
from viewkit.contexts.rendering.renderer import Renderer

load_dotenv()
VIEW_CONFIG_PATH = os.getenv("VIEW_CONFIG_PATH")

SECTIONS = ("views", "globals", "assets")


def load_renderer_config(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load a renderer config file merged over the defaults.

    Args:
        config_path: Path to a YAML config (defaults to VIEW_CONFIG_PATH env variable;
                     when neither is set, only the defaults are returned)

    Returns:
        Plain dict with "views", "globals" and "assets" sections

    Raises:
        FileNotFoundError: If config_path does not exist
        InvalidConfigError: If the file has unknown sections or malformed values
    """
    if config_path is None and VIEW_CONFIG_PATH:
        config_path = Path(VIEW_CONFIG_PATH)

    base = OmegaConf.create(get_default_config())

    if config_path is None:
        return OmegaConf.to_container(base, resolve=True)

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Renderer config not found at {config_path}")

    loaded = OmegaConf.load(config_path)
    if not isinstance(loaded, DictConfig):
        raise InvalidConfigError(f"Renderer config {config_path} must be a mapping")

    unknown = [key for key in loaded.keys() if key not in SECTIONS]
    if unknown:
        raise InvalidConfigError(
            f"Unknown sections in {config_path}: {unknown}. Expected: {list(SECTIONS)}"
        )

    try:
        merged = OmegaConf.merge(base, loaded)
        config = OmegaConf.to_container(merged, resolve=True)
    except OmegaConfBaseException as e:
        raise InvalidConfigError(f"Invalid renderer config {config_path}: {e}") from e

    for section in SECTIONS:
        if not isinstance(config[section], dict):
            raise InvalidConfigError(f"Section '{section}' in {config_path} must be a mapping")

    # Relative paths from the file are relative to the config file; env defaults stay
    # relative to the working directory
    config_dir = config_path.parent
    for section, key in (("views", "directory"), ("assets", "base_path")):
        supplied = loaded.get(section)
        if not isinstance(supplied, DictConfig) or key not in supplied:
            continue
        value = config[section].get(key)
        if value and not Path(value).is_absolute():
            config[section][key] = str(config_dir / value)

    _log_debug(f"Loaded renderer config from {config_path}")
    return config


def build_renderer(config_path: Optional[Path] = None, **overrides) -> Renderer:
    """
    Build a Renderer from a config file.

    Args:
        config_path: Path to a YAML config (see load_renderer_config)
        **overrides: Values replacing entries of the "views" section
                     (directory, file_extension, isolate_blocks); None values are ignored

    Returns:
        Renderer with globals registered and, when assets.base_path is set, an
        AssetExtension added

    Raises:
        InvalidConfigError: If no view directory is configured anywhere
        InvalidViewDirectory: If the configured view directory does not exist
        InvalidAssetDirectory: If the configured asset directory does not exist

    Example:
        renderer = build_renderer("config/renderer.yaml", file_extension="html")
    """
    config = load_renderer_config(config_path)
    views = {**config["views"], **{k: v for k, v in overrides.items() if v is not None}}

    unknown = set(views) - set(get_default_config()["views"])
    if unknown:
        raise InvalidConfigError(f"Unknown view settings: {sorted(unknown)}")

    if not views["directory"]:
        raise InvalidConfigError(
            "No view directory configured (set views.directory or VIEWS_PATH)"
        )

    renderer = Renderer(
        views["directory"],
        file_extension=views["file_extension"],
        isolate_blocks=bool(views["isolate_blocks"]),
    )

    for name, value in config["globals"].items():
        renderer.add_global(name, value)

    assets = config["assets"]
    if assets.get("base_path"):
        renderer.add_extension(
            AssetExtension(
                assets["base_path"],
                base_url=assets.get("base_url") or "",
                append_timestamp=bool(assets.get("append_timestamp")),
            )
        )

    _log_info(f"Renderer ready for {renderer.view_directory}")
    return renderer
