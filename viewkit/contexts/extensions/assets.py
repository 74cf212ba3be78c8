"""
Asset URL helpers.

Builds public URLs for published asset files, optionally appending the file's
modification time so browsers refetch it after it changes.
"""

from pathlib import Path
from typing import Callable, Dict

from viewkit.contexts.extensions.base import Extension
from viewkit.contexts.rendering.exceptions import AssetNotFoundError, InvalidAssetDirectory


class AssetExtension(Extension):
    """
    Extension providing ``asset`` and ``link_asset`` to views.

    Attributes:
        base_path: Root directory storing the published asset files
        base_url: Base URL through which the published asset files can be accessed
        append_timestamp: Whether to append ``?v=<mtime>`` to every ``asset`` URL

    Example:
        renderer.add_extension(AssetExtension("public", "/static", append_timestamp=True))

        # inside a view
        echo(view.call("asset", "css/site.css"))  # /static/css/site.css?v=1767225600
    """

    def __init__(self, base_path, base_url: str = "", append_timestamp: bool = False):
        base_path = str(base_path).rstrip("/\\") or "/"
        if not Path(base_path).is_dir():
            raise InvalidAssetDirectory(
                f'The specified asset directory "{base_path}" does not exist.'
            )

        self.base_path = Path(base_path)
        self.base_url = base_url.rstrip("/")
        self.append_timestamp = append_timestamp

    def functions(self) -> Dict[str, Callable]:
        return {
            "asset": self.asset,
            "link_asset": self.link_asset,
        }

    def asset(self, file: str) -> str:
        """
        Get the URL of a published asset file.

        Args:
            file: Path of the asset relative to ``base_path``

        Returns:
            Asset URL, with a ``?v=<mtime>`` suffix when ``append_timestamp`` is set

        Raises:
            AssetNotFoundError: If the file does not exist under ``base_path``
        """
        relative = file.lstrip("/")
        url = f"{self.base_url}/{relative}"
        path = self.base_path / relative

        if not path.exists():
            raise AssetNotFoundError(f'Asset file "{path}" does not exist.', path=path)

        if self.append_timestamp:
            return f"{url}?v={int(path.stat().st_mtime)}"

        return url

    def link_asset(self, file: str) -> str:
        """Get the URL of an asset without checking that it exists."""
        return f"{self.base_url}/{file.lstrip('/')}"
