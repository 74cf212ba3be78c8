"""Base class for renderer extensions."""

from abc import ABC, abstractmethod
from typing import Callable, Dict


class Extension(ABC):
    """
    Collaborator exposing named functions to views.

    Subclasses return a mapping of function name to callable. The renderer reads it
    once, when the extension is registered, and makes every function reachable via
    ``Renderer.call(name, ...)``.

    Example:
        class UpperExtension(Extension):
            def functions(self):
                return {"upper": str.upper}
    """

    @abstractmethod
    def functions(self) -> Dict[str, Callable]:
        """Return the functions this extension provides as ``{name: callable}``."""
