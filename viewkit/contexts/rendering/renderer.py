"""
View Renderer

Resolves view files, executes them with a variable scope while capturing their
output, and composes views into layouts through named blocks.

A view is a Python source file. It is executed with every scope variable exposed
as a top-level name, plus:

- ``view``   the Renderer (``layout``, ``block``, ``begin_block``, ``end_block``,
             ``render_block``, ``esc``, ``call``, ``render`` for partials)
- ``params`` read-only mapping of the merged scope
- ``echo``   writes values to the output
- ``print``  the builtin, writing to the output

Example view ``page.py``::

    view.layout("base")
    view.block("title", "Hi")
    echo("<p>Hello ", view.esc(name), "</p>")

Example layout ``base.py``::

    echo("<title>", view.render_block("title"), "</title>")
    echo(view.render_block("content"))
"""

import functools
import os
import time
from pathlib import Path
from types import MappingProxyType
from typing import Any, Callable, Dict, Mapping, Optional, Union

from viewkit.contexts.extensions.base import Extension
from viewkit.contexts.rendering.buffer import OutputBuffer
from viewkit.contexts.rendering.context import CONTENT_BLOCK, RenderContext
from viewkit.contexts.rendering.exceptions import (
    DuplicateGlobalError,
    InvalidViewDirectory,
    NestedBlockError,
    NoActiveBlockError,
    ReservedNameError,
    ReservedVariableError,
    UnclosedBlockError,
    UndefinedFunctionError,
    ViewNotFound,
)
from viewkit.contexts.rendering.logger import (
    _log_debug,
    log_extension_added,
    log_layout_requested,
    log_render_failure,
    log_render_result,
    log_render_start,
)
from viewkit.utils.html import escape_html

# Names injected into every view namespace; scope variables may not shadow them
RESERVED_VARIABLES = frozenset({"view", "params", "echo", "print"})

BlockContent = Union[str, bool]


class Renderer:
    """
    Renders views and composes them into layouts.

    A Renderer is configured once (view directory, file extension, globals,
    extensions) and then reused for many ``render`` calls. Per-call state (blocks,
    requested layout, active capture) lives in a RenderContext. With
    ``isolate_blocks`` enabled the context is replaced after every outermost render,
    so blocks never leak between unrelated renders. One Renderer must not serve two
    render chains at the same time.

    Attributes:
        isolate_blocks: Discard blocks once an outermost render finishes

    Example:
        renderer = Renderer("templates", file_extension="py")
        renderer.add_global("site_name", "Acme")
        html = renderer.render("home", {"user": "Ada"})
    """

    def __init__(
        self,
        view_directory: Optional[Union[str, Path]] = None,
        file_extension: str = "py",
        isolate_blocks: bool = True,
    ):
        """
        Initialize the renderer.

        Args:
            view_directory: Root directory of views (can be set later)
            file_extension: Extension appended to view names that have none
            isolate_blocks: Discard blocks once an outermost render finishes

        Raises:
            InvalidViewDirectory: If view_directory is given but is not a directory
        """
        self._view_directory: Optional[Path] = None
        if view_directory is not None:
            self.view_directory = view_directory
        self.file_extension = file_extension
        self.isolate_blocks = isolate_blocks

        self._context = RenderContext()
        self._buffer = OutputBuffer()
        self._depth = 0

        self._globals: Dict[str, Any] = {}
        self._extensions: Dict[type, Extension] = {}
        self._functions: Dict[str, Callable] = {}

    # Configuration

    @property
    def view_directory(self) -> Optional[Path]:
        return self._view_directory

    @view_directory.setter
    def view_directory(self, view_directory: Union[str, Path]) -> None:
        directory = str(view_directory).rstrip("/\\") or "/"

        if not os.path.isdir(directory):
            raise InvalidViewDirectory(
                f'The specified view directory "{directory}" does not exist.',
                directory=Path(directory),
            )

        self._view_directory = Path(directory).absolute()

    @property
    def file_extension(self) -> str:
        return self._file_extension

    @file_extension.setter
    def file_extension(self, file_extension: str) -> None:
        self._file_extension = (file_extension or "").lstrip(".")

    @property
    def globals(self) -> Mapping[str, Any]:
        """Read-only view of the global variables."""
        return MappingProxyType(self._globals)

    @property
    def extensions(self) -> Mapping[type, Extension]:
        """Registered extensions keyed by their class, in registration order."""
        return MappingProxyType(self._extensions)

    @property
    def functions(self) -> Mapping[str, Callable]:
        """Functions available through ``call``, merged from all extensions."""
        return MappingProxyType(self._functions)

    @property
    def buffer_level(self) -> int:
        """Number of output frames currently open."""
        return self._buffer.level

    @property
    def context(self) -> RenderContext:
        """State of the current (or, between renders, the next) render chain."""
        return self._context

    def add_global(self, name: str, value: Any) -> None:
        """
        Add a variable available to every view.

        Globals are write-once: there is no way to update or remove one.

        Raises:
            DuplicateGlobalError: If a global with this name was already added
        """
        if name in self._globals:
            raise DuplicateGlobalError(
                f'Unable to add "{name}" as this global variable has already been added.',
                name=name,
            )

        self._globals[name] = value

    def add_extension(self, extension: Extension) -> None:
        """
        Register an extension, replacing any extension of the same class.

        The function table is rebuilt immediately; when two extensions declare the
        same function name, the one registered first wins.

        Raises:
            TypeError: If extension is not an Extension
        """
        if not isinstance(extension, Extension):
            raise TypeError(f"Expected an Extension, got {type(extension).__name__}")

        self._extensions[type(extension)] = extension

        functions: Dict[str, Callable] = {}
        for registered in self._extensions.values():
            for name, callback in registered.functions().items():
                functions.setdefault(name, callback)
        self._functions = functions

        log_extension_added(extension, extension.functions())

    # Extension functions

    def get_function(self, name: str) -> Callable:
        """
        Look up an extension function by name.

        Raises:
            UndefinedFunctionError: If no registered extension declares ``name``
        """
        try:
            return self._functions[name]
        except KeyError:
            raise UndefinedFunctionError(
                f'Calling an undefined function "{name}".', name=name
            ) from None

    def call(self, name: str, *args, **kwargs) -> Any:
        """Call an extension function and return its result unchanged."""
        return self.get_function(name)(*args, **kwargs)

    # Blocks and layouts

    def layout(self, layout: str) -> None:
        """Request that the current view be wrapped in ``layout``."""
        self._context.layout = layout

    def block(self, name: str, content: BlockContent) -> None:
        """
        Record a block.

        The first write to a name wins; later writes and empty names are ignored.

        Raises:
            ReservedNameError: If name is "content"
        """
        if name == CONTENT_BLOCK:
            raise ReservedNameError(f'The block name "{CONTENT_BLOCK}" is reserved.')

        if not name or name in self._context.blocks:
            return

        self._context.blocks[name] = content
        _log_debug(f"Recorded block {name}")

    def begin_block(self, name: str) -> None:
        """
        Begin capturing output into a block.

        Raises:
            NestedBlockError: If another block capture is active
        """
        if self._context.capturing:
            raise NestedBlockError("You cannot nest blocks within other blocks.")

        self._context.block_name = name
        self._context.block_level = self._buffer.level
        self._buffer.start()

    def end_block(self) -> None:
        """
        End the active capture and record its output as a block.

        Raises:
            NoActiveBlockError: If no capture is active
        """
        if not self._context.capturing:
            raise NoActiveBlockError("You must begin a block before you can end it.")

        name = self._context.block_name
        content = self._buffer.get_clean()
        self._context.clear_capture()
        self.block(name, content)

    def render_block(self, name: str, default: str = "") -> BlockContent:
        """Get a block's content, or ``default`` if it was never recorded."""
        return self._context.blocks.get(name, default)

    def has_block(self, name: str) -> bool:
        return name in self._context.blocks

    # Output helpers

    def echo(self, *values: Any) -> None:
        """Write values to the current output frame without separators."""
        for value in values:
            self._buffer.write(str(value))

    def esc(self, content: Union[str, bytes]) -> str:
        """Escape special characters as HTML entities."""
        return escape_html(content)

    # Rendering

    def resolve_view_path(self, view: str) -> Path:
        """
        Resolve a view name to a file under the view directory.

        Leading and trailing slashes are ignored, and the default file extension is
        appended when the name has none.

        Args:
            view: View name (e.g., "home", "/layouts/base", "emails/welcome.txt")

        Returns:
            Path to the view file

        Raises:
            InvalidViewDirectory: If no view directory is configured
            ViewNotFound: If the name is empty, or the path does not exist or is not a
                regular file
        """
        if self._view_directory is None:
            raise InvalidViewDirectory("No view directory has been configured.")

        name = view.strip("/\\")
        if not name:
            raise ViewNotFound(
                f'View name "{view}" does not name a file.', view=view, path=self._view_directory
            )

        path = self._view_directory / name

        if path.suffix == "" and self._file_extension:
            path = path.with_name(f"{path.name}.{self._file_extension}")

        if not path.is_file():
            raise ViewNotFound(
                f'View file "{path}" does not exist or is not a file.', view=view, path=path
            )

        return path

    def render(self, view: str, params: Optional[Mapping[str, Any]] = None) -> str:
        """
        Render a view, wrapping it in whatever layouts it requests.

        When the view calls ``view.layout(name)``, its output is stored as the
        "content" block and the layout is rendered (without params) in its place.
        This repeats until a view requests no layout. Called from inside a view, the
        render is a partial: it shares the chain's blocks and leaves the caller's
        layout request untouched.

        Args:
            view: View name
            params: Variables for the view; they take precedence over globals

        Returns:
            Rendered output

        Raises:
            ViewNotFound: If the view or one of its layouts cannot be resolved
            Exception: Whatever the view raised, unchanged, after its output frames
                have been discarded
        """
        outermost = self._depth == 0
        pending_layout = self._context.layout
        start_time = time.time()

        self._depth += 1
        try:
            output, passes = self._render_chain(view, dict(params or {}))
        finally:
            self._depth -= 1
            if not outermost:
                self._context.layout = pending_layout
            elif self.isolate_blocks:
                self._context = RenderContext()

        log_render_result(view, output, time.time() - start_time, passes)
        return output

    def _render_chain(self, view: str, params: Dict[str, Any]):
        passes = 0
        while True:
            content = self._render_pass(view, params)
            passes += 1

            layout = self._context.layout
            if not layout:
                return content, passes

            log_layout_requested(view, layout, len(content))
            self._context.blocks[CONTENT_BLOCK] = content
            view, params = layout, {}

    def _render_pass(self, view: str, params: Dict[str, Any]) -> str:
        path = self.resolve_view_path(view)
        log_render_start(view, path, self._depth)

        level = self._buffer.level
        self._context.layout = None
        self._buffer.start()

        try:
            self._execute(path, params)
            if self._buffer.level > level + 1:
                raise UnclosedBlockError(
                    f'View "{view}" ended without closing block "{self._context.block_name}".',
                    block_name=self._context.block_name,
                )
            return self._buffer.get_clean()
        except BaseException as e:
            unwound = self._buffer.level - level
            self._buffer.unwind(level)
            if self._context.block_level is not None and self._context.block_level >= level:
                self._context.clear_capture()
            log_render_failure(view, e, unwound)
            raise

    def _execute(self, path: Path, params: Dict[str, Any]) -> None:
        scope = {**self._globals, **params}

        reserved = sorted(RESERVED_VARIABLES.intersection(scope))
        if reserved:
            raise ReservedVariableError(
                f"View variables cannot use reserved names: {', '.join(reserved)}",
                names=reserved,
            )

        namespace = {
            "__name__": f"viewkit.views.{path.stem}",
            "__file__": str(path),
        }
        namespace.update(scope)
        namespace.update(
            view=self,
            params=MappingProxyType(scope),
            echo=self.echo,
            print=functools.partial(print, file=self._buffer),
        )

        code = compile(path.read_text(encoding="utf-8"), str(path), "exec")
        exec(code, namespace)
