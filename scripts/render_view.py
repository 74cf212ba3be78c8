#!/usr/bin/env python3
"""
View Rendering CLI

Renders views from the command line using the rendering context.

Commands:
    render  - Render a view (and its layouts) to stdout or a file
    resolve - Show the file a view name resolves to

Examples:\n

    render_view.py render home                                # Render using VIEW_CONFIG_PATH / VIEWS_PATH

    render_view.py render page -p title=Hi -p user=Ada        # Pass view variables

    render_view.py render home --views templates --ext html   # Explicit view directory and extension

    render_view.py render home -c config/renderer.yaml -o out/home.html

    render_view.py resolve layouts/base                       # Print resolved file path
"""

from pathlib import Path
from typing import List, Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from viewkit.contexts.rendering.config_resolver import build_renderer
from viewkit.contexts.rendering.exceptions import ViewError
from viewkit.contexts.rendering.logger import setup_rendering_console, setup_rendering_logger

load_dotenv()


def parse_params(pairs: List[str]) -> dict:
    """
    Parse KEY=VALUE pairs into a dict of view variables.

    Raises:
        typer.BadParameter: If a pair has no "=" or an empty key
    """
    params = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key.strip():
            raise typer.BadParameter(f"Expected KEY=VALUE, got '{pair}'", param_hint="--param")
        params[key.strip()] = value
    return params


app = typer.Typer(
    help="Render views with layouts, blocks and extensions",
    add_completion=False,
    invoke_without_command=True,
)

ConfigOption = Annotated[
    Optional[Path],
    typer.Option("--config", "-c", help="Renderer config YAML (default: VIEW_CONFIG_PATH)"),
]
ViewsOption = Annotated[
    Optional[Path],
    typer.Option("--views", help="View directory (overrides the config)"),
]
ExtensionOption = Annotated[
    Optional[str],
    typer.Option("--ext", help="Default view file extension (overrides the config)"),
]


@app.callback()
def main(ctx: typer.Context):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


@app.command("render")
def render_command(
    view: Annotated[str, typer.Argument(help="View name (e.g. 'home' or 'emails/welcome')")],
    param: Annotated[
        Optional[List[str]],
        typer.Option("--param", "-p", help="View variable as KEY=VALUE (repeatable)"),
    ] = None,
    config: ConfigOption = None,
    views: ViewsOption = None,
    ext: ExtensionOption = None,
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Write the rendered view to this file"),
    ] = None,
    log_dir: Annotated[
        Optional[Path],
        typer.Option("--log-dir", help="Write a view.log session log into this directory"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show debug logging (layout passes, blocks)"),
    ] = False,
):
    """
    Render a view, including every layout it requests.

    Examples:\n

        $ render_view.py render home                     # Print to stdout

        $ render_view.py render page -p title=Hi          # With variables

        $ render_view.py render home -o out/home.html     # Write to file
    """
    params = parse_params(param or [])

    if log_dir is None:
        setup_rendering_console(verbose=verbose)

    try:
        renderer = build_renderer(config, directory=views, file_extension=ext)
        if log_dir is not None:
            setup_rendering_logger(log_dir, renderer.view_directory, verbose=verbose)
        result = renderer.render(view, params)
    except (ViewError, FileNotFoundError) as e:
        typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    if output is None:
        typer.echo(result, nl=False)
        return

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(result, encoding="utf-8")
    typer.secho(f"✓ Rendered {view} -> {output}", fg=typer.colors.GREEN, err=True)


@app.command("resolve")
def resolve_command(
    view: Annotated[str, typer.Argument(help="View name to resolve")],
    config: ConfigOption = None,
    views: ViewsOption = None,
    ext: ExtensionOption = None,
):
    """
    Print the file a view name resolves to.

    Examples:\n

        $ render_view.py resolve layouts/base
    """
    setup_rendering_console()

    try:
        renderer = build_renderer(config, directory=views, file_extension=ext)
        path = renderer.resolve_view_path(view)
    except (ViewError, FileNotFoundError) as e:
        typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    typer.echo(str(path))


if __name__ == "__main__":
    app()
