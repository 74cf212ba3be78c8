"""
Integration tests for scripts/render_view.py - drives the typer app end to end.
"""

import importlib.util
import sys
import textwrap
from pathlib import Path

import pytest
from loguru import logger
from typer.testing import CliRunner

SCRIPT_PATH = Path(__file__).resolve().parents[2] / "scripts" / "render_view.py"


def load_cli():
    spec = importlib.util.spec_from_file_location("render_view", SCRIPT_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


cli = load_cli()
runner = CliRunner()


@pytest.fixture(autouse=True)
def restore_logger():
    """Put loguru back to its default sink after --log-dir reconfigures it."""
    yield
    logger.remove()
    logger.add(sys.stderr)


@pytest.fixture
def project(tmp_path):
    """Project with a config file, views and assets."""
    templates = tmp_path / "templates"
    (templates / "layouts").mkdir(parents=True)
    (tmp_path / "public").mkdir()
    (tmp_path / "public" / "site.css").write_text("")

    (templates / "home.py").write_text('echo(f"<h1>{site_name}</h1>")\n')
    (templates / "page.py").write_text(
        textwrap.dedent(
            """
            view.layout("layouts/base")
            view.block("title", title)
            echo("<p>", view.esc(body), "</p>")
            """
        )
    )
    (templates / "layouts" / "base.py").write_text(
        textwrap.dedent(
            """
            echo('<link href="', view.call("asset", "site.css"), '">')
            echo("<title>", view.render_block("title"), "</title>")
            echo(view.render_block("content"))
            """
        )
    )
    (templates / "broken.py").write_text('view.layout("missing")\n')

    (tmp_path / "renderer.yaml").write_text(
        textwrap.dedent(
            """
            views:
              directory: templates
            globals:
              site_name: Acme
            assets:
              base_path: public
              base_url: /static
            """
        )
    )
    return tmp_path


@pytest.mark.integration
def test_cli_render_to_stdout(project):
    """Test rendering a view using a config file."""
    result = runner.invoke(cli.app, ["render", "home", "-c", str(project / "renderer.yaml")])

    assert result.exit_code == 0, result.output
    assert "<h1>Acme</h1>" in result.output


@pytest.mark.integration
def test_cli_render_with_params_and_layout(project):
    """Test passing view variables and composing a layout."""
    result = runner.invoke(
        cli.app,
        [
            "render",
            "page",
            "-c",
            str(project / "renderer.yaml"),
            "-p",
            "title=Hi",
            "-p",
            "body=a<b=c",
        ],
    )

    assert result.exit_code == 0, result.output
    assert (
        '<link href="/static/site.css"><title>Hi</title><p>a&lt;b=c</p>' in result.output
    )


@pytest.mark.integration
def test_cli_render_to_file(project):
    """Test writing output to a file."""
    output = project / "out" / "home.html"

    result = runner.invoke(
        cli.app,
        ["render", "home", "-c", str(project / "renderer.yaml"), "-o", str(output)],
    )

    assert result.exit_code == 0, result.output
    assert output.read_text() == "<h1>Acme</h1>"


@pytest.mark.integration
def test_cli_render_writes_session_log(project):
    """Test that --log-dir produces a rendering log."""
    log_dir = project / "logs"

    result = runner.invoke(
        cli.app,
        ["render", "home", "-c", str(project / "renderer.yaml"), "--log-dir", str(log_dir)],
    )

    assert result.exit_code == 0, result.output
    log_text = (log_dir / "view.log").read_text()
    assert "View directory" in log_text
    assert "[view] Rendering home" in log_text


@pytest.mark.integration
def test_cli_console_hides_debug_by_default(project):
    """Test that the console shows INFO messages but not per-pass debug lines."""
    result = runner.invoke(cli.app, ["render", "home", "-c", str(project / "renderer.yaml")])

    assert result.exit_code == 0, result.output
    assert "[view] Renderer ready" in result.output
    assert "[view] Rendering home" not in result.output


@pytest.mark.integration
def test_cli_verbose_shows_debug(project):
    """Test that --verbose echoes debug lines without a log directory."""
    result = runner.invoke(
        cli.app, ["render", "home", "-c", str(project / "renderer.yaml"), "--verbose"]
    )

    assert result.exit_code == 0, result.output
    assert "[view] Rendering home" in result.output


@pytest.mark.integration
def test_cli_render_missing_layout(project):
    """Test that view errors exit with code 1."""
    result = runner.invoke(cli.app, ["render", "broken", "-c", str(project / "renderer.yaml")])

    assert result.exit_code == 1
    assert "does not exist" in result.output


@pytest.mark.integration
def test_cli_render_bad_param(project):
    """Test validation of KEY=VALUE pairs."""
    result = runner.invoke(
        cli.app, ["render", "home", "-c", str(project / "renderer.yaml"), "-p", "novalue"]
    )

    assert result.exit_code != 0


@pytest.mark.integration
def test_cli_resolve(project):
    """Test printing the resolved path of a view."""
    result = runner.invoke(
        cli.app, ["resolve", "/layouts/base", "-c", str(project / "renderer.yaml")]
    )

    assert result.exit_code == 0, result.output
    assert str(project / "templates" / "layouts" / "base.py") in result.output.splitlines()


@pytest.mark.integration
def test_cli_views_and_ext_override(project):
    """Test overriding the configured view directory and extension."""
    other = project / "other"
    other.mkdir()
    (other / "index.html").write_text('echo("hello")\n')

    result = runner.invoke(
        cli.app,
        [
            "render",
            "index",
            "-c",
            str(project / "renderer.yaml"),
            "--views",
            str(other),
            "--ext",
            ".html",
        ],
    )

    assert result.exit_code == 0, result.output
    assert "hello" in result.output


@pytest.mark.integration
def test_cli_missing_config(project):
    """Test error handling for a missing config file."""
    result = runner.invoke(cli.app, ["render", "home", "-c", str(project / "nope.yaml")])

    assert result.exit_code == 1
