"""Unit tests for global variables and HTML escaping."""

import pytest
from markupsafe import Markup

from viewkit.contexts.rendering.exceptions import DuplicateGlobalError
from viewkit.contexts.rendering.renderer import Renderer
from viewkit.utils.html import escape_html


@pytest.mark.unit
def test_add_global(tmp_path):
    """Test adding globals."""
    renderer = Renderer(tmp_path)
    renderer.add_global("site_name", "Acme")

    assert renderer.globals == {"site_name": "Acme"}


@pytest.mark.unit
def test_duplicate_global_raises(tmp_path):
    """Test that globals are write-once."""
    renderer = Renderer(tmp_path)
    renderer.add_global("x", 1)

    with pytest.raises(DuplicateGlobalError) as exc_info:
        renderer.add_global("x", 2)

    assert exc_info.value.name == "x"
    assert renderer.globals["x"] == 1


@pytest.mark.unit
def test_globals_are_read_only(tmp_path):
    """Test that globals cannot be changed through the mapping."""
    renderer = Renderer(tmp_path)

    with pytest.raises(TypeError):
        renderer.globals["x"] = 1


@pytest.mark.unit
def test_escape_html_special_characters():
    """Test escaping of markup and both quote styles."""
    assert escape_html("<a href=\"x\">Tom & 'Jerry'</a>") == (
        "&lt;a href=&#34;x&#34;&gt;Tom &amp; &#39;Jerry&#39;&lt;/a&gt;"
    )


@pytest.mark.unit
def test_escape_html_double_encodes():
    """Test that existing entities are escaped again."""
    assert escape_html("&amp;") == "&amp;amp;"


@pytest.mark.unit
def test_escape_html_ignores_markup():
    """Test that Markup objects are escaped like plain text."""
    result = escape_html(Markup("<b>bold</b>"))

    assert result == "&lt;b&gt;bold&lt;/b&gt;"
    assert type(result) is str


@pytest.mark.unit
def test_escape_html_substitutes_invalid_bytes():
    """Test that invalid UTF-8 is replaced instead of raising."""
    assert escape_html(b"ok \xff <") == "ok � &lt;"


@pytest.mark.unit
def test_renderer_esc(tmp_path):
    """Test the escaping helper exposed to views."""
    assert Renderer(tmp_path).esc("<script>") == "&lt;script&gt;"
