"""HTML escaping helpers for values interpolated into views."""

from typing import Union

from markupsafe import escape


def escape_html(content: Union[str, bytes]) -> str:
    """
    Convert special characters to HTML entities.

    Escapes ``& < > " '`` unconditionally: already-escaped text is escaped again and
    ``Markup`` objects get no special treatment. Bytes are decoded as UTF-8 with
    invalid sequences replaced by U+FFFD.

    Args:
        content: Text to escape

    Returns:
        Escaped text as a plain ``str``

    Example:
        >>> escape_html('<a href="x">')
        '&lt;a href=&#34;x&#34;&gt;'
    """
    if isinstance(content, bytes):
        content = content.decode("utf-8", errors="replace")

    # str() drops any __html__ so Markup input is escaped too
    return str(escape(str(content)))
