"""HTML building blocks for asset tags.

Pure functions only: every value placed in an attribute goes through
:func:`escape_attr`, every value placed inside a ``<script>`` body goes through
:func:`js_string_literal`.
"""

from typing import TYPE_CHECKING

import markupsafe
from litestar.serialization import encode_json

if TYPE_CHECKING:
    from collections.abc import Mapping

__all__ = ("escape_attr", "js_string_literal", "script_tag", "style_tag")

_SCRIPT_UNSAFE = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


def escape_attr(value: str) -> str:
    """Escape a string for use inside a double-quoted HTML attribute.

    Returns:
        The escaped string.
    """
    return str(markupsafe.escape(value))


def js_string_literal(value: str) -> str:
    """Encode a string as a JavaScript literal that is safe inside ``<script>``.

    Slashes are left as-is.

    Returns:
        A double-quoted JSON string.
    """
    encoded = encode_json(value).decode("utf-8")
    for char, replacement in _SCRIPT_UNSAFE.items():
        encoded = encoded.replace(char, replacement)
    return encoded


def _render_attrs(attrs: "Mapping[str, str]") -> str:
    return "".join(f' {key}="{escape_attr(value)}"' for key, value in attrs.items())


def script_tag(src: str, attrs: "Mapping[str, str] | None" = None) -> str:
    """Generate a module script tag.

    Args:
        src: The source URL for the script.
        attrs: Extra attributes rendered before ``src``.

    Returns:
        HTML script tag string.
    """
    all_attrs = {"type": "module", **(attrs or {}), "src": src}
    return f"<script{_render_attrs(all_attrs)}></script>"


def style_tag(href: str) -> str:
    """Generate a stylesheet link tag.

    Returns:
        HTML link tag string.
    """
    return f'<link rel="stylesheet" href="{escape_attr(href)}">'
