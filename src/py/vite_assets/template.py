"""Jinja2 template callables.

Registered by :class:`~vite_assets.plugin.VitePlugin` on a litestar
``JinjaTemplateEngine``::

    {{ vite_react_refresh() }}
    {{ vite("resources/js/app.tsx") }}
    {{ vite(["resources/js/app.tsx", "resources/css/print.css"]) }}
    <meta name="asset-version" content="{{ vite_version() }}">
"""

from typing import TYPE_CHECKING, Any

import markupsafe

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from litestar.connection import Request

    from vite_assets.plugin import VitePlugin

__all__ = ("render_asset_tags", "render_asset_version", "render_react_refresh")


def _get_request_from_context(context: "Mapping[str, Any]") -> "Request[Any, Any, Any]":
    """Get the request from the template context.

    Raises:
        ValueError: If 'request' is not found in the template context.
        TypeError: If 'request' is not a Litestar Request object.

    Returns:
        The request object from the template context.
    """
    from litestar.connection import Request

    request = context.get("request")
    if request is None:
        msg = "Request not found in template context. Ensure 'request' is passed to the template."
        raise ValueError(msg)
    if not isinstance(request, Request):  # pyright: ignore[reportUnknownVariableType]
        msg = f"Expected Request object, got {type(request)}"
        raise TypeError(msg)
    return request  # pyright: ignore[reportReturnType,reportUnknownVariableType]


def _get_vite_plugin(context: "Mapping[str, Any]") -> "VitePlugin | None":
    request = _get_request_from_context(context)
    try:
        return request.app.plugins.get("VitePlugin")
    except KeyError:
        return None


def render_asset_tags(context: "Mapping[str, Any]", /, entrypoints: "str | Sequence[str]") -> "markupsafe.Markup":
    """Render ``<link>`` and ``<script>`` tags for the given entrypoint(s).

    Returns:
        The asset tags, or empty markup if VitePlugin is not registered.
    """
    vite_plugin = _get_vite_plugin(context)
    if vite_plugin is None:
        return markupsafe.Markup("")
    return vite_plugin.asset_loader.render_asset_tags(entrypoints)


def render_react_refresh(context: "Mapping[str, Any]", /) -> "markupsafe.Markup":
    """Render the React Fast Refresh preamble (dev server only).

    Returns:
        The preamble script, or empty markup.
    """
    vite_plugin = _get_vite_plugin(context)
    if vite_plugin is None:
        return markupsafe.Markup("")
    return vite_plugin.asset_loader.render_react_refresh_preamble()


def render_asset_version(context: "Mapping[str, Any]", /) -> str:
    vite_plugin = _get_vite_plugin(context)
    if vite_plugin is None:
        return ""
    return vite_plugin.asset_loader.version()
