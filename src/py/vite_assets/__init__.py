"""Vite-Assets: render Vite build output into server-side templates.

In development the asset tags point at a running Vite dev server; in
production they are resolved through the ``manifest.json`` written by
``vite build``.

Basic usage:
    from vite_assets import ViteAssetLoader, ViteConfig

    loader = ViteAssetLoader(ViteConfig(manifest_path="public/build/manifest.json", build_base="/build"))
    loader.render_asset_tags("resources/js/app.tsx")

With Litestar:
    from litestar import Litestar
    from vite_assets import VitePlugin, ViteConfig

    app = Litestar(
        plugins=[VitePlugin(config=ViteConfig(environment="dev"))],
    )
"""

from vite_assets.__metadata__ import __version__
from vite_assets.config import ViteConfig
from vite_assets.exceptions import (
    EntryNotFoundError,
    ManifestMalformedError,
    ManifestNotFoundError,
    ManifestUnreadableError,
    ViteAssetsError,
)
from vite_assets.loader import ViteAssetLoader
from vite_assets.plugin import VitePlugin

__all__ = (
    "EntryNotFoundError",
    "ManifestMalformedError",
    "ManifestNotFoundError",
    "ManifestUnreadableError",
    "ViteAssetLoader",
    "ViteAssetsError",
    "ViteConfig",
    "VitePlugin",
    "__version__",
)
