"""Vite Plugin for Litestar.

This module provides the VitePlugin class, which wires a
:class:`~vite_assets.loader.ViteAssetLoader` into a Litestar application:

- Jinja2 template callable registration
- Manifest warm-up during the application lifespan
- ``litestar assets`` CLI commands

Example::

    from litestar import Litestar
    from vite_assets import VitePlugin, ViteConfig

    app = Litestar(
        plugins=[VitePlugin(config=ViteConfig(environment="dev"))],
    )
"""

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from litestar.plugins import CLIPlugin, InitPluginProtocol

from vite_assets.loader import ViteAssetLoader

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from click import Group
    from litestar import Litestar
    from litestar.config.app import AppConfig

    from vite_assets.config import ViteConfig

__all__ = ("VitePlugin",)

logger = logging.getLogger("vite_assets")


class VitePlugin(InitPluginProtocol, CLIPlugin):
    """Vite plugin for Litestar.

    Example::

        from litestar import Litestar
        from vite_assets import VitePlugin, ViteConfig

        app = Litestar(
            plugins=[
                VitePlugin(config=ViteConfig(environment="prod", build_base="/static"))
            ],
        )
    """

    __slots__ = ("_asset_loader", "_config")

    def __init__(self, config: "ViteConfig | None" = None, asset_loader: "ViteAssetLoader | None" = None) -> None:
        """Initialize the Vite plugin.

        Args:
            config: Vite configuration. Defaults to ViteConfig() if not provided.
            asset_loader: Optional pre-built asset loader.
        """
        from vite_assets.config import ViteConfig

        if config is None:
            config = asset_loader.config if asset_loader is not None else ViteConfig()
        self._config = config
        self._asset_loader = asset_loader

    @property
    def config(self) -> "ViteConfig":
        return self._config

    @property
    def asset_loader(self) -> "ViteAssetLoader":
        """Get the asset loader instance.

        Lazily creates the loader if not already set.

        Returns:
            The ViteAssetLoader instance.
        """
        if self._asset_loader is None:
            self._asset_loader = ViteAssetLoader(config=self._config)
        return self._asset_loader

    def on_cli_init(self, cli: "Group") -> None:
        """Register CLI commands.

        Args:
            cli: The Click command group to add commands to.
        """
        from vite_assets.cli import vite_group

        cli.add_command(vite_group)

    def _configure_jinja_callables(self, app_config: "AppConfig") -> None:
        """Register Jinja2 template callables for Vite asset handling.

        Args:
            app_config: The Litestar application configuration.
        """
        from litestar.contrib.jinja import JinjaTemplateEngine

        from vite_assets.template import render_asset_tags, render_asset_version, render_react_refresh

        template_config = app_config.template_config  # pyright: ignore[reportUnknownMemberType,reportUnknownVariableType]
        if template_config and isinstance(
            template_config.engine_instance,  # pyright: ignore[reportUnknownMemberType]
            JinjaTemplateEngine,
        ):
            engine = template_config.engine_instance  # pyright: ignore[reportUnknownMemberType]
            engine.register_template_callable(key="vite", template_callable=render_asset_tags)
            engine.register_template_callable(key="vite_react_refresh", template_callable=render_react_refresh)
            engine.register_template_callable(key="vite_version", template_callable=render_asset_version)

    def on_app_init(self, app_config: "AppConfig") -> "AppConfig":
        """Configure application for use with Vite.

        Args:
            app_config: The :class:`AppConfig <litestar.config.app.AppConfig>` instance.

        Returns:
            The application configuration.
        """
        self._configure_jinja_callables(app_config)
        app_config.lifespan.append(self.lifespan)  # pyright: ignore[reportUnknownMemberType]
        return app_config

    @asynccontextmanager
    async def lifespan(self, app: "Litestar") -> "AsyncIterator[None]":
        """Warm the manifest cache before the app starts serving.

        Args:
            app: The Litestar application instance.

        Yields:
            None
        """
        await self.asset_loader.initialize()
        logger.debug(
            "Vite assets ready (environment=%s, dev_server=%s)",
            self._config.environment,
            self.asset_loader.resolve_dev_server_url(),
        )
        yield
