"""Tests for VitePlugin functionality and integration."""

import json
from collections.abc import Callable
from pathlib import Path

import pytest
from click import Group
from litestar import Litestar, get
from litestar.contrib.jinja import JinjaTemplateEngine
from litestar.response import Template
from litestar.template.config import TemplateConfig
from litestar.testing import create_test_client  # pyright: ignore[reportUnknownVariableType]

from vite_assets.config import ViteConfig
from vite_assets.loader import ViteAssetLoader
from vite_assets.plugin import VitePlugin

pytestmark = pytest.mark.anyio

INDEX_TEMPLATE = """<html><head>
{{ vite_react_refresh() }}
{{ vite("resources/js/app.tsx") }}
<meta name="asset-version" content="{{ vite_version() }}">
</head></html>"""


@pytest.fixture
def template_config(tmp_path: Path) -> "TemplateConfig[JinjaTemplateEngine]":
    template_dir = tmp_path / "templates"
    template_dir.mkdir()
    (template_dir / "index.html.j2").write_text(INDEX_TEMPLATE)
    return TemplateConfig(engine=JinjaTemplateEngine, directory=template_dir)


@get("/", sync_to_thread=False)
def index() -> Template:
    return Template(template_name="index.html.j2")


class TestVitePlugin:
    def test_plugin_initialization_default_config(self) -> None:
        plugin = VitePlugin()

        assert isinstance(plugin.config, ViteConfig)
        assert plugin._asset_loader is None

    def test_plugin_uses_config_of_asset_loader(self, prod_config: ViteConfig) -> None:
        loader = ViteAssetLoader(prod_config)
        plugin = VitePlugin(asset_loader=loader)

        assert plugin.config is prod_config
        assert plugin.asset_loader is loader

    def test_asset_loader_property_lazy_initialization(self, prod_config: ViteConfig) -> None:
        plugin = VitePlugin(config=prod_config)

        loader = plugin.asset_loader
        assert isinstance(loader, ViteAssetLoader)
        assert loader.config is prod_config
        assert plugin.asset_loader is loader

    def test_on_cli_init(self) -> None:
        cli = Group()
        VitePlugin().on_cli_init(cli)

        assert "assets" in cli.commands

    def test_plugin_registers_lifespan(self, prod_config: ViteConfig) -> None:
        plugin = VitePlugin(config=prod_config)
        app = Litestar(plugins=[plugin])

        assert app.plugins.get(VitePlugin) is plugin

    def test_app_without_template_config(self, prod_config: ViteConfig) -> None:
        with create_test_client(route_handlers=[], plugins=[VitePlugin(config=prod_config)]) as client:
            assert client.get("/missing").status_code == 404


async def test_lifespan_warms_manifest(prod_config: ViteConfig, write_manifest: Callable[..., Path]) -> None:
    write_manifest({"resources/js/app.tsx": {"file": "assets/app.js"}})
    plugin = VitePlugin(config=prod_config)
    app = Litestar(plugins=[plugin])

    async with plugin.lifespan(app):
        assert plugin.asset_loader.manifest_loaded is True


async def test_lifespan_without_manifest(prod_config: ViteConfig) -> None:
    plugin = VitePlugin(config=prod_config)
    app = Litestar(plugins=[plugin])

    async with plugin.lifespan(app):
        assert plugin.asset_loader.manifest_loaded is False


def test_templates_render_manifest_assets(
    prod_config: ViteConfig, manifest_path: Path, template_config: "TemplateConfig[JinjaTemplateEngine]"
) -> None:
    manifest_path.parent.mkdir(parents=True)
    manifest_path.write_text(
        json.dumps({"resources/js/app.tsx": {"file": "assets/app.123.js", "css": ["assets/app.123.css"]}})
    )
    plugin = VitePlugin(config=prod_config)

    with create_test_client(route_handlers=[index], plugins=[plugin], template_config=template_config) as client:
        assert plugin.asset_loader.manifest_loaded is True
        response = client.get("/")

    assert response.status_code == 200
    assert '<link rel="stylesheet" href="/build/assets/app.123.css">' in response.text
    assert '<script type="module" src="/build/assets/app.123.js"></script>' in response.text
    assert response.text.index("app.123.css") < response.text.index("app.123.js")
    assert "@react-refresh" not in response.text
    assert f'content="{plugin.asset_loader.version()}"' in response.text


def test_templates_render_dev_server_assets(
    dev_config: ViteConfig, hot_file: Path, template_config: "TemplateConfig[JinjaTemplateEngine]"
) -> None:
    hot_file.write_text("https://vite.local")

    with create_test_client(
        route_handlers=[index], plugins=[VitePlugin(config=dev_config)], template_config=template_config
    ) as client:
        response = client.get("/")

    assert response.status_code == 200
    assert '<script type="module" src="https://vite.local/@vite/client"></script>' in response.text
    assert '<script type="module" src="https://vite.local/resources/js/app.tsx"></script>' in response.text
    assert "__vite_plugin_react_preamble_installed__" in response.text
    assert 'content="dev"' in response.text


def test_templates_missing_entry_is_server_error(
    prod_config: ViteConfig, manifest_path: Path, template_config: "TemplateConfig[JinjaTemplateEngine]"
) -> None:
    manifest_path.parent.mkdir(parents=True)
    manifest_path.write_text("{}")

    with create_test_client(
        route_handlers=[index], plugins=[VitePlugin(config=prod_config)], template_config=template_config
    ) as client:
        response = client.get("/")

    assert response.status_code == 500
