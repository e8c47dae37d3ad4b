from typing import TYPE_CHECKING

from click import argument, group
from litestar.cli._utils import LitestarGroup  # pyright: ignore[reportPrivateImportUsage]

if TYPE_CHECKING:
    from litestar import Litestar


@group(cls=LitestarGroup, name="assets")
def vite_group() -> None:
    """Manage Vite Assets."""


@vite_group.command(
    name="status",
    help="Check how Vite assets are being resolved.",
)
def vite_status(app: "Litestar") -> None:
    """Check how Vite assets are being resolved."""
    from litestar.cli._utils import console  # pyright: ignore[reportPrivateImportUsage]

    from vite_assets.plugin import VitePlugin

    plugin = app.plugins.get(VitePlugin)
    config = plugin.config
    loader = plugin.asset_loader

    console.rule("[yellow]Vite Assets Status[/]", align="left")
    console.print(f"Environment: {config.environment}")
    console.print(f"Build Base: {config.build_base}")

    dev_server_url = loader.resolve_dev_server_url()
    if dev_server_url is not None:
        console.print(f"[green]✓ Dev server: {dev_server_url}[/]")
    else:
        console.print("Dev server: none")

    if config.manifest_file.is_file():
        console.print(f"[green]✓ Manifest found at {config.manifest_file}[/]")
    else:
        console.print(f"[red]✗ Manifest not found at {config.manifest_file}[/]")
    console.print(f"Version: {loader.version()}")


@vite_group.command(
    name="tags",
    help="Print the asset tags for one or more entrypoints.",
)
@argument("entrypoints", nargs=-1, required=True)
def vite_tags(app: "Litestar", entrypoints: "tuple[str, ...]") -> None:
    """Print the asset tags for one or more entrypoints."""
    from litestar.cli._utils import LitestarCLIException, console  # pyright: ignore[reportPrivateImportUsage]

    from vite_assets.exceptions import ViteAssetsError
    from vite_assets.plugin import VitePlugin

    loader = app.plugins.get(VitePlugin).asset_loader
    try:
        tags = loader.render_asset_tags(list(entrypoints))
    except ViteAssetsError as exc:
        raise LitestarCLIException(str(exc)) from exc
    console.print(str(tags), markup=False, highlight=False, soft_wrap=True)


@vite_group.command(
    name="version",
    help="Print the asset version used for cache busting.",
)
def vite_version(app: "Litestar") -> None:
    """Print the asset version used for cache busting."""
    from litestar.cli._utils import console  # pyright: ignore[reportPrivateImportUsage]

    from vite_assets.plugin import VitePlugin

    console.print(app.plugins.get(VitePlugin).asset_loader.version(), highlight=False)
