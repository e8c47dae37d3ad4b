"""Vite Asset Loader.

This module provides the ViteAssetLoader class for turning Vite entrypoints
into ``<script>`` and ``<link>`` markup. The loader handles both development
mode (assets served by a running Vite dev server) and production mode
(assets resolved through the ``manifest.json`` written by ``vite build``).

Key features:
- Dev server discovery through an explicit URL or the Vite hot file
- Lazy, thread-safe, load-once manifest parsing
- Stylesheet and script de-duplication across entrypoints
- Manifest based cache-busting version string
- React Fast Refresh preamble
"""

import logging
import threading
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Union

import anyio
import markupsafe
from anyio import to_thread
from litestar.exceptions import SerializationException
from litestar.serialization import decode_json

from vite_assets.exceptions import (
    EntryNotFoundError,
    ManifestMalformedError,
    ManifestNotFoundError,
    ManifestUnreadableError,
)
from vite_assets.markup import escape_attr, js_string_literal, script_tag, style_tag
from vite_assets.utils import file_md5, read_hotfile_url, read_text_file

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from vite_assets.config import ViteConfig

__all__ = ("AssetSource", "BuildManifest", "DevServer", "ResolvedAssets", "ViteAssetLoader")

logger = logging.getLogger("vite_assets")

DEV_VERSION = "dev"


@dataclass(frozen=True)
class DevServer:
    """Assets are served by a running Vite dev server at ``url``."""

    url: str


@dataclass(frozen=True)
class BuildManifest:
    """Assets are resolved through a parsed ``manifest.json``."""

    entries: "Mapping[str, Any]"


AssetSource = Union[DevServer, BuildManifest]


@dataclass
class ResolvedAssets:
    """Ordered, de-duplicated stylesheet and script paths for one render call."""

    styles: "dict[str, None]" = field(default_factory=dict)
    scripts: "dict[str, None]" = field(default_factory=dict)

    def add_style(self, path: str) -> None:
        self.styles.setdefault(path, None)

    def add_script(self, path: str) -> None:
        self.scripts.setdefault(path, None)


def normalize_entrypoints(entrypoints: "str | Sequence[Any]") -> "list[str]":
    """Drop non-string and blank entrypoints.

    Args:
        entrypoints: A single entrypoint or a sequence of them.

    Returns:
        The stripped entrypoints in caller order.
    """
    candidates: "Iterable[Any]" = [entrypoints] if isinstance(entrypoints, str) else entrypoints
    return [entry.strip() for entry in candidates if isinstance(entry, str) and entry.strip()]


class ViteAssetLoader:
    """Vite asset loader for rendering frontend asset tags.

    The loader is designed to be instantiated per-app (not a singleton). The
    parsed manifest is cached for the lifetime of the instance; build a new
    loader to pick up a rebuilt manifest.

    Example:
        loader = ViteAssetLoader(ViteConfig(environment="prod", build_base="/build"))
        html = loader.render_asset_tags(["resources/js/app.tsx"])
    """

    def __init__(self, config: "ViteConfig") -> None:
        """Initialize the asset loader.

        Args:
            config: The Vite configuration.
        """
        self._config = config
        self._manifest: "dict[str, Any] | None" = None
        self._manifest_lock = threading.Lock()

    @property
    def config(self) -> "ViteConfig":
        return self._config

    @property
    def manifest_loaded(self) -> bool:
        return self._manifest is not None

    async def initialize(self) -> None:
        """Asynchronously warm the manifest cache.

        Loads the manifest in a worker thread when no dev server is active and
        the manifest file exists. A missing manifest is left to fail at render time.
        """
        if self.manifest_loaded or self.resolve_dev_server_url() is not None:
            return
        try:
            if not await anyio.Path(self._config.manifest_file).is_file():
                return
        except OSError as exc:
            logger.debug("Could not check Vite manifest %s: %s", self._config.manifest_file, exc)
            return
        await to_thread.run_sync(self.load_manifest)

    def resolve_dev_server_url(self) -> "str | None":
        """Detect whether assets should come from a Vite dev server.

        Returns:
            The dev server base URL without trailing slash, or None.
        """
        if self._config.is_prod:
            return None

        if self._config.dev_server_url:
            return self._config.dev_server_url.rstrip("/")

        hot_file = self._config.hot_file_path
        try:
            if not hot_file.is_file():
                return None
            url = read_hotfile_url(hot_file)
        except (OSError, UnicodeDecodeError) as exc:
            logger.debug("Could not read Vite hot file %s: %s", hot_file, exc)
            url = ""
        return url or None

    def load_manifest(self) -> "dict[str, Any]":
        """Load and cache the Vite manifest.

        Returns:
            The parsed manifest mapping.

        Raises:
            ManifestNotFoundError: If the manifest file does not exist.
            ManifestUnreadableError: If the manifest file cannot be read.
            ManifestMalformedError: If the manifest is not a JSON object.
        """
        if self._manifest is not None:
            return self._manifest

        with self._manifest_lock:
            if self._manifest is None:
                self._manifest = self._parse_manifest()
            return self._manifest

    def _parse_manifest(self) -> "dict[str, Any]":
        manifest_path = self._config.manifest_file
        try:
            if not manifest_path.is_file():
                raise ManifestNotFoundError(str(manifest_path))
            content = read_text_file(manifest_path)
        except UnicodeDecodeError as exc:
            raise ManifestMalformedError(str(manifest_path), "not valid UTF-8") from exc
        except OSError as exc:
            raise ManifestUnreadableError(str(manifest_path)) from exc

        try:
            data = decode_json(content)
        except SerializationException as exc:
            raise ManifestMalformedError(str(manifest_path)) from exc

        if not isinstance(data, dict):
            raise ManifestMalformedError(str(manifest_path), "top-level value is not an object")

        logger.debug("Loaded Vite manifest %s with %d entries", manifest_path, len(data))
        return data

    def resolve_source(self) -> AssetSource:
        """Decide where assets come from for one render call.

        Returns:
            A DevServer when a dev server is active, otherwise the cached BuildManifest.
        """
        dev_server_url = self.resolve_dev_server_url()
        if dev_server_url is not None:
            return DevServer(dev_server_url)
        return BuildManifest(self.load_manifest())

    def render_asset_tags(self, entrypoints: "str | Sequence[Any]") -> "markupsafe.Markup":
        """Render asset tags for the specified entrypoint(s).

        Args:
            entrypoints: Single entrypoint or list of entrypoints.

        Returns:
            Newline separated ``<link>`` and ``<script>`` tags.
        """
        entries = normalize_entrypoints(entrypoints)
        if not entries:
            return markupsafe.Markup("")

        source = self.resolve_source()
        if isinstance(source, DevServer):
            logger.debug("Rendering %d Vite entrypoint(s) from dev server %s", len(entries), source.url)
            tags = self._dev_server_tags(source, entries)
        else:
            tags = self._manifest_tags(source, entries)
        return markupsafe.Markup("\n".join(tags))

    @staticmethod
    def _dev_server_tags(source: DevServer, entries: "list[str]") -> "list[str]":
        tags = [script_tag(f"{source.url}/@vite/client")]
        tags.extend(script_tag(f"{source.url}/{entry.lstrip('/')}") for entry in entries)
        return tags

    def _manifest_tags(self, source: BuildManifest, entries: "list[str]") -> "list[str]":
        assets = self.resolve_assets(source.entries, entries)
        return [
            *(style_tag(self.asset_url(path)) for path in assets.styles),
            *(script_tag(self.asset_url(path)) for path in assets.scripts),
        ]

    def resolve_assets(self, manifest: "Mapping[str, Any]", entries: "list[str]") -> ResolvedAssets:
        """Collect the css and script files declared by manifest entries.

        Args:
            manifest: The parsed manifest.
            entries: Normalized entrypoints in caller order.

        Returns:
            The de-duplicated assets, first occurrence wins.

        Raises:
            EntryNotFoundError: If an entry is missing or is not an object.
        """
        assets = ResolvedAssets()
        for raw_entry in entries:
            entry = raw_entry.lstrip("/")
            record = manifest.get(entry)
            if not isinstance(record, Mapping):
                raise EntryNotFoundError(entry, str(self._config.manifest_file))

            css = record.get("css")
            if isinstance(css, list):
                for css_path in css:
                    if isinstance(css_path, str) and css_path:
                        assets.add_style(css_path)

            file_path = record.get("file")
            if isinstance(file_path, str) and file_path:
                assets.add_script(file_path)
        return assets

    def asset_url(self, path: str) -> str:
        """Root a built asset path at the configured build base.

        Returns:
            The public URL of the asset.
        """
        base = "/" + self._config.build_base.strip("/")
        return f"{base.rstrip('/')}/{path.lstrip('/')}"

    def version(self) -> str:
        """Get a cache-busting version string.

        Never raises. Returns ``"dev"`` when a dev server is active, and also when
        the manifest is missing or cannot be hashed.

        Returns:
            The MD5 of the manifest file, or ``"dev"``.
        """
        if self.resolve_dev_server_url() is not None:
            return DEV_VERSION

        manifest_path = self._config.manifest_file
        try:
            if manifest_path.is_file():
                return file_md5(manifest_path)
        except OSError as exc:
            logger.debug("Could not hash Vite manifest %s: %s", manifest_path, exc)
        return DEV_VERSION

    def render_react_refresh_preamble(self) -> "markupsafe.Markup":
        """Render the React Fast Refresh preamble.

        Only generates output when a dev server is active.

        Returns:
            The inline module script, or empty markup.
        """
        dev_server_url = self.resolve_dev_server_url()
        if dev_server_url is None:
            return markupsafe.Markup("")

        nonce = self._config.csp_nonce
        nonce_attr = f' nonce="{escape_attr(nonce)}"' if nonce else ""
        refresh_url = js_string_literal(f"{dev_server_url}/@react-refresh")
        return markupsafe.Markup(
            f'<script type="module"{nonce_attr}>'
            f"import RefreshRuntime from {refresh_url};"
            "RefreshRuntime.injectIntoGlobalHook(window);"
            "window.$RefreshReg$ = () => {};"
            "window.$RefreshSig$ = () => (type) => type;"
            "window.__vite_plugin_react_preamble_installed__ = true;"
            "</script>"
        )
