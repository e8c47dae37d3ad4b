"""Vite-Assets configuration.

Values not passed explicitly fall back to environment variables, so the same
application code can run against a dev server locally and against a built
manifest in production:

- ``VITE_MANIFEST_PATH``: path to ``manifest.json``.
- ``VITE_HOT_FILE``: path to the hot file written by the Vite dev server.
- ``VITE_DEV_SERVER_URL``: explicit dev server URL, bypassing the hot file.
- ``VITE_ENV``: ``dev`` or ``prod``.
- ``ASSET_URL``: public URL prefix of the built assets.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal, cast

from litestar.exceptions import ImproperlyConfiguredException

__all__ = ("ENVIRONMENTS", "Environment", "ViteConfig")

Environment = Literal["dev", "prod"]
ENVIRONMENTS: "frozenset[str]" = frozenset({"dev", "prod"})


@dataclass(frozen=True)
class ViteConfig:
    """Configuration for resolving Vite assets.

    Attributes:
        manifest_path: Location of the ``manifest.json`` emitted by ``vite build``.
        hot_file: Location of the hot file. Its content is the dev server URL.
        dev_server_url: Explicit dev server URL. Takes precedence over the hot file.
        environment: ``"prod"`` never consults a dev server.
        build_base: Public URL prefix under which built assets are served.
        csp_nonce: Optional nonce added to the inline React refresh script.
    """

    manifest_path: "str | Path" = field(
        default_factory=lambda: Path(os.getenv("VITE_MANIFEST_PATH", "public/build/manifest.json"))
    )
    hot_file: "str | Path" = field(default_factory=lambda: Path(os.getenv("VITE_HOT_FILE", "public/hot")))
    dev_server_url: "str | None" = field(default_factory=lambda: os.getenv("VITE_DEV_SERVER_URL"))
    environment: Environment = field(default_factory=lambda: cast("Environment", os.getenv("VITE_ENV", "prod")))
    build_base: str = field(default_factory=lambda: os.getenv("ASSET_URL", "/build"))
    csp_nonce: "str | None" = None

    def __post_init__(self) -> None:
        """Normalize path types and validate the environment.

        Raises:
            ImproperlyConfiguredException: If ``environment`` is not ``dev`` or ``prod``.
        """
        if isinstance(self.manifest_path, str):
            object.__setattr__(self, "manifest_path", Path(self.manifest_path))
        if isinstance(self.hot_file, str):
            object.__setattr__(self, "hot_file", Path(self.hot_file))
        if not self.dev_server_url:
            object.__setattr__(self, "dev_server_url", None)

        environment = str(self.environment).strip().lower()
        if environment not in ENVIRONMENTS:
            msg = f"Invalid Vite environment {self.environment!r}. Expected one of: {', '.join(sorted(ENVIRONMENTS))}."
            raise ImproperlyConfiguredException(msg)
        object.__setattr__(self, "environment", environment)

    @property
    def is_prod(self) -> bool:
        """Whether the dev server lookup is disabled.

        Returns:
            True when running against a built manifest only.
        """
        return self.environment == "prod"

    @property
    def manifest_file(self) -> Path:
        return Path(self.manifest_path)

    @property
    def hot_file_path(self) -> Path:
        return Path(self.hot_file)
