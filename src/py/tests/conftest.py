import json
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import pytest

from vite_assets.config import ViteConfig

# Environment variables that may affect test behavior - clear before each test
_VITE_ENV_VARS = [
    "VITE_MANIFEST_PATH",
    "VITE_HOT_FILE",
    "VITE_DEV_SERVER_URL",
    "VITE_ENV",
    "ASSET_URL",
]


@pytest.fixture(autouse=True)
def clean_vite_env(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Clear Vite-related environment variables before each test for isolation."""
    for var in _VITE_ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    yield


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def manifest_path(tmp_path: Path) -> Path:
    return tmp_path / "build" / "manifest.json"


@pytest.fixture
def hot_file(tmp_path: Path) -> Path:
    return tmp_path / "hot"


@pytest.fixture
def write_manifest(manifest_path: Path) -> Callable[..., Path]:
    def _write(content: "dict[str, Any] | str") -> Path:
        manifest_path.parent.mkdir(parents=True, exist_ok=True)
        text = content if isinstance(content, str) else json.dumps(content)
        manifest_path.write_text(text, encoding="utf-8")
        return manifest_path

    return _write


@pytest.fixture
def prod_config(manifest_path: Path, hot_file: Path) -> ViteConfig:
    return ViteConfig(manifest_path=manifest_path, hot_file=hot_file, environment="prod", build_base="/build")


@pytest.fixture
def dev_config(manifest_path: Path, hot_file: Path) -> ViteConfig:
    return ViteConfig(manifest_path=manifest_path, hot_file=hot_file, environment="dev", build_base="/build")
