"""Distribution metadata for vite-assets."""

from importlib import metadata as _metadata

__all__ = ("__project__", "__version__")

_DISTRIBUTION = "vite-assets"


def _read_metadata() -> "tuple[str, str]":
    try:
        dist = _metadata.distribution(_DISTRIBUTION)
    except _metadata.PackageNotFoundError:
        return "0.0.0", "vite-assets"
    return dist.version, dist.metadata["Name"]


__version__, __project__ = _read_metadata()
