"""Vite-Assets exception classes."""

__all__ = [
    "EntryNotFoundError",
    "ManifestError",
    "ManifestMalformedError",
    "ManifestNotFoundError",
    "ManifestUnreadableError",
    "ViteAssetsError",
]


class ViteAssetsError(Exception):
    """Base exception for Vite-Assets related errors."""


class ManifestError(ViteAssetsError):
    """Base exception for errors loading the Vite manifest."""

    def __init__(self, message: str, manifest_path: str) -> None:
        super().__init__(message)
        self.manifest_path = manifest_path


class ManifestNotFoundError(ManifestError):
    """Raised when the manifest file is not found."""

    def __init__(self, manifest_path: str) -> None:
        super().__init__(
            f"Vite manifest file not found at {manifest_path!r}. Did you forget to build your assets?",
            manifest_path,
        )


class ManifestUnreadableError(ManifestError):
    """Raised when the manifest file exists but cannot be read."""

    def __init__(self, manifest_path: str) -> None:
        super().__init__(f"Failed to read Vite manifest at {manifest_path!r}.", manifest_path)


class ManifestMalformedError(ManifestError):
    """Raised when the manifest is not a JSON object."""

    def __init__(self, manifest_path: str, reason: str = "invalid JSON") -> None:
        super().__init__(f"Invalid Vite manifest at {manifest_path!r}: {reason}.", manifest_path)
        self.reason = reason


class EntryNotFoundError(ViteAssetsError):
    """Raised when an entrypoint is not found in the manifest."""

    def __init__(self, entry: str, manifest_path: str) -> None:
        super().__init__(
            f"Vite entry {entry!r} not found in manifest at {manifest_path!r}. "
            "Did you forget to build your assets after an update?"
        )
        self.entry = entry
        self.manifest_path = manifest_path
