"""Filesystem helpers for vite-assets."""

import hashlib
from pathlib import Path


def read_text_file(path: Path, *, encoding: str = "utf-8") -> str:
    """Read a text file with consistent encoding.

    Args:
        path: File path to read.
        encoding: Text encoding.

    Returns:
        File contents.
    """
    return path.read_text(encoding=encoding)


def read_hotfile_url(hotfile_path: Path) -> str:
    """Read and normalize the Vite hotfile URL.

    Returns:
        The Vite server URL from the hotfile, stripped of surrounding whitespace
        and trailing slashes.
    """
    return read_text_file(hotfile_path).strip().rstrip("/")


def file_md5(path: Path) -> str:
    """Hash a file's bytes.

    Returns:
        The hex MD5 digest of the file content.
    """
    return hashlib.md5(path.read_bytes(), usedforsecurity=False).hexdigest()
