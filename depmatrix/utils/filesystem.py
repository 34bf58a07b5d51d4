"""
Filesystem utilities for depmatrix.

This module provides the read-only filesystem capability used while
scanning a project: safe text reads, ``package.json`` decoding, workspace
directory listing, plus an append helper for CI output files. All
filesystem errors are normalized to ``FileOperationError``; undecodable
manifests raise ``ManifestError``.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from depmatrix.utils.logger import get_logger
from depmatrix.exceptions import FileOperationError, ManifestError
from depmatrix.constants import MANIFEST_FILE_NAME, MAX_FILE_SIZE


logger = get_logger("filesystem")

PathLike = Union[str, Path]


def _validated_file(path: Path) -> Path:
    """Validate and resolve a file path."""
    if not path.exists():
        raise FileOperationError(
            f"File not found: {path}",
            file_path=str(path),
            operation="read",
        )
    if not path.is_file():
        raise FileOperationError(
            f"Not a file: {path}",
            file_path=str(path),
            operation="read",
        )
    return path.resolve()


def safe_read_file(
    file_path: PathLike,
    *,
    max_size: Optional[int] = MAX_FILE_SIZE,
    encoding: str = "utf-8",
) -> str:
    """Safely read a text file with optional size limits.

    Args:
        file_path: Path to the file.
        max_size: Maximum allowed file size in bytes (None disables limit).
        encoding: Text encoding.

    Returns:
        File contents as a string.
    """
    path = _validated_file(Path(file_path))
    size = path.stat().st_size

    if max_size is not None and size > max_size:
        raise FileOperationError(
            f"File too large: {size} bytes (max {max_size})",
            file_path=str(path),
            operation="read",
        )

    try:
        return path.read_text(encoding=encoding)
    except Exception as exc:
        raise FileOperationError(
            f"Failed to read file: {exc}",
            file_path=str(path),
            operation="read",
            original_error=exc,
        ) from exc


def append_text(file_path: PathLike, content: str) -> None:
    """Append *content* to a file, creating it when missing."""
    path = Path(file_path)
    try:
        with open(path, "a", encoding="utf-8") as fh:
            fh.write(content)
    except OSError as exc:
        raise FileOperationError(
            f"Failed to append to file: {exc}",
            file_path=str(path),
            operation="write",
            original_error=exc,
        ) from exc


class LocalFileSystem:
    """Read-only view of the local disk used by the dependency collector.

    The collector only needs two operations, so tests can substitute any
    object exposing the same methods.
    """

    def is_dir(self, path: Path) -> bool:
        return path.is_dir()

    def read_manifest(self, directory: Path) -> Optional[Dict[str, Any]]:
        """Return the decoded ``package.json`` of *directory*.

        Returns:
            The manifest object, or ``None`` when the directory has no
            manifest.

        Raises:
            FileOperationError: The manifest exists but cannot be read.
            ManifestError: The manifest is not a JSON object.
        """
        manifest = directory / MANIFEST_FILE_NAME
        if not manifest.is_file():
            return None

        text = safe_read_file(manifest)
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ManifestError(
                f"Invalid JSON: {exc.msg} at line {exc.lineno}",
                file_path=str(manifest),
            ) from exc

        if not isinstance(data, dict):
            raise ManifestError(
                "Manifest must contain a JSON object",
                file_path=str(manifest),
            )
        return data

    def list_subdirectories(self, directory: Path) -> List[Path]:
        """Return immediate child directories of *directory*, sorted by name."""
        try:
            children = [child for child in directory.iterdir() if child.is_dir()]
        except OSError as exc:
            raise FileOperationError(
                f"Failed to list directory: {exc}",
                file_path=str(directory),
                operation="list",
                original_error=exc,
            ) from exc
        return sorted(children, key=lambda p: p.name)
