"""Tar archive of the project source, served at ``GET /source``.

The archive is built in memory from the configured source directory.
Bytecode caches are skipped so the archive only carries source files.
"""

from __future__ import annotations

import io
import tarfile
from pathlib import Path

_SKIPPED_DIRS = {"__pycache__", ".pytest_cache", ".mypy_cache", ".git"}
_SKIPPED_SUFFIXES = {".pyc", ".pyo"}


def _exclude(info: tarfile.TarInfo) -> tarfile.TarInfo | None:
    parts = Path(info.name).parts
    if any(part in _SKIPPED_DIRS for part in parts):
        return None
    if Path(info.name).suffix in _SKIPPED_SUFFIXES:
        return None
    return info


def build_source_archive(source_dir: Path) -> bytes:
    """Pack *source_dir* into an uncompressed tar archive.

    Args:
        source_dir: Directory to archive.  Entries are stored under the
            directory's own name.

    Returns:
        The archive bytes.

    Raises:
        FileNotFoundError: If *source_dir* does not exist.
    """
    source_dir = Path(source_dir)
    if not source_dir.is_dir():
        raise FileNotFoundError(f"Source directory not found: {source_dir}")

    buffer = io.BytesIO()
    with tarfile.open(fileobj=buffer, mode="w") as archive:
        archive.add(source_dir, arcname=source_dir.name, filter=_exclude)
    return buffer.getvalue()
