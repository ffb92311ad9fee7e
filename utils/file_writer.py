#!/usr/bin/env python3
"""Read, back up and atomically replace documentation files."""

from __future__ import annotations

import os
import shutil
import tempfile
from pathlib import Path
from typing import Optional

from configs.config import Config


class DocumentWriteError(Exception):
    def __init__(self, message: str, code: str = "IO"):
        super().__init__(message)
        self.code = code


def read_document(path: str) -> str:
    try:
        with open(path, "r", encoding="utf-8", newline="") as f:
            return f.read()
    except OSError as e:
        raise DocumentWriteError(f"Failed to read {path}: {e}") from e


def backup_file(path: str, suffix: Optional[str] = None) -> Optional[Path]:
    """Copy ``path`` to a sibling ``<path><suffix>``; return None when there is nothing to back up."""
    src = Path(path)
    if not src.exists():
        return None
    dest = src.with_name(src.name + (suffix or Config.BACKUP_SUFFIX))
    try:
        shutil.copyfile(src, dest)
    except OSError as e:
        raise DocumentWriteError(f"Failed to back up {path}: {e}") from e
    return dest


def _current_umask() -> int:
    mask = os.umask(0)
    os.umask(mask)
    return mask


def write_atomic(path: str, content: str) -> None:
    """Write via a temp file in the same directory, fsync, then replace."""
    dest = Path(path)
    tmp_path = None
    try:
        dest.parent.mkdir(parents=True, exist_ok=True)
        tmp_fd, tmp_path = tempfile.mkstemp(dir=str(dest.parent), prefix=".tmp_", suffix=dest.suffix)
        with os.fdopen(tmp_fd, "w", encoding="utf-8", newline="") as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())
        # mkstemp creates 0600; keep the destination's mode or the umask default
        if dest.exists():
            shutil.copymode(dest, tmp_path)
        else:
            os.chmod(tmp_path, 0o666 & ~_current_umask())
        os.replace(tmp_path, dest)
    except OSError as e:
        if tmp_path and os.path.exists(tmp_path):
            os.remove(tmp_path)
        raise DocumentWriteError(f"Failed to write {path}: {e}") from e


def replace_document(path: str, content: str) -> Optional[Path]:
    """Back up the current file, then write the new content. Returns the backup path."""
    backup = backup_file(path)
    write_atomic(path, content)
    return backup
