"""
assembler.py

Responsibility: Filesystem operations used to assemble a bundle.

Rules:
- No decision logic lives here; callers decide what to copy where.
- Errors are translated into the saverkit taxonomy at this boundary.
- A failed copy may leave a truncated destination file behind; it is reported, not cleaned up.
"""

from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path

from saverkit.errors import CopyFailed, ScaffoldFailed

logger = logging.getLogger(__name__)

EXECUTABLE_MODE = 0o755


def copy_file(src: str | Path, dst: str | Path) -> None:
    """
    Stream src into dst, creating any missing parent directories of dst.
    """
    src_path = Path(src)
    dst_path = Path(dst)
    try:
        with src_path.open("rb") as fin:
            dst_path.parent.mkdir(parents=True, exist_ok=True)
            with dst_path.open("wb") as fout:
                shutil.copyfileobj(fin, fout)
    except OSError as e:
        failed = e.filename if e.filename else src_path
        raise CopyFailed(failed, e.strerror or e) from e


def _raise_walk_error(e: OSError) -> None:
    raise CopyFailed(e.filename or "<unknown>", e.strerror or e) from e


def _iter_tree(root: Path) -> list[Path]:
    """
    Return every entry under root in deterministic lexicographic order.
    """
    entries: list[Path] = []
    for dirpath, dirnames, filenames in os.walk(root, onerror=_raise_walk_error):
        base = Path(dirpath)
        entries.extend(base / d for d in dirnames)
        entries.extend(base / f for f in filenames)
    entries.sort(key=lambda p: str(p.relative_to(root)).replace(os.sep, "/"))
    return entries


def copy_tree(src: str | Path, dst: str | Path) -> None:
    """
    Copy a file or a directory tree to dst.

    The first failing entry aborts the whole copy.
    """
    src_path = Path(src)
    dst_path = Path(dst)
    if not src_path.exists():
        raise CopyFailed(src_path, "no such file or directory")
    if not src_path.is_dir():
        copy_file(src_path, dst_path)
        return

    try:
        dst_path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise CopyFailed(dst_path, e.strerror or e) from e

    for entry in _iter_tree(src_path):
        target = dst_path / entry.relative_to(src_path)
        if entry.is_dir():
            try:
                target.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise CopyFailed(target, e.strerror or e) from e
        elif entry.is_file():
            copy_file(entry, target)
        else:
            # Dangling symlinks, sockets, fifos.
            raise CopyFailed(entry, "not a regular file or directory")


def scaffold(*dirs: str | Path) -> None:
    """
    Create each directory (and its parents). Existing directories are fine.
    """
    for d in dirs:
        try:
            Path(d).mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ScaffoldFailed(f"Could not create directory {d}: {e}") from e


def write_text(path: str | Path, text: str) -> None:
    p = Path(path)
    try:
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(text, encoding="utf-8", newline="\n")
    except OSError as e:
        raise ScaffoldFailed(f"Could not write {p}: {e}") from e


def fix_permissions(path: str | Path) -> bool:
    """
    Mark path as rwxr-xr-x. Failure is logged and reported as False, never raised.
    """
    try:
        os.chmod(path, EXECUTABLE_MODE)
    except OSError as e:
        logger.warning("Could not set executable permissions on %s: %s", path, e)
        return False
    return True
