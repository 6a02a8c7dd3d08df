"""Wrappers for text file I/O with consistent encoding (UTF-8)."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

PathLike = Path | str


def read_text(path: PathLike, errors: str = "strict", **kwargs: Any) -> str:
    """Read path as text with UTF-8 encoding. Forwards extra kwargs to Path.read_text."""
    p = path if isinstance(path, Path) else Path(path)
    return p.read_text(encoding="utf-8", errors=errors, **kwargs)


def write_text(path: PathLike, text: str, **kwargs: Any) -> None:
    """Write text to path with UTF-8 encoding. Forwards extra kwargs to Path.write_text."""
    p = path if isinstance(path, Path) else Path(path)
    p.write_text(text, encoding="utf-8", **kwargs)


def temp_path_for(path: PathLike) -> Path:
    """Return the sibling temp file used while atomically rewriting *path*."""
    p = path if isinstance(path, Path) else Path(path)
    return p.with_name(f".{p.name}.tmp")


def write_text_atomic(path: PathLike, text: str) -> None:
    """Replace the content of *path* with *text* in one rename.

    The text goes to a sibling temp file first, then ``os.replace`` swaps it
    over the target, so a reader sees either the old or the new content.
    The temp file is removed if anything fails; the error propagates.
    """
    p = path if isinstance(path, Path) else Path(path)
    tmp = temp_path_for(p)
    try:
        write_text(tmp, text)
        # os.replace overwrites destination if it exists (required on Windows)
        os.replace(tmp, p)
    except OSError:
        tmp.unlink(missing_ok=True)
        raise
