from __future__ import annotations

import logging
import os
import sys
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

logger = logging.getLogger(__name__)

FONT_SUFFIXES = {".ttf", ".otf", ".ttc", ".otc"}

_lock = threading.Lock()
_pool: "FontPool | None" = None


@dataclass(frozen=True)
class FontPool:
    """Font files found on this machine, shared read-only by every render."""

    files: tuple[Path, ...] = ()

    @property
    def directories(self) -> tuple[Path, ...]:
        seen: dict[Path, None] = {}
        for path in self.files:
            seen.setdefault(path.parent, None)
        return tuple(seen)

    def __len__(self) -> int:
        return len(self.files)


def font_search_dirs() -> list[Path]:
    home = Path(os.environ.get("HOME", "~")).expanduser()
    if sys.platform == "darwin":
        return [Path("/System/Library/Fonts"), Path("/Library/Fonts"), home / "Library" / "Fonts"]
    if sys.platform.startswith("win"):
        windir = Path(os.environ.get("WINDIR", r"C:\Windows"))
        return [windir / "Fonts"]
    return [
        Path("/usr/share/fonts"),
        Path("/usr/local/share/fonts"),
        home / ".fonts",
        home / ".local" / "share" / "fonts",
    ]


def discover_fonts(directories: Iterable[Path]) -> FontPool:
    files: list[Path] = []
    for directory in directories:
        if not directory.is_dir():
            continue
        for path in sorted(directory.rglob("*")):
            if path.suffix.lower() in FONT_SUFFIXES and path.is_file():
                files.append(path)
    return FontPool(files=tuple(files))


def get_font_pool() -> FontPool:
    """Enumerate system fonts on first use; later calls return the same pool."""
    global _pool
    if _pool is None:
        with _lock:
            if _pool is None:
                _pool = discover_fonts(font_search_dirs())
                logger.debug("Loaded %d font files", len(_pool))
    return _pool
