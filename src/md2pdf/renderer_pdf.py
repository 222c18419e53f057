from __future__ import annotations

import logging
from pathlib import Path

import typst

from . import fonts
from .config import Config
from .errors import Diagnostic, RenderFailure

logger = logging.getLogger(__name__)


def render_pdf(markup: str, config: Config | None = None, root: Path | None = None) -> bytes:
    """Compile Typst markup into PDF bytes.

    ``root`` is the directory relative image paths are resolved against.
    Compilation errors are raised as :class:`RenderFailure`.
    """
    pool = fonts.get_font_pool()
    kwargs = {"font_paths": [str(path) for path in pool.directories], "format": "pdf"}
    if root is not None:
        kwargs["root"] = str(root)
    logger.debug("Compiling %d characters of Typst with %d font directories", len(markup), len(pool.directories))
    try:
        pdf = typst.compile(markup.encode("utf-8"), **kwargs)
    except typst.TypstError as exc:
        raise RenderFailure(_diagnostics(exc)) from exc
    return pdf


def _diagnostics(exc: Exception) -> list[Diagnostic]:
    message = getattr(exc, "message", None) or str(exc)
    diagnostics = [Diagnostic(message=str(message), severity="error")]
    for hint in getattr(exc, "hints", None) or []:
        diagnostics.append(Diagnostic(message=str(hint), severity="hint"))
    return diagnostics
