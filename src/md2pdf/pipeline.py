from __future__ import annotations

import logging
from pathlib import Path

from . import images, markdown_parser, renderer_pdf, transpiler
from .config import Config
from .frontmatter import extract_frontmatter
from .utils import read_markdown, write_atomic

logger = logging.getLogger(__name__)


def convert_to_typst(markdown: str, config: Config | None = None) -> str:
    """Markdown (with optional front matter) to Typst markup."""
    config = config or Config()
    frontmatter, body = extract_frontmatter(markdown)
    events = markdown_parser.parse_markdown(body)
    _check_images(events)
    return transpiler.to_typst(events, frontmatter, config)


def convert(markdown: str, config: Config | None = None, root: Path | None = None) -> bytes:
    """Markdown to PDF bytes."""
    config = config or Config()
    markup = convert_to_typst(markdown, config)
    return renderer_pdf.render_pdf(markup, config, root=root)


def convert_file(input_path: Path, output_path: Path, config: Config | None = None, typst_only: bool = False) -> Path:
    """Convert ``input_path`` and write the PDF (or Typst source) to ``output_path``.

    The output file is only created once conversion has fully succeeded.
    """
    config = config or Config()
    input_path = Path(input_path)
    output_path = Path(output_path)
    markdown = read_markdown(input_path)
    logger.debug("Markdown length: %d chars", len(markdown))

    if typst_only:
        data = convert_to_typst(markdown, config).encode("utf-8")
    else:
        data = convert(markdown, config, root=input_path.resolve().parent)
    write_atomic(output_path, data)
    return output_path


def _check_images(events) -> None:
    for dest in images.image_destinations(events):
        if images.is_remote_url(dest):
            logger.warning("Remote image %s cannot be embedded by Typst", dest)
        elif not images.is_local_image(dest):
            logger.warning("Image %s has an unsupported extension", dest)
