from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, List

import yaml

from .errors import MetadataParseError
from .escape import escape_content, escape_string

logger = logging.getLogger(__name__)

DELIMITER = "---"


@dataclass(frozen=True)
class Frontmatter:
    title: str | None = None
    author: str | None = None
    date: str | None = None
    keywords: List[str] = field(default_factory=list)
    abstract: str | None = None

    def is_empty(self) -> bool:
        return not (self.title or self.author or self.date or self.keywords or self.abstract)

    def to_typst_header(self) -> str:
        """Centered title/author/date lines, followed by a blank line."""
        parts: list[str] = []
        if self.title is not None:
            parts.append(f'#align(center, text(size: 24pt, weight: "bold")[{escape_content(self.title)}])')
        if self.author is not None:
            parts.append(f"#align(center, text(size: 12pt)[{escape_content(self.author)}])")
        if self.date is not None:
            parts.append(f'#align(center, text(size: 11pt, style: "italic")[{escape_content(self.date)}])')
        if parts:
            parts.append("")
        return "\n\n".join(parts)

    def to_typst_document_settings(self) -> str:
        """A ``#set document`` rule so the PDF carries the metadata."""
        args: list[str] = []
        if self.title is not None:
            args.append(f'title: "{escape_string(self.title)}"')
        if self.author is not None:
            args.append(f'author: "{escape_string(self.author)}"')
        if self.keywords:
            # trailing comma keeps a single keyword an array
            keywords = ", ".join(f'"{escape_string(k)}"' for k in self.keywords)
            args.append(f"keywords: ({keywords},)")
        if not args:
            return ""
        return f"#set document({', '.join(args)})\n"

    def to_typst_abstract(self) -> str:
        if not self.abstract:
            return ""
        return (
            "#align(center, block(width: 85%)[\n"
            "  #align(left)[*Abstract* \\\n"
            f"  {escape_content(self.abstract.strip())}]\n"
            "])\n"
        )


def extract_frontmatter(text: str) -> tuple[Frontmatter, str]:
    """Split a leading ``---`` delimited YAML header from the markdown body.

    Without both delimiters the text is returned untouched together with
    empty metadata.
    """
    content = text.lstrip()
    first_line = content.split("\n", 1)[0].rstrip("\r")
    if first_line != DELIMITER:
        return Frontmatter(), text

    after_open = content[len(DELIMITER):]
    end = after_open.find("\n" + DELIMITER)
    if end == -1:
        logger.debug("Front matter opened but never closed; treating as body text")
        return Frontmatter(), text

    yaml_text = after_open[:end].strip()
    body = after_open[end + len(DELIMITER) + 1:].lstrip()
    return parse_frontmatter(yaml_text), body


def parse_frontmatter(yaml_text: str) -> Frontmatter:
    try:
        data = yaml.safe_load(yaml_text) if yaml_text else None
    except yaml.YAMLError as exc:
        raise MetadataParseError(f"Invalid front matter: {exc}") from exc
    if data is None:
        return Frontmatter()
    if not isinstance(data, dict):
        raise MetadataParseError("Front matter must be a mapping of fields.")

    abstract = data.get("abstract", data.get("abstract_text"))
    return Frontmatter(
        title=_scalar(data.get("title"), "title"),
        author=_scalar(data.get("author"), "author"),
        date=_scalar(data.get("date"), "date"),
        keywords=_normalize_list(data.get("keywords")),
        abstract=_scalar(abstract, "abstract"),
    )


def _scalar(value: Any, key: str) -> str | None:
    if value is None:
        return None
    if isinstance(value, (dict, list, tuple)):
        raise MetadataParseError(f"Front matter field {key!r} must be a single value.")
    return str(value)


def _normalize_list(value) -> list[str]:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return [str(v) for v in value]
    return [str(value)]
