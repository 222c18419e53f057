from __future__ import annotations

import logging

logger = logging.getLogger(__name__)

DEFAULT_THEME = "default"

_DEFAULT = """#set page(paper: "{paper}", margin: (x: 2.5cm, y: 2.5cm))
#set text(size: 11pt)
#set heading(numbering: none)
#set par(justify: true, leading: 0.65em)

#show heading.where(level: 1): it => {
  set text(size: 20pt, weight: "bold")
  block(above: 1.5em, below: 0.8em, it)
}

#show heading.where(level: 2): it => {
  set text(size: 16pt, weight: "bold")
  block(above: 1.3em, below: 0.6em, it)
}

#show heading.where(level: 3): it => {
  set text(size: 13pt, weight: "bold")
  block(above: 1.2em, below: 0.5em, it)
}

#show raw.where(block: true): it => {
  set text(size: 9pt)
  block(
    fill: luma(245),
    inset: 10pt,
    radius: 4pt,
    width: 100%,
    it
  )
}

#show raw.where(block: false): it => {
  box(
    fill: luma(240),
    inset: (x: 3pt, y: 0pt),
    outset: (y: 3pt),
    radius: 2pt,
    it
  )
}

#show link: it => {
  set text(fill: rgb("#0366d6"))
  underline(it)
}
"""

_GITHUB = """#set page(paper: "{paper}", margin: (x: 2cm, y: 2cm))
#set text(font: "Inter", size: 10.5pt)
#set heading(numbering: none)
#set par(justify: false, leading: 0.7em)

#show heading.where(level: 1): it => {
  set text(size: 24pt, weight: "bold")
  block(above: 1.2em, below: 0.5em, {
    it
    line(length: 100%, stroke: 0.5pt + luma(200))
  })
}

#show heading.where(level: 2): it => {
  set text(size: 18pt, weight: "bold")
  block(above: 1.2em, below: 0.5em, {
    it
    line(length: 100%, stroke: 0.5pt + luma(200))
  })
}

#show heading.where(level: 3): it => {
  set text(size: 14pt, weight: "bold")
  block(above: 1em, below: 0.4em, it)
}

#show raw.where(block: true): it => {
  set text(font: "Fira Code", size: 9pt)
  block(
    fill: rgb("#f6f8fa"),
    inset: 12pt,
    radius: 6pt,
    width: 100%,
    it
  )
}

#show raw.where(block: false): it => {
  set text(font: "Fira Code", size: 9pt)
  box(
    fill: rgb("#f6f8fa"),
    inset: (x: 4pt, y: 2pt),
    radius: 3pt,
    it
  )
}

#show link: it => {
  set text(fill: rgb("#0366d6"))
  it
}
"""

_ACADEMIC = """#set page(paper: "{paper}", margin: (x: 3cm, y: 3cm))
#set text(size: 12pt)
#set heading(numbering: "1.1")
#set par(justify: true, leading: 0.8em, first-line-indent: 1em)

#show heading.where(level: 1): it => {
  set text(size: 16pt, weight: "bold")
  block(above: 2em, below: 1em, it)
}

#show heading.where(level: 2): it => {
  set text(size: 14pt, weight: "bold")
  block(above: 1.5em, below: 0.8em, it)
}

#show heading.where(level: 3): it => {
  set text(size: 12pt, weight: "bold", style: "italic")
  block(above: 1.2em, below: 0.6em, it)
}

#show raw.where(block: true): it => {
  set text(font: "Menlo", size: 9pt)
  block(
    stroke: 0.5pt + luma(180),
    inset: 10pt,
    width: 100%,
    it
  )
}

#show raw.where(block: false): it => {
  set text(font: "Menlo", size: 10pt)
  it
}

#show link: it => {
  set text(fill: blue)
  it
}
"""

_MINIMAL = """#set page(paper: "{paper}", margin: (x: 2cm, y: 2cm))
#set text(font: "Inter", size: 11pt)
#set heading(numbering: none)
#set par(justify: false, leading: 0.65em)

#show heading.where(level: 1): it => {
  set text(size: 18pt, weight: "medium")
  block(above: 1.5em, below: 0.8em, it)
}

#show heading.where(level: 2): it => {
  set text(size: 14pt, weight: "medium")
  block(above: 1.2em, below: 0.6em, it)
}

#show heading.where(level: 3): it => {
  set text(size: 12pt, weight: "medium")
  block(above: 1em, below: 0.5em, it)
}

#show raw.where(block: true): it => {
  set text(size: 9pt)
  block(
    inset: 10pt,
    width: 100%,
    it
  )
}

#show link: it => {
  underline(it)
}
"""

THEME_TEMPLATES = {
    "default": _DEFAULT,
    "github": _GITHUB,
    "academic": _ACADEMIC,
    "minimal": _MINIMAL,
}


def get_theme_preamble(theme: str, paper: str) -> str:
    """Return the page/text setup for ``theme`` with ``paper`` substituted in.

    Unknown theme names resolve to the default theme.
    """
    template = THEME_TEMPLATES.get(theme)
    if template is None:
        logger.debug("Unknown theme %r, using %r", theme, DEFAULT_THEME)
        template = THEME_TEMPLATES[DEFAULT_THEME]
    return template.replace("{paper}", paper)
