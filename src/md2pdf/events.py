from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Tuple, Union


class Alignment(Enum):
    NONE = "none"
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


@dataclass(frozen=True)
class BlockKind:
    """Base class for container kinds carried by Start/End events."""


@dataclass(frozen=True)
class Paragraph(BlockKind):
    pass


@dataclass(frozen=True)
class Heading(BlockKind):
    level: int


@dataclass(frozen=True)
class BlockQuote(BlockKind):
    pass


@dataclass(frozen=True)
class CodeBlock(BlockKind):
    language: str | None = None


@dataclass(frozen=True)
class List(BlockKind):
    ordered: bool = False
    start: int = 1


@dataclass(frozen=True)
class ListItem(BlockKind):
    pass


@dataclass(frozen=True)
class Emphasis(BlockKind):
    pass


@dataclass(frozen=True)
class Strong(BlockKind):
    pass


@dataclass(frozen=True)
class Strikethrough(BlockKind):
    pass


@dataclass(frozen=True)
class Link(BlockKind):
    dest: str


@dataclass(frozen=True)
class Image(BlockKind):
    dest: str


@dataclass(frozen=True)
class Table(BlockKind):
    alignments: Tuple[Alignment, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class TableHead(BlockKind):
    pass


@dataclass(frozen=True)
class TableRow(BlockKind):
    pass


@dataclass(frozen=True)
class TableCell(BlockKind):
    pass


@dataclass(frozen=True)
class Start:
    kind: BlockKind


@dataclass(frozen=True)
class End:
    kind: BlockKind


@dataclass(frozen=True)
class Text:
    text: str


@dataclass(frozen=True)
class InlineCode:
    code: str


@dataclass(frozen=True)
class RawPassthrough:
    html: str


@dataclass(frozen=True)
class SoftBreak:
    pass


@dataclass(frozen=True)
class HardBreak:
    pass


@dataclass(frozen=True)
class ThematicBreak:
    pass


@dataclass(frozen=True)
class TaskMarker:
    checked: bool


@dataclass(frozen=True)
class InlineMath:
    math: str


@dataclass(frozen=True)
class DisplayMath:
    math: str


Event = Union[
    Start,
    End,
    Text,
    InlineCode,
    RawPassthrough,
    SoftBreak,
    HardBreak,
    ThematicBreak,
    TaskMarker,
    InlineMath,
    DisplayMath,
]
