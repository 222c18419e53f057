from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Iterable, Type

from . import events as ev
from .config import Config
from .escape import escape_string, escape_text
from .frontmatter import Frontmatter
from .themes import get_theme_preamble

logger = logging.getLogger(__name__)

MIN_FENCE = 3
_BACKTICK_RUN = re.compile(r"`+")

_ALIGN_NAMES = {
    ev.Alignment.LEFT: "left",
    ev.Alignment.CENTER: "center",
    ev.Alignment.RIGHT: "right",
    ev.Alignment.NONE: "left",
}

_WRAPPERS: dict[type, tuple[str, str]] = {
    ev.Emphasis: ("_", "_"),
    ev.Strong: ("*", "*"),
    ev.Strikethrough: ("#strike[", "]"),
}


@dataclass
class Frame:
    """One open container on the context stack."""

    kind: ev.BlockKind


@dataclass
class ListFrame(Frame):
    ordered: bool = False
    next_index: int = 1
    start: int = 1


@dataclass
class ListItemFrame(Frame):
    has_paragraph: bool = False


@dataclass
class CodeFrame(Frame):
    language: str | None = None
    content: list[str] = field(default_factory=list)


@dataclass
class LinkFrame(Frame):
    dest: str = ""
    label: list[str] = field(default_factory=list)


@dataclass
class ImageFrame(Frame):
    pass


@dataclass
class TableFrame(Frame):
    alignments: tuple[ev.Alignment, ...] = ()
    row: list[str] = field(default_factory=list)
    cell: list[str] | None = None


def to_typst(
    events: Iterable[ev.Event],
    frontmatter: Frontmatter | None = None,
    config: Config | None = None,
) -> str:
    return TypstConverter(config or Config()).convert(events, frontmatter or Frontmatter())


def code_fence(content: str) -> str:
    """Backtick fence one longer than any backtick run inside ``content``."""
    longest = max((len(run) for run in _BACKTICK_RUN.findall(content)), default=0)
    return "`" * max(MIN_FENCE, longest + 1)


class TypstConverter:
    """Fold a markdown event stream into Typst markup.

    An instance holds the state of a single conversion; create a new one per
    document.
    """

    def __init__(self, config: Config | None = None):
        self.config = config or Config()
        self.output = ""
        self.frames: list[Frame] = []

    # -- public -----------------------------------------------------------

    def convert(self, events: Iterable[ev.Event], frontmatter: Frontmatter | None = None) -> str:
        frontmatter = frontmatter or Frontmatter()
        self.output += get_theme_preamble(self.config.theme, self.config.paper_typst())
        self.output += "\n"

        if not frontmatter.is_empty():
            for fragment in (
                frontmatter.to_typst_document_settings(),
                frontmatter.to_typst_header(),
                frontmatter.to_typst_abstract(),
            ):
                if fragment:
                    self.output += fragment + "\n"

        count = 0
        for event in events:
            self.process_event(event)
            count += 1
        if self.frames:
            logger.debug("Dropping %d unclosed container(s) at end of input", len(self.frames))
            self.frames.clear()
        logger.debug("Converted %d events into %d characters of Typst", count, len(self.output))
        return self.output

    def process_event(self, event: ev.Event) -> None:
        if isinstance(event, ev.Start):
            self._start(event.kind)
        elif isinstance(event, ev.End):
            self._end(event.kind)
        elif isinstance(event, ev.Text):
            self._text(event.text)
        elif isinstance(event, ev.InlineCode):
            self._inline_code(event.code)
        elif isinstance(event, ev.RawPassthrough):
            pass  # raw HTML has no Typst equivalent
        elif isinstance(event, ev.SoftBreak):
            self._soft_break()
        elif isinstance(event, ev.HardBreak):
            self._hard_break()
        elif isinstance(event, ev.ThematicBreak):
            self.output += "\n#line(length: 100%)\n\n"
        elif isinstance(event, ev.TaskMarker):
            self._write("[x] " if event.checked else "[ ] ")
        elif isinstance(event, ev.InlineMath):
            self._write(f"${event.math}$")
        elif isinstance(event, ev.DisplayMath):
            self._write(f"\n$ {event.math} $\n")

    @property
    def list_depth(self) -> int:
        return sum(1 for frame in self.frames if isinstance(frame, ListFrame))

    @property
    def in_table(self) -> bool:
        return self._innermost(TableFrame) is not None

    # -- containers -------------------------------------------------------

    def _start(self, kind: ev.BlockKind) -> None:
        if isinstance(kind, ev.Paragraph):
            self._start_paragraph(kind)
        elif isinstance(kind, ev.Heading):
            if self.output:
                self.output += "\n"
            self.output += "=" * kind.level + " "
            self.frames.append(Frame(kind))
        elif isinstance(kind, ev.BlockQuote):
            self.output += "\n#quote(block: true)[\n"
            self.frames.append(Frame(kind))
        elif isinstance(kind, ev.CodeBlock):
            self.frames.append(CodeFrame(kind, language=kind.language or None))
        elif isinstance(kind, ev.List):
            self._start_list(kind)
        elif isinstance(kind, ev.ListItem):
            self._start_item(kind)
        elif isinstance(kind, (ev.Emphasis, ev.Strong, ev.Strikethrough)):
            self._write(_WRAPPERS[type(kind)][0])
            self.frames.append(Frame(kind))
        elif isinstance(kind, ev.Link):
            self.frames.append(LinkFrame(kind, dest=kind.dest))
        elif isinstance(kind, ev.Image):
            self._write(f'#image("{escape_string(kind.dest)}")')
            self.frames.append(ImageFrame(kind))
        elif isinstance(kind, ev.Table):
            self._start_table(kind)
        elif isinstance(kind, (ev.TableHead, ev.TableRow)):
            table = self._innermost(TableFrame)
            if table is not None:
                table.row = []
            self.frames.append(Frame(kind))
        elif isinstance(kind, ev.TableCell):
            table = self._innermost(TableFrame)
            if table is not None:
                table.cell = []
            self.frames.append(Frame(kind))

    def _end(self, kind: ev.BlockKind) -> None:
        if isinstance(kind, ev.Paragraph):
            if self._pop(ev.Paragraph) is not None:
                self._end_paragraph()
        elif isinstance(kind, ev.Heading):
            if self._pop(ev.Heading) is not None:
                self.output += "\n\n"
        elif isinstance(kind, ev.BlockQuote):
            if self._pop(ev.BlockQuote) is not None:
                self.output += "]\n\n"
        elif isinstance(kind, ev.CodeBlock):
            frame = self._pop(ev.CodeBlock)
            if isinstance(frame, CodeFrame):
                self._emit_code_block(frame)
        elif isinstance(kind, ev.List):
            if self._pop(ev.List) is not None and self.list_depth == 0:
                self.output += "\n"
        elif isinstance(kind, ev.ListItem):
            if self._pop(ev.ListItem) is not None:
                self._ensure_newline()
        elif isinstance(kind, (ev.Emphasis, ev.Strong, ev.Strikethrough)):
            if self._pop(type(kind)) is not None:
                self._write(_WRAPPERS[type(kind)][1])
        elif isinstance(kind, ev.Link):
            frame = self._pop(ev.Link)
            if isinstance(frame, LinkFrame):
                self._emit_link(frame)
        elif isinstance(kind, ev.Image):
            self._pop(ev.Image)
        elif isinstance(kind, ev.Table):
            if self._pop(ev.Table) is not None:
                self.output += ")\n\n"
        elif isinstance(kind, (ev.TableHead, ev.TableRow)):
            if self._pop(type(kind)) is not None:
                self._flush_row(head=isinstance(kind, ev.TableHead))
        elif isinstance(kind, ev.TableCell):
            if self._pop(ev.TableCell) is not None:
                table = self._innermost(TableFrame)
                if table is not None:
                    table.row.append("".join(table.cell or []))
                    table.cell = None

    def _start_paragraph(self, kind: ev.Paragraph) -> None:
        parent = self.frames[-1] if self.frames else None
        self.frames.append(Frame(kind))
        if self.in_table:
            return
        if isinstance(parent, ListItemFrame):
            # the first paragraph shares the marker line, later ones are indented under it
            if parent.has_paragraph:
                self._ensure_newline()
                self.output += "  " * self.list_depth
            parent.has_paragraph = True
            return
        if self.output.strip() and not self.output.endswith("\n"):
            self.output += "\n"

    def _end_paragraph(self) -> None:
        if self.in_table:
            return
        if isinstance(self.frames[-1] if self.frames else None, ListItemFrame):
            self._ensure_newline()
        else:
            self.output += "\n\n"

    def _start_list(self, kind: ev.List) -> None:
        if self.list_depth:
            self._ensure_newline()
        else:
            self.output += "\n"
        self.frames.append(ListFrame(kind, ordered=kind.ordered, next_index=kind.start, start=kind.start))

    def _start_item(self, kind: ev.ListItem) -> None:
        current = self._innermost(ListFrame)
        if current is not None:
            indent = "  " * (self.list_depth - 1)
            if not current.ordered:
                self.output += f"{indent}- "
            elif current.next_index == current.start and current.start != 1:
                # a List start other than 1 needs an explicit number; Typst counts on from it
                self.output += f"{indent}{current.next_index}. "
                current.next_index += 1
            else:
                self.output += f"{indent}+ "
                current.next_index += 1
        self.frames.append(ListItemFrame(kind))

    def _start_table(self, kind: ev.Table) -> None:
        aligns = tuple(kind.alignments)
        columns = ", ".join("auto" for _ in aligns)
        align = ", ".join(_ALIGN_NAMES[a] for a in aligns)
        self.output += f"\n#table(\n  columns: ({columns}),\n  align: ({align}),\n"
        self.frames.append(TableFrame(kind, alignments=aligns))

    def _flush_row(self, head: bool) -> None:
        table = self._innermost(TableFrame)
        if table is None:
            return
        cells = list(table.row)
        width = len(table.alignments)
        if width:
            cells = (cells + [""] * width)[:width]
        table.row = []
        if not cells:
            return
        if head:
            entries = [f"[*{cell}*]" for cell in cells]
        else:
            entries = [f"[{cell}]" for cell in cells]
        self.output += "  " + ", ".join(entries) + ",\n"

    def _emit_code_block(self, frame: CodeFrame) -> None:
        content = "".join(frame.content).rstrip()
        fence = code_fence(content)
        self.output += f"\n{fence}{frame.language or ''}\n{content}\n{fence}\n\n"

    def _emit_link(self, frame: LinkFrame) -> None:
        dest = escape_string(frame.dest)
        label = "".join(frame.label)
        if label:
            self._write(f'#link("{dest}")[{label}]')
        else:
            self._write(f'#link("{dest}")')

    # -- leaves -----------------------------------------------------------

    def _text(self, text: str) -> None:
        code = self._code_frame()
        if code is not None:
            code.content.append(text)
            return
        self._write(escape_text(text))

    def _inline_code(self, code: str) -> None:
        if "`" in code:
            self._write(f'#raw("{escape_string(code)}")')
        else:
            self._write(f"`{code}`")

    def _soft_break(self) -> None:
        code = self._code_frame()
        if code is not None:
            code.content.append("\n")
        elif not self.in_table:
            self._write(" ")

    def _hard_break(self) -> None:
        code = self._code_frame()
        if code is not None:
            code.content.append("\n")
        else:
            self._write(" \\\n")

    # -- helpers ----------------------------------------------------------

    def _write(self, text: str) -> None:
        """Append inline text to the innermost open sink."""
        for frame in reversed(self.frames):
            if isinstance(frame, LinkFrame):
                frame.label.append(text)
                return
            if isinstance(frame, ImageFrame):
                return  # alt text has no place in #image
            if isinstance(frame, TableFrame):
                if frame.cell is not None:
                    frame.cell.append(text)
                return
        self.output += text

    def _ensure_newline(self) -> None:
        if self.output and not self.output.endswith("\n"):
            self.output += "\n"

    def _code_frame(self) -> CodeFrame | None:
        if self.frames and isinstance(self.frames[-1], CodeFrame):
            return self.frames[-1]
        return None

    def _innermost(self, frame_type: Type[Frame]):
        for frame in reversed(self.frames):
            if isinstance(frame, frame_type):
                return frame
        return None

    def _pop(self, kind_type: type) -> Frame | None:
        """Close the innermost frame of ``kind_type`` along with anything left open inside it."""
        for index in range(len(self.frames) - 1, -1, -1):
            if isinstance(self.frames[index].kind, kind_type):
                frame = self.frames[index]
                del self.frames[index:]
                return frame
        return None
