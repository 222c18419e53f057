from __future__ import annotations

from typing import Iterable, Iterator, List, Sequence

from markdown_it import MarkdownIt
from mdit_py_plugins.tasklists import tasklists_plugin
from mdit_py_plugins.texmath import texmath_plugin

from . import events as ev

_ALIGNMENTS = {
    "left": ev.Alignment.LEFT,
    "center": ev.Alignment.CENTER,
    "right": ev.Alignment.RIGHT,
}

_INLINE_MATH = {"math_inline", "math_single"}
_DISPLAY_MATH = {"math_block", "math_block_eqno", "math_inline_double"}


def build_markdown() -> MarkdownIt:
    return (
        MarkdownIt("commonmark")
        .use(texmath_plugin)
        .use(tasklists_plugin)
        .enable(["table", "strikethrough"])
    )


def parse_markdown(text: str) -> List[ev.Event]:
    """Turn markdown source into the flat, ordered event list the transpiler consumes."""
    tokens = build_markdown().parse(text)
    return list(_block_events(tokens))


def _block_events(tokens: Sequence) -> Iterator[ev.Event]:
    # One entry per open container token; None marks containers that emit nothing.
    open_kinds: list[ev.BlockKind | None] = []
    in_thead = False
    for i, tok in enumerate(tokens):
        ttype = tok.type
        if ttype == "inline":
            yield from _inline_events(tok.children or [])
        elif ttype == "thead_open":
            in_thead = True
        elif ttype == "thead_close":
            in_thead = False
        elif ttype in ("tbody_open", "tbody_close"):
            continue
        elif tok.nesting == 1:
            kind = _open_kind(tok, tokens, i, in_thead)
            open_kinds.append(kind)
            if kind is not None:
                yield ev.Start(kind)
        elif tok.nesting == -1:
            kind = open_kinds.pop() if open_kinds else None
            if kind is not None:
                yield ev.End(kind)
        elif ttype in ("fence", "code_block"):
            language = tok.info.strip().split()[0] if ttype == "fence" and tok.info.strip() else None
            kind = ev.CodeBlock(language=language)
            yield ev.Start(kind)
            yield ev.Text(tok.content)
            yield ev.End(kind)
        elif ttype in _DISPLAY_MATH:
            yield ev.DisplayMath(tok.content.strip())
        elif ttype == "hr":
            yield ev.ThematicBreak()
        elif ttype == "html_block":
            yield ev.RawPassthrough(tok.content)


def _open_kind(tok, tokens: Sequence, index: int, in_thead: bool) -> ev.BlockKind | None:
    ttype = tok.type
    if ttype == "paragraph_open":
        # tight list items hide their paragraphs
        return None if tok.hidden else ev.Paragraph()
    if ttype == "heading_open":
        return ev.Heading(level=int(tok.tag[1]))
    if ttype == "blockquote_open":
        return ev.BlockQuote()
    if ttype == "bullet_list_open":
        return ev.List(ordered=False, start=1)
    if ttype == "ordered_list_open":
        start = tok.attrGet("start")
        return ev.List(ordered=True, start=int(start) if start is not None else 1)
    if ttype == "list_item_open":
        return ev.ListItem()
    if ttype == "table_open":
        return ev.Table(alignments=_table_alignments(tokens, index))
    if ttype == "tr_open":
        return ev.TableHead() if in_thead else ev.TableRow()
    if ttype in ("th_open", "td_open"):
        return ev.TableCell()
    return None


def _table_alignments(tokens: Sequence, index: int) -> tuple[ev.Alignment, ...]:
    aligns: list[ev.Alignment] = []
    i = index + 1
    while i < len(tokens):
        tok = tokens[i]
        if tok.type in ("thead_close", "table_close"):
            break
        if tok.type == "th_open":
            aligns.append(_cell_alignment(tok))
        i += 1
    return tuple(aligns)


def _cell_alignment(tok) -> ev.Alignment:
    style = str(tok.attrGet("style") or "")
    if style.startswith("text-align:"):
        return _ALIGNMENTS.get(style[len("text-align:"):].strip(), ev.Alignment.NONE)
    return ev.Alignment.NONE


def _inline_events(children: Iterable) -> Iterator[ev.Event]:
    open_kinds: list[ev.BlockKind | None] = []
    after_task_marker = False
    for tok in children:
        ttype = tok.type
        if ttype in ("text", "text_special"):
            content = tok.content
            if after_task_marker:
                content = content.lstrip()
                after_task_marker = False
            if content:
                yield ev.Text(content)
        elif ttype == "code_inline":
            yield ev.InlineCode(tok.content)
        elif ttype == "softbreak":
            yield ev.SoftBreak()
        elif ttype == "hardbreak":
            yield ev.HardBreak()
        elif ttype in _INLINE_MATH:
            yield ev.InlineMath(tok.content)
        elif ttype in _DISPLAY_MATH:
            yield ev.DisplayMath(tok.content.strip())
        elif ttype == "html_inline":
            if "task-list-item-checkbox" in tok.content:
                yield ev.TaskMarker(checked='checked="checked"' in tok.content)
                after_task_marker = True
            else:
                yield ev.RawPassthrough(tok.content)
        elif ttype == "image":
            kind = ev.Image(dest=tok.attrGet("src") or "")
            yield ev.Start(kind)
            yield from _inline_events(tok.children or [])
            yield ev.End(kind)
        elif tok.nesting == 1:
            kind = _inline_kind(tok)
            open_kinds.append(kind)
            if kind is not None:
                yield ev.Start(kind)
        elif tok.nesting == -1:
            kind = open_kinds.pop() if open_kinds else None
            if kind is not None:
                yield ev.End(kind)


def _inline_kind(tok) -> ev.BlockKind | None:
    if tok.type == "em_open":
        return ev.Emphasis()
    if tok.type == "strong_open":
        return ev.Strong()
    if tok.type == "s_open":
        return ev.Strikethrough()
    if tok.type == "link_open":
        return ev.Link(dest=tok.attrGet("href") or "")
    return None
