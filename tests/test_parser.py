import textwrap

from md2pdf import markdown_parser
from md2pdf.events import (
    Alignment,
    CodeBlock,
    DisplayMath,
    Emphasis,
    End,
    Heading,
    Image,
    InlineMath,
    Link,
    List,
    ListItem,
    Paragraph,
    RawPassthrough,
    Start,
    Strikethrough,
    Table,
    TableCell,
    TableHead,
    TableRow,
    TaskMarker,
    Text,
)


def test_heading_and_emphasis_events():
    events = markdown_parser.parse_markdown("# Title\n\nHello *world*.")
    assert events == [
        Start(Heading(level=1)),
        Text("Title"),
        End(Heading(level=1)),
        Start(Paragraph()),
        Text("Hello "),
        Start(Emphasis()),
        Text("world"),
        End(Emphasis()),
        Text("."),
        End(Paragraph()),
    ]


def test_tight_list_hides_paragraphs():
    events = markdown_parser.parse_markdown("- a\n- b\n  - c")
    assert Start(Paragraph()) not in events
    assert events.count(Start(List(ordered=False, start=1))) == 2
    assert events.count(Start(ListItem())) == 3
    assert [e.text for e in events if isinstance(e, Text)] == ["a", "b", "c"]


def test_ordered_list_keeps_start_number():
    events = markdown_parser.parse_markdown("3. x\n4. y")
    assert events[0] == Start(List(ordered=True, start=3))


def test_table_structure_and_alignments():
    md_text = "| A | B |\n|:---|:---:|\n| 1 | 2 |"
    events = markdown_parser.parse_markdown(md_text)
    assert events[0] == Start(Table(alignments=(Alignment.LEFT, Alignment.CENTER)))
    assert Start(TableHead()) in events
    assert Start(TableRow()) in events
    assert events.count(Start(TableCell())) == 4
    assert isinstance(events[-1], End) and isinstance(events[-1].kind, Table)


def test_table_without_alignment_markers():
    events = markdown_parser.parse_markdown("| A | B |\n|---|---|\n| 1 | 2 |")
    assert events[0] == Start(Table(alignments=(Alignment.NONE, Alignment.NONE)))


def test_fenced_code_block():
    events = markdown_parser.parse_markdown("```rust\nlet x = 1;\n```")
    assert events == [
        Start(CodeBlock(language="rust")),
        Text("let x = 1;\n"),
        End(CodeBlock(language="rust")),
    ]


def test_link_image_and_strikethrough():
    events = markdown_parser.parse_markdown("[site](https://x.org) ![alt](img.png) ~~gone~~")
    assert Start(Link(dest="https://x.org")) in events
    assert Start(Image(dest="img.png")) in events
    image_at = events.index(Start(Image(dest="img.png")))
    assert events[image_at + 1] == Text("alt")
    assert Start(Strikethrough()) in events


def test_task_list_markers():
    events = markdown_parser.parse_markdown("- [x] done\n- [ ] todo")
    assert TaskMarker(checked=True) in events
    assert TaskMarker(checked=False) in events
    assert Text("done") in events
    assert Text("todo") in events


def test_math_events():
    md_text = textwrap.dedent(
        """
        Energy $E=mc^2$ here.

        $$
        S = \\pi r^2
        $$
        """
    )
    events = markdown_parser.parse_markdown(md_text)
    assert InlineMath("E=mc^2") in events
    assert DisplayMath("S = \\pi r^2") in events


def test_html_becomes_raw_passthrough():
    events = markdown_parser.parse_markdown("<div>hi</div>\n")
    assert any(isinstance(e, RawPassthrough) for e in events)
