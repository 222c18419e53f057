import os
import re
import sys
import types
from pathlib import Path

import pytest

from md2pdf import cli, fonts, images, pipeline, renderer_pdf
from md2pdf.config import Config
from md2pdf.errors import Diagnostic, IOFailure, MetadataParseError, RenderFailure


class FakeTypstError(Exception):
    def __init__(self, message, hints=()):
        super().__init__(message)
        self.message = message
        self.hints = list(hints)


@pytest.fixture
def fake_typst(monkeypatch):
    calls = []

    def compile(source, **kwargs):
        calls.append((source, kwargs))
        if b"#fail" in source:
            raise FakeTypstError("unknown variable: fail", hints=["check the spelling"])
        return b"%PDF-1.7 fake"

    monkeypatch.setattr(renderer_pdf, "typst", types.SimpleNamespace(compile=compile, TypstError=FakeTypstError))
    monkeypatch.setattr(fonts, "_pool", fonts.FontPool(files=(Path("/fonts/a.ttf"), Path("/fonts/b.otf"))))
    return calls


def test_render_pdf_passes_source_and_fonts(fake_typst, tmp_path: Path):
    pdf = renderer_pdf.render_pdf("= Hi", Config(), root=tmp_path)
    assert pdf.startswith(b"%PDF")
    source, kwargs = fake_typst[0]
    assert source == "= Hi".encode("utf-8")
    assert kwargs["font_paths"] == [str(Path("/fonts"))]
    assert kwargs["root"] == str(tmp_path)
    assert kwargs["format"] == "pdf"


def test_render_failure_carries_diagnostics(fake_typst):
    with pytest.raises(RenderFailure) as excinfo:
        renderer_pdf.render_pdf("#fail")
    assert excinfo.value.diagnostics == [
        Diagnostic("unknown variable: fail", "error"),
        Diagnostic("check the spelling", "hint"),
    ]
    assert str(excinfo.value) == "error: unknown variable: fail\nhint: check the spelling"


def test_discover_fonts(tmp_path: Path):
    nested = tmp_path / "truetype" / "dejavu"
    nested.mkdir(parents=True)
    (nested / "DejaVuSans.ttf").write_bytes(b"")
    (tmp_path / "Other.OTF").write_bytes(b"")
    (tmp_path / "readme.txt").write_text("x", encoding="utf-8")
    pool = fonts.discover_fonts([tmp_path, tmp_path / "missing"])
    assert len(pool) == 2
    assert set(pool.directories) == {tmp_path, nested}


def test_font_pool_is_initialised_once(monkeypatch, tmp_path: Path):
    (tmp_path / "a.ttf").write_bytes(b"")
    monkeypatch.setattr(fonts, "_pool", None)
    searched = []

    def search_dirs():
        searched.append(True)
        return [tmp_path]

    monkeypatch.setattr(fonts, "font_search_dirs", search_dirs)
    first = fonts.get_font_pool()
    assert fonts.get_font_pool() is first
    assert len(searched) == 1
    assert len(first) == 1


def test_image_helpers():
    assert images.is_local_image("path/to/image.JPG")
    assert not images.is_local_image("document.pdf")
    assert images.is_remote_url("https://example.com/image.png")
    assert not images.is_remote_url("/local/path/image.png")


def test_convert_to_typst_full_document():
    markup = pipeline.convert_to_typst("---\ntitle: Report\n---\n# Intro\n\nSee [docs](https://d.io).")
    assert '[Report])' in markup
    assert "= Intro" in markup
    assert '#link("https://d.io")[docs]' in markup


def test_convert_file_writes_typst(tmp_path: Path):
    source = tmp_path / "doc.md"
    source.write_text("# Hello\n", encoding="utf-8")
    out = pipeline.convert_file(source, tmp_path / "out" / "doc.typ", Config(), typst_only=True)
    assert "= Hello" in out.read_text(encoding="utf-8")
    assert [p.name for p in out.parent.iterdir()] == ["doc.typ"]


def test_convert_file_missing_input(tmp_path: Path):
    with pytest.raises(IOFailure):
        pipeline.convert_file(tmp_path / "nope.md", tmp_path / "nope.pdf")


def test_convert_file_leaves_no_artifact_on_failure(fake_typst, tmp_path: Path):
    source = tmp_path / "bad.md"
    source.write_text("---\ntitle: [oops\n---\nbody", encoding="utf-8")
    with pytest.raises(MetadataParseError):
        pipeline.convert_file(source, tmp_path / "bad.pdf")
    assert not (tmp_path / "bad.pdf").exists()


def test_cli_renders_pdf(fake_typst, tmp_path: Path):
    source = tmp_path / "notes.md"
    source.write_text("# Notes\n\n- one\n- two\n", encoding="utf-8")
    assert cli.main([str(source), "--theme", "github", "--paper", "letter"]) == 0
    assert (tmp_path / "notes.pdf").read_bytes() == b"%PDF-1.7 fake"
    markup = fake_typst[0][0].decode("utf-8")
    assert 'paper: "us-letter"' in markup
    assert "- one\n- two\n" in markup


def test_cli_typst_output(tmp_path: Path):
    source = tmp_path / "notes.md"
    source.write_text("Hello\n", encoding="utf-8")
    assert cli.main([str(source), "--typst"]) == 0
    assert (tmp_path / "notes.typ").read_text(encoding="utf-8").endswith("Hello\n\n")


def test_cli_reports_errors(fake_typst, tmp_path: Path, capsys):
    source = tmp_path / "broken.md"
    source.write_text("---\n- not: [a mapping\n---\n", encoding="utf-8")
    assert cli.main([str(source)]) == 1
    assert capsys.readouterr().err.startswith("Error: ")
    assert not (tmp_path / "broken.pdf").exists()

    assert cli.main([str(tmp_path / "missing.md")]) == 1


@pytest.mark.skipif(sys.platform.startswith("win"), reason="POSIX permission bits")
def test_written_artifact_follows_umask(tmp_path: Path):
    source = tmp_path / "doc.md"
    source.write_text("# Hello\n", encoding="utf-8")
    old_mask = os.umask(0o022)
    try:
        out = pipeline.convert_file(source, tmp_path / "doc.typ", Config(), typst_only=True)
    finally:
        os.umask(old_mask)
    assert out.stat().st_mode & 0o777 == 0o644


def test_typst_requirement_has_error_type_and_bytes_input():
    # TypstError and bytes input to typst.compile both arrived in 0.13.4
    pyproject = (Path(__file__).resolve().parents[1] / "pyproject.toml").read_text(encoding="utf-8")
    match = re.search(r'"typst>=([0-9.]+)"', pyproject)
    assert match is not None
    assert tuple(int(part) for part in match.group(1).split(".")) >= (0, 13, 4)
