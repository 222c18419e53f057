import pytest

from md2pdf.config import Config
from md2pdf.errors import InvalidConfiguration
from md2pdf.themes import THEME_TEMPLATES, get_theme_preamble


def test_defaults():
    config = Config()
    assert config.paper_size == "a4"
    assert config.theme == "default"
    assert config.verbose is False


@pytest.mark.parametrize(
    "paper, token",
    [("a4", "a4"), ("letter", "us-letter"), ("LEGAL", "us-legal"), ("tabloid", "a4")],
)
def test_paper_typst(paper, token):
    assert Config(paper_size=paper).paper_typst() == token


def test_validate_rejects_unknown_values():
    with pytest.raises(InvalidConfiguration):
        Config(paper_size="tabloid").validate()
    with pytest.raises(InvalidConfiguration):
        Config(theme="neon").validate()
    assert Config(theme="github", paper_size="letter").validate().theme == "github"


@pytest.mark.parametrize("theme", sorted(THEME_TEMPLATES))
def test_every_theme_substitutes_paper(theme):
    preamble = get_theme_preamble(theme, "us-legal")
    assert preamble.startswith('#set page(paper: "us-legal"')
    assert "{paper}" not in preamble


def test_unknown_theme_falls_back_to_default():
    assert get_theme_preamble("neon", "a4") == get_theme_preamble("default", "a4")
