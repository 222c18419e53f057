from __future__ import annotations

from dataclasses import dataclass

from .errors import InvalidConfiguration

PAPER_SIZES = ("a4", "letter", "legal")
THEMES = ("default", "github", "academic", "minimal")

_PAPER_TO_TYPST = {
    "letter": "us-letter",
    "legal": "us-legal",
}


@dataclass(frozen=True)
class Config:
    paper_size: str = "a4"
    theme: str = "default"
    verbose: bool = False

    def paper_typst(self) -> str:
        """Typst paper token; unknown sizes fall back to A4."""
        return _PAPER_TO_TYPST.get(self.paper_size.lower(), "a4")

    def validate(self) -> "Config":
        if self.paper_size.lower() not in PAPER_SIZES:
            raise InvalidConfiguration(
                f"Unknown paper size {self.paper_size!r}; expected one of {', '.join(PAPER_SIZES)}"
            )
        if self.theme not in THEMES:
            raise InvalidConfiguration(f"Unknown theme {self.theme!r}; expected one of {', '.join(THEMES)}")
        return self
