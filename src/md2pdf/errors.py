from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence


class Md2PdfError(Exception):
    """Base class for every failure surfaced by md2pdf."""


class MetadataParseError(Md2PdfError):
    """The YAML front matter could not be parsed."""


class InvalidConfiguration(Md2PdfError):
    """An option value is outside its allowed set."""


class IOFailure(Md2PdfError):
    """Reading the source or writing the artifact failed."""


@dataclass(frozen=True)
class Diagnostic:
    message: str
    severity: str = "error"

    def __str__(self) -> str:
        return f"{self.severity}: {self.message}"


class RenderFailure(Md2PdfError):
    """Typst rejected the generated markup."""

    def __init__(self, diagnostics: Sequence[Diagnostic]):
        self.diagnostics = list(diagnostics)
        super().__init__("\n".join(str(d) for d in self.diagnostics))
