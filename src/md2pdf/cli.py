from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from . import pipeline
from .config import PAPER_SIZES, THEMES, Config
from .errors import IOFailure, Md2PdfError
from .utils import configure_logging, resolve_output_path


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="md2pdf",
        description="Convert Markdown to PDF using Typst.",
    )
    parser.add_argument("input", type=str, help="Path to Markdown file")
    parser.add_argument("-o", "--output", type=str, help="Output path (defaults to the input name with .pdf)")
    parser.add_argument("--paper", default="a4", choices=PAPER_SIZES, help="Paper size")
    parser.add_argument("--theme", default="default", choices=THEMES, help="Document theme")
    parser.add_argument("--typst", action="store_true", help="Write the generated Typst source instead of a PDF")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(verbose=args.verbose)
    try:
        config = Config(paper_size=args.paper, theme=args.theme, verbose=args.verbose).validate()
        input_path = Path(args.input).expanduser()
        if not input_path.exists():
            raise IOFailure(f"Input file not found: {input_path}")
        output_path = resolve_output_path(input_path, args.output, suffix=".typ" if args.typst else ".pdf")

        logging.info("Converting %s to %s", input_path, output_path)
        pipeline.convert_file(input_path, output_path, config, typst_only=args.typst)
    except Md2PdfError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    logging.info("Done. Saved to %s", output_path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
