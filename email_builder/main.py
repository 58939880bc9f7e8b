"""Entry-point for the email template codec."""
from __future__ import annotations

import argparse
from dataclasses import replace
from pathlib import Path
from typing import List, Optional

from email_builder.model.document_model import Document
from email_builder.parser.document_parser import HtmlDocumentParser
from email_builder.parser.template_loader import TemplateImportError, read_template, write_template
from email_builder.renderer.html_renderer import HtmlRenderer
from email_builder.utils.logger import get_logger, set_level

LOGGER = get_logger(__name__)


def render_template(template_path: Path, output_path: Optional[Path] = None, *, width: Optional[int] = None) -> Path:
    """Load a JSON template and write the email HTML next to it (or to ``output_path``)."""
    document = read_template(template_path)
    if width is not None:
        document = replace(document, styles=replace(document.styles, width=width))
    output_path = output_path or template_path.with_suffix(".html")
    HtmlRenderer().write(document, output_path)
    return output_path


def import_html(html_path: Path, output_path: Optional[Path] = None) -> Document:
    """Parse previously exported HTML and save it as a JSON template."""
    if not html_path.exists():
        raise FileNotFoundError(f"HTML file not found: {html_path}")
    document = HtmlDocumentParser(html_path.read_text(encoding="utf-8")).parse()
    if not document.rows:
        LOGGER.warning("No rows recognized in %s; was it exported by this tool?", html_path.name)
    write_template(document, output_path or html_path.with_suffix(".json"))
    return document


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="email-builder", description="Convert email templates between JSON and email-safe HTML"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    commands = parser.add_subparsers(dest="command", required=True)

    render = commands.add_parser("render", help="Render a JSON template to HTML")
    render.add_argument("template", help="Path to the template JSON file")
    render.add_argument("--output", help="HTML file to write")
    render.add_argument("--width", type=int, help="Override the content width in pixels")

    importer = commands.add_parser("import", help="Rebuild a JSON template from exported HTML")
    importer.add_argument("html", help="Path to HTML previously exported by this tool")
    importer.add_argument("--output", help="Template JSON file to write")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)
    if args.verbose:
        set_level("DEBUG")
    try:
        if args.command == "render":
            output = render_template(
                Path(args.template), Path(args.output) if args.output else None, width=args.width
            )
            LOGGER.info("Rendered %s", output)
        else:
            import_html(Path(args.html), Path(args.output) if args.output else None)
    except (TemplateImportError, FileNotFoundError) as exc:
        LOGGER.error("%s", exc)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
