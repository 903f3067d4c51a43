"""CLI entry point for the note renderer."""
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from ... import __version__
from ...application.file_processor import NoteRenderer
from ...application.watcher import watch
from ...domain.configuration import load_config, with_cli_overrides
from ...domain.errors import ConfigError
from ...shared.logging import configure_logger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="note-markdown",
        description="Render Markdown notes to HTML fragments",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Render stdin to stdout
  echo '# Title' | note-markdown

  # Render a directory of notes next to their sources
  note-markdown notes/

  # Render into a separate directory as full pages, and keep watching
  note-markdown notes/ --output-dir site/ --standalone --watch
        """,
    )
    parser.add_argument("inputs", nargs="*", help="Note files or directories (default: stdin)")
    parser.add_argument("--config", type=Path, help="Configuration JSON file")
    parser.add_argument("--output-dir", help="Directory for rendered HTML files")
    parser.add_argument("--ignore", nargs="*", default=[], help="Ignore patterns (gitignore syntax)")
    parser.add_argument("--ext", dest="extensions", nargs="*", default=[], help="Note file extensions")
    parser.add_argument("--standalone", action="store_true", help="Wrap output in a full HTML page")
    parser.add_argument("--watch", action="store_true", help="Re-render notes when they change")
    parser.add_argument("--log-level", help="Logging level (DEBUG, INFO, WARNING, ERROR)")
    parser.add_argument("--log-file", help="Also write logs to this file")
    parser.add_argument(
        "--show-config", action="store_true", help="Print the effective configuration as JSON and exit"
    )
    parser.add_argument("--version", action="store_true", help="Print version and exit")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    if args.version:
        print(__version__)
        return 0

    try:
        config = load_config(args.config)
    except ConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2

    config = with_cli_overrides(
        config,
        {
            "output_dir": args.output_dir,
            "ignore": args.ignore,
            "extensions": args.extensions,
            "standalone": args.standalone,
            "watch": args.watch,
            "log_level": args.log_level,
            "log_file": args.log_file,
        },
    )

    if args.show_config:
        print(json.dumps(config.to_dict(), indent=2))
        return 0

    logger = configure_logger(config.logging)
    renderer = NoteRenderer(config)

    if not args.inputs:
        if config.watch.enabled:
            logger.error("--watch needs at least one input path")
            return 2
        sys.stdout.write(renderer.render_text(sys.stdin.read()) + "\n")
        return 0

    report = renderer.render_all(args.inputs)
    logger.info(
        "Rendering complete: %d rendered, %d failed",
        len(report.rendered),
        len(report.failed),
    )

    if config.watch.enabled:
        watch(renderer, args.inputs)
        return 0

    return 0 if report.ok else 1


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
