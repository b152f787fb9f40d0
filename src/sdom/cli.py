"""Command line entry point: render a page with event rehydration."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from sdom.config import load_config
from sdom.renderer import PageRenderer

logger = logging.getLogger(__name__)


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sdom-render",
        description="Execute server-side scripts of an HTML page and emit rehydrated markup.",
    )
    parser.add_argument(
        "input",
        help="HTML file to render, or '-' to read from stdin.",
    )
    parser.add_argument(
        "-o",
        "--output",
        dest="output",
        help="Write the rendered markup to this file (default: stdout).",
    )
    parser.add_argument(
        "--url",
        dest="url",
        default="about:blank",
        help="Address the page is served from (default about:blank).",
    )
    parser.add_argument(
        "--report-url",
        dest="report_url",
        help="Address the bootstrap script reports events to (default: the page itself).",
    )
    parser.add_argument(
        "--no-execute",
        dest="execute_scripts",
        action="store_const",
        const=False,
        help="Apply script context policies without running server scripts.",
    )
    parser.add_argument(
        "--log-level",
        dest="log_level",
        help="Log level (e.g., INFO, DEBUG).",
    )
    return parser


def main(argv: List[str] | None = None) -> int:
    """Render the input page and write the result."""

    parser = _build_arg_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(
            report_url=args.report_url,
            log_level=args.log_level,
            execute_scripts=args.execute_scripts,
        )
    except ValueError as e:
        parser.error(str(e))

    logging.basicConfig(level=config.log_level_number)

    if args.input == "-":
        markup = sys.stdin.read()
    else:
        markup = Path(args.input).read_text(encoding="utf-8")

    result = PageRenderer(config=config).render(markup, url=args.url)

    output: Optional[str] = args.output
    if output:
        Path(output).write_text(result.markup, encoding="utf-8")
        logger.info(f"Wrote {len(result.markup)} characters to {output}")
    else:
        sys.stdout.write(result.markup)
    return 0


if __name__ == "__main__":
    sys.exit(main())
