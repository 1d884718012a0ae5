import argparse
from pathlib import Path
from typing import Optional, Sequence

from .core import report, run_pipeline
from .export import load_export, parse_export
from .state import SessionFactory
from .types import CONNECT_TIMEOUT, DEFAULT_WORKERS, READ_TIMEOUT, ExportError
from .ui import TerminalUI, configure_logging


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Download the media behind a saved-links HTML export.",
    )
    parser.add_argument("export", help="Path to the saved-links HTML export")
    parser.add_argument("-o", "--output", default="downloads", help="Output directory")
    parser.add_argument(
        "-w", "--workers", type=int, default=DEFAULT_WORKERS, help="Parallel downloads"
    )
    parser.add_argument(
        "--timeout",
        type=int,
        default=READ_TIMEOUT,
        help="Read timeout in seconds for every request",
    )
    parser.add_argument("--no-pretty", action="store_true", help="Disable coloured output")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    configure_logging()
    ui = TerminalUI(pretty=not args.no_pretty)

    try:
        html_text = load_export(Path(args.export))
    except ExportError as exc:
        ui.error(str(exc))
        return 1

    jobs = parse_export(html_text, Path(args.output), ui)
    ui.info(f"Loaded {len(jobs)} link(s) from {Path(args.export).name}")

    result = run_pipeline(
        jobs,
        ui=ui,
        workers=max(1, args.workers),
        timeout=(CONNECT_TIMEOUT, max(1, args.timeout)),
        sessions=SessionFactory(),
    )
    report(result, ui)
    return 0
