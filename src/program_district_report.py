"""Thin orchestration CLI for the district report pipeline.

Parses arguments, configures logging and hands off to
:func:`src.pipeline.district_report.runner.run_from_config`. The process exit
status reflects the outcome of the run:

- ``0``: report published.
- ``1``: source table or service configuration could not be loaded.
- ``2``: synthesis failed, no report written.
- ``3``: report generated but could not be written.

Usage::

    python -m src.program_district_report --input ActionSteps.csv
"""

import argparse
import logging
import os
import sys
from pathlib import Path

from rich.console import Console

from src.config import (
    DEFAULT_CSV_DELIMITER,
    DISTRICT_ORDER_FIRST_SEEN,
    DISTRICT_ORDERS,
    LOG_DIR,
    LOG_FILENAME_DISTRICT_REPORT,
    LOG_FORMAT,
    ORIGINAL_CSV_PATH,
    OUTPUT_REPORT_FILE,
)
from src.exceptions import ConfigurationError, SourceLoadError
from src.pipeline.district_report.runner import EXIT_SETUP_FAILED, run_from_config
from src.pipeline.district_report.status import render_run_summary

logger = logging.getLogger(__name__)

EXIT_INTERRUPTED = 130


def configure_logging(level: str = "INFO", enable_file: bool = True) -> None:
    for h in logging.root.handlers[:]:
        logging.root.removeHandler(h)
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if enable_file:
        try:
            LOG_DIR.mkdir(exist_ok=True)
            handlers.insert(
                0,
                logging.FileHandler(LOG_DIR / LOG_FILENAME_DISTRICT_REPORT, mode="a"),
            )
        except Exception:
            pass
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=handlers,
    )


def parse_arguments(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Analyze school improvement action steps per district and "
        "synthesize a cross-district report."
    )
    parser.add_argument("-i", "--input", type=str, default=str(ORIGINAL_CSV_PATH))
    parser.add_argument("-o", "--output", type=str, default=str(OUTPUT_REPORT_FILE))
    parser.add_argument("-d", "--delimiter", type=str, default=DEFAULT_CSV_DELIMITER)
    parser.add_argument(
        "--district-order",
        choices=DISTRICT_ORDERS,
        default=DISTRICT_ORDER_FIRST_SEEN,
    )
    parser.add_argument(
        "--analyses-dir",
        type=str,
        default=None,
        help="Also save each district analysis in this directory",
    )
    parser.add_argument(
        "--no-echo", action="store_true", help="Do not print the report to the console"
    )
    parser.add_argument(
        "--log-level", type=str, default=os.environ.get("LOG_LEVEL", "INFO")
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_arguments(argv)
    disable_file = bool(
        os.environ.get("DISABLE_FILE_LOGS") or os.environ.get("PYTEST_CURRENT_TEST")
    )
    configure_logging(args.log_level, enable_file=not disable_file)
    logger.info("Starting district report pipeline")
    console = Console()
    try:
        result = run_from_config(
            Path(args.input),
            Path(args.output),
            delimiter=args.delimiter,
            district_order=args.district_order,
            analyses_dir=Path(args.analyses_dir) if args.analyses_dir else None,
            echo=not args.no_echo,
            console=console,
        )
    except (SourceLoadError, ConfigurationError) as error:
        logger.error("Run aborted: %s", error)
        return EXIT_SETUP_FAILED
    except KeyboardInterrupt:
        logger.warning("Processing interrupted by user (KeyboardInterrupt).")
        return EXIT_INTERRUPTED
    console.print(render_run_summary(result))
    logger.info("Run finished in state '%s'", result.state.value)
    return result.exit_code


if __name__ == "__main__":
    sys.exit(main())
