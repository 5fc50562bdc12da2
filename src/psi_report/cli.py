"""Command-line interface for psi-report."""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Optional

from psi_report.config import Config, ReportOptions
from psi_report.constants import FORMAT_CLI, FORMAT_JSON, STRATEGIES
from psi_report.exceptions import PSIReportError
from psi_report.external.pagespeed_insights import PageSpeedInsightsAPI
from psi_report.logging_config import setup_logging
from psi_report.pipeline import run_report
from psi_report.threshold import ReportOutcome

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_THRESHOLD_FAILED = 1
EXIT_ERROR = 2


def build_parser(config: Config) -> argparse.ArgumentParser:
    """Build the argument parser; defaults come from the environment config."""
    parser = argparse.ArgumentParser(
        prog="psi-report",
        description="Render a PageSpeed Insights performance report and check it against a threshold.",
    )
    parser.add_argument("url", help="URL of the page to analyze")
    parser.add_argument(
        "--strategy",
        choices=STRATEGIES,
        default=config.psi_strategy,
        help=f"Analysis strategy (default: {config.psi_strategy})",
    )
    parser.add_argument(
        "--format",
        choices=[FORMAT_CLI, FORMAT_JSON],
        default=config.psi_format,
        help=f"Output format (default: {config.psi_format})",
    )
    parser.add_argument(
        "--threshold",
        type=int,
        default=None,
        help=f"Minimum performance score 0-100 (default: {config.default_threshold})",
    )
    parser.add_argument(
        "--links",
        action="store_true",
        help="Link opportunity titles to their documentation",
    )
    parser.add_argument(
        "--to-file",
        action="store_true",
        help="Also save the report and the full API response (json format only)",
    )
    parser.add_argument(
        "--file-path",
        default=None,
        help="Directory for files written by --to-file (default: current directory)",
    )
    parser.add_argument(
        "--key",
        default=config.google_psi_api_key,
        help="Google API key (default: GOOGLE_PSI_API_KEY)",
    )
    parser.add_argument(
        "--locale",
        default=config.psi_locale,
        help=f"Locale for audit text (default: {config.psi_locale})",
    )
    parser.add_argument(
        "--input",
        default=None,
        help="Render a saved API response instead of calling PageSpeed Insights",
    )
    parser.add_argument(
        "--log-level",
        default=config.log_level,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help=f"Logging level (default: {config.log_level})",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Optional log file path",
    )
    return parser


async def _load_payload(args: argparse.Namespace) -> dict:
    if args.input:
        with open(Path(args.input), "r", encoding="utf-8") as f:
            return json.load(f)

    client = PageSpeedInsightsAPI(api_key=args.key, strategy=args.strategy, locale=args.locale)
    data = await client.fetch(args.url)
    logger.debug(f"[PSI] Stats: {client.get_stats()}")
    return data


async def _run(args: argparse.Namespace, config: Config) -> ReportOutcome:
    payload = await _load_payload(args)
    options = ReportOptions(
        format=args.format,
        strategy=args.strategy,
        file_path=args.file_path,
        threshold=args.threshold,
        links=args.links,
        to_file=args.to_file,
    )
    return await run_report(payload, options, config)


def main(argv: Optional[list[str]] = None) -> int:
    """Entry point for the psi-report console script.

    Returns:
        0 when the threshold is met, 1 when it is not, 2 on errors
    """
    try:
        config = Config.from_env()
    except PSIReportError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR

    parser = build_parser(config)
    args = parser.parse_args(argv)

    setup_logging(level=args.log_level, log_file=args.log_file)

    try:
        outcome = asyncio.run(_run(args, config))
    except PSIReportError as e:
        logger.debug("Report run failed", exc_info=e.show_traceback)
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR
    except (OSError, json.JSONDecodeError) as e:
        logger.debug(f"Could not read input: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR

    if not outcome.passed:
        print(outcome.message, file=sys.stderr)
        return EXIT_THRESHOLD_FAILED
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
