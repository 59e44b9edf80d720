# main.py

"""Entry point for the pricegap application (TUI or headless CLI)."""

import argparse
import logging
import sys

from pricegap.config.logging_config import setup_logging

logger = logging.getLogger("pricegap.main")


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="pricegap",
        description=(
            "Compare prices of similar women's and men's personal-care "
            "products from the same brand."
        ),
        epilog=(
            "Required CSV columns: Brand, Product Name, Price, "
            "Active Ingredient, Inactive Ingredients "
            "(Gender Classification optional)."
        ),
    )
    parser.add_argument(
        "csv_path",
        nargs="?",
        default=None,
        help="Product CSV to analyse. Omit to launch the interactive TUI.",
    )
    parser.add_argument(
        "-t",
        "--threshold",
        type=float,
        default=None,
        help="Similarity a pair must exceed to be grouped (default: 0.3).",
    )
    parser.add_argument(
        "-f",
        "--format",
        choices=["json", "table"],
        default="json",
        dest="output_format",
        help="Output format (default: json).",
    )
    parser.add_argument(
        "-o",
        "--output",
        default=None,
        dest="output_dir",
        help="Custom output directory (default: results/).",
    )
    parser.add_argument(
        "--export",
        action="store_true",
        default=False,
        help="Write every stage table as CSV plus a JSON report.",
    )
    parser.add_argument(
        "--chart",
        action="store_true",
        default=False,
        help="Write an HTML bar chart of the price differences.",
    )
    parser.add_argument(
        "--legacy-gender",
        action="store_true",
        default=False,
        dest="legacy_gender",
        help=(
            "Infer missing gender with plain substring matching, "
            "where 'women' also matches 'men'."
        ),
    )
    return parser


def _run_tui() -> None:
    """Launch the interactive Textual wizard."""
    from pricegap.ui.app import PriceGapApp

    try:
        app = PriceGapApp()
        app.run()
    except Exception:
        logger.critical("Fatal error during TUI run", exc_info=True)
        raise
    finally:
        logger.info("pricegap TUI shutting down")


def _run_cli(args: argparse.Namespace) -> None:
    """Run the headless analysis and exit."""
    from pricegap.cli.runner import cli_analyze

    exit_code = cli_analyze(
        csv_path=args.csv_path,
        threshold=args.threshold,
        output_format=args.output_format,
        output_dir=args.output_dir,
        export=args.export,
        chart=args.chart,
        legacy_gender=args.legacy_gender,
    )
    sys.exit(exit_code)


def main() -> None:
    """Route to TUI (no args) or headless CLI (CSV path provided)."""
    parser = _build_parser()
    args = parser.parse_args()

    tui = args.csv_path is None
    log_file = setup_logging(
        console_level=logging.CRITICAL if tui else logging.WARNING
    )
    logger.info("pricegap starting, log file: %s", log_file)

    if tui:
        _run_tui()
    else:
        _run_cli(args)


if __name__ == "__main__":
    main()
