"""CLI entry point for the price-movement feature pipeline."""

from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
from pathlib import Path

import pandas as pd

from stockpanel.config import ParseMode, PipelineConfig
from stockpanel.runner import build_panel, run_pipeline

logger = logging.getLogger(__name__)


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=None,
        help="Directory holding the input CSVs (default: data/)",
    )
    parser.add_argument(
        "--anchor-year",
        type=int,
        default=None,
        help="Year of the first data column in the metric files (default: 2022)",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail on malformed cells instead of treating them as 0",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Args:
        argv: Argument list (defaults to sys.argv[1:]).

    Returns:
        Parsed arguments namespace.
    """
    parser = argparse.ArgumentParser(
        prog="stockpanel",
        description="Build price-movement features from annual fundamentals",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    build_parser = subparsers.add_parser(
        "build", help="Build the feature matrix and report a summary"
    )
    _add_common_arguments(build_parser)

    panel_parser = subparsers.add_parser(
        "panel", help="Print the joined yearly records for specific tickers"
    )
    panel_parser.add_argument(
        "tickers",
        nargs="+",
        help="Ticker symbols to print",
    )
    _add_common_arguments(panel_parser)

    return parser.parse_args(argv)


def _build_config(args: argparse.Namespace) -> PipelineConfig:
    config = PipelineConfig()
    if args.data_dir is not None:
        config.data_dir = args.data_dir
    if args.anchor_year is not None:
        config.anchor_year = args.anchor_year
    if args.strict:
        config.parse_mode = ParseMode.STRICT
    return config


def run_build(args: argparse.Namespace) -> None:
    """Execute the build command.

    Args:
        args: Parsed CLI arguments.
    """
    config = _build_config(args)
    dataset = run_pipeline(config)

    tickers = {ticker for ticker, _ in dataset.keys}
    print(f"Feature rows: {dataset.n_rows} from {len(tickers)} tickers")
    for label, count in dataset.label_counts().items():
        print(f"  label {label}: {count}")


def run_panel(args: argparse.Namespace) -> None:
    """Execute the panel command.

    Args:
        args: Parsed CLI arguments (tickers plus common options).
    """
    config = _build_config(args)
    panel = build_panel(config.metric_paths(), config.price_path(), config)

    not_found = [t for t in args.tickers if t not in panel]
    if not_found:
        logger.warning("Tickers not found: %s", ", ".join(not_found))

    for ticker in args.tickers:
        records = panel.get(ticker)
        if not records:
            continue
        frame = pd.DataFrame([dataclasses.asdict(r) for r in records]).set_index("year")
        print(f"== {ticker}")
        print(frame.drop(columns=["ticker"]).to_string())


def main(argv: list[str] | None = None) -> None:
    """Main entry point.

    Args:
        argv: Argument list (defaults to sys.argv[1:]).
    """
    args = _parse_args(argv)

    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    if args.command == "build":
        run_build(args)
    elif args.command == "panel":
        run_panel(args)
    else:
        logger.error("Unknown command: %s", args.command)
        sys.exit(1)


if __name__ == "__main__":
    main()
