"""Render the red wine EDA report: ``python -m wine_eda [--csv PATH] [--output PATH]``."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from wine_eda.report import ReportConfig, build_report


logger = logging.getLogger("wine_eda")


def _build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Render the red wine quality EDA report as a single HTML file.")
    p.add_argument(
        "--csv",
        type=Path,
        default=None,
        help="Input CSV. If omitted, wineQualityReds.csv in the project data directory is used.",
    )
    p.add_argument(
        "--output",
        type=Path,
        default=ReportConfig.output_path,
        help="Destination HTML file (default: %(default)s).",
    )
    p.add_argument(
        "--interactive",
        action="store_true",
        help="Also embed an interactive Plotly scatter (inlines plotly.js, ~4 MB).",
    )
    p.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: %(default)s).",
    )
    return p


def main(argv: list[str] | None = None) -> Path:
    args = _build_arg_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(levelname)s %(name)s: %(message)s")

    config = ReportConfig(csv_path=args.csv, output_path=args.output, interactive=args.interactive)
    output = build_report(config)
    logger.info("Done. Report written to %s", output)
    return output


if __name__ == "__main__":
    main()
