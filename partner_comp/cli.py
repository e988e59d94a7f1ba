# partner_comp/cli.py
# Command-line interface entry point (argparse)
import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

import pandas as pd

from partner_comp.config.loaders import ConfigLoadError, load_settings
from partner_comp.config.models import DEFAULT_SETTINGS, EngineSettings
from partner_comp.engines.compensation import compute_compensation
from partner_comp.engines.md_hours import check_md_percentages
from partner_comp.logging_config import setup_logging
from partner_comp.reporting.metrics import compensation_table, results_to_frame
from partner_comp.scenario import Scenario, ScenarioLoadError, load_scenario

# Get logger for this module
logger = logging.getLogger(__name__)

# Directory for log files
LOG_DIR = Path("output_dev/comp_logs")


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Compute partner and employee compensation.")

    # Required arguments
    parser.add_argument(
        "--scenario",
        type=str,
        required=True,
        help="Path to the scenario YAML file."
    )

    # Optional arguments
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to an engine settings YAML file. Built-in defaults if omitted."
    )
    parser.add_argument(
        "--year",
        type=int,
        default=None,
        help="Only compute this fiscal year."
    )
    parser.add_argument(
        "--include-retired",
        action="store_true",
        help="Show prior-year retirees who did no partner work this year."
    )
    parser.add_argument(
        "--exclude-w2",
        action="store_true",
        help="Report transition W2 pay in the breakdown but leave it out of comp."
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Write per-physician results for every computed year to this CSV."
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging"
    )
    parser.add_argument(
        "--log-dir",
        type=str,
        default=str(LOG_DIR),
        help=f"Directory to store log files (default: {LOG_DIR})"
    )

    return parser.parse_args(argv)


def run_scenario(
    scenario: Scenario,
    settings: EngineSettings,
    year: Optional[int] = None,
    include_retired: bool = False,
    exclude_w2: bool = False,
) -> pd.DataFrame:
    """Compute every (or one) year of a scenario into a single results frame."""
    frames = []
    for fy in scenario.years:
        if year is not None and fy.year != year:
            continue
        if fy.year is None:
            logger.warning("Skipping a scenario year with no year number")
            continue

        for message in check_md_percentages(fy.physicians, fy.medical_director_hours, settings):
            logger.warning(f"{fy.year}: {message}")

        results = compute_compensation(
            fy.physicians,
            fy.year,
            fy,
            scenario.growth_rate(fy),
            include_retired=include_retired,
            exclude_w2_from_comp=exclude_w2,
            settings=settings,
        )
        frames.append(results_to_frame(results, year=fy.year))
        logger.info(f"Computed {len(results)} result(s) for {fy.year}")

    if not frames:
        return pd.DataFrame()
    return pd.concat(frames, ignore_index=True)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the compensation CLI."""
    args = parse_arguments(argv)
    setup_logging(log_dir=Path(args.log_dir), debug=args.debug)
    logger.info(f"Command line arguments: {sys.argv if argv is None else argv}")

    try:
        settings = load_settings(Path(args.config)) if args.config else DEFAULT_SETTINGS
        scenario = load_scenario(args.scenario)
    except (ConfigLoadError, ScenarioLoadError) as e:
        logger.error(f"Could not load inputs: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1

    results = run_scenario(
        scenario,
        settings,
        year=args.year,
        include_retired=args.include_retired,
        exclude_w2=args.exclude_w2,
    )
    if results.empty:
        print("No years to compute.", file=sys.stderr)
        return 1

    with pd.option_context("display.float_format", "{:,.2f}".format, "display.width", 160):
        for year, frame in results.groupby("year", sort=False):
            print(f"\n=== {scenario.name} {year} ===")
            print(frame.drop(columns="year").to_string(index=False))

        if args.year is None and len(scenario.years) > 1:
            print(f"\n=== {scenario.name}: compensation by year ===")
            print(compensation_table(scenario, settings, exclude_w2_from_comp=args.exclude_w2).to_string())

    if args.output:
        output = Path(args.output)
        output.parent.mkdir(parents=True, exist_ok=True)
        results.to_csv(output, index=False)
        logger.info(f"Wrote results to {output}")
        print(f"\nResults written to {output}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
