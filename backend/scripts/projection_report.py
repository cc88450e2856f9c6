#!/usr/bin/env python3
"""Monthly projection report: runs a plan file through the engine and writes a CSV.

The plan file is a JSON projection request: accounts, cashflows, and optionally
months_to_project, scenario / scenario_id and as_of.

Usage:
  cd backend
  python scripts/projection_report.py --input plan.json
  python scripts/projection_report.py --input plan.json --months 120 --scenario emergency-budget
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
import time
from pathlib import Path

# Add backend to path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from planner.models.projection import ProjectionRequest
from planner.services.projection_service import run_projection
from planner.services.report import projection_to_frame

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(message)s", datefmt="%H:%M:%S")
logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
REPORTS_DIR = PROJECT_ROOT / "reports"


def build_request(plan_json: str, months: int | None = None, scenario_id: str | None = None) -> ProjectionRequest:
    """Parse a plan file and apply command-line overrides.

    Overrides go through model validation, so a negative horizon is rejected
    the same way the HTTP route rejects it.
    """
    data = json.loads(plan_json)
    if months is not None:
        data["months_to_project"] = months
    if scenario_id:
        data["scenario"] = None
        data["scenario_id"] = scenario_id
    return ProjectionRequest.model_validate(data)


def main():
    parser = argparse.ArgumentParser(description="Write a month-by-month projection CSV")
    parser.add_argument("--input", required=True, help="Path to a JSON projection request")
    parser.add_argument("--months", type=int, help="Override months_to_project")
    parser.add_argument("--scenario", help="Preset scenario id (overrides the file's scenario_id)")
    parser.add_argument("--major-units", action="store_true",
                        help="Write money columns in major currency units instead of cents")
    parser.add_argument("--out", help="Output filename (default: projection.csv)")
    args = parser.parse_args()

    input_path = Path(args.input)
    if not input_path.exists():
        logger.error("Plan file not found: %s", input_path)
        sys.exit(1)

    try:
        request = build_request(input_path.read_text(encoding="utf-8"), args.months, args.scenario)
    except ValueError as e:
        logger.error("Invalid plan file: %s", e)
        sys.exit(1)

    t0 = time.time()
    try:
        result = run_projection(request)
    except ValueError as e:
        logger.error("Projection failed: %s", e)
        sys.exit(1)

    df = projection_to_frame(result, in_major_units=args.major_units)

    REPORTS_DIR.mkdir(exist_ok=True)
    out_path = REPORTS_DIR / (args.out or "projection.csv")
    df.to_csv(out_path, index=False)

    summary = result.summary
    logger.info("Net worth %d -> %d (return %d), avg savings rate %.1f%%",
                summary.start_net_worth, summary.end_net_worth, summary.total_return,
                summary.average_savings_rate * 100)
    for payoff in result.payoff_projections:
        logger.info("  %s paid off %s (%d months)", payoff.account_name,
                    payoff.projected_payoff_month, payoff.months_to_payoff)
    logger.info("Wrote %s (%d rows) in %.2fs", out_path, len(df), time.time() - t0)


if __name__ == "__main__":
    main()
