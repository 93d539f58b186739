"""
Command line entry point for the Job Sequencer.

Examples:
    job-sequencer --scenario five_jobs --compare
    job-sequencer --jobs data/jobs.csv --json
    job-sequencer --random 12 --seed 3 --max-deadline 4
"""

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from models.job import Job
from scheduler.greedy_scheduler import GreedyScheduler
from utils.baseline_scheduler import BaselineScheduler, exhaustive_max_profit, MAX_EXHAUSTIVE_JOBS
from utils.config_loader import load_config
from utils.data_generator import (
    REFERENCE_SCENARIOS,
    create_scenario,
    export_schedule_to_csv,
    generate_random_jobs,
    load_jobs,
)
from utils.logger import get_logger, setup_logging

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_BAD_FILE = 1
EXIT_INVALID_INPUT = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="job-sequencer",
        description="Pick and order unit-time jobs to maximize profit within deadlines."
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--jobs", metavar="PATH", help="CSV, YAML or JSON file with job_id, deadline, profit")
    source.add_argument("--scenario", choices=sorted(REFERENCE_SCENARIOS), help="Use a built-in scenario")
    source.add_argument("--random", type=int, metavar="N", help="Generate N random jobs")

    parser.add_argument("--seed", type=int, default=None, help="Seed for --random")
    parser.add_argument("--max-deadline", type=int, default=5, help="Largest deadline for --random")
    parser.add_argument("--config", metavar="PATH", help="Policy file (default: config/default_policy.yaml)")
    parser.add_argument("--reject-duplicates", action="store_true",
                        help="Refuse inputs where two jobs share an ID")
    parser.add_argument("--compare", action="store_true",
                        help="Also run the baseline scheduler and, for small inputs, the exhaustive search")
    parser.add_argument("--json", action="store_true", help="Print the schedule as JSON")
    parser.add_argument("--export", metavar="PATH", help="Write the schedule to a CSV file")
    return parser


def _collect_jobs(args: argparse.Namespace) -> List[Job]:
    if args.jobs:
        return load_jobs(args.jobs)
    if args.scenario:
        return create_scenario(args.scenario)['jobs']
    return generate_random_jobs(args.random, max_deadline=args.max_deadline, seed=args.seed)


def _print_comparison(jobs: List[Job], greedy_profit: int):
    baseline_schedule, _ = BaselineScheduler().schedule(jobs)
    print(f"\nBaseline (slot-filling): {', '.join(baseline_schedule.job_ids) or '-'} "
          f"profit {baseline_schedule.total_profit}")

    if len(jobs) <= MAX_EXHAUSTIVE_JOBS:
        best_profit, best_ids = exhaustive_max_profit(jobs)
        verdict = "optimal" if greedy_profit >= best_profit else "below optimum"
        print(f"Exhaustive optimum:      {', '.join(best_ids) or '-'} "
              f"profit {best_profit} (greedy is {verdict})")
    else:
        print(f"Exhaustive optimum:      skipped (more than {MAX_EXHAUSTIVE_JOBS} jobs)")


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run the sequencer from the command line.

    Returns:
        Process exit status
    """
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args.config)
    except (OSError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_BAD_FILE

    policy = config['policy']
    setup_logging(policy.log_level, policy.log_format)

    try:
        jobs = _collect_jobs(args)
    except (OSError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_BAD_FILE

    scheduler = GreedyScheduler(
        reject_duplicate_ids=args.reject_duplicates or policy.reject_duplicate_ids
    )
    result = scheduler.schedule(jobs)

    if not result.is_ok:
        print("Invalid job input:", file=sys.stderr)
        for error in result.errors:
            print(f"  - {error}", file=sys.stderr)
        return EXIT_INVALID_INPUT

    schedule = result.schedule
    if args.json:
        print(json.dumps(schedule.to_dict(), indent=2))
    else:
        print(schedule.explanation)
        print(f"\nSequence: {', '.join(schedule.job_ids) or '-'}")

    if args.compare:
        _print_comparison(jobs, schedule.total_profit)

    if args.export:
        try:
            Path(args.export).write_text(export_schedule_to_csv(schedule))
        except OSError as e:
            print(f"error: {e}", file=sys.stderr)
            return EXIT_BAD_FILE
        logger.info("Wrote schedule to %s", args.export)

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
