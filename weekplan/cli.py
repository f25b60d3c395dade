# weekplan/cli.py
import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from .config import configure_logging
from .models import CycleDetected
from .reporting import plot_daily_load, schedule_to_frame, unscheduled_to_frame
from .scheduler import generate_schedule
from .schemas import CYCLE_RESPONSE, ScheduleRequest, ScheduleResponse

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="weekplan",
        description="Place fixed and recurring tasks into a 15-minute weekly grid.",
    )
    p.add_argument("input", type=Path, help="Request JSON: {tasks: [...], dailyActiveHours: {...}}")
    p.add_argument("--out", type=Path, help="Write the response JSON here")
    p.add_argument("--plot", type=Path, help="Write a booked-hours-per-day chart (PNG)")
    p.add_argument(
        "--log-level",
        default=os.getenv("LOG_LEVEL", "INFO"),
        help="Logging level (default: $LOG_LEVEL or INFO)",
    )
    return p.parse_args(argv)


def load_request(path: Path) -> ScheduleRequest:
    with path.open("r", encoding="utf-8") as f:
        return ScheduleRequest.model_validate(json.load(f))


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    configure_logging(args.log_level)

    try:
        request = load_request(args.input)
    except (OSError, json.JSONDecodeError, ValidationError) as e:
        logger.error("Could not read %s: %s", args.input, e)
        return 1

    try:
        result = generate_schedule(request.to_tasks(), request.to_prefs())
    except CycleDetected as e:
        logger.error("Cycle detected among: %s", ", ".join(e.remaining))
        if args.out:
            args.out.write_text(json.dumps(CYCLE_RESPONSE, indent=2), encoding="utf-8")
        return 2

    blocks = schedule_to_frame(result)
    print("=== Schedule ===")
    print(blocks.to_string(index=False) if not blocks.empty else "(nothing placed)")

    missed = unscheduled_to_frame(result)
    if not missed.empty:
        print()
        print("=== Unscheduled ===")
        print(missed.to_string(index=False))

    if args.out:
        payload = ScheduleResponse.from_result(result).to_payload()
        args.out.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        logger.info("Wrote %s", args.out)

    if args.plot:
        plot_daily_load(result, args.plot)
        logger.info("Wrote %s", args.plot)

    return 0


if __name__ == "__main__":
    sys.exit(main())
