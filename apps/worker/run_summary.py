from __future__ import annotations

import argparse
import json
import sys

from pydantic import ValidationError

from dentchart.core.config import Settings, load_env_file
from dentchart.core.logs import configure_logging
from dentchart.ingest.normalizer import load_odontograms
from dentchart.pipeline.steps.snapshot import build_snapshot_from_odontogram
from dentchart.pipeline.steps.treatment import aggregate_stats


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Summarize treatment plans across odontogram exports.")
    parser.add_argument("path", help="Path to an odontogram JSON file or directory.")
    parser.add_argument("--json", action="store_true", help="Emit clinic stats as JSON.")
    parser.add_argument("--snapshots", action="store_true", help="Also print a snapshot per record.")
    args = parser.parse_args(argv)

    load_env_file()
    configure_logging(Settings.from_env().log_level)

    try:
        odontograms = load_odontograms(args.path)
    except FileNotFoundError as exc:
        print(str(exc), file=sys.stderr)
        return 1
    except ValidationError as exc:
        print(f"invalid odontogram: {exc}", file=sys.stderr)
        return 1
    except json.JSONDecodeError as exc:
        print(f"invalid JSON in {args.path}: {exc}", file=sys.stderr)
        return 1

    stats = aggregate_stats(odontograms)
    if args.json:
        print(stats.model_dump_json(indent=2))
    else:
        print(f"records: {len(odontograms)} | active patients: {stats.total_patients}")
        print(
            f"treatments: planned={stats.total_planned_treatments} "
            f"completed={stats.total_completed_treatments} "
            f"in_progress={stats.total_in_progress_treatments} "
            f"pending={stats.total_pending_treatments}"
        )
        print(f"estimated cost: {stats.total_estimated_cost:.2f}")
        print(f"completion rate: {stats.completion_rate:.0f}%")

    if args.snapshots:
        for odontogram in odontograms:
            print()
            print(build_snapshot_from_odontogram(odontogram))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
