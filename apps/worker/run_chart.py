from __future__ import annotations

import argparse
import json
import sys

from pydantic import ValidationError

from dentchart.core.config import Settings, load_env_file
from dentchart.core.logs import configure_logging
from dentchart.core.render.chart import ToothChart
from dentchart.core.render.markdown import render_chart_text, render_odontogram_report_md
from dentchart.core.render.svg import render_chart_svg
from dentchart.core.schemas.dental import NumberingSystem
from dentchart.ingest.normalizer import load_odontograms


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Render an odontogram export as a tooth chart.")
    parser.add_argument("path", help="Path to an odontogram JSON file or directory.")
    parser.add_argument(
        "--format", choices=["text", "svg", "markdown", "json"], default="text", help="Output format."
    )
    parser.add_argument(
        "--numbering",
        choices=[member.value for member in NumberingSystem],
        default=None,
        help="Display numbering system (defaults to the record's preference).",
    )
    parser.add_argument("--highlight", type=int, default=None, help="Tooth number to highlight.")
    parser.add_argument("--index", type=int, default=0, help="Which record to render when several are loaded.")
    args = parser.parse_args(argv)

    load_env_file()
    settings = Settings.from_env()
    configure_logging(settings.log_level)

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
    if not odontograms:
        print(f"No odontogram records found in {args.path}", file=sys.stderr)
        return 1
    if not 0 <= args.index < len(odontograms):
        print(f"--index out of range (found {len(odontograms)} records)", file=sys.stderr)
        return 1

    odontogram = odontograms[args.index]
    system = args.numbering or odontogram.numbering_system
    if args.format == "markdown":
        print(render_odontogram_report_md(odontogram, system), end="")
        return 0

    view = ToothChart(odontogram, numbering_system=system, highlight_tooth=args.highlight).render()
    if args.format == "svg":
        print(render_chart_svg(view), end="")
    elif args.format == "json":
        print(view.model_dump_json(indent=2))
    else:
        print(render_chart_text(view))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
