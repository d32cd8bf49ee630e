from __future__ import annotations

import argparse
import json
import sys
import urllib.error
import urllib.request
from pathlib import Path
from typing import Any, Dict, Optional

REPO_ROOT = Path(__file__).resolve().parents[2]


def build_payload(path: str, output_format: str = "json", numbering: Optional[str] = None) -> Dict[str, Any]:
    payload: Dict[str, Any] = {"path": path, "format": output_format}
    if numbering:
        payload["numbering_system"] = numbering
    return payload


def post_chart(url: str, payload: Dict[str, Any]) -> Any:
    data = json.dumps(payload).encode("utf-8")
    request = urllib.request.Request(
        f"{url.rstrip('/')}/v1/chart",
        data=data,
        headers={"Content-Type": "application/json"},
        method="POST",
    )
    with urllib.request.urlopen(request, timeout=60) as response:
        raw = response.read().decode("utf-8", errors="replace")
    if payload.get("format", "json") == "json":
        return json.loads(raw)
    return raw


def _cell(glyph: Dict[str, Any]) -> str:
    label = glyph.get("display_number") or str(glyph.get("tooth_number", "?"))
    condition = glyph.get("condition") or "healthy"
    return label if condition == "healthy" else f"{label}:{condition}"


def format_pretty(view: Dict[str, Any]) -> str:
    lines = []
    patient = view.get("patient") or {}
    if patient:
        lines.append(f"Patient: {patient.get('patient_name', 'Unknown Patient')} | {patient.get('dentition', '')}")
    lines.append(view.get("subtitle") or "")
    for key in ("upper", "lower"):
        row = view.get(key) or {}
        right = " ".join(_cell(glyph) for glyph in row.get("right") or [])
        left = " ".join(_cell(glyph) for glyph in row.get("left") or [])
        lines.append(f"{key:>5}: {right} | {left}")
    findings = [
        glyph
        for key in ("upper", "lower")
        for side in ("right", "left")
        for glyph in (view.get(key) or {}).get(side) or []
        if glyph.get("condition") not in (None, "healthy") or glyph.get("surface_markers")
    ]
    lines.append(f"teeth with findings: {len(findings)}")
    return "\n".join(lines)


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Render an odontogram via the chart API.")
    parser.add_argument("--url", required=True, help="Base API URL, e.g. http://127.0.0.1:8000")
    parser.add_argument("--path", required=True, help="Path to odontogram JSON.")
    parser.add_argument("--format", choices=["json", "svg", "markdown"], default="json")
    parser.add_argument("--numbering", choices=["universal", "palmer", "fdi"], default=None)
    parser.add_argument("--pretty", action="store_true", help="Print a text grid instead of JSON.")
    parser.add_argument("--debug", action="store_true", help="Print resolved path and URL.")
    return parser.parse_args(argv)


def main(argv: Optional[list[str]] = None) -> int:
    args = parse_args(argv)
    path = Path(args.path)
    if not path.is_absolute():
        path = (REPO_ROOT / path).resolve()
    if not path.exists():
        print(f"Path not found: {path}", file=sys.stderr)
        return 1
    if args.debug:
        print(f"resolved_path={path}")
        print(f"request_url={args.url.rstrip('/')}/v1/chart")
    payload = build_payload(str(path), args.format, args.numbering)
    try:
        result = post_chart(args.url, payload)
    except urllib.error.HTTPError as exc:
        body = exc.read().decode("utf-8", errors="replace") if hasattr(exc, "read") else ""
        print(body or str(exc), file=sys.stderr)
        return 1
    except Exception as exc:
        print(str(exc), file=sys.stderr)
        return 1

    if isinstance(result, str):
        print(result, end="")
    elif args.pretty:
        print(format_pretty(result))
    else:
        print(json.dumps(result, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
