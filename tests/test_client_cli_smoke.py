from apps.client.chart_client import build_payload, format_pretty, parse_args


def test_build_payload() -> None:
    assert build_payload("data/sample.json") == {"path": "data/sample.json", "format": "json"}
    assert build_payload("data/sample.json", "svg", "fdi") == {
        "path": "data/sample.json",
        "format": "svg",
        "numbering_system": "fdi",
    }


def test_parse_args_defaults() -> None:
    args = parse_args(["--url", "http://127.0.0.1:8000", "--path", "sample.json"])
    assert args.format == "json"
    assert args.numbering is None
    assert args.pretty is False


def test_format_pretty_smoke() -> None:
    view = {
        "subtitle": "Permanent Teeth • FDI Numbering",
        "patient": {"patient_name": "Ana Silva", "dentition": "Permanent Teeth"},
        "upper": {
            "right": [{"tooth_number": 8, "display_number": "11", "condition": "caries"}],
            "left": [{"tooth_number": 9, "display_number": "21", "condition": "healthy"}],
        },
        "lower": {"right": [], "left": []},
    }
    text = format_pretty(view)
    assert "Patient: Ana Silva" in text
    assert "upper: 11:caries | 21" in text
    assert "teeth with findings: 1" in text
