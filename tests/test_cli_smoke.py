import json

from apps.worker import run_chart, run_summary
from tests.odontogram_samples import adult_record, child_record, write_record


def test_run_chart_text(tmp_path, capsys, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    path = write_record(tmp_path, "odontogram.json", adult_record())

    assert run_chart.main([str(path)]) == 0
    upper = capsys.readouterr().out.splitlines()[0]
    assert upper.startswith("1·X 2 3")


def test_run_chart_formats(tmp_path, capsys, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    path = write_record(tmp_path, "odontogram.json", adult_record())

    assert run_chart.main([str(path), "--format", "json", "--numbering", "palmer", "--highlight", "8"]) == 0
    view = json.loads(capsys.readouterr().out)
    assert view["numbering_system"] == "palmer"
    assert view["upper"]["right"][7]["highlighted"] is True

    assert run_chart.main([str(path), "--format", "svg"]) == 0
    assert capsys.readouterr().out.startswith("<svg")

    assert run_chart.main([str(path), "--format", "markdown"]) == 0
    assert "## Findings" in capsys.readouterr().out


def test_run_chart_missing_path(tmp_path, capsys, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    assert run_chart.main([str(tmp_path / "missing.json")]) == 1
    assert "not found" in capsys.readouterr().err


def test_run_chart_invalid_record(tmp_path, capsys, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    record = child_record()
    record["teeth_conditions"].append({"tooth_number": 8})
    path = write_record(tmp_path, "odontogram.json", record)
    assert run_chart.main([str(path)]) == 1
    assert "invalid odontogram" in capsys.readouterr().err


def test_run_summary_json(tmp_path, capsys, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    write_record(tmp_path, "a.json", adult_record())
    write_record(tmp_path, "b.json", {"data": {"odontogram": child_record()}})

    assert run_summary.main([str(tmp_path), "--json"]) == 0
    stats = json.loads(capsys.readouterr().out)
    assert stats["total_patients"] == 2
    assert stats["total_planned_treatments"] == 2


def test_run_summary_text_with_snapshots(tmp_path, capsys, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    write_record(tmp_path, "a.json", adult_record())

    assert run_summary.main([str(tmp_path), "--snapshots"]) == 0
    out = capsys.readouterr().out
    assert "completion rate: 50%" in out
    assert "Odontogram: 665f1c2a9b1e4a0012345678" in out


def test_workers_report_malformed_json(tmp_path, capsys, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")

    assert run_chart.main([str(path)]) == 1
    assert "invalid JSON" in capsys.readouterr().err
    assert run_summary.main([str(path)]) == 1
    assert "invalid JSON" in capsys.readouterr().err
