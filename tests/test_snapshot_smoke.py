import pytest

from dentchart.ingest.normalizer import normalize_odontogram
from dentchart.pipeline.steps.snapshot import build_snapshot, build_snapshot_from_odontogram
from tests.odontogram_samples import adult_record, child_record, write_record


def test_snapshot_lines() -> None:
    snapshot = build_snapshot_from_odontogram(normalize_odontogram(adult_record()))
    lines = snapshot.splitlines()
    assert lines[0].startswith("Odontogram: 665f1c2a9b1e4a0012345678 | patient=patient-1 | type=adult")
    assert "1 | Upper Right 3rd Molar | Missing" in lines
    assert "8 | Upper Right Central Incisor | Caries | mesial=filling" in lines
    assert "8 | grade 2" in lines
    assert "30 | Endodontic retreatment | urgent | cancelled | $500.00" in lines
    assert lines[-1] == "Progress: 1/2 completed (50%)"


def test_snapshot_uses_requested_numbering() -> None:
    snapshot = build_snapshot_from_odontogram(normalize_odontogram(child_record()), "palmer")
    assert "A | Lower Left Central Incisor | Sealant" in snapshot
    assert "E | Upper Right 2nd Molar | Healthy | occlusal=caries" in snapshot


def test_build_snapshot_from_file(tmp_path) -> None:
    path = write_record(tmp_path, "odontogram.json", {"success": True, "data": {"odontogram": adult_record()}})
    assert build_snapshot(str(path)).startswith("Odontogram:")


def test_build_snapshot_missing_path(tmp_path) -> None:
    with pytest.raises(FileNotFoundError):
        build_snapshot(str(tmp_path / "missing.json"))
