import os

import pytest
from pydantic import ValidationError

from dentchart.core.config import DEFAULT_BASE_URL, Settings, load_env_file
from dentchart.core.schemas.dental import NumberingSystem


def test_load_env_file_sets_unset_variables(tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
    env_path = tmp_path / ".env"
    env_path.write_text("CLINIC_API_TOKEN=from_file\nCLINIC_ID=abc\n", encoding="utf-8")

    monkeypatch.delenv("CLINIC_API_TOKEN", raising=False)
    monkeypatch.delenv("CLINIC_ID", raising=False)

    loaded = load_env_file(env_path)

    assert os.getenv("CLINIC_API_TOKEN") == "from_file"
    assert os.getenv("CLINIC_ID") == "abc"
    assert loaded == {"CLINIC_API_TOKEN": "from_file", "CLINIC_ID": "abc"}


def test_load_env_file_keeps_existing_values(tmp_path, monkeypatch: pytest.MonkeyPatch) -> None:
    env_path = tmp_path / ".env"
    env_path.write_text("CLINIC_API_TOKEN=from_file\n", encoding="utf-8")

    monkeypatch.setenv("CLINIC_API_TOKEN", "from_env")

    assert load_env_file(env_path) == {}
    assert os.getenv("CLINIC_API_TOKEN") == "from_env"


def test_load_env_file_missing_file(tmp_path) -> None:
    assert load_env_file(tmp_path / "absent.env") == {}


def test_settings_defaults() -> None:
    settings = Settings.from_env({})
    assert settings.base_url == DEFAULT_BASE_URL
    assert settings.token is None
    assert settings.timeout == 30
    assert settings.max_retries == 3
    assert settings.numbering_system is NumberingSystem.UNIVERSAL
    assert settings.log_level == "INFO"


def test_settings_from_environment() -> None:
    settings = Settings.from_env(
        {
            "CLINIC_API_BASE_URL": "https://clinic.example/api/",
            "CLINIC_API_TOKEN": "tok",
            "CLINIC_ID": "c1",
            "CLINIC_API_TIMEOUT": "12.5",
            "CLINIC_API_MAX_RETRIES": "0",
            "DENTCHART_NUMBERING_SYSTEM": "FDI",
            "DENTCHART_LOG_LEVEL": "debug",
        }
    )
    assert settings.base_url == "https://clinic.example/api"
    assert settings.timeout == 12.5
    assert settings.max_retries == 0
    assert settings.numbering_system is NumberingSystem.FDI
    assert settings.log_level == "DEBUG"


def test_settings_reject_unknown_numbering() -> None:
    with pytest.raises(ValidationError):
        Settings.from_env({"DENTCHART_NUMBERING_SYSTEM": "iso"})
