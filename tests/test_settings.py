import json

import pytest

from itemdesk.settings import AppSettings, DialogSettings, load_app_settings


def test_defaults():
    settings = AppSettings()
    assert settings.store.directory.endswith("items")
    assert settings.session.owner_id
    assert settings.dialog.submit_timeout_seconds is None
    assert settings.ui.language is None


@pytest.mark.parametrize("raw, expected", [("", None), ("0", None), (-3, None), ("2.5", 2.5), (10, 10.0)])
def test_timeouts_are_normalised(raw, expected):
    assert DialogSettings(submit_timeout_seconds=raw).submit_timeout_seconds == expected


def test_blank_owner_falls_back_to_os_user():
    settings = AppSettings.model_validate({"session": {"owner_id": "  "}})
    assert settings.session.owner_id.strip()


def test_load_json_settings(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(
        json.dumps({"store": {"directory": str(tmp_path / "data")}, "ui": {"language": " ru "}}),
        encoding="utf-8",
    )
    settings = load_app_settings(path)
    assert settings.store.directory == str(tmp_path / "data")
    assert settings.ui.language == "ru"


def test_load_toml_settings(tmp_path):
    path = tmp_path / "settings.toml"
    path.write_text(
        '[session]\nowner_id = "alice"\n\n[dialog]\nsubmit_timeout_seconds = 30\n',
        encoding="utf-8",
    )
    settings = load_app_settings(path)
    assert settings.session.owner_id == "alice"
    assert settings.dialog.submit_timeout_seconds == 30.0


def test_invalid_settings_raise_value_error(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"store": {"workers": 0}}), encoding="utf-8")
    with pytest.raises(ValueError):
        load_app_settings(path)
