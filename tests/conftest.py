import pytest

from LiveCalc import config_manager


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Point config_manager at an empty temp dir so defaults are always used."""
    settings_file = tmp_path / "config.json"
    monkeypatch.setattr(config_manager, "config_json", settings_file)
    return settings_file
