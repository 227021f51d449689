import json

from LiveCalc import config_manager


class TestLoadSettings:

    def test_defaults_when_file_missing(self):
        assert config_manager.load_setting_value("all") == config_manager.DEFAULT_SETTINGS
        assert config_manager.load_setting_value("shift_to_copy") is True

    def test_defaults_when_file_corrupt(self, isolated_settings):
        isolated_settings.write_text("{not json", encoding="utf-8")
        assert config_manager.load_setting_value("darkmode") is False

    def test_missing_keys_fall_back_individually(self, isolated_settings):
        isolated_settings.write_text('{"darkmode": true}', encoding="utf-8")
        settings = config_manager.load_setting_value("all")
        assert settings["darkmode"] is True
        assert settings["debug"] is False

    def test_unknown_key(self):
        assert config_manager.load_setting_value("no_such_setting") == 0


class TestSaveSettings:

    def test_round_trip(self, isolated_settings):
        settings = config_manager.load_setting_value("all")
        settings["darkmode"] = True
        assert config_manager.save_setting(settings) == settings
        assert json.loads(isolated_settings.read_text(encoding="utf-8"))["darkmode"] is True
        assert config_manager.load_setting_value("darkmode") is True

    def test_unwritable_location(self, tmp_path, monkeypatch):
        monkeypatch.setattr(config_manager, "config_json", tmp_path / "missing_dir" / "config.json")
        assert config_manager.save_setting({"darkmode": True}) == {}
