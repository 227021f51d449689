# config_manager.py
import json
from pathlib import Path

config_json = Path(__file__).resolve().parent.parent / "config.json"


# Used whenever config.json is missing, unreadable or lacks a key
DEFAULT_SETTINGS = {
    "darkmode": False,
    "debug": False,
    "shift_to_copy": True
}


def load_setting_value(key_value):
    settings_dict = dict(DEFAULT_SETTINGS)
    try:
        with open(config_json, 'r', encoding= 'utf-8') as f:
            stored = json.load(f)
        if isinstance(stored, dict):
            settings_dict.update(stored)

    except (FileNotFoundError, json.JSONDecodeError):
        pass


    if key_value == "all":
        return settings_dict

    else:
        return settings_dict.get(key_value, 0)


def save_setting(settings_dict):
    try:
        with open (config_json, 'w', encoding= 'utf-8') as f:
            json.dump(settings_dict, f, indent=4)
            return settings_dict

    except OSError:
        return{}



if __name__ == "__main__":
    print(load_setting_value("all"))
