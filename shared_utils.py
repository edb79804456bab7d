import copy
import logging.config
import os

import yaml

SETTINGS_FILE = "settings.yaml"

DEFAULT_SETTINGS = {
    "store": {
        "backend": "firestore",
        "credentials": None,
        "project_id": None,
        "path": "data/inventory.db",
    },
    "logging": {
        "level": "INFO",
    },
}


# --- SETTINGS YAML HANDLER ---
def load_settings_yaml(file=SETTINGS_FILE):
    settings = copy.deepcopy(DEFAULT_SETTINGS)
    if os.path.exists(file):
        with open(file, "r") as f:
            loaded = yaml.safe_load(f) or {}
        for section, values in loaded.items():
            if isinstance(values, dict):
                settings.setdefault(section, {}).update(values)
            else:
                settings[section] = values
    return settings


def save_settings_yaml(settings, file=SETTINGS_FILE):
    with open(file, "w") as f:
        yaml.safe_dump(settings, f)


# --- LOGGING ---
def configure_logging(settings):
    level = str(settings.get("logging", {}).get("level", "INFO")).upper()
    logging.config.dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "plain": {"format": "%(asctime)s %(levelname)s %(name)s: %(message)s"},
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "plain",
            },
        },
        "root": {
            "handlers": ["console"],
            "level": level,
        },
    })
