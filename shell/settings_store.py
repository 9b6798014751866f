import configparser
import logging
from pathlib import Path

from klondike.Core import GameConfig
from shell.ui_config import AUTO_COMPLETE_ORDER, LOG_LEVEL_ORDER, MAX_HISTORY_LIMIT

logger = logging.getLogger(__name__)

SETTINGS_PATH = Path(__file__).with_name("settings.ini")

DEFAULT_SETTINGS = {
    "seed": "",
    "history_limit": "50",
    "auto_complete": "instant",
    "log_level": "WARNING",
}


def _sanitize(settings):
    data = dict(DEFAULT_SETTINGS)
    data.update({k: str(v).strip() for k, v in settings.items() if k in DEFAULT_SETTINGS})

    if data["seed"]:
        try:
            data["seed"] = str(int(data["seed"]))
        except ValueError:
            data["seed"] = DEFAULT_SETTINGS["seed"]

    try:
        limit = int(data["history_limit"])
    except ValueError:
        limit = int(DEFAULT_SETTINGS["history_limit"])
    data["history_limit"] = str(min(max(limit, 1), MAX_HISTORY_LIMIT))

    if data["auto_complete"].lower() not in AUTO_COMPLETE_ORDER:
        data["auto_complete"] = DEFAULT_SETTINGS["auto_complete"]
    data["auto_complete"] = data["auto_complete"].lower()

    if data["log_level"].upper() not in LOG_LEVEL_ORDER:
        data["log_level"] = DEFAULT_SETTINGS["log_level"]
    data["log_level"] = data["log_level"].upper()
    return data


def load_settings():
    parser = configparser.ConfigParser()
    if not SETTINGS_PATH.exists():
        return dict(DEFAULT_SETTINGS)
    try:
        parser.read(SETTINGS_PATH, encoding="utf-8")
    except (configparser.Error, UnicodeDecodeError):
        logger.warning("unreadable settings file %s, using defaults", SETTINGS_PATH)
        return dict(DEFAULT_SETTINGS)
    if "game" not in parser:
        return dict(DEFAULT_SETTINGS)
    return _sanitize(dict(parser["game"]))


def save_settings(settings):
    parser = configparser.ConfigParser()
    parser["game"] = _sanitize(settings)
    SETTINGS_PATH.parent.mkdir(parents=True, exist_ok=True)
    with SETTINGS_PATH.open("w", encoding="utf-8") as f:
        parser.write(f)


def build_config(settings) -> GameConfig:
    data = _sanitize(settings)
    config = GameConfig()
    config.seed = int(data["seed"]) if data["seed"] else None
    config.historyLimit = int(data["history_limit"])
    config.autoComplete = data["auto_complete"] == "instant"
    return config
