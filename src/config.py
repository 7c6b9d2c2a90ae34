import os
import logging
from pathlib import Path

import yaml
from dotenv import load_dotenv

from todo.models import Filter, DEFAULT_FILTER
from todo.store import INSERT_POSITIONS

log = logging.getLogger("todostate.config")

# Project root is one level up from src/
PROJECT_ROOT = Path(__file__).resolve().parent.parent
CONFIG_DIR = PROJECT_ROOT / "config"

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def _as_bool(value, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    log.warning("Not a boolean: %r — using %s", value, default)
    return default


def _as_choice(value, choices, default: str) -> str:
    text = str(value).strip().lower()
    if text in choices:
        return text
    log.warning("Invalid value %r (expected one of %s) — using %s",
                value, ", ".join(choices), default)
    return default


def _as_int(value, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        log.warning("Not an integer: %r — using %d", value, default)
        return default


def load_config(config_path: str = None) -> dict:
    """Load configuration from YAML file with .env overrides."""
    load_dotenv(PROJECT_ROOT / ".env")

    yaml_path = Path(config_path) if config_path else CONFIG_DIR / "default.yaml"
    if not yaml_path.exists():
        log.warning("Config file not found: %s — using defaults", yaml_path)
        config = {}
    else:
        with open(yaml_path) as f:
            config = yaml.safe_load(f) or {}

    # Environment variable overrides
    store = config.setdefault("store", {}) or {}
    config["store"] = store
    store["exclusive_edit"] = _as_bool(
        os.environ.get("TODO_EXCLUSIVE_EDIT", store.get("exclusive_edit", False)), False)
    store["insert_position"] = _as_choice(
        os.environ.get("TODO_INSERT_POSITION", store.get("insert_position", "append")),
        INSERT_POSITIONS, "append")
    store["default_filter"] = _as_choice(
        os.environ.get("TODO_DEFAULT_FILTER", store.get("default_filter", DEFAULT_FILTER.value)),
        [f.value for f in Filter], DEFAULT_FILTER.value)

    ui = config.setdefault("ui", {}) or {}
    config["ui"] = ui
    ui["width"] = _as_int(os.environ.get("TODO_UI_WIDTH", ui.get("width", 480)), 480)

    logging_cfg = config.setdefault("logging", {}) or {}
    config["logging"] = logging_cfg
    logging_cfg["level"] = os.environ.get("LOG_LEVEL", logging_cfg.get("level", "INFO"))
    logging_cfg["file"] = os.environ.get("TODO_LOG_FILE", logging_cfg.get("file"))

    log.info(
        "Config loaded — exclusive_edit=%s, insert=%s, filter=%s",
        store["exclusive_edit"],
        store["insert_position"],
        store["default_filter"],
    )
    return config
