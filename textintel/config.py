# textintel/config.py
"""Handles loading and accessing the application configuration."""
import copy
import logging
import os
import threading
import time
import tomllib
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = {
    "engine": {
        "batch_workers": 8,
    },
    "guardrails": {
        "max_chars": 5000,
        "audit_log": True,
    },
    "server": {
        "host": "127.0.0.1",
        "port": 8000,
        "reload_config_seconds": 10,
        "cors_allow_origins": ["*"],
    },
}

CONFIG_PATH = os.environ.get("CONFIG_PATH", "config.toml")
_config_lock = threading.Lock()
_config: Dict[str, Any] = copy.deepcopy(DEFAULT_CONFIG)
_reloader_lock = threading.Lock()
_reloader: Optional[threading.Thread] = None


def _merge(user_cfg: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(DEFAULT_CONFIG)
    for k, v in user_cfg.items():
        if isinstance(v, dict) and isinstance(merged.get(k), dict):
            merged[k].update(v)
        else:
            merged[k] = v
    return merged


def _load_config(path: str = CONFIG_PATH):
    """Loads configuration from a TOML file and merges it with defaults."""
    global _config
    try:
        if os.path.exists(path):
            with open(path, "rb") as f:
                user_cfg = tomllib.load(f)
            merged = _merge(user_cfg)
        else:
            merged = copy.deepcopy(DEFAULT_CONFIG)
        with _config_lock:
            _config = merged
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning("[config] failed to load %s: %s", path, e)


def get_cfg() -> Dict[str, Any]:
    """Thread-safe access to the global configuration."""
    with _config_lock:
        return _config


def start_config_reloader() -> threading.Thread:
    """Starts the background reload thread once; later calls return the running thread.

    The thread exits when the reloaded config sets a non-positive interval.
    """
    global _reloader
    def loop():
        while True:
            _load_config()
            interval = get_cfg()["server"]["reload_config_seconds"]
            if interval <= 0:
                logger.info("[config] reload interval is %s, reloader stopped", interval)
                return
            time.sleep(interval)
    with _reloader_lock:
        if _reloader is None or not _reloader.is_alive():
            _reloader = threading.Thread(target=loop, name="config-reloader", daemon=True)
            _reloader.start()
        return _reloader


# Initial load
_load_config()
