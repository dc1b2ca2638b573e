import logging
import os
from pathlib import Path

import json5

LOGGER = logging.getLogger(__name__)

CONFIG_PATH = Path(os.environ.get("CONFIG_PATH", "config.jsonc"))
DEFAULT_CONNECT_TIMEOUT = None


def _load_config(path: Path):
    if not path.is_file():
        return {}
    try:
        with path.open("r", encoding="utf-8") as fh:
            data = json5.load(fh)
    except (OSError, ValueError):
        LOGGER.exception("Failed to load configuration from %s", path)
        return {}
    if not isinstance(data, dict):
        LOGGER.warning("Ignoring %s: top-level value is not an object", path)
        return {}
    LOGGER.info("Loaded configuration from %s", path)
    return data


def _resolve_config():
    candidates = [CONFIG_PATH, Path.cwd() / "config.jsonc"]
    for candidate in candidates:
        cfg = _load_config(candidate)
        if cfg:
            return cfg
    LOGGER.debug("No configuration file found; falling back to environment variables")
    return {}


def get_env(name: str, default=None):
    return os.environ.get(name, default)


def get_setting(env_key: str, json_key: str, default=None):
    return os.environ.get(env_key) or CONFIG.get(json_key, default)


def get_connect_timeout():
    """Seconds to wait for the connection to open, or None for no limit."""
    raw = os.environ.get("HELLO_CONNECT_TIMEOUT")
    if raw is None:
        raw = CONFIG.get("connect_timeout", DEFAULT_CONNECT_TIMEOUT)
    if raw in (None, ""):
        return None
    try:
        value = float(raw)
    except (TypeError, ValueError):
        LOGGER.warning("Invalid connect timeout %r; connecting without a limit", raw)
        return DEFAULT_CONNECT_TIMEOUT
    return value if value > 0 else None


def setup_logging():
    raw = get_env("LOG_LEVEL", "INFO").upper()
    if raw not in ("DEBUG", "INFO", "WARN", "ERROR"):
        raw = "INFO"
    logging.basicConfig(
        level=getattr(logging, raw),
        format="[%(asctime)s] [%(levelname)s] %(message)s"
    )


setup_logging()
CONFIG = _resolve_config()
