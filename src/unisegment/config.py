"""CLI config: YAML file merged over defaults."""
import logging
import os
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG = {
    "chunk_size": 4096,
    "show_positions": False,
    "separator": "\n",
    "log_level": "WARNING",
}

CONFIG_ENV = "UNISEGMENT_CONFIG"
CONFIG_PATH = Path(__file__).resolve().parent / "configs" / "unisegment.yaml"


def config_path() -> Path:
    env = os.environ.get(CONFIG_ENV)
    return Path(env) if env else CONFIG_PATH


def load_config(path: str | Path | None = None) -> dict:
    """Load config from path (or the default location). Missing or broken files give defaults."""
    p = Path(path) if path else config_path()
    if not p.exists():
        return dict(DEFAULT_CONFIG)
    try:
        with open(p, encoding="utf-8") as f:
            cfg = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.warning("Could not read config %s: %s", p, e)
        return dict(DEFAULT_CONFIG)
    if not isinstance(cfg, dict):
        logger.warning("Config %s is not a mapping, using defaults", p)
        return dict(DEFAULT_CONFIG)
    logger.debug("Loaded config from %s", p)
    return {**DEFAULT_CONFIG, **cfg}


def save_config(cfg: dict, path: str | Path | None = None) -> None:
    p = Path(path) if path else config_path()
    p.parent.mkdir(parents=True, exist_ok=True)
    with open(p, "w", encoding="utf-8") as f:
        yaml.safe_dump(cfg, f, allow_unicode=True, sort_keys=False)
