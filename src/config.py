import copy
from pathlib import Path
from typing import Dict, Optional

import yaml
from loguru import logger


DEFAULT_CONFIG_PATH = "config/config.yaml"

DEFAULT_CONFIG: Dict = {
    'server': {
        'host': '127.0.0.1',
        'port': 8000
    },
    'logging': {
        'level': 'INFO',
        'file': 'logs/click_chess.log',
        'rotation': '100 MB',
        'retention': '30 days'
    },
    'assets': {
        'directory': 'images',
        'url_prefix': '/images'
    }
}


def _merge(base: Dict, override: Dict) -> Dict:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(config_path: Optional[str] = None) -> Dict:
    """
    Load configuration from a YAML file, filling gaps with defaults.

    Args:
        config_path: Path to the YAML file (defaults to config/config.yaml)

    Returns:
        Configuration dictionary
    """
    path = Path(config_path or DEFAULT_CONFIG_PATH)
    if not path.exists():
        logger.warning(f"Configuration file not found at {path}, using defaults")
        return copy.deepcopy(DEFAULT_CONFIG)

    with open(path) as f:
        loaded = yaml.safe_load(f) or {}

    if not isinstance(loaded, dict):
        raise ValueError(f"Configuration file {path} must contain a mapping")

    logger.info(f"Configuration loaded from {path}")
    return _merge(DEFAULT_CONFIG, loaded)
