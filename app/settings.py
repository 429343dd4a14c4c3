import logging
import os
from dataclasses import dataclass
from typing import Optional

import yaml

logger = logging.getLogger(__name__)

CONFIG_ENV = "DEP_PARSER_CONFIG"
DEFAULT_CONFIG_PATH = os.path.join(os.path.dirname(__file__), "config", "parser.yml")


@dataclass
class ParserSettings:
    prune_enabled: bool = True
    prune_min_width: int = 4
    prune_cap: float = 0.2
    prune_ratio: float = 0.7
    max_spans: Optional[int] = 2000000
    root: int = 0
    model_path: str = "app/model/dep_model"
    batch_size: int = 256
    max_length: int = 128
    spacy_model: str = "ja_ginza"


_SECTIONS = {
    "prune": {"enabled": "prune_enabled", "min_width": "prune_min_width", "cap": "prune_cap", "ratio": "prune_ratio"},
    "search": {"max_spans": "max_spans", "root": "root"},
    "model": {"path": "model_path", "batch_size": "batch_size", "max_length": "max_length"},
    "tokenizer": {"spacy_model": "spacy_model"},
}


def settings_from_dict(data):
    if not isinstance(data, dict):
        raise ValueError(f"config must be a mapping, got {type(data).__name__}")

    values = {}
    for section, mapping in _SECTIONS.items():
        section_data = data.get(section) or {}
        if not isinstance(section_data, dict):
            raise ValueError(f"config section '{section}' must be a mapping")
        for key, value in section_data.items():
            if key not in mapping:
                logger.warning(f"[Config] Unknown key '{section}.{key}' ignored")
                continue
            values[mapping[key]] = value

    return ParserSettings(**values)


def load_settings(path=None):
    path = path or os.environ.get(CONFIG_ENV) or DEFAULT_CONFIG_PATH

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError:
        logger.warning(f"[Config] {path} not found, using defaults")
        return ParserSettings()

    settings = settings_from_dict(data)
    logger.info(f"[Config] Loaded parser settings from {path}")
    return settings
