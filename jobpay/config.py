"""
Configuration loading.

Settings come from three places, later ones winning:

1. built‑in defaults;
2. an optional YAML file (``--config`` or ``JOBPAY_CONFIG``) with the
   sections ``store``, ``salary`` and ``logging``;
3. environment variables ``JOBPAY_DB_PATH`` and ``JOBPAY_LOG_LEVEL``,
   also read from a ``.env`` file.

See ``config.example.yaml`` for the file layout.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml  # type: ignore
from dotenv import load_dotenv

from .errors import ConfigError
from .salary.rules import DEFAULT_RULES, SalaryRules, rules_from_mapping

logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = "data/jobs.db"
DEFAULT_LOG_LEVEL = "INFO"


@dataclass(frozen=True)
class AppConfig:
    db_path: str = DEFAULT_DB_PATH
    log_level: str = DEFAULT_LOG_LEVEL
    rules: SalaryRules = field(default_factory=lambda: DEFAULT_RULES)


def _read_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise ConfigError(f"Configuration file not found: {path}")
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse YAML configuration {path}: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"{path} must contain a mapping at the top level")
    logger.debug("Loaded configuration from %s", path)
    return data


def _section(data: Dict[str, Any], name: str) -> Dict[str, Any]:
    value = data.get(name) or {}
    if not isinstance(value, dict):
        raise ConfigError(f"Configuration section '{name}' must be a mapping")
    return value


def load_config(config_path: Optional[str] = None) -> AppConfig:
    """Build the application config.

    Args:
        config_path: YAML file to read.  Falls back to ``JOBPAY_CONFIG``;
            with neither set only defaults and the environment apply.

    Raises:
        ConfigError: if the file is missing, unparseable or holds invalid
            salary settings.
    """
    load_dotenv()
    path = config_path or os.getenv("JOBPAY_CONFIG")
    data = _read_yaml(Path(path)) if path else {}

    store = _section(data, "store")
    logging_cfg = _section(data, "logging")
    rules = rules_from_mapping(_section(data, "salary"))

    db_path = os.getenv("JOBPAY_DB_PATH") or store.get("db_path") or DEFAULT_DB_PATH
    log_level = os.getenv("JOBPAY_LOG_LEVEL") or logging_cfg.get("level") or DEFAULT_LOG_LEVEL
    return AppConfig(db_path=str(db_path), log_level=str(log_level).upper(), rules=rules)
