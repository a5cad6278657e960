"""Reading ``architect.json`` from disk.

Older configs describe rules as ``{"file_pattern": ..., "prohibited": ...}``.
``load_config`` only understands ``from``/``to``, so documents are migrated
here before validation.
"""

import json
from pathlib import Path
from typing import Any

import structlog

from architect_linter.errors import ConfigError, ConfigErrorKind
from architect_linter.models.config import LinterConfig, load_config

logger = structlog.get_logger()

CONFIG_FILENAME = "architect.json"

_LEGACY_KEYS = {"file_pattern": "from", "prohibited": "to"}


def find_config_file(path: str | Path, filename: str = CONFIG_FILENAME) -> Path:
    """Return ``path`` itself for files, ``path / filename`` for directories."""
    path = Path(path)
    return path / filename if path.is_dir() else path


def migrate_legacy_rules(document: dict[str, Any]) -> dict[str, Any]:
    """Rewrite legacy rule entries into the ``from``/``to`` schema.

    When an entry carries both schemas, ``from``/``to`` win. The input
    document is not modified.
    """
    rules = document.get("forbidden_imports")
    if not isinstance(rules, list):
        return document

    migrated = []
    changed = 0
    for rule in rules:
        if isinstance(rule, dict) and any(key in rule for key in _LEGACY_KEYS):
            rule = dict(rule)
            for legacy, current in _LEGACY_KEYS.items():
                value = rule.pop(legacy, None)
                if current not in rule and value is not None:
                    rule[current] = value
            changed += 1
        migrated.append(rule)

    if changed:
        logger.info("Migrated legacy rules", rules=changed)
    return {**document, "forbidden_imports": migrated}


def load_config_file(path: str | Path, filename: str = CONFIG_FILENAME) -> LinterConfig:
    """Read, migrate and validate a config file.

    Args:
        path: Config file, or a project directory containing ``filename``
        filename: Config file name used when ``path`` is a directory

    Returns:
        The validated LinterConfig

    Raises:
        ConfigError: If the file is missing, is not valid JSON or fails
            validation
    """
    config_path = find_config_file(path, filename)

    try:
        content = config_path.read_text(encoding="utf-8-sig")
    except FileNotFoundError as e:
        raise ConfigError(
            ConfigErrorKind.MISSING_FIELD, "", f"Config file not found: {config_path}"
        ) from e
    except OSError as e:
        raise ConfigError(
            ConfigErrorKind.INVALID_TYPE, "", f"Could not read {config_path}: {e}"
        ) from e

    try:
        document = json.loads(content)
    except json.JSONDecodeError as e:
        raise ConfigError(
            ConfigErrorKind.INVALID_TYPE,
            "",
            f"{config_path} is not valid JSON (line {e.lineno}, column {e.colno}): {e.msg}",
        ) from e

    if isinstance(document, dict):
        document = migrate_legacy_rules(document)

    config = load_config(document)
    logger.info("Loaded config", path=str(config_path), rules=len(config.forbidden_imports))
    return config
