"""Rule configuration model.

``load_config`` validates the raw ``architect.json`` document and returns an
immutable ``LinterConfig``. Rule patterns are normalized here, once, so the
rule engine only ever performs plain substring checks.
"""

from collections.abc import Mapping
from enum import Enum
from typing import Any

import structlog
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictInt,
    StrictStr,
    ValidationError,
    field_validator,
)
from pydantic_core import PydanticCustomError

from architect_linter.errors import ConfigError, ConfigErrorKind

logger = structlog.get_logger()


class ArchitecturePattern(str, Enum):
    """Advisory layering label. Not enforced by the rule engine."""

    HEXAGONAL = "Hexagonal"
    CLEAN = "Clean"
    MVC = "MVC"
    NONE = "None"


# "Ninguno" is written by the Spanish-language setup wizard.
_PATTERN_ALIASES: dict[str, ArchitecturePattern] = {
    pattern.value.lower(): pattern for pattern in ArchitecturePattern
}
_PATTERN_ALIASES["ninguno"] = ArchitecturePattern.NONE


def normalize_pattern(value: str) -> str:
    """Lower-case a path pattern and use forward slashes."""
    return value.strip().replace("\\", "/").lower()


class ForbiddenRule(BaseModel):
    """Files whose path contains ``from_`` may not import modules containing ``to``."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    from_: StrictStr = Field(..., alias="from")
    to: StrictStr
    reason: StrictStr | None = None

    @field_validator("from_", "to")
    @classmethod
    def _normalize(cls, value: str) -> str:
        normalized = normalize_pattern(value)
        if not normalized:
            raise PydanticCustomError("empty_pattern", "Pattern must not be empty")
        return normalized

    @field_validator("reason", mode="before")
    @classmethod
    def _join_reason(cls, value: Any) -> Any:
        # Suggested rules sometimes carry the reason as a list of sentences.
        if isinstance(value, list) and all(isinstance(v, str) for v in value):
            value = " ".join(v.strip() for v in value)
        if isinstance(value, str) and not value.strip():
            return None
        return value


class LinterConfig(BaseModel):
    """Validated, read-only rule configuration shared by every analysis task."""

    model_config = ConfigDict(frozen=True)

    max_lines_per_function: StrictInt = Field(..., gt=0)
    architecture_pattern: ArchitecturePattern = ArchitecturePattern.NONE
    forbidden_imports: tuple[ForbiddenRule, ...] = ()

    @field_validator("architecture_pattern", mode="before")
    @classmethod
    def _parse_pattern(cls, value: Any) -> Any:
        if value is None:
            return ArchitecturePattern.NONE
        if isinstance(value, str):
            return _PATTERN_ALIASES.get(value.strip().lower(), value)
        return value

    @field_validator("forbidden_imports", mode="before")
    @classmethod
    def _default_rules(cls, value: Any) -> Any:
        return () if value is None else value


def load_config(raw: Any) -> LinterConfig:
    """Validate a raw config document.

    Args:
        raw: Parsed JSON document (a mapping)

    Returns:
        The immutable LinterConfig

    Raises:
        ConfigError: If a field is missing, has the wrong type or a rule
            pattern is empty
    """
    if isinstance(raw, LinterConfig):
        return raw
    if not isinstance(raw, Mapping):
        raise ConfigError(
            ConfigErrorKind.INVALID_TYPE,
            "",
            f"Config document must be an object, got {type(raw).__name__}",
        )

    try:
        config = LinterConfig.model_validate(dict(raw))
    except ValidationError as e:
        error = _to_config_error(e)
        logger.error("Invalid configuration", field=error.field, kind=error.kind.value)
        raise error from e

    logger.debug(
        "Configuration loaded",
        max_lines=config.max_lines_per_function,
        pattern=config.architecture_pattern.value,
        rules=len(config.forbidden_imports),
    )
    return config


def _to_config_error(exc: ValidationError) -> ConfigError:
    """Map the first pydantic error onto the ConfigError taxonomy."""
    first = exc.errors()[0]
    field = ".".join(str(part) for part in first["loc"])

    match first["type"]:
        case "missing":
            kind = ConfigErrorKind.MISSING_FIELD
            message = "Field is required"
        case "empty_pattern":
            kind = ConfigErrorKind.EMPTY_PATTERN
            message = "Pattern must not be empty"
        case "greater_than":
            kind = ConfigErrorKind.INVALID_TYPE
            message = "Value must be a positive integer"
        case _:
            kind = ConfigErrorKind.INVALID_TYPE
            message = first["msg"]

    return ConfigError(kind, field, message)
