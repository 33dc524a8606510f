from enum import Enum
from pathlib import Path
from typing import Any, cast

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from resolver_check import log
from resolver_check.errors import InvalidConfigError

DEFAULT_ROOT_TYPE = "Query"
DEFAULT_SCHEMA_SUFFIXES = (".graphqls", ".graphql", ".gql")
DEFAULT_SOURCE_EXTENSIONS = (".kt",)


class DuplicateQueryPolicy(str, Enum):
    KEEP_FIRST = "keep-first"
    KEEP_ALL = "keep-all"
    ERROR = "error"


class CheckConfig(BaseModel):
    """Settings shared by the schema and source extraction stages."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid", frozen=True)

    root_type: str = Field(DEFAULT_ROOT_TYPE, alias="rootType", min_length=1)
    schema_suffixes: tuple[str, ...] = Field(DEFAULT_SCHEMA_SUFFIXES, alias="schemaSuffixes", min_length=1)
    source_extensions: tuple[str, ...] = Field(DEFAULT_SOURCE_EXTENSIONS, alias="sourceExtensions", min_length=1)
    strict_parsing: bool = Field(False, alias="strictParsing")
    duplicate_queries: DuplicateQueryPolicy = Field(DuplicateQueryPolicy.KEEP_FIRST, alias="duplicateQueries")

    @field_validator("schema_suffixes", "source_extensions")
    @classmethod
    def normalize_suffixes(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        """Accept "kt" as well as ".kt" and compare suffixes case-insensitively."""
        return tuple(suffix.lower() if suffix.startswith(".") else f".{suffix.lower()}" for suffix in value)


def load_check_config(config_path: Path | None, **overrides: Any) -> CheckConfig:
    """
    Load a check configuration from a YAML file and apply overrides on top of it.

    Overrides with a value of None are ignored so that unset CLI options keep
    the file (or default) value.

    Args:
        config_path: Path to the YAML configuration file, or None for defaults.
        overrides: Field values taking precedence over the file.

    Returns:
        A validated CheckConfig.

    Raises:
        InvalidConfigError: If the file cannot be read, is not valid YAML, has a
            non-mapping root, or fails validation.
    """
    raw: Any = None
    if config_path is not None:
        try:
            with config_path.open("r", encoding="utf-8") as f:
                raw = yaml.safe_load(f)
        except OSError as e:
            raise InvalidConfigError(f"Cannot read config file ({e.strerror})", config_path) from e
        except yaml.YAMLError as e:
            raise InvalidConfigError(f"Config file is not valid YAML ({e})", config_path) from e
        log.debug("Loaded check config from %s", config_path)
    else:
        log.debug("No check config provided, using defaults")

    # Treat empty file or explicit YAML null as "defaults"
    if raw is None:
        raw = {}

    if not isinstance(raw, dict):
        raise InvalidConfigError(
            f"Config root must be a mapping (YAML object), got {type(raw).__name__}",
            config_path,
        )

    values = cast(dict[str, Any], raw)
    for name, value in overrides.items():
        if value is None:
            continue
        # the file may use either spelling, the override replaces both
        alias = CheckConfig.model_fields[name].alias or name
        values.pop(name, None)
        values[alias] = value

    try:
        return CheckConfig.model_validate(values)
    except ValidationError as e:
        raise InvalidConfigError(f"Invalid check config ({e.error_count()} error(s)):\n{e}", config_path) from e
