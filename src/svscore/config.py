"""Configuration file support for svscore."""

import logging
import os
import tomllib
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

from .score_source import DEFAULT_SCORE_COLUMN
from .scorer import DEFAULT_MAX_SPAN

logger = logging.getLogger(__name__)

SCORE_FILE_ENV_VAR = "SVSCORE_SCORE_FILE"
DEFAULT_GENE_FILE = "refGene.genes.b37.bed"

VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class ConfigValidationError(Exception):
    """Raised when configuration validation fails."""

    pass


@dataclass
class AnnotateConfig:
    """Configuration for an annotation run."""

    score_file: Path | None = None
    gene_file: Path = Path(DEFAULT_GENE_FILE)
    score_column: int = DEFAULT_SCORE_COLUMN
    max_span: int = DEFAULT_MAX_SPAN
    cache_queries: bool = False
    emit_symbolic_span: bool = False
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if self.score_file is not None:
            self.score_file = Path(self.score_file)
        self.gene_file = Path(self.gene_file)

    def resolve_score_file(self) -> Path:
        """Return the configured score file, falling back to SVSCORE_SCORE_FILE.

        Raises:
            ConfigValidationError: If no score file is configured anywhere.
        """
        if self.score_file is not None:
            return self.score_file
        if env_path := os.environ.get(SCORE_FILE_ENV_VAR):
            return Path(env_path)
        raise ConfigValidationError(
            f"No score file configured. Pass --scores, set score_file in the config "
            f"file, or set {SCORE_FILE_ENV_VAR}"
        )


def _check_int(config_dict: dict[str, Any], key: str, minimum: int) -> None:
    if key not in config_dict:
        return
    value = config_dict[key]
    if not isinstance(value, int) or isinstance(value, bool):
        raise ConfigValidationError(f"{key} must be an integer, got {type(value).__name__}")
    if value < minimum:
        raise ConfigValidationError(f"{key} must be at least {minimum}, got {value}")


def validate_config(config_dict: dict[str, Any]) -> None:
    """Validate configuration values.

    Raises:
        ConfigValidationError: If any configuration value is invalid.
    """
    _check_int(config_dict, "score_column", 0)
    _check_int(config_dict, "max_span", 0)

    for key in ("cache_queries", "emit_symbolic_span"):
        if key in config_dict and not isinstance(config_dict[key], bool):
            raise ConfigValidationError(
                f"{key} must be a boolean, got {type(config_dict[key]).__name__}"
            )

    for key in ("score_file", "gene_file"):
        if key in config_dict and not isinstance(config_dict[key], str | Path):
            raise ConfigValidationError(
                f"{key} must be a path string, got {type(config_dict[key]).__name__}"
            )

    if "log_level" in config_dict:
        log_level = config_dict["log_level"]
        if not isinstance(log_level, str):
            raise ConfigValidationError(
                f"log_level must be a string, got {type(log_level).__name__}"
            )
        if log_level.upper() not in VALID_LOG_LEVELS:
            raise ConfigValidationError(
                f"log_level must be one of {VALID_LOG_LEVELS}, got '{log_level}'"
            )


def load_config(config_path: Path, overrides: dict[str, Any] | None = None) -> AnnotateConfig:
    """Load configuration from the [svscore] table of a TOML file.

    Args:
        config_path: Path to the TOML configuration file.
        overrides: Optional dict of values to override loaded config.

    Returns:
        AnnotateConfig instance with loaded values.

    Raises:
        FileNotFoundError: If the config file doesn't exist.
        ConfigValidationError: If any configuration value is invalid.
    """
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, "rb") as f:
        toml_data = tomllib.load(f)

    config_dict = toml_data.get("svscore", {})

    if overrides:
        config_dict.update({k: v for k, v in overrides.items() if v is not None})

    validate_config(config_dict)

    valid_fields = {f.name for f in fields(AnnotateConfig)}
    ignored = sorted(set(config_dict) - valid_fields)
    if ignored:
        logger.warning("Ignoring unknown configuration keys: %s", ", ".join(ignored))

    filtered_config = {k: v for k, v in config_dict.items() if k in valid_fields}
    if "log_level" in filtered_config:
        filtered_config["log_level"] = filtered_config["log_level"].upper()

    return AnnotateConfig(**filtered_config)
