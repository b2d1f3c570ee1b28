"""
Pydantic models for ts-interface-builder configuration.

Configuration is optional: every field has a default matching the behavior of
the command line without a config file. A YAML file can override any of them.
"""

from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from ts_interface_builder.exceptions import ConfigurationError

DEFAULT_SUFFIX = "-ti"

DEFAULT_HEADER = """/**
 * This module was automatically generated by `ts-interface-builder`
 */
"""


class OutputConfig(BaseModel):
    """Configuration for generated files."""

    suffix: str = Field(
        default=DEFAULT_SUFFIX,
        description="Suffix appended to the base name of each generated file.",
    )
    extension: str = Field(default=".ts", description="Extension of generated files.")
    out_dir: str | None = Field(
        default=None,
        description="Directory for output files. Same directory as the source file if unset.",
    )
    header: str = Field(
        default=DEFAULT_HEADER, description="Text prepended to every generated module."
    )

    @field_validator("suffix")
    @classmethod
    def validate_suffix(cls, v: str) -> str:
        """Reject suffixes that would move the output into another directory."""
        if "/" in v or "\\" in v:
            raise ValueError(f"suffix must not contain path separators, got: {v}")
        return v

    @field_validator("extension")
    @classmethod
    def validate_extension(cls, v: str) -> str:
        """Validate output extension."""
        if not v.startswith(".") or len(v) < 2:
            raise ValueError(f"extension must start with '.', got: {v}")
        return v


class CompilerConfig(BaseModel):
    """Configuration for the declaration compiler."""

    deferred_wrapper: str = Field(
        default="Promise",
        description="Single-argument generic that is unwrapped to its type argument.",
    )
    fallback_name: str = Field(
        default="unknown", description="Name used when a declared name cannot be resolved."
    )
    runtime_module: str = Field(
        default="ts-interface-checker",
        description="Module the generated code imports its checker builders from.",
    )

    @field_validator("deferred_wrapper", "fallback_name", "runtime_module")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("value must not be blank")
        return v


class LoggingConfig(BaseModel):
    """Configuration for logging."""

    level: str = Field(default="WARNING", description="Logging level.")
    format: str = Field(
        default="%(levelname)s %(name)s: %(message)s",
        description="Log message format.",
    )
    file: str | None = Field(default=None, description="Optional log file path.")

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate logging level."""
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in allowed:
            raise ValueError(f"level must be one of {allowed}, got: {v}")
        return v_upper


class BuilderConfig(BaseModel):
    """Main ts-interface-builder configuration."""

    output: OutputConfig = Field(default_factory=OutputConfig)
    compiler: CompilerConfig = Field(default_factory=CompilerConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {
        "extra": "forbid",  # Raise error on unknown fields
        "validate_assignment": True,
    }


def load_config(config_file: str | Path) -> BuilderConfig:
    """
    Load and validate configuration from a YAML file.

    Args:
        config_file: Path to YAML configuration file

    Returns:
        Validated BuilderConfig instance

    Raises:
        ConfigurationError: If the file is missing, is not valid YAML, or
            holds invalid values
    """
    config_path = Path(config_file)

    if not config_path.exists():
        raise ConfigurationError(f"Configuration file not found: {config_file}")

    try:
        with open(config_path, encoding="utf-8") as f:
            config_dict = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Failed to parse YAML configuration: {e}") from e

    if config_dict is None:
        config_dict = {}
    if not isinstance(config_dict, dict):
        raise ConfigurationError(f"Configuration root must be a mapping: {config_file}")

    try:
        return BuilderConfig(**config_dict)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e


def save_config(config: BuilderConfig, config_file: str | Path) -> None:
    """
    Save configuration to a YAML file.

    Args:
        config: BuilderConfig instance to save
        config_file: Path to YAML configuration file
    """
    config_path = Path(config_file)
    config_path.parent.mkdir(parents=True, exist_ok=True)

    config_dict = config.model_dump(exclude_none=True)

    with open(config_path, "w", encoding="utf-8") as f:
        yaml.dump(config_dict, f, default_flow_style=False, sort_keys=False)
