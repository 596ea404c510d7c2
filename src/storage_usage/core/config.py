"""Configuration system for storage-usage.

This module implements the configuration schema using Pydantic for
validation, with support for environment variable resolution and fail-fast
validation with actionable error messages. Every section has defaults, so
running without a configuration file is valid.
"""

import os
import re
from collections.abc import Mapping
from pathlib import Path
from typing import Annotated, Final

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from storage_usage.output.theme import Theme, parse_style
from storage_usage.types.models import ListOrder

# Matches ${VARIABLE_NAME} syntax where VARIABLE_NAME can contain letters, digits, and underscores
ENV_VAR_PATTERN: Final[re.Pattern[str]] = re.compile(r"\$\{([A-Z0-9_]+)\}")

ALIAS_PATTERN: Final[re.Pattern[str]] = re.compile(r"^[A-Za-z0-9_-]+$")


class _Section(BaseModel):
    model_config = ConfigDict(
        extra="forbid",
        validate_assignment=True,
        str_strip_whitespace=True,
        populate_by_name=True,
    )


class ThemeConfig(_Section):
    """Console colors for each output element.

    Each value is a color name optionally combined with modifiers, e.g.
    ``"bold cyan"``. An empty string leaves the element uncolored.
    """

    entry_color: Annotated[str, Field(description="Style for file names")] = ""
    directory_color: Annotated[str, Field(description="Style for directory names")] = "bold blue"
    size_color: Annotated[str, Field(description="Style for sizes")] = "yellow"
    prefix_color: Annotated[str, Field(description="Style for disk usage prefixes")] = "bold cyan"
    time_color: Annotated[str, Field(description="Style for timestamps")] = "green"

    @field_validator("entry_color", "directory_color", "size_color", "prefix_color", "time_color", mode="after")
    @classmethod
    def validate_style(cls, v: str) -> str:
        """Validate that a style names known colors and modifiers.

        Raises:
            ValueError: If the style cannot be parsed
        """
        _ = parse_style(v)
        return v


class OutputConfig(_Section):
    """Configuration for rendering output records."""

    json_output: Annotated[
        bool,
        Field(alias="json", description="Print indented JSON records instead of console lines"),
    ] = False
    color: Annotated[bool, Field(description="Colorize console lines")] = True
    theme: Annotated[ThemeConfig, Field(description="Console colors")] = ThemeConfig()

    def to_theme(self) -> Theme:
        """Build the printer theme for this configuration."""
        return Theme(
            entry_color=self.theme.entry_color,
            directory_color=self.theme.directory_color,
            size_color=self.theme.size_color,
            prefix_color=self.theme.prefix_color,
            time_color=self.theme.time_color,
            enabled=self.color,
        )


class ListingConfig(_Section):
    """Configuration for enumeration behavior."""

    include_incomplete: Annotated[
        bool,
        Field(description="Include in-progress items in listings and totals"),
    ] = False
    order: Annotated[
        ListOrder,
        Field(description="Ordering hint for flat listings"),
    ] = ListOrder.LEXICAL


class ApplicationConfig(_Section):
    """Configuration for application-level settings."""

    log_level: Annotated[
        str,
        Field(
            description="Logging level",
            pattern=r"^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        ),
    ] = "WARNING"


class AppConfig(_Section):
    """Top-level configuration schema.

    Sections:
    - aliases: short names expanding to local directories
    - output: JSON/console rendering and colors
    - listing: enumeration behavior
    - application: application-level settings
    """

    aliases: Annotated[
        dict[str, Path],
        Field(description="Alias name to local directory mapping"),
    ] = {}
    output: Annotated[OutputConfig, Field(description="Output configuration")] = OutputConfig()
    listing: Annotated[ListingConfig, Field(description="Listing configuration")] = ListingConfig()
    application: Annotated[
        ApplicationConfig,
        Field(description="Application-level configuration"),
    ] = ApplicationConfig()

    @field_validator("aliases", mode="after")
    @classmethod
    def validate_alias_names(cls, v: dict[str, Path]) -> dict[str, Path]:
        """Validate alias names and expand ``~`` in their paths.

        Raises:
            ValueError: If an alias name contains characters other than
                letters, digits, ``_`` and ``-``
        """
        expanded: dict[str, Path] = {}
        for name, path in v.items():
            if not ALIAS_PATTERN.match(name):
                msg = f"Invalid alias name '{name}': use letters, digits, '_' and '-' only"
                raise ValueError(msg)
            expanded[name] = path.expanduser()
        return expanded


class EnvironmentVariableError(Exception):
    """Exception raised when environment variable resolution fails."""


class ConfigurationError(Exception):
    """Exception raised when configuration loading or validation fails."""


def resolve_env_var(value: str) -> str:
    """Resolve environment variable references in a string value.

    Args:
        value: String potentially containing ``${VARIABLE_NAME}`` references

    Returns:
        String with environment variables resolved

    Raises:
        EnvironmentVariableError: If a referenced environment variable is missing

    Examples:
        >>> os.environ["DATA_ROOT"] = "/srv/data"
        >>> resolve_env_var("${DATA_ROOT}/photos")
        '/srv/data/photos'
    """

    def replace_match(match: re.Match[str]) -> str:
        var_name = match.group(1)
        env_value = os.environ.get(var_name)

        if env_value is None:
            msg = (
                f"Required environment variable '{var_name}' is not set. "
                f"Please set this variable or remove the reference."
            )
            raise EnvironmentVariableError(msg)

        return env_value

    return ENV_VAR_PATTERN.sub(replace_match, value)


def resolve_env_vars_in_dict(data: Mapping[str, object]) -> dict[str, object]:
    """Recursively resolve environment variables in a dictionary.

    Traverses nested dictionaries and lists, resolving environment variable
    references in string values. Non-string values are preserved as-is.

    Args:
        data: Dictionary potentially containing environment variable references

    Returns:
        New dictionary with environment variables resolved

    Raises:
        EnvironmentVariableError: If a required environment variable is missing
    """
    result: dict[str, object] = {}

    for key, value in data.items():
        if isinstance(value, str):
            result[key] = resolve_env_var(value)
        elif isinstance(value, dict):
            # YAML data is untyped at load time; validated by Pydantic after resolution
            result[key] = resolve_env_vars_in_dict(value)  # pyright: ignore[reportUnknownArgumentType]  # YAML boundary
        elif isinstance(value, list):
            resolved_list: list[object] = []
            for item in value:  # pyright: ignore[reportUnknownVariableType]  # YAML list items
                if isinstance(item, str):
                    resolved_list.append(resolve_env_var(item))
                elif isinstance(item, dict):
                    resolved_list.append(resolve_env_vars_in_dict(item))  # pyright: ignore[reportUnknownArgumentType]  # YAML boundary
                else:
                    resolved_list.append(item)  # pyright: ignore[reportUnknownArgumentType]  # YAML primitives
            result[key] = resolved_list
        else:
            result[key] = value

    return result


def load_config(config_path: Path | None) -> AppConfig:
    """Load and validate configuration from a YAML file.

    Args:
        config_path: Path to the YAML configuration file, or None for defaults

    Returns:
        Validated AppConfig instance

    Raises:
        ConfigurationError: If the file cannot be loaded, references a
            missing environment variable, or is invalid
    """
    if config_path is None:
        return AppConfig()

    if not config_path.exists():
        msg = (
            f"Configuration file not found: {config_path}\n"
            f"Please create a configuration file at this location or omit --config."
        )
        raise ConfigurationError(msg)

    try:
        with config_path.open("r", encoding="utf-8") as f:
            raw_data: object = yaml.safe_load(f)  # pyright: ignore[reportAny]  # YAML boundary
    except yaml.YAMLError as e:
        msg = (
            f"Failed to parse YAML configuration file: {config_path}\n"
            f"YAML parsing error: {e}\n"
            f"Please check the file for syntax errors."
        )
        raise ConfigurationError(msg) from e
    except OSError as e:
        msg = f"Failed to read configuration file: {config_path}\nError: {e}\nPlease check file permissions."
        raise ConfigurationError(msg) from e

    # An empty file means all defaults
    if raw_data is None:
        return AppConfig()

    if not isinstance(raw_data, dict):
        msg = (
            f"Invalid configuration file format: {config_path}\n"
            f"Expected YAML dictionary at root level, got: {type(raw_data).__name__}\n"
            f"Configuration file must contain key-value pairs."
        )
        raise ConfigurationError(msg)

    try:
        resolved_data = resolve_env_vars_in_dict(raw_data)  # pyright: ignore[reportUnknownArgumentType]  # YAML boundary
    except EnvironmentVariableError as e:
        msg = f"Environment variable resolution failed in: {config_path}\n{e}"
        raise ConfigurationError(msg) from e

    try:
        config = AppConfig.model_validate(resolved_data)
    except ValidationError as e:
        error_lines = ["Configuration validation failed:", ""]
        for error in e.errors():
            field_path = " → ".join(str(loc) for loc in error["loc"])
            error_lines.append(f"  Field: {field_path}")
            error_lines.append(f"  Error: {error['msg']}")
            error_lines.append(f"  Type: {error['type']}")
            error_lines.append("")

        error_lines.append(f"Configuration file: {config_path}")
        error_lines.append("Please fix the above errors and try again.")
        raise ConfigurationError("\n".join(error_lines)) from e

    return config
