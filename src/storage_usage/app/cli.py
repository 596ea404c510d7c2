"""Command-line interface for storage-usage."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

import click

from storage_usage.app.runner import ApplicationRunner
from storage_usage.core.config import ConfigurationError, load_config
from storage_usage.types.models import Depth
from storage_usage.utils.logging import VALID_LOG_LEVELS, configure_logging

# Configuration file discovery paths in order of precedence
# 1. Current directory
CURRENT_DIR_CONFIG_FILES = [
    "storage-usage.yaml",
    "storage-usage.yml",
]

# 2. User home directory
HOME_CONFIG_FILES = [
    ".config/storage-usage/config.yaml",
    ".storage-usage.yaml",
    ".storage-usage.yml",
]

try:
    __version__ = version("storage-usage")
except PackageNotFoundError:
    __version__ = "unknown"


def discover_config_file() -> Path | None:
    """Discover configuration file in standard locations.

    Searches the current directory first, then the user home directory.

    Returns:
        Path to the first configuration file found, or None to use defaults
    """
    for config_file in CURRENT_DIR_CONFIG_FILES:
        config_path = Path(config_file)
        if config_path.is_file():
            return config_path

    try:
        home_dir = Path.home()
    except (OSError, RuntimeError):
        # Path.home() can fail in some environments
        return None

    for config_file in HOME_CONFIG_FILES:
        config_path = home_dir / config_file
        if config_path.is_file():
            return config_path

    return None


def validate_config_path(
    ctx: click.Context,  # pyright: ignore[reportUnusedParameter] # required by Click callback signature
    param: click.Parameter,  # pyright: ignore[reportUnusedParameter] # required by Click callback signature
    value: Path | None,
) -> Path | None:
    """Validate configuration file path.

    Raises:
        click.BadParameter: If the path is a directory or not a YAML file
    """
    if value is None:
        return value

    if value.exists() and value.is_dir():
        raise click.BadParameter("Configuration path must be a file, not a directory")

    valid_extensions = {".yaml", ".yml"}
    if value.suffix.lower() not in valid_extensions:
        extensions_str = ", ".join(sorted(valid_extensions))
        raise click.BadParameter(f"Invalid configuration file extension. Supported extensions: {extensions_str}")

    return value


def validate_log_level(
    ctx: click.Context,  # pyright: ignore[reportUnusedParameter] # required by Click callback signature
    param: click.Parameter,  # pyright: ignore[reportUnusedParameter] # required by Click callback signature
    value: str | None,
) -> str | None:
    """Validate and normalize log level.

    Raises:
        click.BadParameter: If the level is unknown
    """
    if value is None:
        return value

    normalized_value = value.upper().strip()
    if normalized_value not in VALID_LOG_LEVELS:
        raise click.BadParameter(
            f'Invalid log level "{value}". Valid options: {", ".join(sorted(VALID_LOG_LEVELS))}'
        )

    return normalized_value


def depth_from_option(value: int) -> Depth:
    """Translate the ``--depth`` option; zero or negative means unlimited."""
    if value <= 0:
        return Depth.unlimited()
    return Depth.limited(value)


@click.group()
@click.option(
    "--config",
    "-c",
    type=click.Path(path_type=Path),
    default=None,
    callback=validate_config_path,
    help="Configuration file path (.yaml, .yml). If not specified, searches standard locations.",
)
@click.option(
    "--json",
    "json_output",
    is_flag=True,
    help="Print indented JSON records for scripting",
)
@click.option(
    "--no-color",
    is_flag=True,
    help="Disable colorized output",
)
@click.option(
    "--log-level",
    "-l",
    type=str,
    default=None,
    callback=validate_log_level,
    help="Logging verbosity level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
)
@click.version_option(version=__version__, prog_name="storage-usage")
@click.pass_context
def cli(
    ctx: click.Context,
    config: Path | None,
    json_output: bool,
    no_color: bool,
    log_level: str | None,
) -> None:
    """storage-usage - list storage locations and summarize disk usage.

    Examples:

        # List a folder
        storage-usage ls /srv/data

        # List a folder recursively
        storage-usage ls --recursive photos/2024

        # Summarize disk usage up to two levels below the target
        storage-usage du --depth 2 /srv/data
    """
    config_path = config if config is not None else discover_config_file()
    try:
        app_config = load_config(config_path)
    except ConfigurationError as exc:
        raise click.ClickException(f"Configuration error:\n{exc}") from exc

    # CLI overrides take precedence over the configuration file
    if json_output:
        app_config.output.json_output = True
    if no_color:
        app_config.output.color = False
    if log_level is not None:
        app_config.application.log_level = log_level

    configure_logging(log_level=app_config.application.log_level)
    ctx.obj = ApplicationRunner(app_config)


@cli.command(name="ls")
@click.argument("target", default=".")
@click.option(
    "--recursive",
    "-r",
    is_flag=True,
    help="List recursively",
)
@click.option(
    "--incomplete",
    "-I",
    is_flag=True,
    help="Include in-progress items",
)
@click.pass_obj
def list_command(runner: ApplicationRunner, target: str, recursive: bool, incomplete: bool) -> None:
    """List files and folders.

    Examples:

        # List the current directory
        storage-usage ls

        # List every file under a configured alias
        storage-usage ls -r backups/
    """
    code = runner.run_list(target, recursive=recursive, include_incomplete=incomplete)
    if code:
        raise click.exceptions.Exit(code)


@cli.command(name="du")
@click.argument("targets", nargs=-1, required=True)
@click.option(
    "--depth",
    "-d",
    type=int,
    default=0,
    show_default=True,
    help="Print the total for a folder prefix only if it is N or fewer levels below the target (0: all levels)",
)
@click.pass_obj
def du_command(runner: ApplicationRunner, targets: tuple[str, ...], depth: int) -> None:
    """Summarize disk usage of folder prefixes recursively.

    Examples:

        # Summarize disk usage of a folder recursively
        storage-usage du /srv/data

        # Summarize disk usage of a prefix up to two levels
        storage-usage du --depth=2 photos/2024/
    """
    code = runner.run_du(targets, depth_from_option(depth))
    if code:
        raise click.exceptions.Exit(code)


if __name__ == "__main__":
    cli()
