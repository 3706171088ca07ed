"""User settings for brewctl.

Settings are stored in ~/.config/brewctl/config.toml and validated with
Pydantic. The operation layer reads them at call time only; nothing
here is cached between commands.
"""

import logging
import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from brewctl.core.paths import get_config_path

logger = logging.getLogger(__name__)

DEFAULT_TERMINATE_GRACE_SECONDS = 5.0


class BrewctlConfig(BaseModel):
    """Settings consumed by the operation layer.

    Attributes:
        greedy_upgrades: Pass ``--greedy`` to ``brew upgrade`` when upgrading
            everything, so auto-updating casks are upgraded too.
        brew_path: Explicit brew executable. If None, brew is looked up on
            PATH and then in the standard Homebrew prefixes.
        terminate_grace_seconds: How long a cancelled brew process gets to
            exit after SIGTERM before it is killed.
    """

    model_config = ConfigDict(extra="forbid")

    greedy_upgrades: Annotated[
        bool,
        Field(description="Upgrade casks that auto-update when upgrading all"),
    ] = False
    brew_path: Annotated[
        Path | None,
        Field(description="Custom brew executable (None = auto-detect)"),
    ] = None
    terminate_grace_seconds: Annotated[
        float,
        Field(gt=0.0, le=60.0, description="Seconds between SIGTERM and SIGKILL"),
    ] = DEFAULT_TERMINATE_GRACE_SECONDS


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigNotFoundError(ConfigError):
    """Raised when the config file is not found."""


class ConfigParseError(ConfigError):
    """Raised when the config file cannot be parsed."""


def load_config(path: Path | None = None) -> BrewctlConfig:
    """Load settings from a TOML file.

    Args:
        path: Path to the config file. If None, uses the default config path.

    Returns:
        Validated BrewctlConfig object.

    Raises:
        ConfigNotFoundError: If the config file doesn't exist.
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the content doesn't match the schema.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        raise ConfigNotFoundError(f"Config not found: {config_path}")

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config: {e}") from e

    try:
        return BrewctlConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config content: {e}") from e


def load_config_or_default(path: Path | None = None) -> BrewctlConfig:
    """Load settings, falling back to defaults if no file exists.

    Parse and validation errors still propagate; a broken config file
    should be fixed, not silently ignored.

    Args:
        path: Path to the config file. If None, uses the default config path.

    Returns:
        Loaded or default BrewctlConfig.

    Raises:
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the content doesn't match the schema.
    """
    try:
        return load_config(path)
    except ConfigNotFoundError:
        logger.debug("No config file found, using defaults")
        return BrewctlConfig()


def save_config(config: BrewctlConfig, path: Path | None = None) -> Path:
    """Save settings to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        config: The BrewctlConfig object to save.
        path: Path to save the config. If None, uses the default config path.

    Returns:
        Path where the config was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    config_path = path or get_config_path()
    data = _config_to_dict(config)

    tmp_path: Path | None = None
    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config: {e}") from e

    return config_path


def _config_to_dict(config: BrewctlConfig) -> dict[str, object]:
    """Convert BrewctlConfig to a dictionary for TOML serialization.

    TOML has no null, so unset optional values are left out.

    Args:
        config: The BrewctlConfig to convert.

    Returns:
        Dictionary ready for TOML serialization.
    """
    result: dict[str, object] = {"greedy_upgrades": config.greedy_upgrades}

    if config.brew_path is not None:
        result["brew_path"] = str(config.brew_path)

    if config.terminate_grace_seconds != DEFAULT_TERMINATE_GRACE_SECONDS:
        result["terminate_grace_seconds"] = config.terminate_grace_seconds

    return result
