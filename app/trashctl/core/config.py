"""User configuration for trashctl.

Holds defaults for the ``find`` command (sort key, query mode, order and
display toggles). Command-line options always override these values.

Configuration is stored in ~/.config/trashctl/config.toml
"""

import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from trashctl.core.paths import get_config_path
from trashctl.trash.errors import ConfigError
from trashctl.trash.models import QueryMode, SortBy


class TrashConfig(BaseModel):
    """Defaults applied to catalog queries.

    Attributes:
        sort_by: Default sort key.
        mode: Default query matching mode.
        reverse: Sort descending by default.
        show_size: Always compute and display sizes.
        show_trashpath: Always display the stored path inside the trash.
    """

    model_config = ConfigDict(extra="forbid")

    sort_by: Annotated[SortBy, Field(description="Default sort key")] = SortBy.DATE
    mode: Annotated[QueryMode, Field(description="Default query mode")] = QueryMode.REGEX
    reverse: Annotated[bool, Field(description="Sort descending by default")] = False
    show_size: Annotated[bool, Field(description="Always show sizes")] = False
    show_trashpath: Annotated[bool, Field(description="Always show trash paths")] = False


def load_config(path: Path | None = None) -> TrashConfig:
    """Load configuration from a TOML file.

    A missing file yields the defaults.

    Args:
        path: Path to the config file. If None, uses the default config path.

    Returns:
        Validated TrashConfig object.

    Raises:
        ConfigError: If the file cannot be read, parsed, or validated.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        return TrashConfig()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML syntax in {config_path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config {config_path}: {e}") from e

    try:
        return TrashConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config content in {config_path}: {e}") from e


def save_config(config: TrashConfig, path: Path | None = None) -> Path:
    """Save configuration to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        config: The TrashConfig object to save.
        path: Path to save the config. If None, uses the default config path.

    Returns:
        Path where the config was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    config_path = path or get_config_path()
    data = config.model_dump(mode="json")

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
        os.replace(tmp_path, config_path)
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config: {e}") from e

    return config_path
