"""InvestSettings: CLI flags, ``INVESTCTL_*`` env vars and ``investctl.toml``.

Sources in priority order:

1. CLI flags, passed as init kwargs by the root command
2. environment, e.g. ``INVESTCTL_STORAGE__BACKEND=memory``
3. the ``investctl.toml`` found by :func:`~investctl.config.discovery.find_config`
4. the defaults on the section models
"""

from __future__ import annotations

import tomllib
from contextvars import ContextVar
from pathlib import Path
from typing import Any

import click
from pydantic import Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    TomlConfigSettingsSource,
)

from investctl.config.discovery import find_config
from investctl.config.models import DisplayConfig, StorageConfig

# File read by the TOML source while from_cli() builds settings.
_toml_file: ContextVar[Path | None] = ContextVar("_toml_file", default=None)


class InvestSettings(BaseSettings):
    """Frozen settings for one investctl invocation.

    Attributes:
        data_root: Directory that holds ``.investctl/``; the config file's
            directory, or the cwd when there is none.
        config_path: The ``investctl.toml`` in effect, if any.
    """

    model_config = SettingsConfigDict(
        frozen=True,
        env_prefix="INVESTCTL_",
        env_nested_delimiter="__",
    )

    data_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    storage: StorageConfig = Field(default_factory=StorageConfig)
    display: DisplayConfig = Field(default_factory=DisplayConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            TomlConfigSettingsSource(settings_cls, toml_file=_toml_file.get()),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        data_root: Path | None = None,
        **cli_flags: Any,
    ) -> InvestSettings:
        """Build settings for a CLI run.

        An explicit *config_path* that does not exist is ignored.  A
        config file that is not valid TOML is reported as a
        :class:`click.ClickException`.
        """
        if config_path:
            toml_path = Path(config_path) if Path(config_path).is_file() else None
        else:
            toml_path = find_config(data_root)

        if data_root is None:
            data_root = toml_path.parent if toml_path else Path.cwd()

        token = _toml_file.set(toml_path)
        try:
            return cls(data_root=data_root, config_path=toml_path, **cli_flags)
        except tomllib.TOMLDecodeError as exc:
            raise click.ClickException(f"Invalid TOML in {toml_path}: {exc}") from exc
        finally:
            _toml_file.reset(token)
