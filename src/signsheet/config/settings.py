"""SignSheetSettings: the one settings object a CLI run works from.

Sources, strongest first: keyword arguments (the global CLI flags),
``SIGNSHEET_*`` environment variables with ``__`` between section and
key, the ``signsheet.toml`` file, then the defaults of the section
models. ``SIGNSHEET_STORE__DIRECTORY=data`` therefore beats
``[store] directory = ".signsheet"`` in the file.
"""

from __future__ import annotations

import tomllib
from contextvars import ContextVar
from pathlib import Path
from typing import Any

import click
from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from signsheet.config.discovery import find_config
from signsheet.config.models import OutputConfig, SheetConfig, StoreConfig


def read_toml(path: Path) -> dict[str, Any]:
    """Parse *path*, turning a syntax error into a CLI-facing error."""
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        msg = f"Invalid TOML in {path}: {exc}"
        raise click.ClickException(msg) from exc


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Top-level tables of ``signsheet.toml`` as settings fields."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data = read_toml(toml_path) if toml_path and toml_path.is_file() else {}

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        return self._data.get(field_name), field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


# Config file chosen by from_cli, read back in settings_customise_sources.
_toml_path: ContextVar[Path | None] = ContextVar("_toml_path", default=None)


def _locate_config(config_path: str | None, root: Path | None) -> Path | None:
    """``--config`` when it names a file, else walk-up discovery from *root*.

    A ``--config`` pointing at nothing disables discovery altogether.
    """
    if config_path:
        explicit = Path(config_path)
        return explicit if explicit.is_file() else None
    return find_config(root)


class SignSheetSettings(BaseSettings):
    """Frozen settings for one CLI invocation, stored on ``AppContext``.

    Attributes:
        root: Directory the store lives under. It is the directory of the
            loaded ``signsheet.toml``, or the CWD when none was found.
        config_path: The TOML file that was loaded, if any.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "SIGNSHEET_",
        "env_nested_delimiter": "__",
    }

    root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    store: StoreConfig = Field(default_factory=StoreConfig)
    sheet: SheetConfig = Field(default_factory=SheetConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

    @property
    def db_path(self) -> Path:
        """Absolute location of the SQLite database."""
        return self.root / self.store.directory / self.store.filename

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # No dotenv or secrets directory: the TOML file takes their place.
        return init_settings, env_settings, TomlSettingsSource(settings_cls, _toml_path.get())

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        root: Path | None = None,
        **cli_flags: Any,
    ) -> SignSheetSettings:
        """Settings for a CLI run; *cli_flags* are the global options."""
        toml_path = _locate_config(config_path, root)
        if root is None:
            root = toml_path.parent if toml_path else Path.cwd()

        token = _toml_path.set(toml_path)
        try:
            return cls(root=root, config_path=toml_path, **cli_flags)
        finally:
            _toml_path.reset(token)
