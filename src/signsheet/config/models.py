"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, signsheet.toml only contains
overrides. An empty file (or none at all) is a valid configuration.
"""

from __future__ import annotations

from pydantic import BaseModel, field_validator

# --- signsheet.toml sections ---


class StoreConfig(BaseModel):
    """[store] section."""

    model_config = {"frozen": True}

    directory: str = ".signsheet"
    filename: str = "signsheet.db"


class SheetConfig(BaseModel):
    """[sheet] section."""

    model_config = {"frozen": True}

    default_owner: str = "default"
    auto_create: bool = True
    strict_load: bool = False

    @field_validator("default_owner")
    @classmethod
    def _owner_not_blank(cls, value: str) -> str:
        if not value.strip():
            msg = "default_owner must not be blank"
            raise ValueError(msg)
        return value.strip()


class OutputConfig(BaseModel):
    """[output] section."""

    model_config = {"frozen": True}

    date_format: str = "%Y-%m-%d"

