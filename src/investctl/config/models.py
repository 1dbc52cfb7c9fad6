"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, investctl.toml only contains
overrides.  An empty file is a valid configuration.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class StorageConfig(BaseModel):
    """[storage] section."""

    model_config = {"frozen": True}

    backend: Literal["sqlite", "memory"] = "sqlite"
    filename: str = "investctl.db"


class DisplayConfig(BaseModel):
    """[display] section."""

    model_config = {"frozen": True}

    currency: str = "BRL"
    decimals: int = Field(default=2, ge=0, le=8)
