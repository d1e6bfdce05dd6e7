"""Store options - parses an options YAML file with Pydantic validation."""

import os
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field, field_validator

from .flatten import DEFAULT_SEPARATOR

DEFAULT_FILE_NAME = "prefs"


def _empty_str_to_none(v: Any) -> Optional[str]:
    """Convert empty strings to None for optional string fields."""
    if isinstance(v, str) and not v.strip():
        return None
    return v


class StoreOptions(BaseModel):
    file_path: Optional[str] = None
    file_name: str = DEFAULT_FILE_NAME
    defaults: dict[str, Any] = Field(default_factory=dict)
    separator: str = DEFAULT_SEPARATOR

    @field_validator("file_path", mode="before")
    @classmethod
    def _normalize_path(cls, v: Any) -> Optional[str]:
        v = _empty_str_to_none(v)
        if v is None:
            return None
        return os.path.expanduser(str(v))

    @field_validator("file_name", mode="before")
    @classmethod
    def _normalize_name(cls, v: Any) -> str:
        v = _empty_str_to_none(v)
        if v is None:
            return DEFAULT_FILE_NAME
        v = str(v)
        # The ".json" suffix is always appended by the store
        if v.endswith(".json"):
            v = v[:-len(".json")]
        return v or DEFAULT_FILE_NAME

    @field_validator("defaults", mode="before")
    @classmethod
    def _none_to_empty(cls, v: Any) -> Any:
        return {} if v is None else v

    @field_validator("separator")
    @classmethod
    def _check_separator(cls, v: str) -> str:
        if not v:
            raise ValueError("separator must be a non-empty string")
        return v


def load_options(path: str | Path) -> StoreOptions:
    """Load and validate store options from a YAML file."""
    options_path = Path(path)
    if not options_path.exists():
        raise FileNotFoundError(f"Options file not found: {path}")

    with open(options_path, encoding="utf-8") as f:
        raw = yaml.safe_load(f)

    return StoreOptions.model_validate(raw or {})
