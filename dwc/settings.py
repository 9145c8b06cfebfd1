"""Typed view of the TOML configuration.

The packaged ``config/config.default.toml`` is always loaded first; a user
file passed with ``--config`` is deep-merged on top so that it only needs to
contain the values it changes.
"""

from __future__ import annotations

from importlib import resources
from pathlib import Path
from typing import Any, Dict, Optional
import tomllib

from pydantic import BaseModel, Field


def load_config(config_path: Optional[Path] = None) -> Dict[str, Any]:
    cfg_path = resources.files("config").joinpath("config.default.toml")
    with cfg_path.open("rb") as f:
        config = tomllib.load(f)
    if config_path:
        with config_path.open("rb") as f:
            user_cfg = tomllib.load(f)
        _deep_update(config, user_cfg)
    return config


def _deep_update(d: Dict[str, Any], u: Dict[str, Any]) -> Dict[str, Any]:
    for k, v in u.items():
        if isinstance(v, dict) and isinstance(d.get(k), dict):
            _deep_update(d[k], v)
        else:
            d[k] = v
    return d


class DatasetSettings(BaseModel):
    short_name: str
    name: str
    id: str = ""
    rights_holder: str = ""
    institution_id: str = ""
    license: str = "http://creativecommons.org/publicdomain/zero/1.0/"
    language: str = "en"
    nomenclatural_code: str = "ICN"


class DistributionSettings(BaseModel):
    location_id: str = "ISO_3166-2:BE"
    locality: str = "Belgium"
    country_code: str = "BE"


class ReferenceSettings(BaseModel):
    host: str
    parts: Dict[str, str] = Field(default_factory=dict)


class ParserSettings(BaseModel):
    batch_size: int = Field(default=100, gt=0)


class ChecklistSettings(BaseModel):
    dataset: DatasetSettings
    distribution: DistributionSettings = Field(default_factory=DistributionSettings)
    references: ReferenceSettings
    parser: ParserSettings = Field(default_factory=ParserSettings)

    @classmethod
    def from_config(cls, cfg: Dict[str, Any]) -> "ChecklistSettings":
        """Create settings from a configuration dictionary."""
        return cls.model_validate(cfg)

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "ChecklistSettings":
        return cls.from_config(load_config(config_path))
