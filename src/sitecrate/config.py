"""Configuration loaded from .sitecrate.toml, env vars, and CLI flags.

Loading order: defaults → TOML file → env vars → CLI flags.
"""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path

from pydantic import BaseModel, Field

from sitecrate.document import DEFAULT_GENERATOR_NAME, DEFAULT_ROOT_ELEMENT
from sitecrate.storage import EXPORTS_DIRECTORY

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".sitecrate.toml"
CONFIG_SEARCH_PATHS = [
    Path("."),
]
GLOBAL_CONFIG = Path.home() / ".config" / "sitecrate" / "config.toml"


class SiteSectionConfig(BaseModel):
    """[site] section."""

    data_dir: str = "./App_Data"
    user: str = ""


class ExportSectionConfig(BaseModel):
    """[export] section."""

    directory: str = EXPORTS_DIRECTORY
    generator_name: str = DEFAULT_GENERATOR_NAME
    root_element: str = DEFAULT_ROOT_ELEMENT
    indent: str = "  "


class SiteCrateConfig(BaseModel):
    """Top-level configuration."""

    site: SiteSectionConfig = Field(default_factory=SiteSectionConfig)
    export: ExportSectionConfig = Field(default_factory=ExportSectionConfig)

    @property
    def data_path(self) -> Path:
        return Path(self.site.data_dir).expanduser()


def load_config(path: str | Path | None = None) -> SiteCrateConfig:
    """Load configuration from a TOML file.

    Search order:
    1. Explicit path (if provided)
    2. .sitecrate.toml in CWD
    3. ~/.config/sitecrate/config.toml

    Then overlay environment variables.
    """
    data: dict[str, object] = {}

    if path is not None:
        toml_path = Path(path)
        if toml_path.exists():
            data = _load_toml(toml_path)
        else:
            logger.warning("Config file not found: %s", toml_path)
    else:
        for search_dir in CONFIG_SEARCH_PATHS:
            candidate = search_dir / CONFIG_FILENAME
            if candidate.exists():
                data = _load_toml(candidate)
                logger.info("Loaded config from %s", candidate)
                break
        if not data and GLOBAL_CONFIG.exists():
            data = _load_toml(GLOBAL_CONFIG)
            logger.info("Loaded config from %s", GLOBAL_CONFIG)

    config = SiteCrateConfig.model_validate(data) if data else SiteCrateConfig()
    return _apply_env_vars(config)


def merge_cli_overrides(config: SiteCrateConfig, **cli_kwargs: object) -> SiteCrateConfig:
    """Overlay explicitly-set CLI flags onto the config.

    Only values that are not None override the config.
    """
    data = config.model_dump()

    mapping: dict[str, tuple[str, str]] = {
        "data_dir": ("site", "data_dir"),
        "user": ("site", "user"),
        "export_directory": ("export", "directory"),
    }

    for key, value in cli_kwargs.items():
        if value is None:
            continue
        if key in mapping:
            section, field = mapping[key]
            data[section][field] = str(value)

    return SiteCrateConfig.model_validate(data)


def _load_toml(path: Path) -> dict[str, object]:
    """Load a TOML file and return the data dict."""
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (tomllib.TOMLDecodeError, OSError) as exc:
        logger.warning("Failed to parse %s: %s", path, exc)
        return {}


def _apply_env_vars(config: SiteCrateConfig) -> SiteCrateConfig:
    """Apply environment variable overrides to config."""
    data = config.model_dump()

    env_mapping: dict[str, tuple[str, str]] = {
        "SITECRATE_DATA_DIR": ("site", "data_dir"),
        "SITECRATE_USER": ("site", "user"),
        "SITECRATE_EXPORT_DIR": ("export", "directory"),
    }

    for env_var, (section, field) in env_mapping.items():
        value = os.environ.get(env_var)
        if value is not None:
            data[section][field] = value

    return SiteCrateConfig.model_validate(data)
