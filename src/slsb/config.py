"""User configuration: defaults, ``SLSB_*`` environment variables and a TOML file.

Precedence, highest first: explicit arguments, environment, ``config.toml``.
The TOML file lives in ``~/.slsb`` unless ``SLSB_CONFIG_FILE`` points
elsewhere.
"""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import BaseModel, Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    TomlConfigSettingsSource,
)

CONFIG_FILE_ENV = "SLSB_CONFIG_FILE"
CONFIG_FILE_NAME = "config.toml"


def slsb_home() -> Path:
    return Path.home() / ".slsb"


def config_file() -> Path:
    """Location of the TOML config file."""
    override = os.environ.get(CONFIG_FILE_ENV)
    return Path(override) if override else slsb_home() / CONFIG_FILE_NAME


class BuildSettings(BaseModel):
    """Where compiled artifacts go, relative to the export root."""

    output_dir: Path | None = None
    registry_dir: str = "SKSE/SexLab/Registry"
    meshes_dir: str = "meshes/actors"

    def registry_path(self, root: Path) -> Path:
        return root.joinpath(*self.registry_dir.split("/"))

    def meshes_path(self, root: Path) -> Path:
        return root.joinpath(*self.meshes_dir.split("/"))


class AppConfig(BaseSettings):
    """Settings shared by the CLI and the build pipeline."""

    model_config = SettingsConfigDict(
        env_prefix="SLSB_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    config_dir: Path = Field(default_factory=slsb_home)
    projects_dir: Path = Field(default_factory=lambda: slsb_home() / "projects")
    default_author: str = "Unknown"
    build: BuildSettings = Field(default_factory=BuildSettings)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        sources: tuple[PydanticBaseSettingsSource, ...] = (init_settings, env_settings)
        toml_path = config_file()
        if toml_path.is_file():
            sources += (TomlConfigSettingsSource(settings_cls, toml_file=toml_path),)
        return sources

    def ensure_dirs(self) -> None:
        for directory in (self.config_dir, self.projects_dir):
            directory.mkdir(parents=True, exist_ok=True)


def load_config(*, create_dirs: bool = True) -> AppConfig:
    """Build the config from every source, optionally creating its directories."""
    config = AppConfig()
    if create_dirs:
        config.ensure_dirs()
    return config
