"""Configuration management for Population Genetics Hub."""

from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from popgen_hub.core.exceptions import ConfigurationError
from popgen_hub.core.types import MoleculeType, WindowSpec, WindowStatistic


class AlignmentConfig(BaseModel):
    """Alignment input configuration."""

    gap_char: str = "-"
    default_molecule_type: MoleculeType = MoleculeType.DNA
    min_sequences: int = Field(default=2, ge=2)

    @field_validator("gap_char")
    @classmethod
    def _single_character(cls, value: str) -> str:
        if len(value) != 1 or value.isspace():
            raise ValueError(f"gap_char must be a single visible character, got {value!r}")
        return value


class WindowConfig(BaseModel):
    """Sliding window defaults."""

    width: int = Field(default=100, ge=1)
    step: int = Field(default=10, ge=1)
    statistic: WindowStatistic = WindowStatistic.DIVERSITY

    def to_spec(self) -> WindowSpec:
        """Window spec built from these defaults."""
        return WindowSpec(width=self.width, step=self.step, statistic=self.statistic)


class OutputConfig(BaseModel):
    """Output configuration."""

    format: str = "table"
    header: bool = True
    per_site: bool = True
    precision: int = Field(default=5, ge=0, le=15)

    @field_validator("format")
    @classmethod
    def _known_format(cls, value: str) -> str:
        value = value.lower()
        if value not in ("table", "latex", "tsv", "json"):
            raise ValueError(f"Unknown output format: {value}")
        return value


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "WARNING"
    invocation_log: Optional[Path] = None


class Settings(BaseSettings):
    """Main settings for Population Genetics Hub."""

    model_config = SettingsConfigDict(
        env_prefix="PGHUB_",
        env_nested_delimiter="__",
    )

    alignment: AlignmentConfig = Field(default_factory=AlignmentConfig)
    window: WindowConfig = Field(default_factory=WindowConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def from_yaml(cls, path: Path) -> "Settings":
        """Load settings from a YAML file."""
        with open(path) as f:
            data = yaml.safe_load(f) or {}
        try:
            return cls(**data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration in {path}: {e}") from e

    def to_yaml(self, path: Path) -> None:
        """Save settings to a YAML file."""
        with open(path, "w") as f:
            yaml.dump(self.model_dump(mode="json"), f, default_flow_style=False)

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "Settings":
        """Load settings from default location or specified path."""
        if config_path and config_path.exists():
            return cls.from_yaml(config_path)

        # Check default locations
        default_paths = [
            Path("config/default.yaml"),
            Path.home() / ".popgen_hub" / "config.yaml",
            Path("/etc/popgen_hub/config.yaml"),
        ]

        for path in default_paths:
            if path.exists():
                return cls.from_yaml(path)

        # Return default settings
        try:
            return cls()
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration in environment: {e}") from e


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings.load()
    return _settings


def set_settings(settings: Settings) -> None:
    """Set the global settings instance."""
    global _settings
    _settings = settings
