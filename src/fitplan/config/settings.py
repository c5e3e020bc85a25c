"""Application settings and configuration management."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml


def _default_config_dir() -> Path:
    """Return the default configuration directory."""
    return Path.home() / ".fitplan"


def _default_db_path() -> Path:
    """Return the default database path."""
    return _default_config_dir() / "fitplan.db"


@dataclass
class DatabaseConfig:
    """Profile store configuration."""

    path: Path = field(default_factory=_default_db_path)


@dataclass
class CatalogConfig:
    """Default catalog files used when no --catalog is given."""

    workout_plans: Optional[Path] = None
    meals: Optional[Path] = None


@dataclass
class LoggingConfig:
    """structlog configuration."""

    level: str = "WARNING"
    json: bool = False


@dataclass
class DefaultsConfig:
    """Default values for various operations."""

    output_format: str = "table"  # "table", "json"


@dataclass
class Settings:
    """Main application settings."""

    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    catalogs: CatalogConfig = field(default_factory=CatalogConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    defaults: DefaultsConfig = field(default_factory=DefaultsConfig)

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "Settings":
        """Load settings from YAML file or return defaults.

        Args:
            config_path: Path to config.yaml. If None, uses ~/.fitplan/config.yaml

        Returns:
            Settings instance
        """
        if config_path is None:
            config_path = _default_config_dir() / "config.yaml"

        if not config_path.exists():
            return cls()

        with open(config_path) as f:
            data = yaml.safe_load(f) or {}

        settings = cls()

        if "database" in data:
            db_data = data["database"] or {}
            if db_data.get("path"):
                settings.database.path = Path(db_data["path"]).expanduser()

        if "catalogs" in data:
            catalog_data = data["catalogs"] or {}
            if catalog_data.get("workout_plans"):
                settings.catalogs.workout_plans = Path(
                    catalog_data["workout_plans"]
                ).expanduser()
            if catalog_data.get("meals"):
                settings.catalogs.meals = Path(catalog_data["meals"]).expanduser()

        if "logging" in data:
            log_data = data["logging"] or {}
            if "level" in log_data:
                settings.logging.level = str(log_data["level"]).upper()
            if "json" in log_data:
                settings.logging.json = bool(log_data["json"])

        if "defaults" in data:
            def_data = data["defaults"] or {}
            if "output_format" in def_data:
                settings.defaults.output_format = def_data["output_format"]

        return settings

    def save(self, config_path: Optional[Path] = None) -> None:
        """Save current settings to YAML file.

        Args:
            config_path: Path to save config.yaml. If None, uses ~/.fitplan/config.yaml
        """
        if config_path is None:
            config_path = _default_config_dir() / "config.yaml"

        config_path.parent.mkdir(parents=True, exist_ok=True)

        data = {
            "database": {
                "path": str(self.database.path),
            },
            "catalogs": {
                "workout_plans": (
                    str(self.catalogs.workout_plans)
                    if self.catalogs.workout_plans
                    else None
                ),
                "meals": str(self.catalogs.meals) if self.catalogs.meals else None,
            },
            "logging": {
                "level": self.logging.level,
                "json": self.logging.json,
            },
            "defaults": {
                "output_format": self.defaults.output_format,
            },
        }

        with open(config_path, "w") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)


# Global settings instance (lazy loaded)
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance, loading from disk if needed."""
    global _settings
    if _settings is None:
        _settings = Settings.load()
    return _settings


def reload_settings() -> Settings:
    """Force reload settings from disk."""
    global _settings
    _settings = Settings.load()
    return _settings


def set_settings(settings: Optional[Settings]) -> None:
    """Replace the global settings instance (used by tests)."""
    global _settings
    _settings = settings
