"""
Configuration management using Pydantic Settings.

Architecture Decision: Why pydantic-settings?
- Type-safe configuration with validation
- Supports multiple sources (YAML, env vars, defaults)
- Easy to test with different configurations
"""

import logging
import os
from pathlib import Path
from typing import List, Literal, Optional
import yaml

from pydantic import BaseModel, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

DEFAULT_TASK_NAMES = ["Work", "Study", "Sports", "Leisure", "Sleep"]


class UserPreferences(BaseModel):
    """
    User configuration and preferences.

    This allows users to customize behavior without touching code.
    """
    task_names: List[str] = Field(
        default_factory=lambda: list(DEFAULT_TASK_NAMES),
        description="Tasks created when no task file is configured"
    )
    duration_unit: Literal["seconds", "minutes", "hours"] = Field(
        default="minutes",
        description="Unit of the durations shown in charts and reports"
    )
    report_template: str = "summary.txt"


class Settings(BaseSettings):
    """
    Application settings with multiple sources:
    1. Default values (hardcoded)
    2. YAML config file
    3. Environment variables (highest priority)
    """
    model_config = SettingsConfigDict(
        env_prefix='ZEITFRESSER_',
        env_file='.env',
        env_file_encoding='utf-8'
    )

    app_name: str = "Zeitfresser"
    config_dir: Optional[Path] = None

    # Optional YAML file the task list is loaded from
    tasks_file: Optional[Path] = None

    preferences: UserPreferences = UserPreferences()

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self._init_paths()
        self._load_yaml_config()

    def _init_paths(self):
        """Initialize default paths based on OS"""
        if self.config_dir is None:
            if os.name == 'nt':  # Windows
                base = Path(os.getenv('APPDATA', Path.home()))
            else:  # Linux/Mac
                base = Path.home() / '.config'
            self.config_dir = base / self.app_name.lower()

    def settings_file(self) -> Path:
        """Locate the YAML settings file (workspace first, then config dir)"""
        config_file = Path("config/settings.yaml")
        if not config_file.exists():
            config_file = self.config_dir / "settings.yaml"
        return config_file

    def _load_yaml_config(self):
        """Load preferences from the YAML settings file"""
        config_file = self.settings_file()
        if not config_file.exists():
            return

        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                config_data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"Could not read settings file {config_file}: {e}")
            return

        if not config_data:
            return

        try:
            self.preferences = UserPreferences.model_validate(config_data)
        except ValidationError as e:
            logger.warning(f"Invalid settings file {config_file}, keeping defaults: {e}")

    def save_preferences(self):
        """Save current preferences to YAML file"""
        self.config_dir.mkdir(parents=True, exist_ok=True)
        config_file = self.config_dir / "settings.yaml"
        with open(config_file, 'w', encoding='utf-8') as f:
            yaml.dump(self.preferences.model_dump(), f, default_flow_style=False)
        return config_file


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance"""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reload_settings():
    """Reload settings from file"""
    global _settings
    _settings = Settings()
    return _settings
