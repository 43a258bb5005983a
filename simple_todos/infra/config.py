"""
Configuration management using Pydantic Settings.

Architecture Decision: Why pydantic-settings?
- Type-safe configuration with validation
- Supports multiple sources (YAML, env vars, defaults)
- Easy to test with different configurations
"""

import os
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Type
import yaml

from pydantic import Field
from pydantic.fields import FieldInfo
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict
from simple_todos.domain.models import UserPreferences

CONFIG_FILE_NAME = "settings.yaml"

# Checked before the user's config directory
WORKSPACE_CONFIG_FILE = Path("config") / CONFIG_FILE_NAME


def default_app_dir(app_name: str, kind: str) -> Path:
    """Per-OS default directory; kind is 'config' or 'data'"""
    if os.name == 'nt':  # Windows
        base = Path(os.getenv('APPDATA'))
    elif kind == 'config':  # Linux/Mac
        base = Path.home() / '.config'
    else:
        base = Path.home() / '.local' / 'share'
    return base / app_name.lower()


def _fold_preferences(data: Dict[str, Any]) -> Dict[str, Any]:
    """Move top-level preference keys (e.g. 'theme') under 'preferences'"""
    flat = {k: data.pop(k) for k in list(data) if k in UserPreferences.model_fields and k not in Settings.model_fields}
    if flat:
        nested = data.get('preferences') or {}
        data['preferences'] = {**flat, **nested}
    return data


class YamlSettingsSource(PydanticBaseSettingsSource):
    """
    Reads settings.yaml from the workspace config folder or the config dir.

    The config dir itself may come from init kwargs, the environment or .env,
    so those sources are consulted to locate the file.
    """

    def __init__(self, settings_cls: Type[BaseSettings], *locating_sources: PydanticBaseSettingsSource):
        super().__init__(settings_cls)
        self.locating_sources = locating_sources

    def _lookup(self, name: str) -> Any:
        for source in self.locating_sources:
            value = source().get(name)
            if value:
                return value
        return self.settings_cls.model_fields[name].default

    def config_file(self) -> Path:
        if WORKSPACE_CONFIG_FILE.exists():
            return WORKSPACE_CONFIG_FILE
        config_dir = self._lookup('config_dir')
        if config_dir is None:
            config_dir = default_app_dir(self._lookup('app_name'), 'config')
        return Path(config_dir) / CONFIG_FILE_NAME

    def get_field_value(self, field: FieldInfo, field_name: str) -> Tuple[Any, str, bool]:
        # Values are produced in bulk by __call__
        return None, field_name, False

    def __call__(self) -> Dict[str, Any]:
        config_file = self.config_file()
        if not config_file.exists():
            return {}

        with open(config_file, 'r', encoding='utf-8') as f:
            config_data = yaml.safe_load(f)
        if not config_data:
            return {}
        return _fold_preferences(dict(config_data))


class Settings(BaseSettings):
    """
    Application settings with multiple sources, lowest priority first:
    1. Default values (hardcoded)
    2. YAML config file
    3. .env file
    4. Environment variables
    5. Keyword arguments
    """
    model_config = SettingsConfigDict(
        env_prefix='SIMPLE_TODOS_',
        env_file='.env',
        env_file_encoding='utf-8'
    )

    # Application paths
    app_name: str = "SimpleTodos"
    config_dir: Optional[Path] = None
    data_dir: Optional[Path] = None

    # Storage
    database_url: Optional[str] = None
    storage_key: str = "todos"

    # User preferences
    preferences: UserPreferences = Field(default_factory=UserPreferences)

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self._init_paths()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: Type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> Tuple[PydanticBaseSettingsSource, ...]:
        yaml_settings = YamlSettingsSource(settings_cls, init_settings, env_settings, dotenv_settings)
        return init_settings, env_settings, dotenv_settings, yaml_settings, file_secret_settings

    def _init_paths(self):
        """Initialize default paths based on OS"""
        if self.config_dir is None:
            self.config_dir = default_app_dir(self.app_name, 'config')
        if self.data_dir is None:
            self.data_dir = default_app_dir(self.app_name, 'data')

        self.config_dir.mkdir(parents=True, exist_ok=True)
        self.data_dir.mkdir(parents=True, exist_ok=True)

    def save_preferences(self):
        """Save current preferences to YAML file, keeping any other keys in it"""
        config_file = self.config_dir / CONFIG_FILE_NAME
        config_data: Dict[str, Any] = {}
        if config_file.exists():
            with open(config_file, 'r', encoding='utf-8') as f:
                config_data = yaml.safe_load(f) or {}
            for key in UserPreferences.model_fields:
                config_data.pop(key, None)

        config_data['preferences'] = self.preferences.model_dump()
        with open(config_file, 'w', encoding='utf-8') as f:
            yaml.dump(config_data, f, default_flow_style=False)

    def get_db_url(self) -> str:
        """Get database URL, creating default if not set"""
        if self.database_url:
            return self.database_url

        db_path = self.data_dir / 'todos.db'
        return f"sqlite:///{db_path}"


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the cached settings instance"""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reload_settings() -> Settings:
    """Reload settings from file and environment"""
    global _settings
    _settings = Settings()
    return _settings
