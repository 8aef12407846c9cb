"""
Configuration management for the health impact simulator

Loads settings from:
1. config/config.yaml (optional)
2. Environment variables (GHIS_ prefix, .env)
3. Default values
"""

from pathlib import Path
from typing import Literal, Optional

import yaml
from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# Load environment variables
load_dotenv()

_DEFAULT_YAML_PATH = Path(__file__).parent.parent / "config" / "config.yaml"


class Config(BaseSettings):
    """GHIS configuration settings"""

    model_config = SettingsConfigDict(
        env_prefix="GHIS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Engine tuning
    effect_strictness: Literal["conservative", "standard", "aggressive"] = Field(
        default="standard",
        description="Scales every intervention effect profile",
    )

    # Memoizing layer in front of the engine
    cache_enabled: bool = True
    cache_max_entries: int = Field(default=256, ge=1)

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_file: Optional[Path] = Field(default=None, description="Log file path (optional)")

    @classmethod
    def from_yaml(cls, yaml_path: str | Path = _DEFAULT_YAML_PATH) -> "Config":
        """Load configuration from YAML file"""
        yaml_path = Path(yaml_path)
        if not yaml_path.exists():
            return cls()

        with open(yaml_path) as f:
            config_data = yaml.safe_load(f) or {}

        return cls(**config_data)


# Global configuration instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get or create global configuration instance"""
    global _config
    if _config is None:
        _config = Config.from_yaml()
    return _config


def reload_config(yaml_path: Optional[str | Path] = None) -> Config:
    """Reload configuration from file"""
    global _config
    _config = Config.from_yaml(yaml_path) if yaml_path else Config.from_yaml()
    return _config
