"""Registry configuration and config file discovery."""

import os
from pathlib import Path
from typing import Dict, Optional

from pydantic import Field

from keycustom.loggings import LogConfig
from keycustom.utils.yaml_model import YamlModel


CONFIG_ENV_VAR = "KEYCUSTOM_CONFIG"


class RegistryConfig(YamlModel):
    """Settings for the global customization registry.

    Example file (``keycustom.yaml``):
        interactive: null
        sweep_on_startup: true
        feature_modules:
          dired: myapp.features.dired
        logging:
          level: DEBUG
          handlers:
            - type: console
    """

    interactive: Optional[bool] = None
    feature_modules: Dict[str, str] = Field(default_factory=dict)
    sweep_on_startup: bool = True
    logging: LogConfig = Field(default_factory=LogConfig)


def find_config_file() -> Optional[Path]:
    """Locate the registry config file.

    Looks in order at:
    1. KEYCUSTOM_CONFIG environment variable
    2. ./keycustom.yaml (current directory)
    3. ~/.keycustom/config.yaml (home directory)

    Returns:
        Path of the first existing file, or None
    """
    env_config = os.getenv(CONFIG_ENV_VAR)
    if env_config and Path(env_config).exists():
        return Path(env_config)

    if Path("keycustom.yaml").exists():
        return Path("keycustom.yaml")

    home_config = Path.home() / ".keycustom" / "config.yaml"
    if home_config.exists():
        return home_config

    return None


def load_config(path: Optional[Path] = None) -> RegistryConfig:
    """Load the registry config from ``path`` or the discovered file.

    Falls back to defaults when no file exists.

    Raises:
        ConfigError: If the file exists but is malformed
    """
    if path is None:
        path = find_config_file()
    if path is None:
        return RegistryConfig()
    return RegistryConfig.from_yaml_file(Path(path))
