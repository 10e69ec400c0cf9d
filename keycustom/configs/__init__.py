from .registry_config import CONFIG_ENV_VAR, RegistryConfig, find_config_file, load_config

__all__ = [
    "CONFIG_ENV_VAR",
    "RegistryConfig",
    "find_config_file",
    "load_config",
]
