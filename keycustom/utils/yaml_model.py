from pathlib import Path
from typing import Any, Dict

import yaml
from pydantic import BaseModel, ValidationError

from keycustom.errors import ConfigError


class YamlModel(BaseModel):
    """Base class for models read from YAML files"""

    @classmethod
    def read_yaml(
        cls,
        file_path: Path,
        encoding: str = "utf-8"
    ) -> Dict[str, Any]:
        """Read yaml file and return a dict

        Raises:
            FileNotFoundError: If the yaml file does not exist
            ConfigError: If the yaml file is malformed or not a mapping
        """
        if not file_path.exists():
            raise FileNotFoundError(f"YAML file not found: {file_path}")

        try:
            with open(file_path, "r", encoding=encoding) as file:
                content = yaml.safe_load(file)
        except yaml.YAMLError as e:
            raise ConfigError(f"Error parsing YAML file {file_path}: {e}", context={"path": str(file_path)}) from e

        if content is None:
            return {}
        if not isinstance(content, dict):
            raise ConfigError(f"YAML file {file_path} must contain a mapping", context={"path": str(file_path)})
        return content

    @classmethod
    def from_yaml_file(cls, file_path: Path) -> "YamlModel":
        """Read yaml file and return a model instance

        Raises:
            FileNotFoundError: If the yaml file does not exist
            ConfigError: If the file is malformed or doesn't match the model schema
        """
        yaml_data = cls.read_yaml(file_path)
        try:
            return cls.model_validate(yaml_data)
        except ValidationError as e:
            raise ConfigError(f"Invalid {cls.__name__} in {file_path}: {e}", context={"path": str(file_path)}) from e

    def to_yaml_string(self) -> str:
        """Export the model to a YAML string"""
        return yaml.safe_dump(self.model_dump(mode="json"), default_flow_style=False, sort_keys=False)
