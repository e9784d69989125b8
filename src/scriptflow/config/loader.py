"""Config loader for YAML configuration files."""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from scriptflow.config.models import ScriptflowConfig
from scriptflow.core.errors import ConfigError

DEFAULT_CONFIG_NAME = "scriptflow.yaml"


class ConfigLoader:
    """Load ScriptflowConfig from YAML files."""

    @staticmethod
    def load(path: Path | str) -> ScriptflowConfig:
        """Load configuration from YAML file.

        Args:
            path: Path to config directory or scriptflow.yaml file

        Returns:
            Parsed ScriptflowConfig instance

        Raises:
            FileNotFoundError: If no config file exists at path
            ConfigError: If the document is not valid YAML or fails validation
        """
        config_path = Path(path)
        yaml_file = config_path / DEFAULT_CONFIG_NAME if config_path.is_dir() else config_path

        if not yaml_file.exists():
            raise FileNotFoundError(f"Config file not found: {yaml_file}")

        try:
            with open(yaml_file, encoding="utf-8") as f:
                data: Any = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError("Config file is not valid YAML", path=str(yaml_file)) from e

        if not isinstance(data, dict):
            raise ConfigError("Config root must be a mapping", path=str(yaml_file))

        try:
            return ScriptflowConfig.model_validate(data)
        except (ValidationError, ValueError) as e:
            raise ConfigError(f"Invalid configuration: {e}", path=str(yaml_file)) from e
