import json
import os
from typing import NamedTuple, Optional

import jsonschema

from .endpoint import METADATA_BASE_URL_ENVIRONMENT_VARIABLE
from .exceptions import ConfigurationError
from .fetcher import READ_TIMEOUT


class PluginConfig(NamedTuple):
    environment_variable: str = METADATA_BASE_URL_ENVIRONMENT_VARIABLE
    read_timeout: float = READ_TIMEOUT
    hostname: Optional[str] = None


class ConfigLoader:
    SCHEMA = {
        "type": "object",
        "properties": {
            "environment_variable": {"type": "string", "minLength": 1},
            "read_timeout": {"type": "number", "exclusiveMinimum": 0},
            "hostname": {"type": "string", "minLength": 1},
        },
        "additionalProperties": False,
    }

    def __init__(self, config_path=None):
        self.config_path = config_path

    def validate_schema(self, config):
        try:
            jsonschema.validate(instance=config, schema=self.SCHEMA)
        except jsonschema.exceptions.ValidationError as e:
            raise ConfigurationError(f"Configuration validation failed: {e.message}")

    def load_config(self):
        """Return the plugin configuration, overlaying the JSON file if one is given."""
        if self.config_path is None:
            return PluginConfig()

        if not os.path.exists(self.config_path):
            raise ConfigurationError(f"Config file not found: {self.config_path}")

        with open(self.config_path, "r") as f:
            try:
                config = json.load(f)
            except json.JSONDecodeError as e:
                raise ConfigurationError(f"Failed to parse JSON config: {e}")

        self.validate_schema(config)
        return PluginConfig(**config)
