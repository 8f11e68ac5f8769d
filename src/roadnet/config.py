"""
Runtime configuration.

Settings come from three layers, later layers winning:
- Built-in defaults
- An optional JSON file, validated against ``CONFIG_SCHEMA``
- ``ROADNET_*`` environment variables

Example:
    >>> config = RoutingConfig.load("roadnet.json")
    >>> config.max_routes
    3
"""

import json
import logging
import os
from dataclasses import asdict, dataclass
from typing import Any, Dict, Mapping, Optional

from jsonschema import ValidationError as JsonSchemaError
from jsonschema import validate

from .core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

CONFIG_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "max_routes": {"type": "integer", "minimum": 1},
        "default_network_file": {"type": "string", "minLength": 1},
        "create_backup": {"type": "boolean"},
        "log_level": {"type": "string", "enum": LOG_LEVELS},
    },
    "additionalProperties": False,
}

ENV_PREFIX = "ROADNET_"
ENV_OVERRIDES = {
    "MAX_ROUTES": "max_routes",
    "NETWORK_FILE": "default_network_file",
    "CREATE_BACKUP": "create_backup",
    "LOG_LEVEL": "log_level",
}

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass
class RoutingConfig:
    """
    Settings for the session and command line.

    Attributes:
        max_routes (int): Upper bound on routes returned by the alternative
            route search, base route included
        default_network_file (str): File opened at startup when present
        create_backup (bool): Keep a ``.bak`` copy of the previous file on save
        log_level (str): Logging level name
    """

    max_routes: int = 3
    default_network_file: str = "inputGraph.txt"
    create_backup: bool = True
    log_level: str = "INFO"

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "RoutingConfig":
        """
        Build a config from a mapping, validating it first.

        Raises:
            ConfigurationError: If the mapping does not match the schema
        """
        try:
            validate(instance=dict(data), schema=CONFIG_SCHEMA)
        except JsonSchemaError as e:
            raise ConfigurationError(f"Invalid configuration: {e.message}")
        return cls(**data)

    @classmethod
    def from_file(cls, path: str) -> "RoutingConfig":
        """
        Read a JSON configuration file.

        Raises:
            ConfigurationError: If the file cannot be read, is not JSON, or
                fails schema validation
        """
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except OSError as e:
            raise ConfigurationError(f"Cannot read configuration file {path}: {e}")
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid JSON in configuration file {path}: {e.msg}")
        if not isinstance(data, dict):
            raise ConfigurationError(f"Configuration file {path} must contain a JSON object")
        return cls.from_dict(data)

    @classmethod
    def load(
        cls, path: Optional[str] = None, environ: Optional[Mapping[str, str]] = None
    ) -> "RoutingConfig":
        """Defaults, then the optional file, then environment overrides."""
        config = cls.from_file(path) if path else cls()
        return config.with_env(os.environ if environ is None else environ)

    def with_env(self, environ: Mapping[str, str]) -> "RoutingConfig":
        """
        Apply ``ROADNET_*`` overrides.

        Raises:
            ConfigurationError: If an override has the wrong type
        """
        data = asdict(self)
        for suffix, name in ENV_OVERRIDES.items():
            raw = environ.get(ENV_PREFIX + suffix)
            if raw is None:
                continue
            data[name] = _coerce(name, raw, type(data[name]))
            logger.debug(f"Config {name} overridden from environment")
        return RoutingConfig.from_dict(data)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _coerce(name: str, raw: str, target: type) -> Any:
    value = raw.strip()
    if target is bool:
        if value.lower() in _TRUE_VALUES:
            return True
        if value.lower() in _FALSE_VALUES:
            return False
        raise ConfigurationError(f"{name} must be a boolean, got {raw!r}")
    if target is int:
        try:
            return int(value)
        except ValueError:
            raise ConfigurationError(f"{name} must be an integer, got {raw!r}")
    if name == "log_level":
        return value.upper()
    return value
