"""
config_manager.py: module for resolving driver options from multiple sources
"""
import abc
import logging
import os
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml
from dotenv import dotenv_values

from .drivers.base import DriverOptions
from .errors import OptionSourceError, OptionTypeError, UnknownOptionError
from .options import HARVESTER_SCHEMA, OptionSchema

PROJECT_CONFIG_NAME = "harvester.yaml"
DOTENV_NAME = ".env"

TRUE_VALUES = {"1", "true", "yes", "on"}
FALSE_VALUES = {"0", "false", "no", "off", ""}


class ConfigSource(Enum):
    """Enumeration of option sources, lowest priority first"""
    DEFAULTS = "defaults"
    PROJECT_CONFIG = "project_config"  # ./harvester.yaml
    DOTENV = "dotenv"  # .env file in current directory
    ENVIRONMENT = "environment"  # HARVESTER_* environment variables
    COMMAND_LINE = "command_line"  # --harvester-* arguments


class MappingOptions(DriverOptions):
    """
    MappingOptions: DriverOptions over a name -> raw value lookup, coercing
    raw values to the requested type
    """

    def __init__(self, schema: OptionSchema = HARVESTER_SCHEMA):
        self.schema = schema

    @abc.abstractmethod
    def raw(self, name: str) -> Any:
        """Unconverted value of a declared option, None when unset"""
        pass

    def _lookup(self, name: str) -> Any:
        if name not in self.schema:
            raise UnknownOptionError(name)
        return self.raw(name)

    def string(self, name: str) -> str:
        value = self._lookup(name)
        if value is None:
            return ""
        return str(value)

    def int(self, name: str) -> int:
        value = self._lookup(name)
        if value is None:
            return 0
        if isinstance(value, bool):
            raise OptionTypeError(name, value, "an integer")
        if isinstance(value, int):
            return value
        try:
            return int(str(value).strip())
        except ValueError:
            raise OptionTypeError(name, value, "an integer") from None

    def bool(self, name: str) -> bool:
        value = self._lookup(name)
        if value is None:
            return False
        if isinstance(value, bool):
            return value
        text = str(value).strip().lower()
        if text in TRUE_VALUES:
            return True
        if text in FALSE_VALUES:
            return False
        raise OptionTypeError(name, value, "a boolean")


class StaticOptions(MappingOptions):
    """
    StaticOptions: already-resolved values, falling back to schema defaults
    """

    def __init__(self, values: Optional[Mapping[str, Any]] = None,
                 schema: OptionSchema = HARVESTER_SCHEMA):
        super().__init__(schema)
        self.values = dict(values or {})
        for name in self.values:
            if name not in schema:
                raise UnknownOptionError(name)

    def raw(self, name: str) -> Any:
        if name in self.values:
            return self.values[name]
        return self.schema.defaults()[name]


class OptionResolver(MappingOptions):
    """
    OptionResolver: merges option values from every ConfigSource, later
    sources overriding earlier ones
    """

    def __init__(self, schema: OptionSchema = HARVESTER_SCHEMA,
                 config_path: Optional[str] = None,
                 env_file: Optional[str] = None,
                 environ: Optional[Mapping[str, str]] = None,
                 command_line: Optional[Mapping[str, Any]] = None):
        super().__init__(schema)
        self.config_path = Path(config_path) if config_path else Path.cwd() / PROJECT_CONFIG_NAME
        self.config_path_explicit = config_path is not None
        self.env_file = Path(env_file) if env_file else Path.cwd() / DOTENV_NAME
        self.environ = os.environ if environ is None else environ
        self.command_line = dict(command_line or {})
        self.values: Dict[str, Any] = {}
        self.sources: Dict[str, ConfigSource] = {}
        self.ignored: List[str] = []  # unknown keys found in harvester.yaml
        self.loaded = False
        self.priority_order = [
            ConfigSource.DEFAULTS,
            ConfigSource.PROJECT_CONFIG,
            ConfigSource.DOTENV,
            ConfigSource.ENVIRONMENT,
            ConfigSource.COMMAND_LINE,
        ]
        self.logger = logging.getLogger(__name__)

    def load(self) -> "OptionResolver":
        """Load every source following priority order"""
        self.values = {}
        self.sources = {}
        self.ignored = []
        for source in self.priority_order:
            source_values = self._load_single_source(source)
            if source_values and source != ConfigSource.DEFAULTS:
                self.logger.debug("%s supplied %s", source.value, ", ".join(sorted(source_values)))
            for name, value in source_values.items():
                self.values[name] = value
                self.sources[name] = source
        self.loaded = True
        return self

    def raw(self, name: str) -> Any:
        if not self.loaded:
            self.load()
        return self.values.get(name)

    def source_of(self, name: str) -> ConfigSource:
        """Which source supplied the value of an option"""
        if name not in self.schema:
            raise UnknownOptionError(name)
        if not self.loaded:
            self.load()
        return self.sources[name]

    def _load_single_source(self, source: ConfigSource) -> Dict[str, Any]:
        if source == ConfigSource.DEFAULTS:
            return dict(self.schema.defaults())

        elif source == ConfigSource.PROJECT_CONFIG:
            return self._load_project_config()

        elif source == ConfigSource.DOTENV:
            return self._load_dotenv_config()

        elif source == ConfigSource.ENVIRONMENT:
            return self._from_env_mapping(self.environ)

        elif source == ConfigSource.COMMAND_LINE:
            for name in self.command_line:
                if name not in self.schema:
                    raise UnknownOptionError(name)
            return dict(self.command_line)

        return {}

    def _load_project_config(self) -> Dict[str, Any]:
        """Load option values from harvester.yaml, keyed by option name"""
        if not self.config_path.exists():
            if self.config_path_explicit:
                raise OptionSourceError(f"Config file not found: {self.config_path}")
            return {}
        try:
            with open(self.config_path, "r") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise OptionSourceError(f"Failed to load {self.config_path}: {e}") from e
        if not isinstance(data, dict):
            raise OptionSourceError(f"{self.config_path} must contain a mapping of option names")

        project_config = {}
        for key, value in data.items():
            if key not in self.schema:
                self.logger.warning("Ignoring unknown option %s in %s", key, self.config_path)
                self.ignored.append(key)
                continue
            if value is None:
                continue
            project_config[key] = value
        return project_config

    def _load_dotenv_config(self) -> Dict[str, Any]:
        """Load option values from the .env file without touching os.environ"""
        if not self.env_file.exists():
            return {}
        return self._from_env_mapping(dotenv_values(self.env_file))

    def _from_env_mapping(self, env: Mapping[str, Optional[str]]) -> Dict[str, Any]:
        env_config = {}
        for env_key, name in self.schema.env_aliases().items():
            value = env.get(env_key)
            if value is not None:
                env_config[name] = value
        return env_config
