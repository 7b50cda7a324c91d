"""
harvester_driver: option handling for the Harvester machine driver
"""
from .encoding import decode_maybe_base64
from .errors import (
    ConfigError, MissingImageNameError, MissingPrivateKeyPathError,
    UnknownNetworkTypeError, MissingNetworkNameError,
    OptionError, UnknownOptionError, OptionTypeError, OptionSourceError,
)
from .models import DriverConfig, SwarmConfig
from .options import OptionSpec, OptionSchema, HARVESTER_OPTIONS, HARVESTER_SCHEMA
from .config_manager import ConfigSource, OptionResolver, StaticOptions
from .drivers import HarvesterDriver, populate, check_config, find_config_error

__version__ = "0.1.0"
