from .base import BaseDriver, DriverOptions
from .harvester import HarvesterDriver, populate, check_config, find_config_error

__all__ = ["BaseDriver", "DriverOptions", "HarvesterDriver", "populate", "check_config", "find_config_error"]
