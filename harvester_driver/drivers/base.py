import abc
import logging
from typing import List

from ..models import SwarmConfig
from ..options import OptionSpec, SWARM_OPTIONS


class DriverOptions(abc.ABC):
    """
    Lookup of resolved option values, as handed to a driver by the host
    provisioning framework (flags, environment and defaults already merged).
    """

    @abc.abstractmethod
    def string(self, name: str) -> str:
        pass

    @abc.abstractmethod
    def int(self, name: str) -> int:
        pass

    @abc.abstractmethod
    def bool(self, name: str) -> bool:
        pass


class BaseDriver(abc.ABC):
    """
    Abstract machine driver.
    Concrete drivers declare their options and turn resolved option values
    into their own configuration.
    """

    def __init__(self, machine_name: str = "", store_path: str = ""):
        self.machine_name = machine_name
        self.store_path = store_path
        self.swarm = SwarmConfig()
        self.logger = logging.getLogger(f"driver.{self.driver_name()}")

    @abc.abstractmethod
    def driver_name(self) -> str:
        """Name the host framework registers the driver under."""
        pass

    @abc.abstractmethod
    def get_create_flags(self) -> List[OptionSpec]:
        """Options this driver accepts when creating a machine."""
        pass

    @abc.abstractmethod
    def set_config_from_flags(self, flags: DriverOptions) -> None:
        """
        Populate the driver configuration from resolved option values.
        Raises ConfigError if the result is inconsistent.
        """
        pass

    def get_swarm_flags(self) -> List[OptionSpec]:
        return list(SWARM_OPTIONS)

    def set_swarm_config_from_flags(self, flags: DriverOptions) -> None:
        self.swarm = SwarmConfig(
            swarm_master=flags.bool("swarm-master"),
            swarm_host=flags.string("swarm-host"),
            swarm_discovery=flags.string("swarm-discovery"),
        )
