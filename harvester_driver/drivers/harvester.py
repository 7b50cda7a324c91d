"""
harvester.py: machine driver that provisions virtual machines on a Harvester
cluster. Only option handling lives here; talking to the cluster is left to
the provisioning client that receives the validated DriverConfig.
"""
import logging
from typing import List, Optional

from ..encoding import decode_maybe_base64
from ..errors import (
    ConfigError, MissingImageNameError, MissingPrivateKeyPathError,
    UnknownNetworkTypeError, MissingNetworkNameError,
)
from ..models import DriverConfig, gib
from ..options import (
    OptionSchema, OptionSpec, HARVESTER_OPTIONS, HARVESTER_SCHEMA,
    BASE64_OPTIONS, NETWORK_TYPE_POD, NETWORK_TYPE_DHCP,
)
from .base import BaseDriver, DriverOptions

DRIVER_NAME = "harvester"

logger = logging.getLogger(__name__)


# DriverConfig field -> option it is read from
FIELD_OPTIONS = (
    ("kube_config_content", "harvester-kubeconfig-content"),
    ("vm_namespace", "harvester-vm-namespace"),
    ("vm_affinity", "harvester-vm-affinity"),
    ("cluster_type", "harvester-cluster-type"),
    ("cluster_id", "harvester-cluster-id"),
    ("cpu", "harvester-cpu-count"),
    ("memory_size", "harvester-memory-size"),
    ("disk_size", "harvester-disk-size"),
    ("disk_bus", "harvester-disk-bus"),
    ("image_name", "harvester-image-name"),
    ("ssh_user", "harvester-ssh-user"),
    ("ssh_port", "harvester-ssh-port"),
    ("key_pair_name", "harvester-key-pair-name"),
    ("ssh_private_key_path", "harvester-ssh-private-key-path"),
    ("ssh_password", "harvester-ssh-password"),
    ("network_type", "harvester-network-type"),
    ("network_name", "harvester-network-name"),
    ("network_model", "harvester-network-model"),
    ("cloud_config", "harvester-cloud-config"),
    ("user_data", "harvester-user-data"),
    ("network_data", "harvester-network-data"),
)

# Read as integer GiB, stored as "<N>Gi"
SIZE_FIELDS = ("memory_size", "disk_size")


def populate(flags: DriverOptions, schema: OptionSchema = HARVESTER_SCHEMA) -> DriverConfig:
    """
    populate: reads the harvester options declared in schema from flags into
    a new DriverConfig. Values of base64-capable options are decoded when they
    are valid base64; fields whose option the schema does not declare keep
    their defaults. Nothing is validated here.
    """
    values = {}
    for field_name, option in FIELD_OPTIONS:
        spec = schema.get(option)
        if spec is None:
            continue
        if spec.kind == "int":
            value = flags.int(option)
            values[field_name] = gib(value) if field_name in SIZE_FIELDS else value
            continue
        value = flags.string(option)
        if option in BASE64_OPTIONS:
            decoded = decode_maybe_base64(value)
            if decoded != value:
                logger.debug("Decoded base64 value of %s", option)
            value = decoded
        values[field_name] = value
    return DriverConfig(**values)


def find_config_error(config: DriverConfig) -> Optional[ConfigError]:
    """Returns the first inconsistency in config, or None"""
    if config.image_name == "":
        return MissingImageNameError()
    if config.key_pair_name != "" and config.ssh_private_key_path == "":
        return MissingPrivateKeyPathError()
    if config.network_type == NETWORK_TYPE_POD:
        return None
    if config.network_type == NETWORK_TYPE_DHCP:
        if config.network_name == "":
            return MissingNetworkNameError()
        return None
    return UnknownNetworkTypeError(config.network_type)


def check_config(config: DriverConfig) -> None:
    """Raises the first inconsistency in config as a ConfigError"""
    error = find_config_error(config)
    if error is not None:
        logger.debug("Config check failed on %s: %s", error.option, error)
        raise error


class HarvesterDriver(BaseDriver):
    def __init__(self, machine_name: str = "", store_path: str = "",
                 schema: OptionSchema = HARVESTER_SCHEMA):
        super().__init__(machine_name, store_path)
        self.schema = schema
        self.config = DriverConfig()

    def driver_name(self) -> str:
        return DRIVER_NAME

    def get_create_flags(self) -> List[OptionSpec]:
        return list(HARVESTER_OPTIONS)

    def set_config_from_flags(self, flags: DriverOptions) -> None:
        self.config = populate(flags, self.schema)
        self.set_swarm_config_from_flags(flags)
        self.check_config()

    def check_config(self) -> None:
        check_config(self.config)
