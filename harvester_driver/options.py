"""
options.py: catalog of the options accepted by the harvester machine driver
"""
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Iterator, Mapping, Optional, Sequence

DEFAULT_NAMESPACE = "default"

DEFAULT_CPU = 2
DEFAULT_MEMORY_SIZE = 4
DEFAULT_DISK_SIZE = 40
DEFAULT_DISK_BUS = "virtio"
DEFAULT_NETWORK_MODEL = "virtio"
NETWORK_TYPE_POD = "pod"
NETWORK_TYPE_DHCP = "dhcp"

# Provided by the host provisioning framework
DEFAULT_SSH_USER = "docker"
DEFAULT_SSH_PORT = 22

OPTION_KINDS = ("string", "int", "bool")


@dataclass(frozen=True)
class OptionSpec:
    """
    Immutable declaration of a single driver option.
    """
    name: str                      # e.g. "harvester-cpu-count"
    env_var: str                   # e.g. "HARVESTER_CPU_COUNT"
    description: str
    kind: str = "string"           # 'string', 'int' or 'bool'
    default: Any = None

    def __post_init__(self):
        if not self.name or not self.env_var:
            raise ValueError("Option name and env var are required.")
        if self.kind not in OPTION_KINDS:
            raise ValueError(f"Unknown option kind '{self.kind}' for {self.name}")

    @property
    def zero_value(self) -> Any:
        """Value an option resolves to when nothing supplies it"""
        if self.default is not None:
            return self.default
        return {"string": "", "int": 0, "bool": False}[self.kind]


def _string(env_var, name, description, default=None):
    return OptionSpec(name=name, env_var=env_var, description=description,
                      kind="string", default=default)


def _int(env_var, name, description, default=None):
    return OptionSpec(name=name, env_var=env_var, description=description,
                      kind="int", default=default)


HARVESTER_OPTIONS = (
    _string("HARVESTER_KUBECONFIG_CONTENT", "harvester-kubeconfig-content",
            "contents of kubeconfig file for harvester cluster, base64 is supported"),
    _string("HARVESTER_CLUSTER_TYPE", "harvester-cluster-type",
            "harvester cluster type"),
    _string("HARVESTER_CLUSTER_ID", "harvester-cluster-id",
            "harvester cluster id"),
    _string("HARVESTER_VM_NAMESPACE", "harvester-vm-namespace",
            "harvester vm namespace", DEFAULT_NAMESPACE),
    _int("HARVESTER_CPU_COUNT", "harvester-cpu-count",
         "number of CPUs for machine", DEFAULT_CPU),
    _int("HARVESTER_MEMORY_SIZE", "harvester-memory-size",
         "size of memory for machine (in GiB)", DEFAULT_MEMORY_SIZE),
    _int("HARVESTER_DISK_SIZE", "harvester-disk-size",
         "size of disk for machine (in GiB)", DEFAULT_DISK_SIZE),
    _string("HARVESTER_DISK_BUS", "harvester-disk-bus",
            "bus of disk for machine", DEFAULT_DISK_BUS),
    _string("HARVESTER_IMAGE_NAME", "harvester-image-name",
            "harvester image name"),
    _string("HARVESTER_SSH_USER", "harvester-ssh-user",
            "SSH username", DEFAULT_SSH_USER),
    _int("HARVESTER_SSH_PORT", "harvester-ssh-port",
         "SSH port", DEFAULT_SSH_PORT),
    _string("HARVESTER_SSH_PASSWORD", "harvester-ssh-password",
            "SSH password"),
    _string("HARVESTER_KEY_PAIR_NAME", "harvester-key-pair-name",
            "harvester key pair name"),
    _string("HARVESTER_SSH_PRIVATE_KEY_PATH", "harvester-ssh-private-key-path",
            "SSH private key path"),
    _string("HARVESTER_NETWORK_TYPE", "harvester-network-type",
            "harvester network type", NETWORK_TYPE_DHCP),
    _string("HARVESTER_NETWORK_NAME", "harvester-network-name",
            "harvester network name"),
    _string("HARVESTER_NETWORK_MODEL", "harvester-network-model",
            "harvester network model", DEFAULT_NETWORK_MODEL),
    _string("HARVESTER_CLOUD_CONFIG", "harvester-cloud-config",
            "just keep it empty, this value will be filled by rancher-machine"),
    _string("HARVESTER_USER_DATA", "harvester-user-data",
            "userData content of cloud-init for machine, base64 is supported"),
    _string("HARVESTER_NETWORK_DATA", "harvester-network-data",
            "networkData content of cloud-init for machine, base64 is supported"),
    _string("HARVESTER_VM_AFFINITY", "harvester-vm-affinity",
            "harvester vm affinity, base64 is supported"),
)

SWARM_OPTIONS = (
    OptionSpec("swarm-master", "SWARM_MASTER",
               "Configure Machine to be a Swarm master", kind="bool"),
    _string("SWARM_HOST", "swarm-host",
            "ip/socket to listen on for Swarm master"),
    _string("SWARM_DISCOVERY", "swarm-discovery",
            "Discovery service to use with Swarm"),
)

BASE64_OPTIONS = frozenset({
    "harvester-kubeconfig-content",
    "harvester-vm-affinity",
    "harvester-user-data",
    "harvester-network-data",
})


class OptionSchema:
    """
    OptionSchema: read-only table of option specs, looked up by name
    """

    def __init__(self, specs: Sequence[OptionSpec]):
        by_name = {}
        by_env = {}
        for spec in specs:
            if spec.name in by_name:
                raise ValueError(f"Duplicate option name: {spec.name}")
            if spec.env_var in by_env:
                raise ValueError(f"Duplicate env var: {spec.env_var}")
            by_name[spec.name] = spec
            by_env[spec.env_var] = spec.name
        self._specs = MappingProxyType(by_name)
        self._env = MappingProxyType(by_env)
        self._defaults = MappingProxyType(
            {name: spec.zero_value for name, spec in by_name.items()}
        )

    def __iter__(self) -> Iterator[OptionSpec]:
        return iter(self._specs.values())

    def __len__(self) -> int:
        return len(self._specs)

    def __contains__(self, name: str) -> bool:
        return name in self._specs

    def get(self, name: str) -> Optional[OptionSpec]:
        return self._specs.get(name)

    def defaults(self) -> Mapping[str, Any]:
        """Option name -> value used when no source supplies one"""
        return self._defaults

    def env_aliases(self) -> Mapping[str, str]:
        """Environment variable -> option name"""
        return self._env


HARVESTER_SCHEMA = OptionSchema(HARVESTER_OPTIONS + SWARM_OPTIONS)
