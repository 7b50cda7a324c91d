from dataclasses import dataclass, asdict
from typing import Dict, Any

from .options import (
    DEFAULT_NAMESPACE, DEFAULT_CPU, DEFAULT_MEMORY_SIZE, DEFAULT_DISK_SIZE,
    DEFAULT_DISK_BUS, DEFAULT_NETWORK_MODEL, NETWORK_TYPE_DHCP,
    DEFAULT_SSH_USER, DEFAULT_SSH_PORT,
)

SECRET_FIELDS = ("kube_config_content", "ssh_password")
MASK = "****"


def gib(size: int) -> str:
    return f"{size}Gi"


@dataclass
class DriverConfig:
    """
    Resolved parameters for one Harvester VM creation request.
    Built once per request by the populator, then validated.
    """
    kube_config_content: str = ""          # kubeconfig, decoded if base64
    vm_namespace: str = DEFAULT_NAMESPACE
    vm_affinity: str = ""
    cluster_type: str = ""
    cluster_id: str = ""

    cpu: int = DEFAULT_CPU
    memory_size: str = gib(DEFAULT_MEMORY_SIZE)   # e.g. "4Gi"
    disk_size: str = gib(DEFAULT_DISK_SIZE)       # e.g. "40Gi"
    disk_bus: str = DEFAULT_DISK_BUS

    image_name: str = ""

    ssh_user: str = DEFAULT_SSH_USER
    ssh_port: int = DEFAULT_SSH_PORT
    key_pair_name: str = ""
    ssh_private_key_path: str = ""
    ssh_password: str = ""

    network_type: str = NETWORK_TYPE_DHCP      # 'pod' or 'dhcp'
    network_name: str = ""
    network_model: str = DEFAULT_NETWORK_MODEL

    cloud_config: str = ""                 # filled in by the host framework
    user_data: str = ""
    network_data: str = ""

    def as_dict(self, mask_secrets: bool = True) -> Dict[str, Any]:
        data = asdict(self)
        if mask_secrets:
            for key in SECRET_FIELDS:
                if data[key]:
                    data[key] = MASK
        return data


@dataclass
class SwarmConfig:
    swarm_master: bool = False
    swarm_host: str = ""
    swarm_discovery: str = ""
