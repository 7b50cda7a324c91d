"""Tests for the option catalog."""

import pytest

from harvester_driver.options import (
    HARVESTER_OPTIONS,
    HARVESTER_SCHEMA,
    SWARM_OPTIONS,
    BASE64_OPTIONS,
    OptionSchema,
    OptionSpec,
)


EXPECTED = {
    "harvester-kubeconfig-content": ("HARVESTER_KUBECONFIG_CONTENT", None),
    "harvester-cluster-type": ("HARVESTER_CLUSTER_TYPE", None),
    "harvester-cluster-id": ("HARVESTER_CLUSTER_ID", None),
    "harvester-vm-namespace": ("HARVESTER_VM_NAMESPACE", "default"),
    "harvester-cpu-count": ("HARVESTER_CPU_COUNT", 2),
    "harvester-memory-size": ("HARVESTER_MEMORY_SIZE", 4),
    "harvester-disk-size": ("HARVESTER_DISK_SIZE", 40),
    "harvester-disk-bus": ("HARVESTER_DISK_BUS", "virtio"),
    "harvester-image-name": ("HARVESTER_IMAGE_NAME", None),
    "harvester-ssh-user": ("HARVESTER_SSH_USER", "docker"),
    "harvester-ssh-port": ("HARVESTER_SSH_PORT", 22),
    "harvester-ssh-password": ("HARVESTER_SSH_PASSWORD", None),
    "harvester-key-pair-name": ("HARVESTER_KEY_PAIR_NAME", None),
    "harvester-ssh-private-key-path": ("HARVESTER_SSH_PRIVATE_KEY_PATH", None),
    "harvester-network-type": ("HARVESTER_NETWORK_TYPE", "dhcp"),
    "harvester-network-name": ("HARVESTER_NETWORK_NAME", None),
    "harvester-network-model": ("HARVESTER_NETWORK_MODEL", "virtio"),
    "harvester-cloud-config": ("HARVESTER_CLOUD_CONFIG", None),
    "harvester-user-data": ("HARVESTER_USER_DATA", None),
    "harvester-network-data": ("HARVESTER_NETWORK_DATA", None),
    "harvester-vm-affinity": ("HARVESTER_VM_AFFINITY", None),
}


class TestCatalog:
    """Tests for the declared harvester options."""

    def test_names_aliases_and_defaults(self):
        declared = {spec.name: (spec.env_var, spec.default) for spec in HARVESTER_OPTIONS}
        assert declared == EXPECTED

    def test_integer_options(self):
        ints = {spec.name for spec in HARVESTER_OPTIONS if spec.kind == "int"}
        assert ints == {
            "harvester-cpu-count",
            "harvester-memory-size",
            "harvester-disk-size",
            "harvester-ssh-port",
        }

    def test_every_option_is_described(self):
        assert all(spec.description for spec in HARVESTER_OPTIONS)

    def test_base64_options_are_declared(self):
        assert BASE64_OPTIONS <= {spec.name for spec in HARVESTER_OPTIONS}

    def test_swarm_options(self):
        assert [spec.name for spec in SWARM_OPTIONS] == [
            "swarm-master", "swarm-host", "swarm-discovery",
        ]
        assert SWARM_OPTIONS[0].kind == "bool"


class TestOptionSpec:
    def test_zero_value(self):
        assert OptionSpec("a", "A", "text").zero_value == ""
        assert OptionSpec("b", "B", "number", kind="int").zero_value == 0
        assert OptionSpec("c", "C", "flag", kind="bool").zero_value is False
        assert OptionSpec("d", "D", "number", kind="int", default=7).zero_value == 7

    def test_unknown_kind(self):
        with pytest.raises(ValueError, match="Unknown option kind"):
            OptionSpec("a", "A", "text", kind="float")

    def test_name_required(self):
        with pytest.raises(ValueError):
            OptionSpec("", "A", "text")


class TestOptionSchema:
    """Tests for the read-only schema table."""

    def test_lookup(self):
        assert len(HARVESTER_SCHEMA) == len(HARVESTER_OPTIONS) + len(SWARM_OPTIONS)
        assert "harvester-image-name" in HARVESTER_SCHEMA
        assert HARVESTER_SCHEMA.get("harvester-cpu-count").default == 2
        assert HARVESTER_SCHEMA.get("nope") is None

    def test_defaults(self):
        defaults = HARVESTER_SCHEMA.defaults()
        assert defaults["harvester-vm-namespace"] == "default"
        assert defaults["harvester-image-name"] == ""
        assert defaults["swarm-master"] is False

    def test_env_aliases(self):
        aliases = HARVESTER_SCHEMA.env_aliases()
        assert aliases["HARVESTER_NETWORK_TYPE"] == "harvester-network-type"
        assert aliases["SWARM_HOST"] == "swarm-host"

    def test_tables_are_read_only(self):
        with pytest.raises(TypeError):
            HARVESTER_SCHEMA.defaults()["harvester-cpu-count"] = 64
        with pytest.raises(TypeError):
            HARVESTER_SCHEMA.env_aliases()["X"] = "y"

    def test_duplicate_name(self):
        with pytest.raises(ValueError, match="Duplicate option name"):
            OptionSchema([OptionSpec("a", "A", "x"), OptionSpec("a", "B", "y")])

    def test_duplicate_env_var(self):
        with pytest.raises(ValueError, match="Duplicate env var"):
            OptionSchema([OptionSpec("a", "A", "x"), OptionSpec("b", "A", "y")])
