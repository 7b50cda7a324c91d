"""Tests for the harvester-driver command line."""

import base64
import json

import pytest
import yaml

from harvester_driver.cli import main
from harvester_driver.options import HARVESTER_SCHEMA


class TestFlagsCommand:
    def test_table(self, clean_env, capsys):
        assert main(["flags"]) == 0
        out = capsys.readouterr().out
        assert "OPTION" in out
        assert "harvester-network-type" in out
        assert "HARVESTER_NETWORK_TYPE" in out

    def test_json(self, clean_env, capsys):
        assert main(["flags", "--format", "json"]) == 0
        catalog = json.loads(capsys.readouterr().out)
        assert len(catalog) == len(HARVESTER_SCHEMA)
        by_name = {entry["name"]: entry for entry in catalog}
        assert by_name["harvester-disk-size"]["default"] == 40
        assert by_name["harvester-disk-size"]["kind"] == "int"

    def test_yaml(self, clean_env, capsys):
        assert main(["flags", "--format", "yaml"]) == 0
        catalog = yaml.safe_load(capsys.readouterr().out)
        assert catalog[0]["name"] == "harvester-kubeconfig-content"


class TestCheckCommand:
    def test_valid_from_command_line(self, clean_env, capsys):
        code = main([
            "check",
            "--harvester-image-name", "ubuntu",
            "--harvester-network-name", "mgmt",
            "--harvester-cpu-count", "8",
            "--harvester-ssh-password", "hunter2",
        ])
        out = capsys.readouterr().out
        assert code == 0
        assert "Configuration is valid" in out
        assert "hunter2" not in out
        assert "cpu: 8" in out
        assert "ssh_password: '****'" in out

    def test_reads_environment(self, clean_env, monkeypatch, capsys):
        monkeypatch.setenv("HARVESTER_IMAGE_NAME", "ubuntu")
        monkeypatch.setenv("HARVESTER_NETWORK_TYPE", "pod")
        assert main(["check"]) == 0
        assert "harvester-image-name" in capsys.readouterr().out

    def test_reads_project_config(self, clean_env, capsys):
        user_data = base64.b64encode(b"#cloud-config").decode("ascii")
        (clean_env / "harvester.yaml").write_text(
            "harvester-image-name: ubuntu\n"
            "harvester-network-name: mgmt\n"
            f"harvester-user-data: {user_data}\n"
        )
        assert main(["check"]) == 0
        assert "user_data: '#cloud-config'" in capsys.readouterr().out

    def test_config_error(self, clean_env, capsys):
        assert main(["check", "--harvester-image-name", "ubuntu"]) == 1
        out = capsys.readouterr().out
        assert "must specify harvester network name" in out
        assert "--harvester-network-name" in out

    def test_option_error(self, clean_env, capsys):
        code = main([
            "check",
            "--harvester-image-name", "ubuntu",
            "--harvester-cpu-count", "lots",
        ])
        assert code == 1
        assert "harvester-cpu-count" in capsys.readouterr().out

    def test_warns_about_unknown_yaml_keys(self, clean_env, capsys):
        (clean_env / "harvester.yaml").write_text(
            "harvester-image-name: ubuntu\n"
            "harvester-network-type: pod\n"
            "harvester-gpu-count: 1\n"
        )
        assert main(["check"]) == 0
        out = capsys.readouterr().out
        assert "[WARNING] Ignoring unknown option harvester-gpu-count" in out

    def test_missing_config_file(self, clean_env, capsys):
        assert main(["check", "--config", str(clean_env / "nope.yaml")]) == 1
        assert "not found" in capsys.readouterr().out

    def test_swarm_master(self, clean_env, capsys):
        code = main([
            "check",
            "--harvester-image-name", "ubuntu",
            "--harvester-network-type", "pod",
            "--swarm-master",
        ])
        assert code == 0
        assert "swarm_master: true" in capsys.readouterr().out


class TestDecodeCommand:
    def test_decodes_base64(self, clean_env, capsys):
        assert main(["decode", "aGVsbG8="]) == 0
        assert capsys.readouterr().out == "hello\n"

    def test_keeps_plain_text(self, clean_env, capsys):
        assert main(["decode", "hello world"]) == 0
        assert capsys.readouterr().out == "hello world\n"


def test_command_is_required(clean_env):
    with pytest.raises(SystemExit) as exc:
        main([])
    assert exc.value.code == 2
