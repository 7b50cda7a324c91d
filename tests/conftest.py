import pytest

from harvester_driver.options import HARVESTER_SCHEMA


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Run in an empty directory with no driver options in the environment."""
    for env_var in HARVESTER_SCHEMA.env_aliases():
        monkeypatch.delenv(env_var, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path
