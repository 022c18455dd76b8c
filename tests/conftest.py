import pytest

from irishub.config_store import ConfigStore
from irishub.launcher import TerminalLauncher
from irishub.registry import ProcessRegistry
from tests.fakes import FakeSpawner


@pytest.fixture
def workdir(tmp_path):
    d = tmp_path / "project"
    d.mkdir()
    return d


@pytest.fixture
def registry():
    return ProcessRegistry()


@pytest.fixture
def spawner():
    return FakeSpawner()


@pytest.fixture
def launcher(registry, spawner, tmp_path):
    return TerminalLauncher(
        registry,
        terminal="xterm",
        spawner=spawner,
        script_dir=tmp_path / "scripts",
        pidfile_timeout=0,
        os_name="linux",
    )


@pytest.fixture
def store(tmp_path):
    return ConfigStore(tmp_path / "config" / "config.json")
