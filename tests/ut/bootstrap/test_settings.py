import asyncio

import pytest
from pydantic import ValidationError

from tcpdemo.bootstrap.config.loader import find_configfile
from tcpdemo.bootstrap.deps import format_validation_error
from tcpdemo.core.controlplane import ControlPlane
from tests.helpers import FakeTcpDemoConfig, echo_app


@pytest.fixture
def no_config_env(monkeypatch):
    monkeypatch.delenv("TEST_TCPDEMOCONFIG", raising=False)
    monkeypatch.delenv("TCPDEMOCONFIG", raising=False)
    for name in ("TCPDEMO_SERVER__PORT", "TCPDEMO_SERVER__HOST", "TCPDEMO_SERVER"):
        monkeypatch.delenv(name, raising=False)


@pytest.mark.ut
def test_defaults_without_file(no_config_env):
    config = FakeTcpDemoConfig()

    assert config.server.host == "127.0.0.1"
    assert config.server.port == 4000
    assert config.server.max_buffer_size == 1024 * 1024


@pytest.mark.ut
def test_yaml_file(no_config_env, monkeypatch, config_file):
    monkeypatch.setenv("TEST_TCPDEMOCONFIG", str(config_file))

    config = FakeTcpDemoConfig()

    assert config.server.port == 0
    assert config.server.backlog == 10
    assert config.server.timeout_graceful_shutdown == 1.0


@pytest.mark.ut
def test_environment_overrides_file(no_config_env, monkeypatch, config_file):
    monkeypatch.setenv("TEST_TCPDEMOCONFIG", str(config_file))
    monkeypatch.setenv("TCPDEMO_SERVER__PORT", "4100")

    config = FakeTcpDemoConfig()

    assert config.server.port == 4100
    assert config.server.backlog == 10


@pytest.mark.ut
def test_invalid_values_are_reported(no_config_env, monkeypatch):
    monkeypatch.setenv("TCPDEMO_SERVER__PORT", "70000")

    with pytest.raises(ValidationError) as exc_info:
        FakeTcpDemoConfig()

    message = format_validation_error(exc_info.value)
    assert message.startswith("Configuration validation failed:")
    assert "server.port" in message


@pytest.mark.ut
def test_find_configfile_explicit_missing(tmp_path):
    with pytest.raises(SystemExit):
        find_configfile(str(tmp_path / "missing.yaml"))


@pytest.mark.ut
def test_find_configfile_priority(no_config_env, monkeypatch, tmp_path, config_file):
    monkeypatch.chdir(tmp_path)
    assert find_configfile(None) == tmp_path / "tcpdemo.yaml"

    other = tmp_path / "other.yaml"
    other.write_text("server: {}\n")
    monkeypatch.setenv("TCPDEMOCONFIG", str(other))
    assert find_configfile(None) == other
    assert find_configfile(str(config_file)) == config_file


@pytest.mark.ut
def test_find_configfile_default_is_optional(no_config_env, monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    assert find_configfile(None) is None


@pytest.mark.ut
def test_controlplane_builds_server_config(no_config_env, monkeypatch, config_file):
    monkeypatch.setenv("TEST_TCPDEMOCONFIG", str(config_file))

    cp = ControlPlane(config=FakeTcpDemoConfig(), app=echo_app)
    try:
        server_config = cp._server_config
        assert server_config.app is echo_app
        assert server_config.port == 0
        assert server_config.max_buffer_size == 128 * 1024
    finally:
        cp.loop.close()
        asyncio.set_event_loop(None)
