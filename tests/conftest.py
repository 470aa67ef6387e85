import pytest
import yaml

from tcpdemo.core.codec.request import RequestCodec
from tcpdemo.core.codec.response import ResponseCodec
from tests.fake.fake_transport import FakeTransport


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def request_codec():
    return RequestCodec()


@pytest.fixture
def response_codec():
    return ResponseCodec()


@pytest.fixture
def config_file(tmp_path):
    file = tmp_path / "tcpdemo.yaml"
    data = {
        "server": {
            "host": "127.0.0.1",
            "port": 0,
            "backlog": 10,
            "timeout_graceful_shutdown": 1,
            "max_buffer_size": 128 * 1024,
        }
    }
    file.write_text(yaml.dump(data))
    return file
