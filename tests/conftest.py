import pytest
import yaml

from tests.fake.fake_transport import FakeTransport

from cborstream.bootstrap.config.loader import set_configfile
from cborstream.infra.cbor_format import CBORFormat
from cborstream.infra.msgpack_format import MsgPackFormat


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def test_data() -> dict[str, int]:
    """Something to test with. It doesn't really matter what it is."""
    return {"hello": 42, "world": 0}


@pytest.fixture(params=[CBORFormat(), MsgPackFormat()], ids=["cbor", "msgpack"])
def value_format(request):
    return request.param


@pytest.fixture(autouse=True)
def reset_configfile(monkeypatch):
    for name in ("CBORSTREAMCONFIG", "CBORSTREAM_FORMAT", "CBORSTREAM_SELF_DESCRIBE", "CBORSTREAM_PACKED"):
        monkeypatch.delenv(name, raising=False)
    set_configfile(None)
    yield
    set_configfile(None)


@pytest.fixture
def config_file(tmp_path):
    file = tmp_path / "cborstream.yaml"
    data = {
        "format": "cbor",
        "self_describe": "once",
        "packed": True,
        "max_buffer_size": 1024,
        "chunk_size": 3,
    }
    file.write_text(yaml.dump(data))
    return file
