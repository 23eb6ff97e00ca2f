import pytest

from tests.helpers import Point, Route

from cborstream.core.codec.codec import Codec
from cborstream.core.errors import ConfigurationError, MalformedFrame
from cborstream.core.models.mode import SelfDescribeMode
from cborstream.core.models.outcome import INCOMPLETE
from cborstream.infra.msgpack_format import MsgPackFormat


@pytest.mark.ut
def test_codec_decodes_two_copies_and_a_bit(test_data):
    codec: Codec[dict[str, int], None] = Codec(dict[str, int])
    encoded = bytearray()
    Codec().encode(test_data, encoded)

    buffer = bytearray(encoded * 2 + encoded[:1])

    assert codec.decode(buffer).item == test_data
    assert codec.decode(buffer).item == test_data

    assert codec.decode(buffer) is INCOMPLETE
    assert len(buffer) == 1

    buffer.extend(encoded[1:])
    assert codec.decode(buffer).item == test_data
    assert not buffer


@pytest.mark.ut
def test_codec_encodes_with_once(test_data):
    codec: Codec[None, dict[str, int]] = Codec(self_describe=SelfDescribeMode.ONCE)
    buffer = bytearray()

    codec.encode(test_data, buffer)
    first = len(buffer)
    codec.encode(test_data, buffer)

    assert buffer.startswith(b"\xd9\xd9\xf7")
    assert len(buffer) - first == first - 3
    assert codec.encoder.self_describe is SelfDescribeMode.NEVER


@pytest.mark.ut
@pytest.mark.parametrize("packed", [False, True])
@pytest.mark.parametrize("mode", list(SelfDescribeMode))
def test_round_trip_any_configuration(mode, packed):
    route = Route(name="r", points=[Point(x=1, y=-2, label="p")], origin=Point(x=0, y=0))
    codec: Codec[Route, Route] = Codec(Route, self_describe=mode, packed=packed)
    buffer = bytearray()

    codec.encode(route, buffer)
    codec.encode(route, buffer)

    assert codec.decode_all(buffer) == [route, route]
    assert not buffer


@pytest.mark.ut
@pytest.mark.parametrize("packed", [False, True])
def test_round_trip_msgpack(packed):
    route = Route(name="r", points=[Point(x=1, y=2)])
    codec: Codec[Route, Route] = Codec(Route, packed=packed, value_format=MsgPackFormat())
    buffer = bytearray()

    codec.encode(route, buffer)
    size = len(buffer)
    buffer.extend(b"\x92")

    outcome = codec.decode(buffer)
    assert outcome.item == route
    assert outcome.consumed == size
    assert buffer == b"\x92"


@pytest.mark.ut
def test_mirrored_codecs_for_asymmetric_protocol():
    client: Codec[Route, Point] = Codec(Route)
    server: Codec[Point, Route] = Codec(Point, packed=True)

    wire = bytearray()
    client.encode(Point(x=4, y=5), wire)
    request = server.decode(wire).item
    assert request == Point(x=4, y=5)

    server.encode(Route(name="to", points=[request]), wire)
    assert client.decode(wire).item == Route(name="to", points=[Point(x=4, y=5)])


@pytest.mark.ut
def test_configuration_only_touches_encoder(test_data):
    codec = Codec(dict[str, int])
    decoder = codec.decoder

    codec.set_self_describe(SelfDescribeMode.ALWAYS)
    codec.set_packed(True)

    assert codec.encoder.self_describe is SelfDescribeMode.ALWAYS
    assert codec.encoder.packed is True
    assert codec.decoder is decoder
    assert codec.decoder.item_type == dict[str, int]


@pytest.mark.ut
def test_directions_share_one_format():
    codec = Codec(value_format=MsgPackFormat())

    assert codec.decoder.value_format is codec.encoder.value_format

    with pytest.raises(ConfigurationError):
        codec.set_self_describe(SelfDescribeMode.ONCE)


@pytest.mark.ut
def test_malformed_passes_through():
    codec = Codec(dict[str, int])
    buffer = bytearray(b"\x00\x01")

    with pytest.raises(MalformedFrame):
        codec.decode(buffer)
    assert buffer == b"\x00\x01"


@pytest.mark.ut
def test_from_settings():
    class Settings:
        format = "msgpack"
        self_describe = SelfDescribeMode.NEVER
        packed = True

    codec = Codec.from_settings(Settings(), Point)

    assert codec.encoder.value_format.name == "msgpack"
    assert codec.encoder.packed is True
    assert codec.decoder.item_type is Point
