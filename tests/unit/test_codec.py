import pickle

import pytest

from squirrel import ConfigurationError
from squirrel.codec import JsonCodec, PickleCodec, get_codec


class Point:
    def __init__(self, x, y):
        self.x = x
        self.y = y

    def __eq__(self, other):
        return (self.x, self.y) == (other.x, other.y)


class TestPickleCodec:
    def test_roundtrip_object(self):
        codec = PickleCodec()

        value, ok = codec.decode(codec.encode(Point(1, 2)))

        assert ok
        assert value == Point(1, 2)

    def test_false_is_a_successful_decode(self):
        codec = PickleCodec()

        assert codec.false_byte_stream == pickle.dumps(False, protocol=pickle.HIGHEST_PROTOCOL)
        assert codec.decode(codec.false_byte_stream) == (False, True)

    @pytest.mark.parametrize("garbage", [b"", b"\x00\x01garbage", b"\x80\x05\x95"])
    def test_garbage_is_a_failed_decode(self, garbage):
        assert PickleCodec().decode(garbage) == (None, False)


class TestJsonCodec:
    def test_roundtrip(self):
        codec = JsonCodec()
        payload = {"status": "ok", "items": [1, 2, None], "flag": False}

        assert codec.decode(codec.encode(payload)) == (payload, True)

    def test_false_byte_stream(self):
        assert JsonCodec().false_byte_stream == b"false"

    @pytest.mark.parametrize("garbage", [b"", b"{not json", b"\xff\xfe"])
    def test_garbage_is_a_failed_decode(self, garbage):
        assert JsonCodec().decode(garbage) == (None, False)


def test_get_codec():
    assert isinstance(get_codec("pickle"), PickleCodec)
    assert isinstance(get_codec("json"), JsonCodec)

    with pytest.raises(ConfigurationError, match="Unknown codec `yaml`"):
        get_codec("yaml")
