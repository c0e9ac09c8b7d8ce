"""Value codecs: turn cached values into bytes and back."""

from __future__ import annotations

import json
import pickle
from typing import Any, Dict, Tuple, Type

from .errors import ConfigurationError


class PickleCodec:
    """Default codec; round-trips any picklable object graph."""

    name = "pickle"

    def __init__(self, protocol: int = pickle.HIGHEST_PROTOCOL):
        self.protocol = protocol
        self.false_byte_stream = self.encode(False)

    def encode(self, value: Any) -> bytes:
        return pickle.dumps(value, protocol=self.protocol)

    def decode(self, byte_stream: bytes) -> Tuple[Any, bool]:
        try:
            return pickle.loads(byte_stream), True
        except Exception:
            return None, False


class JsonCodec:
    """UTF-8 JSON codec for JSON-shaped values (dicts, lists, scalars)."""

    name = "json"

    def __init__(self) -> None:
        self.false_byte_stream = self.encode(False)

    def encode(self, value: Any) -> bytes:
        return json.dumps(value).encode("utf-8")

    def decode(self, byte_stream: bytes) -> Tuple[Any, bool]:
        try:
            return json.loads(byte_stream.decode("utf-8")), True
        except Exception:
            return None, False


CODECS: Dict[str, Type] = {
    PickleCodec.name: PickleCodec,
    JsonCodec.name: JsonCodec,
}


def get_codec(name: str):
    if name not in CODECS:
        raise ConfigurationError(f"Unknown codec `{name}` (expected one of: {', '.join(sorted(CODECS))})")
    return CODECS[name]()
