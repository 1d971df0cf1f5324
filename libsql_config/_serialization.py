"""JSON encoding and decoding backed by msgspec."""

from typing import Any

import msgspec

__all__ = ("decode_json", "encode_json")

_encoder = msgspec.json.Encoder(enc_hook=str)
_decoder = msgspec.json.Decoder()


def encode_json(data: Any, *, as_bytes: bool = False) -> "str | bytes":
    """Encode ``data`` as JSON.

    Values msgspec cannot encode natively are rendered with :class:`str`.

    Args:
        data: Data to encode.
        as_bytes: Return the raw bytes instead of a decoded string.

    Returns:
        The JSON document.
    """
    encoded = _encoder.encode(data)
    if as_bytes:
        return encoded
    return encoded.decode("utf-8")


def decode_json(data: "str | bytes") -> Any:
    """Decode a JSON document.

    Args:
        data: JSON string or bytes.

    Returns:
        Decoded Python object.
    """
    return _decoder.decode(data)
