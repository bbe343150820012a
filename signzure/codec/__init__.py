"""Byte/text codecs: base64, base64url and percent encoding."""

from signzure.codec.base64url import (
    base64_decode,
    base64_encode,
    base64_url_escape,
    base64url_decode,
    base64url_encode,
    to_bytes,
)
from signzure.codec.percent import (
    HexCase,
    PercentMode,
    percent_decode,
    percent_decode_bytes,
    percent_encode,
)

__all__ = [
    "base64_decode",
    "base64_encode",
    "base64_url_escape",
    "base64url_decode",
    "base64url_encode",
    "to_bytes",
    "HexCase",
    "PercentMode",
    "percent_decode",
    "percent_decode_bytes",
    "percent_encode",
]
