"""Percent (URL) encoding for signing inputs.

Two escaping alphabets are supported:

- RFC 3986: everything outside the unreserved set ``[A-Za-z0-9.-~_]`` is escaped.
- Azure SAS: the wider reserved set Azure REST signing expects is escaped,
  together with every byte outside printable ASCII. Characters such as
  ``! ( ) * ;`` pass through unchanged.

Both operate on the UTF-8 bytes of the input, so a multi-byte character yields
one ``%XX`` triplet per byte.
"""

from enum import Enum
from typing import Union

from signzure.codec.base64url import to_bytes
from signzure.exceptions import DecodeError, InvalidArgumentError


class PercentMode(str, Enum):
    """Escaping alphabet."""

    RFC3986 = "rfc3986"
    AZURE_SAS = "azure-sas"


class HexCase(str, Enum):
    """Case of the hex digits in %XX triplets."""

    UPPER = "upper"
    LOWER = "lower"


UNRESERVED = frozenset(
    b"ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789.-~_"
)

AZURE_SAS_RESERVED = frozenset(b" \"#$%&'<>{}/\\@~|,+:[]?=`")

_HEX_DIGITS = frozenset(b"0123456789abcdefABCDEF")


def _coerce(enum_cls, value, name: str):
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        raise InvalidArgumentError(f"percent_encode: unknown {name} '{value}' (expected one of: {allowed})")


def _must_escape(byte: int, mode: PercentMode) -> bool:
    if mode is PercentMode.RFC3986:
        return byte not in UNRESERVED
    return byte in AZURE_SAS_RESERVED or byte < 0x20 or byte > 0x7E


def percent_encode(
    text: Union[str, bytes],
    mode: Union[PercentMode, str] = PercentMode.RFC3986,
    case: Union[HexCase, str] = HexCase.UPPER,
) -> str:
    """
    Percent-encode text for use in a URL or a signing string.

    Args:
        text: Text to encode (str is encoded as UTF-8)
        mode: Escaping alphabet, PercentMode or its string value
        case: Hex digit case, HexCase or its string value

    Returns:
        ASCII encoded text

    Raises:
        InvalidArgumentError: If mode or case is not recognized
    """
    mode = _coerce(PercentMode, mode, "mode")
    case = _coerce(HexCase, case, "case")
    triplet = "%{:02x}" if case is HexCase.LOWER else "%{:02X}"

    out = []
    for byte in to_bytes(text):
        if _must_escape(byte, mode):
            out.append(triplet.format(byte))
        else:
            out.append(chr(byte))
    return "".join(out)


def percent_decode_bytes(text: Union[str, bytes]) -> bytes:
    """
    Decode %XX triplets (hex digits of either case) back to the original bytes.

    Inverse of percent_encode for any byte sequence, in either mode and case.
    '+' is left as-is; it does not stand for a space.

    Raises:
        DecodeError: If a triplet is truncated or not hex
    """
    raw = to_bytes(text)
    decoded = bytearray()
    i = 0
    while i < len(raw):
        byte = raw[i]
        if byte != 0x25:  # '%'
            decoded.append(byte)
            i += 1
            continue

        pair = raw[i + 1:i + 3]
        if len(pair) != 2 or not all(b in _HEX_DIGITS for b in pair):
            raise DecodeError(f"Invalid percent-encoded triplet at offset {i}")
        decoded.append(int(pair, 16))
        i += 3

    return bytes(decoded)


def percent_decode(text: Union[str, bytes]) -> str:
    """
    Percent-decode text whose original form was UTF-8.

    Raises:
        DecodeError: If a triplet is malformed or the decoded bytes are not
            valid UTF-8 (use percent_decode_bytes for binary data)
    """
    decoded = percent_decode_bytes(text)
    try:
        return decoded.decode("utf-8")
    except UnicodeDecodeError as e:
        raise DecodeError(f"Percent-decoded bytes are not valid UTF-8: {e}") from e
