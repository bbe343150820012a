"""
Base64 helpers for token construction.

Standard RFC 4648 encoding without line breaks, a strict decoder, and the
base64url post-processing used by JWT compact serialization.

Reference: https://tools.ietf.org/html/rfc4648#section-5
"""

import base64
import binascii
from typing import Union

from signzure.exceptions import DecodeError

BytesOrText = Union[bytes, str]


def to_bytes(value: BytesOrText) -> bytes:
    """Return value as bytes, encoding text as UTF-8."""
    if isinstance(value, str):
        return value.encode("utf-8")
    return bytes(value)


def base64_encode(data: BytesOrText) -> str:
    """
    Base64 encode bytes using the standard alphabet with padding.

    Args:
        data: Bytes to encode (text is UTF-8 encoded first)

    Returns:
        Encoded text, never containing line breaks. Empty input gives "".
    """
    return base64.b64encode(to_bytes(data)).decode("ascii")


def base64_decode(text: BytesOrText) -> bytes:
    """
    Decode standard base64 text back to bytes.

    Missing trailing padding is tolerated. Padding that is present must
    complete the final group exactly. Any character outside the base64
    alphabet, or an impossible length, is rejected.

    Args:
        text: Base64 encoded text

    Returns:
        Decoded bytes

    Raises:
        DecodeError: If the input is not valid base64
    """
    raw = to_bytes(text)
    if not raw:
        return b""

    stripped = raw.rstrip(b"=")
    if not stripped:
        raise DecodeError("Invalid base64 input: padding only")
    if len(stripped) % 4 == 1:
        raise DecodeError(f"Invalid base64 length: {len(stripped)} significant characters")
    pad_count = len(raw) - len(stripped)
    expected_pad = -len(stripped) % 4
    if pad_count and (len(raw) % 4 != 0 or pad_count != expected_pad):
        raise DecodeError(
            f"Invalid base64 padding: {pad_count} '=' after {len(stripped)} significant characters"
        )
    padded = stripped + b"=" * expected_pad

    try:
        return base64.b64decode(padded, validate=True)
    except binascii.Error as e:
        raise DecodeError(f"Invalid base64 input: {e}") from e


def base64_url_escape(text: str) -> str:
    """
    Make base64 text URL-safe: '+' -> '-', '/' -> '_', drop '=', CR and LF.

    Applying it twice gives the same result as applying it once.
    """
    if not text:
        return ""
    escaped = text.replace("+", "-").replace("/", "_")
    for ch in ("\r", "\n", "="):
        escaped = escaped.replace(ch, "")
    return escaped


def base64url_encode(data: BytesOrText) -> str:
    """Encode bytes as unpadded base64url."""
    return base64_url_escape(base64_encode(data))


def base64url_decode(text: BytesOrText) -> bytes:
    """
    Decode unpadded (or padded) base64url text.

    Raises:
        DecodeError: If the input is not valid base64url
    """
    raw = to_bytes(text)
    if b"+" in raw or b"/" in raw:
        raise DecodeError("Invalid base64url input: standard alphabet characters present")
    return base64_decode(raw.replace(b"-", b"+").replace(b"_", b"/"))
