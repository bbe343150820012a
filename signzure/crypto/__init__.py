"""Digest engine capability (MD5, HMAC-SHA256)."""

from signzure.crypto.digest import (
    CryptographyDigestEngine,
    DigestEngine,
    HashlibDigestEngine,
    calc_digest_hex,
    default_engine,
    digest,
    digest_md5_hex,
    get_digest_engine,
    hmac_sha256,
)

__all__ = [
    "CryptographyDigestEngine",
    "DigestEngine",
    "HashlibDigestEngine",
    "calc_digest_hex",
    "default_engine",
    "digest",
    "digest_md5_hex",
    "get_digest_engine",
    "hmac_sha256",
]
