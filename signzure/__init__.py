"""
signzure: Azure REST API signing helpers

Pure functions for building the authentication material Azure REST APIs expect:
base64 and percent encoding, MD5/HMAC-SHA256 digests, HS256 JWTs, Service Bus /
Event Hubs SAS tokens and Cosmos DB master-key authorization tokens.
"""

__version__ = "0.1.0"

from .codec import (
    HexCase,
    PercentMode,
    base64_decode,
    base64_encode,
    base64_url_escape,
    base64url_decode,
    base64url_encode,
    percent_decode,
    percent_decode_bytes,
    percent_encode,
)
from .crypto import (
    CryptographyDigestEngine,
    DigestEngine,
    HashlibDigestEngine,
    calc_digest_hex,
    digest,
    digest_md5_hex,
    get_digest_engine,
    hmac_sha256,
)
from .clock import Clock, FixedClock, SystemClock
from .exceptions import (
    DecodeError,
    InvalidArgumentError,
    InvalidTokenError,
    ProviderFailureError,
    SignzureError,
    UnsupportedAlgorithmError,
)
from .tokens import cosmos_auth_token, jwt_hmac256, sas_token, verify_jwt_hmac256

__all__ = [
    "__version__",
    # Codec
    "HexCase",
    "PercentMode",
    "base64_decode",
    "base64_encode",
    "base64_url_escape",
    "base64url_decode",
    "base64url_encode",
    "percent_decode",
    "percent_decode_bytes",
    "percent_encode",
    # Digest
    "CryptographyDigestEngine",
    "DigestEngine",
    "HashlibDigestEngine",
    "calc_digest_hex",
    "digest",
    "digest_md5_hex",
    "get_digest_engine",
    "hmac_sha256",
    # Clock
    "Clock",
    "FixedClock",
    "SystemClock",
    # Exceptions
    "DecodeError",
    "InvalidArgumentError",
    "InvalidTokenError",
    "ProviderFailureError",
    "SignzureError",
    "UnsupportedAlgorithmError",
    # Tokens
    "cosmos_auth_token",
    "jwt_hmac256",
    "sas_token",
    "verify_jwt_hmac256",
]
