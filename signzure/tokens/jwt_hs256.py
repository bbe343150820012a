"""
JSON Web Token signing with HMAC-SHA256 (HS256).

The header and payload are taken as already-serialized JSON text and are not
parsed: the base64url segments depend on the exact bytes (including key order),
so callers control serialization.

Reference: https://tools.ietf.org/html/rfc7519
"""

import logging
from typing import Any, Dict, Optional, Union

import jwt

from signzure.codec.base64url import base64url_encode
from signzure.crypto.digest import DigestEngine, hmac_sha256
from signzure.core.logging_config import get_logger, log_with_context
from signzure.exceptions import InvalidTokenError, require

logger = get_logger(__name__)

JWT_ALGORITHM = "HS256"


def jwt_hmac256(
    secret: Union[bytes, str],
    header: Union[bytes, str],
    payload: Union[bytes, str],
    engine: Optional[DigestEngine] = None
) -> str:
    """
    Build a compact JWT signed with HMAC-SHA256.

    Args:
        secret: Signing key (treated as raw bytes)
        header: Serialized JWT header JSON
        payload: Serialized claims JSON

    Returns:
        "<header>.<payload>.<signature>" with base64url segments

    Raises:
        InvalidArgumentError: If secret is empty
    """
    require(secret, "secret", "jwt_hmac256")

    encoded_header = base64url_encode(header)
    encoded_payload = base64url_encode(payload)
    signing_input = f"{encoded_header}.{encoded_payload}"

    signature = base64url_encode(hmac_sha256(signing_input, secret, engine))

    log_with_context(
        logger,
        logging.DEBUG,
        "Signed JWT",
        operation="jwt_hmac256",
        signing_input_bytes=len(signing_input),
    )
    return f"{signing_input}.{signature}"


def verify_jwt_hmac256(
    token: str,
    secret: Union[bytes, str],
    *,
    verify_exp: bool = True
) -> Dict[str, Any]:
    """
    Verify an HS256 compact JWT and return its claims.

    Args:
        token: Compact JWT
        secret: Signing key
        verify_exp: Reject tokens whose "exp" claim has passed

    Returns:
        Decoded claims

    Raises:
        InvalidArgumentError: If token or secret is empty
        InvalidTokenError: If the token is malformed, expired or its
            signature does not match
    """
    require(token, "token", "verify_jwt_hmac256")
    require(secret, "secret", "verify_jwt_hmac256")

    try:
        return jwt.decode(
            token,
            secret,
            algorithms=[JWT_ALGORITHM],
            options={
                "verify_exp": verify_exp,
                "verify_aud": False,
            }
        )
    except jwt.InvalidSignatureError as e:
        raise InvalidTokenError(f"Token signature verification failed: {e}") from e
    except jwt.ExpiredSignatureError as e:
        raise InvalidTokenError(f"Token has expired: {e}") from e
    except jwt.InvalidTokenError as e:
        raise InvalidTokenError(f"Token validation failed: {e}") from e
