"""Token builders: JWT (HS256), SAS and Cosmos DB authorization tokens."""

from signzure.tokens.cosmos import COSMOS_TOKEN_PREFIX, build_cosmos_string_to_sign, cosmos_auth_token
from signzure.tokens.jwt_hs256 import jwt_hmac256, verify_jwt_hmac256
from signzure.tokens.sas import resolve_expiry, sas_token

__all__ = [
    "COSMOS_TOKEN_PREFIX",
    "build_cosmos_string_to_sign",
    "cosmos_auth_token",
    "jwt_hmac256",
    "verify_jwt_hmac256",
    "resolve_expiry",
    "sas_token",
]
