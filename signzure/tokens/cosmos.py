"""
Cosmos DB master-key authorization tokens.

The string to sign is:

    lower(verb) \\n lower(resourceType) \\n resourceLink \\n lower(date) \\n \\n

The resource link keeps its case because it may contain resource ids. The
resulting header value is already URL-encoded:

    type%3dmaster%26ver%3d1.0%26sig%3d<signature>

Reference: https://docs.microsoft.com/en-us/rest/api/cosmos-db/access-control-on-cosmosdb-resources
"""

import logging
from typing import Optional, Union

from signzure.codec.base64url import base64_encode
from signzure.codec.percent import HexCase, PercentMode, percent_encode
from signzure.crypto.digest import DigestEngine, hmac_sha256
from signzure.core.logging_config import get_logger, log_with_context
from signzure.exceptions import require

logger = get_logger(__name__)

COSMOS_TOKEN_PREFIX = "type%3dmaster%26ver%3d1.0%26sig%3d"


def build_cosmos_string_to_sign(
    verb: str,
    resource_type: str,
    resource_link: str,
    date: str
) -> str:
    """Build the canonical string signed for a Cosmos DB request."""
    return (
        f"{verb.lower()}\n"
        f"{(resource_type or '').lower()}\n"
        f"{resource_link or ''}\n"
        f"{date.lower()}\n"
        "\n"
    )


def cosmos_auth_token(
    key: Union[bytes, str],
    verb: str,
    resource_type: str,
    resource_link: str,
    date: str,
    *,
    strict: bool = False,
    engine: Optional[DigestEngine] = None
) -> str:
    """
    Build the Authorization header value for a Cosmos DB REST request.

    Args:
        key: Master key bytes, already base64-decoded from the connection string
        verb: HTTP verb (GET, POST, PUT, DELETE)
        resource_type: dbs, colls, docs, attachments, ... (empty for root
            level operations)
        resource_link: Resource link, e.g. "dbs/ToDoList" (empty for root
            level operations)
        date: RFC 7231 date, the same value sent in x-ms-date
        strict: Also reject empty resource_type and resource_link
        engine: Digest engine (default engine if omitted)

    Returns:
        URL-encoded authorization token

    Raises:
        InvalidArgumentError: If key, verb or date is empty, or with strict
            set, if resource_type or resource_link is empty
    """
    require(key, "key", "cosmos_auth_token")
    require(date, "date", "cosmos_auth_token")
    require(verb, "verb", "cosmos_auth_token")
    if strict:
        require(resource_type, "resource_type", "cosmos_auth_token")
        require(resource_link, "resource_link", "cosmos_auth_token")

    string_to_sign = build_cosmos_string_to_sign(verb, resource_type, resource_link, date)

    signature = base64_encode(hmac_sha256(string_to_sign, key, engine))
    escaped_signature = percent_encode(signature, PercentMode.AZURE_SAS, HexCase.LOWER)

    log_with_context(
        logger,
        logging.DEBUG,
        "Built Cosmos DB token",
        operation="cosmos_auth_token",
        verb=verb.upper(),
        resource_type=resource_type or "<root>",
        resource_link=resource_link,
        strict=strict,
    )
    return f"{COSMOS_TOKEN_PREFIX}{escaped_signature}"
