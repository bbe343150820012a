"""
Shared Access Signature tokens for Service Bus and Event Hubs.

Format:
    SharedAccessSignature sr=<url>&sig=<signature>&se=<expiry>&skn=<key name>

where <url> is the percent-encoded resource URI (lowercase hex), <expiry> is
seconds since the Unix epoch, and <signature> is
Base64(HMAC-SHA256(<url> + "\\n" + <expiry>, key)) percent-encoded with the
Azure signing alphabet.

Reference: https://docs.microsoft.com/en-us/rest/api/eventhub/generate-sas-token
"""

import logging
from datetime import timedelta
from typing import Optional, Union

from signzure.clock import Clock, SystemClock
from signzure.codec.base64url import base64_encode
from signzure.codec.percent import HexCase, PercentMode, percent_encode
from signzure.crypto.digest import DigestEngine, hmac_sha256
from signzure.core.logging_config import get_logger, log_with_context
from signzure.exceptions import InvalidArgumentError, require

logger = get_logger(__name__)

SAS_TOKEN_FORMAT = "SharedAccessSignature sr={}&sig={}&se={}&skn={}"

Expiry = Union[str, int, timedelta]


def resolve_expiry(expiry: Expiry, clock: Optional[Clock] = None) -> str:
    """
    Turn an expiry argument into the absolute epoch-seconds string.

    Args:
        expiry: Absolute expiry (str or int epoch seconds) or a lifetime
            (timedelta) added to the clock's current time
        clock: Time source for lifetimes (system clock by default)

    Returns:
        Expiry as a decimal string

    Raises:
        InvalidArgumentError: If expiry is empty or of an unsupported type
    """
    if isinstance(expiry, timedelta):
        now = (clock or SystemClock()).now_seconds()
        return str(now + int(expiry.total_seconds()))
    if isinstance(expiry, bool):
        raise InvalidArgumentError("sas_token: expiry must be a string, int or timedelta")
    if isinstance(expiry, int):
        return str(expiry)
    if isinstance(expiry, str):
        require(expiry, "expiry", "sas_token")
        return expiry
    raise InvalidArgumentError(
        f"sas_token: expiry must be a string, int or timedelta, got {type(expiry).__name__}"
    )


def sas_token(
    key: Union[bytes, str],
    url: str,
    key_name: str,
    expiry: Expiry,
    *,
    clock: Optional[Clock] = None,
    engine: Optional[DigestEngine] = None
) -> str:
    """
    Build a Shared Access Signature token.

    Args:
        key: Shared access key, used as-is (raw bytes, not base64 decoded)
        url: Resource URI, e.g. "myNamespace.servicebus.windows.net/myEventHub"
        key_name: Shared access policy name
        expiry: Absolute expiry (epoch seconds as str or int) or a lifetime
            as a timedelta
        clock: Time source used when expiry is a lifetime
        engine: Digest engine (default engine if omitted)

    Returns:
        SAS token string

    Raises:
        InvalidArgumentError: If key, url, key_name or expiry is empty
    """
    require(url, "url", "sas_token")
    require(key_name, "key_name", "sas_token")
    require(key, "key", "sas_token")
    if expiry is None:
        raise InvalidArgumentError("sas_token: expiry may not be empty")
    expiry = resolve_expiry(expiry, clock)

    encoded_url = percent_encode(url, PercentMode.RFC3986, HexCase.LOWER)
    string_to_sign = f"{encoded_url}\n{expiry}"

    signature = base64_encode(hmac_sha256(string_to_sign, key, engine))
    escaped_signature = percent_encode(signature, PercentMode.AZURE_SAS, HexCase.LOWER)

    log_with_context(
        logger,
        logging.DEBUG,
        "Built SAS token",
        operation="sas_token",
        resource=encoded_url,
        policy=key_name,
        expiry=expiry,
    )
    return SAS_TOKEN_FORMAT.format(encoded_url, escaped_signature, expiry, key_name)
