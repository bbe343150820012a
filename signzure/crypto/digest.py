"""
Digest engine: MD5 and HMAC-SHA256 over byte sequences.

The engine is an abstract capability with two interchangeable implementations,
one over the standard library (hashlib/hmac) and one over the ``cryptography``
package. They return identical bytes for identical inputs; which one is used is
a deployment choice (see ``DigestConfig.backend``).

MD5 (and MD4) are kept only for compatibility with existing signed artifacts
and content hashes. They are not security primitives.
"""

import hashlib
import hmac
import logging
from abc import ABC, abstractmethod
from typing import Dict, Optional, Type, Union

from cryptography.exceptions import InternalError, UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives import hmac as crypto_hmac

from signzure.codec.base64url import to_bytes
from signzure.exceptions import (
    InvalidArgumentError,
    ProviderFailureError,
    UnsupportedAlgorithmError,
    require,
)

logger = logging.getLogger(__name__)

# Legacy digests only
SUPPORTED_DIGESTS = ("MD5", "MD4")

MD5_DIGEST_SIZE = 16
SHA256_DIGEST_SIZE = 32


def _normalize_algorithm(algorithm: str) -> str:
    name = (algorithm or "").strip().upper()
    if name not in SUPPORTED_DIGESTS:
        raise UnsupportedAlgorithmError(algorithm)
    return name


class DigestEngine(ABC):
    """
    Abstract digest provider.

    Implementations must be stateless: every hash or HMAC context is created
    and finished inside a single call.
    """

    name: str = "abstract"

    def digest(self, algorithm: str, data: bytes) -> bytes:
        """
        Compute a legacy digest (MD5 or MD4) over data.

        Args:
            algorithm: Digest name, case-insensitive ("MD5" or "MD4")
            data: Bytes to hash

        Returns:
            Raw digest bytes

        Raises:
            UnsupportedAlgorithmError: If the name is unknown or the provider
                cannot supply the algorithm
            ProviderFailureError: If the provider fails while hashing
        """
        return self._digest(_normalize_algorithm(algorithm), data)

    def hmac_sha256(self, message: bytes, key: bytes) -> bytes:
        """
        Compute HMAC-SHA256.

        Args:
            message: Bytes to sign (may be empty)
            key: Signing key (must not be empty)

        Returns:
            32 raw bytes

        Raises:
            InvalidArgumentError: If key is empty
            ProviderFailureError: If the provider fails
        """
        require(key, "key", "hmac_sha256")
        return self._hmac_sha256(message, key)

    @abstractmethod
    def _digest(self, algorithm: str, data: bytes) -> bytes:
        pass

    @abstractmethod
    def _hmac_sha256(self, message: bytes, key: bytes) -> bytes:
        pass


class HashlibDigestEngine(DigestEngine):
    """Digest engine backed by hashlib and hmac."""

    name = "hashlib"

    def _digest(self, algorithm: str, data: bytes) -> bytes:
        try:
            hasher = hashlib.new(algorithm.lower(), usedforsecurity=False)
        except ValueError as e:
            logger.debug(f"hashlib cannot provide {algorithm}: {e}")
            raise UnsupportedAlgorithmError(algorithm) from e
        hasher.update(data)
        return hasher.digest()

    def _hmac_sha256(self, message: bytes, key: bytes) -> bytes:
        try:
            return hmac.new(key, message, hashlib.sha256).digest()
        except ValueError as e:
            raise ProviderFailureError(f"HMAC-SHA256 failed: {e}") from e


class CryptographyDigestEngine(DigestEngine):
    """Digest engine backed by the cryptography package (OpenSSL)."""

    name = "cryptography"

    _ALGORITHMS: Dict[str, Type[hashes.HashAlgorithm]] = {
        "MD5": hashes.MD5,
    }

    def _digest(self, algorithm: str, data: bytes) -> bytes:
        algorithm_cls = self._ALGORITHMS.get(algorithm)
        if algorithm_cls is None:
            raise UnsupportedAlgorithmError(algorithm)
        try:
            ctx = hashes.Hash(algorithm_cls())
            ctx.update(data)
            return ctx.finalize()
        except UnsupportedAlgorithm as e:
            raise UnsupportedAlgorithmError(algorithm) from e
        except InternalError as e:
            raise ProviderFailureError(f"{algorithm} digest failed: {e}") from e

    def _hmac_sha256(self, message: bytes, key: bytes) -> bytes:
        try:
            ctx = crypto_hmac.HMAC(key, hashes.SHA256())
            ctx.update(message)
            return ctx.finalize()
        except InternalError as e:
            raise ProviderFailureError(f"HMAC-SHA256 failed: {e}") from e


ENGINES: Dict[str, Type[DigestEngine]] = {
    HashlibDigestEngine.name: HashlibDigestEngine,
    CryptographyDigestEngine.name: CryptographyDigestEngine,
}

_default_engine: DigestEngine = HashlibDigestEngine()


def get_digest_engine(name: str) -> DigestEngine:
    """
    Create a digest engine by backend name ("hashlib" or "cryptography").

    Raises:
        InvalidArgumentError: If the backend name is unknown
    """
    engine_cls = ENGINES.get((name or "").lower())
    if engine_cls is None:
        raise InvalidArgumentError(
            f"Unknown digest backend '{name}' (expected one of: {', '.join(ENGINES)})"
        )
    return engine_cls()


def default_engine() -> DigestEngine:
    """Return the engine used when no engine is passed explicitly."""
    return _default_engine


def digest(
    algorithm: str,
    data: Union[bytes, str],
    engine: Optional[DigestEngine] = None
) -> bytes:
    """Compute a legacy digest over data (text is UTF-8 encoded)."""
    return (engine or _default_engine).digest(algorithm, to_bytes(data))


def calc_digest_hex(
    algorithm: str,
    data: Union[bytes, str],
    engine: Optional[DigestEngine] = None
) -> str:
    """Compute a legacy digest and return it as lowercase hex."""
    return digest(algorithm, data, engine).hex()


def digest_md5_hex(data: Union[bytes, str], engine: Optional[DigestEngine] = None) -> str:
    """
    MD5 of data as 32 lowercase hex characters.

    For legacy format compatibility only.
    """
    return calc_digest_hex("MD5", data, engine)


def hmac_sha256(
    message: Union[bytes, str],
    key: Union[bytes, str],
    engine: Optional[DigestEngine] = None
) -> bytes:
    """
    HMAC-SHA256 of message under key. Returns 32 raw bytes.

    Raises:
        InvalidArgumentError: If key is empty
    """
    return (engine or _default_engine).hmac_sha256(to_bytes(message), to_bytes(key))
