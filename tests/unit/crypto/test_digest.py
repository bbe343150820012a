"""Tests for the digest engines."""

import base64
import hashlib
import hmac as std_hmac

import pytest

from signzure.crypto.digest import (
    CryptographyDigestEngine,
    HashlibDigestEngine,
    calc_digest_hex,
    default_engine,
    digest,
    digest_md5_hex,
    get_digest_engine,
    hmac_sha256,
)
from signzure.exceptions import (
    InvalidArgumentError,
    ProviderFailureError,
    UnsupportedAlgorithmError,
)


MD5_SENTENCE = "My ^&()=+-_[]{};:'\"<>?`~ N@me is $0.50! A whole 50 off! #discount./|\\"
HMAC_KEY = "01234567890123456789012345678901"


@pytest.fixture(params=[HashlibDigestEngine, CryptographyDigestEngine], ids=["hashlib", "cryptography"])
def engine(request):
    """Each digest engine implementation."""
    return request.param()


class TestMd5:
    """Test legacy MD5 digests."""

    def test_md5_known_answers(self, engine):
        """Test MD5 against reference vectors."""
        assert digest_md5_hex("happy", engine=engine) == "56ab24c15b72a457069c5ea42fcfc640"
        assert digest_md5_hex(MD5_SENTENCE, engine=engine) == "a2cf7440dab41a41487ec62f40d68cee"

    def test_md5_empty_input(self, engine):
        """Test the MD5 of empty input."""
        assert digest_md5_hex(b"", engine=engine) == "d41d8cd98f00b204e9800998ecf8427e"

    def test_md5_is_sixteen_bytes(self, engine):
        """Test raw digest length."""
        assert len(digest("MD5", b"anything", engine=engine)) == 16

    def test_algorithm_name_is_case_insensitive(self, engine):
        """Test that 'md5' and 'MD5' are the same algorithm."""
        assert calc_digest_hex("md5", "happy", engine=engine) == calc_digest_hex("MD5", "happy", engine=engine)

    def test_md5_hex_is_lowercase(self, engine):
        """Test that hex output is lowercase."""
        value = digest_md5_hex("happy", engine=engine)

        assert value == value.lower()
        assert len(value) == 32

    @pytest.mark.parametrize("algorithm", ["SHA1", "SHA256", "sha3_256", "", "MD"])
    def test_unsupported_algorithm(self, engine, algorithm):
        """Test that names other than MD5/MD4 are rejected."""
        with pytest.raises(UnsupportedAlgorithmError) as exc_info:
            digest(algorithm, b"data", engine=engine)

        assert exc_info.value.error_code == "UnsupportedAlgorithm"

    def test_md4_not_provided_by_cryptography(self):
        """Test that a provider lacking MD4 reports it as unsupported."""
        with pytest.raises(UnsupportedAlgorithmError):
            digest("MD4", b"data", engine=CryptographyDigestEngine())


class TestHmacSha256:
    """Test HMAC-SHA256."""

    @pytest.mark.parametrize("message,expected", [
        ("hello world", "B8dXpkmWppplo/hAbiHLuXgIEPFErnypOewwhH1+tPQ="),
        ("hello \U0001F30E", "f+TQQp/dU+OEWEwY6sRpfVNgN2hKSIklnVOh6iBEPdE="),
    ])
    def test_known_answers(self, engine, message, expected):
        """Test HMAC-SHA256 against reference vectors."""
        result = hmac_sha256(message, HMAC_KEY, engine=engine)

        assert base64.b64encode(result).decode() == expected

    def test_rfc_style_vector(self, engine):
        """Test the widely published 'quick brown fox' vector."""
        result = hmac_sha256(b"The quick brown fox jumps over the lazy dog", b"key", engine=engine)

        assert result.hex() == "f7bc83f430538424b13298e6aa6fb143ef4d59a14946175997479dbc2d1a3cd8"

    def test_output_is_thirty_two_bytes(self, engine):
        """Test raw output length."""
        assert len(hmac_sha256(b"m", b"k", engine=engine)) == 32

    def test_deterministic(self, engine):
        """Test that identical inputs give identical bytes."""
        assert hmac_sha256(b"message", b"key", engine=engine) == hmac_sha256(b"message", b"key", engine=engine)

    def test_empty_key_rejected(self, engine):
        """Test that an empty key is an invalid argument."""
        with pytest.raises(InvalidArgumentError, match="key"):
            hmac_sha256(b"message", b"", engine=engine)

    def test_empty_message_allowed(self, engine):
        """Test that an empty message is signed like any other."""
        result = hmac_sha256(b"", b"key", engine=engine)

        assert result == std_hmac.new(b"key", b"", hashlib.sha256).digest()

    def test_engines_agree(self):
        """Test that both engines produce the same bytes."""
        message = "hello \U0001F30E".encode("utf-8")

        assert HashlibDigestEngine().hmac_sha256(message, b"k") == CryptographyDigestEngine().hmac_sha256(message, b"k")

    def test_provider_failure(self, monkeypatch):
        """Test that a failing provider surfaces as ProviderFailureError."""
        def broken_new(*args, **kwargs):
            raise ValueError("provider unavailable")

        monkeypatch.setattr(std_hmac, "new", broken_new)

        with pytest.raises(ProviderFailureError) as exc_info:
            HashlibDigestEngine().hmac_sha256(b"m", b"k")

        assert exc_info.value.error_code == "ProviderFailure"


class TestEngineSelection:
    """Test engine lookup."""

    @pytest.mark.parametrize("name,expected", [
        ("hashlib", HashlibDigestEngine),
        ("cryptography", CryptographyDigestEngine),
        ("HASHLIB", HashlibDigestEngine),
    ])
    def test_get_digest_engine(self, name, expected):
        """Test lookup by backend name."""
        assert isinstance(get_digest_engine(name), expected)

    def test_unknown_backend(self):
        """Test that an unknown backend name is rejected."""
        with pytest.raises(InvalidArgumentError, match="openssl"):
            get_digest_engine("openssl")

    def test_default_engine(self):
        """Test that the module-level default is the hashlib engine."""
        assert isinstance(default_engine(), HashlibDigestEngine)
