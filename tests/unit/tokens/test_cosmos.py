"""Tests for Cosmos DB authorization tokens."""

import pytest

from signzure.codec.base64url import base64_decode
from signzure.crypto.digest import CryptographyDigestEngine
from signzure.exceptions import InvalidArgumentError
from signzure.tokens.cosmos import (
    COSMOS_TOKEN_PREFIX,
    build_cosmos_string_to_sign,
    cosmos_auth_token,
)


MASTER_KEY = base64_decode(
    "dsZQi3KtZmCv1ljt3VNWNm7sQUF1y5rJfC6kv5JiwvW0EndXdDku/dkKBp8/ufDToSxLzR4y+O/0H/t4bQtVNw=="
)
DATE = "Thu, 27 Apr 2017 00:51:12 GMT"
EXPECTED_TOKEN = "type%3dmaster%26ver%3d1.0%26sig%3dc09PEVJrgp2uQRkr934kFbTqhByc7TVr3OHyqlu%2bc%2bc%3d"


class TestCosmosAuthToken:
    """Test Cosmos DB master-key tokens."""

    def test_known_answer(self):
        """Test the Cosmos DB documentation example byte for byte."""
        assert cosmos_auth_token(MASTER_KEY, "GET", "dbs", "dbs/ToDoList", DATE) == EXPECTED_TOKEN

    def test_cryptography_engine(self):
        """Test that the engine choice does not change the token."""
        token = cosmos_auth_token(
            MASTER_KEY, "GET", "dbs", "dbs/ToDoList", DATE, engine=CryptographyDigestEngine()
        )

        assert token == EXPECTED_TOKEN

    def test_verb_type_and_date_are_case_folded(self):
        """Test that verb, resource type and date case do not matter."""
        token = cosmos_auth_token(MASTER_KEY, "get", "DBS", "dbs/ToDoList", DATE.upper())

        assert token == EXPECTED_TOKEN

    def test_resource_link_case_is_preserved(self):
        """Test that the resource link is signed as given."""
        token = cosmos_auth_token(MASTER_KEY, "GET", "dbs", "dbs/todolist", DATE)

        assert token != EXPECTED_TOKEN

    def test_root_level_operation(self):
        """Test that empty resource type and link are allowed by default."""
        token = cosmos_auth_token(MASTER_KEY, "GET", "", "", DATE)

        assert token.startswith(COSMOS_TOKEN_PREFIX)
        assert len(token) > len(COSMOS_TOKEN_PREFIX)

    @pytest.mark.parametrize("field", ["key", "verb", "date"])
    def test_empty_required_argument_rejected(self, field):
        """Test that key, verb and date are each required."""
        args = {
            "key": MASTER_KEY,
            "verb": "GET",
            "resource_type": "dbs",
            "resource_link": "dbs/ToDoList",
            "date": DATE,
        }
        args[field] = b"" if field == "key" else ""

        with pytest.raises(InvalidArgumentError) as exc_info:
            cosmos_auth_token(**args)

        assert field in exc_info.value.message

    @pytest.mark.parametrize("field", ["resource_type", "resource_link"])
    def test_strict_mode_rejects_empty_resource_fields(self, field):
        """Test the strict option for resource type and link."""
        args = {
            "key": MASTER_KEY,
            "verb": "GET",
            "resource_type": "dbs",
            "resource_link": "dbs/ToDoList",
            "date": DATE,
        }
        args[field] = ""

        with pytest.raises(InvalidArgumentError, match=field):
            cosmos_auth_token(**args, strict=True)

        assert cosmos_auth_token(**args).startswith(COSMOS_TOKEN_PREFIX)

    def test_strict_mode_known_answer(self):
        """Test that strict mode does not change a fully specified token."""
        assert cosmos_auth_token(MASTER_KEY, "GET", "dbs", "dbs/ToDoList", DATE, strict=True) == EXPECTED_TOKEN


class TestStringToSign:
    """Test the canonical string."""

    def test_layout(self):
        """Test field order, case folding and the trailing blank line."""
        assert build_cosmos_string_to_sign("GET", "Dbs", "dbs/ToDoList", DATE) == (
            "get\ndbs\ndbs/ToDoList\nthu, 27 apr 2017 00:51:12 gmt\n\n"
        )

    def test_empty_resource_fields(self):
        """Test root-level operations keep the empty lines."""
        assert build_cosmos_string_to_sign("GET", "", "", DATE) == "get\n\n\nthu, 27 apr 2017 00:51:12 gmt\n\n"
