import base64

import pytest

from reauth.credentials import BasicCredentials


def encode(value: str) -> str:
    return base64.b64encode(value.encode()).decode("ascii")


def test_no_header():
    assert BasicCredentials.from_authorization_header(None) is None


def test_empty_header():
    assert BasicCredentials.from_authorization_header("") is None


def test_missing_value():
    assert BasicCredentials.from_authorization_header("Basic ") is None


def test_bearer_header_is_ignored():
    assert BasicCredentials.from_authorization_header("Bearer token") is None


def test_valid_basic_returns_credentials():
    creds = BasicCredentials.from_authorization_header(f"Basic {encode('team/proj:abc123')}")

    assert creds == BasicCredentials(username="team/proj", password="abc123")


@pytest.mark.parametrize("schema", ["BASIC", "basic", "BaSiC"])
def test_case_insensitive_schema(schema):
    creds = BasicCredentials.from_authorization_header(f"{schema} {encode('user:pass')}")

    assert creds == BasicCredentials(username="user", password="pass")


def test_password_may_contain_colons():
    creds = BasicCredentials.from_authorization_header(f"Basic {encode('user:pa:ss')}")

    assert creds.username == "user"
    assert creds.password == "pa:ss"


def test_missing_separator():
    assert BasicCredentials.from_authorization_header(f"Basic {encode('userpass')}") is None


def test_invalid_base64():
    assert BasicCredentials.from_authorization_header("Basic !!!not-base64!!!") is None


def test_repr_hides_password():
    creds = BasicCredentials(username="user", password="secret")

    assert "secret" not in repr(creds)


def test_non_utf8_payload_falls_back_to_latin1():
    token = base64.b64encode(b"team/proj:caf\xe9").decode("ascii")

    creds = BasicCredentials.from_authorization_header(f"Basic {token}")

    assert creds.username == "team/proj"
    assert creds.password == "café"
    assert creds.encoding == "latin-1"
    assert creds.password.encode(creds.encoding) == b"caf\xe9"


def test_utf8_payload():
    creds = BasicCredentials.from_authorization_header(f"Basic {encode('user:café')}")

    assert creds.password == "café"
    assert creds.encoding == "utf-8"
