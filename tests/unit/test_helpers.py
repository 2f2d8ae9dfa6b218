"""Tests for attribute marshalling, secret hash and the user-agent hook."""
import base64
import hashlib
import hmac

from userpool.core.cognito import (
    AttributeType,
    attributes_to_dict,
    create_attribute_list,
    get_secret_hash,
    user_agent_handler,
)
from userpool.core.cognito.helpers import USER_AGENT_TOKEN


def test_create_attribute_list_preserves_entries_and_order():
    attrs = create_attribute_list({"email": "a@x.com", "custom:tier": "gold", "empty": ""})
    assert attrs == [
        AttributeType("email", "a@x.com"),
        AttributeType("custom:tier", "gold"),
        AttributeType("empty", ""),
    ]


def test_create_attribute_list_empty_mapping():
    assert create_attribute_list({}) == []


def test_attributes_to_dict():
    wire = [{"Name": "email", "Value": "a@x.com"}, {"Name": "sub", "Value": "abc"}, {"Name": "flag"}]
    assert attributes_to_dict(wire) == {"email": "a@x.com", "sub": "abc", "flag": None}
    assert attributes_to_dict(None) == {}


def test_secret_hash_is_hmac_sha256_of_user_and_client():
    expected = base64.b64encode(
        hmac.new(b"s3cret", b"bobclient1", hashlib.sha256).digest()
    ).decode("ascii")
    assert get_secret_hash("bob", "client1", "s3cret") == expected


def test_secret_hash_depends_on_every_input():
    base = get_secret_hash("bob", "client1", "s3cret")
    assert base == get_secret_hash("bob", "client1", "s3cret")
    assert base != get_secret_hash("alice", "client1", "s3cret")
    assert base != get_secret_hash("bob", "client2", "s3cret")
    assert base != get_secret_hash("bob", "client1", "other")
    assert len(base64.b64decode(base)) == 32


def test_user_agent_handler_appends_token_once():
    headers = {"User-Agent": "Boto3/1.34.0 md/Botocore#1.34.0"}
    user_agent_handler("SignUp", headers)
    user_agent_handler("SignUp", headers)
    assert headers["User-Agent"] == f"Boto3/1.34.0 md/Botocore#1.34.0 {USER_AGENT_TOKEN}"


def test_user_agent_handler_sets_missing_header():
    headers = {}
    user_agent_handler("AdminGetUser", headers)
    assert headers["User-Agent"] == USER_AGENT_TOKEN
