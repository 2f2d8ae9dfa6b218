"""Marshalling and signing helpers shared by user pool requests."""
from __future__ import annotations
import base64
import hashlib
import hmac
from typing import Any, Dict, Iterable, List, Mapping, MutableMapping

from ... import __version__
from .models import AttributeType

USER_AGENT_TOKEN = f"userpool-client/{__version__}"


def create_attribute_list(attributes: Mapping[str, Any]) -> List[AttributeType]:
    """Convert an attribute mapping to the provider's attribute list shape.

    Args:
        attributes: Mapping of attribute name to value

    Returns:
        AttributeType list, in the mapping's iteration order
    """
    return [AttributeType(name, value) for name, value in attributes.items()]


def attributes_to_dict(attributes: Iterable[Mapping[str, Any]] | None) -> Dict[str, Any]:
    """Convert a wire attribute list (``[{"Name": ..., "Value": ...}]``) to a dict."""
    return {attr["Name"]: attr.get("Value") for attr in attributes or ()}


def get_secret_hash(user_id: str, client_id: str, client_secret: str) -> str:
    """Compute the secret hash proving knowledge of the app client secret.

    base64(HMAC-SHA256(key=client_secret, message=user_id + client_id))
    """
    message = (user_id + client_id).encode("utf-8")
    digest = hmac.new(client_secret.encode("utf-8"), message, hashlib.sha256).digest()
    return base64.b64encode(digest).decode("ascii")


def user_agent_handler(operation: str, headers: MutableMapping[str, str]) -> None:
    """Before-request hook: tag outgoing requests with the library user agent."""
    current = headers.get("User-Agent") or ""
    if USER_AGENT_TOKEN in current:
        return
    # botocore HTTPHeaders appends on assignment, so drop the old value first.
    if "User-Agent" in headers:
        del headers["User-Agent"]
    headers["User-Agent"] = f"{current} {USER_AGENT_TOKEN}".strip()
