"""User value returned by user pool lookups."""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, Optional

if TYPE_CHECKING:
    from .pool import CognitoUserPool
    from .provider import IdentityProvider


@dataclass(frozen=True)
class CognitoUser:
    """A user of a pool, bound to the pool's client and provider.

    Equality and repr cover the identity fields only; the pool, provider
    and client secret are carried along but never compared or printed.
    """
    user_id: Optional[str]
    client_id: str
    pool: "CognitoUserPool" = field(compare=False, repr=False)
    provider: "IdentityProvider" = field(compare=False, repr=False)
    client_secret: Optional[str] = field(default=None, compare=False, repr=False)
    status: Optional[str] = None
    username: Optional[str] = None
    attributes: Dict[str, Any] = field(default_factory=dict, hash=False)

    @property
    def pool_id(self) -> str:
        return self.pool.pool_id
