"""Request and response value objects for user pool operations.

Requests are built per call and rendered to the provider's wire
dictionary with ``to_payload()``; keys follow the provider's PascalCase
member names and ``None`` members are left out.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Iterable, List, Optional


@dataclass(frozen=True)
class AttributeType:
    """A single (name, value) user attribute."""
    name: str
    value: Optional[str]

    def to_payload(self) -> Dict[str, Any]:
        return {"Name": self.name, "Value": self.value}


@dataclass(frozen=True)
class CallOptions:
    """Per-call options passed through to the provider operation."""
    timeout: Optional[float] = None
    state: Any = None


@dataclass
class ServiceResult:
    """Completion payload delivered to a provider callback.

    Exactly one of ``response`` and ``exception`` is meaningful: a
    non-None ``exception`` marks the call as failed.
    """
    request: Any
    response: Any = None
    exception: Optional[BaseException] = None


def _attributes_payload(attributes: Optional[List[AttributeType]]) -> Optional[List[Dict[str, Any]]]:
    if attributes is None:
        return None
    return [attr.to_payload() for attr in attributes]


def _compact(payload: Dict[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in payload.items() if value is not None}


@dataclass
class SignUpRequest:
    client_id: str
    username: str
    password: str
    user_attributes: Optional[List[AttributeType]] = None
    validation_data: Optional[List[AttributeType]] = None
    secret_hash: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        return _compact({
            "ClientId": self.client_id,
            "Username": self.username,
            "Password": self.password,
            "UserAttributes": _attributes_payload(self.user_attributes),
            "ValidationData": _attributes_payload(self.validation_data),
            "SecretHash": self.secret_hash,
        })


@dataclass
class AdminCreateUserRequest:
    user_pool_id: str
    username: str
    user_attributes: Optional[List[AttributeType]] = None
    validation_data: Optional[List[AttributeType]] = None
    # Kept on the request value only: AdminCreateUser has no SecretHash member.
    secret_hash: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        return _compact({
            "UserPoolId": self.user_pool_id,
            "Username": self.username,
            "UserAttributes": _attributes_payload(self.user_attributes),
            "ValidationData": _attributes_payload(self.validation_data),
        })


@dataclass
class AdminGetUserRequest:
    user_pool_id: str
    username: str

    def to_payload(self) -> Dict[str, Any]:
        return {"UserPoolId": self.user_pool_id, "Username": self.username}


@dataclass
class DescribeUserPoolRequest:
    user_pool_id: str

    def to_payload(self) -> Dict[str, Any]:
        return {"UserPoolId": self.user_pool_id}


@dataclass
class DescribeUserPoolClientRequest:
    user_pool_id: str
    client_id: str

    def to_payload(self) -> Dict[str, Any]:
        return {"UserPoolId": self.user_pool_id, "ClientId": self.client_id}


@dataclass
class ConfirmForgotPasswordRequest:
    client_id: str
    username: str
    confirmation_code: str
    password: str
    secret_hash: Optional[str] = None

    def to_payload(self) -> Dict[str, Any]:
        return _compact({
            "ClientId": self.client_id,
            "Username": self.username,
            "ConfirmationCode": self.confirmation_code,
            "Password": self.password,
            "SecretHash": self.secret_hash,
        })


@dataclass(frozen=True)
class PasswordPolicy:
    """Password policy of a user pool."""
    minimum_length: int = 8
    require_uppercase: bool = False
    require_lowercase: bool = False
    require_numbers: bool = False
    require_symbols: bool = False
    temporary_password_validity_days: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PasswordPolicy":
        return cls(
            minimum_length=int(data.get("MinimumLength", 8)),
            require_uppercase=bool(data.get("RequireUppercase", False)),
            require_lowercase=bool(data.get("RequireLowercase", False)),
            require_numbers=bool(data.get("RequireNumbers", False)),
            require_symbols=bool(data.get("RequireSymbols", False)),
            temporary_password_validity_days=data.get("TemporaryPasswordValidityDays"),
        )


@dataclass(frozen=True)
class ClientConfiguration:
    """Readable and writable attribute names of a user pool app client."""
    read_attributes: FrozenSet[str] = field(default_factory=frozenset)
    write_attributes: FrozenSet[str] = field(default_factory=frozenset)

    @classmethod
    def from_lists(cls, read_attributes: Optional[Iterable[str]],
                   write_attributes: Optional[Iterable[str]]) -> "ClientConfiguration":
        return cls(frozenset(read_attributes or ()), frozenset(write_attributes or ()))
