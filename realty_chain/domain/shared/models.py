from __future__ import annotations

from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Optional

from .errors import ErrorKind, error_kind_of


class ContractKind(Enum):
    ERC721 = "ERC721"
    ERC1155 = "ERC1155"
    MARKETPLACE = "PropertyMarketplace"
    FRACTIONAL_REGISTRY = "FractionalRegistry"
    ENS_REGISTRY = "ENSRegistry"
    ENS_RESOLVER = "ENSPublicResolver"
    CUSTOM = "Custom"


class DeploymentType(Enum):
    TOKENIZATION_CONTRACT = "TokenizationContract"
    FRACTIONAL_REGISTRY = "FractionalRegistry"
    CUSTOM = "Custom"


@dataclass(frozen=True)
class OperationResult:
    """
    Base of every result returned across a service boundary.

    Expected failures never raise: they come back as ``success=False`` with a
    readable ``error`` and the ``error_kind`` category.
    """

    success: bool = True
    error: Optional[str] = None
    error_kind: Optional[ErrorKind] = None

    @classmethod
    def failed(cls, exc: BaseException, **extra: Any):
        return cls(success=False, error=str(exc) or exc.__class__.__name__, error_kind=error_kind_of(exc), **extra)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {}
        for field in fields(self):
            value = getattr(self, field.name)
            if value is None:
                continue
            payload[field.name] = _plain(value)
        return payload


def _plain(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if isinstance(value, dict):
        return {key: _plain(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(item) for item in value]
    return value


@dataclass(frozen=True)
class ContentPointer:
    protocol: str
    decoded: str
    raw: str

    @property
    def uri(self) -> str:
        return f"{self.protocol}://{self.decoded}"

    def to_dict(self) -> dict[str, str]:
        return {"protocol": self.protocol, "decoded": self.decoded, "raw": self.raw, "uri": self.uri}
