from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Sequence

from ..shared.models import DeploymentType, OperationResult


@dataclass(frozen=True)
class DeployedContractRecord:
    address: str
    type: DeploymentType
    linked_address: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"address": self.address, "type": self.type.value}
        if self.linked_address:
            payload["propertyTokenAddress"] = self.linked_address
        return payload


@dataclass(frozen=True)
class ContractArtifact:
    """Compiled contract: ABI plus creation bytecode."""

    abi: Sequence[dict]
    bytecode: str


@dataclass(frozen=True)
class DeployResult(OperationResult):
    contract_address: Optional[str] = None
    name: Optional[str] = None
    symbol: Optional[str] = None
    property_token_address: Optional[str] = None
    transaction_hash: Optional[str] = None


@dataclass(frozen=True)
class ListResult(OperationResult):
    token_id: Optional[str] = None
    price: Optional[str] = None
    transaction_hash: Optional[str] = None


@dataclass(frozen=True)
class PurchaseResult(OperationResult):
    token_id: Optional[str] = None
    shares: Optional[int] = None
    price: Optional[str] = None
    transaction_hash: Optional[str] = None


@dataclass(frozen=True)
class LoadResult(OperationResult):
    record: Optional[DeployedContractRecord] = None
