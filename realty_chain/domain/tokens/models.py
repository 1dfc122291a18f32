from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from ..shared.models import OperationResult


@dataclass(frozen=True)
class MintResult(OperationResult):
    token_id: Optional[str] = None
    transaction_hash: Optional[str] = None
    metadata: Optional[dict[str, Any]] = None


@dataclass(frozen=True)
class FractionResult(OperationResult):
    token_id: Optional[str] = None
    fractions: Optional[int] = None
    transaction_hash: Optional[str] = None


@dataclass(frozen=True)
class TokenRecord:
    token_id: str
    token_uri: str
    owner: str
    metadata: Optional[Any] = None


@dataclass(frozen=True)
class TokenRecordResult(OperationResult):
    record: Optional[TokenRecord] = None

    def to_dict(self) -> dict[str, Any]:
        payload = super().to_dict()
        record = payload.pop("record", None)
        if record:
            payload.update(
                token_id=record.token_id,
                token_uri=record.token_uri,
                owner=record.owner,
                metadata=record.metadata,
            )
        return payload


@dataclass(frozen=True)
class TransferResult(OperationResult):
    token_id: Optional[str] = None
    sender: Optional[str] = None
    recipient: Optional[str] = None
    transaction_hash: Optional[str] = None
