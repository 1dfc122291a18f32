from __future__ import annotations

from typing import Iterator, Optional

from ..shared.addresses import normalize_address
from .models import DeployedContractRecord


class DeploymentRegistry:
    """In-memory record of contracts deployed or loaded by one service."""

    def __init__(self):
        self._records: dict[str, DeployedContractRecord] = {}

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[DeployedContractRecord]:
        return iter(list(self._records.values()))

    def add(self, record: DeployedContractRecord) -> DeployedContractRecord:
        address = normalize_address(record.address)
        linked = normalize_address(record.linked_address, field="linked address") if record.linked_address else None
        stored = DeployedContractRecord(address=address, type=record.type, linked_address=linked)
        self._records[address.lower()] = stored
        return stored

    def get(self, address: str) -> Optional[DeployedContractRecord]:
        return self._records.get(address.lower())

    def snapshot(self) -> dict[str, dict]:
        return {record.address: record.to_dict() for record in self._records.values()}
