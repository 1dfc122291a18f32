from __future__ import annotations

import logging
from pathlib import Path

import yaml
from web3 import Web3

from ..domain.marketplace import DeployedContractRecord, MarketplaceService
from ..domain.shared.models import DeploymentType

logger = logging.getLogger(__name__)

TYPE_ALIASES = {
    "tokenization": DeploymentType.TOKENIZATION_CONTRACT,
    "tokenizationcontract": DeploymentType.TOKENIZATION_CONTRACT,
    "fractional": DeploymentType.FRACTIONAL_REGISTRY,
    "fractionalregistry": DeploymentType.FRACTIONAL_REGISTRY,
    "custom": DeploymentType.CUSTOM,
}


def load_deployments_from_yaml(path: str) -> list[DeployedContractRecord]:
    p = Path(path)
    if not p.exists():
        raise RuntimeError(f"deployments file not found: {path}")

    with p.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if not isinstance(data, dict) or "deployments" not in data:
        raise RuntimeError("Invalid deployments.yaml format")

    entries = data["deployments"]
    if not isinstance(entries, list):
        raise RuntimeError("deployments must be a list")

    records = []
    for entry in entries:
        if not isinstance(entry, dict):
            raise RuntimeError(f"Invalid deployment entry: {entry}")
        address = str(entry.get("address") or "").strip()
        type_name = str(entry.get("type") or "custom").strip().lower().replace("_", "").replace("-", "")
        linked = str(entry.get("property_token") or "").strip() or None

        if not Web3.is_address(address) or type_name not in TYPE_ALIASES:
            raise RuntimeError(f"Invalid deployment entry: {entry}")
        if linked and not Web3.is_address(linked):
            raise RuntimeError(f"Invalid property_token in deployment entry: {entry}")

        records.append(
            DeployedContractRecord(
                address=Web3.to_checksum_address(address),
                type=TYPE_ALIASES[type_name],
                linked_address=Web3.to_checksum_address(linked) if linked else None,
            )
        )

    return records


def sync_deployments(marketplace: MarketplaceService, yaml_path: str) -> int:
    records = load_deployments_from_yaml(yaml_path)
    for record in records:
        marketplace.register(record)
    logger.info("Registered %d known contracts from %s", len(records), yaml_path)
    return len(records)
