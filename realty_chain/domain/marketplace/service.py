from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Sequence

from ..contracts import ContractHandleCache
from ..shared.addresses import normalize_address
from ..shared.errors import ArtifactUnavailable, InvalidArgument, NetworkOrContractFailure, log_failure
from ..shared.models import ContractKind, DeploymentType
from ..shared.repositories import ChainConnection
from ..shared.values import parse_amount, parse_token_id, positive_count, transaction_hash_of
from .models import (
    ContractArtifact,
    DeployedContractRecord,
    DeployResult,
    ListResult,
    LoadResult,
    PurchaseResult,
)
from .registry import DeploymentRegistry

logger = logging.getLogger(__name__)


class MarketplaceService:
    """
    Deploys tokenization and fractional-registry contracts, keeps the
    in-memory registry of what this process deployed or loaded, and drives
    marketplace listings and purchases.
    """

    def __init__(
        self,
        connection: ChainConnection,
        *,
        artifacts: Optional[Mapping[ContractKind, ContractArtifact]] = None,
        contracts: Optional[ContractHandleCache] = None,
        registry: Optional[DeploymentRegistry] = None,
    ):
        self._connection = connection
        self._artifacts = dict(artifacts or {})
        self._contracts = contracts or ContractHandleCache(connection)
        self._registry = registry or DeploymentRegistry()

    @property
    def contracts(self) -> ContractHandleCache:
        return self._contracts

    @property
    def registry(self) -> DeploymentRegistry:
        return self._registry

    async def deploy_tokenization_contract(self, name: str, symbol: str) -> DeployResult:
        try:
            if not name or not symbol:
                raise InvalidArgument("Token name and symbol are required")
            artifact = self._artifact(ContractKind.MARKETPLACE)
            address, tx_hash = await self._deploy(artifact, name, symbol)
            await self._contracts.load(address, ContractKind.MARKETPLACE, artifact.abi)
            self._registry.add(
                DeployedContractRecord(address=address, type=DeploymentType.TOKENIZATION_CONTRACT)
            )
        except Exception as exc:
            log_failure(logger, "Contract deployment", exc)
            return DeployResult.failed(exc)

        logger.info("Deployed tokenization contract %s (%s/%s)", address, name, symbol)
        return DeployResult(
            contract_address=address,
            name=name,
            symbol=symbol,
            transaction_hash=tx_hash,
        )

    async def deploy_fractional_registry(self, property_token_address: str) -> DeployResult:
        try:
            linked = normalize_address(property_token_address, field="property token address")
            artifact = self._artifact(ContractKind.FRACTIONAL_REGISTRY)
            address, tx_hash = await self._deploy(artifact, linked)
            await self._contracts.load(address, ContractKind.FRACTIONAL_REGISTRY, artifact.abi)
            self._registry.add(
                DeployedContractRecord(
                    address=address,
                    type=DeploymentType.FRACTIONAL_REGISTRY,
                    linked_address=linked,
                )
            )
        except Exception as exc:
            log_failure(logger, "Fractional contract deployment", exc)
            return DeployResult.failed(exc)

        logger.info("Deployed fractional registry %s for %s", address, linked)
        return DeployResult(
            contract_address=address,
            property_token_address=linked,
            transaction_hash=tx_hash,
        )

    async def load_contract(
        self,
        address: str,
        abi: Optional[Sequence[dict]] = None,
        *,
        kind: ContractKind = ContractKind.CUSTOM,
    ) -> LoadResult:
        """Bind ``address`` explicitly, replacing any earlier binding, and record it."""
        try:
            handle = await self._contracts.load(address, kind, abi)
            record = self._registry.add(
                DeployedContractRecord(address=handle.address, type=DeploymentType.CUSTOM)
            )
        except Exception as exc:
            log_failure(logger, "Contract loading", exc)
            return LoadResult.failed(exc)
        return LoadResult(record=record)

    def register(self, record: DeployedContractRecord) -> DeployedContractRecord:
        return self._registry.add(record)

    async def list_for_sale(self, marketplace_address: str, token_id: Any, price: Any) -> ListResult:
        try:
            token = parse_token_id(token_id)
            amount = parse_amount(price)
            async with self._contracts.lease(marketplace_address, ContractKind.MARKETPLACE) as market:
                receipt = await market.transact("listProperty", token, amount)
        except Exception as exc:
            log_failure(logger, "Property listing", exc)
            return ListResult.failed(exc)

        return ListResult(
            token_id=str(token),
            price=str(amount),
            transaction_hash=transaction_hash_of(receipt),
        )

    async def purchase(self, marketplace_address: str, token_id: Any, share_count: Any = 1) -> PurchaseResult:
        # The listing price is read, then paid; a price change in between is not detected.
        try:
            token = parse_token_id(token_id)
            share_count = positive_count(share_count, "share count")
            async with self._contracts.lease(marketplace_address, ContractKind.MARKETPLACE) as market:
                listing = await market.call("getPropertyListing", token)
                total = _listing_price(listing) * share_count
                receipt = await market.transact("purchaseProperty", token, share_count, value=total)
        except Exception as exc:
            log_failure(logger, "Property purchase", exc)
            return PurchaseResult.failed(exc)

        return PurchaseResult(
            token_id=str(token),
            shares=share_count,
            price=str(total),
            transaction_hash=transaction_hash_of(receipt),
        )

    def list_deployed(self) -> dict[str, dict]:
        return self._registry.snapshot()

    def _artifact(self, kind: ContractKind) -> ContractArtifact:
        artifact = self._artifacts.get(kind)
        if artifact is None or not artifact.bytecode:
            raise ArtifactUnavailable(f"No compiled artifact available for {kind.value}")
        return artifact

    async def _deploy(self, artifact: ContractArtifact, *args: Any) -> tuple[str, Optional[str]]:
        receipt = await self._connection.deploy(artifact.abi, artifact.bytecode, *args)
        address = receipt.get("contractAddress")
        if not address:
            raise NetworkOrContractFailure("Deployment receipt has no contract address")
        return normalize_address(address), transaction_hash_of(receipt)


def _listing_price(listing: Any) -> int:
    if isinstance(listing, Mapping):
        value = listing["price"]
    elif hasattr(listing, "price"):
        value = listing.price
    else:
        value = listing[1]
    return int(value)
