from __future__ import annotations

import json
import logging
import time
from typing import Any, Callable, Mapping, Optional

from ..contracts import ContractHandleCache
from ..shared.addresses import normalize_address
from ..shared.errors import InvalidArgument, log_failure
from ..shared.models import ContractKind
from ..shared.repositories import ChainConnection, MetadataFetcher
from ..shared.values import parse_token_id, positive_count, transaction_hash_of
from .models import FractionResult, MintResult, TokenRecord, TokenRecordResult, TransferResult

logger = logging.getLogger(__name__)

HTTP_PREFIXES = ("http://", "https://")


class TokenService:
    """
    Lifecycle of property tokens: minting, fractional shares, metadata reads
    and transfers.

    Every public method returns a result object; failures are reported through
    ``success=False`` and never raised.
    """

    def __init__(
        self,
        connection: ChainConnection,
        *,
        metadata_fetcher: MetadataFetcher,
        contracts: Optional[ContractHandleCache] = None,
        clock: Callable[[], float] = time.time,
    ):
        self._connection = connection
        self._fetcher = metadata_fetcher
        self._contracts = contracts or ContractHandleCache(connection)
        self._clock = clock

    @property
    def contracts(self) -> ContractHandleCache:
        return self._contracts

    async def mint(
        self,
        contract_address: str,
        token_uri: str,
        recipient: str,
        property_attributes: Optional[Mapping[str, Any]] = None,
    ) -> MintResult:
        try:
            recipient = normalize_address(recipient, field="recipient")
            if not token_uri:
                raise InvalidArgument("Token URI is required")
            envelope = {
                "propertyData": dict(property_attributes or {}),
                "tokenURI": token_uri,
                "timestamp": int(self._clock() * 1000),
            }
            async with self._contracts.lease(contract_address, ContractKind.ERC721) as contract:
                receipt = await contract.transact(
                    "mint",
                    recipient,
                    token_uri,
                    json.dumps(envelope, ensure_ascii=False),
                )
                transfers = contract.decode_events(receipt, "Transfer")
        except Exception as exc:
            log_failure(logger, "Token minting", exc)
            return MintResult.failed(exc)

        token_id = transfers[0].get("tokenId") if transfers else None
        return MintResult(
            token_id=str(token_id) if token_id is not None else None,
            transaction_hash=transaction_hash_of(receipt),
            metadata=envelope,
        )

    async def fractionalize(self, contract_address: str, token_id: Any, share_count: Any) -> FractionResult:
        try:
            token = parse_token_id(token_id)
            shares = positive_count(share_count, "share count")
            async with self._contracts.lease(contract_address, ContractKind.ERC1155) as contract:
                owner = self._connection.signer_address()
                receipt = await contract.transact("mint", owner, token, shares, b"")
        except Exception as exc:
            log_failure(logger, "Fractional token creation", exc)
            return FractionResult.failed(exc)

        return FractionResult(
            token_id=str(token),
            fractions=shares,
            transaction_hash=transaction_hash_of(receipt),
        )

    async def read_metadata(self, contract_address: str, token_id: Any) -> TokenRecordResult:
        try:
            token = parse_token_id(token_id)
            async with self._contracts.lease(contract_address, ContractKind.ERC721) as contract:
                token_uri = await contract.call("tokenURI", token)
                owner = normalize_address(await contract.call("ownerOf", token), field="owner")
            metadata = None
            if isinstance(token_uri, str) and token_uri.lower().startswith(HTTP_PREFIXES):
                metadata = await self._fetcher.fetch_json(token_uri)
            else:
                logger.debug("Token %s URI %r left undecoded", token, token_uri)
        except Exception as exc:
            log_failure(logger, "Token metadata read", exc)
            return TokenRecordResult.failed(exc)

        return TokenRecordResult(
            record=TokenRecord(
                token_id=str(token),
                token_uri=token_uri,
                owner=owner,
                metadata=metadata,
            )
        )

    async def transfer(self, contract_address: str, token_id: Any, sender: str, recipient: str) -> TransferResult:
        try:
            token = parse_token_id(token_id)
            sender = normalize_address(sender, field="sender")
            recipient = normalize_address(recipient, field="recipient")
            async with self._contracts.lease(contract_address, ContractKind.ERC721) as contract:
                receipt = await contract.transact("transferFrom", sender, recipient, token)
        except Exception as exc:
            log_failure(logger, "Token transfer", exc)
            return TransferResult.failed(exc)

        return TransferResult(
            token_id=str(token),
            sender=sender,
            recipient=recipient,
            transaction_hash=transaction_hash_of(receipt),
        )

