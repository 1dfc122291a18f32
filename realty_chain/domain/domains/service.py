from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Optional, Sequence

from ..contracts import ContractHandleCache
from ..shared.addresses import is_zero_address, normalize_address, same_address
from ..shared.errors import NoAddressRecord, NoResolverFound, ProtocolNotImplemented, UnsupportedDomain, log_failure
from ..shared.models import ContentPointer, ContractKind
from ..shared.repositories import ChainConnection, ContentDecoder, ContractHandle
from .models import PropertyResult, ResolutionResult, VerificationResult
from .names import AlternateName, DomainName, EnsName, classify_domain, name_hash

logger = logging.getLogger(__name__)

ENS_REGISTRY_ADDRESS = "0x00000000000C2E074eC69A0dFb2997BA6C7d2e1e"

TEXT_RECORD_KEYS = (
    "description",
    "url",
    "email",
    "avatar",
    "property.location",
    "property.beds",
    "property.baths",
    "property.sqft",
    "property.images",
    "property.video",
)
PROPERTY_PREFIX = "property."
IMAGES_KEY = "images"


class DomainResolver:
    """
    Resolves crypto domains to an address, a content pointer and text records.

    ENS names go registry -> resolver -> records. Record lookups are
    independent: each one that fails is left out of the result without
    failing the resolution.
    """

    def __init__(
        self,
        connection: ChainConnection,
        *,
        content_decoder: ContentDecoder,
        registry_address: str = ENS_REGISTRY_ADDRESS,
        text_keys: Sequence[str] = TEXT_RECORD_KEYS,
        contracts: Optional[ContractHandleCache] = None,
    ):
        self._decoder = content_decoder
        self._registry_address = registry_address
        self._text_keys = tuple(text_keys)
        self._contracts = contracts or ContractHandleCache(connection)

    @property
    def contracts(self) -> ContractHandleCache:
        return self._contracts

    async def resolve(self, domain: str) -> ResolutionResult:
        name = classify_domain(domain)
        try:
            return await self._resolve_name(name)
        except Exception as exc:
            log_failure(logger, f"Domain resolution of {name.name!r}", exc)
            return ResolutionResult.failed(exc, domain=name.name)

    async def verify_ownership(self, domain: str, claimed_address: str) -> VerificationResult:
        try:
            claimed = normalize_address(claimed_address, field="claimed address")
        except Exception as exc:
            return VerificationResult.failed(exc, domain=domain)

        resolution = await self.resolve(domain)
        if not resolution.success:
            return VerificationResult(
                success=False,
                error=resolution.error,
                error_kind=resolution.error_kind,
                domain=resolution.domain,
            )
        if resolution.address is None:
            return VerificationResult.failed(NoAddressRecord(resolution.domain), domain=resolution.domain)

        return VerificationResult(
            verified=same_address(resolution.address, claimed),
            domain=resolution.domain,
            owner_address=resolution.address,
        )

    async def extract_property_metadata(self, domain: str) -> PropertyResult:
        resolution = await self.resolve(domain)
        if not resolution.success:
            return PropertyResult(
                success=False,
                error=resolution.error,
                error_kind=resolution.error_kind,
                domain=resolution.domain,
            )

        property_metadata: dict[str, Any] = {
            key[len(PROPERTY_PREFIX):]: value
            for key, value in resolution.metadata.items()
            if key.startswith(PROPERTY_PREFIX)
        }
        raw_images = property_metadata.get(IMAGES_KEY)
        if raw_images is not None:
            property_metadata[IMAGES_KEY] = _parse_image_list(raw_images)

        return PropertyResult(
            domain=resolution.domain,
            address=resolution.address,
            content=resolution.content,
            metadata=dict(resolution.metadata),
            resolver_address=resolution.resolver_address,
            property_metadata=property_metadata,
        )

    async def _resolve_name(self, name: DomainName) -> ResolutionResult:
        if isinstance(name, EnsName):
            return await self._resolve_ens(name)
        if isinstance(name, AlternateName):
            raise ProtocolNotImplemented(
                f"Resolution of .{name.suffix} domains requires the Unstoppable Domains registry"
            )
        raise UnsupportedDomain(name.name)

    async def _resolve_ens(self, name: EnsName) -> ResolutionResult:
        node = name_hash(name.name)
        registry = await self._contracts.get_or_load(self._registry_address, ContractKind.ENS_REGISTRY)
        resolver_address = await registry.call("resolver", node)
        if is_zero_address(resolver_address):
            raise NoResolverFound(name.name)

        resolver = await self._contracts.get_or_load(resolver_address, ContractKind.ENS_RESOLVER)
        address, content, metadata = await asyncio.gather(
            self._address_record(resolver, node),
            self._content_record(resolver, node),
            self._text_records(resolver, node),
        )
        return ResolutionResult(
            domain=name.name,
            address=address,
            content=content,
            metadata=metadata,
            resolver_address=resolver.address,
        )

    async def _address_record(self, resolver: ContractHandle, node: bytes) -> Optional[str]:
        try:
            value = await resolver.call("addr", node)
            if is_zero_address(value):
                return None
            return normalize_address(value)
        except Exception as exc:
            logger.debug("addr record unavailable on %s: %s", resolver.address, exc)
            return None

    async def _content_record(self, resolver: ContractHandle, node: bytes) -> Optional[ContentPointer]:
        try:
            raw = await resolver.call("contenthash", node)
            if not raw:
                return None
            return self._decoder.decode(bytes(raw))
        except Exception as exc:
            logger.debug("contenthash unavailable on %s: %s", resolver.address, exc)
            return None

    async def _text_records(self, resolver: ContractHandle, node: bytes) -> dict[str, str]:
        values = await asyncio.gather(
            *(resolver.call("text", node, key) for key in self._text_keys),
            return_exceptions=True,
        )
        records: dict[str, str] = {}
        for key, value in zip(self._text_keys, values):
            if isinstance(value, BaseException):
                logger.debug("text record %r unavailable: %s", key, value)
                continue
            if value:
                records[key] = str(value)
        return records


def _parse_image_list(raw: str) -> Any:
    try:
        parsed = json.loads(raw)
    except (TypeError, ValueError):
        return raw
    return parsed if isinstance(parsed, list) else raw
