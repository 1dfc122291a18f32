from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional, Sequence

from ..shared.addresses import normalize_address
from ..shared.errors import ContractKindMismatch
from ..shared.models import ContractKind
from ..shared.repositories import ChainConnection, ContractHandle

logger = logging.getLogger(__name__)


class ContractHandleCache:
    """
    Address-keyed store of contract handles, owned by one service.

    Keys are lower-cased addresses; handles carry the checksum form. Entries
    live for the lifetime of the cache unless a lease that created them fails.
    """

    def __init__(self, connection: ChainConnection):
        self._connection = connection
        self._handles: dict[str, ContractHandle] = {}
        self._lock = asyncio.Lock()

    def __len__(self) -> int:
        return len(self._handles)

    def __contains__(self, address: object) -> bool:
        return isinstance(address, str) and address.lower() in self._handles

    def get(self, address: str) -> Optional[ContractHandle]:
        return self._handles.get(address.lower())

    async def get_or_load(self, address: str, kind: ContractKind) -> ContractHandle:
        handle, _ = await self._acquire(address, kind)
        return handle

    async def load(
        self,
        address: str,
        kind: ContractKind,
        abi: Optional[Sequence[dict]] = None,
    ) -> ContractHandle:
        checksum = normalize_address(address)
        async with self._lock:
            handle = self._connection.bind(checksum, kind, abi)
            self._handles[checksum.lower()] = handle
        logger.debug("Bound %s contract at %s (explicit load)", kind.value, checksum)
        return handle

    @asynccontextmanager
    async def lease(self, address: str, kind: ContractKind) -> AsyncIterator[ContractHandle]:
        handle, created = await self._acquire(address, kind)
        try:
            yield handle
        except BaseException:
            if created:
                await self._discard(handle)
            raise

    async def _acquire(self, address: str, kind: ContractKind) -> tuple[ContractHandle, bool]:
        checksum = normalize_address(address)
        key = checksum.lower()
        async with self._lock:
            handle = self._handles.get(key)
            if handle is not None:
                if not _compatible(handle.kind, kind):
                    raise ContractKindMismatch(checksum, handle.kind.value, kind.value)
                return handle, False
            handle = self._connection.bind(checksum, kind)
            self._handles[key] = handle
        logger.debug("Bound %s contract at %s", kind.value, checksum)
        return handle, True

    async def _discard(self, handle: ContractHandle) -> None:
        key = handle.address.lower()
        async with self._lock:
            if self._handles.get(key) is handle:
                del self._handles[key]


def _compatible(loaded: ContractKind, requested: ContractKind) -> bool:
    return loaded is requested or loaded is ContractKind.CUSTOM
