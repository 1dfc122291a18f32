from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, Sequence

from .models import ContentPointer, ContractKind


class ContractHandle(Protocol):
    address: str
    kind: ContractKind

    async def call(self, function: str, *args: Any) -> Any: ...

    async def transact(self, function: str, *args: Any, value: int = 0) -> Mapping[str, Any]: ...

    def decode_events(self, receipt: Mapping[str, Any], event: str) -> list[dict[str, Any]]: ...


class ChainConnection(Protocol):
    def is_connected(self) -> bool: ...

    def signer_address(self) -> str: ...

    def bind(self, address: str, kind: ContractKind, abi: Optional[Sequence[dict]] = None) -> ContractHandle: ...

    async def deploy(self, abi: Sequence[dict], bytecode: str, *args: Any) -> Mapping[str, Any]: ...


class MetadataFetcher(Protocol):
    async def fetch_json(self, url: str) -> Any: ...

    async def close(self) -> None: ...


class ContentDecoder(Protocol):
    def decode(self, raw: bytes) -> ContentPointer: ...

