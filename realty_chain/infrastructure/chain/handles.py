from __future__ import annotations

from typing import TYPE_CHECKING, Any, Mapping

from web3.contract import AsyncContract
from web3.logs import DISCARD

from ...domain.shared.models import ContractKind
from ..metrics import metrics

if TYPE_CHECKING:
    from .provider import Web3ChainConnection


class Web3ContractHandle:
    """A deployed contract bound to one connection; writes go through its signer."""

    def __init__(
        self,
        *,
        address: str,
        kind: ContractKind,
        contract: AsyncContract,
        connection: "Web3ChainConnection",
    ):
        self.address = address
        self.kind = kind
        self._contract = contract
        self._connection = connection

    def __repr__(self) -> str:
        return f"Web3ContractHandle({self.kind.value} at {self.address})"

    async def call(self, function: str, *args: Any) -> Any:
        bound = getattr(self._contract.functions, function)(*args)
        async with metrics.span_async("rpc:call", source="chain", extra={"function": function}):
            return await bound.call()

    async def transact(self, function: str, *args: Any, value: int = 0) -> Mapping[str, Any]:
        bound = getattr(self._contract.functions, function)(*args)
        return await self._connection.transact(bound, value=value)

    def decode_events(self, receipt: Mapping[str, Any], event: str) -> list[dict[str, Any]]:
        logs = getattr(self._contract.events, event)().process_receipt(receipt, errors=DISCARD)
        return [dict(log["args"]) for log in logs]
