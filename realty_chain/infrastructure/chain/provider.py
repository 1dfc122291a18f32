from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence

import aiohttp
from eth_account import Account
from eth_account.messages import encode_defunct
from eth_account.signers.local import LocalAccount
from web3 import AsyncHTTPProvider, AsyncWeb3, Web3

from ...domain.shared.errors import InvalidArgument, NotConnected, SignerUnavailable, TransactionReverted
from ...domain.shared.models import ContractKind
from ..metrics import metrics
from .abis import ABI_BY_KIND
from .handles import Web3ContractHandle

logger = logging.getLogger(__name__)

GATEWAY_URL_TEMPLATE = "https://{network}.infura.io/v3/{api_key}"
PUBLIC_ENDPOINTS = {
    "mainnet": "https://ethereum-rpc.publicnode.com",
    "sepolia": "https://ethereum-sepolia-rpc.publicnode.com",
    "holesky": "https://ethereum-holesky-rpc.publicnode.com",
}


@dataclass(frozen=True)
class ConnectionConfig:
    network: str = "mainnet"
    rpc_url: str | None = None
    gateway_api_key: str | None = None
    use_gateway: bool = True
    private_key: str | None = None
    request_timeout: float = 30.0
    receipt_timeout: float = 120.0

    def endpoint(self) -> str | None:
        if self.rpc_url:
            return self.rpc_url
        if self.use_gateway and self.gateway_api_key:
            return GATEWAY_URL_TEMPLATE.format(network=self.network, api_key=self.gateway_api_key)
        return PUBLIC_ENDPOINTS.get(self.network.lower())

    def __repr__(self) -> str:
        return (
            f"ConnectionConfig(network={self.network!r}, rpc_url={self.rpc_url!r}, "
            f"use_gateway={self.use_gateway}, signer={'yes' if self.private_key else 'no'})"
        )


class Web3ChainConnection:
    """
    Read client plus optional signing account for one network.

    Construction never raises: a missing endpoint or malformed key leaves the
    connection disconnected with the reason in ``last_error``.
    """

    def __init__(self, config: ConnectionConfig, *, web3: AsyncWeb3 | None = None):
        self.config = config
        self.last_error: str | None = None
        self._web3: AsyncWeb3 | None = None
        self._account: LocalAccount | None = None
        self._connected = False
        self._send_lock = asyncio.Lock()
        self._initialize(web3)

    def _initialize(self, web3: AsyncWeb3 | None) -> None:
        try:
            if web3 is None:
                endpoint = self.config.endpoint()
                if not endpoint:
                    raise NotConnected(
                        f"No RPC endpoint, gateway credentials or default endpoint for network {self.config.network!r}"
                    )
                web3 = AsyncWeb3(
                    AsyncHTTPProvider(
                        endpoint,
                        request_kwargs={"timeout": aiohttp.ClientTimeout(total=self.config.request_timeout)},
                    )
                )
            account = Account.from_key(self.config.private_key) if self.config.private_key else None
        except Exception as exc:
            self.last_error = str(exc) or exc.__class__.__name__
            logger.error("Blockchain provider initialization failed: %s", self.last_error)
            return

        self._web3 = web3
        self._account = account
        self._connected = True
        logger.info(
            "Connected to %s (signer=%s)",
            self.config.network,
            account.address if account else "none",
        )

    def is_connected(self) -> bool:
        return self._connected and self._web3 is not None

    @property
    def web3(self) -> AsyncWeb3:
        if not self.is_connected():
            raise NotConnected(self.last_error or "Blockchain provider is not connected")
        return self._web3

    def get_signer(self) -> LocalAccount:
        if self._account is None:
            raise SignerUnavailable()
        return self._account

    def signer_address(self) -> str:
        return self.get_signer().address

    def bind(
        self,
        address: str,
        kind: ContractKind,
        abi: Optional[Sequence[dict]] = None,
    ) -> Web3ContractHandle:
        abi = abi or ABI_BY_KIND.get(kind)
        if not abi:
            raise InvalidArgument(f"An ABI is required to load a {kind.value} contract")
        contract = self.web3.eth.contract(address=Web3.to_checksum_address(address), abi=abi)
        return Web3ContractHandle(address=contract.address, kind=kind, contract=contract, connection=self)

    @metrics.wrap_async("rpc:gas_price", source="chain")
    async def estimate_gas_price(self) -> int:
        return await self.web3.eth.gas_price

    def sign_message(self, message: str) -> str:
        signed = self.get_signer().sign_message(encode_defunct(text=message))
        return "0x" + bytes(signed.signature).hex()

    @metrics.wrap_async("rpc:send_raw_transaction", source="chain")
    async def send_raw_transaction(self, payload: bytes) -> Mapping[str, Any]:
        tx_hash = await self.web3.eth.send_raw_transaction(payload)
        return await self._wait_for_receipt(tx_hash)

    @metrics.wrap_async("rpc:transact", source="chain")
    async def transact(self, function: Any, *, value: int = 0) -> Mapping[str, Any]:
        """Build, sign and submit ``function`` (a bound call or constructor), then wait for inclusion."""
        signer = self.get_signer()
        web3 = self.web3
        async with self._send_lock:
            nonce = await web3.eth.get_transaction_count(signer.address, "pending")
            transaction = await function.build_transaction(
                {"from": signer.address, "nonce": nonce, "value": value}
            )
            signed = signer.sign_transaction(transaction)
            tx_hash = await web3.eth.send_raw_transaction(signed.raw_transaction)
        logger.info("Submitted transaction %s (nonce=%s)", Web3.to_hex(tx_hash), nonce)
        return await self._wait_for_receipt(tx_hash)

    async def deploy(self, abi: Sequence[dict], bytecode: str, *args: Any) -> Mapping[str, Any]:
        factory = self.web3.eth.contract(abi=abi, bytecode=bytecode)
        return await self.transact(factory.constructor(*args))

    async def close(self) -> None:
        provider = self._web3.provider if self._web3 is not None else None
        disconnect = getattr(provider, "disconnect", None)
        if disconnect is not None:
            await disconnect()

    async def _wait_for_receipt(self, tx_hash: bytes) -> Mapping[str, Any]:
        receipt = await self.web3.eth.wait_for_transaction_receipt(
            tx_hash,
            timeout=self.config.receipt_timeout,
        )
        if receipt.get("status") == 0:
            raise TransactionReverted(Web3.to_hex(tx_hash))
        return receipt
