from __future__ import annotations

from typing import Sequence

from ...domain.shared.models import ContractKind


def _params(*pairs: tuple[str, str]) -> list[dict]:
    return [{"name": name, "type": type_} for type_, name in pairs]


def _function(name: str, inputs: list[dict], outputs: list[dict] | None = None, *, mutability: str = "nonpayable") -> dict:
    return {
        "type": "function",
        "name": name,
        "inputs": inputs,
        "outputs": outputs or [],
        "stateMutability": mutability,
    }


def _view(name: str, inputs: list[dict], outputs: list[dict]) -> dict:
    return _function(name, inputs, outputs, mutability="view")


def _event(name: str, *params: tuple[str, str, bool]) -> dict:
    return {
        "type": "event",
        "name": name,
        "anonymous": False,
        "inputs": [{"name": n, "type": t, "indexed": indexed} for t, n, indexed in params],
    }


def _constructor(*pairs: tuple[str, str]) -> dict:
    return {"type": "constructor", "inputs": _params(*pairs), "stateMutability": "nonpayable"}


_ERC721_CORE = [
    _function(
        "mint",
        _params(("address", "to"), ("string", "tokenURI"), ("string", "metadata")),
        _params(("uint256", "tokenId")),
    ),
    _view("tokenURI", _params(("uint256", "tokenId")), _params(("string", ""))),
    _view("ownerOf", _params(("uint256", "tokenId")), _params(("address", ""))),
    _view("balanceOf", _params(("address", "owner")), _params(("uint256", ""))),
    _view("name", [], _params(("string", ""))),
    _view("symbol", [], _params(("string", ""))),
    _function("transferFrom", _params(("address", "from"), ("address", "to"), ("uint256", "tokenId"))),
    _function("approve", _params(("address", "to"), ("uint256", "tokenId"))),
    _event("Transfer", ("address", "from", True), ("address", "to", True), ("uint256", "tokenId", True)),
    _event("Approval", ("address", "owner", True), ("address", "approved", True), ("uint256", "tokenId", True)),
]

ERC721_ABI: list[dict] = list(_ERC721_CORE)

_ERC1155_CORE = [
    _function(
        "mint",
        _params(("address", "to"), ("uint256", "id"), ("uint256", "amount"), ("bytes", "data")),
    ),
    _view("balanceOf", _params(("address", "account"), ("uint256", "id")), _params(("uint256", ""))),
    _view("uri", _params(("uint256", "id")), _params(("string", ""))),
    _function(
        "safeTransferFrom",
        _params(
            ("address", "from"),
            ("address", "to"),
            ("uint256", "id"),
            ("uint256", "amount"),
            ("bytes", "data"),
        ),
    ),
    _event(
        "TransferSingle",
        ("address", "operator", True),
        ("address", "from", True),
        ("address", "to", True),
        ("uint256", "id", False),
        ("uint256", "value", False),
    ),
]

ERC1155_ABI: list[dict] = list(_ERC1155_CORE)

PROPERTY_MARKETPLACE_ABI: list[dict] = [
    _constructor(("string", "name"), ("string", "symbol")),
    *_ERC721_CORE,
    _function("listProperty", _params(("uint256", "tokenId"), ("uint256", "price"))),
    _view(
        "getPropertyListing",
        _params(("uint256", "tokenId")),
        [
            {
                "name": "",
                "type": "tuple",
                "components": _params(
                    ("address", "seller"),
                    ("uint256", "price"),
                    ("uint256", "shares"),
                    ("bool", "active"),
                ),
            }
        ],
    ),
    _function(
        "purchaseProperty",
        _params(("uint256", "tokenId"), ("uint256", "shares")),
        mutability="payable",
    ),
    _event("PropertyListed", ("uint256", "tokenId", True), ("address", "seller", True), ("uint256", "price", False)),
    _event(
        "PropertyPurchased",
        ("uint256", "tokenId", True),
        ("address", "buyer", True),
        ("uint256", "shares", False),
        ("uint256", "price", False),
    ),
]

FRACTIONAL_REGISTRY_ABI: list[dict] = [
    _constructor(("address", "propertyToken")),
    *_ERC1155_CORE,
    _view("propertyToken", [], _params(("address", ""))),
]

ENS_REGISTRY_ABI: list[dict] = [
    _view("resolver", _params(("bytes32", "node")), _params(("address", ""))),
    _view("owner", _params(("bytes32", "node")), _params(("address", ""))),
]

ENS_RESOLVER_ABI: list[dict] = [
    _view("addr", _params(("bytes32", "node")), _params(("address", ""))),
    _view("contenthash", _params(("bytes32", "node")), _params(("bytes", ""))),
    _view("text", _params(("bytes32", "node"), ("string", "key")), _params(("string", ""))),
]

ABI_BY_KIND: dict[ContractKind, Sequence[dict]] = {
    ContractKind.ERC721: ERC721_ABI,
    ContractKind.ERC1155: ERC1155_ABI,
    ContractKind.MARKETPLACE: PROPERTY_MARKETPLACE_ABI,
    ContractKind.FRACTIONAL_REGISTRY: FRACTIONAL_REGISTRY_ABI,
    ContractKind.ENS_REGISTRY: ENS_REGISTRY_ABI,
    ContractKind.ENS_RESOLVER: ENS_RESOLVER_ABI,
}
