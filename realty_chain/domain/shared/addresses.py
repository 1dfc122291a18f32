from __future__ import annotations

from web3 import Web3

from .errors import InvalidAddress

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"


def normalize_address(value: object, *, field: str = "address") -> str:
    """Return the checksum form of ``value`` or raise ``InvalidAddress``."""
    if not isinstance(value, str) or not Web3.is_address(value):
        raise InvalidAddress(value, field=field)
    return Web3.to_checksum_address(value)


def is_zero_address(value: object) -> bool:
    if not value:
        return True
    return isinstance(value, str) and value.lower() == ZERO_ADDRESS


def same_address(a: str, b: str) -> bool:
    return a.lower() == b.lower()
