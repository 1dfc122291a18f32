from __future__ import annotations

from typing import Any, Mapping, Optional

from .errors import InvalidArgument


def parse_token_id(value: Any) -> int:
    if isinstance(value, bool):
        raise InvalidArgument(f"Invalid token id: {value!r}")
    try:
        token = int(value)
    except (TypeError, ValueError):
        raise InvalidArgument(f"Invalid token id: {value!r}") from None
    if token < 0 or (isinstance(value, float) and token != value):
        raise InvalidArgument(f"Invalid token id: {value!r}")
    return token


def parse_amount(value: Any, name: str = "price") -> int:
    """Non-negative integer amount in wei, from an int or a decimal string."""
    if isinstance(value, bool):
        raise InvalidArgument(f"Invalid {name}: {value!r}")
    try:
        amount = int(value)
    except (TypeError, ValueError):
        raise InvalidArgument(f"Invalid {name}: {value!r}") from None
    if amount < 0 or (isinstance(value, float) and amount != value):
        raise InvalidArgument(f"Invalid {name}: {value!r}")
    return amount


def positive_count(value: Any, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise InvalidArgument(f"Invalid {name}: {value!r}")
    return value


def transaction_hash_of(receipt: Mapping[str, Any]) -> Optional[str]:
    value = receipt.get("transactionHash")
    if value is None:
        return None
    if isinstance(value, (bytes, bytearray)):
        return "0x" + bytes(value).hex()
    return str(value)
