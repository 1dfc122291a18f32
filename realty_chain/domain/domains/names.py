from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from ens import ENS

from ..shared.errors import InvalidArgument

ENS_SUFFIX = "eth"
ALTERNATE_SUFFIXES = frozenset({"crypto", "nft", "blockchain", "bitcoin", "x", "dao"})


@dataclass(frozen=True)
class EnsName:
    name: str


@dataclass(frozen=True)
class AlternateName:
    name: str
    suffix: str


@dataclass(frozen=True)
class UnsupportedName:
    name: str


DomainName = Union[EnsName, AlternateName, UnsupportedName]


def classify_domain(domain: str) -> DomainName:
    if not isinstance(domain, str):
        return UnsupportedName(str(domain))
    name = domain.strip().lower().rstrip(".")
    label, _, suffix = name.rpartition(".")
    if not label:
        return UnsupportedName(name)
    if suffix == ENS_SUFFIX:
        return EnsName(name)
    if suffix in ALTERNATE_SUFFIXES:
        return AlternateName(name, suffix)
    return UnsupportedName(name)


def name_hash(name: str) -> bytes:
    """ENS node of ``name`` (normalized before hashing)."""
    try:
        return bytes(ENS.namehash(name))
    except Exception as exc:
        raise InvalidArgument(f"Invalid domain name {name!r}: {exc}") from exc
