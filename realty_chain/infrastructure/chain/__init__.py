from .abis import ABI_BY_KIND
from .artifacts import load_artifact, load_artifacts
from .handles import Web3ContractHandle
from .provider import ConnectionConfig, Web3ChainConnection

__all__ = [
    "ABI_BY_KIND",
    "ConnectionConfig",
    "Web3ChainConnection",
    "Web3ContractHandle",
    "load_artifact",
    "load_artifacts",
]
