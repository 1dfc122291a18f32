from .chain import ConnectionConfig, Web3ChainConnection, load_artifacts
from .content import ContentHashDecoder
from .deployments_loader import load_deployments_from_yaml, sync_deployments
from .metadata import HttpMetadataFetcher
from .metrics import metrics

__all__ = [
    "ConnectionConfig",
    "Web3ChainConnection",
    "load_artifacts",
    "ContentHashDecoder",
    "HttpMetadataFetcher",
    "load_deployments_from_yaml",
    "sync_deployments",
    "metrics",
]
