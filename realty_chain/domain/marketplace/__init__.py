from .models import (
    ContractArtifact,
    DeployedContractRecord,
    DeployResult,
    ListResult,
    LoadResult,
    PurchaseResult,
)
from .registry import DeploymentRegistry
from .service import MarketplaceService

__all__ = [
    "MarketplaceService",
    "DeploymentRegistry",
    "ContractArtifact",
    "DeployedContractRecord",
    "DeployResult",
    "ListResult",
    "LoadResult",
    "PurchaseResult",
]
