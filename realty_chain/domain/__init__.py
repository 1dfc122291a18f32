from .contracts import ContractHandleCache
from .domains import DomainResolver, PropertyResult, ResolutionResult, VerificationResult
from .marketplace import ContractArtifact, DeployedContractRecord, DeploymentRegistry, MarketplaceService
from .shared import ContentPointer, ContractKind, DeploymentType, ErrorKind, OperationResult
from .tokens import TokenRecord, TokenService

__all__ = [
    "ContractHandleCache",
    "DomainResolver",
    "ResolutionResult",
    "VerificationResult",
    "PropertyResult",
    "MarketplaceService",
    "DeploymentRegistry",
    "DeployedContractRecord",
    "ContractArtifact",
    "TokenService",
    "TokenRecord",
    "ContentPointer",
    "ContractKind",
    "DeploymentType",
    "ErrorKind",
    "OperationResult",
]
