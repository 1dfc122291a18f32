from .models import PropertyResult, ResolutionResult, VerificationResult
from .names import AlternateName, DomainName, EnsName, UnsupportedName, classify_domain, name_hash
from .service import ENS_REGISTRY_ADDRESS, TEXT_RECORD_KEYS, DomainResolver

__all__ = [
    "DomainResolver",
    "ENS_REGISTRY_ADDRESS",
    "TEXT_RECORD_KEYS",
    "ResolutionResult",
    "VerificationResult",
    "PropertyResult",
    "EnsName",
    "AlternateName",
    "UnsupportedName",
    "DomainName",
    "classify_domain",
    "name_hash",
]
