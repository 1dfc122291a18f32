from .models import FractionResult, MintResult, TokenRecord, TokenRecordResult, TransferResult
from .service import TokenService

__all__ = [
    "TokenService",
    "MintResult",
    "FractionResult",
    "TokenRecord",
    "TokenRecordResult",
    "TransferResult",
]
