from .addresses import ZERO_ADDRESS, is_zero_address, normalize_address, same_address
from .errors import (
    ArtifactUnavailable,
    ChainError,
    ContentDecodeError,
    ContractKindMismatch,
    ErrorKind,
    InvalidAddress,
    InvalidArgument,
    InvalidInput,
    MetadataFetchError,
    NetworkOrContractFailure,
    NoAddressRecord,
    NoResolverFound,
    NotConnected,
    ProtocolNotImplemented,
    SignerUnavailable,
    TransactionReverted,
    Unavailable,
    UnsupportedDomain,
    error_kind_of,
    log_failure,
)
from .models import ContentPointer, ContractKind, DeploymentType, OperationResult
from .values import parse_amount, parse_token_id, positive_count, transaction_hash_of
from .repositories import ChainConnection, ContentDecoder, ContractHandle, MetadataFetcher

__all__ = [
    "ZERO_ADDRESS",
    "is_zero_address",
    "normalize_address",
    "same_address",
    "ArtifactUnavailable",
    "ChainError",
    "ContentDecodeError",
    "ContractKindMismatch",
    "ErrorKind",
    "InvalidAddress",
    "InvalidArgument",
    "InvalidInput",
    "MetadataFetchError",
    "NetworkOrContractFailure",
    "NoAddressRecord",
    "NoResolverFound",
    "NotConnected",
    "ProtocolNotImplemented",
    "SignerUnavailable",
    "TransactionReverted",
    "Unavailable",
    "UnsupportedDomain",
    "error_kind_of",
    "log_failure",
    "ContentPointer",
    "ContractKind",
    "DeploymentType",
    "OperationResult",
    "ChainConnection",
    "ContentDecoder",
    "ContractHandle",
    "MetadataFetcher",
    "parse_amount",
    "parse_token_id",
    "positive_count",
    "transaction_hash_of",
]
