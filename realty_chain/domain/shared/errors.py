from __future__ import annotations

import logging
from enum import Enum


class ErrorKind(Enum):
    INVALID_INPUT = "invalid_input"
    UNAVAILABLE = "unavailable"
    NOT_IMPLEMENTED = "not_implemented"
    NETWORK_OR_CONTRACT = "network_or_contract"


class ChainError(Exception):
    kind: ErrorKind = ErrorKind.NETWORK_OR_CONTRACT


class InvalidInput(ChainError):
    kind = ErrorKind.INVALID_INPUT


class Unavailable(ChainError):
    kind = ErrorKind.UNAVAILABLE


class InvalidAddress(InvalidInput):
    def __init__(self, value: object, *, field: str = "address"):
        super().__init__(f"Invalid {field}: {value!r}")
        self.value = value
        self.field = field


class InvalidArgument(InvalidInput):
    pass


class UnsupportedDomain(InvalidInput):
    def __init__(self, domain: str):
        super().__init__(
            f"Unsupported domain type: {domain}. Supported: .eth, .crypto, .nft, etc."
        )
        self.domain = domain


class ContractKindMismatch(InvalidInput):
    def __init__(self, address: str, loaded: object, requested: object):
        super().__init__(
            f"Contract {address} is loaded as {loaded}, not {requested}"
        )
        self.address = address


class SignerUnavailable(Unavailable):
    def __init__(self, message: str = "Wallet not configured. Provide a private key in configuration."):
        super().__init__(message)


class NotConnected(Unavailable):
    pass


class NoResolverFound(Unavailable):
    def __init__(self, domain: str):
        super().__init__(f"No resolver found for domain {domain}")
        self.domain = domain


class NoAddressRecord(Unavailable):
    def __init__(self, domain: str):
        super().__init__(f"Domain {domain} has no address record")
        self.domain = domain


class ArtifactUnavailable(Unavailable):
    pass


class ProtocolNotImplemented(ChainError):
    kind = ErrorKind.NOT_IMPLEMENTED


class NetworkOrContractFailure(ChainError):
    kind = ErrorKind.NETWORK_OR_CONTRACT


class TransactionReverted(NetworkOrContractFailure):
    def __init__(self, transaction_hash: str):
        super().__init__(f"Transaction reverted: {transaction_hash}")
        self.transaction_hash = transaction_hash


class MetadataFetchError(NetworkOrContractFailure):
    pass


class ContentDecodeError(NetworkOrContractFailure):
    pass


def error_kind_of(exc: BaseException) -> ErrorKind:
    if isinstance(exc, ChainError):
        return exc.kind
    return ErrorKind.NETWORK_OR_CONTRACT


def log_failure(logger: logging.Logger, action: str, exc: BaseException) -> None:
    if isinstance(exc, ChainError):
        logger.warning("%s failed: %s", action, exc)
    else:
        logger.exception("%s failed", action)
