from .cache import ContractHandleCache

__all__ = ["ContractHandleCache"]
