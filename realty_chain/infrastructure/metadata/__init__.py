from .fetcher import HttpMetadataFetcher

__all__ = ["HttpMetadataFetcher"]
