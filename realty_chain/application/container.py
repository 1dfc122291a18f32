from __future__ import annotations

import logging
from dataclasses import dataclass

from ..domain.domains import ENS_REGISTRY_ADDRESS, DomainResolver
from ..domain.marketplace import MarketplaceService
from ..domain.tokens import TokenService
from ..infrastructure import sync_deployments
from ..infrastructure.chain import ConnectionConfig, Web3ChainConnection, load_artifacts
from ..infrastructure.content import ContentHashDecoder
from ..infrastructure.metadata import HttpMetadataFetcher

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AppConfig:
    connection: ConnectionConfig
    ens_registry_address: str = ENS_REGISTRY_ADDRESS
    metadata_allowed_hosts: set[str] | None = None
    metadata_max_bytes: int = 1_000_000
    artifacts_dir: str | None = None
    deployments_file: str | None = None
    metrics_log_path: str | None = None


class AppContainer:
    def __init__(
        self,
        *,
        config: AppConfig,
        connection: Web3ChainConnection,
        tokens: TokenService,
        marketplace: MarketplaceService,
        domains: DomainResolver,
        metadata_fetcher: HttpMetadataFetcher,
    ):
        self.config = config
        self.connection = connection
        self.tokens = tokens
        self.marketplace = marketplace
        self.domains = domains

        self._metadata_fetcher = metadata_fetcher

    async def init_resources(self) -> None:
        if not self.connection.is_connected():
            logger.warning("Starting without a blockchain connection: %s", self.connection.last_error)
        if self.config.deployments_file:
            sync_deployments(self.marketplace, self.config.deployments_file)

    async def close(self) -> None:
        await self._metadata_fetcher.close()
        await self.connection.close()


def create_container(config: AppConfig) -> AppContainer:
    connection = Web3ChainConnection(config.connection)
    metadata_fetcher = HttpMetadataFetcher(
        allowed_hosts=config.metadata_allowed_hosts,
        max_download_bytes=config.metadata_max_bytes,
    )

    tokens = TokenService(connection, metadata_fetcher=metadata_fetcher)
    marketplace = MarketplaceService(
        connection,
        artifacts=load_artifacts(config.artifacts_dir),
    )
    domains = DomainResolver(
        connection,
        content_decoder=ContentHashDecoder(),
        registry_address=config.ens_registry_address,
    )

    return AppContainer(
        config=config,
        connection=connection,
        tokens=tokens,
        marketplace=marketplace,
        domains=domains,
        metadata_fetcher=metadata_fetcher,
    )
