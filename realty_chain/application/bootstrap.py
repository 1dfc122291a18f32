from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from .container import AppConfig, AppContainer, create_container


@asynccontextmanager
async def bootstrap_app(config: AppConfig) -> AsyncIterator[AppContainer]:
    container = create_container(config)
    try:
        await container.init_resources()
        yield container
    finally:
        await container.close()
