"""Application context: everything one process needs, built once."""

import logging
from dataclasses import dataclass
from typing import Optional, TextIO

from .actions import Actions
from .common.logging_config import get_logger
from .config import Config
from .database.base import MappingStoreBase
from .database.postgres import MappingStorePostgres
from .service import URLShortenerService
from .shortcode import ShortCodeGenerator


@dataclass
class AppContext:
    """Owns the store, service and actions for one process.

    Build it at startup and pass it where it is needed; close it on the way
    out to release the connection pool.
    """

    config: Config
    store: MappingStoreBase
    service: URLShortenerService
    actions: Actions
    logger: logging.Logger

    @classmethod
    def create(
        cls,
        config: Config,
        store: Optional[MappingStoreBase] = None,
        out: Optional[TextIO] = None,
        logger: Optional[logging.Logger] = None,
    ) -> "AppContext":
        """Wire up the application from configuration.

        Args:
            config: Loaded configuration
            store: Store to use instead of the PostgreSQL one from ``config.db_url``
            out: Sink for JSON records (defaults to stdout)
            logger: Optional logger
        """
        logger = logger or get_logger()

        if store is None:
            store = MappingStorePostgres(
                db_config=config.db_url,
                pool_min_size=config.db_min_conns,
                pool_max_size=config.db_max_conns,
                max_conn_lifetime_seconds=config.db_max_conn_lifetime,
                max_conn_idle_seconds=config.db_max_conn_idle_time,
                command_timeout_seconds=config.db_command_timeout,
                create_tables=config.create_tables,
                logger=logger,
            )

        generator = ShortCodeGenerator(default_length=config.short_code_length)
        service = URLShortenerService(
            store=store,
            short_code_generator=generator,
            code_length=config.short_code_length,
            max_collision_retries=config.max_collision_retries,
        )
        actions = Actions(
            service=service,
            out=out,
            list_max_limit=config.list_max_limit,
            timeout_seconds=config.action_timeout_seconds,
            logger=logger,
        )

        return cls(config=config, store=store, service=service, actions=actions, logger=logger)

    async def close(self) -> None:
        """Close store connections."""
        await self.store.close()
        self.logger.debug("Database connection pool closed")

    async def __aenter__(self) -> "AppContext":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()
