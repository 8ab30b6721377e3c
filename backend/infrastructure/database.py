"""Pool de connexions PostgreSQL partage par toutes les requetes."""

import logging

from psycopg_pool import AsyncConnectionPool

from chatforge.config import settings

logger = logging.getLogger(__name__)


def create_pool(conninfo: str | None = None) -> AsyncConnectionPool:
    """
    Cree le pool (ferme). Il est ouvert et ferme par le lifespan de l'application.
    """
    return AsyncConnectionPool(
        conninfo=conninfo or settings.get_postgres_uri(),
        min_size=settings.DB_POOL_MIN_SIZE,
        max_size=settings.DB_POOL_MAX_SIZE,
        open=False,
    )


async def open_pool(pool: AsyncConnectionPool) -> None:
    await pool.open()
    logger.info(f"Pool PostgreSQL ouvert ({settings.get_masked_postgres_uri()})")


async def close_pool(pool: AsyncConnectionPool) -> None:
    await pool.close()
    logger.info("Pool PostgreSQL ferme")
