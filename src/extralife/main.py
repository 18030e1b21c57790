"""Prize repository factory."""

from __future__ import annotations

import logging
from typing import Any

from extralife.core.config import Settings
from extralife.core.database import init_pool, open_collection
from extralife.core.logging import setup_logging
from extralife.repositories.prize_repository import PrizeRepository
from extralife.services.seed_loader import SeedLoader

logger = logging.getLogger(__name__)


def create_prize_repository(
    settings: Settings | None = None,
    pool: Any | None = None,
) -> PrizeRepository:
    """Build a ready-to-use :class:`PrizeRepository`.

    A *pool* may be passed in (tests, or callers sharing a pool);
    otherwise the module-level Oracle pool is created from *settings*.
    """
    if settings is None:
        settings = Settings()

    if not settings.is_testing:
        setup_logging(level=settings.log_level, log_format=settings.log_format)

    logger.info("Starting prize store (env=%s)", settings.app_env)
    if pool is None:
        pool = init_pool(settings)

    collection = open_collection(
        pool,
        settings.prize_collection,
        call_timeout_ms=settings.oracle_call_timeout_ms,
    )
    if settings.prize_id_unique_index:
        collection.ensure_unique_prize_id()

    return PrizeRepository(collection=collection, seed_loader=SeedLoader(settings.seed_path))
