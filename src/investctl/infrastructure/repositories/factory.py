"""Build the configured investment repository."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from investctl.infrastructure.database.engine import init_database
from investctl.infrastructure.repositories.memory import InMemoryInvestmentRepository
from investctl.infrastructure.repositories.sql import SqlInvestmentRepository

if TYPE_CHECKING:
    from investctl.config.settings import InvestSettings
    from investctl.infrastructure.repositories.base import InvestmentRepository

logger = logging.getLogger(__name__)


def create_repository(settings: InvestSettings) -> InvestmentRepository:
    """Return the repository selected by ``[storage] backend``.

    ``sqlite`` opens (and initializes) the database under ``data_root``;
    ``memory`` returns an empty in-process store.
    """
    backend = settings.storage.backend
    if backend == "memory":
        logger.debug("Using in-memory investment repository")
        return InMemoryInvestmentRepository()

    engine = init_database(settings.data_root, settings.storage.filename)
    logger.debug("Using SQLite investment repository at %s", engine.url.database)
    return SqlInvestmentRepository(engine)
