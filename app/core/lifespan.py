from contextlib import asynccontextmanager
import logging

from app.core.config.scoring import get_scoring_config
from app.scoring import badge_catalog
from app.store.documents import close_store, init_store
from app.taxonomy import get_default_taxonomy_provider

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app):
    get_scoring_config()
    badge_catalog()
    taxonomy = get_default_taxonomy_provider()
    init_store()
    logger.info(
        "engine_ready skills=%d roles=%d",
        len(taxonomy.known_skills()),
        len(taxonomy.role_names()),
    )
    yield
    close_store()
