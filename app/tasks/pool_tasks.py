import asyncio
import logging
from typing import Optional
from app.config import settings
from app.services.assignment_service import release_stale_claims

logger = logging.getLogger(__name__)


async def sweep_stale_claims(interval_seconds: Optional[float] = None):
    """Runs the lease sweep inside the API process so its change events reach local subscribers."""
    interval = interval_seconds or settings.STALE_CLAIM_SWEEP_SECONDS
    logger.info("Stale claim sweeper started. Checking every %ss", interval)

    while True:
        try:
            released = await release_stale_claims()
            if released:
                logger.info("Released %d stale claims", released)
        except Exception:
            logger.exception("Stale claim sweep failed")

        await asyncio.sleep(interval)
