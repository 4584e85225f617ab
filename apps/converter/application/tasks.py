"""
Celery tasks for background processing.
"""

import logging
from typing import Dict

from celery import shared_task

from apps.converter.client.response_cache import ResponseCache
from apps.converter.domain.exceptions import UpstreamError
from apps.converter.infrastructure.cache.rate_cache import get_rate_cache

logger = logging.getLogger(__name__)


@shared_task(name="refresh_rate_cache")
def refresh_rate_cache() -> Dict:
    """
    Force a refresh of the process-wide rate cache.

    Scheduled at the freshness window so conversions rarely pay for the
    upstream round-trip. An upstream failure is reported in the result
    rather than raised; the cache keeps whatever table it already had.

    Returns:
        Dict with operation results
    """
    try:
        table = get_rate_cache().refresh()
    except UpstreamError as e:
        logger.error("Scheduled rate refresh failed: %s", e)
        return {
            "success": False,
            "message": str(e),
            "currencies": 0
        }

    logger.info("Rate cache refreshed with %d currencies", len(table))
    return {
        "success": True,
        "currencies": len(table)
    }


@shared_task(name="purge_expired_responses")
def purge_expired_responses() -> Dict:
    """
    Delete cached API responses older than the response cache TTL.

    Returns:
        Dict with operation results
    """
    deleted = ResponseCache.from_settings().purge_expired()
    logger.info("Purged %d expired cached responses", deleted)
    return {
        "success": True,
        "deleted": deleted
    }
