"""
Caching utilities for the per-company dashboard computations.
Works with Redis (django-redis) in production and the local-memory cache in development.
"""
import logging

from django.conf import settings
from django.core.cache import cache

logger = logging.getLogger(__name__)

STATS_CACHE_PREFIX = 'stats'
DASHBOARD_CACHE_PREFIX = 'dashboard'
COMPANY_CACHE_PREFIXES = (STATS_CACHE_PREFIX, DASHBOARD_CACHE_PREFIX)


def get_dashboard_cache_ttl():
    return getattr(settings, 'DASHBOARD_CACHE_TTL', 300)


def company_cache_key(prefix, company_id):
    """Cache key for a company-wide computation"""
    return f"{prefix}:{company_id}"


def get_or_compute(prefix, company_id, compute, refresh=False, ttl=None):
    """
    Return cached data for (prefix, company) or compute and store it.

    Usage:
        data = get_or_compute('stats', company.id, lambda: build_stats(company))

    refresh=True skips the cache lookup but still stores the fresh result.
    """
    cache_key = company_cache_key(prefix, company_id)

    if not refresh:
        cached_data = cache.get(cache_key)
        if cached_data is not None:
            logger.debug(f"Cache HIT for {cache_key}")
            return cached_data

    logger.debug(f"Cache MISS for {cache_key}")
    data = compute()
    cache.set(cache_key, data, ttl if ttl is not None else get_dashboard_cache_ttl())
    return data


def invalidate_company_cache(company_id):
    """Drop every cached computation of a company"""
    if company_id is None:
        return
    keys = [company_cache_key(prefix, company_id) for prefix in COMPANY_CACHE_PREFIXES]
    cache.delete_many(keys)
    logger.info(f"Invalidated dashboard cache for company {company_id}")
