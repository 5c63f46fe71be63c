"""
Cache invalidation signals
Automatically invalidate a company's dashboard cache when its data changes
"""
import logging

from django.db import transaction
from django.db.models.signals import post_save, post_delete
from django.dispatch import receiver

from .cache_utils import invalidate_company_cache

logger = logging.getLogger(__name__)


def _invalidate_for_instance(instance):
    company_id = getattr(instance, 'company_id', None)
    if company_id is None:
        return

    # Runs after the surrounding transaction commits
    def invalidate_after_commit():
        try:
            invalidate_company_cache(company_id)
        except Exception as e:
            logger.warning(f"Error invalidating dashboard cache: {e}")

    transaction.on_commit(invalidate_after_commit)


@receiver([post_save, post_delete], sender='catalog.Product')
def invalidate_on_product_change(sender, instance, **kwargs):
    """Stock alerts, fabric statuses and critical stocks depend on products"""
    _invalidate_for_instance(instance)


@receiver([post_save, post_delete], sender='orders.Order')
def invalidate_on_order_change(sender, instance, **kwargs):
    """Order counts depend on orders and their status"""
    _invalidate_for_instance(instance)
