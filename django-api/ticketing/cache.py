"""Cache keys for catalog snapshots and their invalidation."""

from django.conf import settings
from django.core.cache import cache

VIP_TIERS_KEY = "ticketing:vip-tiers"


def configuration_key(event_id: object) -> str:
    return f"ticketing:config:{event_id}"


def cache_timeout() -> int:
    return settings.TICKETING_CACHE_TIMEOUT


def invalidate_configuration(event_id: object) -> None:
    cache.delete(configuration_key(event_id))


def invalidate_vip_tiers() -> None:
    cache.delete(VIP_TIERS_KEY)
