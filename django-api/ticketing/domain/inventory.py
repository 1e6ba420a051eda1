"""Inventory view over a fetched ticket configuration.

Nothing here mutates an offering: ``current_sold`` only moves server-side after
a confirmed reservation, so the purchasable set is recomputed from each
(re)loaded configuration.
"""

from collections.abc import Iterable

from ticketing.domain.models import Offering, SalesWindow, VIPTier


def purchasable_offerings(offerings: Iterable[Offering]) -> list[Offering]:
    """Active, not sold-out offerings, ordered by ascending priority.

    Offerings sharing a priority keep their incoming order.
    """
    return sorted(
        (offering for offering in offerings if offering.is_purchasable),
        key=lambda offering: offering.priority,
    )


def quantity_limit(offering: Offering, window: SalesWindow) -> int:
    """Most units of ``offering`` a single order may hold."""
    return max(min(offering.available, window.per_order_max), 0)


def clamp_quantity(requested: int, limit: int) -> int:
    return max(0, min(requested, limit))


def selectable_tiers(tiers: Iterable[VIPTier]) -> list[VIPTier]:
    return [tier for tier in tiers if tier.is_selectable]
