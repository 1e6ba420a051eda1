"""Tests for cache behavior.

Run with: pytest tests/test_cache.py -v
"""

from decimal import Decimal

import pytest
from django.core.cache import cache

from ticketing import models
from ticketing.cache import VIP_TIERS_KEY, configuration_key
from ticketing.services.catalog_service import TicketCatalogService
from ticketing.stores.django_store import DjangoReservationGateway


def warm_configuration(configuration):
    TicketCatalogService(DjangoReservationGateway()).get_ticket_configuration(
        str(configuration.event_id)
    )
    return configuration_key(configuration.event_id)


@pytest.mark.django_db
class TestCacheInvalidation:
    """Tests for cache invalidation on model changes."""

    def test_configuration_is_cached_after_first_load(self, stored_event):
        """Loading a configuration stores it under ticketing:config:{event_id}."""
        configuration, _, _ = stored_event

        key = warm_configuration(configuration)

        assert cache.get(key) is not None

    def test_configuration_save_invalidates_cache(self, stored_event):
        configuration, _, _ = stored_event
        key = warm_configuration(configuration)

        configuration.event_title = "Grand Winter Gala"
        configuration.save()

        assert cache.get(key) is None

    def test_offering_save_invalidates_cache(self, stored_event):
        """Saving an offering invalidates its configuration's cache key."""
        configuration, general, _ = stored_event
        key = warm_configuration(configuration)

        general.price = Decimal("175.00")
        general.save()

        assert cache.get(key) is None

    def test_discount_rule_delete_invalidates_cache(self, stored_event):
        configuration, _, gold = stored_event
        key = warm_configuration(configuration)

        gold.group_discounts.first().delete()

        assert cache.get(key) is None

    def test_vip_tier_save_invalidates_tier_cache(self, stored_tiers):
        platinum, _ = stored_tiers
        TicketCatalogService(DjangoReservationGateway()).get_vip_tiers()
        assert cache.get(VIP_TIERS_KEY) is not None

        platinum.current_reservations = 9
        platinum.save()

        assert cache.get(VIP_TIERS_KEY) is None

    def test_other_events_stay_cached(self, stored_event):
        configuration, _, _ = stored_event
        key = warm_configuration(configuration)

        other = models.TicketConfiguration.objects.create(
            event_id="00000000-0000-4000-8000-000000000001",
            event_title="Autumn Soiree",
            sales_start=configuration.sales_start,
            sales_end=configuration.sales_end,
        )

        assert cache.get(key) is not None
