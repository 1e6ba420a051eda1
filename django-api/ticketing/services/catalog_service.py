"""Catalog service - loads ticket configurations and VIP tiers.

Services:
- Depend only on interfaces (stores)
- Validate identifiers
- Map store failures to LoadError
- Return domain models or raise domain errors
"""

import logging

from django.core.cache import cache

from ticketing.cache import VIP_TIERS_KEY, cache_timeout, configuration_key
from ticketing.domain import EventId, Offering, TicketConfiguration, VIPTier
from ticketing.domain.errors import ConfigurationNotFoundError, InvalidEventIdError, LoadError
from ticketing.domain.inventory import purchasable_offerings, selectable_tiers
from ticketing.stores.interfaces import ReservationGateway

logger = logging.getLogger(__name__)


def parse_event_id(event_id: str) -> EventId:
    try:
        return EventId.from_string(event_id)
    except (TypeError, ValueError, AttributeError) as exc:
        raise InvalidEventIdError() from exc


class TicketCatalogService:
    """Service for ticket configuration and VIP tier lookups."""

    def __init__(self, store: ReservationGateway) -> None:
        self._store = store

    def get_ticket_configuration(self, event_id: str) -> TicketConfiguration:
        """Return the ticket configuration of an event.

        Raises:
            InvalidEventIdError: If the event_id is not a valid UUID.
            ConfigurationNotFoundError: If the event has no ticket configuration.
            LoadError: If the reservation service could not be reached.
        """
        parsed = parse_event_id(event_id)
        key = configuration_key(parsed)
        configuration = cache.get(key)
        if configuration is not None:
            return configuration

        try:
            configuration = self._store.fetch_ticket_configuration(parsed)
        except Exception as exc:
            logger.exception("Failed to load ticket configuration for event %s", parsed)
            raise LoadError() from exc
        if configuration is None:
            raise ConfigurationNotFoundError(event_id)

        cache.set(key, configuration, cache_timeout())
        return configuration

    def get_purchasable_offerings(self, event_id: str) -> list[Offering]:
        """Return active, not sold-out offerings in display order."""
        return purchasable_offerings(self.get_ticket_configuration(event_id).offerings)

    def get_vip_tiers(self) -> list[VIPTier]:
        """Return every VIP tier, including fully booked ones.

        Raises:
            LoadError: If the tier catalog could not be loaded.
        """
        tiers = cache.get(VIP_TIERS_KEY)
        if tiers is not None:
            return tiers

        try:
            tiers = list(self._store.fetch_vip_tiers())
        except Exception as exc:
            logger.exception("Failed to load VIP tiers")
            raise LoadError("Error loading VIP packages") from exc

        cache.set(VIP_TIERS_KEY, tiers, cache_timeout())
        return tiers

    def get_selectable_tiers(self) -> list[VIPTier]:
        return selectable_tiers(self.get_vip_tiers())
