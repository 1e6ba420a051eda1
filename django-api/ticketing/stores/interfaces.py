"""Store interfaces (repository pattern).

The reservation service is opaque to the booking core: it owns the catalog
and the authoritative sold/reserved counters. Stores must be swappable and
return domain models.
"""

from abc import ABC, abstractmethod

from ticketing.domain import (
    EventId,
    ReservationRequest,
    ReservationResult,
    TicketConfiguration,
    VIPReservationRequest,
    VIPTier,
)


class ReservationGateway(ABC):
    """Interface for the external catalog and reservation service."""

    @abstractmethod
    def fetch_ticket_configuration(self, event_id: EventId) -> TicketConfiguration | None:
        """Return the event's ticket configuration, or None if not configured."""
        ...

    @abstractmethod
    def submit_reservation(self, request: ReservationRequest) -> ReservationResult:
        """Record a reservation; rejections come back as an unsuccessful result."""
        ...

    @abstractmethod
    def fetch_vip_tiers(self) -> list[VIPTier]:
        """Return all VIP tiers, selectable or not."""
        ...

    @abstractmethod
    def submit_vip_reservation(self, request: VIPReservationRequest) -> bool:
        """Record a VIP tier reservation. Returns whether it was accepted."""
        ...
