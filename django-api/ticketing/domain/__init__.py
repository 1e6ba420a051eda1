from ticketing.domain.models import (
    ContactInfo,
    GroupDiscountRule,
    Offering,
    OfferingCategory,
    ReservationLine,
    ReservationRequest,
    ReservationResult,
    SalesWindow,
    TicketConfiguration,
    VIPReservationRequest,
    VIPTier,
)
from ticketing.domain.value_objects import Capacity, EventId, Money, OfferingId, TierId

__all__ = [
    "ContactInfo",
    "GroupDiscountRule",
    "Offering",
    "OfferingCategory",
    "ReservationLine",
    "ReservationRequest",
    "ReservationResult",
    "SalesWindow",
    "TicketConfiguration",
    "VIPReservationRequest",
    "VIPTier",
    "EventId",
    "OfferingId",
    "TierId",
    "Money",
    "Capacity",
]
