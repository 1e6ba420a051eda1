from ticketing.handlers.views import (
    QuoteView,
    ReservationCreateView,
    TicketConfigurationView,
    VIPReservationCreateView,
    VIPTierListView,
)

__all__ = [
    "QuoteView",
    "ReservationCreateView",
    "TicketConfigurationView",
    "VIPReservationCreateView",
    "VIPTierListView",
]
