from django.urls import path

from ticketing.handlers import (
    QuoteView,
    ReservationCreateView,
    TicketConfigurationView,
    VIPReservationCreateView,
    VIPTierListView,
)

urlpatterns = [
    path(
        "events/<str:event_id>/tickets",
        TicketConfigurationView.as_view(),
        name="ticket-configuration",
    ),
    path("events/<str:event_id>/quote", QuoteView.as_view(), name="ticket-quote"),
    path(
        "events/<str:event_id>/reservations",
        ReservationCreateView.as_view(),
        name="reservation-create",
    ),
    path("vip-tiers", VIPTierListView.as_view(), name="vip-tier-list"),
    path(
        "vip-tiers/<str:tier_id>/reservations",
        VIPReservationCreateView.as_view(),
        name="vip-reservation-create",
    ),
]
