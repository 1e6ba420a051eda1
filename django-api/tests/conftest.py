"""Pytest configuration and shared fixtures."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from uuid import uuid4

import pytest
from rest_framework.test import APIClient

from ticketing.domain import (
    Capacity,
    EventId,
    GroupDiscountRule,
    Money,
    Offering,
    OfferingCategory,
    OfferingId,
    ReservationResult,
    SalesWindow,
    TicketConfiguration,
    TierId,
    VIPTier,
)
from ticketing.stores.interfaces import ReservationGateway

NOW = datetime(2026, 6, 1, 12, 0, tzinfo=timezone.utc)


class FakeGateway(ReservationGateway):
    """In-memory reservation service that records what it was sent."""

    def __init__(self, configuration=None, tiers=(), result=None, vip_accepted=True):
        self.configuration = configuration
        self.tiers = list(tiers)
        self.result = result or ReservationResult.confirmed("GSG-VIP-ABC123")
        self.vip_accepted = vip_accepted
        self.error: Exception | None = None
        self.on_submit = None
        self.requests = []
        self.vip_requests = []
        self.configuration_fetches = 0

    def fetch_ticket_configuration(self, event_id):
        self.configuration_fetches += 1
        if self.error is not None:
            raise self.error
        return self.configuration

    def submit_reservation(self, request):
        self.requests.append(request)
        if self.on_submit is not None:
            self.on_submit()
        if self.error is not None:
            raise self.error
        return self.result

    def fetch_vip_tiers(self):
        if self.error is not None:
            raise self.error
        return list(self.tiers)

    def submit_vip_reservation(self, request):
        self.vip_requests.append(request)
        if self.on_submit is not None:
            self.on_submit()
        if self.error is not None:
            raise self.error
        return self.vip_accepted


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture(autouse=True)
def clear_cache():
    from django.core.cache import cache
    cache.clear()
    yield
    cache.clear()


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def make_offering():
    def factory(
        name="General Admission",
        category=OfferingCategory.STANDARD,
        price="100",
        max_quantity=100,
        current_sold=0,
        is_active=True,
        priority=0,
        early_bird_price=None,
        early_bird_deadline=None,
        group_discounts=(),
    ) -> Offering:
        return Offering(
            id=OfferingId(value=uuid4()),
            name=name,
            category=category,
            price=Money.of(price),
            max_quantity=Capacity(value=max_quantity),
            current_sold=current_sold,
            is_active=is_active,
            priority=priority,
            early_bird_price=Money.of(early_bird_price) if early_bird_price is not None else None,
            early_bird_deadline=early_bird_deadline,
            group_discounts=tuple(
                GroupDiscountRule(min_quantity=minimum, discount_percent=Decimal(percent))
                for minimum, percent in group_discounts
            ),
        )

    return factory


@pytest.fixture
def make_vip_offering(make_offering):
    def factory(name="Gold Package", price="100", group_discounts=(), **kwargs) -> Offering:
        return make_offering(
            name=name,
            category=OfferingCategory.VIP,
            price=price,
            group_discounts=group_discounts,
            **kwargs,
        )

    return factory


@pytest.fixture
def sales_window() -> SalesWindow:
    return SalesWindow(starts_at=NOW - timedelta(days=7), ends_at=NOW + timedelta(days=7))


@pytest.fixture
def make_configuration(sales_window):
    def factory(regular=(), vip=(), window=None) -> TicketConfiguration:
        return TicketConfiguration(
            event_id=EventId(value=uuid4()),
            event_title="Grand Summer Gala",
            sales_window=window or sales_window,
            regular_offerings=tuple(regular),
            vip_offerings=tuple(vip),
        )

    return factory


@pytest.fixture
def make_tier():
    def factory(name="Platinum VIP", price="500", max_reservations=20, current_reservations=8) -> VIPTier:
        return VIPTier(
            id=TierId(value=uuid4()),
            name=name,
            price=Money.of(price),
            max_reservations=Capacity(value=max_reservations),
            current_reservations=current_reservations,
            perks=("Private entrance & exit", "Premium open bar"),
        )

    return factory


@pytest.fixture
def gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture
def stored_event(db):
    """A persisted gala with one standard and one VIP offering, on sale now."""
    from django.utils import timezone as django_timezone

    from ticketing import models

    current = django_timezone.now()
    configuration = models.TicketConfiguration.objects.create(
        event_id=uuid4(),
        event_title="Grand Summer Gala",
        sales_start=current - timedelta(days=7),
        sales_end=current + timedelta(days=7),
        refund_policy="Refunds up to 14 days before the event.",
    )
    general = models.Offering.objects.create(
        configuration=configuration,
        name="General Admission",
        price=Decimal("150.00"),
        max_quantity=200,
        current_sold=20,
        priority=1,
        benefits=["Welcome drink"],
    )
    gold = models.Offering.objects.create(
        configuration=configuration,
        name="Gold Package",
        category=models.Offering.Category.VIP,
        price=Decimal("400.00"),
        max_quantity=30,
        current_sold=5,
        priority=2,
        benefits=["Reserved table", "Champagne service"],
    )
    models.GroupDiscountRule.objects.create(
        offering=gold, min_quantity=4, discount_percent=Decimal("10"), description="Table of four"
    )
    return configuration, general, gold


@pytest.fixture
def stored_tiers(db):
    from ticketing import models

    platinum = models.VIPTier.objects.create(
        name="Platinum VIP",
        price=Decimal("500.00"),
        max_reservations=20,
        current_reservations=8,
        perks=["Private entrance & exit", "Premium open bar"],
    )
    diamond = models.VIPTier.objects.create(
        name="Diamond VIP",
        price=Decimal("1200.00"),
        max_reservations=5,
        current_reservations=5,
        perks=["Backstage access"],
    )
    return platinum, diamond
