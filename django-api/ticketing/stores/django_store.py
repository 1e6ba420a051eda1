"""Django ORM implementation of the ReservationGateway.

Acts as the reservation service: it re-checks every request against the
stored configuration before recording it. Counters are bumped with plain
``F()`` updates; there is no row locking and no idempotency key, so two
concurrent buyers can both pass the availability check.
"""

import logging
import secrets
import string
from collections.abc import Callable
from datetime import datetime
from decimal import Decimal

from django.db import transaction
from django.db.models import F
from django.utils import timezone

from ticketing import models
from ticketing.cache import invalidate_configuration, invalidate_vip_tiers
from ticketing.domain import (
    Capacity,
    EventId,
    GroupDiscountRule,
    Money,
    Offering,
    OfferingCategory,
    OfferingId,
    ReservationRequest,
    ReservationResult,
    SalesWindow,
    TicketConfiguration,
    TierId,
    VIPReservationRequest,
    VIPTier,
)
from ticketing.domain.pricing import line_subtotal, unit_price
from ticketing.domain.sales_window import closed_sales_message
from ticketing.stores.interfaces import ReservationGateway

logger = logging.getLogger(__name__)

CODE_ALPHABET = string.ascii_uppercase + string.digits


def generate_reservation_code(event_title: str, has_vip: bool) -> str:
    """Event title initials, ``-VIP`` when VIP lines are present, six random characters."""
    prefix = "".join(word[0] for word in event_title.split()).upper() or "RES"
    suffix = "".join(secrets.choice(CODE_ALPHABET) for _ in range(6))
    vip = "-VIP" if has_vip else ""
    return f"{prefix}{vip}-{suffix}"


def _to_offering(record: models.Offering) -> Offering:
    early_bird_price = record.early_bird_price
    current_sold = record.current_sold
    if current_sold > record.max_quantity:
        logger.warning(
            "Offering %s is oversold (%s of %s); treating it as sold out",
            record.id,
            current_sold,
            record.max_quantity,
        )
        current_sold = record.max_quantity
    return Offering(
        id=OfferingId(value=record.id),
        name=record.name,
        description=record.description,
        category=OfferingCategory(record.category),
        price=Money(amount=record.price),
        early_bird_price=Money(amount=early_bird_price) if early_bird_price is not None else None,
        early_bird_deadline=record.early_bird_deadline,
        max_quantity=Capacity(value=record.max_quantity),
        current_sold=current_sold,
        is_active=record.is_active,
        priority=record.priority,
        benefits=tuple(record.benefits),
        group_discounts=tuple(
            GroupDiscountRule(
                min_quantity=rule.min_quantity,
                discount_percent=rule.discount_percent,
                description=rule.description,
            )
            for rule in record.group_discounts.all()
        ),
    )


def _to_configuration(record: models.TicketConfiguration) -> TicketConfiguration:
    offerings = [_to_offering(offering) for offering in record.offerings.all()]
    return TicketConfiguration(
        event_id=EventId(value=record.event_id),
        event_title=record.event_title,
        sales_window=SalesWindow(
            starts_at=record.sales_start,
            ends_at=record.sales_end,
            max_tickets_per_order=record.max_tickets_per_order,
        ),
        regular_offerings=tuple(o for o in offerings if not o.is_vip),
        vip_offerings=tuple(o for o in offerings if o.is_vip),
        refund_policy=record.refund_policy,
        terms=record.terms,
    )


def _to_vip_tier(record: models.VIPTier) -> VIPTier:
    return VIPTier(
        id=TierId(value=record.id),
        name=record.name,
        description=record.description,
        price=Money(amount=record.price),
        max_reservations=Capacity(value=record.max_reservations),
        current_reservations=record.current_reservations,
        perks=tuple(record.perks),
    )


class DjangoReservationGateway(ReservationGateway):
    """PostgreSQL-backed reservation service using Django ORM."""

    def __init__(self, clock: Callable[[], datetime] = timezone.now) -> None:
        self._clock = clock

    def _configuration_records(self):
        return models.TicketConfiguration.objects.prefetch_related("offerings__group_discounts")

    def fetch_ticket_configuration(self, event_id: EventId) -> TicketConfiguration | None:
        record = self._configuration_records().filter(
            event_id=event_id.value, ticketing_enabled=True
        ).first()
        if record is None:
            return None
        return _to_configuration(record)

    def submit_reservation(self, request: ReservationRequest) -> ReservationResult:
        now = self._clock()
        record = self._configuration_records().filter(event_id=request.event_id.value).first()
        if record is None or not record.ticketing_enabled:
            return ReservationResult.rejected("Ticketing not available for this event")

        configuration = _to_configuration(record)
        closed = closed_sales_message(configuration.sales_window, now)
        if closed is not None:
            return ReservationResult.rejected(closed)

        items = []
        for line in request.lines:
            offering = configuration.find_offering(line.offering_id)
            if offering is None or not offering.is_active or line.quantity < 1:
                return ReservationResult.rejected(f"Ticket type not available: {line.offering_id}")
            if offering.current_sold + line.quantity > offering.max_quantity.value:
                return ReservationResult.rejected(
                    f"Not enough tickets available for {offering.name}"
                )
            if offering.is_vip and (
                line.guest_names is None or len(line.guest_names) != line.quantity
            ):
                return ReservationResult.rejected(
                    f"Guest names required for all VIP tickets: {offering.name}"
                )
            items.append((offering, line))

        per_order_max = configuration.sales_window.per_order_max
        if request.total_quantity > per_order_max:
            return ReservationResult.rejected(f"Maximum {per_order_max} tickets per order")

        code = self._unique_code(record.event_title, any(o.is_vip for o, _ in items))
        priced = [
            (
                offering,
                line,
                Money(amount=unit_price(offering, line.quantity, now)).rounded(),
                line_subtotal(offering, line.quantity, now),
            )
            for offering, line in items
        ]
        with transaction.atomic():
            reservation = models.Reservation.objects.create(
                configuration=record,
                reservation_code=code,
                contact_name=request.contact.name,
                contact_email=request.contact.email,
                contact_phone=request.contact.phone,
                special_requests=request.special_requests or "",
                total_amount=sum((total.amount for *_, total in priced), Decimal(0)),
                total_quantity=request.total_quantity,
            )
            for offering, line, unit, total in priced:
                models.ReservationItem.objects.create(
                    reservation=reservation,
                    offering_id=offering.id.value,
                    quantity=line.quantity,
                    unit_price=unit.amount,
                    total_price=total.amount,
                    guest_names=list(line.guest_names or ()),
                )
                models.Offering.objects.filter(pk=offering.id.value).update(
                    current_sold=F("current_sold") + line.quantity
                )
        invalidate_configuration(request.event_id)
        logger.info("Recorded reservation %s for event %s", code, request.event_id)
        return ReservationResult.confirmed(code)

    def _unique_code(self, event_title: str, has_vip: bool) -> str:
        code = generate_reservation_code(event_title, has_vip)
        while models.Reservation.objects.filter(reservation_code=code).exists():
            code = generate_reservation_code(event_title, has_vip)
        return code

    def fetch_vip_tiers(self) -> list[VIPTier]:
        return [_to_vip_tier(record) for record in models.VIPTier.objects.all()]

    def submit_vip_reservation(self, request: VIPReservationRequest) -> bool:
        record = models.VIPTier.objects.filter(pk=request.tier_id.value).first()
        if record is None:
            logger.warning("VIP reservation for unknown tier %s", request.tier_id)
            return False
        if record.current_reservations >= record.max_reservations:
            logger.info("VIP tier %s is fully booked", request.tier_id)
            return False

        with transaction.atomic():
            models.VIPReservation.objects.create(
                tier=record,
                event_id=request.event_id.value,
                guest_count=request.guest_count,
                contact_name=request.contact.name,
                contact_email=request.contact.email,
                contact_phone=request.contact.phone,
                special_requests=request.special_requests,
                total_amount=record.price * request.guest_count,
            )
            # Capacity counts reservations, not guests.
            models.VIPTier.objects.filter(pk=record.pk).update(
                current_reservations=F("current_reservations") + 1
            )
        invalidate_vip_tiers()
        return True
