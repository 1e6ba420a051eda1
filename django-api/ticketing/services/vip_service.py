"""VIP tier booking session - one tier, a guest count, a contact form."""

import logging
from decimal import Decimal

from ticketing.domain import EventId, Money, TierId, VIPReservationRequest, VIPTier
from ticketing.domain.errors import ErrorCode, TierNotFoundError, TierUnavailableError
from ticketing.domain.inventory import selectable_tiers
from ticketing.domain.models import MAX_VIP_GUESTS, MIN_VIP_GUESTS
from ticketing.domain.validation import validate_vip_booking
from ticketing.services.session import (
    DISCARDED,
    IGNORED,
    BookingSessionBase,
    Notice,
    SubmissionOutcome,
    SubmissionState,
    SubmissionStatus,
)
from ticketing.stores.interfaces import ReservationGateway

logger = logging.getLogger(__name__)

FAILURE_MESSAGE = "VIP reservation failed. Please try again."


class VIPBookingSession(BookingSessionBase):
    """In-progress reservation of a stand-alone VIP tier.

    Tier capacity is checked against the number of reservations already made,
    at selection time only. ``guest_count`` is not compared with the slots left.
    """

    def __init__(self, event_id: EventId, tiers: list[VIPTier], gateway: ReservationGateway) -> None:
        super().__init__()
        self.event_id = event_id
        self.tiers = tuple(tiers)
        self.selected_tier: VIPTier | None = None
        self.guest_count = MIN_VIP_GUESTS
        self._gateway = gateway

    @property
    def available_tiers(self) -> list[VIPTier]:
        return selectable_tiers(self.tiers)

    @property
    def total(self) -> Money:
        if self.selected_tier is None:
            return Money(amount=Decimal(0))
        return Money(amount=self.selected_tier.price.amount * self.guest_count)

    def select_tier(self, tier_id: TierId) -> VIPTier:
        """Open a booking for a tier.

        Raises:
            TierNotFoundError: If the tier is unknown.
            TierUnavailableError: If the tier is fully booked.
        """
        tier = next((tier for tier in self.tiers if tier.id == tier_id), None)
        if tier is None:
            raise TierNotFoundError(str(tier_id))
        if not tier.is_selectable:
            raise TierUnavailableError(str(tier_id))
        self.selected_tier = tier
        return tier

    def set_guest_count(self, guest_count: int) -> int:
        self.guest_count = max(MIN_VIP_GUESTS, min(guest_count, MAX_VIP_GUESTS))
        return self.guest_count

    def cancel(self) -> None:
        self.selected_tier = None
        self.guest_count = MIN_VIP_GUESTS
        self._reset_form()

    def submit(self) -> SubmissionOutcome:
        if self.state is SubmissionState.SUBMITTING or self.is_closed:
            return IGNORED
        if self.selected_tier is None:
            return self._rejected(ErrorCode.TIER_NOT_SELECTED, "Please select a VIP tier")

        errors = validate_vip_booking(self.guest_count, self.contact)
        self.errors = errors
        if errors:
            return self._rejected(ErrorCode.VALIDATION_FAILED, errors=errors)

        request = VIPReservationRequest(
            event_id=self.event_id,
            tier_id=self.selected_tier.id,
            guest_count=self.guest_count,
            contact=self.contact,
            special_requests=self.special_requests,
        )
        self.state = SubmissionState.SUBMITTING
        try:
            accepted = self._gateway.submit_vip_reservation(request)
        except Exception:
            logger.exception("VIP reservation call failed for tier %s", request.tier_id)
            accepted = False
        finally:
            self.state = SubmissionState.IDLE

        if self.is_closed:
            logger.info("Discarding VIP reservation response for a closed session")
            return DISCARDED
        if not accepted:
            return self._failed(FAILURE_MESSAGE)

        self.cancel()
        return SubmissionOutcome(
            status=SubmissionStatus.SUCCEEDED,
            notice=Notice.success(
                "VIP reservation submitted successfully! We will contact you shortly."
            ),
        )
