"""Ticket booking session - selection ledger, validation and submission.

The session is the only owner of the ledger and contact form. Edits go
through the pure ledger reducer; submission reads the ledger once, at call
time, and either resets everything (success) or keeps it for a retry.
"""

import logging
from collections.abc import Callable
from datetime import datetime

from django.utils import timezone

from ticketing.domain import Money, Offering, OfferingId, ReservationRequest, TicketConfiguration
from ticketing.domain.errors import (
    EmptySelectionError,
    ErrorCode,
    OfferingUnavailableError,
    SalesClosedError,
    SubmissionError,
)
from ticketing.domain.inventory import clamp_quantity, purchasable_offerings, quantity_limit
from ticketing.domain.ledger import (
    GuestNameChanged,
    Ledger,
    LedgerCleared,
    LedgerEvent,
    QuantityChanged,
    reduce,
)
from ticketing.domain.sales_window import (
    SalesState,
    closed_sales_message,
    sales_state,
    sales_status_message,
)
from ticketing.domain.validation import validate_booking
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

RETRY_MESSAGE = "Booking failed. Please try again."


class BookingSession(BookingSessionBase):
    """In-progress ticket booking for one event."""

    def __init__(
        self,
        configuration: TicketConfiguration,
        gateway: ReservationGateway,
        clock: Callable[[], datetime] = timezone.now,
    ) -> None:
        super().__init__()
        self.configuration = configuration
        self.ledger = Ledger()
        self._gateway = gateway
        self._clock = clock

    @property
    def sales_state(self) -> SalesState:
        return sales_state(self.configuration.sales_window, self._clock())

    @property
    def sales_status(self) -> str:
        return sales_status_message(self.configuration.sales_window, self._clock())

    @property
    def offerings(self) -> list[Offering]:
        return purchasable_offerings(self.configuration.offerings)

    def dispatch(self, event: LedgerEvent) -> Ledger:
        self.ledger = reduce(self.ledger, event)
        return self.ledger

    def set_quantity(self, offering_id: OfferingId, quantity: int) -> int:
        """Set how many units of an offering are selected.

        The quantity is clamped to what one order may hold. Returns the
        quantity actually applied.

        Raises:
            SalesClosedError: If the sales window is not active.
            OfferingUnavailableError: If the offering is unknown, or inactive or
                sold out and a non-zero quantity was requested.
        """
        now = self._clock()
        closed = closed_sales_message(self.configuration.sales_window, now)
        if closed is not None:
            raise SalesClosedError(closed)

        offering = self.configuration.find_offering(offering_id)
        if offering is None or (quantity > 0 and not offering.is_purchasable):
            raise OfferingUnavailableError(str(offering_id))

        applied = clamp_quantity(quantity, quantity_limit(offering, self.configuration.sales_window))
        self.dispatch(QuantityChanged(offering=offering, quantity=applied, now=now))
        return applied

    def set_guest_name(self, offering_id: OfferingId, index: int, name: str) -> None:
        self.dispatch(GuestNameChanged(offering_id=offering_id, index=index, name=name))

    def total_amount(self) -> Money:
        return self.ledger.total_amount()

    def total_quantity(self) -> int:
        return self.ledger.total_quantity()

    def build_request(self) -> ReservationRequest:
        return ReservationRequest(
            event_id=self.configuration.event_id,
            lines=tuple(line.to_reservation_line() for line in self.ledger.lines),
            contact=self.contact,
            special_requests=self.special_requests or None,
        )

    def cancel(self) -> None:
        """Drop the selection and the contact form."""
        self.dispatch(LedgerCleared())
        self._reset_form()

    def submit(self) -> SubmissionOutcome:
        if self.state is SubmissionState.SUBMITTING or self.is_closed:
            return IGNORED

        closed = closed_sales_message(self.configuration.sales_window, self._clock())
        if closed is not None:
            return self._rejected(ErrorCode.SALES_CLOSED, closed)

        try:
            errors = validate_booking(self.ledger, self.contact)
        except EmptySelectionError as exc:
            return self._rejected(exc.code, exc.message)

        self.errors = errors
        if errors:
            return self._rejected(ErrorCode.VALIDATION_FAILED, errors=errors)

        request = self.build_request()
        self.state = SubmissionState.SUBMITTING
        try:
            code = self._send(request)
        except SubmissionError as exc:
            if self.is_closed:
                logger.info("Discarding failed reservation response for a closed session")
                return DISCARDED
            logger.warning(
                "Reservation for event %s failed: %s", request.event_id, exc.message
            )
            return self._failed(exc.message)
        finally:
            self.state = SubmissionState.IDLE

        if self.is_closed:
            logger.info("Discarding reservation %s for a closed session", code)
            return DISCARDED

        self.cancel()
        return SubmissionOutcome(
            status=SubmissionStatus.SUCCEEDED,
            notice=Notice.success(f"Booking submitted successfully! Reservation code: {code}"),
            reservation_code=code,
        )

    def _send(self, request: ReservationRequest) -> str:
        try:
            result = self._gateway.submit_reservation(request)
        except Exception as exc:
            logger.exception("Reservation service call failed for event %s", request.event_id)
            raise SubmissionError(RETRY_MESSAGE) from exc
        if not result.success or not result.reservation_code:
            raise SubmissionError(result.error or "Booking failed")
        return result.reservation_code
