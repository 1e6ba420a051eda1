"""Tests for the stand-alone VIP tier booking session."""

from decimal import Decimal
from uuid import uuid4

import pytest

from ticketing.domain import EventId, TierId
from ticketing.domain.errors import ErrorCode, TierNotFoundError, TierUnavailableError
from ticketing.services.session import SubmissionStatus
from ticketing.services.vip_service import VIPBookingSession


@pytest.fixture
def platinum(make_tier):
    return make_tier()


@pytest.fixture
def full_tier(make_tier):
    return make_tier(name="Diamond VIP", price="1200", max_reservations=5, current_reservations=5)


@pytest.fixture
def session(gateway, platinum, full_tier):
    return VIPBookingSession(EventId(value=uuid4()), [platinum, full_tier], gateway)


def fill_contact(session):
    session.update_contact(name="Ada Lovelace", email="ada@example.com", phone="555-0100")


class TestTierSelection:
    def test_available_tiers_exclude_full_ones(self, session, platinum):
        assert session.available_tiers == [platinum]

    def test_select_tier(self, session, platinum):
        assert session.select_tier(platinum.id) == platinum
        assert session.selected_tier == platinum

    def test_full_tier_cannot_be_selected(self, session, full_tier):
        with pytest.raises(TierUnavailableError) as excinfo:
            session.select_tier(full_tier.id)
        assert excinfo.value.message == "VIP tier is fully booked"
        assert session.selected_tier is None

    def test_unknown_tier(self, session):
        with pytest.raises(TierNotFoundError):
            session.select_tier(TierId(value=uuid4()))


class TestGuestCountAndTotal:
    def test_total_is_zero_without_tier(self, session):
        assert session.total.amount == Decimal(0)

    def test_total_is_price_times_guests(self, session, platinum):
        session.select_tier(platinum.id)
        session.set_guest_count(3)

        assert session.total.amount == Decimal("1500")

    @pytest.mark.parametrize("requested,applied", [(0, 1), (-4, 1), (4, 4), (10, 10), (11, 10)])
    def test_guest_count_is_clamped(self, session, requested, applied):
        assert session.set_guest_count(requested) == applied
        assert session.guest_count == applied


class TestVIPSubmit:
    def test_submit_without_tier_is_rejected(self, session, gateway):
        fill_contact(session)

        outcome = session.submit()

        assert outcome.status is SubmissionStatus.REJECTED
        assert outcome.error_code is ErrorCode.TIER_NOT_SELECTED
        assert gateway.vip_requests == []

    def test_missing_contact_is_rejected(self, session, gateway, platinum):
        session.select_tier(platinum.id)
        session.update_contact(name="Ada Lovelace")

        outcome = session.submit()

        assert outcome.error_code is ErrorCode.VALIDATION_FAILED
        assert outcome.errors == {"email": "Email is required", "phone": "Phone is required"}
        assert session.errors == outcome.errors
        assert gateway.vip_requests == []

    def test_success_sends_request_and_resets(self, session, gateway, platinum):
        session.select_tier(platinum.id)
        session.set_guest_count(2)
        fill_contact(session)
        session.set_special_requests("Vegetarian menu")

        outcome = session.submit()

        assert outcome.succeeded
        assert outcome.notice.message == (
            "VIP reservation submitted successfully! We will contact you shortly."
        )
        (request,) = gateway.vip_requests
        assert request.tier_id == platinum.id
        assert request.event_id == session.event_id
        assert request.guest_count == 2
        assert request.special_requests == "Vegetarian menu"
        assert session.selected_tier is None
        assert session.guest_count == 1
        assert session.contact.name == ""

    def test_refusal_keeps_selection(self, session, gateway, platinum):
        gateway.vip_accepted = False
        session.select_tier(platinum.id)
        session.set_guest_count(4)
        fill_contact(session)

        outcome = session.submit()

        assert outcome.status is SubmissionStatus.FAILED
        assert outcome.notice.message == "VIP reservation failed. Please try again."
        assert session.selected_tier == platinum
        assert session.guest_count == 4
        assert session.contact.email == "ada@example.com"

    def test_gateway_error_is_reported_as_failure(self, session, gateway, platinum):
        gateway.error = ConnectionError()
        session.select_tier(platinum.id)
        fill_contact(session)

        outcome = session.submit()

        assert outcome.status is SubmissionStatus.FAILED
        assert outcome.error_code is ErrorCode.SUBMISSION_FAILED

    def test_reentrant_submit_is_ignored(self, session, gateway, platinum):
        session.select_tier(platinum.id)
        fill_contact(session)
        nested = []
        gateway.on_submit = lambda: nested.append(session.submit())

        assert session.submit().succeeded
        assert nested[0].status is SubmissionStatus.IGNORED
        assert len(gateway.vip_requests) == 1

    def test_response_after_close_is_discarded(self, session, gateway, platinum):
        session.select_tier(platinum.id)
        fill_contact(session)
        gateway.on_submit = session.close

        assert session.submit().status is SubmissionStatus.DISCARDED
        assert session.selected_tier == platinum
