"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Map domain errors to HTTP responses
- Never contain business logic
- Never expose internal error details
"""

from django.utils import timezone
from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from ticketing.domain import EventId, OfferingId, TierId
from ticketing.domain.errors import (
    BookingValidationError,
    DomainError,
    ErrorCode,
    OrderLimitError,
    QuantityLimitError,
    TierNotFoundError,
)
from ticketing.handlers.serializers import (
    QuoteRequestSerializer,
    ReservationCreateSerializer,
    SelectionLineSerializer,
    TicketConfigurationSerializer,
    VIPReservationCreateSerializer,
    VIPTierSerializer,
)
from ticketing.services.booking_service import BookingSession
from ticketing.services.catalog_service import TicketCatalogService
from ticketing.services.session import SubmissionOutcome, SubmissionStatus
from ticketing.services.vip_service import VIPBookingSession
from ticketing.stores.django_store import DjangoReservationGateway
from ticketing.stores.interfaces import ReservationGateway

ERROR_STATUS = {
    ErrorCode.INVALID_EVENT_ID: status.HTTP_400_BAD_REQUEST,
    ErrorCode.CONFIGURATION_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.LOAD_FAILED: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorCode.EMPTY_SELECTION: status.HTTP_400_BAD_REQUEST,
    ErrorCode.VALIDATION_FAILED: status.HTTP_400_BAD_REQUEST,
    ErrorCode.SALES_CLOSED: status.HTTP_409_CONFLICT,
    ErrorCode.OFFERING_UNAVAILABLE: status.HTTP_409_CONFLICT,
    ErrorCode.QUANTITY_LIMIT_EXCEEDED: status.HTTP_409_CONFLICT,
    ErrorCode.TIER_NOT_SELECTED: status.HTTP_400_BAD_REQUEST,
    ErrorCode.TIER_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.TIER_UNAVAILABLE: status.HTTP_409_CONFLICT,
    ErrorCode.SUBMISSION_FAILED: status.HTTP_502_BAD_GATEWAY,
}


def error_response(code: ErrorCode, message: str, errors: dict[str, str] | None = None) -> Response:
    body = {"code": code.value, "message": message}
    if errors:
        body["errors"] = errors
    return Response(body, status=ERROR_STATUS[code])


def domain_error_response(exc: DomainError) -> Response:
    errors = exc.errors if isinstance(exc, BookingValidationError) else None
    return error_response(exc.code, exc.message, errors)


def outcome_response(outcome: SubmissionOutcome) -> Response:
    """Map a submission outcome to a response.

    Handlers build a fresh session per request and never close it, so an
    IGNORED or DISCARDED outcome means the request was not processed.
    """
    if outcome.status in (SubmissionStatus.IGNORED, SubmissionStatus.DISCARDED):
        return error_response(ErrorCode.SUBMISSION_FAILED, "Booking was not processed")
    if outcome.succeeded:
        body = {"message": outcome.notice.message}
        if outcome.reservation_code:
            body["reservation_code"] = outcome.reservation_code
        return Response(body, status=status.HTTP_201_CREATED)
    if outcome.errors:
        return domain_error_response(BookingValidationError(outcome.errors))
    message = outcome.notice.message if outcome.notice else "Booking failed"
    return error_response(outcome.error_code or ErrorCode.SUBMISSION_FAILED, message)


class GatewayMixin:
    gateway_class: type[ReservationGateway] = DjangoReservationGateway

    def get_gateway(self) -> ReservationGateway:
        return self.gateway_class()

    def get_catalog(self) -> TicketCatalogService:
        return TicketCatalogService(self.get_gateway())


class BookingMixin(GatewayMixin):
    def open_session(self, event_id: str, tickets: list[dict]) -> BookingSession:
        """Build a session for the event and apply the requested selection.

        Raises:
            DomainError: If the configuration cannot be loaded, sales are closed,
                a requested quantity cannot be booked, or the order exceeds the
                per-order maximum.
        """
        gateway = self.get_gateway()
        configuration = TicketCatalogService(gateway).get_ticket_configuration(event_id)
        session = BookingSession(configuration, gateway)
        for ticket in tickets:
            offering_id = OfferingId(value=ticket["offering_id"])
            applied = session.set_quantity(offering_id, ticket["quantity"])
            if applied != ticket["quantity"]:
                offering = configuration.find_offering(offering_id)
                raise QuantityLimitError(offering.name, applied)
            for index, name in enumerate(ticket.get("guest_names", [])):
                session.set_guest_name(offering_id, index, name)

        per_order_max = configuration.sales_window.per_order_max
        if session.total_quantity() > per_order_max:
            raise OrderLimitError(per_order_max)
        return session


class TicketConfigurationView(GatewayMixin, APIView):
    """Handler for GET /api/events/{event_id}/tickets"""

    def get(self, request: Request, event_id: str) -> Response:
        try:
            configuration = self.get_catalog().get_ticket_configuration(event_id)
        except DomainError as exc:
            return domain_error_response(exc)
        serializer = TicketConfigurationSerializer(configuration, context={"now": timezone.now()})
        return Response(serializer.data)


class QuoteView(BookingMixin, APIView):
    """Handler for POST /api/events/{event_id}/quote"""

    def post(self, request: Request, event_id: str) -> Response:
        serializer = QuoteRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            session = self.open_session(event_id, serializer.validated_data["tickets"])
        except DomainError as exc:
            return domain_error_response(exc)
        return Response(
            {
                "lines": SelectionLineSerializer(
                    session.ledger.lines, many=True, context={"now": timezone.now()}
                ).data,
                "total_amount": str(session.total_amount()),
                "total_quantity": session.total_quantity(),
            }
        )


class ReservationCreateView(BookingMixin, APIView):
    """Handler for POST /api/events/{event_id}/reservations"""

    def post(self, request: Request, event_id: str) -> Response:
        serializer = ReservationCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        try:
            session = self.open_session(event_id, data["tickets"])
        except DomainError as exc:
            return domain_error_response(exc)
        session.update_contact(**data["contact_info"])
        session.set_special_requests(data["special_requests"])
        return outcome_response(session.submit())


class VIPTierListView(GatewayMixin, APIView):
    """Handler for GET /api/vip-tiers"""

    def get(self, request: Request) -> Response:
        try:
            tiers = self.get_catalog().get_vip_tiers()
        except DomainError as exc:
            return domain_error_response(exc)
        return Response(VIPTierSerializer(tiers, many=True).data)


class VIPReservationCreateView(GatewayMixin, APIView):
    """Handler for POST /api/vip-tiers/{tier_id}/reservations"""

    def post(self, request: Request, tier_id: str) -> Response:
        serializer = VIPReservationCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        gateway = self.get_gateway()
        try:
            parsed_tier_id = TierId.from_string(tier_id)
        except ValueError:
            return domain_error_response(TierNotFoundError(tier_id))
        try:
            tiers = TicketCatalogService(gateway).get_vip_tiers()
            session = VIPBookingSession(EventId(value=data["event_id"]), tiers, gateway)
            session.select_tier(parsed_tier_id)
        except DomainError as exc:
            return domain_error_response(exc)

        session.set_guest_count(data["guest_count"])
        session.update_contact(**data["contact_info"])
        session.set_special_requests(data["special_requests"])
        total = session.total
        outcome = session.submit()
        response = outcome_response(outcome)
        if outcome.succeeded:
            response.data["total_amount"] = str(total)
        return response
