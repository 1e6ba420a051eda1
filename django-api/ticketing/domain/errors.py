"""Domain error codes for the ticketing module."""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    INVALID_EVENT_ID = "INVALID_EVENT_ID"
    CONFIGURATION_NOT_FOUND = "CONFIGURATION_NOT_FOUND"
    LOAD_FAILED = "LOAD_FAILED"
    EMPTY_SELECTION = "EMPTY_SELECTION"
    VALIDATION_FAILED = "VALIDATION_FAILED"
    SALES_CLOSED = "SALES_CLOSED"
    OFFERING_UNAVAILABLE = "OFFERING_UNAVAILABLE"
    QUANTITY_LIMIT_EXCEEDED = "QUANTITY_LIMIT_EXCEEDED"
    TIER_NOT_SELECTED = "TIER_NOT_SELECTED"
    TIER_NOT_FOUND = "TIER_NOT_FOUND"
    TIER_UNAVAILABLE = "TIER_UNAVAILABLE"
    SUBMISSION_FAILED = "SUBMISSION_FAILED"


@dataclass(frozen=True)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class InvalidEventIdError(DomainError):
    """Raised when an event ID is invalid."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.INVALID_EVENT_ID,
            message="Invalid event ID format",
        )


class LoadError(DomainError):
    """Raised when a ticket configuration or tier catalog cannot be loaded."""

    def __init__(self, message: str = "Failed to load ticket information") -> None:
        super().__init__(code=ErrorCode.LOAD_FAILED, message=message)


class ConfigurationNotFoundError(LoadError):
    """Raised when an event has no ticket configuration."""

    def __init__(self, event_id: str) -> None:
        DomainError.__init__(
            self,
            code=ErrorCode.CONFIGURATION_NOT_FOUND,
            message="Ticket configuration not found for this event",
        )
        self.event_id = event_id


class EmptySelectionError(DomainError):
    """Raised when a submission is attempted with nothing selected."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.EMPTY_SELECTION,
            message="Please select at least one ticket",
        )


class BookingValidationError(DomainError):
    """Raised when contact or guest fields fail validation.

    ``errors`` maps field keys (``name``, ``guest-0-1``, ...) to messages.
    """

    def __init__(self, errors: dict[str, str]) -> None:
        super().__init__(
            code=ErrorCode.VALIDATION_FAILED,
            message="Please correct the highlighted fields",
        )
        self.errors = dict(errors)


class SalesClosedError(DomainError):
    """Raised when a purchase interaction happens outside the sales window."""

    def __init__(self, message: str) -> None:
        super().__init__(code=ErrorCode.SALES_CLOSED, message=message)


class OfferingUnavailableError(DomainError):
    """Raised when an offering is unknown, inactive or sold out."""

    def __init__(self, offering_id: str) -> None:
        super().__init__(
            code=ErrorCode.OFFERING_UNAVAILABLE,
            message=f"Ticket type not available: {offering_id}",
        )
        self.offering_id = offering_id


class TierUnavailableError(DomainError):
    """Raised when a VIP tier is fully booked."""

    def __init__(self, tier_id: str) -> None:
        super().__init__(code=ErrorCode.TIER_UNAVAILABLE, message="VIP tier is fully booked")
        self.tier_id = tier_id


class SubmissionError(DomainError):
    """Raised when the reservation service rejects a request or cannot be reached."""

    def __init__(self, message: str = "Booking failed") -> None:
        super().__init__(code=ErrorCode.SUBMISSION_FAILED, message=message)


class QuantityLimitError(DomainError):
    """Raised when more units are requested than one order may hold."""

    def __init__(self, offering_name: str, limit: int) -> None:
        super().__init__(
            code=ErrorCode.QUANTITY_LIMIT_EXCEEDED,
            message=f"At most {limit} tickets of {offering_name} can be booked in one order",
        )
        self.limit = limit


class OrderLimitError(DomainError):
    """Raised when an order holds more tickets than the per-order maximum."""

    def __init__(self, limit: int) -> None:
        super().__init__(
            code=ErrorCode.QUANTITY_LIMIT_EXCEEDED,
            message=f"Maximum {limit} tickets per order",
        )
        self.limit = limit


class TierNotFoundError(DomainError):
    """Raised when a VIP tier does not exist."""

    def __init__(self, tier_id: str) -> None:
        super().__init__(code=ErrorCode.TIER_NOT_FOUND, message="VIP tier not found")
        self.tier_id = tier_id
