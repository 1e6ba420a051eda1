"""Domain models representing catalog snapshots and booking requests.

These are pure domain objects with no API input rules.
Django ORM models are in ticketing/models.py (persistence layer).
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum

from ticketing.domain.value_objects import Capacity, EventId, Money, OfferingId, TierId

DEFAULT_MAX_TICKETS_PER_ORDER = 10
MIN_VIP_GUESTS = 1
MAX_VIP_GUESTS = 10


class OfferingCategory(Enum):
    STANDARD = "standard"
    VIP = "vip"


@dataclass(frozen=True)
class GroupDiscountRule:
    """Percent off the unit price once a line reaches ``min_quantity``."""

    min_quantity: int
    discount_percent: Decimal
    description: str = ""

    def __post_init__(self) -> None:
        if self.min_quantity < 1:
            raise ValueError("Group discount minimum quantity must be at least 1")
        if not Decimal(0) <= self.discount_percent <= Decimal(100):
            raise ValueError("Group discount percent must be between 0 and 100")


@dataclass(frozen=True)
class Offering:
    """A purchasable ticket type (standard) or VIP package of one event."""

    id: OfferingId
    name: str
    category: OfferingCategory
    price: Money
    max_quantity: Capacity
    current_sold: int = 0
    is_active: bool = True
    priority: int = 0
    benefits: tuple[str, ...] = ()
    early_bird_price: Money | None = None
    early_bird_deadline: datetime | None = None
    group_discounts: tuple[GroupDiscountRule, ...] = ()
    description: str = ""

    def __post_init__(self) -> None:
        if self.current_sold < 0:
            raise ValueError("Units sold cannot be negative")
        if self.current_sold > self.max_quantity.value:
            raise ValueError("Units sold cannot exceed capacity")

    @property
    def is_vip(self) -> bool:
        return self.category is OfferingCategory.VIP

    @property
    def available(self) -> int:
        return self.max_quantity.value - self.current_sold

    @property
    def is_purchasable(self) -> bool:
        return self.is_active and self.current_sold < self.max_quantity.value


@dataclass(frozen=True)
class SalesWindow:
    """Time range during which an event's tickets may be bought."""

    starts_at: datetime
    ends_at: datetime
    max_tickets_per_order: int | None = None

    @property
    def per_order_max(self) -> int:
        return self.max_tickets_per_order or DEFAULT_MAX_TICKETS_PER_ORDER


@dataclass(frozen=True)
class TicketConfiguration:
    """Ticketing setup of one event, as fetched from the reservation service."""

    event_id: EventId
    event_title: str
    sales_window: SalesWindow
    regular_offerings: tuple[Offering, ...] = ()
    vip_offerings: tuple[Offering, ...] = ()
    refund_policy: str = ""
    terms: str = ""

    @property
    def offerings(self) -> tuple[Offering, ...]:
        return self.regular_offerings + self.vip_offerings

    def find_offering(self, offering_id: OfferingId) -> Offering | None:
        for offering in self.offerings:
            if offering.id == offering_id:
                return offering
        return None


@dataclass(frozen=True)
class ContactInfo:
    name: str = ""
    email: str = ""
    phone: str = ""


@dataclass(frozen=True)
class ReservationLine:
    """One requested offering. ``guest_names`` is only sent for VIP lines."""

    offering_id: OfferingId
    quantity: int
    guest_names: tuple[str, ...] | None = None


@dataclass(frozen=True)
class ReservationRequest:
    event_id: EventId
    lines: tuple[ReservationLine, ...]
    contact: ContactInfo
    special_requests: str | None = None

    @property
    def total_quantity(self) -> int:
        return sum(line.quantity for line in self.lines)


@dataclass(frozen=True)
class ReservationResult:
    """Outcome reported by the reservation service."""

    success: bool
    reservation_code: str | None = None
    error: str | None = None

    @classmethod
    def confirmed(cls, reservation_code: str) -> "ReservationResult":
        return cls(success=True, reservation_code=reservation_code)

    @classmethod
    def rejected(cls, error: str) -> "ReservationResult":
        return cls(success=False, error=error)


@dataclass(frozen=True)
class VIPTier:
    """Stand-alone exclusive experience priced per guest."""

    id: TierId
    name: str
    price: Money
    max_reservations: Capacity
    current_reservations: int = 0
    perks: tuple[str, ...] = ()
    description: str = ""

    @property
    def available(self) -> int:
        return max(self.max_reservations.value - self.current_reservations, 0)

    @property
    def is_selectable(self) -> bool:
        return self.current_reservations < self.max_reservations.value


@dataclass(frozen=True)
class VIPReservationRequest:
    event_id: EventId
    tier_id: TierId
    guest_count: int
    contact: ContactInfo = field(default_factory=ContactInfo)
    special_requests: str = ""
