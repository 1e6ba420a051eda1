"""Selection ledger: the in-progress cart of a booking session.

The ledger is an immutable value. Every edit is an event applied by
``reduce``, which returns a new ledger; nothing renders or persists here.

Invariant: after any edit, each line holds exactly ``quantity`` guest names.
"""

from dataclasses import dataclass, replace
from datetime import datetime
from decimal import Decimal

from ticketing.domain.models import Offering, ReservationLine
from ticketing.domain.pricing import line_subtotal
from ticketing.domain.value_objects import Money, OfferingId


def resize_guest_names(names: tuple[str, ...], length: int) -> tuple[str, ...]:
    """Return ``names`` fitted to ``length``.

    Entries at indices below ``length`` are kept as they are; extra entries are
    dropped from the end and missing slots are padded with empty strings.
    """
    length = max(length, 0)
    kept = names[:length]
    return kept + ("",) * (length - len(kept))


@dataclass(frozen=True)
class SelectionLine:
    offering: Offering
    quantity: int
    guest_names: tuple[str, ...]
    subtotal: Money

    @property
    def offering_id(self) -> OfferingId:
        return self.offering.id

    def to_reservation_line(self) -> ReservationLine:
        return ReservationLine(
            offering_id=self.offering.id,
            quantity=self.quantity,
            guest_names=self.guest_names if self.offering.is_vip else None,
        )


@dataclass(frozen=True)
class Ledger:
    lines: tuple[SelectionLine, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.lines

    def line_for(self, offering_id: OfferingId) -> SelectionLine | None:
        for line in self.lines:
            if line.offering_id == offering_id:
                return line
        return None

    def total_amount(self) -> Money:
        return Money(amount=sum((line.subtotal.amount for line in self.lines), Decimal(0)))

    def total_quantity(self) -> int:
        return sum(line.quantity for line in self.lines)


@dataclass(frozen=True)
class QuantityChanged:
    offering: Offering
    quantity: int
    now: datetime


@dataclass(frozen=True)
class GuestNameChanged:
    offering_id: OfferingId
    index: int
    name: str


@dataclass(frozen=True)
class LedgerCleared:
    pass


LedgerEvent = QuantityChanged | GuestNameChanged | LedgerCleared


def set_quantity(ledger: Ledger, offering: Offering, quantity: int, now: datetime) -> Ledger:
    """Upsert the line for ``offering``, or drop it when ``quantity`` is zero.

    An updated line keeps its position; a new line is appended.
    """
    quantity = max(quantity, 0)
    existing = ledger.line_for(offering.id)

    if quantity == 0:
        if existing is None:
            return ledger
        return Ledger(lines=tuple(line for line in ledger.lines if line is not existing))

    line = SelectionLine(
        offering=offering,
        quantity=quantity,
        guest_names=resize_guest_names(existing.guest_names if existing else (), quantity),
        subtotal=line_subtotal(offering, quantity, now),
    )
    if existing is None:
        return Ledger(lines=ledger.lines + (line,))
    return Ledger(lines=tuple(line if current is existing else current for current in ledger.lines))


def set_guest_name(ledger: Ledger, offering_id: OfferingId, index: int, name: str) -> Ledger:
    """Replace one guest name. Unknown lines and out-of-range indices are ignored."""
    existing = ledger.line_for(offering_id)
    if existing is None or not 0 <= index < existing.quantity:
        return ledger

    names = list(existing.guest_names)
    names[index] = name
    updated = replace(existing, guest_names=tuple(names))
    return Ledger(lines=tuple(updated if line is existing else line for line in ledger.lines))


def reduce(ledger: Ledger, event: LedgerEvent) -> Ledger:
    match event:
        case QuantityChanged(offering=offering, quantity=quantity, now=now):
            return set_quantity(ledger, offering, quantity, now)
        case GuestNameChanged(offering_id=offering_id, index=index, name=name):
            return set_guest_name(ledger, offering_id, index, name)
        case LedgerCleared():
            return Ledger()
    raise TypeError(f"Unsupported ledger event: {event!r}")
