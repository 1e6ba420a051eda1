"""Validation engine for booking submissions.

Synchronous and local: nothing here talks to the reservation service.
Error maps are keyed by field (``name``, ``email``, ``phone``, ``guestCount``)
or by guest slot (``guest-<line index>-<guest index>``).
"""

from ticketing.domain.errors import EmptySelectionError
from ticketing.domain.ledger import Ledger
from ticketing.domain.models import MIN_VIP_GUESTS, ContactInfo

GUEST_NAME_REQUIRED = "Guest name required for VIP tickets"


def guest_error_key(line_index: int, guest_index: int) -> str:
    return f"guest-{line_index}-{guest_index}"


def validate_contact(contact: ContactInfo) -> dict[str, str]:
    errors: dict[str, str] = {}
    if not contact.name.strip():
        errors["name"] = "Name is required"
    if not contact.email.strip():
        errors["email"] = "Email is required"
    if not contact.phone.strip():
        errors["phone"] = "Phone is required"
    return errors


def validate_guest_names(ledger: Ledger) -> dict[str, str]:
    errors: dict[str, str] = {}
    for line_index, line in enumerate(ledger.lines):
        if not line.offering.is_vip:
            continue
        for guest_index, name in enumerate(line.guest_names):
            if not name.strip():
                errors[guest_error_key(line_index, guest_index)] = GUEST_NAME_REQUIRED
    return errors


def validate_booking(ledger: Ledger, contact: ContactInfo) -> dict[str, str]:
    """Return the field errors blocking submission; empty when valid.

    Raises:
        EmptySelectionError: If nothing is selected. Checked before any field.
    """
    if ledger.is_empty:
        raise EmptySelectionError()
    return {**validate_contact(contact), **validate_guest_names(ledger)}


def validate_vip_booking(guest_count: int, contact: ContactInfo) -> dict[str, str]:
    errors = validate_contact(contact)
    if guest_count < MIN_VIP_GUESTS:
        errors["guestCount"] = "At least 1 guest required"
    return errors
