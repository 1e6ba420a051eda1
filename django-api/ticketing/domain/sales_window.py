"""Sales window gate.

Pure functions of the current time. Callers evaluate them on every request;
the state is never cached.
"""

from datetime import datetime
from enum import Enum

from ticketing.domain.models import SalesWindow


class SalesState(Enum):
    NOT_STARTED = "not_started"
    ACTIVE = "active"
    ENDED = "ended"


def sales_state(window: SalesWindow, now: datetime) -> SalesState:
    """Classify ``now`` against the window. Both bounds are inclusive."""
    if now < window.starts_at:
        return SalesState.NOT_STARTED
    if now > window.ends_at:
        return SalesState.ENDED
    return SalesState.ACTIVE


def is_sales_active(window: SalesWindow, now: datetime) -> bool:
    return sales_state(window, now) is SalesState.ACTIVE


def sales_status_message(window: SalesWindow, now: datetime) -> str:
    state = sales_state(window, now)
    if state is SalesState.NOT_STARTED:
        start = window.starts_at
        return f"Sales start on {start:%B} {start.day}, {start.year}"
    if state is SalesState.ENDED:
        return "Sales have ended"
    return "Sales are live!"


def closed_sales_message(window: SalesWindow, now: datetime) -> str | None:
    """Reason a purchase is refused right now, or None while sales are live."""
    state = sales_state(window, now)
    if state is SalesState.NOT_STARTED:
        return "Ticket sales have not started yet"
    if state is SalesState.ENDED:
        return "Ticket sales have ended"
    return None
