"""Unit tests for the inventory view and the sales window gate.

Run with: pytest tests/test_inventory.py -v
"""

from datetime import timedelta

from ticketing.domain import SalesWindow
from ticketing.domain.inventory import (
    clamp_quantity,
    purchasable_offerings,
    quantity_limit,
    selectable_tiers,
)
from ticketing.domain.sales_window import (
    SalesState,
    closed_sales_message,
    is_sales_active,
    sales_state,
    sales_status_message,
)


class TestPurchasableOfferings:
    def test_excludes_inactive_and_sold_out(self, make_offering):
        live = make_offering(name="Live")
        inactive = make_offering(name="Inactive", is_active=False)
        sold_out = make_offering(name="Sold out", max_quantity=5, current_sold=5)

        assert purchasable_offerings([live, inactive, sold_out]) == [live]

    def test_orders_by_ascending_priority(self, make_offering, make_vip_offering):
        vip = make_vip_offering(priority=3)
        standard = make_offering(priority=1)
        early = make_offering(name="Early", priority=2)

        assert purchasable_offerings([vip, standard, early]) == [standard, early, vip]

    def test_equal_priorities_keep_incoming_order(self, make_offering):
        first = make_offering(name="First", priority=1)
        second = make_offering(name="Second", priority=1)

        assert purchasable_offerings([first, second]) == [first, second]

    def test_does_not_change_sold_counts(self, make_offering):
        offering = make_offering(max_quantity=10, current_sold=4)
        purchasable_offerings([offering])
        assert offering.available == 6


class TestQuantityLimit:
    def test_limited_by_availability(self, make_offering, sales_window):
        offering = make_offering(max_quantity=10, current_sold=7)
        assert quantity_limit(offering, sales_window) == 3

    def test_limited_by_per_order_max(self, make_offering, sales_window):
        offering = make_offering(max_quantity=100)
        assert quantity_limit(offering, sales_window) == 10

    def test_clamp_quantity(self):
        assert clamp_quantity(-2, 5) == 0
        assert clamp_quantity(3, 5) == 3
        assert clamp_quantity(9, 5) == 5


class TestSalesWindowGate:
    def window(self, now):
        return SalesWindow(starts_at=now - timedelta(hours=1), ends_at=now + timedelta(hours=1))

    def test_before_start_is_not_started(self, now):
        window = self.window(now)
        assert sales_state(window, now - timedelta(hours=2)) is SalesState.NOT_STARTED

    def test_start_boundary_is_active(self, now):
        window = self.window(now)
        assert sales_state(window, window.starts_at) is SalesState.ACTIVE

    def test_end_boundary_is_active(self, now):
        window = self.window(now)
        assert is_sales_active(window, window.ends_at)

    def test_after_end_is_ended(self, now):
        window = self.window(now)
        assert sales_state(window, window.ends_at + timedelta(microseconds=1)) is SalesState.ENDED

    def test_status_messages(self, now):
        window = SalesWindow(starts_at=now.replace(month=7, day=4), ends_at=now.replace(month=8, day=1))
        assert sales_status_message(window, now) == "Sales start on July 4, 2026"
        assert sales_status_message(window, now.replace(month=7, day=10)) == "Sales are live!"
        assert sales_status_message(window, now.replace(month=9, day=1)) == "Sales have ended"

    def test_closed_messages(self, now):
        window = self.window(now)
        assert closed_sales_message(window, now) is None
        assert closed_sales_message(window, now - timedelta(days=1)) == "Ticket sales have not started yet"
        assert closed_sales_message(window, now + timedelta(days=1)) == "Ticket sales have ended"


class TestSelectableTiers:
    def test_fully_booked_tiers_are_hidden(self, make_tier):
        open_tier = make_tier(max_reservations=20, current_reservations=19)
        full_tier = make_tier(name="Full", max_reservations=20, current_reservations=20)

        assert selectable_tiers([open_tier, full_tier]) == [open_tier]
