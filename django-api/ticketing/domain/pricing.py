"""Pricing calculator: early-bird and VIP group discounts."""

from datetime import datetime
from decimal import Decimal

from ticketing.domain.models import GroupDiscountRule, Offering
from ticketing.domain.value_objects import Money

HUNDRED = Decimal(100)


def best_group_discount(
    rules: tuple[GroupDiscountRule, ...], quantity: int
) -> GroupDiscountRule | None:
    """Highest-percent rule whose threshold ``quantity`` meets.

    The winner is picked on percent, not on threshold: with rules 3→10% and
    5→20%, a quantity of 5 gets 20%.
    """
    qualifying = [rule for rule in rules if rule.min_quantity <= quantity]
    if not qualifying:
        return None
    return max(qualifying, key=lambda rule: rule.discount_percent)


def unit_price(offering: Offering, quantity: int, now: datetime) -> Decimal:
    """Unrounded price of one unit when buying ``quantity`` units at ``now``."""
    price = offering.price.amount
    if (
        offering.early_bird_price is not None
        and offering.early_bird_deadline is not None
        and now <= offering.early_bird_deadline
    ):
        price = offering.early_bird_price.amount

    if offering.is_vip and offering.group_discounts:
        rule = best_group_discount(offering.group_discounts, quantity)
        if rule is not None:
            price = price * (1 - rule.discount_percent / HUNDRED)
    return price


def line_subtotal(offering: Offering, quantity: int, now: datetime) -> Money:
    """Subtotal for ``quantity`` units, rounded half-up to cents."""
    return Money(amount=unit_price(offering, quantity, now) * quantity).rounded()
