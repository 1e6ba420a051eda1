"""Domain primitives that enforce validity at creation time."""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Self
from uuid import UUID

CENT = Decimal("0.01")


@dataclass(frozen=True)
class Identifier:
    """UUID-backed identifier; subclasses never compare equal to each other."""

    value: UUID

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value=UUID(value))

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class EventId(Identifier):
    """Event that owns a ticket configuration."""


@dataclass(frozen=True)
class OfferingId(Identifier):
    """Ticket type or VIP package within a configuration."""


@dataclass(frozen=True)
class TierId(Identifier):
    """Stand-alone VIP tier."""


@dataclass(frozen=True)
class Money:
    """Price representation with validation."""

    amount: Decimal

    def __post_init__(self) -> None:
        if self.amount < 0:
            raise ValueError("Money amount cannot be negative")

    @classmethod
    def of(cls, value: Decimal | int | str) -> Self:
        return cls(amount=Decimal(value))

    def rounded(self) -> Self:
        """Return the amount rounded half-up to whole cents."""
        return type(self)(amount=self.amount.quantize(CENT, rounding=ROUND_HALF_UP))

    def __add__(self, other: "Money") -> "Money":
        return Money(amount=self.amount + other.amount)

    def __str__(self) -> str:
        return f"{self.amount:.2f}"


@dataclass(frozen=True)
class Capacity:
    """Non-negative integer representing capacity."""

    value: int

    def __post_init__(self) -> None:
        if self.value < 0:
            raise ValueError("Capacity cannot be negative")
