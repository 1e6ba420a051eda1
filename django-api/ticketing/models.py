"""Django ORM models (persistence layer).

These models handle database concerns. Domain logic lives in domain/.
"""

import uuid

from django.db import models


class TicketConfiguration(models.Model):
    """Persistence model for an event's ticketing setup."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    event_id = models.UUIDField(unique=True)
    event_title = models.CharField(max_length=255)
    ticketing_enabled = models.BooleanField(default=True)
    sales_start = models.DateTimeField()
    sales_end = models.DateTimeField()
    max_tickets_per_order = models.PositiveIntegerField(blank=True, null=True)
    refund_policy = models.TextField(blank=True)
    terms = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self) -> str:
        return self.event_title


class Offering(models.Model):
    """Persistence model for ticket types and VIP packages."""

    class Category(models.TextChoices):
        STANDARD = "standard", "Standard"
        VIP = "vip", "VIP"

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    configuration = models.ForeignKey(
        TicketConfiguration, on_delete=models.CASCADE, related_name="offerings"
    )
    name = models.CharField(max_length=100)
    description = models.TextField(blank=True)
    category = models.CharField(max_length=16, choices=Category.choices, default=Category.STANDARD)
    price = models.DecimalField(max_digits=10, decimal_places=2)
    early_bird_price = models.DecimalField(max_digits=10, decimal_places=2, blank=True, null=True)
    early_bird_deadline = models.DateTimeField(blank=True, null=True)
    max_quantity = models.PositiveIntegerField()
    current_sold = models.PositiveIntegerField(default=0)
    is_active = models.BooleanField(default=True)
    priority = models.IntegerField(default=0)
    benefits = models.JSONField(default=list, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["priority", "created_at"]
        indexes = [
            models.Index(fields=["configuration", "category"], name="offering_config_category_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.name} - {self.price}"


class GroupDiscountRule(models.Model):
    """Persistence model for VIP group discounts."""

    offering = models.ForeignKey(Offering, on_delete=models.CASCADE, related_name="group_discounts")
    min_quantity = models.PositiveIntegerField()
    discount_percent = models.DecimalField(max_digits=5, decimal_places=2)
    description = models.CharField(max_length=255, blank=True)

    class Meta:
        ordering = ["min_quantity"]

    def __str__(self) -> str:
        return f"{self.discount_percent}% from {self.min_quantity}"


class Reservation(models.Model):
    """Persistence model for confirmed ticket reservations."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    configuration = models.ForeignKey(
        TicketConfiguration, on_delete=models.PROTECT, related_name="reservations"
    )
    reservation_code = models.CharField(max_length=64, unique=True)
    contact_name = models.CharField(max_length=255)
    contact_email = models.EmailField()
    contact_phone = models.CharField(max_length=64)
    special_requests = models.TextField(blank=True)
    total_amount = models.DecimalField(max_digits=12, decimal_places=2)
    total_quantity = models.PositiveIntegerField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return self.reservation_code


class ReservationItem(models.Model):
    """One offering line of a reservation."""

    reservation = models.ForeignKey(Reservation, on_delete=models.CASCADE, related_name="items")
    offering = models.ForeignKey(Offering, on_delete=models.PROTECT, related_name="reservation_items")
    quantity = models.PositiveIntegerField()
    unit_price = models.DecimalField(max_digits=10, decimal_places=2)
    total_price = models.DecimalField(max_digits=12, decimal_places=2)
    guest_names = models.JSONField(default=list, blank=True)

    def __str__(self) -> str:
        return f"{self.quantity} x {self.offering_id}"


class VIPTier(models.Model):
    """Persistence model for stand-alone VIP experiences."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=100)
    description = models.TextField(blank=True)
    price = models.DecimalField(max_digits=10, decimal_places=2)
    max_reservations = models.PositiveIntegerField()
    current_reservations = models.PositiveIntegerField(default=0)
    perks = models.JSONField(default=list, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["price"]

    def __str__(self) -> str:
        return self.name


class VIPReservation(models.Model):
    """Persistence model for VIP tier reservations."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    tier = models.ForeignKey(VIPTier, on_delete=models.PROTECT, related_name="reservations")
    event_id = models.UUIDField()
    guest_count = models.PositiveIntegerField()
    contact_name = models.CharField(max_length=255)
    contact_email = models.EmailField()
    contact_phone = models.CharField(max_length=64)
    special_requests = models.TextField(blank=True)
    total_amount = models.DecimalField(max_digits=12, decimal_places=2)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        indexes = [
            models.Index(fields=["event_id"], name="vip_reservation_event_idx"),
        ]

    def __str__(self) -> str:
        return f"{self.tier.name} x {self.guest_count}"
