"""Serializers for request parsing and for turning domain models into API responses."""

from rest_framework import serializers

from ticketing.domain.inventory import purchasable_offerings
from ticketing.domain.models import MAX_VIP_GUESTS, MIN_VIP_GUESTS
from ticketing.domain.pricing import unit_price
from ticketing.domain.sales_window import sales_state, sales_status_message
from ticketing.domain.value_objects import Money


class ContactInfoSerializer(serializers.Serializer):
    """Contact fields are validated by the booking session, not here."""

    name = serializers.CharField(allow_blank=True, trim_whitespace=False, default="")
    email = serializers.CharField(allow_blank=True, trim_whitespace=False, default="")
    phone = serializers.CharField(allow_blank=True, trim_whitespace=False, default="")


class TicketSelectionSerializer(serializers.Serializer):
    offering_id = serializers.UUIDField()
    quantity = serializers.IntegerField(min_value=0)
    guest_names = serializers.ListField(
        child=serializers.CharField(allow_blank=True, trim_whitespace=False),
        required=False,
        default=list,
    )


class QuoteRequestSerializer(serializers.Serializer):
    tickets = TicketSelectionSerializer(many=True)

    def validate_tickets(self, tickets: list[dict]) -> list[dict]:
        offering_ids = [ticket["offering_id"] for ticket in tickets]
        if len(set(offering_ids)) != len(offering_ids):
            raise serializers.ValidationError("Each offering may appear only once per order.")
        return tickets


class ReservationCreateSerializer(QuoteRequestSerializer):
    contact_info = ContactInfoSerializer(default=dict)
    special_requests = serializers.CharField(allow_blank=True, required=False, default="")


class VIPReservationCreateSerializer(serializers.Serializer):
    event_id = serializers.UUIDField()
    guest_count = serializers.IntegerField(min_value=MIN_VIP_GUESTS, max_value=MAX_VIP_GUESTS)
    contact_info = ContactInfoSerializer(default=dict)
    special_requests = serializers.CharField(allow_blank=True, required=False, default="")


class GroupDiscountSerializer(serializers.Serializer):
    min_quantity = serializers.IntegerField()
    discount_percent = serializers.DecimalField(max_digits=5, decimal_places=2)
    description = serializers.CharField()


class OfferingSerializer(serializers.Serializer):
    """Serializer for Offering domain model.

    ``unit_price`` is the single-unit price at ``context["now"]``.
    """

    id = serializers.CharField()
    name = serializers.CharField()
    description = serializers.CharField()
    category = serializers.CharField(source="category.value")
    price = serializers.CharField()
    early_bird_price = serializers.CharField(allow_null=True)
    early_bird_deadline = serializers.DateTimeField(allow_null=True)
    unit_price = serializers.SerializerMethodField()
    max_quantity = serializers.IntegerField(source="max_quantity.value")
    available = serializers.IntegerField()
    priority = serializers.IntegerField()
    benefits = serializers.ListField(child=serializers.CharField())
    group_discounts = GroupDiscountSerializer(many=True)

    def get_unit_price(self, offering) -> str:
        return str(Money(amount=unit_price(offering, 1, self.context["now"])).rounded())


class TicketConfigurationSerializer(serializers.Serializer):
    """Serializer for TicketConfiguration; lists purchasable offerings only."""

    event_id = serializers.CharField()
    event_title = serializers.CharField()
    sales_state = serializers.SerializerMethodField()
    sales_status = serializers.SerializerMethodField()
    sales_start = serializers.DateTimeField(source="sales_window.starts_at")
    sales_end = serializers.DateTimeField(source="sales_window.ends_at")
    max_tickets_per_order = serializers.IntegerField(source="sales_window.per_order_max")
    offerings = serializers.SerializerMethodField()
    refund_policy = serializers.CharField()
    terms = serializers.CharField()

    def get_sales_state(self, configuration) -> str:
        return sales_state(configuration.sales_window, self.context["now"]).value

    def get_sales_status(self, configuration) -> str:
        return sales_status_message(configuration.sales_window, self.context["now"])

    def get_offerings(self, configuration) -> list:
        offerings = purchasable_offerings(configuration.offerings)
        return OfferingSerializer(offerings, many=True, context=self.context).data


class SelectionLineSerializer(serializers.Serializer):
    offering_id = serializers.CharField()
    name = serializers.CharField(source="offering.name")
    category = serializers.CharField(source="offering.category.value")
    quantity = serializers.IntegerField()
    unit_price = serializers.SerializerMethodField()
    guest_names = serializers.ListField(child=serializers.CharField(allow_blank=True))
    subtotal = serializers.CharField()

    def get_unit_price(self, line) -> str:
        price = unit_price(line.offering, line.quantity, self.context["now"])
        return str(Money(amount=price).rounded())


class VIPTierSerializer(serializers.Serializer):
    id = serializers.CharField()
    name = serializers.CharField()
    description = serializers.CharField()
    price = serializers.CharField()
    max_reservations = serializers.IntegerField(source="max_reservations.value")
    current_reservations = serializers.IntegerField()
    available = serializers.IntegerField()
    is_selectable = serializers.BooleanField()
    perks = serializers.ListField(child=serializers.CharField())
