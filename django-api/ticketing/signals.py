"""Django signals for cache invalidation."""

from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from ticketing.cache import invalidate_configuration, invalidate_vip_tiers
from ticketing.models import GroupDiscountRule, Offering, TicketConfiguration, VIPTier


@receiver([post_save, post_delete], sender=TicketConfiguration)
def invalidate_configuration_cache(sender, instance, **kwargs):
    """Invalidate the cached configuration when it is saved or deleted."""
    invalidate_configuration(instance.event_id)


@receiver([post_save, post_delete], sender=Offering)
def invalidate_offering_cache(sender, instance, **kwargs):
    """Invalidate the owning configuration when an offering is saved or deleted."""
    invalidate_configuration(instance.configuration.event_id)


@receiver([post_save, post_delete], sender=GroupDiscountRule)
def invalidate_discount_cache(sender, instance, **kwargs):
    """Invalidate the owning configuration when a discount rule is saved or deleted."""
    invalidate_configuration(instance.offering.configuration.event_id)


@receiver([post_save, post_delete], sender=VIPTier)
def invalidate_vip_tier_cache(sender, instance, **kwargs):
    """Invalidate the tier catalog when a tier is saved or deleted."""
    invalidate_vip_tiers()
