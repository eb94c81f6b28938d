"""Database writes for a submitted order. Synchronous; call via ``sync_to_async``."""

import logging
from collections.abc import Callable

from django.conf import settings
from django.db import IntegrityError, transaction
from django.db.models import F

from apps.catalog.domain import TotalPrice

from .draft import ContactInfo, OrderDraft
from .errors import PersistenceError
from .models import Customer, Order, OrderTrackingEntry

logger = logging.getLogger(__name__)


def find_or_create_customer(contact: ContactInfo) -> tuple[Customer, bool]:
    """Return the customer for the contact's email, creating it if needed.

    The email is matched case-insensitively. An existing customer is returned
    unchanged.
    """
    return Customer.objects.get_or_create(
        email=contact.email.strip().lower(),
        defaults={
            "first_name": contact.first_name.strip(),
            "last_name": contact.last_name.strip(),
            "company": (contact.company or "").strip(),
            "position": (contact.position or "").strip(),
            "timezone": contact.timezone.strip() or "UTC",
            "preferred_contact_time": (contact.preferred_contact_time or "").strip(),
            "communication_channels": contact.communication_channels.to_dict(),
        },
    )


def create_order(
    *,
    customer: Customer,
    draft: OrderDraft,
    total: TotalPrice,
    priority: str,
    generate_id: Callable[[], str],
) -> Order:
    """Insert the order, drawing a fresh id whenever the previous one is taken."""
    max_attempts = getattr(settings, "ORDER_ID_MAX_ATTEMPTS", 3)
    for attempt in range(1, max_attempts + 1):
        order_id = generate_id()
        try:
            with transaction.atomic():
                return Order.objects.create(
                    order_id=order_id,
                    customer=customer,
                    status=Order.Status.SUBMITTED,
                    order_data=draft.to_dict(),
                    total_min=total.min,
                    total_max=total.max,
                    currency=total.currency,
                    priority=priority,
                    notes=[],
                )
        except IntegrityError:
            if not Order.objects.filter(order_id=order_id).exists():
                raise
            logger.warning("Order id %s already taken (attempt %d/%d)", order_id, attempt, max_attempts)
    raise PersistenceError(f"Could not allocate a unique order id after {max_attempts} attempts")


def save_submitted_order(
    *,
    draft: OrderDraft,
    total: TotalPrice,
    priority: str,
    generate_id: Callable[[], str],
    ip_address: str = "unknown",
    user_agent: str = "unknown",
) -> Order:
    """Persist customer, order, running total and first tracking entry atomically."""
    with transaction.atomic():
        customer, created = find_or_create_customer(draft.contact_info)
        if created:
            logger.info("Created customer %s", customer.customer_id)

        order = create_order(
            customer=customer,
            draft=draft,
            total=total,
            priority=priority,
            generate_id=generate_id,
        )

        Customer.objects.filter(pk=customer.pk).update(total_order_value=F("total_order_value") + total.max)

        OrderTrackingEntry.objects.create(
            order=order,
            status=Order.Status.SUBMITTED,
            message="Order submitted successfully",
            author="system",
            metadata={"ip": ip_address or "unknown", "userAgent": user_agent or "unknown"},
        )
    return order
