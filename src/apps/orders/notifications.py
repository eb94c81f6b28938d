"""Order notifications: customer confirmation and management alerts.

These run on the task runner. They raise on failure so the runner can retry.
"""

import hashlib
import hmac
import json
import logging
from urllib.request import Request, urlopen

from django.conf import settings
from django.core.mail import EmailMultiAlternatives
from django.template.loader import render_to_string

from .models import Order

logger = logging.getLogger(__name__)

WEBHOOK_EVENT = "order.submitted"


def sign_payload(payload: bytes, secret: str) -> str:
    """Create HMAC SHA256 signature for webhook payload."""
    return hmac.new(
        secret.encode(),
        payload,
        hashlib.sha256,
    ).hexdigest()


def _load_order(order_id: str) -> Order:
    return Order.objects.select_related("customer").get(order_id=order_id)


def _order_context(order: Order) -> dict:
    data = order.order_data
    return {
        "order": order,
        "customer": order.customer,
        "project": data.get("projectDetails", {}),
        "services": data.get("selectedServices", []),
        "tracking_url": f"{settings.SITE_URL}/order/track/{order.order_id}",
        "admin_url": f"{settings.SITE_URL}/admin/orders/order/{order.pk}/change/",
    }


def send_order_confirmation_email(order_id: str) -> None:
    """Email the customer that their order was received."""
    order = _load_order(order_id)
    customer = order.customer
    context = _order_context(order)

    subject = f"Order {order.order_id} received"
    text_body = (
        f"Hi {customer.first_name},\n\n"
        f"Thank you for your order. We have received it and will send an invoice "
        f"within 24-48 hours.\n\n"
        f"Order ID: {order.order_id}\n"
        f"Project: {context['project'].get('title', '')}\n"
        f"Estimated total: {order.currency} {order.total_min:,} - {order.total_max:,}\n\n"
        f"Track your order: {context['tracking_url']}\n"
    )
    html_body = render_to_string("emails/order_confirmation.html", context)

    msg = EmailMultiAlternatives(
        subject=subject,
        body=text_body,
        from_email=settings.DEFAULT_FROM_EMAIL,
        to=[f"{customer.full_name} <{customer.email}>"],
    )
    msg.attach_alternative(html_body, "text/html")
    msg.send(fail_silently=False)
    logger.info("Order confirmation sent to %s for %s", customer.email, order.order_id)


def notify_management_team(order_id: str) -> None:
    """Alert the team by email and, when configured, by webhook."""
    order = _load_order(order_id)
    _send_management_email(order)
    _post_management_webhook(order)


def _send_management_email(order: Order) -> None:
    recipients: list[str] = getattr(settings, "ORDER_NOTIFICATION_EMAILS", [])
    if not recipients:
        logger.warning("No ORDER_NOTIFICATION_EMAILS configured, skipping notification.")
        return

    customer = order.customer
    context = _order_context(order)
    subject = f"[{order.get_priority_display()}] New order {order.order_id} from {customer.full_name}"
    text_body = (
        f"New order submitted:\n\n"
        f"Order ID: {order.order_id}\n"
        f"Priority: {order.get_priority_display()}\n"
        f"Customer: {customer.full_name} <{customer.email}>\n"
        f"Company: {customer.company or 'Not provided'}\n"
        f"Project: {context['project'].get('title', '')}\n"
        f"Services: {', '.join(order.selected_service_ids)}\n"
        f"Estimated total: {order.currency} {order.total_min:,} - {order.total_max:,}\n\n"
        f"View in admin: {context['admin_url']}\n"
    )
    html_body = render_to_string("emails/order_notification.html", context)

    msg = EmailMultiAlternatives(
        subject=subject,
        body=text_body,
        from_email=f"VolkovChain Orders <{settings.DEFAULT_FROM_EMAIL_ADDRESS}>",
        to=recipients,
        reply_to=[f"{customer.full_name} <{customer.email}>"],
    )
    msg.attach_alternative(html_body, "text/html")
    msg.send(fail_silently=False)
    logger.info("Order notification sent to %s for %s", recipients, order.order_id)


def _post_management_webhook(order: Order) -> None:
    url = getattr(settings, "MANAGEMENT_WEBHOOK_URL", "")
    if not url:
        return

    payload = {
        "event": WEBHOOK_EVENT,
        "data": {
            "orderId": order.order_id,
            "priority": order.priority,
            "status": order.status,
            "customerEmail": order.customer.email,
            "services": order.selected_service_ids,
            "estimatedTotal": {"min": order.total_min, "max": order.total_max, "currency": order.currency},
            "createdAt": order.created_at.isoformat(),
        },
    }
    payload_bytes = json.dumps(payload).encode()
    headers = {
        "Content-Type": "application/json",
        "X-VolkovChain-Event": WEBHOOK_EVENT,
        "User-Agent": "VolkovChain-Orders/1.0",
    }
    secret = getattr(settings, "MANAGEMENT_WEBHOOK_SECRET", "")
    if secret:
        headers["X-VolkovChain-Signature"] = sign_payload(payload_bytes, secret)

    req = Request(  # noqa: S310
        url,
        data=payload_bytes,
        headers=headers,
        method="POST",
    )
    with urlopen(req, timeout=15) as response:  # noqa: S310
        logger.info("Management webhook for %s returned %s", order.order_id, response.status)
