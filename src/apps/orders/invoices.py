"""Invoice generation for submitted orders."""

import logging
from datetime import timedelta
from decimal import Decimal

from django.conf import settings
from django.core.mail import EmailMultiAlternatives
from django.db import transaction
from django.template.loader import render_to_string
from django.utils import timezone

from apps.catalog.registry import ServiceCatalog

from .errors import UnknownServiceError
from .models import Invoice, Order

logger = logging.getLogger(__name__)


def build_line_items(order: Order, catalog: ServiceCatalog) -> list[dict]:
    """One line per selected service, priced at the midpoint of its range."""
    items = []
    for service_id in order.selected_service_ids:
        service = catalog.get_service_by_id(service_id)
        if service is None:
            raise UnknownServiceError(service_id)
        unit_price = (service.price_range.min + service.price_range.max) / 2
        items.append(
            {
                "serviceId": service_id,
                "description": f"{service.name.en} - {service.short_description.en}",
                "quantity": 1,
                "unitPrice": unit_price,
                "adjustments": [],
                "total": unit_price,
            }
        )
    return items


def _payment_instructions(total: Decimal, currency: str, order_id: str) -> dict:
    return {
        "en": (
            f"Please transfer {total} {currency} to the provided banking details. "
            f"Make sure to include order number {order_id} in the payment reference."
        ),
        "ru": (
            f"Пожалуйста, переведите {total} {currency} на указанные банковские реквизиты. "
            f"Обязательно укажите номер заказа {order_id} в назначении платежа."
        ),
    }


def generate_invoice(order_id: str, catalog: ServiceCatalog) -> Invoice:
    """Create, send and record the invoice for *order_id*.

    Safe to call repeatedly: an order gets at most one invoice, and an invoice
    that has already been sent is not sent again.
    """
    with transaction.atomic():
        order = Order.objects.select_for_update().select_related("customer").get(order_id=order_id)
        invoice = Invoice.objects.filter(order=order).first()
        if invoice is None:
            invoice = _create_invoice(order, catalog)
            logger.info("Invoice %s created for %s", invoice.invoice_number, order.order_id)

    if invoice.status != Invoice.Status.DRAFT:
        logger.info("Invoice %s already sent for %s", invoice.invoice_number, order.order_id)
        return invoice

    send_invoice_email(invoice)

    message = f"Invoice {invoice.invoice_number} generated and sent"
    with transaction.atomic():
        invoice.status = Invoice.Status.SENT
        invoice.save(update_fields=["status", "updated_at"])
        order.update_status(Order.Status.INVOICE_SENT, message=message, author="system")
        order.add_note(message, author="system", note_type=Order.NoteType.INTERNAL)
    return invoice


def _create_invoice(order: Order, catalog: ServiceCatalog) -> Invoice:
    line_items = build_line_items(order, catalog)
    subtotal = Decimal(str(sum(item["total"] for item in line_items))).quantize(Decimal("0.01"))
    tax_amount = Decimal("0.00")
    total_amount = subtotal + tax_amount
    issue_date = timezone.now().date()
    terms = getattr(settings, "INVOICE_PAYMENT_TERMS_DAYS", 30)

    return Invoice.objects.create(
        order=order,
        customer=order.customer,
        status=Invoice.Status.DRAFT,
        issue_date=issue_date,
        due_date=issue_date + timedelta(days=terms),
        line_items=line_items,
        subtotal=subtotal,
        tax_amount=tax_amount,
        total_amount=total_amount,
        currency=order.currency,
        banking_details=dict(settings.INVOICE_BANKING_DETAILS),
        payment_instructions=_payment_instructions(total_amount, order.currency, order.order_id),
    )


def send_invoice_email(invoice: Invoice) -> None:
    """Email the invoice with payment instructions to the customer."""
    order = invoice.order
    customer = invoice.customer
    email = order.order_data.get("contactInfo", {}).get("email") or customer.email

    text_lines = [
        f"Hi {customer.first_name},\n",
        f"Invoice {invoice.invoice_number} for order {order.order_id}\n",
    ]
    text_lines += [f"- {item['description']}: {invoice.currency} {item['total']:,.2f}" for item in invoice.line_items]
    text_lines += [
        "",
        f"Total due: {invoice.currency} {invoice.total_amount:,.2f}",
        f"Due date: {invoice.due_date:%Y-%m-%d}",
        "",
        invoice.payment_instructions.get("en", ""),
    ]
    html_body = render_to_string(
        "emails/invoice.html",
        {
            "invoice": invoice,
            "order": order,
            "customer": customer,
            "banking": invoice.banking_details,
        },
    )

    msg = EmailMultiAlternatives(
        subject=f"Invoice {invoice.invoice_number} for order {order.order_id}",
        body="\n".join(text_lines) + "\n",
        from_email=settings.DEFAULT_FROM_EMAIL,
        to=[email],
    )
    msg.attach_alternative(html_body, "text/html")
    msg.send(fail_silently=False)
    logger.info("Invoice %s sent to %s", invoice.invoice_number, email)
