"""Persistent records for submitted orders."""

import secrets
import string
import time
from datetime import timedelta
from typing import ClassVar

from django.db import models, transaction
from django.utils import timezone

from apps.catalog.registry import (
    COMPANY_MAX_LENGTH,
    CONTACT_TIME_MAX_LENGTH,
    EMAIL_MAX_LENGTH,
    FIRST_NAME_MAX_LENGTH,
    LAST_NAME_MAX_LENGTH,
    POSITION_MAX_LENGTH,
    TIMEZONE_MAX_LENGTH,
)

_ID_ALPHABET = string.ascii_uppercase + string.digits

DEFAULT_DELIVERY_DAYS = 30


def _random_suffix(length: int = 6) -> str:
    return "".join(secrets.choice(_ID_ALPHABET) for _ in range(length))


def generate_customer_id() -> str:
    """Generate a customer id like ``CUST-1718000000000-AB12CD``."""
    return f"CUST-{int(time.time() * 1000)}-{_random_suffix()}"


def generate_invoice_id() -> str:
    return f"INV-{int(time.time() * 1000)}-{_random_suffix()}"


def generate_invoice_number() -> str:
    """Human-facing invoice number: ``VCC-<year>-<6 digits>-<4 random chars>``."""
    return f"VCC-{timezone.now().year}-{str(int(time.time() * 1000))[-6:]}-{_random_suffix(4)}"


class Customer(models.Model):
    """A person who has submitted at least one order. Keyed by email."""

    customer_id = models.CharField(
        "customer ID",
        max_length=40,
        unique=True,
        default=generate_customer_id,
    )
    email = models.EmailField("email", max_length=EMAIL_MAX_LENGTH, unique=True)
    first_name = models.CharField("first name", max_length=FIRST_NAME_MAX_LENGTH)
    last_name = models.CharField("last name", max_length=LAST_NAME_MAX_LENGTH)
    company = models.CharField("company", max_length=COMPANY_MAX_LENGTH, blank=True)
    position = models.CharField("position", max_length=POSITION_MAX_LENGTH, blank=True)
    timezone = models.CharField("timezone", max_length=TIMEZONE_MAX_LENGTH, default="UTC")
    preferred_contact_time = models.CharField("preferred contact time", max_length=CONTACT_TIME_MAX_LENGTH, blank=True)
    communication_channels = models.JSONField("communication channels", default=dict, blank=True)

    total_order_value = models.PositiveBigIntegerField(
        "total order value",
        default=0,
        help_text="Sum of the maximum estimated price of every order, in USD.",
    )
    is_active = models.BooleanField("active", default=True)

    created_at = models.DateTimeField("created", auto_now_add=True)
    updated_at = models.DateTimeField("updated", auto_now=True)

    class Meta:
        ordering: ClassVar[list[str]] = ["-created_at"]
        verbose_name = "customer"
        verbose_name_plural = "customers"

    def __str__(self) -> str:
        return f"{self.full_name} <{self.email}>"

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


class Order(models.Model):
    """A submitted order. ``order_data`` is the draft exactly as submitted."""

    class Status(models.TextChoices):
        """Order lifecycle. Transitions are not enforced."""

        SUBMITTED = "submitted", "Submitted"
        REVIEWED = "reviewed", "Reviewed"
        INVOICE_SENT = "invoice_sent", "Invoice Sent"
        PAYMENT_PENDING = "payment_pending", "Payment Pending"
        PAID = "paid", "Paid"
        IN_PROGRESS = "in_progress", "In Progress"
        COMPLETED = "completed", "Completed"
        CANCELLED = "cancelled", "Cancelled"

    class Priority(models.TextChoices):
        NORMAL = "normal", "Normal"
        MEDIUM = "medium", "Medium"
        HIGH = "high", "High"

    class NoteType(models.TextChoices):
        INTERNAL = "internal", "Internal"
        CUSTOMER = "customer", "Customer"

    PROGRESS: ClassVar[dict[str, int]] = {
        Status.SUBMITTED: 10,
        Status.REVIEWED: 25,
        Status.INVOICE_SENT: 40,
        Status.PAYMENT_PENDING: 40,
        Status.PAID: 60,
        Status.IN_PROGRESS: 80,
        Status.COMPLETED: 100,
        Status.CANCELLED: 0,
    }

    order_id = models.CharField("order ID", max_length=40, unique=True)
    customer = models.ForeignKey(
        Customer,
        on_delete=models.PROTECT,
        related_name="orders",
    )
    status = models.CharField(
        "status",
        max_length=20,
        choices=Status.choices,
        default=Status.SUBMITTED,
        db_index=True,
    )
    order_data = models.JSONField("order data", help_text="The order draft as submitted.")

    total_min = models.PositiveBigIntegerField("estimated total (min)")
    total_max = models.PositiveBigIntegerField("estimated total (max)")
    currency = models.CharField("currency", max_length=3, default="USD")

    priority = models.CharField(
        "priority",
        max_length=10,
        choices=Priority.choices,
        default=Priority.NORMAL,
        db_index=True,
    )
    notes = models.JSONField("notes", default=list, blank=True)
    assigned_manager = models.CharField("assigned manager", max_length=255, blank=True)

    created_at = models.DateTimeField("created", auto_now_add=True)
    updated_at = models.DateTimeField("updated", auto_now=True)

    class Meta:
        ordering: ClassVar[list[str]] = ["-created_at"]
        verbose_name = "order"
        verbose_name_plural = "orders"

    def __str__(self) -> str:
        return f"{self.order_id} ({self.get_status_display()})"

    @property
    def progress(self) -> int:
        return self.PROGRESS.get(self.status, 0)

    @property
    def selected_service_ids(self) -> list[str]:
        return [item.get("serviceId") for item in self.order_data.get("selectedServices", []) if item.get("serviceId")]

    def update_status(self, status: str, message: str = "", author: str = "system", metadata=None):
        """Set the status and append a tracking entry for it."""
        status = self.Status(status)
        with transaction.atomic():
            self.status = status
            self.save(update_fields=["status", "updated_at"])
            return OrderTrackingEntry.objects.create(
                order=self,
                status=status,
                message=message or f"Status changed to {status.label}",
                author=author,
                metadata=metadata or {},
            )

    def add_note(self, content: str, author: str = "system", note_type: str = NoteType.INTERNAL) -> dict:
        """Append a note. Existing notes are never modified."""
        note = {
            "content": content,
            "author": author,
            "type": self.NoteType(note_type).value,
            "timestamp": timezone.now().isoformat(),
        }
        with transaction.atomic():
            current = Order.objects.select_for_update().values_list("notes", flat=True).get(pk=self.pk)
            self.notes = [*(current or []), note]
            self.save(update_fields=["notes", "updated_at"])
        return note

    def estimated_completion(self, catalog):
        """Creation time plus the longest delivery estimate among the selected services.

        Returns None for completed or cancelled orders.
        """
        if self.status in (self.Status.COMPLETED, self.Status.CANCELLED):
            return None
        days = [
            service.metadata.estimated_delivery_days
            for service in (catalog.get_service_by_id(sid) for sid in self.selected_service_ids)
            if service is not None
        ]
        return self.created_at + timedelta(days=max(days, default=DEFAULT_DELIVERY_DAYS))


class OrderTrackingEntry(models.Model):
    """Append-only status history for an order."""

    order = models.ForeignKey(
        Order,
        on_delete=models.PROTECT,
        related_name="tracking_entries",
    )
    status = models.CharField("status", max_length=20, choices=Order.Status.choices)
    message = models.TextField("message", blank=True)
    author = models.CharField("author", max_length=255, default="system")
    metadata = models.JSONField("metadata", default=dict, blank=True)
    timestamp = models.DateTimeField("timestamp", default=timezone.now, db_index=True)

    class Meta:
        ordering: ClassVar[list[str]] = ["timestamp", "pk"]
        verbose_name = "tracking entry"
        verbose_name_plural = "tracking entries"

    def __str__(self) -> str:
        return f"{self.get_status_display()} @ {self.timestamp:%Y-%m-%d %H:%M}"

    def save(self, *args, **kwargs):
        """Insert only. Timestamps for an order never go backwards."""
        if not self._state.adding:
            raise ValueError("Tracking entries are append-only and cannot be changed.")
        latest = (
            OrderTrackingEntry.objects.filter(order_id=self.order_id)
            .order_by("-timestamp")
            .values_list("timestamp", flat=True)
            .first()
        )
        if latest is not None and self.timestamp < latest:
            self.timestamp = latest
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValueError("Tracking entries are append-only and cannot be deleted.")


class Invoice(models.Model):
    """Invoice issued for an order. One per order."""

    class Status(models.TextChoices):
        DRAFT = "draft", "Draft"
        SENT = "sent", "Sent"
        VIEWED = "viewed", "Viewed"
        PAID = "paid", "Paid"
        OVERDUE = "overdue", "Overdue"
        CANCELLED = "cancelled", "Cancelled"

    invoice_id = models.CharField(
        "invoice ID",
        max_length=40,
        unique=True,
        default=generate_invoice_id,
    )
    invoice_number = models.CharField(
        "invoice number",
        max_length=40,
        unique=True,
        default=generate_invoice_number,
    )
    order = models.OneToOneField(
        Order,
        on_delete=models.PROTECT,
        related_name="invoice",
    )
    customer = models.ForeignKey(
        Customer,
        on_delete=models.PROTECT,
        related_name="invoices",
    )
    status = models.CharField(
        "status",
        max_length=20,
        choices=Status.choices,
        default=Status.DRAFT,
    )
    issue_date = models.DateField("issue date")
    due_date = models.DateField("due date")

    line_items = models.JSONField("line items", default=list)
    subtotal = models.DecimalField("subtotal", max_digits=14, decimal_places=2)
    tax_amount = models.DecimalField("tax", max_digits=14, decimal_places=2, default=0)
    total_amount = models.DecimalField("total", max_digits=14, decimal_places=2)
    currency = models.CharField("currency", max_length=3, default="USD")

    banking_details = models.JSONField("banking details", default=dict)
    payment_instructions = models.JSONField("payment instructions", default=dict)

    created_at = models.DateTimeField("created", auto_now_add=True)
    updated_at = models.DateTimeField("updated", auto_now=True)

    class Meta:
        ordering: ClassVar[list[str]] = ["-created_at"]
        verbose_name = "invoice"
        verbose_name_plural = "invoices"

    def __str__(self) -> str:
        return f"{self.invoice_number} - {self.currency} {self.total_amount}"
