"""Initial migration for orders app - Customer, Order, OrderTrackingEntry, Invoice."""

import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models

import apps.orders.models


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Customer",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                (
                    "customer_id",
                    models.CharField(
                        default=apps.orders.models.generate_customer_id,
                        max_length=40,
                        unique=True,
                        verbose_name="customer ID",
                    ),
                ),
                ("email", models.EmailField(max_length=254, unique=True, verbose_name="email")),
                ("first_name", models.CharField(max_length=150, verbose_name="first name")),
                ("last_name", models.CharField(max_length=150, verbose_name="last name")),
                ("company", models.CharField(blank=True, max_length=255, verbose_name="company")),
                ("position", models.CharField(blank=True, max_length=255, verbose_name="position")),
                ("timezone", models.CharField(default="UTC", max_length=64, verbose_name="timezone")),
                (
                    "preferred_contact_time",
                    models.CharField(blank=True, max_length=100, verbose_name="preferred contact time"),
                ),
                (
                    "communication_channels",
                    models.JSONField(blank=True, default=dict, verbose_name="communication channels"),
                ),
                (
                    "total_order_value",
                    models.PositiveBigIntegerField(
                        default=0,
                        help_text="Sum of the maximum estimated price of every order, in USD.",
                        verbose_name="total order value",
                    ),
                ),
                ("is_active", models.BooleanField(default=True, verbose_name="active")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="created")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="updated")),
            ],
            options={
                "verbose_name": "customer",
                "verbose_name_plural": "customers",
                "ordering": ["-created_at"],
            },
        ),
        migrations.CreateModel(
            name="Order",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                ("order_id", models.CharField(max_length=40, unique=True, verbose_name="order ID")),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("submitted", "Submitted"),
                            ("reviewed", "Reviewed"),
                            ("invoice_sent", "Invoice Sent"),
                            ("payment_pending", "Payment Pending"),
                            ("paid", "Paid"),
                            ("in_progress", "In Progress"),
                            ("completed", "Completed"),
                            ("cancelled", "Cancelled"),
                        ],
                        db_index=True,
                        default="submitted",
                        max_length=20,
                        verbose_name="status",
                    ),
                ),
                (
                    "order_data",
                    models.JSONField(help_text="The order draft as submitted.", verbose_name="order data"),
                ),
                ("total_min", models.PositiveBigIntegerField(verbose_name="estimated total (min)")),
                ("total_max", models.PositiveBigIntegerField(verbose_name="estimated total (max)")),
                ("currency", models.CharField(default="USD", max_length=3, verbose_name="currency")),
                (
                    "priority",
                    models.CharField(
                        choices=[("normal", "Normal"), ("medium", "Medium"), ("high", "High")],
                        db_index=True,
                        default="normal",
                        max_length=10,
                        verbose_name="priority",
                    ),
                ),
                ("notes", models.JSONField(blank=True, default=list, verbose_name="notes")),
                (
                    "assigned_manager",
                    models.CharField(blank=True, max_length=255, verbose_name="assigned manager"),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="created")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="updated")),
                (
                    "customer",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="orders",
                        to="orders.customer",
                    ),
                ),
            ],
            options={
                "verbose_name": "order",
                "verbose_name_plural": "orders",
                "ordering": ["-created_at"],
            },
        ),
        migrations.CreateModel(
            name="OrderTrackingEntry",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("submitted", "Submitted"),
                            ("reviewed", "Reviewed"),
                            ("invoice_sent", "Invoice Sent"),
                            ("payment_pending", "Payment Pending"),
                            ("paid", "Paid"),
                            ("in_progress", "In Progress"),
                            ("completed", "Completed"),
                            ("cancelled", "Cancelled"),
                        ],
                        max_length=20,
                        verbose_name="status",
                    ),
                ),
                ("message", models.TextField(blank=True, verbose_name="message")),
                ("author", models.CharField(default="system", max_length=255, verbose_name="author")),
                ("metadata", models.JSONField(blank=True, default=dict, verbose_name="metadata")),
                (
                    "timestamp",
                    models.DateTimeField(
                        db_index=True,
                        default=django.utils.timezone.now,
                        verbose_name="timestamp",
                    ),
                ),
                (
                    "order",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="tracking_entries",
                        to="orders.order",
                    ),
                ),
            ],
            options={
                "verbose_name": "tracking entry",
                "verbose_name_plural": "tracking entries",
                "ordering": ["timestamp", "pk"],
            },
        ),
        migrations.CreateModel(
            name="Invoice",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                (
                    "invoice_id",
                    models.CharField(
                        default=apps.orders.models.generate_invoice_id,
                        max_length=40,
                        unique=True,
                        verbose_name="invoice ID",
                    ),
                ),
                (
                    "invoice_number",
                    models.CharField(
                        default=apps.orders.models.generate_invoice_number,
                        max_length=40,
                        unique=True,
                        verbose_name="invoice number",
                    ),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("draft", "Draft"),
                            ("sent", "Sent"),
                            ("viewed", "Viewed"),
                            ("paid", "Paid"),
                            ("overdue", "Overdue"),
                            ("cancelled", "Cancelled"),
                        ],
                        default="draft",
                        max_length=20,
                        verbose_name="status",
                    ),
                ),
                ("issue_date", models.DateField(verbose_name="issue date")),
                ("due_date", models.DateField(verbose_name="due date")),
                ("line_items", models.JSONField(default=list, verbose_name="line items")),
                ("subtotal", models.DecimalField(decimal_places=2, max_digits=14, verbose_name="subtotal")),
                (
                    "tax_amount",
                    models.DecimalField(decimal_places=2, default=0, max_digits=14, verbose_name="tax"),
                ),
                ("total_amount", models.DecimalField(decimal_places=2, max_digits=14, verbose_name="total")),
                ("currency", models.CharField(default="USD", max_length=3, verbose_name="currency")),
                ("banking_details", models.JSONField(default=dict, verbose_name="banking details")),
                ("payment_instructions", models.JSONField(default=dict, verbose_name="payment instructions")),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="created")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="updated")),
                (
                    "customer",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="invoices",
                        to="orders.customer",
                    ),
                ),
                (
                    "order",
                    models.OneToOneField(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="invoice",
                        to="orders.order",
                    ),
                ),
            ],
            options={
                "verbose_name": "invoice",
                "verbose_name_plural": "invoices",
                "ordering": ["-created_at"],
            },
        ),
    ]
