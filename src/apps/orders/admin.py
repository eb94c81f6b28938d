"""Admin configuration for orders."""

from django.contrib import admin, messages

from apps.catalog.apps import get_catalog

from .invoices import generate_invoice
from .models import Customer, Invoice, Order, OrderTrackingEntry


class OrderTrackingEntryInline(admin.TabularInline):
    """Read-only tracking history. Entries are append-only."""

    model = OrderTrackingEntry
    extra = 0
    can_delete = False
    fields = ("timestamp", "status", "message", "author", "metadata")
    readonly_fields = fields
    ordering = ("timestamp", "pk")

    def has_add_permission(self, request, obj=None) -> bool:
        return False


@admin.register(Customer)
class CustomerAdmin(admin.ModelAdmin):
    """Admin view for Customer model."""

    list_display = ("customer_id", "email", "first_name", "last_name", "company", "total_order_value", "created_at")
    list_filter = ("is_active", "created_at")
    search_fields = ("customer_id", "email", "first_name", "last_name", "company")
    readonly_fields = ("customer_id", "total_order_value", "created_at", "updated_at")
    ordering = ("-created_at",)


def _status_action(status: Order.Status):
    def action(modeladmin, request, queryset):
        author = request.user.get_username() or "admin"
        for order in queryset:
            order.update_status(status, author=author)
        modeladmin.message_user(request, f"{queryset.count()} order(s) marked {status.label}.", messages.SUCCESS)

    action.__name__ = f"mark_{status.value}"
    action.short_description = f"Mark selected orders as {status.label}"
    return action


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    """Admin view for Order model."""

    list_display = ("order_id", "customer", "status", "priority", "total_min", "total_max", "currency", "created_at")
    list_filter = ("status", "priority", "created_at")
    search_fields = ("order_id", "customer__email", "customer__last_name", "assigned_manager")
    readonly_fields = ("order_id", "customer", "status", "order_data", "notes", "created_at", "updated_at")
    ordering = ("-created_at",)
    inlines = (OrderTrackingEntryInline,)
    actions = (
        _status_action(Order.Status.REVIEWED),
        _status_action(Order.Status.PAYMENT_PENDING),
        _status_action(Order.Status.PAID),
        _status_action(Order.Status.IN_PROGRESS),
        _status_action(Order.Status.COMPLETED),
        _status_action(Order.Status.CANCELLED),
        "generate_invoices",
    )

    @admin.action(description="Generate and send invoice")
    def generate_invoices(self, request, queryset):
        catalog = get_catalog()
        for order in queryset:
            invoice = generate_invoice(order.order_id, catalog)
            self.message_user(request, f"{order.order_id}: invoice {invoice.invoice_number}", messages.SUCCESS)


@admin.register(Invoice)
class InvoiceAdmin(admin.ModelAdmin):
    """Admin view for Invoice model."""

    list_display = ("invoice_number", "order", "customer", "status", "total_amount", "currency", "due_date")
    list_filter = ("status", "currency", "issue_date")
    search_fields = ("invoice_number", "invoice_id", "order__order_id", "customer__email")
    readonly_fields = ("invoice_id", "invoice_number", "order", "customer", "created_at", "updated_at")
    ordering = ("-created_at",)
