"""Tests for order records, tracking history and GET /api/order/track/."""

from datetime import timedelta

import pytest
from django.db.models import ProtectedError
from django.test import Client
from django.urls import reverse
from django.utils import timezone

from apps.orders.models import Customer, Order, OrderTrackingEntry

# ─────────────────────────────── Fixtures ────────────────────────────────────


@pytest.fixture
def customer(db) -> Customer:
    return Customer.objects.create(
        email="grace@example.com",
        first_name="Grace",
        last_name="Hopper",
    )


@pytest.fixture
def order(customer: Customer) -> Order:
    """An order for a Rust course plus an audit."""
    order = Order.objects.create(
        order_id="ORD-1700000000000-TEST01",
        customer=customer,
        order_data={
            "selectedServices": [
                {"serviceId": "rust-blockchain-course", "priority": "Medium"},
                {"serviceId": "smart-contract-audit", "priority": "High"},
            ],
            "projectDetails": {"title": "Course + audit", "description": "Both"},
            "contactInfo": {
                "firstName": "Grace",
                "lastName": "Hopper",
                "email": "grace@example.com",
                "communicationChannels": {"telegram": "@grace"},
            },
        },
        total_min=1300,
        total_max=2700,
    )
    OrderTrackingEntry.objects.create(
        order=order,
        status=Order.Status.SUBMITTED,
        message="Order submitted successfully",
        metadata={"ip": "198.51.100.7", "userAgent": "test"},
    )
    return order


# ─────────────────────────────── Models ──────────────────────────────────────


@pytest.mark.django_db
class TestOrderModel:
    """Test Order operations."""

    def test_customer_id_format(self, customer: Customer) -> None:
        assert customer.customer_id.startswith("CUST-")
        assert customer.full_name == "Grace Hopper"

    def test_update_status_appends_entry(self, order: Order) -> None:
        entry = order.update_status(Order.Status.REVIEWED, message="Looked at it", author="manager")

        order.refresh_from_db()
        assert order.status == Order.Status.REVIEWED
        assert order.progress == 25
        assert entry.author == "manager"
        assert list(order.tracking_entries.values_list("status", flat=True)) == ["submitted", "reviewed"]

    def test_update_status_rejects_unknown_status(self, order: Order) -> None:
        with pytest.raises(ValueError):
            order.update_status("teleported")

    def test_add_note_appends(self, order: Order) -> None:
        order.add_note("Called the customer", author="manager")
        order.add_note("Customer asked for a discount", author="manager", note_type="customer")

        order.refresh_from_db()
        assert [n["content"] for n in order.notes] == ["Called the customer", "Customer asked for a discount"]
        assert order.notes[1]["type"] == "customer"

    def test_customer_cannot_be_deleted_with_orders(self, order: Order) -> None:
        with pytest.raises(ProtectedError):
            order.customer.delete()

    @pytest.mark.parametrize(
        ("status", "progress"),
        [
            ("submitted", 10),
            ("reviewed", 25),
            ("invoice_sent", 40),
            ("payment_pending", 40),
            ("paid", 60),
            ("in_progress", 80),
            ("completed", 100),
            ("cancelled", 0),
        ],
    )
    def test_progress_map(self, status: str, progress: int) -> None:
        assert Order(status=status).progress == progress


@pytest.mark.django_db
class TestTrackingEntries:
    """Test append-only tracking history."""

    def test_entries_cannot_be_edited(self, order: Order) -> None:
        entry = order.tracking_entries.get()
        entry.message = "rewritten"
        with pytest.raises(ValueError, match="append-only"):
            entry.save()

    def test_entries_cannot_be_deleted(self, order: Order) -> None:
        with pytest.raises(ValueError, match="append-only"):
            order.tracking_entries.get().delete()

    def test_timestamps_never_go_backwards(self, order: Order) -> None:
        future = timezone.now() + timedelta(hours=1)
        OrderTrackingEntry.objects.create(order=order, status="reviewed", timestamp=future)
        late = OrderTrackingEntry.objects.create(order=order, status="paid", timestamp=timezone.now())

        assert late.timestamp == future
        timestamps = list(order.tracking_entries.values_list("timestamp", flat=True))
        assert timestamps == sorted(timestamps)


# ─────────────────────────────── Endpoint ────────────────────────────────────


@pytest.mark.django_db
class TestOrderTrackView:
    """Test GET /api/order/track/<order_id>/."""

    def test_returns_public_view(self, client: Client, order: Order) -> None:
        response = client.get(reverse("orders:track", args=[order.order_id]))

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["order"]["orderId"] == order.order_id
        assert data["order"]["progress"] == 10
        assert data["order"]["calculatedTotal"] == {"min": 1300, "max": 2700, "currency": "USD"}
        assert data["order"]["projectDetails"]["title"] == "Course + audit"
        assert [h["status"] for h in data["trackingHistory"]] == ["submitted"]

    def test_hides_contact_details(self, client: Client, order: Order) -> None:
        body = client.get(reverse("orders:track", args=[order.order_id])).content.decode()
        assert "grace@example.com" not in body
        assert "@grace" not in body
        assert "198.51.100.7" not in body

    def test_estimated_completion_uses_longest_service(self, client: Client, order: Order) -> None:
        """Rust course (84 days) outlasts the audit (5 days)."""
        data = client.get(reverse("orders:track", args=[order.order_id])).json()
        expected = order.created_at + timedelta(days=84)
        assert data["estimatedCompletion"] == expected.isoformat()

    def test_no_estimate_for_finished_orders(self, client: Client, order: Order) -> None:
        order.update_status(Order.Status.COMPLETED)
        data = client.get(reverse("orders:track", args=[order.order_id])).json()
        assert data["estimatedCompletion"] is None
        assert data["order"]["progress"] == 100

    def test_unknown_order_is_404(self, client: Client, db) -> None:
        response = client.get(reverse("orders:track", args=["ORD-0-NOPE00"]))
        assert response.status_code == 404
        assert response.json() == {"success": False, "error": "Order not found"}
