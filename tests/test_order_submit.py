"""Tests for the order submission pipeline and POST /api/order/submit/."""

import json
import re
import threading
from concurrent.futures import ThreadPoolExecutor
from unittest.mock import MagicMock, patch

import pytest
from asgiref.sync import async_to_sync
from django.core import mail
from django.db import DatabaseError, IntegrityError, connection

from apps.catalog.domain import TotalPrice
from apps.catalog.registry import ServiceCatalog
from apps.orders.draft import BudgetBand, OrderDraft, TimelineBand
from apps.orders.errors import OrderValidationError, PersistenceError
from apps.orders.models import Customer, Order, OrderTrackingEntry
from apps.orders.pipeline import OrderSubmissionPipeline, determine_priority
from apps.orders.store import create_order, find_or_create_customer, save_submitted_order
from apps.orders.tasks import TaskRunner

# ─────────────────────────────── Priority ────────────────────────────────────


class TestDeterminePriority:
    """Test priority rules."""

    @pytest.mark.parametrize(
        ("budget", "timeline", "total_max", "expected"),
        [
            (BudgetBand.ENTERPRISE, TimelineBand.STANDARD, 150, "high"),
            (None, TimelineBand.RUSH, 150, "high"),
            (BudgetBand.OVER_15K, TimelineBand.STANDARD, 150, "medium"),
            (None, TimelineBand.STANDARD, 10_001, "medium"),
            (None, TimelineBand.STANDARD, 10_000, "normal"),
            (BudgetBand.UNDER_1K, TimelineBand.FLEXIBLE, 900, "normal"),
        ],
    )
    def test_rules(self, budget, timeline, total_max: int, expected: str) -> None:
        draft = OrderDraft(estimated_budget=budget, timeline=timeline)
        assert determine_priority(draft, TotalPrice(min=0, max=total_max)) == expected


# ─────────────────────────────── Endpoint ────────────────────────────────────


@pytest.mark.django_db
class TestOrderSubmitView:
    """Test the submission endpoint end to end."""

    def test_enterprise_consultation_is_high_priority(self, submit_order, order_payload) -> None:
        """An enterprise-budget consultation is saved with high priority and a 150/150 total."""
        response = submit_order(order_payload(estimatedBudget="enterprise"))

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert re.fullmatch(r"ORD-\d{13}-[A-Z0-9]{6}", data["orderId"])
        assert data["estimatedTotal"] == {"min": 150, "max": 150, "currency": "USD"}
        assert data["trackingUrl"] == f"/order/track/{data['orderId']}"
        assert data["message"] == (
            "Order submitted successfully. You will receive an invoice within 24-48 hours."
        )

        order = Order.objects.get(order_id=data["orderId"])
        assert order.priority == Order.Priority.HIGH
        assert (order.total_min, order.total_max) == (150, 150)
        assert order.order_data["projectDetails"]["title"] == "Token launch review"
        assert order.customer.email == "ada@example.com"
        assert order.customer.total_order_value == 150

    def test_side_effects_run(self, submit_order, order_payload) -> None:
        """Confirmation, management notification and invoice all go out."""
        data = submit_order(order_payload()).json()

        subjects = [m.subject for m in mail.outbox]
        assert any(s == f"Order {data['orderId']} received" for s in subjects)
        assert any(s.startswith("[Normal] New order") for s in subjects)
        assert any(s.startswith("Invoice VCC-") for s in subjects)

        order = Order.objects.get(order_id=data["orderId"])
        assert order.status == Order.Status.INVOICE_SENT
        assert order.invoice.total_amount == 150

    def test_failing_side_effect_does_not_fail_submission(self, submit_order, order_payload) -> None:
        with patch(
            "apps.orders.notifications.send_order_confirmation_email",
            side_effect=RuntimeError("smtp down"),
        ) as mock_send:
            response = submit_order(order_payload())

        assert response.status_code == 200
        assert mock_send.call_count == 4
        assert Order.objects.count() == 1

    def test_empty_selection_is_rejected(self, submit_order, order_payload) -> None:
        response = submit_order(order_payload(selectedServices=[]))

        assert response.status_code == 400
        data = response.json()
        assert data == {
            "success": False,
            "error": "Invalid order data",
            "details": ["At least one service must be selected"],
        }
        assert Customer.objects.count() == 0
        assert Order.objects.count() == 0
        assert mail.outbox == []

    def test_malformed_json_is_rejected(self, submit_order) -> None:
        response = submit_order("{not json")
        assert response.status_code == 400
        assert response.json()["error"] == "Invalid order data"
        assert Customer.objects.count() == 0

    def test_non_finite_price_is_rejected(self, submit_order, order_payload) -> None:
        payload = order_payload(
            selectedServices=[{"serviceId": "basic-consultation", "estimatedPrice": {"min": "HUGE", "max": 1}}],
        )
        body = json.dumps(payload).replace('"HUGE"', "1e400")
        response = submit_order(body)
        assert response.status_code == 400
        assert response.json() == {
            "success": False,
            "error": "Invalid order data",
            "details": ["selectedServices[0].estimatedPrice.min must be a finite number"],
        }
        assert Order.objects.count() == 0

    def test_deeply_nested_body_is_rejected(self, submit_order) -> None:
        response = submit_order("[" * 100000 + "]" * 100000)
        assert response.status_code == 400
        assert response.json()["error"] == "Invalid order data"

    def test_unexpected_parse_error_returns_json_500(self, submit_order, order_payload) -> None:
        with patch("apps.orders.views.OrderDraft.from_dict", side_effect=TypeError("boom")):
            response = submit_order(order_payload())
        assert response.status_code == 500
        assert response.json() == {"success": False, "error": "Failed to submit order", "message": "boom"}

    def test_wrong_shape_is_rejected(self, submit_order, order_payload) -> None:
        response = submit_order(order_payload(contactInfo="ada@example.com"))
        assert response.status_code == 400
        assert response.json()["details"] == ["contactInfo must be an object"]

    def test_overlong_name_is_rejected(self, submit_order, order_payload) -> None:
        payload = order_payload()
        payload["contactInfo"]["firstName"] = "A" * 200
        response = submit_order(payload)
        assert response.status_code == 400
        assert response.json()["details"] == ["First name must be at most 150 characters"]
        assert Customer.objects.count() == 0

    def test_unknown_service_is_rejected(
self, submit_order, order_payload) -> None:
        response = submit_order(order_payload(selectedServices=[{"serviceId": "ghost"}]))
        assert response.status_code == 400
        assert response.json()["details"] == ["Unknown service: ghost"]
        assert Order.objects.count() == 0

    def test_returning_customer_is_reused(self, submit_order, order_payload) -> None:
        """Same email (any case) maps to one customer whose total accumulates."""
        first = submit_order(order_payload())
        payload = order_payload()
        payload["contactInfo"]["email"] = "ADA@Example.com"
        payload["contactInfo"]["firstName"] = "Augusta"
        second = submit_order(payload)

        assert first.status_code == second.status_code == 200
        customer = Customer.objects.get()
        assert customer.orders.count() == 2
        assert customer.total_order_value == 300
        assert customer.first_name == "Ada"

    def test_database_error_returns_500_and_rolls_back(self, submit_order, order_payload) -> None:
        with patch.object(OrderTrackingEntry.objects, "create", side_effect=DatabaseError("disk full")):
            response = submit_order(order_payload())

        assert response.status_code == 500
        data = response.json()
        assert data["success"] is False
        assert data["error"] == "Failed to submit order"
        assert data["message"] == "disk full"
        assert Customer.objects.count() == 0
        assert Order.objects.count() == 0
        assert mail.outbox == []

    def test_tracking_entry_defaults_to_unknown_client(self, submit_order, order_payload) -> None:
        data = submit_order(order_payload(), REMOTE_ADDR="").json()

        entry = OrderTrackingEntry.objects.filter(order__order_id=data["orderId"]).first()
        assert entry.status == "submitted"
        assert entry.message == "Order submitted successfully"
        assert entry.author == "system"
        assert entry.metadata == {"ip": "unknown", "userAgent": "unknown"}

    def test_tracking_entry_records_forwarded_ip(self, submit_order, order_payload) -> None:
        data = submit_order(
            order_payload(),
            HTTP_X_FORWARDED_FOR="203.0.113.5, 10.0.0.1",
            HTTP_USER_AGENT="pytest-agent",
        ).json()

        entry = OrderTrackingEntry.objects.filter(order__order_id=data["orderId"]).first()
        assert entry.metadata == {"ip": "203.0.113.5", "userAgent": "pytest-agent"}


# ─────────────────────────────── Pipeline & store ────────────────────────────


@pytest.mark.django_db
class TestSubmissionPipeline:
    """Test the pipeline and store directly."""

    def test_invalid_draft_raises_without_side_effects(self, catalog: ServiceCatalog) -> None:
        runner = MagicMock(spec=TaskRunner)
        pipeline = OrderSubmissionPipeline(catalog, runner)

        with pytest.raises(OrderValidationError) as exc_info:
            async_to_sync(pipeline.submit)(OrderDraft())
        assert "Project title is required" in exc_info.value.details
        runner.enqueue.assert_not_called()

    def test_enqueues_three_side_effects(self, catalog: ServiceCatalog, order_payload) -> None:
        runner = MagicMock(spec=TaskRunner)
        pipeline = OrderSubmissionPipeline(catalog, runner)

        result = async_to_sync(pipeline.submit)(OrderDraft.from_dict(order_payload()))

        names = [c.args[0] for c in runner.enqueue.call_args_list]
        assert names == ["send_order_confirmation_email", "notify_management_team", "generate_invoice"]
        assert all(c.args[2] == result.order_id for c in runner.enqueue.call_args_list)
        assert runner.enqueue.call_args_list[2].kwargs["delay"] == 0

    def test_sequential_submissions_share_one_customer(self, catalog: ServiceCatalog, order_payload) -> None:
        pipeline = OrderSubmissionPipeline(catalog, MagicMock(spec=TaskRunner))
        draft = OrderDraft.from_dict(order_payload())

        first = async_to_sync(pipeline.submit)(draft)
        second = async_to_sync(pipeline.submit)(draft)

        assert first.order_id != second.order_id
        assert Customer.objects.count() == 1
        assert Customer.objects.get().total_order_value == 300
        assert Order.objects.count() == 2

    def test_duplicate_customer_email_rejected(self, order_payload) -> None:
        draft = OrderDraft.from_dict(order_payload())
        find_or_create_customer(draft.contact_info)
        with pytest.raises(IntegrityError):
            Customer.objects.create(email="ada@example.com", first_name="A", last_name="B")

    def test_order_id_collision_retries(self, order_payload) -> None:
        draft = OrderDraft.from_dict(order_payload())
        customer, _ = find_or_create_customer(draft.contact_info)
        ids = iter(["ORD-1-AAAAAA", "ORD-1-AAAAAA", "ORD-2-BBBBBB"])
        kwargs = {"customer": customer, "draft": draft, "total": TotalPrice(min=150, max=150), "priority": "normal"}

        first = create_order(generate_id=lambda: next(ids), **kwargs)
        second = create_order(generate_id=lambda: next(ids), **kwargs)

        assert first.order_id == "ORD-1-AAAAAA"
        assert second.order_id == "ORD-2-BBBBBB"

    def test_order_id_collision_gives_up(self, order_payload, settings) -> None:
        settings.ORDER_ID_MAX_ATTEMPTS = 2
        draft = OrderDraft.from_dict(order_payload())
        customer, _ = find_or_create_customer(draft.contact_info)
        kwargs = {"customer": customer, "draft": draft, "total": TotalPrice(min=150, max=150), "priority": "normal"}
        create_order(generate_id=lambda: "ORD-1-AAAAAA", **kwargs)

        with pytest.raises(PersistenceError):
            create_order(generate_id=lambda: "ORD-1-AAAAAA", **kwargs)
        assert Order.objects.count() == 1


# ─────────────────────────────── Concurrency ─────────────────────────────────


@pytest.mark.django_db(transaction=True)
class TestConcurrentSubmission:
    """Two submissions for a new email racing on separate connections."""

    def test_concurrent_submissions_create_one_customer(self, catalog: ServiceCatalog, order_payload) -> None:
        if connection.vendor == "sqlite":
            pytest.skip("SQLite locks the whole database for writers")

        draft = OrderDraft.from_dict(order_payload())
        barrier = threading.Barrier(2)

        def submit() -> Order:
            barrier.wait(timeout=10)
            try:
                return save_submitted_order(
                    draft=draft,
                    total=TotalPrice(min=150, max=150),
                    priority="normal",
                    generate_id=catalog.generate_order_id,
                )
            finally:
                connection.close()

        with ThreadPoolExecutor(max_workers=2) as pool:
            futures = [pool.submit(submit) for _ in range(2)]
            first, second = (future.result() for future in futures)

        assert first.order_id != second.order_id
        assert first.customer_id == second.customer_id
        assert Customer.objects.count() == 1
        assert Customer.objects.get().total_order_value == 300
        assert Order.objects.count() == 2
