"""Order submission pipeline.

Validate the draft, price it, persist it in one transaction, then hand the
follow-up work (confirmation email, management notification, invoice) to the
task runner.
"""

import logging
from dataclasses import dataclass

from asgiref.sync import sync_to_async
from django.conf import settings
from django.db import DatabaseError

from apps.catalog.domain import TotalPrice
from apps.catalog.registry import ServiceCatalog

from . import invoices, notifications
from .draft import BudgetBand, OrderDraft, TimelineBand
from .errors import OrderValidationError, PersistenceError
from .models import Order
from .store import save_submitted_order
from .tasks import TaskRunner

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Order submitted successfully. You will receive an invoice within 24-48 hours."
MEDIUM_PRIORITY_THRESHOLD = 10_000


def determine_priority(draft: OrderDraft, total: TotalPrice) -> str:
    """Enterprise budgets and rush timelines are high; large orders are medium."""
    if draft.estimated_budget == BudgetBand.ENTERPRISE or draft.timeline == TimelineBand.RUSH:
        return Order.Priority.HIGH
    if total.max > MEDIUM_PRIORITY_THRESHOLD or draft.estimated_budget == BudgetBand.OVER_15K:
        return Order.Priority.MEDIUM
    return Order.Priority.NORMAL


@dataclass(frozen=True)
class SubmissionResult:
    order_id: str
    total: TotalPrice
    priority: str
    message: str = SUCCESS_MESSAGE

    @property
    def tracking_url(self) -> str:
        return f"/order/track/{self.order_id}"

    def to_dict(self) -> dict:
        return {
            "success": True,
            "orderId": self.order_id,
            "message": self.message,
            "estimatedTotal": self.total.to_dict(),
            "trackingUrl": self.tracking_url,
        }


class OrderSubmissionPipeline:
    """Turns an order draft into persisted records and queued side effects."""

    def __init__(self, catalog: ServiceCatalog, runner: TaskRunner) -> None:
        self.catalog = catalog
        self.runner = runner

    async def submit(
        self,
        draft: OrderDraft,
        *,
        ip_address: str = "unknown",
        user_agent: str = "unknown",
    ) -> SubmissionResult:
        """Submit *draft*.

        Raises:
            OrderValidationError: If the draft is incomplete. Nothing is written.
            UnknownServiceError: If a selection references an unknown service.
            PersistenceError: If the database write fails. Nothing is written.

        """
        validation = self.catalog.validate_order_data(draft)
        if not validation.is_valid:
            raise OrderValidationError(validation.errors)

        total = self.catalog.calculate_total_price(draft.selected_services)
        priority = determine_priority(draft, total)

        try:
            order = await sync_to_async(save_submitted_order)(
                draft=draft,
                total=total,
                priority=priority,
                generate_id=self.catalog.generate_order_id,
                ip_address=ip_address,
                user_agent=user_agent,
            )
        except DatabaseError as exc:
            logger.exception("Failed to persist order")
            raise PersistenceError(str(exc) or "Database error") from exc

        logger.info(
            "Order %s submitted (%s priority, %s %s-%s)",
            order.order_id,
            priority,
            total.currency,
            total.min,
            total.max,
        )

        await sync_to_async(self._dispatch_side_effects)(order.order_id)

        return SubmissionResult(order_id=order.order_id, total=total, priority=priority)

    def _dispatch_side_effects(self, order_id: str) -> None:
        self.runner.enqueue(
            "send_order_confirmation_email",
            notifications.send_order_confirmation_email,
            order_id,
        )
        self.runner.enqueue(
            "notify_management_team",
            notifications.notify_management_team,
            order_id,
        )
        self.runner.enqueue(
            "generate_invoice",
            invoices.generate_invoice,
            order_id,
            self.catalog,
            delay=getattr(settings, "INVOICE_GENERATION_DELAY", 5.0),
        )
