"""Order API views: submission and public tracking."""

import logging

from django.http import HttpRequest, JsonResponse
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.csrf import csrf_exempt

from apps.catalog.apps import get_catalog
from apps.core.http import get_client_ip, get_user_agent, parse_json_body

from .apps import get_task_runner
from .draft import OrderDraft
from .errors import DomainError, OrderParseError, OrderValidationError, UnknownServiceError
from .models import Order
from .pipeline import OrderSubmissionPipeline

logger = logging.getLogger(__name__)


def _invalid(details: list[str]) -> JsonResponse:
    return JsonResponse(
        {"success": False, "error": "Invalid order data", "details": details},
        status=400,
    )


def _failed(message: str) -> JsonResponse:
    return JsonResponse(
        {"success": False, "error": "Failed to submit order", "message": message},
        status=500,
    )


@method_decorator(csrf_exempt, name="dispatch")
class OrderSubmitView(View):
    """API: Submit a completed order draft."""

    pipeline = None

    def setup(self, request, *args, **kwargs):
        super().setup(request, *args, **kwargs)
        if self.pipeline is None:
            self.pipeline = OrderSubmissionPipeline(get_catalog(), get_task_runner())

    async def post(self, request: HttpRequest) -> JsonResponse:
        """Validate, persist and acknowledge an order."""
        try:
            draft = OrderDraft.from_dict(parse_json_body(request))
        except ValueError as exc:
            return _invalid([str(exc)])
        except OrderParseError as exc:
            return _invalid([exc.message])
        except Exception as exc:
            logger.exception("Unexpected error parsing order")
            return _failed(str(exc) or "Unknown error")

        try:
            result = await self.pipeline.submit(
                draft,
                ip_address=get_client_ip(request),
                user_agent=get_user_agent(request),
            )
        except OrderValidationError as exc:
            return _invalid(exc.details)
        except UnknownServiceError as exc:
            return _invalid([exc.message])
        except DomainError as exc:
            logger.error("Order submission failed: %s", exc)
            return _failed(exc.message)
        except Exception as exc:
            logger.exception("Unexpected error submitting order")
            return _failed(str(exc) or "Unknown error")

        return JsonResponse(result.to_dict())


class OrderTrackView(View):
    """API: Public status page data for an order. No contact details."""

    catalog = None

    def setup(self, request, *args, **kwargs):
        super().setup(request, *args, **kwargs)
        if self.catalog is None:
            self.catalog = get_catalog()

    async def get(self, request: HttpRequest, order_id: str) -> JsonResponse:
        try:
            order = await Order.objects.aget(order_id=order_id)
        except Order.DoesNotExist:
            return JsonResponse({"success": False, "error": "Order not found"}, status=404)

        history = [
            {
                "status": entry.status,
                "message": entry.message,
                "author": entry.author,
                "timestamp": entry.timestamp.isoformat(),
            }
            async for entry in order.tracking_entries.order_by("timestamp", "pk")
        ]
        completion = order.estimated_completion(self.catalog)
        data = order.order_data

        return JsonResponse(
            {
                "success": True,
                "order": {
                    "orderId": order.order_id,
                    "status": order.status,
                    "priority": order.priority,
                    "calculatedTotal": {
                        "min": order.total_min,
                        "max": order.total_max,
                        "currency": order.currency,
                    },
                    "createdAt": order.created_at.isoformat(),
                    "updatedAt": order.updated_at.isoformat(),
                    "progress": order.progress,
                    "selectedServices": data.get("selectedServices", []),
                    "projectDetails": data.get("projectDetails", {}),
                },
                "trackingHistory": history,
                "estimatedCompletion": completion.isoformat() if completion else None,
            }
        )
