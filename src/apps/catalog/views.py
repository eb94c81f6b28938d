"""Catalog API views."""

import logging

from django.http import HttpRequest, JsonResponse
from django.views import View

from .apps import get_catalog
from .domain import SUPPORTED_LOCALES, Complexity, ServiceFilter

logger = logging.getLogger(__name__)


def _parse_price(value: str | None) -> int:
    if not value:
        return 0
    try:
        return max(int(value), 0)
    except ValueError:
        return 0


class ServiceListView(View):
    """API: Browse, search and filter the service catalog."""

    catalog = None

    def setup(self, request, *args, **kwargs):
        super().setup(request, *args, **kwargs)
        if self.catalog is None:
            self.catalog = get_catalog()

    def get(self, request: HttpRequest) -> JsonResponse:
        """Return services; category, search and popular take precedence over filters."""
        category = request.GET.get("category", "").strip()
        search = request.GET.get("search", "").strip()
        language = request.GET.get("language", "en")
        if language not in SUPPORTED_LOCALES:
            language = "en"
        popular = request.GET.get("popular") == "true"

        if category:
            services = self.catalog.get_services_by_category(category)
            return JsonResponse(
                {
                    "success": True,
                    "category": category,
                    "services": [s.to_dict() for s in services],
                    "total": len(services),
                }
            )

        if search:
            services = self.catalog.search_services(search, language)
            return JsonResponse(
                {
                    "success": True,
                    "search": search,
                    "services": [s.to_dict() for s in services],
                    "total": len(services),
                }
            )

        if popular:
            services = self.catalog.get_popular_services()
            return JsonResponse(
                {
                    "success": True,
                    "services": [s.to_dict() for s in services],
                    "total": len(services),
                }
            )

        complexity = request.GET.get("complexity", "").strip()
        if complexity and complexity not in {c.value for c in Complexity}:
            return JsonResponse(
                {"success": False, "error": f"Unknown complexity: {complexity}"},
                status=400,
            )
        tags = [t for t in request.GET.get("tags", "").split(",") if t]
        criteria = ServiceFilter(
            complexity=frozenset({Complexity(complexity)}) if complexity else frozenset(),
            tags=frozenset(tags),
            min_price=_parse_price(request.GET.get("minPrice")),
            max_price=_parse_price(request.GET.get("maxPrice")),
        )
        services = self.catalog.filter_services(criteria)

        return JsonResponse(
            {
                "success": True,
                "categories": [c.to_dict() for c in self.catalog.get_categories()],
                "services": [s.to_dict() for s in services],
                "total": len(services),
                "filters": {
                    "categories": [],
                    "complexity": [complexity] if complexity else [],
                    "priceRange": {"min": criteria.min_price, "max": criteria.max_price},
                    "tags": tags,
                },
            }
        )
