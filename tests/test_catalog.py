"""Tests for the service catalog and its HTTP endpoint."""

import dataclasses
import re

import pytest
from django.test import Client
from django.urls import reverse

from apps.catalog.domain import Complexity, PriceRange, ServiceFilter, TotalPrice
from apps.catalog.registry import ServiceCatalog, is_valid_email
from apps.core.errors import UnknownServiceError
from apps.orders.draft import ContactInfo, OrderDraft, ProjectDetails, SelectedService

# ─────────────────────────────── Lookup ──────────────────────────────────────


class TestCatalogLookup:
    """Test category and service lookups."""

    def test_categories_in_display_order(self, catalog: ServiceCatalog) -> None:
        """Categories come back sorted by display order."""
        ids = [c.category_id for c in catalog.get_categories()]
        assert ids == ["education", "development", "consulting", "content"]

    def test_categories_own_their_services(self, catalog: ServiceCatalog) -> None:
        """Each category lists exactly the services that reference it."""
        for category in catalog.categories:
            assert all(s.category_id == category.category_id for s in category.services)
        assert sum(len(c.services) for c in catalog.categories) == len(catalog.services)

    def test_inactive_services_are_not_listed_under_categories(self, catalog: ServiceCatalog) -> None:
        services = [
            dataclasses.replace(s, is_active=False) if s.service_id == "solidity-masterclass" else s
            for s in catalog.services
        ]
        rebuilt = ServiceCatalog(catalog.categories, services)

        education = next(c for c in rebuilt.get_categories() if c.category_id == "education")
        assert [s.service_id for s in education.services] == ["rust-blockchain-course"]
        assert "solidity-masterclass" not in str(education.to_dict())
        assert rebuilt.get_service_by_id("solidity-masterclass") is not None

    def test_services_by_category(
self, catalog: ServiceCatalog) -> None:
        ids = {s.service_id for s in catalog.get_services_by_category("education")}
        assert ids == {"rust-blockchain-course", "solidity-masterclass"}

    def test_services_by_unknown_category_is_empty(self, catalog: ServiceCatalog) -> None:
        assert catalog.get_services_by_category("nope") == []

    def test_service_by_id(self, catalog: ServiceCatalog) -> None:
        service = catalog.get_service_by_id("smart-contract-audit")
        assert service is not None
        assert service.price_range.min == 500
        assert service.price_range.max == 1500

    def test_unknown_service_by_id_returns_none(self, catalog: ServiceCatalog) -> None:
        """Lookups never raise for unknown ids."""
        assert catalog.get_service_by_id("does-not-exist") is None

    def test_popular_services(self, catalog: ServiceCatalog) -> None:
        ids = {s.service_id for s in catalog.get_popular_services()}
        assert ids == {"rust-blockchain-course", "defi-protocol-dev", "smart-contract-audit"}

    def test_services_by_complexity(self, catalog: ServiceCatalog) -> None:
        ids = {s.service_id for s in catalog.get_services_by_complexity(Complexity.ENTERPRISE)}
        assert ids == {"custom-blockchain-dev", "defi-protocol-dev"}

    def test_duplicate_service_ids_rejected(self, catalog: ServiceCatalog) -> None:
        services = catalog.services
        with pytest.raises(ValueError, match="Duplicate"):
            ServiceCatalog(catalog.categories, (*services, services[0]))

    def test_service_without_category_rejected(self, catalog: ServiceCatalog) -> None:
        categories = [c for c in catalog.categories if c.category_id != "content"]
        with pytest.raises(ValueError, match="technical-blog-writing"):
            ServiceCatalog(categories, catalog.services)


# ─────────────────────────────── Search & filter ─────────────────────────────


class TestCatalogSearch:
    """Test search and filtering."""

    def test_search_is_case_insensitive(self, catalog: ServiceCatalog) -> None:
        ids = {s.service_id for s in catalog.search_services("AUDIT")}
        assert ids == {"smart-contract-audit"}

    def test_search_matches_tags(self, catalog: ServiceCatalog) -> None:
        ids = {s.service_id for s in catalog.search_services("technology-selection")}
        assert ids == {"basic-consultation"}

    def test_search_in_russian(self, catalog: ServiceCatalog) -> None:
        ids = {s.service_id for s in catalog.search_services("курс rust", locale="ru")}
        assert ids == {"rust-blockchain-course"}

    def test_empty_search_returns_nothing(self, catalog: ServiceCatalog) -> None:
        assert catalog.search_services("") == []

    def test_filter_by_complexity_and_tag(self, catalog: ServiceCatalog) -> None:
        criteria = ServiceFilter(
            complexity=frozenset({Complexity.ADVANCED}),
            tags=frozenset({"smart-contracts"}),
        )
        ids = {s.service_id for s in catalog.filter_services(criteria)}
        assert ids == {"solidity-masterclass", "smart-contract-audit"}

    def test_filter_by_price_overlap(self, catalog: ServiceCatalog) -> None:
        """A service matches when its price range overlaps the requested one."""
        criteria = ServiceFilter(min_price=1000, max_price=2000)
        ids = {s.service_id for s in catalog.filter_services(criteria)}
        assert ids == {"rust-blockchain-course", "smart-contract-audit"}

    def test_empty_filter_returns_all_active(self, catalog: ServiceCatalog) -> None:
        assert len(catalog.filter_services(ServiceFilter())) == len(catalog.services)


# ─────────────────────────────── Pricing ─────────────────────────────────────


class TestPricing:
    """Test totals and formatting."""

    def test_total_price_sums_ranges(self, catalog: ServiceCatalog) -> None:
        selections = [
            SelectedService(service_id="rust-blockchain-course"),
            SelectedService(service_id="basic-consultation"),
        ]
        total = catalog.calculate_total_price(selections)
        assert total == TotalPrice(min=950, max=1350, currency="USD")

    def test_total_price_of_nothing_is_zero(self, catalog: ServiceCatalog) -> None:
        assert catalog.calculate_total_price([]) == TotalPrice(min=0, max=0)

    def test_total_price_unknown_service_raises(self, catalog: ServiceCatalog) -> None:
        with pytest.raises(UnknownServiceError) as exc_info:
            catalog.calculate_total_price([SelectedService(service_id="ghost")])
        assert exc_info.value.service_id == "ghost"
        assert exc_info.value.message == "Unknown service: ghost"

    def test_format_range_english(self, catalog: ServiceCatalog) -> None:
        assert catalog.format_price_range(PriceRange(min=800, max=1200)) == "$800 - $1,200"

    def test_format_single_value(self, catalog: ServiceCatalog) -> None:
        """Equal bounds collapse to a single value."""
        assert catalog.format_price_range(PriceRange(min=150, max=150)) == "$150"

    def test_format_range_russian(self, catalog: ServiceCatalog) -> None:
        formatted = catalog.format_price_range(PriceRange(min=800, max=1200), locale="ru")
        assert formatted == "800\xa0$ - 1\xa0200\xa0$"

    def test_price_range_rejects_inverted_bounds(self) -> None:
        with pytest.raises(ValueError):
            PriceRange(min=10, max=5)


# ─────────────────────────────── Validation ──────────────────────────────────


class TestValidateOrderData:
    """Test structural order validation."""

    def test_empty_draft_reports_every_problem(self, catalog: ServiceCatalog) -> None:
        result = catalog.validate_order_data(OrderDraft(contact_info=ContactInfo(timezone="")))
        assert not result.is_valid
        assert list(result.errors) == [
            "At least one service must be selected",
            "Project title is required",
            "Project description is required",
            "First name is required",
            "Last name is required",
            "Email is required",
            "Timezone is required",
            "You must agree to the terms and conditions",
        ]

    def test_invalid_email(self, catalog: ServiceCatalog) -> None:
        draft = OrderDraft(
            selected_services=[SelectedService(service_id="basic-consultation")],
            project_details=ProjectDetails(title="T", description="D"),
            contact_info=ContactInfo(first_name="A", last_name="B", email="not-an-email"),
            agrees_to_terms=True,
        )
        result = catalog.validate_order_data(draft)
        assert result.errors == ("Please enter a valid email address",)

    def test_whitespace_only_fields_are_missing(self, catalog: ServiceCatalog) -> None:
        draft = OrderDraft(
            selected_services=[SelectedService(service_id="basic-consultation")],
            project_details=ProjectDetails(title="   ", description="D"),
            contact_info=ContactInfo(first_name="A", last_name="B", email="a@b.co"),
            agrees_to_terms=True,
        )
        assert catalog.validate_order_data(draft).errors == ("Project title is required",)

    def test_overlong_contact_fields(self, catalog: ServiceCatalog) -> None:
        draft = OrderDraft(
            selected_services=[SelectedService(service_id="basic-consultation")],
            project_details=ProjectDetails(title="T", description="D"),
            contact_info=ContactInfo(
                first_name="A" * 151,
                last_name="B",
                email="a@b.co",
                timezone="Z" * 65,
                company="C" * 255,
            ),
            agrees_to_terms=True,
        )
        assert catalog.validate_order_data(draft).errors == (
            "First name must be at most 150 characters",
            "Timezone must be at most 64 characters",
        )

    def test_complete_draft_is_valid(
self, catalog: ServiceCatalog) -> None:
        draft = OrderDraft(
            selected_services=[SelectedService(service_id="basic-consultation")],
            project_details=ProjectDetails(title="T", description="D"),
            contact_info=ContactInfo(first_name="A", last_name="B", email="a@b.co"),
            agrees_to_terms=True,
        )
        result = catalog.validate_order_data(draft)
        assert result.is_valid
        assert result.errors == ()

    @pytest.mark.parametrize(
        ("value", "expected"),
        [("a@b.co", True), ("a.b@c.d.e", True), ("a@b", False), ("a b@c.d", False), ("@b.co", False)],
    )
    def test_email_shape(self, value: str, expected: bool) -> None:
        assert is_valid_email(value) is expected

    def test_order_id_format(self, catalog: ServiceCatalog) -> None:
        assert re.fullmatch(r"ORD-\d{13}-[A-Z0-9]{6}", catalog.generate_order_id())


# ─────────────────────────────── HTTP ────────────────────────────────────────


class TestServiceListView:
    """Test GET /api/services/."""

    def test_lists_everything(self, client: Client) -> None:
        response = client.get(reverse("catalog:services"))
        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["total"] == 7
        assert len(data["categories"]) == 4
        assert data["services"][0]["serviceId"]

    def test_category_takes_precedence(self, client: Client) -> None:
        response = client.get(reverse("catalog:services"), {"category": "consulting", "search": "rust"})
        data = response.json()
        assert data["category"] == "consulting"
        assert {s["serviceId"] for s in data["services"]} == {"basic-consultation", "smart-contract-audit"}

    def test_search(self, client: Client) -> None:
        data = client.get(reverse("catalog:services"), {"search": "solidity"}).json()
        assert [s["serviceId"] for s in data["services"]] == ["solidity-masterclass"]

    def test_popular(self, client: Client) -> None:
        data = client.get(reverse("catalog:services"), {"popular": "true"}).json()
        assert data["total"] == 3

    def test_price_filter(self, client: Client) -> None:
        data = client.get(reverse("catalog:services"), {"minPrice": "1000", "maxPrice": "2000"}).json()
        assert {s["serviceId"] for s in data["services"]} == {"rust-blockchain-course", "smart-contract-audit"}
        assert data["filters"]["priceRange"] == {"min": 1000, "max": 2000}

    def test_unknown_complexity_is_rejected(self, client: Client) -> None:
        response = client.get(reverse("catalog:services"), {"complexity": "Impossible"})
        assert response.status_code == 400
        assert response.json()["success"] is False
