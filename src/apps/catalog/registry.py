"""Service catalog: read-only query surface over services and categories."""

import re
import secrets
import string
import time
from collections.abc import Iterable
from typing import TYPE_CHECKING

from django.utils import formats, translation

from apps.core.errors import UnknownServiceError

from .domain import (
    DEFAULT_CURRENCY,
    DEFAULT_LOCALE,
    Complexity,
    PriceRange,
    Service,
    ServiceCategory,
    ServiceFilter,
    TotalPrice,
    ValidationResult,
)

if TYPE_CHECKING:
    from apps.orders.draft import OrderDraft, SelectedService

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

CURRENCY_SYMBOLS = {
    "USD": "$",
    "RUB": "₽",
}

_ORDER_ID_ALPHABET = string.ascii_uppercase + string.digits

# Column widths of the customer record the contact info is saved into.
FIRST_NAME_MAX_LENGTH = 150
LAST_NAME_MAX_LENGTH = 150
EMAIL_MAX_LENGTH = 254
TIMEZONE_MAX_LENGTH = 64
COMPANY_MAX_LENGTH = 255
POSITION_MAX_LENGTH = 255
CONTACT_TIME_MAX_LENGTH = 100


def is_valid_email(value: str) -> bool:
    """Simple shape check for an email address (not RFC compliance)."""
    return bool(EMAIL_PATTERN.match(value))


class ServiceCatalog:
    """Immutable registry of service categories and services.

    Build one at startup and pass it to whatever needs it.
    """

    def __init__(self, categories: Iterable[ServiceCategory], services: Iterable[Service]) -> None:
        services = tuple(services)
        ids = [service.service_id for service in services]
        if len(ids) != len(set(ids)):
            raise ValueError("Duplicate service ids in catalog")

        category_ids = set()
        owned = []
        for category in sorted(categories, key=lambda c: c.display_order):
            category_ids.add(category.category_id)
            members = tuple(
                sorted(
                    (s for s in services if s.category_id == category.category_id and s.is_active),
                    key=lambda s: s.metadata.display_order,
                )
            )
            owned.append(
                ServiceCategory(
                    category_id=category.category_id,
                    name=category.name,
                    description=category.description,
                    icon=category.icon,
                    display_order=category.display_order,
                    is_active=category.is_active,
                    services=members,
                )
            )

        orphans = [s.service_id for s in services if s.category_id not in category_ids]
        if orphans:
            raise ValueError(f"Services without a category: {', '.join(orphans)}")

        self._categories: tuple[ServiceCategory, ...] = tuple(owned)
        self._services: tuple[Service, ...] = services
        self._by_id: dict[str, Service] = {s.service_id: s for s in services}

    @property
    def categories(self) -> tuple[ServiceCategory, ...]:
        return self._categories

    @property
    def services(self) -> tuple[Service, ...]:
        return self._services

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------
    def get_categories(self) -> list[ServiceCategory]:
        """Return active categories in display order."""
        return [category for category in self._categories if category.is_active]

    def get_services_by_category(self, category_id: str) -> list[Service]:
        """Return active services belonging to *category_id*."""
        return [s for s in self._services if s.category_id == category_id and s.is_active]

    def get_service_by_id(self, service_id: str) -> Service | None:
        """Return the service, or None when it does not exist."""
        return self._by_id.get(service_id)

    def get_popular_services(self) -> list[Service]:
        return [s for s in self._services if s.is_popular and s.is_active]

    def get_services_by_complexity(self, complexity: Complexity | str) -> list[Service]:
        complexity = Complexity(complexity)
        return [s for s in self._services if s.complexity == complexity and s.is_active]

    # ------------------------------------------------------------------
    # Search & filtering
    # ------------------------------------------------------------------
    def search_services(self, query: str, locale: str = DEFAULT_LOCALE) -> list[Service]:
        """Case-insensitive substring search over name, short description and tags.

        An empty query matches nothing.
        """
        if not query:
            return []
        return [s for s in self._services if s.is_active and s.matches(query, locale)]

    def filter_services(self, criteria: ServiceFilter) -> list[Service]:
        """Return active services satisfying every constraint in *criteria*."""
        complexities = {Complexity(c) for c in criteria.complexity}
        results = []
        for service in self._services:
            if not service.is_active:
                continue
            if criteria.categories and service.category_id not in criteria.categories:
                continue
            if complexities and service.complexity not in complexities:
                continue
            if criteria.tags and not (service.tags & criteria.tags):
                continue
            if not service.price_range.overlaps(criteria.min_price, criteria.max_price):
                continue
            results.append(service)
        return results

    # ------------------------------------------------------------------
    # Pricing
    # ------------------------------------------------------------------
    def calculate_total_price(self, selections: "Iterable[SelectedService]") -> TotalPrice:
        """Sum the min and max prices of every selected service.

        Raises:
            UnknownServiceError: If a selection references an unknown service.

        """
        total_min = 0
        total_max = 0
        for selection in selections:
            service = self._by_id.get(selection.service_id)
            if service is None:
                raise UnknownServiceError(selection.service_id)
            total_min += service.price_range.min
            total_max += service.price_range.max
        return TotalPrice(min=total_min, max=total_max, currency=DEFAULT_CURRENCY)

    def format_price_range(self, price: PriceRange | TotalPrice, locale: str = DEFAULT_LOCALE) -> str:
        """Format a price range for display; a range with min == max shows one value."""
        low = _format_amount(price.min, price.currency, locale)
        if price.min == price.max:
            return low
        return f"{low} - {_format_amount(price.max, price.currency, locale)}"

    # ------------------------------------------------------------------
    # Orders
    # ------------------------------------------------------------------
    def validate_order_data(self, draft: "OrderDraft") -> ValidationResult:
        """Structural validation of a complete order. Never raises."""
        errors: list[str] = []

        if not draft.selected_services:
            errors.append("At least one service must be selected")

        project = draft.project_details
        if not project.title.strip():
            errors.append("Project title is required")
        if not project.description.strip():
            errors.append("Project description is required")

        contact = draft.contact_info
        if not contact.first_name.strip():
            errors.append("First name is required")
        if not contact.last_name.strip():
            errors.append("Last name is required")
        if not contact.email.strip():
            errors.append("Email is required")
        elif not is_valid_email(contact.email.strip()):
            errors.append("Please enter a valid email address")
        if not contact.timezone.strip():
            errors.append("Timezone is required")
        for label, value, limit in (
            ("First name", contact.first_name, FIRST_NAME_MAX_LENGTH),
            ("Last name", contact.last_name, LAST_NAME_MAX_LENGTH),
            ("Email", contact.email, EMAIL_MAX_LENGTH),
            ("Timezone", contact.timezone, TIMEZONE_MAX_LENGTH),
            ("Company", contact.company, COMPANY_MAX_LENGTH),
            ("Position", contact.position, POSITION_MAX_LENGTH),
            ("Preferred contact time", contact.preferred_contact_time, CONTACT_TIME_MAX_LENGTH),
        ):
            if value and len(value.strip()) > limit:
                errors.append(f"{label} must be at most {limit} characters")

        if not draft.agrees_to_terms:
            errors.append("You must agree to the terms and conditions")

        return ValidationResult(is_valid=not errors, errors=tuple(errors))

    @staticmethod
    def generate_order_id() -> str:
        """Return ``ORD-<epoch ms>-<6 random chars>``.

        Collisions are unlikely but possible; the order store enforces uniqueness.
        """
        suffix = "".join(secrets.choice(_ORDER_ID_ALPHABET) for _ in range(6))
        return f"ORD-{int(time.time() * 1000)}-{suffix}"


def _format_amount(amount: int, currency: str, locale: str) -> str:
    symbol = CURRENCY_SYMBOLS.get(currency, currency)
    with translation.override(locale):
        number = formats.number_format(amount, decimal_pos=0, use_l10n=True, force_grouping=True)
    if locale == "ru":
        return f"{number}\xa0{symbol}"
    return f"{symbol}{number}"


def build_default_catalog() -> ServiceCatalog:
    """Build the catalog from the bundled seed data."""
    from .data import CATEGORIES, SERVICES

    return ServiceCatalog(CATEGORIES, SERVICES)
