"""Catalog domain types.

Services and categories are immutable reference data: they are built once at
process start and never mutated afterwards.
"""

from dataclasses import dataclass, field
from enum import Enum

DEFAULT_LOCALE = "en"
SUPPORTED_LOCALES = ("en", "ru")
DEFAULT_CURRENCY = "USD"


class Complexity(str, Enum):
    """Complexity tier of a service."""

    BASIC = "Basic"
    ADVANCED = "Advanced"
    ENTERPRISE = "Enterprise"


class SupportLevel(str, Enum):
    """Support level included with a service."""

    BASIC = "Basic"
    STANDARD = "Standard"
    PREMIUM = "Premium"


@dataclass(frozen=True)
class LocalizedText:
    """Text available in every supported locale."""

    en: str
    ru: str

    def get(self, locale: str = DEFAULT_LOCALE) -> str:
        """Return the text for *locale*, falling back to English."""
        if locale == "ru":
            return self.ru
        return self.en

    def to_dict(self) -> dict:
        return {"en": self.en, "ru": self.ru}


@dataclass(frozen=True)
class PriceRange:
    """Inclusive price range in a single currency."""

    min: int
    max: int
    currency: str = DEFAULT_CURRENCY
    note: LocalizedText | None = None

    def __post_init__(self) -> None:
        if self.min < 0 or self.max < 0:
            raise ValueError("Price cannot be negative")
        if self.min > self.max:
            raise ValueError("Price range minimum cannot exceed maximum")

    def overlaps(self, low: int, high: int) -> bool:
        """Overlap test against [low, high]; a bound of 0 is unbounded."""
        if low > 0 and self.max < low:
            return False
        if high > 0 and self.min > high:
            return False
        return True

    def to_dict(self) -> dict:
        data = {"min": self.min, "max": self.max, "currency": self.currency}
        if self.note is not None:
            data["note"] = self.note.to_dict()
        return data


@dataclass(frozen=True)
class ServiceMetadata:
    """Delivery metadata for a service."""

    estimated_delivery_days: int
    support_level: SupportLevel = SupportLevel.STANDARD
    team_size: str = ""
    requires_discovery: bool = False
    display_order: int = 0


@dataclass(frozen=True)
class Service:
    """An offerable unit of work."""

    service_id: str
    category_id: str
    name: LocalizedText
    short_description: LocalizedText
    full_description: LocalizedText
    timeline: str
    price_range: PriceRange
    complexity: Complexity
    features: tuple[str, ...] = ()
    deliverables: tuple[str, ...] = ()
    tags: frozenset[str] = frozenset()
    is_popular: bool = False
    is_customizable: bool = True
    is_active: bool = True
    metadata: ServiceMetadata = field(default_factory=lambda: ServiceMetadata(estimated_delivery_days=30))

    def matches(self, query: str, locale: str = DEFAULT_LOCALE) -> bool:
        """Case-insensitive substring match on name, short description and tags."""
        needle = query.lower()
        if not needle:
            return False
        return (
            needle in self.name.get(locale).lower()
            or needle in self.short_description.get(locale).lower()
            or any(needle in tag.lower() for tag in self.tags)
        )

    def to_dict(self) -> dict:
        """Serialize to the camelCase shape used by the HTTP API."""
        return {
            "serviceId": self.service_id,
            "categoryId": self.category_id,
            "name": self.name.to_dict(),
            "shortDescription": self.short_description.to_dict(),
            "fullDescription": self.full_description.to_dict(),
            "features": list(self.features),
            "deliverables": list(self.deliverables),
            "timeline": self.timeline,
            "priceRange": self.price_range.to_dict(),
            "complexity": self.complexity.value,
            "tags": sorted(self.tags),
            "isPopular": self.is_popular,
            "isCustomizable": self.is_customizable,
            "isActive": self.is_active,
            "metadata": {
                "estimatedDeliveryDays": self.metadata.estimated_delivery_days,
                "requiresDiscovery": self.metadata.requires_discovery,
                "teamSize": self.metadata.team_size,
                "supportLevel": self.metadata.support_level.value,
                "displayOrder": self.metadata.display_order,
            },
        }


@dataclass(frozen=True)
class ServiceCategory:
    """A grouping of services. A category owns its services."""

    category_id: str
    name: LocalizedText
    description: LocalizedText
    icon: str
    display_order: int
    is_active: bool = True
    services: tuple[Service, ...] = ()

    def to_dict(self) -> dict:
        return {
            "categoryId": self.category_id,
            "name": self.name.to_dict(),
            "description": self.description.to_dict(),
            "icon": self.icon,
            "displayOrder": self.display_order,
            "isActive": self.is_active,
            "services": [service.to_dict() for service in self.services],
        }


@dataclass(frozen=True)
class ServiceFilter:
    """Criteria for :meth:`ServiceCatalog.filter_services`.

    Empty collections do not constrain; a price bound of 0 is unbounded.
    """

    categories: frozenset[str] = frozenset()
    complexity: frozenset[Complexity] = frozenset()
    tags: frozenset[str] = frozenset()
    min_price: int = 0
    max_price: int = 0


@dataclass(frozen=True)
class TotalPrice:
    """Aggregated price of a selection."""

    min: int
    max: int
    currency: str = DEFAULT_CURRENCY

    def to_dict(self) -> dict:
        return {"min": self.min, "max": self.max, "currency": self.currency}


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of structural order validation."""

    is_valid: bool
    errors: tuple[str, ...] = ()
