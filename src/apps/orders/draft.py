"""Order draft: the in-progress order collected by the wizard.

The draft round-trips through the camelCase JSON accepted by
``POST /api/order/submit/``. ``OrderDraft.from_dict`` is the only way a request
body becomes a draft; it raises ``OrderParseError`` on a malformed shape.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .errors import OrderParseError


class SelectionPriority(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class CommunicationPreference(str, Enum):
    EMAIL = "email"
    TELEGRAM = "telegram"
    DISCORD = "discord"
    VIDEO_CALL = "video_call"


class BudgetBand(str, Enum):
    UNDER_1K = "under_1k"
    FROM_1K_TO_5K = "1k_5k"
    FROM_5K_TO_15K = "5k_15k"
    OVER_15K = "15k_plus"
    ENTERPRISE = "enterprise"


class TimelineBand(str, Enum):
    RUSH = "rush"
    STANDARD = "standard"
    FLEXIBLE = "flexible"
    LONG_TERM = "long_term"


@dataclass
class PriceSnapshot:
    """Price of a service captured when it was selected."""

    min: int
    max: int
    currency: str = "USD"

    def to_dict(self) -> dict:
        return {"min": self.min, "max": self.max, "currency": self.currency}


@dataclass
class SelectedService:
    """A reference to a catalog service plus order-specific attributes."""

    service_id: str
    priority: SelectionPriority = SelectionPriority.MEDIUM
    customizations: dict | None = None
    estimated_price: PriceSnapshot | None = None

    def to_dict(self) -> dict:
        data: dict[str, Any] = {"serviceId": self.service_id, "priority": self.priority.value}
        if self.customizations is not None:
            data["customizations"] = self.customizations
        if self.estimated_price is not None:
            data["estimatedPrice"] = self.estimated_price.to_dict()
        return data


@dataclass
class ProjectDetails:
    title: str = ""
    description: str = ""
    objectives: list[str] = field(default_factory=list)
    constraints: list[str] = field(default_factory=list)
    target_audience: str | None = None
    existing_assets: str | None = None

    def to_dict(self) -> dict:
        data: dict[str, Any] = {
            "title": self.title,
            "description": self.description,
            "objectives": list(self.objectives),
            "constraints": list(self.constraints),
        }
        if self.target_audience is not None:
            data["targetAudience"] = self.target_audience
        if self.existing_assets is not None:
            data["existingAssets"] = self.existing_assets
        return data


@dataclass
class CommunicationChannels:
    telegram: str | None = None
    discord: str | None = None
    linkedin: str | None = None

    def to_dict(self) -> dict:
        return {
            name: value
            for name, value in (("telegram", self.telegram), ("discord", self.discord), ("linkedin", self.linkedin))
            if value is not None
        }


@dataclass
class ContactInfo:
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    timezone: str = "UTC"
    company: str | None = None
    position: str | None = None
    preferred_contact_time: str | None = None
    communication_channels: CommunicationChannels = field(default_factory=CommunicationChannels)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def to_dict(self) -> dict:
        data: dict[str, Any] = {
            "firstName": self.first_name,
            "lastName": self.last_name,
            "email": self.email,
            "timezone": self.timezone,
            "communicationChannels": self.communication_channels.to_dict(),
        }
        if self.company is not None:
            data["company"] = self.company
        if self.position is not None:
            data["position"] = self.position
        if self.preferred_contact_time is not None:
            data["preferredContactTime"] = self.preferred_contact_time
        return data


@dataclass
class TechnicalInfo:
    has_existing_code: bool = False
    existing_code_url: str | None = None
    existing_code_description: str | None = None
    preferred_tech_stack: list[str] = field(default_factory=list)
    required_integrations: list[str] = field(default_factory=list)
    performance_requirements: str | None = None
    security_requirements: str | None = None
    scalability_needs: str | None = None

    def to_dict(self) -> dict:
        data: dict[str, Any] = {
            "hasExistingCode": self.has_existing_code,
            "preferredTechStack": list(self.preferred_tech_stack),
            "requiredIntegrations": list(self.required_integrations),
        }
        optional = (
            ("existingCodeUrl", self.existing_code_url),
            ("existingCodeDescription", self.existing_code_description),
            ("performanceRequirements", self.performance_requirements),
            ("securityRequirements", self.security_requirements),
            ("scalabilityNeeds", self.scalability_needs),
        )
        data.update({key: value for key, value in optional if value is not None})
        return data


@dataclass
class OrderDraft:
    """Mutable, client-owned order in progress. Has no identity until submitted."""

    selected_services: list[SelectedService] = field(default_factory=list)
    project_details: ProjectDetails = field(default_factory=ProjectDetails)
    contact_info: ContactInfo = field(default_factory=ContactInfo)
    technical_info: TechnicalInfo = field(default_factory=TechnicalInfo)
    additional_requirements: str | None = None
    agrees_to_terms: bool = False
    marketing_opt_in: bool = False
    preferred_communication: CommunicationPreference = CommunicationPreference.EMAIL
    estimated_budget: BudgetBand | None = None
    timeline: TimelineBand = TimelineBand.STANDARD

    def selected_ids(self) -> list[str]:
        return [selection.service_id for selection in self.selected_services]

    def to_dict(self) -> dict:
        """Serialize to the JSON shape of the submission endpoint."""
        data: dict[str, Any] = {
            "selectedServices": [s.to_dict() for s in self.selected_services],
            "projectDetails": self.project_details.to_dict(),
            "contactInfo": self.contact_info.to_dict(),
            "technicalInfo": self.technical_info.to_dict(),
            "agreesToTerms": self.agrees_to_terms,
            "marketingOptIn": self.marketing_opt_in,
            "preferredCommunication": self.preferred_communication.value,
            "timeline": self.timeline.value,
        }
        if self.additional_requirements is not None:
            data["additionalRequirements"] = self.additional_requirements
        if self.estimated_budget is not None:
            data["estimatedBudget"] = self.estimated_budget.value
        return data

    @classmethod
    def from_dict(cls, data: Any) -> "OrderDraft":
        """Parse a submission payload.

        Missing sections fall back to their empty defaults so that validation
        can report every missing field at once.

        Raises:
            OrderParseError: If the payload has the wrong shape.

        """
        data = _object(data, "order")
        project = _object(data.get("projectDetails", {}), "projectDetails")
        contact = _object(data.get("contactInfo", {}), "contactInfo")
        channels = _object(contact.get("communicationChannels", {}), "contactInfo.communicationChannels")
        technical = _object(data.get("technicalInfo", {}), "technicalInfo")

        budget = data.get("estimatedBudget")
        return cls(
            selected_services=[
                _selected_service(item, index)
                for index, item in enumerate(_list(data.get("selectedServices", []), "selectedServices"))
            ],
            project_details=ProjectDetails(
                title=_str(project.get("title", ""), "projectDetails.title"),
                description=_str(project.get("description", ""), "projectDetails.description"),
                objectives=_str_list(project.get("objectives", []), "projectDetails.objectives"),
                constraints=_str_list(project.get("constraints", []), "projectDetails.constraints"),
                target_audience=_optional_str(project.get("targetAudience"), "projectDetails.targetAudience"),
                existing_assets=_optional_str(project.get("existingAssets"), "projectDetails.existingAssets"),
            ),
            contact_info=ContactInfo(
                first_name=_str(contact.get("firstName", ""), "contactInfo.firstName"),
                last_name=_str(contact.get("lastName", ""), "contactInfo.lastName"),
                email=_str(contact.get("email", ""), "contactInfo.email").strip(),
                timezone=_str(contact.get("timezone", ""), "contactInfo.timezone"),
                company=_optional_str(contact.get("company"), "contactInfo.company"),
                position=_optional_str(contact.get("position"), "contactInfo.position"),
                preferred_contact_time=_optional_str(
                    contact.get("preferredContactTime"), "contactInfo.preferredContactTime"
                ),
                communication_channels=CommunicationChannels(
                    telegram=_optional_str(channels.get("telegram"), "communicationChannels.telegram"),
                    discord=_optional_str(channels.get("discord"), "communicationChannels.discord"),
                    linkedin=_optional_str(channels.get("linkedin"), "communicationChannels.linkedin"),
                ),
            ),
            technical_info=TechnicalInfo(
                has_existing_code=_bool(technical.get("hasExistingCode", False), "technicalInfo.hasExistingCode"),
                existing_code_url=_optional_str(technical.get("existingCodeUrl"), "technicalInfo.existingCodeUrl"),
                existing_code_description=_optional_str(
                    technical.get("existingCodeDescription"), "technicalInfo.existingCodeDescription"
                ),
                preferred_tech_stack=_str_list(
                    technical.get("preferredTechStack", []), "technicalInfo.preferredTechStack"
                ),
                required_integrations=_str_list(
                    technical.get("requiredIntegrations", []), "technicalInfo.requiredIntegrations"
                ),
                performance_requirements=_optional_str(
                    technical.get("performanceRequirements"), "technicalInfo.performanceRequirements"
                ),
                security_requirements=_optional_str(
                    technical.get("securityRequirements"), "technicalInfo.securityRequirements"
                ),
                scalability_needs=_optional_str(technical.get("scalabilityNeeds"), "technicalInfo.scalabilityNeeds"),
            ),
            additional_requirements=_optional_str(data.get("additionalRequirements"), "additionalRequirements"),
            agrees_to_terms=_bool(data.get("agreesToTerms", False), "agreesToTerms"),
            marketing_opt_in=_bool(data.get("marketingOptIn", False), "marketingOptIn"),
            preferred_communication=_choice(
                CommunicationPreference, data.get("preferredCommunication", "email"), "preferredCommunication"
            ),
            estimated_budget=None if budget in (None, "") else _choice(BudgetBand, budget, "estimatedBudget"),
            timeline=_choice(TimelineBand, data.get("timeline", "standard"), "timeline"),
        )


# ---------------------------------------------------------------------------
# Payload parsing helpers
# ---------------------------------------------------------------------------
def _object(value: Any, path: str) -> dict:
    if not isinstance(value, dict):
        raise OrderParseError(f"{path} must be an object")
    return value


def _list(value: Any, path: str) -> list:
    if not isinstance(value, list):
        raise OrderParseError(f"{path} must be an array")
    return value


def _str(value: Any, path: str) -> str:
    if not isinstance(value, str):
        raise OrderParseError(f"{path} must be a string")
    return value


def _optional_str(value: Any, path: str) -> str | None:
    if value is None:
        return None
    return _str(value, path)


def _str_list(value: Any, path: str) -> list[str]:
    return [_str(item, f"{path}[{i}]") for i, item in enumerate(_list(value, path))]


def _bool(value: Any, path: str) -> bool:
    if not isinstance(value, bool):
        raise OrderParseError(f"{path} must be a boolean")
    return value


def _number(value: Any, path: str) -> int:
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise OrderParseError(f"{path} must be a number")
    if isinstance(value, float) and not math.isfinite(value):
        raise OrderParseError(f"{path} must be a finite number")
    return int(value)


def _choice(enum_cls: type[Enum], value: Any, path: str):
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        raise OrderParseError(f"{path} must be one of: {allowed}") from None


def _selected_service(item: Any, index: int) -> SelectedService:
    path = f"selectedServices[{index}]"
    item = _object(item, path)
    service_id = _str(item.get("serviceId"), f"{path}.serviceId")
    customizations = item.get("customizations")
    if customizations is not None:
        customizations = _object(customizations, f"{path}.customizations")
    price = item.get("estimatedPrice")
    snapshot = None
    if price is not None:
        price = _object(price, f"{path}.estimatedPrice")
        snapshot = PriceSnapshot(
            min=_number(price.get("min", 0), f"{path}.estimatedPrice.min"),
            max=_number(price.get("max", 0), f"{path}.estimatedPrice.max"),
            currency=_str(price.get("currency", "USD"), f"{path}.estimatedPrice.currency"),
        )
    return SelectedService(
        service_id=service_id,
        priority=_choice(SelectionPriority, item.get("priority", "Medium"), f"{path}.priority"),
        customizations=customizations,
        estimated_price=snapshot,
    )
