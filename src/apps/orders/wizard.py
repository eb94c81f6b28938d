"""Multi-step order wizard.

The wizard owns one ``OrderDraft`` and walks it through a fixed sequence of
steps. Moving forward requires every earlier step to validate; moving back is
always allowed. ``submit`` hands the finished draft to a submitter (normally
:class:`apps.orders.client.HttpOrderSubmitter`).
"""

import dataclasses
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import IntEnum

from apps.catalog.domain import Service, TotalPrice
from apps.catalog.registry import ServiceCatalog, is_valid_email

from .draft import OrderDraft, PriceSnapshot, SelectedService, SelectionPriority
from .errors import StepLockedError, SubmissionFailedError, UnknownServiceError

logger = logging.getLogger(__name__)

Submitter = Callable[[dict], Awaitable[dict]]


class WizardStep(IntEnum):
    SERVICES = 0
    PROJECT = 1
    CONTACT = 2
    TECHNICAL = 3
    REVIEW = 4


@dataclass(frozen=True)
class FieldValidation:
    is_valid: bool
    message: str = ""


ValidationState = dict[str, FieldValidation]


def _check(state: ValidationState, name: str, ok: bool, message: str) -> None:
    state[name] = FieldValidation(is_valid=True) if ok else FieldValidation(is_valid=False, message=message)


class OrderWizard:
    """State machine over an order draft."""

    def __init__(self, catalog: ServiceCatalog) -> None:
        self._catalog = catalog
        self.draft = OrderDraft()
        self.step = WizardStep.SERVICES
        self.validation: ValidationState = {}
        self.is_open = False
        self.is_submitting = False

    # ------------------------------------------------------------------
    # Draft mutations
    # ------------------------------------------------------------------
    def select_service(self, service_id: str) -> bool:
        """Toggle *service_id* in the selection. Returns True if it is now selected.

        The selection is kept in catalog order, so deselecting and reselecting a
        service puts it back where it was with a fresh Medium-priority snapshot.

        Raises:
            UnknownServiceError: If the catalog does not know the service.

        """
        selections = self.draft.selected_services
        if any(s.service_id == service_id for s in selections):
            self.draft.selected_services = [s for s in selections if s.service_id != service_id]
            return False

        service = self._catalog.get_service_by_id(service_id)
        if service is None:
            raise UnknownServiceError(service_id)
        selection = SelectedService(
            service_id=service_id,
            priority=SelectionPriority.MEDIUM,
            estimated_price=PriceSnapshot(
                min=service.price_range.min,
                max=service.price_range.max,
                currency=service.price_range.currency,
            ),
        )
        position = {s.service_id: i for i, s in enumerate(self._catalog.services)}
        self.draft.selected_services = sorted(
            [*selections, selection],
            key=lambda s: position.get(s.service_id, len(position)),
        )
        return True

    def update(self, **changes) -> OrderDraft:
        """Replace top-level draft fields, e.g. ``update(contact_info=ContactInfo(...))``."""
        self.draft = dataclasses.replace(self.draft, **changes)
        return self.draft

    def reset(self) -> None:
        """Discard all progress and close the order form."""
        self.draft = OrderDraft()
        self.step = WizardStep.SERVICES
        self.validation = {}
        self.is_open = False

    def open(self) -> None:
        self.is_open = True
        self.step = WizardStep.SERVICES

    def close(self) -> None:
        self.is_open = False

    # ------------------------------------------------------------------
    # Validation & navigation
    # ------------------------------------------------------------------
    def validate_step(self, step: WizardStep | int) -> bool:
        """Recompute validation for the fields of *step* and return whether they pass."""
        step = WizardStep(step)
        draft = self.draft
        state: ValidationState = {}

        if step is WizardStep.SERVICES:
            _check(state, "selectedServices", bool(draft.selected_services), "Please select at least one service")
        elif step is WizardStep.PROJECT:
            project = draft.project_details
            _check(state, "projectTitle", bool(project.title.strip()), "Project title is required")
            _check(state, "projectDescription", bool(project.description.strip()), "Project description is required")
        elif step is WizardStep.CONTACT:
            contact = draft.contact_info
            _check(state, "firstName", bool(contact.first_name.strip()), "First name is required")
            _check(state, "lastName", bool(contact.last_name.strip()), "Last name is required")
            email = contact.email.strip()
            if not email:
                _check(state, "email", False, "Email is required")
            else:
                _check(state, "email", is_valid_email(email), "Please enter a valid email address")
            _check(state, "timezone", bool(contact.timezone.strip()), "Timezone is required")
        elif step is WizardStep.REVIEW:
            _check(state, "agreesToTerms", draft.agrees_to_terms, "You must agree to the terms and conditions")

        self.validation = state
        return all(entry.is_valid for entry in state.values())

    def go_to_step(self, step: WizardStep | int) -> WizardStep:
        """Move to *step*.

        Raises:
            StepLockedError: If a step before *step* does not validate.

        """
        step = WizardStep(step)
        if step > self.step:
            for earlier in WizardStep:
                if earlier >= step:
                    break
                if not self.validate_step(earlier):
                    raise StepLockedError(step, earlier, dict(self.validation))
        self.step = step
        return step

    def next_step(self) -> WizardStep:
        if self.step is WizardStep.REVIEW:
            return self.step
        return self.go_to_step(self.step + 1)

    def previous_step(self) -> WizardStep:
        if self.step is WizardStep.SERVICES:
            return self.step
        return self.go_to_step(self.step - 1)

    @property
    def progress(self) -> float:
        """Percentage of the wizard reached, counting the current step."""
        return (self.step + 1) / len(WizardStep) * 100

    # ------------------------------------------------------------------
    # Projections
    # ------------------------------------------------------------------
    def get_total_price(self) -> TotalPrice:
        return self._catalog.calculate_total_price(self.draft.selected_services)

    def get_selected_service_details(self) -> list[Service]:
        services = (self._catalog.get_service_by_id(s.service_id) for s in self.draft.selected_services)
        return [service for service in services if service is not None]

    # ------------------------------------------------------------------
    # Submission
    # ------------------------------------------------------------------
    async def submit(self, submitter: Submitter) -> dict:
        """Submit the draft. On success the wizard resets; on failure the draft is kept.

        Raises:
            StepLockedError: If any step does not validate.
            SubmissionFailedError: If the submitter fails.

        """
        for step in WizardStep:
            if not self.validate_step(step):
                raise StepLockedError(WizardStep.REVIEW, step, dict(self.validation))

        self.is_submitting = True
        try:
            result = await submitter(self.draft.to_dict())
        except SubmissionFailedError:
            logger.warning("Order submission rejected; keeping draft for retry")
            raise
        except Exception as exc:
            logger.exception("Order submission failed; keeping draft for retry")
            raise SubmissionFailedError(str(exc) or "Failed to submit order") from exc
        finally:
            self.is_submitting = False

        self.reset()
        return result
