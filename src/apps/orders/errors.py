"""Domain errors for the orders app.

Views map these to HTTP responses:

- ``OrderValidationError``, ``OrderParseError``, ``UnknownServiceError`` -> 400
- ``PersistenceError`` -> 500
- ``SideEffectError`` is logged by the task runner and never reaches a client
"""

from apps.core.errors import DomainError, ErrorCode, UnknownServiceError

__all__ = [
    "DomainError",
    "ErrorCode",
    "OrderParseError",
    "OrderValidationError",
    "PersistenceError",
    "SideEffectError",
    "StepLockedError",
    "SubmissionFailedError",
    "UnknownServiceError",
]


class OrderValidationError(DomainError):
    """Raised when order data fails validation. Nothing has been persisted."""

    def __init__(self, details: list[str] | tuple[str, ...]) -> None:
        super().__init__(
            code=ErrorCode.INVALID_ORDER_DATA,
            message="Invalid order data",
        )
        object.__setattr__(self, "details", list(details))


class OrderParseError(DomainError):
    """Raised when a request body does not have the order draft shape."""

    def __init__(self, reason: str) -> None:
        super().__init__(
            code=ErrorCode.MALFORMED_PAYLOAD,
            message=reason,
        )


class PersistenceError(DomainError):
    """Raised when the order store cannot be read or written."""

    def __init__(self, reason: str) -> None:
        super().__init__(
            code=ErrorCode.PERSISTENCE_FAILED,
            message=reason,
        )


class SideEffectError(DomainError):
    """Raised by a background side effect (email, notification, invoice)."""

    def __init__(self, task_name: str, reason: str) -> None:
        super().__init__(
            code=ErrorCode.SIDE_EFFECT_FAILED,
            message=f"{task_name} failed: {reason}",
        )
        object.__setattr__(self, "task_name", task_name)


class StepLockedError(DomainError):
    """Raised when the wizard is asked to move past a step that does not validate."""

    def __init__(self, requested_step, blocking_step, validation: dict) -> None:
        super().__init__(
            code=ErrorCode.STEP_LOCKED,
            message=f"Cannot open {requested_step.name}: {blocking_step.name} is incomplete",
        )
        object.__setattr__(self, "requested_step", requested_step)
        object.__setattr__(self, "blocking_step", blocking_step)
        object.__setattr__(self, "validation", validation)


class SubmissionFailedError(DomainError):
    """Raised when the submission endpoint rejects or cannot receive an order."""

    def __init__(self, reason: str, status: int | None = None, details: list[str] | None = None) -> None:
        super().__init__(
            code=ErrorCode.SUBMISSION_FAILED,
            message=reason,
        )
        object.__setattr__(self, "status", status)
        object.__setattr__(self, "details", details or [])
