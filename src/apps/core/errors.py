"""Domain error codes shared by the catalog and orders apps."""

from dataclasses import dataclass
from enum import Enum


class ErrorCode(Enum):
    """Domain error codes."""

    INVALID_ORDER_DATA = "INVALID_ORDER_DATA"
    MALFORMED_PAYLOAD = "MALFORMED_PAYLOAD"
    UNKNOWN_SERVICE = "UNKNOWN_SERVICE"
    PERSISTENCE_FAILED = "PERSISTENCE_FAILED"
    SIDE_EFFECT_FAILED = "SIDE_EFFECT_FAILED"
    STEP_LOCKED = "STEP_LOCKED"
    SUBMISSION_FAILED = "SUBMISSION_FAILED"


@dataclass(frozen=True)
class DomainError(Exception):
    """Base domain error with code and user-safe message."""

    code: ErrorCode
    message: str

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"


class UnknownServiceError(DomainError):
    """Raised when a selection references a service the catalog does not know."""

    def __init__(self, service_id: str) -> None:
        super().__init__(
            code=ErrorCode.UNKNOWN_SERVICE,
            message=f"Unknown service: {service_id}",
        )
        object.__setattr__(self, "service_id", service_id)
