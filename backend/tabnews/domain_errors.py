"""Domain-level exception primitives with stable machine-readable codes."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(eq=False)
class DomainError(Exception):
    """Use-case level error with stable code, HTTP mapping and a suggested action."""

    code: str
    http_status: int
    message: str
    details: dict[str, Any] | None = None
    action: str | None = None

    def __str__(self) -> str:
        return self.message


class NotFoundError(DomainError):
    """Requested record does not exist (or, for tokens, is no longer valid)."""

    def __init__(
        self,
        message: str,
        *,
        action: str | None = None,
        code: str = "NOT_FOUND",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(code=code, http_status=404, message=message, details=details, action=action)


class ForbiddenError(DomainError):
    """Caller or target lacks the capability the operation requires."""

    def __init__(
        self,
        message: str,
        *,
        action: str | None = None,
        code: str = "FORBIDDEN",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(code=code, http_status=403, message=message, details=details, action=action)


class EmailDeliveryError(DomainError):
    """Outbound email could not be handed to the mail server."""

    def __init__(
        self,
        message: str,
        *,
        action: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            code="EMAIL_DELIVERY_FAILED",
            http_status=503,
            message=message,
            details=details,
            action=action,
        )
