"""Error Hierarchy — typed, categorized exceptions for every checkout failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Client input errors are 4xx; configuration/upstream errors are 5xx
    - FeatureDisabledError is the only 503: clients tell maintenance from hard failure
    - to_response() produces the flat {"error": ...} body the storefront script reads
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with StorefrontError base: FastAPI global handler catches all
    - Provider classification (type/code) is the only upstream detail ever exposed
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


GENERIC_CHECKOUT_FAILURE = "Failed to create Checkout Session."


class ErrorSeverity(str, Enum):
    """Error severity for observability."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    CLIENT_INPUT = "client_input"
    CONFIGURATION = "configuration"
    EXTERNAL_API = "external_api"
    UNAVAILABLE = "unavailable"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Context attached to an error for logging only, never serialized to clients."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    path: str | None = None
    sku_count: int | None = None
    debug_info: dict[str, Any] | None = None


class StorefrontError(Exception):
    """Base exception for all storefront errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to the JSON error body returned by the checkout endpoint."""
        return {"error": self.message}


# ─── Client Input Errors (400-level) ────────────────────────────

class ClientInputError(StorefrontError):
    """Request rejected because of what the client sent. Message is safe to show."""
    def __init__(
        self, message: str, code: str, http_status: int = 400,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, code, ErrorCategory.CLIENT_INPUT,
            ErrorSeverity.WARNING, context, http_status,
        )


class EmptyCartError(ClientInputError):
    """No purchasable items left after normalization."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__("Cart is empty.", "CART_EMPTY", 400, context)


class MethodNotAllowedError(ClientInputError):
    """Checkout endpoint called with anything but POST."""
    def __init__(self, method: str = "", context: ErrorContext | None = None):
        super().__init__("Method Not Allowed", "METHOD_NOT_ALLOWED", 405, context)
        self.method = method


# ─── Server-side Errors (500-level) ─────────────────────────────

class ConfigurationError(StorefrontError):
    """Deployment is misconfigured. Operator-facing, not the client's fault."""
    def __init__(
        self, message: str, code: str = "MISCONFIGURED",
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, code, ErrorCategory.CONFIGURATION,
            ErrorSeverity.CRITICAL, context, 500,
        )


class MissingCredentialError(ConfigurationError):
    """Payment provider secret key is not configured."""
    def __init__(self, setting: str = "STRIPE_SECRET_KEY", context: ErrorContext | None = None):
        super().__init__(
            f"Missing {setting} in environment variables.",
            "MISSING_CREDENTIAL", context,
        )
        self.setting = setting


class UnresolvableDomainError(ConfigurationError):
    """Neither DOMAIN nor the request headers yield an absolute base URL."""
    def __init__(self, candidate: str = "", context: ErrorContext | None = None):
        super().__init__(
            "Unable to determine the site domain. Set DOMAIN in environment variables.",
            "DOMAIN_UNRESOLVED", context,
        )
        self.candidate = candidate


class UpstreamError(StorefrontError):
    """A collaborator outside this process failed."""


class PaymentProviderError(UpstreamError):
    """Stripe call failed. Optional provider classification is passed through."""
    def __init__(
        self,
        detail: str,
        provider_type: str | None = None,
        provider_code: str | None = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            GENERIC_CHECKOUT_FAILURE, "PAYMENT_PROVIDER_ERROR",
            ErrorCategory.EXTERNAL_API, ErrorSeverity.CRITICAL, context, 500,
        )
        self.detail = detail
        self.provider_type = provider_type
        self.provider_code = provider_code

    def to_response(self) -> dict:
        body = super().to_response()
        if self.provider_type:
            body["type"] = self.provider_type
        if self.provider_code:
            body["code"] = self.provider_code
        return body


class FeatureDisabledError(StorefrontError):
    """Checkout kill-switch is off."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Checkout is temporarily disabled.", "CHECKOUT_DISABLED",
            ErrorCategory.UNAVAILABLE, ErrorSeverity.WARNING, context, 503,
        )


class CheckoutFailedError(StorefrontError):
    """Any other failure while creating a session (bad JSON, unexpected bug)."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            GENERIC_CHECKOUT_FAILURE, "CHECKOUT_FAILED",
            ErrorCategory.INTERNAL, ErrorSeverity.ERROR, context, 500,
        )
