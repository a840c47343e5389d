"""Error Hierarchy — typed, categorized exceptions for every identification failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Validation and domain-rule errors are 4xx and non-retryable
    - Repository and cache errors are 5xx and wrap the underlying IO failure
    - to_response() produces the REST envelope
    - Context carries the offending field, thresholds, and timestamps — enough to
      diagnose a rejection without inspecting service state

Design Decisions:
    - Single hierarchy with BeaconIdentityError base: FastAPI global handler catches all
    - DomainRuleViolation groups legitimate business rejections (confidence floor,
      duplicate window) apart from system faults
    - ErrorContext as dataclass: observability data without coupling to logging
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    CACHE = "cache"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Diagnostic context attached to every error."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    customer_id: str | None = None
    beacon_id: str | None = None
    debug_info: dict[str, Any] | None = None


class BeaconIdentityError(Exception):
    """Base exception for all beacon identity errors."""

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
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "customer_id": self.context.customer_id,
                    "beacon_id": self.context.beacon_id,
                    "details": self.context.debug_info,
                },
            }
        }


# ─── Input Errors (400-level) ───────────────────────────────────

class ValidationError(BeaconIdentityError):
    """A field failed a format, length, range, or membership check."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.field = field


# ─── Domain Rule Violations ─────────────────────────────────────

class DomainRuleViolation(BeaconIdentityError):
    """A well-formed request rejected by a business rule."""


class LowConfidenceError(DomainRuleViolation):
    """Identification confidence below the minimum threshold."""
    def __init__(
        self, confidence: float, threshold: float, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.debug_info = {"confidence": confidence, "threshold": threshold}
        super().__init__(
            f"Identification confidence {confidence:.4f} below minimum threshold of {threshold}",
            "LOW_CONFIDENCE", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.INFO, ctx, 422,
        )
        self.confidence = confidence
        self.threshold = threshold


class DuplicateIdentificationError(DomainRuleViolation):
    """Customer identified again inside the duplicate-suppression window."""
    def __init__(
        self,
        last_seen: datetime,
        detected_at: datetime,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.debug_info = {
            "last_seen": last_seen.isoformat(),
            "detected_at": detected_at.isoformat(),
        }
        super().__init__(
            f"Duplicate identification within 1 minute: "
            f"last seen {last_seen.isoformat()}, detected at {detected_at.isoformat()}",
            "DUPLICATE_IDENTIFICATION", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.INFO, ctx, 409,
        )
        self.last_seen = last_seen
        self.detected_at = detected_at


class BeaconNotActiveError(BeaconIdentityError):
    """Reading came from a beacon that is inactive or under maintenance."""
    def __init__(self, beacon_id: str, status: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.beacon_id = beacon_id
        ctx.debug_info = {"status": status}
        super().__init__(
            f"Beacon {beacon_id} is not active, current status: {status}",
            "BEACON_NOT_ACTIVE", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.WARNING, ctx, 409,
        )
        self.beacon_id = beacon_id
        self.status = status


class ResourceNotFoundError(BeaconIdentityError):
    """Requested resource does not exist."""
    def __init__(
        self, resource_type: str, resource_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, context, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class BeaconNotFoundError(ResourceNotFoundError):
    """No beacon registered under the reading's UUID."""
    def __init__(self, uuid: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.beacon_id = uuid
        super().__init__("Beacon", uuid, ctx)


# ─── Infrastructure Errors (500-level) ──────────────────────────

class RepositoryError(BeaconIdentityError):
    """Durable store operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Repository {operation} failed: {message}",
            "REPOSITORY_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation


class CacheError(BeaconIdentityError):
    """Identity cache operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Cache {operation} failed: {message}",
            "CACHE_ERROR", ErrorCategory.CACHE,
            ErrorSeverity.ERROR, context, 503,
        )
        self.operation = operation
