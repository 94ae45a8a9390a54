"""
Domain Exceptions.

Custom exceptions for domain-level errors.
These exceptions represent business rule violations and store failures
surfaced by the BOM core.
"""

from typing import Optional, Any, Dict


class DomainException(Exception):
    """Base exception for all domain errors."""

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.code = code or "DOMAIN_ERROR"
        self.details = details or {}


class EntityNotFoundException(DomainException):
    """Raised when an entity is not found."""

    def __init__(self, entity_type: str, entity_id: Any):
        super().__init__(
            message=f"{entity_type} with id '{entity_id}' not found",
            code="ENTITY_NOT_FOUND",
            details={"entity_type": entity_type, "entity_id": str(entity_id)}
        )


class ValidationException(DomainException):
    """Raised when validation fails."""

    def __init__(self, message: str, field: Optional[str] = None, value: Any = None):
        super().__init__(
            message=message,
            code="VALIDATION_ERROR",
            details={"field": field, "value": str(value) if value is not None else None}
        )


class StoreException(DomainException):
    """Raised when the backing store cannot complete an operation."""

    def __init__(self, operation: str, reason: str):
        super().__init__(
            message=f"Store failure during '{operation}': {reason}",
            code="STORE_ERROR",
            details={"operation": operation}
        )


class CircularReferenceException(DomainException):
    """Raised when a circular reference is detected in BOM structure."""

    def __init__(self, item_ids: list):
        super().__init__(
            message="Circular reference detected in BOM structure",
            code="CIRCULAR_REFERENCE",
            details={"item_ids": [str(id) for id in item_ids]}
        )


class BusinessRuleViolationException(DomainException):
    """Raised when a business rule is violated."""

    def __init__(self, rule: str, message: str):
        super().__init__(
            message=message,
            code="BUSINESS_RULE_VIOLATION",
            details={"rule": rule}
        )


class TreeLimitExceededException(BusinessRuleViolationException):
    """Raised when a subtree is deeper or larger than the configured guard."""

    def __init__(self, root_id: int, limit: str, value: int):
        super().__init__(
            rule="TREE_LIMIT_EXCEEDED",
            message=f"BOM below part '{root_id}' exceeds {limit}={value}"
        )
        self.code = "TREE_LIMIT_EXCEEDED"
        self.details.update({"root_id": str(root_id), "limit": limit, "value": value})
