"""Validation types shared across all validators."""

from enum import Enum
from typing import Optional
from pydantic import BaseModel


class ValidationSeverity(str, Enum):
    """Severity level of a validation violation."""

    ERROR = "error"
    WARNING = "warning"


class ValidationViolation(BaseModel):
    """A single rule violation detected during validation."""

    rule_id: str  # e.g., "R.1"
    category: str  # e.g., "Night Actions"
    message: str
    severity: ValidationSeverity = ValidationSeverity.ERROR
    context: Optional[dict] = None
