"""Weerwolven validation module.

Runtime checks for game rules, composed by CollectingValidator.

Files:
- types.py: ValidationViolation, ValidationSeverity
- exceptions.py: ValidationError exception
- night_actions.py: R.1-R.2 night action checks
- state_consistency.py: S.1-S.3 death, clock and mayor checks
- victory.py: V.1-V.2 victory checks
"""

from .types import ValidationViolation, ValidationSeverity
from .exceptions import ValidationError
from .night_actions import validate_night_actions
from .state_consistency import validate_deaths, validate_phase_order, validate_mayor
from .victory import validate_victory

__all__ = [
    "ValidationViolation",
    "ValidationSeverity",
    "ValidationError",
    "validate_night_actions",
    "validate_deaths",
    "validate_phase_order",
    "validate_mayor",
    "validate_victory",
]
