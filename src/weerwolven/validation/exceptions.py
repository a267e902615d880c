"""Validation exceptions."""

from .types import ValidationViolation


class ValidationError(Exception):
    """Raised when one or more validation violations are detected.

    Used for fail-fast behavior in tests. Production uses NoOpValidator
    which never raises.
    """

    def __init__(self, violations: list[ValidationViolation]):
        self.violations = violations
        super().__init__(f"Validation failed with {len(violations)} violation(s)")

    def __str__(self) -> str:
        if not self.violations:
            return "ValidationError(no violations)"
        lines = [f"ValidationError({len(self.violations)} violations):"]
        for v in self.violations:
            lines.append(f"  [{v.severity.value.upper()}] {v.rule_id}: {v.message}")
        return "\n".join(lines)
