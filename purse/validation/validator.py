"""
Input Validation

DESIGN DECISION: The ledger core accepts whatever it is given. A budget
of -5 or a cycle day of 40 will not crash an aggregator; they just give
odd windows and zero percentages. Catching such values is the job of the
input layer, and this module is what it calls.

IMPORTANT: Validation NEVER silently fixes issues.
It reports them so the caller can ask the user again.
"""

from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from purse.config.ledger_config import GoalPriority
from purse.models.validation import ValidationIssue, ValidationResult


def _to_decimal(value: Any) -> Optional[Decimal]:
    """Parse a user-supplied number; None when it is not one."""
    if isinstance(value, bool):
        return None
    try:
        number = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return None
    return number


def _result(issues: list[ValidationIssue]) -> ValidationResult:
    return ValidationResult(
        is_valid=not any(issue.severity == "error" for issue in issues),
        issues=issues,
    )


class InputValidator:
    """Checks raw user input for the ledger and its configuration."""

    def _check_amount(self, field: str, value: Any) -> tuple[Optional[Decimal], list[ValidationIssue]]:
        number = _to_decimal(value)
        if number is None:
            return None, [ValidationIssue(
                field=field,
                issue_type="invalid_format",
                message=f"'{value}' is not a number",
                severity="error",
            )]
        if not number.is_finite():
            return None, [ValidationIssue(
                field=field,
                issue_type="invalid_value",
                message=f"{field} must be a finite number",
                severity="error",
            )]
        return number, []

    def validate_amount(self, amount: Any) -> ValidationResult:
        """Any finite number, either sign."""
        number, issues = self._check_amount("amount", amount)
        if number is not None and number == 0:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="zero_amount",
                message="Amount is zero; the transaction will not change the balance",
                severity="warning",
            ))
        return _result(issues)

    def validate_cycle_day(self, day: Any) -> ValidationResult:
        if isinstance(day, bool) or not isinstance(day, int):
            return _result([ValidationIssue(
                field="cycle_start_day",
                issue_type="invalid_format",
                message=f"'{day}' is not a whole number",
                severity="error",
            )])
        if not 1 <= day <= 31:
            return _result([ValidationIssue(
                field="cycle_start_day",
                issue_type="out_of_range",
                message="Cycle day must be between 1 and 31",
                severity="error",
            )])
        issues = []
        if day > 28:
            issues.append(ValidationIssue(
                field="cycle_start_day",
                issue_type="short_months",
                message=f"Day {day} does not exist in every month; those cycles start on the month's last day",
                severity="info",
            ))
        return _result(issues)

    def validate_category_budget(self, category: Any, amount: Any) -> ValidationResult:
        issues = []
        if not isinstance(category, str) or not category.strip():
            issues.append(ValidationIssue(
                field="category",
                issue_type="missing",
                message="Category name is required",
                severity="error",
            ))

        number, amount_issues = self._check_amount("monthly_budget", amount)
        issues.extend(amount_issues)
        if number is not None and number < 0:
            issues.append(ValidationIssue(
                field="monthly_budget",
                issue_type="out_of_range",
                message="Budget must not be negative",
                severity="error",
            ))
        return _result(issues)

    def validate_savings_goal(
        self,
        name: Any,
        target: Any,
        priority: Any = GoalPriority.MEDIUM.value,
    ) -> ValidationResult:
        issues = []
        if not isinstance(name, str) or not name.strip():
            issues.append(ValidationIssue(
                field="name",
                issue_type="missing",
                message="Goal name is required",
                severity="error",
            ))

        number, target_issues = self._check_amount("target", target)
        issues.extend(target_issues)
        if number is not None and number <= 0:
            issues.append(ValidationIssue(
                field="target",
                issue_type="out_of_range",
                message="Target must be a positive number",
                severity="error",
            ))

        allowed = {p.value for p in GoalPriority}
        if str(getattr(priority, "value", priority)) not in allowed:
            issues.append(ValidationIssue(
                field="priority",
                issue_type="invalid_value",
                message="Priority must be: low, medium, or high",
                severity="error",
            ))
        return _result(issues)

    def validate_savings_deposit(self, amount: Any) -> ValidationResult:
        number, issues = self._check_amount("amount", amount)
        if number is not None and number <= 0:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="out_of_range",
                message="Savings amount must be positive",
                severity="error",
                suggested_fix="Record withdrawals as a normal expense",
            ))
        return _result(issues)
