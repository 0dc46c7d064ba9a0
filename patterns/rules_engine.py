"""Pure-function rules engine pattern.

Rules are stateless functions: (payload, rule) -> RuleResult.
No database, no side effects. This makes them:
- Trivially testable (pure input/output)
- Composable (chain multiple rule tables)
- Auditable (deterministic, one message per violation)

A rule table is an ordered tuple of FieldRule entries. Evaluating a table
against a JSON-like payload yields one RuleResult per check, in the order
the table declares them.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


# ---------------------------------------------------------------------------
# Result types
# ---------------------------------------------------------------------------

@dataclass
class RuleResult:
    """Outcome of a single rule evaluation."""

    passed: bool
    rule_name: str
    message: str
    details: dict[str, Any] = field(default_factory=dict)


@dataclass
class RuleSetResult:
    """Aggregate outcome of multiple rules."""

    all_passed: bool
    results: list[RuleResult]
    failed: list[RuleResult] = field(default_factory=list)

    def __post_init__(self):
        self.failed = [r for r in self.results if not r.passed]
        self.all_passed = len(self.failed) == 0

    @property
    def messages(self) -> list[str]:
        """Messages of the failed rules, in evaluation order."""
        return [r.message for r in self.failed]


# ---------------------------------------------------------------------------
# Field rules
# ---------------------------------------------------------------------------

class FieldKind(str, Enum):
    STRING = "string"
    INTEGER = "integer"


@dataclass(frozen=True)
class FieldRule:
    """Declarative constraints for one payload property.

    Example::

        FieldRule("pages", FieldKind.INTEGER, minimum=1)
    """

    name: str
    kind: FieldKind
    required: bool = True
    min_length: int | None = None
    minimum: int | None = None
    maximum: int | None = None


def _path(name: str) -> str:
    return f"instance.{name}"


def _is_integer(value: Any) -> bool:
    # bool is an int subclass; JSON true/false is never a whole number
    return isinstance(value, int) and not isinstance(value, bool)


def check_required(payload: dict, rule: FieldRule) -> RuleResult:
    present = rule.name in payload
    return RuleResult(
        passed=present or not rule.required,
        rule_name="required",
        message=(
            f'{_path(rule.name)} is present'
            if present
            else f'instance requires property "{rule.name}"'
        ),
        details={"field": rule.name},
    )


def check_type(value: Any, rule: FieldRule) -> RuleResult:
    if rule.kind is FieldKind.INTEGER:
        passed = _is_integer(value)
    else:
        passed = isinstance(value, str)

    return RuleResult(
        passed=passed,
        rule_name="type",
        message=(
            f"{_path(rule.name)} is of type {rule.kind.value}"
            if passed
            else f"{_path(rule.name)} is not of a type(s) {rule.kind.value}"
        ),
        details={"field": rule.name, "expected": rule.kind.value},
    )


def check_min_length(value: str, rule: FieldRule) -> RuleResult:
    length = len(value.strip())
    passed = length >= rule.min_length
    return RuleResult(
        passed=passed,
        rule_name="min_length",
        message=(
            f"{_path(rule.name)} has length {length}"
            if passed
            else f"{_path(rule.name)} does not meet minimum length of {rule.min_length}"
        ),
        details={"field": rule.name, "length": length},
    )


def check_minimum(value: int, rule: FieldRule) -> RuleResult:
    passed = value >= rule.minimum
    return RuleResult(
        passed=passed,
        rule_name="minimum",
        message=(
            f"{_path(rule.name)} is at least {rule.minimum}"
            if passed
            else f"{_path(rule.name)} must be greater than or equal to {rule.minimum}"
        ),
        details={"field": rule.name, "value": value, "minimum": rule.minimum},
    )


def check_maximum(value: int, rule: FieldRule) -> RuleResult:
    passed = value <= rule.maximum
    return RuleResult(
        passed=passed,
        rule_name="maximum",
        message=(
            f"{_path(rule.name)} is at most {rule.maximum}"
            if passed
            else f"{_path(rule.name)} must be less than or equal to {rule.maximum}"
        ),
        details={"field": rule.name, "value": value, "maximum": rule.maximum},
    )


def check_additional(name: str) -> RuleResult:
    return RuleResult(
        passed=False,
        rule_name="additional_properties",
        message=f'instance is not allowed to have the additional property "{name}"',
        details={"field": name},
    )


def check_object(payload: Any) -> RuleResult:
    passed = isinstance(payload, dict)
    return RuleResult(
        passed=passed,
        rule_name="type",
        message="instance is an object" if passed else "instance is not of a type(s) object",
    )


def evaluate_field_rule(payload: dict, rule: FieldRule) -> list[RuleResult]:
    """Run every check a single FieldRule declares.

    Checks stop at the first failure for the field: a missing value is not
    also reported as mistyped, and a mistyped value is not range-checked.
    """
    required = check_required(payload, rule)
    if rule.name not in payload:
        return [required]

    value = payload[rule.name]
    typed = check_type(value, rule)
    if not typed.passed:
        return [required, typed]

    results = [required, typed]
    if rule.min_length is not None:
        results.append(check_min_length(value, rule))
    if rule.minimum is not None:
        results.append(check_minimum(value, rule))
    if rule.maximum is not None:
        results.append(check_maximum(value, rule))
    return results


def evaluate_field_rules(
    payload: Any,
    rules: tuple[FieldRule, ...],
    allow_additional: bool = False,
) -> RuleSetResult:
    """Evaluate a rule table against a payload.

    Example::

        result = evaluate_field_rules(body, CREATE_RULES)
        if not result.all_passed:
            raise ValidationError(result.messages)
    """
    shape = check_object(payload)
    if not shape.passed:
        return RuleSetResult(all_passed=False, results=[shape])

    results = [shape]
    for rule in rules:
        results.extend(evaluate_field_rule(payload, rule))

    if not allow_additional:
        declared = {rule.name for rule in rules}
        results.extend(check_additional(name) for name in payload if name not in declared)

    return RuleSetResult(all_passed=True, results=results)


# ---------------------------------------------------------------------------
# Rule composition
# ---------------------------------------------------------------------------

def evaluate_rules(*rule_sets: RuleSetResult) -> RuleSetResult:
    """Compose multiple rule-set results into a single aggregate.

    Example::

        result = evaluate_rules(
            evaluate_field_rules(body, BOOK_RULES),
            evaluate_field_rules(body, EXTRA_RULES, allow_additional=True),
        )
    """
    return RuleSetResult(
        all_passed=all(rs.all_passed for rs in rule_sets),
        results=[r for rs in rule_sets for r in rs.results],
    )
