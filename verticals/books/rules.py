"""Book payload rules — two explicit rule tables and the validate() gate.

The create table covers a full book including its isbn. The update table
covers the same fields minus isbn; because additional properties are
rejected, an update body that carries an isbn fails validation.

Tables are built from a ValidationConfig. CREATE_RULES / UPDATE_RULES are
the tables for the process config; an app created with its own config
builds its own with build_schemas().
"""

from dataclasses import dataclass, field
from typing import Any

from patterns.domain_config import ValidationConfig
from patterns.repository import INT_MAX
from patterns.rules_engine import FieldKind, FieldRule, evaluate_field_rules
from verticals.books.config import config

Schemas = dict[str, tuple[FieldRule, ...]]


# ---------------------------------------------------------------------------
# Rule tables
# ---------------------------------------------------------------------------

def build_update_rules(validation: ValidationConfig) -> tuple[FieldRule, ...]:
    return (
        FieldRule("amazon_url", FieldKind.STRING, min_length=1),
        FieldRule("author", FieldKind.STRING, min_length=1),
        FieldRule("language", FieldKind.STRING, min_length=1),
        FieldRule("pages", FieldKind.INTEGER, minimum=1, maximum=INT_MAX),
        FieldRule("publisher", FieldKind.STRING, min_length=1),
        FieldRule("title", FieldKind.STRING, min_length=1),
        FieldRule(
            "year",
            FieldKind.INTEGER,
            minimum=validation.min_year,
            maximum=validation.max_year,
        ),
    )


def build_create_rules(validation: ValidationConfig) -> tuple[FieldRule, ...]:
    return (
        FieldRule("isbn", FieldKind.STRING, min_length=1),
        *build_update_rules(validation),
    )


def build_schemas(validation: ValidationConfig) -> Schemas:
    return {
        "create": build_create_rules(validation),
        "update": build_update_rules(validation),
    }


SCHEMAS: Schemas = build_schemas(config.validation)
CREATE_RULES = SCHEMAS["create"]
UPDATE_RULES = SCHEMAS["update"]


# ---------------------------------------------------------------------------
# Validation gate
# ---------------------------------------------------------------------------

@dataclass
class ValidationResult:
    valid: bool
    errors: list[str] = field(default_factory=list)


def validate(payload: Any, schema_name: str, schemas: Schemas | None = None) -> ValidationResult:
    """Check a raw request body against the named rule table.

    Example::

        result = validate(body, "update", app.state.book_schemas)
        if not result.valid:
            raise ValidationError(result.errors)
    """
    try:
        rules = (schemas or SCHEMAS)[schema_name]
    except KeyError:
        raise ValueError(f"Unknown book schema: {schema_name!r}") from None

    outcome = evaluate_field_rules(payload, rules)
    return ValidationResult(valid=outcome.all_passed, errors=outcome.messages)
