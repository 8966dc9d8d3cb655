"""Special-event rule model.

Rules are data: id, display name, priority, a condition map, an effect map
and the narration text to display. Validation happens when a rule is
constructed, so a typo in a path or operator fails at import of the catalogue
rather than making the rule silently never fire.
"""

from typing import Any

from pydantic import BaseModel, Field, field_validator

from .conditions import PREDICATE_KEYS
from .effects import EFFECT_OPS
from .paths import validate_path


class EventRule(BaseModel):
    id: str
    name: str
    priority: int = 0
    conditions: dict[str, dict[str, Any]] = Field(default_factory=dict)
    effects: dict[str, Any] = Field(default_factory=dict)
    text: str = ""

    @field_validator("conditions")
    @classmethod
    def _check_conditions(cls, conditions: dict[str, dict[str, Any]]) -> dict[str, dict[str, Any]]:
        for path, spec in conditions.items():
            validate_path(path)
            if not spec:
                raise ValueError(f"Condition on {path!r} has no predicates")
            unknown = set(spec) - PREDICATE_KEYS
            if unknown:
                raise ValueError(f"Unknown predicate(s) {sorted(unknown)} on {path!r}")
            if "in" in spec and not isinstance(spec["in"], list):
                raise ValueError(f"'in' on {path!r} must be a list")
        return conditions

    @field_validator("effects")
    @classmethod
    def _check_effects(cls, effects: dict[str, Any]) -> dict[str, Any]:
        for path, spec in effects.items():
            validate_path(path)
            if isinstance(spec, dict):
                ops = [key for key in spec if key in EFFECT_OPS]
                if len(ops) != 1 or len(spec) != 1:
                    raise ValueError(
                        f"Effect on {path!r} must name exactly one of {list(EFFECT_OPS)}"
                    )
        return effects


def load_rules(data: list[dict[str, Any]]) -> list[EventRule]:
    """Validate raw rule dicts, rejecting duplicate ids."""
    rules = [EventRule.model_validate(item) for item in data]
    seen: set[str] = set()
    for rule in rules:
        if rule.id in seen:
            raise ValueError(f"Duplicate special event id {rule.id!r}")
        seen.add(rule.id)
    return rules
