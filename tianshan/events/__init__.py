"""Special-event rule engine.

A rule is pure data (see rules.EventRule):

  id          unique; recorded in triggeredEvents once fired
  name        shown in the player-action line
  priority    higher is checked first
  conditions  {path: {min|max|equals|notEquals|in: ...}}, all must hold
  effects     {path: value | {add|set|multiply|push|remove|concat: ...}}
  text        <SLG_MODE> narration sent when the rule fires

Paths address the game state document ("currentWeek", "npcFavorability.C")
through the root registry in paths.py and are validated when a rule is
built. Arcs chain through currentSpecialEvent: step N+1 requires
currentSpecialEvent == step N.

Layers:
  paths.py       get/set/validate dotted state paths
  conditions.py  predicate evaluation
  effects.py     typed mutations, then range clamp
  registry.py    selection by priority and the trigger flow
  catalog.py     built-in story arcs
"""

from .catalog import SPECIAL_EVENTS  # noqa: F401
from .conditions import check_condition, check_event_conditions  # noqa: F401
from .effects import EFFECT_OPS, apply_effect, apply_event_effects  # noqa: F401
from .paths import (  # noqa: F401
    MISSING,
    STATE_ROOTS,
    InvalidPathError,
    get_value_by_path,
    set_value_by_path,
    validate_path,
)
from .registry import (  # noqa: F401
    EventRegistry,
    compose_trigger_message,
    get_triggered_events,
    mark_event_triggered,
    reset_event_trigger,
)
from .rules import EventRule, load_rules  # noqa: F401
