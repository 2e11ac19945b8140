from collections.abc import Callable
from dataclasses import dataclass

from platter.models import IngredientSummary


@dataclass(frozen=True)
class VisualRule:
    """A plating directive that fires when its predicate holds."""

    id: str
    name: str
    instruction: str
    predicate: Callable[[IngredientSummary], bool]
    applies_to: str = "all"

    def applies(self, summary: IngredientSummary) -> bool:
        return bool(self.predicate(summary))


# Definition order is output order.
VISUAL_RULES: tuple[VisualRule, ...] = (
    VisualRule(
        id="oddNumbers",
        name="Odd Number Cluster",
        instruction="Group small round items in odd numbers (3, 5, 7). Odd groupings look natural.",
        predicate=lambda s: s.small_round_count >= 3,
        applies_to="small_round",
    ),
    VisualRule(
        id="sCurve",
        name="The S-Curve",
        instruction="Lay long items in a gentle S-curve across the board to lead the eye.",
        predicate=lambda s: s.has_long_items,
        applies_to="long",
    ),
    VisualRule(
        id="fan",
        name="Fan Arrangement",
        instruction="Fan crackers and slices in overlapping arcs, like a hand of cards.",
        predicate=lambda s: s.flow > 0,
        applies_to="flow",
    ),
    VisualRule(
        id="container",
        name="Container Rule",
        instruction="Wet or rolling items go in small bowls so nothing bleeds into the crackers.",
        predicate=lambda s: s.needs_container,
        applies_to="container",
    ),
    VisualRule(
        id="colorBalance",
        name="Color Balance",
        instruction="Alternate warm and cool colors so no two similar colors sit side by side.",
        predicate=lambda s: s.has_warm_colors and s.has_cool_colors,
    ),
    VisualRule(
        id="anchorProminence",
        name="Anchor Prominence",
        instruction="Place the anchor first and off-center. Everything else is arranged around it.",
        predicate=lambda s: s.anchors > 0,
        applies_to="anchor",
    ),
    VisualRule(
        id="spreadStation",
        name="Spread Station",
        instruction="Put spreads next to the crackers with a small knife. Make the pairing obvious.",
        predicate=lambda s: s.has_spreadable and s.flow > 0,
        applies_to="spreadable",
    ),
    VisualRule(
        id="heroPlacement",
        name="Hero Placement",
        instruction="Give the largest item a third of the board and cut a wedge to invite the first bite.",
        predicate=lambda s: s.has_large,
        applies_to="large",
    ),
)

_RULES_BY_ID = {rule.id: rule for rule in VISUAL_RULES}


def get_applicable_rules(summary: IngredientSummary) -> list[VisualRule]:
    """All rules whose predicate holds, in definition order."""
    return [rule for rule in VISUAL_RULES if rule.applies(summary)]


def get_rule(rule_id: str) -> VisualRule | None:
    return _RULES_BY_ID.get(rule_id)
