from platter.models import IngredientSummary
from platter.rules import VISUAL_RULES, get_applicable_rules, get_rule


def _names(summary):
    return [rule.name for rule in get_applicable_rules(summary)]


class TestVisualRules:
    """Rules are a pure function of the summary, in definition order."""

    def test_empty_summary_fires_nothing(self):
        assert get_applicable_rules(IngredientSummary(total=0)) == []

    def test_odd_number_cluster(self, summarize):
        assert "Odd Number Cluster" in _names(summarize("grapes", "olives", "blueberries"))
        assert "Odd Number Cluster" not in _names(summarize("grapes", "olives"))

    def test_color_balance(self, summarize):
        assert "Color Balance" in _names(summarize("salami", "olives"))
        assert "Color Balance" not in _names(summarize("grapes", "blueberries"))

    def test_container_and_spread_station(self, summarize):
        names = _names(summarize("hummus", "pita"))
        assert "Container Rule" in names
        assert "Spread Station" in names
        assert "Spread Station" not in _names(summarize("hummus"))

    def test_s_curve_and_fan(self, summarize):
        names = _names(summarize("crackers"))
        assert "The S-Curve" in names
        assert "Fan Arrangement" in names

    def test_anchor_and_hero(self, summarize):
        names = _names(summarize("brie"))
        assert "Anchor Prominence" in names
        assert "Hero Placement" in names

    def test_definition_order(self, summarize):
        summary = summarize("brie", "crackers", "grapes", "olives", "blueberries", "hummus", "salami")
        fired = get_applicable_rules(summary)
        order = [VISUAL_RULES.index(rule) for rule in fired]
        assert order == sorted(order)
        assert len(fired) == len(VISUAL_RULES)

    def test_deterministic(self, summarize):
        summary = summarize("brie", "crackers", "grapes")
        assert _names(summary) == _names(summary)
        assert _names(summary) == _names(summarize("brie", "crackers", "grapes"))

    def test_get_rule(self):
        assert get_rule("colorBalance").name == "Color Balance"
        assert get_rule("nope") is None
