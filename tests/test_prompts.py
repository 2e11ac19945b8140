from types import SimpleNamespace

import pytest

from platter.classifier import classify_ingredients, summarize_ingredients
from platter.config import settings
from platter.prompts import build_image_prompt
from platter.rules import get_applicable_rules
from platter.templates import TEMPLATES, get_template


def _prompt(raw: str, template_id: str = "casual") -> str:
    classified = classify_ingredients(raw)
    rules = get_applicable_rules(summarize_ingredients(classified))
    return build_image_prompt(classified, get_template(template_id), rules)


class TestBuildImagePrompt:
    def test_contains_every_display_name(self):
        classified = classify_ingredients("brie, crackers, xyzzynotfood")
        prompt = build_image_prompt(classified, get_template("casual"))
        for c in classified:
            assert c.display_name in prompt

    def test_exact_count(self):
        assert "EXACTLY 3 food items" in _prompt("brie, crackers, grapes")

    def test_includes_layout_fragment(self):
        template = get_template("mediterranean")
        assert template.layout_prompt in _prompt("hummus, pita", "mediterranean")

    def test_includes_fired_rules(self):
        prompt = _prompt("hummus, pita")
        assert "Container Rule" in prompt
        assert "Plating notes:" in prompt

    def test_no_rules_no_notes(self):
        classified = classify_ingredients("xyzzynotfood")
        assert "Plating notes:" not in build_image_prompt(classified, get_template("minimalist"))

    def test_groups_by_role(self):
        prompt = _prompt("brie, crackers, grapes")
        assert "Anchors:" in prompt
        assert "Flow:" in prompt
        assert "Pops:" in prompt

    @pytest.mark.parametrize("template_id", sorted(TEMPLATES))
    def test_minimum_length(self, template_id):
        assert len(_prompt("brie", template_id)) >= settings.min_prompt_length

    def test_deterministic(self):
        assert _prompt("brie, crackers, grapes") == _prompt("brie, crackers, grapes")

    def test_short_prompt_padded_with_board_rules(self, monkeypatch):
        monkeypatch.setattr("platter.prompts.settings", SimpleNamespace(min_prompt_length=5000))
        template = get_template("minimalist")
        prompt = build_image_prompt(classify_ingredients("brie"), template)
        assert f"Board rules ({template.name}):" in prompt
        for line in template.rules:
            assert f"- {line}" in prompt

    def test_long_enough_prompt_not_padded(self):
        assert "Board rules" not in _prompt("brie, crackers, grapes")
