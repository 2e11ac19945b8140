import json

import pytest

from platter.models import PlatingRejection, PlatingResult
from platter.pipeline import (
    EMPTY_MESSAGE,
    PlatingPipeline,
    process_ingredients,
    process_with_template,
)
from platter.taxonomy import SNARK_BANK
from platter.templates import UnknownTemplateError


class TestProcessIngredients:
    """End-to-end outcomes as data records."""

    def test_complete_result(self, rng):
        result = process_ingredients("brie, crackers, grapes", rng)
        assert isinstance(result, PlatingResult)
        assert result.success is True
        assert result.type == "ok"
        assert result.items == ["brie", "crackers", "grapes"]
        assert len(result.classified) == 3
        assert result.summary.total == 3
        assert result.template == "minimalist"
        assert result.template_name == "The Minimalist"
        assert result.reason
        assert result.rules_applied
        assert len(result.prompt) > 200

    def test_empty(self):
        for raw in ("", "   ", ", ,", "a, b"):
            result = process_ingredients(raw)
            assert isinstance(result, PlatingRejection)
            assert result.type == "empty"
            assert result.message == EMPTY_MESSAGE

    def test_all_garbage(self, rng):
        result = process_ingredients("phone, keys", rng)
        assert result.success is False
        assert result.type == "all_garbage"
        assert result.message == SNARK_BANK["phone"]
        assert len(result.all_snarks) == 2

    def test_needs_clarification(self):
        result = process_ingredients("grass")
        assert result.success is False
        assert result.type == "needs_clarification"

    def test_mixed(self, rng):
        result = process_ingredients("brie, phone", rng)
        assert result.success is True
        assert result.type == "mixed"
        assert result.usable_items == ["brie"]
        assert result.rejected_items == ["phone"]
        assert "phone" in result.message
        assert result.template == "minimalist"

    def test_dangerous_with_food(self, rng):
        result = process_ingredients("brie, crackers, bleach", rng)
        assert result.type == "mixed"
        assert result.rejected[0].severity == "high"
        assert "bleach" not in result.items

    def test_ambiguous_reported_alongside_result(self):
        result = process_ingredients("brie, crackers, leaves")
        assert result.success is True
        assert [v.item for v in result.ambiguous] == ["leaves"]
        assert result.items == ["brie", "crackers"]

    def test_unknown_items_plated_with_warning(self):
        result = process_ingredients("brie, crackers, xyzzynotfood")
        assert "xyzzynotfood" in result.items
        assert [w.item for w in result.warnings] == ["xyzzynotfood"]

    def test_one_item_minimalist(self):
        result = process_ingredients("brie")
        assert result.template == "minimalist"
        assert result.styling["mood"] == "gallery-like"

    def test_mediterranean(self):
        assert process_ingredients("hummus, pita, olives").template == "mediterranean"

    def test_pizza_night(self):
        assert process_ingredients("pizza, grapes, crackers").template == "pizzaNight"

    def test_chaos_downsamples(self, chaos_13):
        result = process_ingredients(", ".join(chaos_13))
        assert result.template == "wildGraze"
        assert len(result.items) == 11
        assert result.overflow == ["honey", "baguette"]
        assert result.summary.total == 11
        assert f"EXACTLY {len(result.items)} food items" in result.prompt

    def test_bento(self, chaos_16):
        result = process_ingredients(", ".join(chaos_16))
        assert result.template == "bento"
        assert result.overflow

    def test_list_input(self):
        result = process_ingredients(["brie", "crackers"])
        assert len(result.classified) == 2
        assert result.input == ["brie", "crackers"]

    def test_seeded_runs_are_identical(self):
        import random

        first = process_ingredients("brie, fork", random.Random(11))
        second = process_ingredients("brie, fork", random.Random(11))
        assert first == second


class TestProcessWithTemplate:
    def test_forced_template(self):
        result = process_with_template("brie, crackers, grapes", "bento")
        assert result.template == "bento"
        assert result.reason.startswith("You chose: ")

    def test_unknown_template(self):
        with pytest.raises(UnknownTemplateError):
            process_with_template("brie", "nope")

    def test_rejections_still_apply(self):
        assert process_with_template("", "casual").type == "empty"
        assert process_with_template("phone", "casual").type == "all_garbage"


class TestPlatingPipeline:
    def test_query_log(self, rng):
        pipeline = PlatingPipeline(rng=rng)
        pipeline.process("brie, crackers")
        pipeline.process("phone")
        pipeline.process("hummus, pita, olives", template_id="casual")

        assert [e["type"] for e in pipeline.query_log] == ["ok", "all_garbage", "ok"]
        assert pipeline.query_log[0]["template"] == "minimalist"
        assert pipeline.query_log[2]["template"] == "casual"
        assert "message" in pipeline.query_log[1]

    def test_save_log(self, tmp_path, rng):
        pipeline = PlatingPipeline(rng=rng)
        pipeline.process("brie")
        path = tmp_path / "log.json"
        pipeline.save_log(path)
        data = json.loads(path.read_text())
        assert data[0]["input"] == "brie"
