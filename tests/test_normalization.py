import pytest

from platter.config import settings
from platter.normalization import (
    MAX_PROMPT_INPUT_LENGTH,
    canonical_key,
    normalize_token,
    parse_ingredients,
    sanitize_for_prompt,
    strip_filler,
)


class TestParseIngredients:
    """Splitting, cleaning and capping raw ingredient text."""

    def test_splits_on_commas_and_newlines(self):
        assert parse_ingredients("brie, crackers\ngrapes\r\nsalami") == [
            "brie", "crackers", "grapes", "salami",
        ]

    def test_lowercases_and_collapses_whitespace(self):
        assert parse_ingredients("  Aged    GOUDA  ") == ["aged gouda"]

    def test_drops_short_and_empty_pieces(self):
        assert parse_ingredients("a, , br, ham,,") == ["ham"]

    def test_strips_filler_prefixes(self):
        assert parse_ingredients("some fresh brie, the organic grapes") == ["brie", "grapes"]

    def test_keeps_possessive_meaning(self):
        """'my' is not filler: 'my ex' must reach the validator intact."""
        assert parse_ingredients("my ex") == ["my ex"]

    def test_deduplicates_preserving_first_occurrence(self):
        assert parse_ingredients("grapes, brie, GRAPES, brie") == ["grapes", "brie"]

    def test_strips_markup_characters(self):
        assert parse_ingredients("<script>brie</script>") == ["scriptbrie/script"]
        assert parse_ingredients('brie"}, {crackers') == ["brie", "crackers"]

    def test_caps_item_count(self):
        raw = ", ".join(f"item{i}" for i in range(40))
        tokens = parse_ingredients(raw)
        assert len(tokens) == settings.max_items
        assert tokens[0] == "item0"

    def test_explicit_limit(self):
        assert parse_ingredients("brie, crackers, grapes", limit=2) == ["brie", "crackers"]

    def test_accepts_list_input(self):
        assert parse_ingredients(["Brie", "crackers, grapes"]) == ["brie", "crackers", "grapes"]

    def test_empty_input(self):
        assert parse_ingredients("") == []
        assert parse_ingredients("   ,  \n ") == []

    @pytest.mark.parametrize("raw", [
        "brie, crackers, grapes",
        "Some Fresh Brie,\n\nthe CRACKERS, grapes, grapes",
        "a, hummus , pita,olives, <b>feta</b>",
    ])
    def test_idempotent(self, raw):
        once = parse_ingredients(raw)
        assert parse_ingredients(", ".join(once)) == once

    def test_no_empty_or_duplicate_tokens(self):
        tokens = parse_ingredients("x, brie,, brie , , crackers, CRACKERS")
        assert all(tokens)
        assert len(tokens) == len(set(tokens))


class TestTokenHelpers:
    def test_strip_filler_repeats(self):
        assert strip_filler("some fresh organic brie") == "brie"

    def test_strip_filler_needs_trailing_word(self):
        assert strip_filler("the") == "the"

    def test_normalize_token(self):
        assert normalize_token("  Fresh   Cherry Tomatoes!! ") == "cherry tomatoes"

    def test_canonical_key_is_order_insensitive(self):
        assert canonical_key(["crackers", "brie"]) == canonical_key(["brie", "crackers", "brie"])
        assert canonical_key(["crackers", "brie"]) == "brie,crackers"


class TestSanitizeForPrompt:
    def test_removes_breaking_characters(self):
        assert sanitize_for_prompt('brie "wheel", {crackers} <b>') == "brie wheel, crackers b"

    def test_newlines_become_commas(self):
        assert sanitize_for_prompt("brie\ncrackers") == "brie, crackers"

    def test_truncates(self):
        assert len(sanitize_for_prompt("x" * 2000)) == MAX_PROMPT_INPUT_LENGTH
