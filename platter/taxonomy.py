import json
import random
import re

from collections.abc import Sequence
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path

from pydantic import ValidationError

from platter.config import settings
from platter.logger import logger
from platter.models import CombinationEntry, IngredientEntry

# Bucket scan order for classification. Earlier roles win ties.
ROLE_PRIORITY = ("anchor", "flow", "pop", "special")


class TaxonomyError(RuntimeError):
    """Reference data is missing or malformed. Raised at load time only."""


# ── Ingredient entries ─────────────────────────────────────────────


@lru_cache(maxsize=4)
def load_taxonomy(path: Path | None = None) -> tuple[IngredientEntry, ...]:
    """Load ingredients.json and return every entry in classification order.

    The file is nested role -> category -> list of entries; role and
    category are filled in from the nesting. Order of roles follows
    ROLE_PRIORITY regardless of key order in the file.
    """
    if path is None:
        path = settings.ingredients_path

    try:
        with open(path) as f:
            raw: dict = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise TaxonomyError(f"Cannot read ingredient taxonomy {path}: {e}") from e

    unknown_roles = set(raw) - set(ROLE_PRIORITY)
    if unknown_roles:
        raise TaxonomyError(f"Unknown roles in taxonomy: {sorted(unknown_roles)}")

    entries: list[IngredientEntry] = []
    seen_terms: dict[str, str] = {}

    for role in ROLE_PRIORITY:
        for category, items in raw.get(role, {}).items():
            for item in items:
                try:
                    entry = IngredientEntry(**item, role=role, category=category)
                except (TypeError, ValidationError) as e:
                    raise TaxonomyError(
                        f"Invalid taxonomy entry under {role}/{category}: {item!r}"
                    ) from e

                for term in entry.match_terms:
                    if term != term.lower().strip():
                        raise TaxonomyError(f"Match term must be lowercase: '{term}'")
                    if term in seen_terms:
                        raise TaxonomyError(
                            f"Duplicate match term '{term}' "
                            f"({seen_terms[term]} and {entry.name})"
                        )
                    seen_terms[term] = entry.name
                entries.append(entry)

    if not entries:
        raise TaxonomyError(f"Ingredient taxonomy {path} is empty")

    logger.debug(f"Loaded {len(entries)} taxonomy entries from {path}")
    return tuple(entries)


@lru_cache(maxsize=4)
def load_term_index(path: Path | None = None) -> dict[str, IngredientEntry]:
    """Return a lowercase match-term -> entry lookup (names and synonyms)."""
    return {
        term: entry
        for entry in load_taxonomy(path)
        for term in entry.match_terms
    }


def get_entry(name: str) -> IngredientEntry | None:
    """Look up an entry by name or synonym (case-insensitive)."""
    return load_term_index().get(name.lower().strip())


def ingredient_names() -> list[str]:
    """Return all canonical ingredient names in classification order."""
    return [entry.name for entry in load_taxonomy()]


UNKNOWN_ENTRY = IngredientEntry(
    name="unknown",
    display_name="Unknown",
    role="filler",
    category="unknown",
    color="neutral",
    plating_style="pile",
    pro_tip="Place where it fits",
)


# ── Curated combinations ───────────────────────────────────────────


@lru_cache(maxsize=4)
def load_combinations(path: Path | None = None) -> dict[str, CombinationEntry]:
    """Load combinations.json: canonical key -> pre-written name/tip/template.

    Keys must already be canonical (sorted, deduplicated, comma-joined),
    otherwise order-insensitive lookup would silently miss them.
    """
    if path is None:
        path = settings.combinations_path

    try:
        with open(path) as f:
            raw: dict[str, dict] = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise TaxonomyError(f"Cannot read combination table {path}: {e}") from e

    table: dict[str, CombinationEntry] = {}
    for key, value in raw.items():
        parts = key.split(",")
        if parts != sorted(set(parts)) or any(not p for p in parts):
            raise TaxonomyError(f"Combination key is not canonical: '{key}'")
        try:
            table[key] = CombinationEntry.model_validate(value)
        except ValidationError as e:
            raise TaxonomyError(f"Invalid combination entry '{key}'") from e

    logger.debug(f"Loaded {len(table)} curated combinations from {path}")
    return table


# ── Non-food detection ─────────────────────────────────────────────


@dataclass(frozen=True)
class NonFoodCategory:
    pattern: re.Pattern
    responses: tuple[str, ...]
    severity: str = "low"


# Evaluated in this order after the dangerous check.
NON_FOOD_PATTERNS: dict[str, NonFoodCategory] = {
    "objects": NonFoodCategory(
        pattern=re.compile(
            r"\b(keys?(?! lime)|phone|wallet|napkin|paper|plastic|brick|rock|stone|glass|plate|bowl"
            r"|fork|knife|spoon|cup|remote|charger|cable|shoe|sock|shirt|pants|hat|bag"
            r"|purse|book|pen|pencil|money|soap|shampoo|toothpaste)\b",
            re.IGNORECASE,
        ),
        responses=(
            "That's not food. That's clutter. Let's focus on edibles.",
            "We're flattered you think we can plate anything, but no.",
            "Unless you're making an art installation, let's stick to food.",
        ),
    ),
    "body_parts": NonFoodCategory(
        pattern=re.compile(
            r"\b(finger|hand|hair|nail|toe|ear|nose|eye|teeth?|blood|skin)\b",
            re.IGNORECASE,
        ),
        responses=(
            "We're making a snack, not a crime scene.",
            "That's... concerning. Let's stick to grocery items.",
        ),
    ),
    "abstract": NonFoodCategory(
        pattern=re.compile(
            r"\b(love|hate|vibes?|energy|thoughts?|prayers?|feelings?|dreams?|hope"
            r"|sadness|anger|chaos|nothing)\b",
            re.IGNORECASE,
        ),
        responses=(
            "We appreciate the energy, but we need actual food.",
            "Manifesting a snack? We still need ingredients.",
            "That's very philosophical, but also inedible.",
        ),
    ),
    "dangerous": NonFoodCategory(
        pattern=re.compile(
            r"\b(poison|bleach|cleaning|detergent|chemicals?|drugs?|medication|pills?"
            r"|tide pods?|gasoline|antifreeze|acetone|paint thinner|rat poison)\b",
            re.IGNORECASE,
        ),
        responses=(
            "That's not safe. Please don't put that on any plate.",
            "Absolutely not. That's a hazard, not an ingredient.",
        ),
        severity="high",
    ),
    "animals_live": NonFoodCategory(
        pattern=re.compile(
            r"\b(my (cat|dog|hamster|bird|fish|pet)|live (animal|bug|insect)s?)\b",
            re.IGNORECASE,
        ),
        responses=(
            "Pets are friends, not food.",
            "We don't do live ingredients here.",
        ),
    ),
    "materials": NonFoodCategory(
        pattern=re.compile(
            r"\b(wood|metal|cotton|leather|rubber|concrete|dirt|sand|mud|grass(?! jelly)|lawn)\b",
            re.IGNORECASE,
        ),
        responses=(
            "That's a building material, not a snack material.",
            "We work with food, not hardware store inventory.",
        ),
    ),
}

DANGEROUS_SUGGESTION = "Let's stick to things from the grocery store, okay?"


# ── Snark bank ─────────────────────────────────────────────────────

# One fixed line per key; underscores stand for spaces. A token containing
# a key is rejected, so plurals and compounds are caught.
SNARK_BANK: dict[str, str] = {
    "brick": "We admire the commitment to 'rustic,' but we need actual food.",
    "keys": "Those open doors, not appetites. What's actually in your fridge?",
    "phone": "The only thing your phone should be on is airplane mode while you eat.",
    "napkin": "That's... not an ingredient. That's evidence of eating.",
    "candle": "Ambiance is great, but we can't plate fire.",
    "car": "Unless your car runs on olive oil, it doesn't belong here.",
    "sock": "We've heard of 'comfort food' but this isn't what that means.",
    "water": "Hydration is important, but we're building boards, not pools.",
    "nothing": "Well, that's honest. But we need SOMETHING to work with.",
    "everything": "Everything bagel seasoning? Sure. Literally everything? Let's narrow it down.",
    "air": "Minimalism is chic, but even we need ingredients.",
    "tears": "Salty, but not the kind we work with.",
    "regret": "That's a breakfast emotion, not a dinner ingredient.",
    "hopes_and_dreams": "Those go great with disappointment dip. Kidding. Give us real food.",
    "my_ex": "Revenge is a dish best served cold, but not literally on this board.",
    "student_loans": "Can't eat those, but cheese does help with the pain.",
}

# Keys that would also hit real foods (carrots, sockeye, water crackers, key lime pie).
_SNARK_GUARDS: dict[str, str] = {
    "keys": r"\bkeys?\b(?! lime)",
    "car": r"\bcars?\b",
    "sock": r"\bsocks?\b",
    "water": r"\bwater\b(?! crackers?| chestnuts?)",
    "everything": r"\beverything\b(?! bagel| seasoning)",
    "air": r"\bair\b(?![ -]fried| popped)",
    "my_ex": r"\bmy ex\b",
}

SNARK_PATTERNS: dict[str, re.Pattern] = {
    key: re.compile(_SNARK_GUARDS.get(key, re.escape(key.replace("_", " "))))
    for key in SNARK_BANK
}


# ── Ambiguous items ────────────────────────────────────────────────


@dataclass(frozen=True)
class AmbiguousItem:
    clarification: str
    valid_forms: tuple[str, ...] = field(default_factory=tuple)


AMBIGUOUS_ITEMS: dict[str, AmbiguousItem] = {
    "grass": AmbiguousItem(
        clarification="Wheatgrass? Lemongrass? Or like... lawn grass? Be specific!",
        valid_forms=("wheatgrass", "lemongrass", "grass jelly"),
    ),
    "flowers": AmbiguousItem(
        clarification="Edible flowers are gorgeous! But if you mean backyard roses, that's risky.",
        valid_forms=("edible flowers", "nasturtium", "lavender", "rose petals", "chamomile"),
    ),
    "ice": AmbiguousItem(
        clarification="For drinks, sure. For a cheese board... that's unconventional.",
        valid_forms=("ice cream", "shaved ice"),
    ),
    "leaves": AmbiguousItem(
        clarification="Basil leaves? Mint leaves? Or random tree leaves?",
        valid_forms=("basil leaves", "mint leaves", "bay leaves", "grape leaves"),
    ),
}


# ── Validation affirmations ────────────────────────────────────────

AFFIRMATIONS: tuple[str, ...] = (
    "That's a real dinner. You're doing great.",
    "This is self-care. You earned this.",
    "The fridge provides. You listened.",
    "Dinner is whatever you say it is.",
    "You showed up for yourself today.",
    "No judgment here. Just vibes.",
)


def pick_line(lines: Sequence[str], rng: random.Random | None = None) -> str:
    """Choose one pre-written line. Pass a seeded rng for reproducible output."""
    if rng is None:
        rng = random.Random()
    return rng.choice(lines)
