import random
from itertools import combinations

from platter.config import settings
from platter.logger import logger
from platter.models import CombinationEntry, DinnerMatch
from platter.normalization import canonical_key, parse_ingredients
from platter.taxonomy import AFFIRMATIONS, load_combinations, pick_line
from platter.templates import select_template

DEFAULT_NAME = "The Spread"
DEFAULT_TIP = "The couch is the correct location."


def _match(
    entry: CombinationEntry,
    source: str,
    key: str,
    validation: str,
) -> DinnerMatch:
    logger.debug(f"[dinner] {source} match on '{key}' -> {entry.name}")
    return DinnerMatch(
        name=entry.name,
        tip=entry.tip,
        template=entry.template,
        validation=validation,
        source=source,
        key=key,
    )


def find_dinner(raw: str | list[str], rng: random.Random | None = None) -> DinnerMatch:
    """Look up a pre-written name and tip for an ingredient list.

    Lookup order (first hit wins):
    1. Exact canonical key
    2. Subsets of the sorted items, longest first
    3. Any curated key containing a single item as a substring
    4. Generic default, template picked by the selector

    Subset search only considers the first max_combination_items sorted
    items and subsets up to max_combination_length long.
    """
    table = load_combinations()
    items = sorted(set(parse_ingredients(raw)))[: settings.max_combination_items]
    key = canonical_key(items)
    validation = pick_line(AFFIRMATIONS, rng)

    if key in table:
        return _match(table[key], "exact", key, validation)

    max_len = min(len(items), settings.max_combination_length)
    for length in range(max_len, 0, -1):
        for combo in combinations(items, length):
            combo_key = ",".join(combo)
            if combo_key in table:
                return _match(table[combo_key], "subset", combo_key, validation)

    for item in items:
        for table_key, entry in table.items():
            if item in table_key:
                return _match(entry, "partial", table_key, validation)

    template = select_template(items).template if items else "casual"
    return DinnerMatch(
        name=DEFAULT_NAME,
        tip=DEFAULT_TIP,
        template=template,
        validation=validation,
        source="default",
    )
