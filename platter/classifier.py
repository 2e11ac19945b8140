from collections.abc import Sequence

from platter.config import settings
from platter.models import ClassifiedIngredient, IngredientSummary
from platter.normalization import normalize_token, parse_ingredients
from platter.taxonomy import UNKNOWN_ENTRY, load_taxonomy, load_term_index

WARM_COLORS = frozenset({"red", "orange", "yellow", "pink", "gold", "brown"})
COOL_COLORS = frozenset({"green", "blue", "purple"})


# ── String matching ────────────────────────────────────────────────


def edit_distance(a: str, b: str) -> int:
    """Levenshtein distance: insert, delete and substitute each cost 1."""
    if len(a) < len(b):
        a, b = b, a
    previous = list(range(len(b) + 1))
    for i, char_a in enumerate(a, start=1):
        current = [i]
        for j, char_b in enumerate(b, start=1):
            current.append(min(
                previous[j] + 1,
                current[j - 1] + 1,
                previous[j - 1] + (char_a != char_b),
            ))
        previous = current
    return previous[-1]


def fuzzy_match(token: str, target: str) -> bool:
    """Typo tolerance: small edit distance, never for very short tokens."""
    if len(token) < settings.fuzzy_min_length:
        return False
    # Lengths differing by more than the budget can't be within it.
    if abs(len(token) - len(target)) > settings.fuzzy_max_distance:
        return False
    return edit_distance(token, target) <= settings.fuzzy_max_distance


# ── Classification ─────────────────────────────────────────────────


def classify_ingredient(token: str) -> ClassifiedIngredient:
    """Bind one token to a taxonomy entry.

    Matching strategy (in order):
    1. Exact match against any name or synonym
    2. Role buckets in priority order (anchor, flow, pop, special); within a
       bucket the token matches a term if it contains it or is within the
       fuzzy edit budget. First hit wins.
    3. Unknown -- default filler entry, display name is the token itself
    """
    normalized = normalize_token(token)

    entry = load_term_index().get(normalized)
    if entry is not None:
        return ClassifiedIngredient(
            original=token,
            display_name=entry.display_name,
            entry=entry,
            found=True,
            matched=normalized,
            match_type="exact",
        )

    for entry in load_taxonomy():
        for term in entry.match_terms:
            if term in normalized:
                match_type = "substring"
            elif fuzzy_match(normalized, term):
                match_type = "fuzzy"
            else:
                continue
            return ClassifiedIngredient(
                original=token,
                display_name=entry.display_name,
                entry=entry,
                found=True,
                matched=term,
                match_type=match_type,
            )

    return ClassifiedIngredient(
        original=token,
        display_name=normalized or token,
        entry=UNKNOWN_ENTRY,
        found=False,
    )


def classify_ingredients(user_input: str | Sequence[str]) -> list[ClassifiedIngredient]:
    """Classify raw text (parsed first) or an already-parsed token list."""
    items = parse_ingredients(user_input) if isinstance(user_input, str) else list(user_input)
    return [classify_ingredient(item) for item in items]


# ── Summary ────────────────────────────────────────────────────────


def summarize_ingredients(classified: Sequence[ClassifiedIngredient]) -> IngredientSummary:
    """Aggregate counts per role and layout flags over a classified list."""
    entries = [c.entry for c in classified]
    roles = [e.role for e in entries]

    return IngredientSummary(
        total=len(entries),
        anchors=roles.count("anchor"),
        flow=roles.count("flow"),
        pops=roles.count("pop"),
        special=roles.count("special"),
        fillers=roles.count("filler"),
        small_round_count=sum(1 for e in entries if e.is_small_round),
        has_large=any(e.is_large for e in entries),
        has_small_round=any(e.is_small_round for e in entries),
        needs_container=any(e.needs_container for e in entries),
        has_spreadable=any(e.is_spreadable for e in entries),
        has_long_items=any(e.is_long for e in entries),
        has_warm_colors=any(e.color in WARM_COLORS for e in entries),
        has_cool_colors=any(e.color in COOL_COLORS for e in entries),
    )
