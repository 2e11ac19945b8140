import re
from collections.abc import Sequence

from platter.config import settings

_SEPARATORS = re.compile(r"[,\n\r]+")
# Anything outside letters, digits, whitespace and a little punctuation.
_UNSAFE_CHARS = re.compile(r"[^\w\s\-&./()]")
_PROMPT_BREAKING = re.compile(r"[{}\"'`<>]")
# "my" is not filler: "my ex" and "my cat" reach the validator as written.
_FILLER_PREFIX = re.compile(r"^(?:a|an|some|the|fresh|organic|homemade)\s+")

MAX_PROMPT_INPUT_LENGTH = 500


def normalize_text(text: str) -> str:
    """Collapse runs of whitespace into single spaces."""
    return re.sub(r"\s+", " ", text).strip()


def strip_filler(token: str) -> str:
    """Remove leading filler words ("some fresh brie" -> "brie")."""
    previous = None
    while previous != token:
        previous = token
        token = _FILLER_PREFIX.sub("", token)
    return token


def normalize_token(piece: str) -> str:
    """Lowercase, strip unsafe characters and filler words, collapse whitespace."""
    token = _UNSAFE_CHARS.sub("", piece.lower())
    token = normalize_text(token)
    return normalize_text(strip_filler(token))


def parse_ingredients(
    raw: str | Sequence[str],
    limit: int | None = None,
) -> list[str]:
    """Split raw ingredient text into normalized, deduplicated tokens.

    Commas and newlines separate items. Tokens shorter than
    settings.min_token_length or longer than settings.max_token_length are
    dropped. First occurrence wins on duplicates, and at most `limit` tokens
    are returned (settings.max_items by default); the rest are dropped.
    """
    if limit is None:
        limit = settings.max_items

    if isinstance(raw, str):
        pieces = _SEPARATORS.split(raw)
    else:
        pieces = [p for item in raw for p in _SEPARATORS.split(item)]

    tokens: list[str] = []
    seen: set[str] = set()
    for piece in pieces:
        token = normalize_token(piece)
        if not settings.min_token_length <= len(token) <= settings.max_token_length:
            continue
        if token in seen:
            continue
        seen.add(token)
        tokens.append(token)
        if len(tokens) >= limit:
            break

    return tokens


def canonical_key(items: Sequence[str]) -> str:
    """Sorted, deduplicated, comma-joined form used for table lookups."""
    return ",".join(sorted(set(items)))


def sanitize_for_prompt(raw: str) -> str:
    """Make free text safe to embed in a generation prompt."""
    text = _PROMPT_BREAKING.sub("", raw)
    text = re.sub(r"\n", ", ", text)
    return normalize_text(text)[:MAX_PROMPT_INPUT_LENGTH]
