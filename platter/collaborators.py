"""Contracts for the external text, image and vision collaborators.

The core never calls these services itself (except the optional namer);
it only builds their inputs and parses or replaces their outputs.
"""

import html
import json
import math
import re
from typing import Literal

from pydantic import BaseModel, ValidationError, field_validator

from platter.config import settings
from platter.logger import logger

# ── Contracts ──────────────────────────────────────────────────────


class NamerRequest(BaseModel):
    ingredients: str


class NamerResponse(BaseModel):
    name: str
    validation: str
    tip: str
    wildcard: str | None = None


class SketchResponse(BaseModel):
    """Image reference, or a placeholder SVG when generation failed."""

    type: Literal["image", "svg"]
    image_url: str | None = None
    svg: str | None = None
    fallback: bool = False


class VibeCheckRequest(BaseModel):
    image: str  # URL or base64 data URI
    dinner_name: str | None = None
    ingredients: list[str] = []
    rules_applied: list[str] = []


class VibeCheckResponse(BaseModel):
    score: int
    rank: str = "Mystery Chef"
    compliment: str = "You tried and that counts!"
    sticker: str = ""
    improvement: str | None = None

    @field_validator("score", mode="before")
    @classmethod
    def clamp_score(cls, v):
        try:
            score = float(v)
        except (TypeError, ValueError):
            score = 0
        if math.isnan(score):
            score = 0
        return int(min(100, max(settings.min_vibe_score, score)))


# ── Response parsing ───────────────────────────────────────────────

_EMOJI = re.compile(
    "["
    "\U0001F300-\U0001F5FF"  # symbols and pictographs
    "\U0001F600-\U0001F64F"  # emoticons
    "\U0001F680-\U0001F6FF"  # transport and map
    "\U0001F1E0-\U0001F1FF"  # flags
    "\U0001F900-\U0001FAFF"
    "\u2600-\u27BF"  # misc symbols, dingbats
    "\uFE00-\uFE0F"  # variation selectors
    "\u231A-\u231B\u23E9-\u23F3\u23F8-\u23FA"
    "\u25AA-\u25AB\u25B6\u25C0\u25FB-\u25FE"
    "\u2934-\u2935\u2B05-\u2B07\u2B1B-\u2B1C\u2B50\u2B55"
    "\u3030\u303D\u3297\u3299\u200D\u20E3"
    "]"
)
_JSON_OBJECT = re.compile(r"\{.*\}", re.DOTALL)


def strip_emojis(text: str) -> str:
    return _EMOJI.sub("", text).strip()


def parse_json_response(text: str) -> dict | None:
    """Parse a JSON object from an LLM response.

    Strips markdown fences; if that still isn't valid JSON, falls back to
    the outermost {...} span. Returns None when nothing parses.
    """
    text = text.strip()
    if text.startswith("```"):
        text = re.sub(r"^```(?:json)?\n?", "", text)
        text = re.sub(r"\n?```$", "", text)
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        match = _JSON_OBJECT.search(text)
        if match is None:
            return None
        try:
            data = json.loads(match.group(0))
        except json.JSONDecodeError:
            return None
    return data if isinstance(data, dict) else None


def parse_namer_response(raw: str) -> NamerResponse | None:
    """Parse {name, validation, tip[, wildcard]}, or None if a field is missing."""
    data = parse_json_response(strip_emojis(raw))
    if data is None:
        return None
    if not all(data.get(field) for field in ("name", "validation", "tip")):
        return None

    wildcard = data.get("wildcard")
    return NamerResponse(
        name=strip_emojis(str(data["name"]))[:50],
        validation=strip_emojis(str(data["validation"]))[:150],
        tip=strip_emojis(str(data["tip"]))[:200],
        wildcard=strip_emojis(str(wildcard))[:100] if wildcard else None,
    )


def parse_vibe_response(raw: str) -> VibeCheckResponse | None:
    data = parse_json_response(raw)
    if data is None:
        return None
    fields = {k: data[k] for k in ("rank", "compliment", "sticker") if data.get(k)}
    try:
        return VibeCheckResponse(
            score=data.get("score", 0),
            improvement=str(data["improvement"]) if data.get("improvement") else None,
            **{k: str(v) for k, v in fields.items()},
        )
    except ValidationError as e:
        logger.warning(f"Unusable vibe check response: {e}")
        return None


# ── Placeholder sketch ─────────────────────────────────────────────

_CREAM = "#FAF9F7"
_MOCHA = "#A47864"
_CIRCLE_COLORS = ("#FF6F61", "#A78BFA", "#A47864", "#E8B4A0")

_SVG_TEMPLATE = """\
<svg viewBox="0 0 400 400" xmlns="http://www.w3.org/2000/svg">
  <rect width="400" height="400" fill="{cream}"/>
  <ellipse cx="205" cy="210" rx="130" ry="120" fill="{mocha}" opacity="0.1"/>
  <ellipse cx="200" cy="200" rx="130" ry="120" fill="white"/>
  <ellipse cx="200" cy="200" rx="130" ry="120" fill="none" stroke="{mocha}" stroke-width="2" opacity="0.4"/>
  <g>
    {circles}
  </g>
  <circle cx="200" cy="195" r="18" fill="{mocha}" opacity="0.6"/>
  <text x="200" y="340" text-anchor="middle" font-family="Georgia, serif" font-size="14" fill="{mocha}" font-style="italic">{title}</text>
  <text x="200" y="362" text-anchor="middle" font-family="system-ui, sans-serif" font-size="11" fill="#999">{items}</text>
</svg>"""


def fallback_svg(
    template: str,
    display_names: list[str],
    limit: int | None = None,
) -> str:
    """Deterministic placeholder plate: one circle and label per top item."""
    if limit is None:
        limit = settings.fallback_svg_items
    shown = display_names[:limit]

    circles = []
    for i in range(len(shown)):
        angle = math.radians(i * 90 + 45)
        x = 200 + 55 * math.cos(angle)
        y = 195 + 55 * math.sin(angle)
        color = _CIRCLE_COLORS[i % len(_CIRCLE_COLORS)]
        circles.append(
            f'<circle cx="{x:.1f}" cy="{y:.1f}" r="24" fill="{color}" opacity="0.75"/>'
        )

    return _SVG_TEMPLATE.format(
        cream=_CREAM,
        mocha=_MOCHA,
        circles="\n    ".join(circles),
        title=html.escape(template or "Your Spread"),
        items=html.escape(" • ".join(shown) or "your spread"),
    )


def fallback_sketch(template: str, display_names: list[str]) -> SketchResponse:
    return SketchResponse(type="svg", svg=fallback_svg(template, display_names), fallback=True)
