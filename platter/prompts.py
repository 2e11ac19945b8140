from collections.abc import Sequence

from platter.config import settings
from platter.logger import logger
from platter.models import ClassifiedIngredient, Template
from platter.rules import VisualRule

_ROLE_LABELS = {
    "anchor": "Anchors",
    "flow": "Flow",
    "pop": "Pops",
    "special": "Specials",
    "filler": "Extras",
}

_IMAGE_PROMPT_TEMPLATE = """\
Casual phone photo of late night snack, slightly messy, authentic millennial apartment vibes.

A mismatched plate or paper plate with EXACTLY {count} food items: {names}.
{groups}

{layout}

{notes}Setting: Cluttered coffee table or kitchen counter. Warm lamp lighting mixed with blue TV glow.
Style: Imperfect composition, slight motion blur okay, looks like it was taken at 11pm before eating. \
NOT Instagram perfect, more "sent this to my group chat" energy.

STRICT RULES:
- The plate must contain ONLY these {count} items: {names}
- Do NOT add any other food, garnishes, herbs, or extras
- NO humans, hands, people, or body parts in the image
- No text or watermarks
- NOT overly styled or curated, embrace the chaos"""


def _group_by_role(classified: Sequence[ClassifiedIngredient]) -> str:
    groups: dict[str, list[str]] = {}
    for c in classified:
        groups.setdefault(c.role, []).append(c.display_name)
    return "\n".join(
        f"{label}: {', '.join(groups[role])}"
        for role, label in _ROLE_LABELS.items()
        if role in groups
    )


def build_image_prompt(
    classified: Sequence[ClassifiedIngredient],
    template: Template,
    rules: Sequence[VisualRule] = (),
) -> str:
    """Assemble the image-generation prompt for a plated list.

    Deterministic: same inputs, same string. Every display name appears at
    least twice (item list and strict rules).
    """
    names = ", ".join(c.display_name for c in classified)
    notes = ""
    if rules:
        notes = "Plating notes:\n" + "\n".join(
            f"- {rule.name}: {rule.instruction}" for rule in rules
        ) + "\n\n"

    prompt = _IMAGE_PROMPT_TEMPLATE.format(
        count=len(classified),
        names=names,
        groups=_group_by_role(classified),
        layout=template.layout_prompt,
        notes=notes,
    )
    if len(prompt) < settings.min_prompt_length:
        board = "\n".join(f"- {line}" for line in template.rules) or f"- {template.description}"
        prompt += f"\n\nBoard rules ({template.name}):\n{board}"
    if len(prompt) < settings.min_prompt_length:
        logger.warning(
            f"[prompts] prompt for {template.id} is {len(prompt)} chars,"
            f" below {settings.min_prompt_length}"
        )
    return prompt
