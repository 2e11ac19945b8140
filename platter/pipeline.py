import json
import random
from collections.abc import Callable, Sequence

from platter.classifier import summarize_ingredients
from platter.config import settings
from platter.logger import logger
from platter.models import (
    ClassifiedIngredient,
    PlatingRejection,
    PlatingResult,
    TemplateSelection,
)
from platter.normalization import parse_ingredients
from platter.prompts import build_image_prompt
from platter.rules import get_applicable_rules
from platter.templates import choose_template, get_template
from platter.validation import check_garbage, mixed_message, validate_ingredient_list

EMPTY_MESSAGE = "Give us something to work with! What's in your fridge?"

Selector = Callable[[list[str], list[ClassifiedIngredient]], TemplateSelection]


def _plate(
    user_input: str | list[str],
    selector: Selector,
    rng: random.Random | None,
) -> PlatingResult | PlatingRejection:
    """Parse -> validate -> classify -> select -> rules -> prompt."""
    items = parse_ingredients(user_input, limit=settings.max_intake_items)
    if not items:
        logger.info("[pipeline] empty input")
        return PlatingRejection(type="empty", input=user_input, message=EMPTY_MESSAGE)

    report = validate_ingredient_list(items, rng)
    rejection = check_garbage(report, user_input)
    if rejection is not None:
        logger.info(f"[pipeline] rejected: {rejection.type}")
        return rejection

    usable = report.usable_items
    classified = [v.classification for v in report.valid]
    selection = selector(usable, classified)
    logger.debug(f"[pipeline] {len(items)} parsed, {len(usable)} usable -> {selection.template}")

    shown = set(selection.primary)
    displayed = [c for item, c in zip(usable, classified) if item in shown]
    summary = summarize_ingredients(displayed)
    template = get_template(selection.template)
    rules = get_applicable_rules(summary)
    prompt = build_image_prompt(displayed, template, rules)

    is_mixed = bool(report.invalid or report.ambiguous)
    logger.info(
        f"[pipeline] {len(displayed)} items -> {template.id}"
        f" ({len(rules)} rules{', mixed' if is_mixed else ''})"
    )

    return PlatingResult(
        type="mixed" if is_mixed else "ok",
        input=user_input,
        items=[c.original for c in displayed],
        classified=displayed,
        summary=summary,
        template=template.id,
        template_name=template.name,
        reason=selection.reason,
        rules_applied=[rule.name for rule in rules],
        prompt=prompt,
        overflow=selection.overflow,
        styling=selection.styling,
        message=mixed_message(report) or selection.message,
        usable_items=usable,
        rejected_items=report.rejected_items,
        rejected=report.invalid,
        ambiguous=report.ambiguous,
        warnings=report.warnings,
    )


def process_ingredients(
    user_input: str | list[str],
    rng: random.Random | None = None,
) -> PlatingResult | PlatingRejection:
    """Run the full pipeline with automatic template selection.

    Rejections (empty, all garbage, needs clarification) come back as a
    PlatingRejection; a partially valid list plates the usable items and
    reports the rest.
    """
    return _plate(user_input, choose_template, rng)


def process_with_template(
    user_input: str | list[str],
    template_id: str,
    rng: random.Random | None = None,
) -> PlatingResult | PlatingRejection:
    """Same as process_ingredients, but with a user-chosen template.

    Raises UnknownTemplateError for an unknown id before any processing.
    """
    template = get_template(template_id)

    def _forced(items: list[str], _classified: Sequence[ClassifiedIngredient]) -> TemplateSelection:
        return TemplateSelection(
            template=template.id,
            reason=f"You chose: {template.description}",
            primary=items[: settings.max_items],
            overflow=items[settings.max_items:],
        )

    return _plate(user_input, _forced, rng)


class PlatingPipeline:
    """Stateful wrapper that keeps a log of every processed request."""

    def __init__(self, rng: random.Random | None = None):
        self.rng = rng
        self.query_log: list[dict] = []

    def process(
        self,
        user_input: str | list[str],
        template_id: str | None = None,
    ) -> PlatingResult | PlatingRejection:
        if template_id is None:
            result = process_ingredients(user_input, self.rng)
        else:
            result = process_with_template(user_input, template_id, self.rng)

        entry = {"input": user_input, "success": result.success, "type": result.type}
        if isinstance(result, PlatingResult):
            entry.update({
                "items": result.items,
                "template": result.template,
                "rules_applied": result.rules_applied,
                "rejected_items": result.rejected_items,
            })
        else:
            entry["message"] = result.message
        self.query_log.append(entry)
        return result

    def save_log(self, path=None):
        """Save the query log to a JSON file for debugging."""
        if path is None:
            settings.output_dir.mkdir(parents=True, exist_ok=True)
            path = settings.output_dir / "plating_log.json"
        with open(path, "w") as f:
            json.dump(self.query_log, f, indent=2, ensure_ascii=False)
        logger.info(f"  Plating log saved to: {path}")
