import random
from collections.abc import Sequence

from platter.classifier import classify_ingredient
from platter.logger import logger
from platter.models import ItemWarning, PlatingRejection, ValidationReport, ValidationVerdict
from platter.normalization import normalize_token
from platter.taxonomy import (
    AMBIGUOUS_ITEMS,
    DANGEROUS_SUGGESTION,
    NON_FOOD_PATTERNS,
    SNARK_BANK,
    SNARK_PATTERNS,
    pick_line,
)

UNKNOWN_WARNING = "We don't recognize this, but we'll give it a shot!"
GARBAGE_SUGGESTION = "Try again with actual food items. We believe in you."
CLARIFY_SUGGESTION = "Tell us which one you mean and we'll plate it."


def validate_ingredient(
    token: str,
    rng: random.Random | None = None,
) -> ValidationVerdict:
    """Validate a single token.

    Checks, in order (first match wins):
    1. Dangerous substances -- always rejected, severity high
    2. Snark bank -- curated non-food nouns with one fixed line each
    3. Ambiguous words -- rejected pending clarification unless a valid
       specific form is already present
    4. General non-food pattern families -- random line from the family
    5. Everything else is accepted; unrecognized tokens carry a warning
    """
    normalized = normalize_token(token)

    # 1. Dangerous
    dangerous = NON_FOOD_PATTERNS["dangerous"]
    if dangerous.pattern.search(normalized):
        return ValidationVerdict(
            item=token,
            valid=False,
            severity="high",
            category="dangerous",
            reason="dangerous",
            snark=dangerous.responses[0],
            suggestion=DANGEROUS_SUGGESTION,
        )

    # 2. Snark bank
    for key, pattern in SNARK_PATTERNS.items():
        if pattern.search(normalized):
            return ValidationVerdict(
                item=token,
                valid=False,
                severity="low",
                category="non_food",
                reason="snark_bank",
                snark=SNARK_BANK[key],
            )

    # 3. Ambiguous
    words = set(normalized.split())
    for word, ambiguous in AMBIGUOUS_ITEMS.items():
        if word not in words:
            continue
        if not any(form in normalized for form in ambiguous.valid_forms):
            return ValidationVerdict(
                item=token,
                valid=False,
                severity="clarification",
                category="ambiguous",
                reason=word,
                snark=ambiguous.clarification,
                valid_forms=list(ambiguous.valid_forms),
            )

    # 4. Non-food pattern families
    for family, non_food in NON_FOOD_PATTERNS.items():
        if non_food.pattern.search(normalized):
            return ValidationVerdict(
                item=token,
                valid=False,
                severity=non_food.severity,
                category="dangerous" if family == "dangerous" else "non_food",
                reason=family,
                snark=pick_line(non_food.responses, rng),
            )

    # 5. Food, recognized or not
    classification = classify_ingredient(normalized)
    if classification.found:
        return ValidationVerdict(item=token, valid=True, classification=classification)

    return ValidationVerdict(
        item=token,
        valid=True,
        category="unknown",
        warning=UNKNOWN_WARNING,
        classification=classification,
    )


def validate_ingredient_list(
    items: Sequence[str],
    rng: random.Random | None = None,
) -> ValidationReport:
    """Validate every token and partition the verdicts."""
    report = ValidationReport()

    for item in items:
        verdict = validate_ingredient(item, rng)
        if verdict.valid:
            report.valid.append(verdict)
            if verdict.warning:
                report.warnings.append(ItemWarning(item=item, warning=verdict.warning))
        elif verdict.severity == "clarification":
            report.ambiguous.append(verdict)
        else:
            report.invalid.append(verdict)

    _log_validation_summary(report)
    return report


def check_garbage(
    report: ValidationReport,
    user_input: str | list[str],
) -> PlatingRejection | None:
    """Return a terminal rejection when nothing in the report is usable."""
    if report.valid:
        return None

    if report.invalid:
        snarks = [v.snark for v in report.invalid if v.snark]
        return PlatingRejection(
            type="all_garbage",
            input=user_input,
            message=snarks[0],
            all_snarks=snarks,
            suggestion=GARBAGE_SUGGESTION,
            rejected=report.invalid,
            ambiguous=report.ambiguous,
        )

    if report.ambiguous:
        return PlatingRejection(
            type="needs_clarification",
            input=user_input,
            message=report.ambiguous[0].snark,
            all_snarks=[v.snark for v in report.ambiguous if v.snark],
            suggestion=CLARIFY_SUGGESTION,
            ambiguous=report.ambiguous,
        )

    return None


def mixed_message(report: ValidationReport) -> str | None:
    """User-facing note when some items were usable and some were not."""
    if not report.valid or not report.invalid:
        return None
    good = ", ".join(report.usable_items)
    bad = ", ".join(report.rejected_items)
    return f"We can work with {good}. The {bad}? That stays in the drawer."


def _log_validation_summary(report: ValidationReport) -> None:
    """Log rejected, ambiguous and unrecognized items (only if any)."""
    if not report.invalid and not report.ambiguous and not report.warnings:
        return

    parts = [f"{len(report.valid)} usable"]
    if report.invalid:
        parts.append(f"{len(report.invalid)} rejected")
    if report.ambiguous:
        parts.append(f"{len(report.ambiguous)} ambiguous")
    if report.warnings:
        parts.append(f"{len(report.warnings)} unrecognized")
    logger.info(f"[validation] {', '.join(parts)}")

    for v in report.invalid:
        if v.severity == "high":
            logger.warning(f"  ! '{v.item}' rejected as {v.category}")
        else:
            logger.debug(f"  - '{v.item}' rejected ({v.reason})")
    for v in report.ambiguous:
        logger.debug(f"  ? '{v.item}' needs clarification")
    for w in report.warnings:
        logger.debug(f"  ~ '{w.item}' not in taxonomy, using filler")
