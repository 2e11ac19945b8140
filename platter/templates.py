from collections.abc import Sequence

from platter.classifier import classify_ingredient
from platter.config import settings
from platter.models import ClassifiedIngredient, Template, TemplateSelection

MEDITERRANEAN_INDICATORS = ("hummus", "pita", "feta", "tzatziki", "olives", "cucumber")
SNACK_INDICATORS = ("chips", "salsa", "guacamole", "queso", "tortilla")


class UnknownTemplateError(KeyError):
    """No template with the requested id."""


# ── Template definitions ───────────────────────────────────────────

TEMPLATES: dict[str, Template] = {
    "minimalist": Template(
        id="minimalist",
        name="The Minimalist",
        description="Clean and simple. Each item gets breathing room.",
        priority=1,
        style="asymmetric",
        negative_space="50%+",
        board_shape="round plate",
        rules=(
            "Place anchor off-center (rule of thirds)",
            "Leave at least 40% of plate empty",
            "Use odd numbers for grouped items",
            "Create diagonal tension between items",
        ),
        layout_prompt=(
            "LAYOUT: Minimalist, a sparse, gallery-like arrangement with lots of breathing room.\n"
            "- Items placed off-center using rule of thirds\n"
            "- At least 40% of the plate is empty (negative space)\n"
            "- Each item has breathing room, nothing crowded\n"
            "- Asymmetric placement creates visual tension"
        ),
    ),
    "bento": Template(
        id="bento",
        name="The Bento",
        description="Organized zones. Distinct islands of deliciousness.",
        priority=2,
        style="grid",
        negative_space="15%",
        board_shape="rectangular",
        rules=(
            "Each food type gets its own island",
            "Keep similar items together",
            "Maintain small gaps between zones",
            "Diagonal corners should contrast in color",
        ),
        layout_prompt=(
            "LAYOUT: Bento, organized zones with distinct islands of food.\n"
            "- Plate visually divided into sections/zones\n"
            "- Each food type grouped in its own area\n"
            "- Small gaps between different food zones\n"
            "- Diagonal corners have contrasting colors"
        ),
    ),
    "wildGraze": Template(
        id="wildGraze",
        name="The Wild Graze",
        description="Organic S-curve flow. The classic grazing spread.",
        priority=3,
        style="s-curve",
        negative_space="25%",
        board_shape="round board",
        rules=(
            "Create an S-curve with long items",
            "Anchor items at curve endpoints",
            "Scatter pops in odd-number clusters",
            "Fill gaps with tiny items last",
            "Nothing should be perfectly aligned",
        ),
        layout_prompt=(
            "LAYOUT: Wild Graze, an abundant S-curve flow like a classic grazing spread.\n"
            "- Items follow a loose S-curve or diagonal flow\n"
            "- Anchor items at the curve endpoints\n"
            "- Small items scattered in odd-number clusters (3s, 5s)\n"
            "- Organic, natural arrangement, nothing perfectly aligned\n"
            "- Gaps filled with tiny accent items"
        ),
    ),
    "pizzaNight": Template(
        id="pizzaNight",
        name="Pizza Night",
        description="Slices first, everything else is a side quest.",
        priority=4,
        style="stacked",
        negative_space="20%",
        board_shape="pizza box lid or sheet pan",
        rules=(
            "Slices overlap like fallen dominoes",
            "Sides go in small piles around the edge",
            "Dips sit in the crust corner",
        ),
        layout_prompt=(
            "LAYOUT: Pizza Night, slices as the hero with sides on the perimeter.\n"
            "- Pizza slices overlapping in a loose fan or stack\n"
            "- Any sides in small piles around the edges\n"
            "- Dips or sauces in a small cup near the crusts\n"
            "- Casual and unapologetic, a little grease is fine"
        ),
    ),
    "mediterranean": Template(
        id="mediterranean",
        name="The Mediterranean",
        description="Dips in the middle, dippers radiating out. Olive oil implied.",
        priority=5,
        style="radial",
        negative_space="20%",
        board_shape="round platter",
        rules=(
            "Dip bowls anchor the center",
            "Bread and vegetables radiate outward",
            "Olives and feta fill the gaps",
        ),
        layout_prompt=(
            "LAYOUT: Mediterranean, a mezze-style radial spread.\n"
            "- Dips in small bowls at the center, swirled with olive oil\n"
            "- Pita and vegetables radiating outward like spokes\n"
            "- Olives, feta and herbs tucked into the gaps\n"
            "- Warm, sunlit, abundant feeling"
        ),
    ),
    "snackAttack": Template(
        id="snackAttack",
        name="Snack Attack",
        description="A dip and its entourage. Built for grabbing.",
        priority=6,
        style="linear",
        negative_space="20%",
        board_shape="rectangular tray",
        rules=(
            "Dip anchors one end",
            "Dippers fan toward the other end",
            "Everything should be grabbable",
        ),
        layout_prompt=(
            "LAYOUT: Snack Attack, a dip-and-dippers grazing line.\n"
            "- Dips and salsas in bowls at one end or the center\n"
            "- Chips fanned generously around the bowls\n"
            "- Gradient of item sizes from large to small\n"
            "- Everything within easy reach, built for double-dipping"
        ),
    ),
    "casual": Template(
        id="casual",
        name="The Casual",
        description="No rules, just snacks. Relaxed and balanced.",
        priority=7,
        style="loose clusters",
        negative_space="30%",
        board_shape="any plate you have",
        rules=(
            "Group each item in its own loose pile",
            "Balance heavy items across the plate",
            "Leave a little room between piles",
        ),
        layout_prompt=(
            "LAYOUT: Casual, relaxed loose clusters on an everyday plate.\n"
            "- Each item in its own loose pile\n"
            "- Heavier items balanced across opposite sides\n"
            "- A little room between piles, nothing forced\n"
            "- Looks effortless, like it came together in two minutes"
        ),
    ),
}


def get_template(template_id: str) -> Template:
    """Return a template by id, raising UnknownTemplateError if missing."""
    try:
        return TEMPLATES[template_id]
    except KeyError:
        raise UnknownTemplateError(template_id) from None


def list_templates() -> list[Template]:
    """All templates in selection priority order."""
    return sorted(TEMPLATES.values(), key=lambda t: t.priority)


# ── Edge-case handlers ─────────────────────────────────────────────


def handle_minimalist_input(items: Sequence[str]) -> TemplateSelection | None:
    """1-2 items: make the sparseness look intentional."""
    if len(items) > 2:
        return None
    noun = "item" if len(items) == 1 else "items"
    return TemplateSelection(
        template="minimalist",
        reason=f"Only {len(items)} {noun}, too few to need organization. Negative space does the work.",
        approach="intentional_sparse",
        message="Minimalism is elegant. Let's make these items shine.",
        primary=list(items),
        styling={
            "negativeSpace": "abundant",
            "placement": "asymmetric",
            "mood": "gallery-like",
        },
    )


def handle_chaos_input(
    items: Sequence[str],
    classified: Sequence[ClassifiedIngredient] | None = None,
) -> TemplateSelection | None:
    """12+ items: feature a capped set per role, the rest become overflow."""
    if len(items) < settings.chaos_threshold:
        return None
    if classified is None:
        classified = [classify_ingredient(item) for item in items]

    anchors: list[str] = []
    flow: list[str] = []
    pops: list[str] = []
    for item, c in zip(items, classified):
        if c.role == "anchor":
            anchors.append(item)
        elif c.role == "flow":
            flow.append(item)
        else:
            pops.append(item)

    selected = (
        anchors[: settings.chaos_max_anchors]
        + flow[: settings.chaos_max_flow]
        + pops[: settings.chaos_max_pops]
    )
    chosen = set(selected)
    overflow = [item for item in items if item not in chosen]

    template = "bento" if len(items) >= settings.bento_threshold else "wildGraze"
    if overflow:
        message = f"Featuring {len(selected)} stars, with {len(overflow)} supporting players"
    else:
        message = f"All {len(selected)} items, beautifully arranged"

    return TemplateSelection(
        template=template,
        reason=(
            f"{len(items)} items is a lot. Showing the top {len(selected)} "
            f"{'in organized zones' if template == 'bento' else 'in a sweeping S-curve'}."
        ),
        approach="organized_abundance",
        message=message,
        primary=selected,
        overflow=overflow,
        styling={"zones": True, "grouping": "by_category", "flow": "s_curve"},
    )


# ── Template selection ─────────────────────────────────────────────


def _first_indicator(items: Sequence[str], indicators: Sequence[str]) -> str | None:
    for item in items:
        if any(indicator in item for indicator in indicators):
            return item
    return None


def select_template(
    items: Sequence[str],
    classified: Sequence[ClassifiedIngredient] | None = None,
) -> TemplateSelection:
    """Pick a template for a normal-sized list.

    Rules (first match wins): pizza family -> pizzaNight, Mediterranean
    indicator -> mediterranean, chips-and-dip indicator -> snackAttack,
    <=3 items -> minimalist, >=8 items -> wildGraze, >=3 flow items ->
    wildGraze, otherwise casual.
    """
    if classified is None:
        classified = [classify_ingredient(item) for item in items]
    count = len(items)

    def _selection(template: str, reason: str) -> TemplateSelection:
        return TemplateSelection(template=template, reason=reason, primary=list(items))

    pizza = next(
        (c for c in classified if c.role == "special" and c.category == "pizza"),
        None,
    )
    if pizza is not None:
        return _selection(
            "pizzaNight",
            f"'{pizza.original}' is on the plate. Pizza night rules apply.",
        )

    med_item = _first_indicator(items, MEDITERRANEAN_INDICATORS)
    if med_item is not None:
        return _selection(
            "mediterranean",
            f"'{med_item}' signals a Mediterranean spread. Dips center, dippers radiate.",
        )

    snack_item = _first_indicator(items, SNACK_INDICATORS)
    if snack_item is not None:
        return _selection(
            "snackAttack",
            f"'{snack_item}' means chips-and-dip territory. Built for grabbing.",
        )

    if count <= 3:
        return _selection("minimalist", f"Only {count} items. Clean and simple.")

    if count >= 8:
        return _selection("wildGraze", f"{count} items. Organic S-curve flow to hold them all.")

    flow_count = sum(1 for c in classified if c.role == "flow")
    if flow_count >= 3:
        return _selection(
            "wildGraze",
            f"{flow_count} flow items dominate. Let them create movement.",
        )

    return _selection("casual", "Good variety, nothing dominant. Relaxed, casual arrangement.")


def choose_template(
    items: Sequence[str],
    classified: Sequence[ClassifiedIngredient] | None = None,
) -> TemplateSelection:
    """Full decision table for a validated, non-empty item list."""
    minimalist = handle_minimalist_input(items)
    if minimalist is not None:
        return minimalist

    chaos = handle_chaos_input(items, classified)
    if chaos is not None:
        return chaos

    return select_template(items, classified)
