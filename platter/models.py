from typing import Literal

from pydantic import BaseModel, ConfigDict

Role = Literal["anchor", "flow", "pop", "special", "filler"]
Severity = Literal["none", "low", "high", "clarification"]
VerdictCategory = Literal["dangerous", "non_food", "ambiguous", "unknown", "food"]
MatchType = Literal["exact", "substring", "fuzzy", "unknown"]


class IngredientEntry(BaseModel):
    """One taxonomy record, shared by every synonym that resolves to it."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str
    display_name: str
    role: Role
    category: str  # e.g. "soft_cheese", "cured_meat", "fruit"
    synonyms: tuple[str, ...] = ()
    color: str = "neutral"
    plating_style: str = "pile"
    pro_tip: str = "Place where it fits"
    is_large: bool = False
    is_small_round: bool = False
    is_spreadable: bool = False
    is_long: bool = False
    needs_container: bool = False

    @property
    def match_terms(self) -> tuple[str, ...]:
        """Canonical name first, then synonyms."""
        return (self.name, *self.synonyms)


class ClassifiedIngredient(BaseModel):
    """A parsed token bound to exactly one taxonomy entry."""

    model_config = ConfigDict(frozen=True)

    original: str
    display_name: str
    entry: IngredientEntry
    found: bool
    matched: str | None = None
    match_type: MatchType = "unknown"

    @property
    def role(self) -> Role:
        return self.entry.role

    @property
    def category(self) -> str:
        return self.entry.category


class ValidationVerdict(BaseModel):
    """Result of validating a single token."""

    item: str
    valid: bool
    severity: Severity = "none"
    category: VerdictCategory = "food"
    reason: str | None = None  # non-food pattern family, e.g. "objects"
    snark: str | None = None
    suggestion: str | None = None
    valid_forms: list[str] = []
    warning: str | None = None
    classification: ClassifiedIngredient | None = None


class ItemWarning(BaseModel):
    item: str
    warning: str


class ValidationReport(BaseModel):
    """Partition of a token list into valid / invalid / ambiguous buckets."""

    valid: list[ValidationVerdict] = []
    invalid: list[ValidationVerdict] = []
    ambiguous: list[ValidationVerdict] = []
    warnings: list[ItemWarning] = []

    @property
    def usable_items(self) -> list[str]:
        return [v.item for v in self.valid]

    @property
    def rejected_items(self) -> list[str]:
        return [v.item for v in self.invalid]


class IngredientSummary(BaseModel):
    """Aggregate properties of a classified ingredient list."""

    model_config = ConfigDict(frozen=True)

    total: int
    anchors: int = 0
    flow: int = 0
    pops: int = 0
    special: int = 0
    fillers: int = 0
    small_round_count: int = 0
    has_large: bool = False
    has_small_round: bool = False
    needs_container: bool = False
    has_spreadable: bool = False
    has_long_items: bool = False
    has_warm_colors: bool = False
    has_cool_colors: bool = False


class Template(BaseModel):
    """A named plating layout with its image-prompt fragment."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str
    priority: int
    style: str
    negative_space: str
    board_shape: str
    layout_prompt: str
    rules: tuple[str, ...] = ()


class TemplateSelection(BaseModel):
    """Which template fired, why, and which items are displayed."""

    template: str
    reason: str
    approach: str | None = None  # "intentional_sparse", "organized_abundance"
    message: str | None = None
    primary: list[str] = []
    overflow: list[str] = []
    styling: dict[str, str | bool] = {}


class DinnerMatch(BaseModel):
    """Name/tip flavor text for an ingredient set."""

    name: str
    tip: str
    template: str
    validation: str
    source: Literal["exact", "subset", "partial", "default"] = "default"
    key: str | None = None  # curated table key that matched


class CombinationEntry(BaseModel):
    """One row of the curated combination table (without affirmation)."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str
    tip: str
    template: str


class PlatingResult(BaseModel):
    """Successful processing outcome."""

    success: Literal[True] = True
    type: Literal["ok", "mixed"] = "ok"
    input: str | list[str]
    items: list[str]
    classified: list[ClassifiedIngredient]
    summary: IngredientSummary
    template: str
    template_name: str
    reason: str
    rules_applied: list[str]
    prompt: str
    overflow: list[str] = []
    styling: dict[str, str | bool] = {}
    message: str | None = None
    usable_items: list[str] = []
    rejected_items: list[str] = []
    rejected: list[ValidationVerdict] = []
    ambiguous: list[ValidationVerdict] = []
    warnings: list[ItemWarning] = []


class PlatingRejection(BaseModel):
    """Terminal rejection: nothing usable to plate."""

    success: Literal[False] = False
    type: Literal["empty", "all_garbage", "needs_clarification"]
    input: str | list[str]
    message: str
    all_snarks: list[str] = []
    suggestion: str | None = None
    rejected: list[ValidationVerdict] = []
    ambiguous: list[ValidationVerdict] = []
