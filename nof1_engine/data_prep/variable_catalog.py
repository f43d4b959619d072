"""
Variable catalog for the daily N-of-1 record.

Two families of variables:
  Nutrients: what the person chose to eat (one value per day, >= 0)
  Outcomes:  what their wearable measured that night / the next day

Each nutrient carries a narrative category that decides how its causal
path is worded. The catalog is the single source of truth for which keys
a DailyRecord may contain; anything outside it is rejected at the boundary.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Optional

from nof1_engine.safety.guards import UnknownVariableError


class NarrativeCategory(str, Enum):
    """How a nutrient is assumed to reach the outcome."""
    STIMULANT = "stimulant"                  # stimulants / depressants
    PRECURSOR = "precursor"                  # sleep-hormone precursors
    ANTI_INFLAMMATORY = "anti_inflammatory"
    GENERIC = "generic"


@dataclass(frozen=True)
class NutrientSpec:
    """A nutrition variable recorded once per day."""
    key: str
    label: str
    unit: str
    narrative_category: NarrativeCategory = NarrativeCategory.GENERIC


@dataclass(frozen=True)
class OutcomeSpec:
    """A health outcome measured once per day."""
    key: str
    label: str
    unit: str


# ═══════════════════════════════════════════════════════════════════
# NUTRIENTS
# ═══════════════════════════════════════════════════════════════════

_NUTRIENTS = [
    # ── Energy & macros ───────────────────────────────────────
    NutrientSpec("energy_kcal", "Energy", "kcal"),
    NutrientSpec("protein_g", "Protein", "g"),
    NutrientSpec("fat_g", "Total fat", "g"),
    NutrientSpec("carbs_g", "Carbohydrates", "g"),
    NutrientSpec("fiber_g", "Dietary fiber", "g"),
    NutrientSpec("omega3_g", "Omega-3 fatty acids", "g", NarrativeCategory.ANTI_INFLAMMATORY),
    NutrientSpec("omega6_g", "Omega-6 fatty acids", "g"),

    # ── Vitamins ──────────────────────────────────────────────
    NutrientSpec("vitamin_d_iu", "Vitamin D", "IU"),
    NutrientSpec("vitamin_e_mg", "Vitamin E", "mg"),
    NutrientSpec("vitamin_b1_mg", "Vitamin B1 (thiamine)", "mg"),
    NutrientSpec("vitamin_b6_mg", "Vitamin B6", "mg"),

    # ── Minerals ──────────────────────────────────────────────
    NutrientSpec("magnesium_mg", "Magnesium", "mg", NarrativeCategory.PRECURSOR),
    NutrientSpec("iron_mg", "Iron", "mg"),
    NutrientSpec("calcium_mg", "Calcium", "mg"),
    NutrientSpec("zinc_mg", "Zinc", "mg"),
    NutrientSpec("potassium_mg", "Potassium", "mg"),
    NutrientSpec("sodium_mg", "Sodium", "mg"),

    # ── Amino acids ───────────────────────────────────────────
    NutrientSpec("tryptophan_mg", "Tryptophan", "mg", NarrativeCategory.PRECURSOR),
    NutrientSpec("methionine_mg", "Methionine", "mg"),
    NutrientSpec("valine_mg", "Valine", "mg"),

    # ── Stimulants / depressants ──────────────────────────────
    NutrientSpec("caffeine_mg", "Caffeine", "mg", NarrativeCategory.STIMULANT),
    NutrientSpec("alcohol_g", "Alcohol", "g", NarrativeCategory.STIMULANT),

    # ── Derived / quality fields ──────────────────────────────
    NutrientSpec("net_carbs_g", "Net carbohydrates", "g"),
    NutrientSpec("saturated_fat_g", "Saturated fat", "g", NarrativeCategory.STIMULANT),
    NutrientSpec("trans_fat_g", "Trans fat", "g"),
]

NUTRIENTS: Dict[str, NutrientSpec] = {n.key: n for n in _NUTRIENTS}


# ═══════════════════════════════════════════════════════════════════
# OUTCOMES
# ═══════════════════════════════════════════════════════════════════

_OUTCOMES = [
    # ── Sleep ─────────────────────────────────────────────────
    OutcomeSpec("deep_sleep_min", "Deep sleep (min)", "min"),
    OutcomeSpec("rem_sleep_min", "REM sleep (min)", "min"),
    OutcomeSpec("total_sleep_min", "Total sleep (min)", "min"),
    OutcomeSpec("sleep_efficiency_pct", "Sleep efficiency (%)", "%"),
    OutcomeSpec("overall_sleep_score", "Overall sleep score", "score"),

    # ── Autonomic ─────────────────────────────────────────────
    OutcomeSpec("hrv_ms", "HRV (heart rate variability, ms)", "ms"),
    OutcomeSpec("resting_heart_rate_bpm", "Resting heart rate (bpm)", "bpm"),

    # ── Activity & recovery ───────────────────────────────────
    OutcomeSpec("activity_burn_kcal", "Activity burn (kcal)", "kcal"),
    OutcomeSpec("steps", "Steps", "steps"),
    OutcomeSpec("readiness_score", "Readiness score", "score"),
]

OUTCOMES: Dict[str, OutcomeSpec] = {o.key: o for o in _OUTCOMES}


# Pairs tested by default, in enumeration order. Ranking ties fall back to this order.
ANALYZED_NUTRIENTS: List[str] = [
    "omega3_g",
    "vitamin_e_mg",
    "vitamin_d_iu",
    "magnesium_mg",
    "protein_g",
    "vitamin_b1_mg",
    "tryptophan_mg",
    "methionine_mg",
    "valine_mg",
    "caffeine_mg",
    "alcohol_g",
    "iron_mg",
    "fiber_g",
    "zinc_mg",
    "saturated_fat_g",
    "potassium_mg",
]

ANALYZED_OUTCOMES: List[str] = [
    "deep_sleep_min",
    "rem_sleep_min",
    "hrv_ms",
    "overall_sleep_score",
    "sleep_efficiency_pct",
    "readiness_score",
]


def get_nutrient_spec(key: str) -> NutrientSpec:
    """Look up a nutrient, raising UnknownVariableError if it is not in the catalog."""
    spec = NUTRIENTS.get(key)
    if spec is None:
        raise UnknownVariableError("nutrient", [key])
    return spec


def get_outcome_spec(key: str) -> OutcomeSpec:
    """Look up an outcome, raising UnknownVariableError if it is not in the catalog."""
    spec = OUTCOMES.get(key)
    if spec is None:
        raise UnknownVariableError("outcome", [key])
    return spec


def get_nutrient_keys() -> List[str]:
    return list(NUTRIENTS.keys())


def get_outcome_keys() -> List[str]:
    return list(OUTCOMES.keys())


def get_nutrients_by_category(category: NarrativeCategory) -> List[str]:
    return [n.key for n in _NUTRIENTS if n.narrative_category == category]


def validate_variable_keys(
    nutrient_keys: Optional[Iterable[str]] = None,
    outcome_keys: Optional[Iterable[str]] = None,
) -> None:
    """Reject any key that is not part of the fixed catalog."""
    if nutrient_keys is not None:
        unknown = set(nutrient_keys) - set(NUTRIENTS)
        if unknown:
            raise UnknownVariableError("nutrient", unknown)
    if outcome_keys is not None:
        unknown = set(outcome_keys) - set(OUTCOMES)
        if unknown:
            raise UnknownVariableError("outcome", unknown)
