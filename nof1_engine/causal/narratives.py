"""
Causal path narratives.
One template per nutrient narrative category; the generic template
branches its wording on the effect direction.
"""
from typing import Callable, Dict

from nof1_engine.data_prep.variable_catalog import NarrativeCategory, get_nutrient_spec

POSITIVE = "positive"
NEGATIVE = "negative"
NEUTRAL = "neutral"


def _stimulant_path(nutrient_label: str, outcome_label: str, direction: str) -> str:
    return f"Excess {nutrient_label} intake → autonomic nervous system disruption → {outcome_label} decline"


def _precursor_path(nutrient_label: str, outcome_label: str, direction: str) -> str:
    return f"{nutrient_label} intake → serotonin/melatonin precursor pathway → {outcome_label} improvement"


def _anti_inflammatory_path(nutrient_label: str, outcome_label: str, direction: str) -> str:
    return (f"{nutrient_label} intake → anti-inflammatory effect → "
            f"influence on heart rate variability and {outcome_label}")


def _generic_path(nutrient_label: str, outcome_label: str, direction: str) -> str:
    verb = "improves" if direction == POSITIVE else "is affected"
    return f"{nutrient_label} intake → metabolic pathway → {outcome_label} {verb}"


NARRATIVE_TEMPLATES: Dict[NarrativeCategory, Callable[[str, str, str], str]] = {
    NarrativeCategory.STIMULANT: _stimulant_path,
    NarrativeCategory.PRECURSOR: _precursor_path,
    NarrativeCategory.ANTI_INFLAMMATORY: _anti_inflammatory_path,
    NarrativeCategory.GENERIC: _generic_path,
}


def build_causal_path(
    category: NarrativeCategory,
    nutrient_label: str,
    outcome_label: str,
    direction: str,
) -> str:
    """Render the causal path sentence for one nutrient -> outcome result."""
    template = NARRATIVE_TEMPLATES.get(category, _generic_path)
    return template(nutrient_label, outcome_label, direction)


def causal_path_for(nutrient_key: str, outcome_label: str, direction: str) -> str:
    """Convenience lookup by nutrient key."""
    spec = get_nutrient_spec(nutrient_key)
    return build_causal_path(spec.narrative_category, spec.label, outcome_label, direction)
