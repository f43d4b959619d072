"""
Personal nutrition profile.
Runs the effect engine, ranks the results, groups them per outcome
and attaches the text digest.
"""
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Sequence, Union

from nof1_engine.config import MEDIATOR_KEY, OUTPUT_DIR, PROFILE_JSON_NAME, TOP_K_PER_OUTCOME
from nof1_engine.data_prep.timeline_builder import DailyRecord
from nof1_engine.data_prep.variable_catalog import ANALYZED_OUTCOMES
from nof1_engine.inference.effect_engine import ITEResult, estimate_pairwise_effects
from nof1_engine.inference.population_baseline import PopulationBaselineEstimator
from nof1_engine.output.ranking import extract_headlines, rank_effects, top_effects_by_outcome
from nof1_engine.output.summary import build_personal_summary


@dataclass(frozen=True)
class ProfileResult:
    """Ranked ITEs, per-outcome top lists and the digest for one study."""
    ite_results: List[ITEResult]
    top_nutrients_for_outcome: Dict[str, List[ITEResult]]
    personal_summary: str

    def to_dict(self) -> Dict:
        return {
            "ite_results": [r.to_dict() for r in self.ite_results],
            "top_nutrients_for_outcome": {
                k: [r.to_dict() for r in v] for k, v in self.top_nutrients_for_outcome.items()
            },
            "personal_summary": self.personal_summary,
        }


def calculate_ite(
    records: Sequence[Union[DailyRecord, Mapping]],
    nutrient_keys: Optional[Sequence[str]] = None,
    outcome_keys: Optional[Sequence[str]] = None,
    mediator_key: str = MEDIATOR_KEY,
    baseline: Optional[PopulationBaselineEstimator] = None,
    seed: Optional[int] = None,
    top_k: int = TOP_K_PER_OUTCOME,
    verbose: bool = False,
    **engine_kwargs,
) -> ProfileResult:
    """
    Build the personal nutrition profile from ordered daily records.

    Raises InsufficientDataError for fewer than 3 records; the caller is
    expected to turn it into a "collect more data" message.
    """
    outcome_keys = list(outcome_keys) if outcome_keys is not None else list(ANALYZED_OUTCOMES)

    results = estimate_pairwise_effects(
        records,
        nutrient_keys=nutrient_keys,
        outcome_keys=outcome_keys,
        mediator_key=mediator_key,
        baseline=baseline,
        seed=seed,
        verbose=verbose,
        **engine_kwargs,
    )

    ranked = rank_effects(results)
    top_positive, top_negative = extract_headlines(ranked)

    return ProfileResult(
        ite_results=ranked,
        top_nutrients_for_outcome=top_effects_by_outcome(ranked, outcome_keys, top_k),
        personal_summary=build_personal_summary(top_positive, top_negative, n_days=len(records)),
    )


def save_profile_json(profile: Union[ProfileResult, Dict], output_path: Optional[Path] = None) -> Path:
    """Save the profile (or a bundle containing it) as JSON."""
    output_path = Path(output_path or (OUTPUT_DIR / PROFILE_JSON_NAME))
    output_path.parent.mkdir(parents=True, exist_ok=True)

    payload = profile.to_dict() if isinstance(profile, ProfileResult) else profile
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2, ensure_ascii=False)

    return output_path
