"""
Pairwise individual treatment effect (ITE) engine.

For every (nutrient, outcome) pair:
  1. Pull the nutrient, outcome and mediator (sleep efficiency) series
  2. Z-score all three
  3. Mediator-adjusted standardized effect (direct + w * indirect)
  4. Rescale to outcome units: multiply by the outcome's raw population std
  5. Confidence = min(|pearson(raw nutrient, raw outcome)|, 0.99)
  6. Drop the pair if |r| < 0.20
  7. Direction from the rescaled effect: > 0.5 positive, < -0.5 negative
  8. Causal path narrative from the nutrient's category
  9. ATE placeholder from the injected population baseline

Output is every passing pair, in enumeration order (nutrients outer,
outcomes inner). Ranking happens downstream.
"""
from dataclasses import asdict, dataclass
from typing import Dict, List, Optional, Sequence

import numpy as np
import pandas as pd

from nof1_engine.causal.mediation import compute_mediator_adjusted_effect
from nof1_engine.causal.narratives import NEGATIVE, NEUTRAL, POSITIVE, build_causal_path
from nof1_engine.config import (
    CONFIDENCE_DECIMALS,
    DIRECTION_THRESHOLD,
    ITE_DECIMALS,
    MAX_CONFIDENCE,
    MEDIATION_WEIGHT,
    MEDIATOR_KEY,
    MIN_CORRELATION,
    MIN_RECORDS,
)
from nof1_engine.data_prep.timeline_builder import (
    DailyRecord,
    build_daily_timeline,
    coerce_records,
    extract_series,
)
from nof1_engine.data_prep.variable_catalog import (
    ANALYZED_NUTRIENTS,
    ANALYZED_OUTCOMES,
    get_nutrient_spec,
    get_outcome_spec,
    validate_variable_keys,
)
from nof1_engine.inference.population_baseline import PopulationBaselineEstimator
from nof1_engine.inference.statistics import pearson, population_std, standardize
from nof1_engine.safety.guards import check_record_count


@dataclass(frozen=True)
class ITEResult:
    """Estimated personal effect of one nutrient on one outcome."""
    nutrient: str
    nutrient_label: str
    unit: str
    outcome: str
    outcome_label: str
    ite_value: float          # in the outcome's own units
    ate_value: float          # population-baseline approximation
    direction: str            # 'positive' | 'negative' | 'neutral'
    confidence: float         # 0-0.99, from |pearson| only
    causal_path: str

    def to_dict(self) -> Dict:
        return asdict(self)


def classify_direction(ite_value: float, threshold: float = DIRECTION_THRESHOLD) -> str:
    """positive if > threshold, negative if < -threshold, else neutral."""
    if ite_value > threshold:
        return POSITIVE
    if ite_value < -threshold:
        return NEGATIVE
    return NEUTRAL


def estimate_pair_effect(
    nutrient_raw: np.ndarray,
    outcome_raw: np.ndarray,
    mediator_raw: np.ndarray,
    mediation_weight: float = MEDIATION_WEIGHT,
) -> float:
    """Mediator-adjusted effect of one nutrient on one outcome, in outcome units."""
    standardized_effect = compute_mediator_adjusted_effect(
        standardize(nutrient_raw),
        standardize(mediator_raw),
        standardize(outcome_raw),
        mediation_weight=mediation_weight,
    )
    return standardized_effect * population_std(outcome_raw)


def estimate_pairwise_effects(
    records: Sequence[DailyRecord],
    nutrient_keys: Optional[Sequence[str]] = None,
    outcome_keys: Optional[Sequence[str]] = None,
    mediator_key: str = MEDIATOR_KEY,
    baseline: Optional[PopulationBaselineEstimator] = None,
    seed: Optional[int] = None,
    mediation_weight: float = MEDIATION_WEIGHT,
    min_correlation: float = MIN_CORRELATION,
    max_confidence: float = MAX_CONFIDENCE,
    direction_threshold: float = DIRECTION_THRESHOLD,
    min_records: int = MIN_RECORDS,
    verbose: bool = False,
) -> List[ITEResult]:
    """
    Estimate ITEs for every nutrient x outcome pair.

    Args:
        records: ordered study days (at least min_records)
        nutrient_keys / outcome_keys: pairs to test; default to the analysed sets
        mediator_key: outcome series used as the fixed mediator
        baseline: source of ate_value; built from `seed` if not given
        seed: seed for the default baseline (ignored when baseline is given)
        verbose: print per-pair progress

    Returns:
        Unranked ITEResults for the pairs that pass the correlation filter.

    Raises:
        InsufficientDataError: fewer than min_records records
        UnknownVariableError: a requested key is outside the catalog
    """
    check_record_count(len(records), min_records)
    records = coerce_records(records)

    nutrient_keys = list(nutrient_keys) if nutrient_keys is not None else list(ANALYZED_NUTRIENTS)
    outcome_keys = list(outcome_keys) if outcome_keys is not None else list(ANALYZED_OUTCOMES)
    validate_variable_keys(nutrient_keys, outcome_keys + [mediator_key])

    if baseline is None:
        baseline = PopulationBaselineEstimator(seed=seed)

    timeline = build_daily_timeline(records)
    return _estimate_from_timeline(
        timeline, nutrient_keys, outcome_keys, mediator_key, baseline,
        mediation_weight, min_correlation, max_confidence, direction_threshold,
        verbose,
    )


def _estimate_from_timeline(
    timeline: pd.DataFrame,
    nutrient_keys: List[str],
    outcome_keys: List[str],
    mediator_key: str,
    baseline: PopulationBaselineEstimator,
    mediation_weight: float,
    min_correlation: float,
    max_confidence: float,
    direction_threshold: float,
    verbose: bool,
) -> List[ITEResult]:
    mediator = extract_series(timeline, mediator_key)
    outcomes = {k: extract_series(timeline, k) for k in outcome_keys}

    results = []
    skipped = []

    if verbose:
        print(f"Testing {len(nutrient_keys)} nutrients x {len(outcome_keys)} outcomes "
              f"over {len(timeline)} days (mediator: {mediator_key})...")

    for nutrient_key in nutrient_keys:
        nutrient_spec = get_nutrient_spec(nutrient_key)
        nutrient = extract_series(timeline, nutrient_key)

        for outcome_key in outcome_keys:
            outcome_spec = get_outcome_spec(outcome_key)
            outcome = outcomes[outcome_key]

            corr = abs(pearson(nutrient, outcome))
            if corr < min_correlation:
                skipped.append(f"{nutrient_key}->{outcome_key} (|r|={corr:.2f})")
                continue

            ite = round(
                estimate_pair_effect(nutrient, outcome, mediator, mediation_weight),
                ITE_DECIMALS,
            )
            confidence = round(min(corr, max_confidence), CONFIDENCE_DECIMALS)
            direction = classify_direction(ite, direction_threshold)

            results.append(ITEResult(
                nutrient=nutrient_key,
                nutrient_label=nutrient_spec.label,
                unit=nutrient_spec.unit,
                outcome=outcome_key,
                outcome_label=outcome_spec.label,
                ite_value=ite,
                ate_value=baseline.estimate(ite),
                direction=direction,
                confidence=confidence,
                causal_path=build_causal_path(
                    nutrient_spec.narrative_category,
                    nutrient_spec.label,
                    outcome_spec.label,
                    direction,
                ),
            ))

            if verbose:
                print(f"  [OK] {nutrient_key:18s} -> {outcome_key:22s} "
                      f"ITE={ite:+.4f} conf={confidence:.3f} {direction}")

    if verbose:
        print(f"\n  Reported pairs:  {len(results)}")
        print(f"  Below |r| {min_correlation:.2f}: {len(skipped)}")

    return results
