"""
Effect ranking.
Orders ITE results by strength x confidence and groups them per outcome.
"""
from typing import Dict, List, Optional, Sequence, Tuple

from nof1_engine.causal.narratives import NEGATIVE, POSITIVE
from nof1_engine.config import HEADLINE_NEGATIVE, HEADLINE_POSITIVE, TOP_K_PER_OUTCOME
from nof1_engine.data_prep.variable_catalog import ANALYZED_OUTCOMES
from nof1_engine.inference.effect_engine import ITEResult


def effect_score(result: ITEResult) -> float:
    """Ranking key: confidence x |ite_value|."""
    return result.confidence * abs(result.ite_value)


def rank_effects(results: Sequence[ITEResult]) -> List[ITEResult]:
    """Sort by effect_score, descending. Ties keep enumeration order (stable sort)."""
    return sorted(results, key=effect_score, reverse=True)


def top_effects_by_outcome(
    ranked: Sequence[ITEResult],
    outcome_keys: Optional[Sequence[str]] = None,
    top_k: int = TOP_K_PER_OUTCOME,
) -> Dict[str, List[ITEResult]]:
    """
    First top_k ranked results per outcome.
    Every requested outcome gets an entry, empty if nothing passed the filter.
    """
    outcome_keys = list(outcome_keys) if outcome_keys is not None else list(ANALYZED_OUTCOMES)
    grouped = {k: [] for k in outcome_keys}
    for r in ranked:
        bucket = grouped.get(r.outcome)
        if bucket is not None and len(bucket) < top_k:
            bucket.append(r)
    return grouped


def extract_headlines(
    ranked: Sequence[ITEResult],
    n_positive: int = HEADLINE_POSITIVE,
    n_negative: int = HEADLINE_NEGATIVE,
) -> Tuple[List[ITEResult], List[ITEResult]]:
    """Top positive and top negative effects, in ranked order."""
    positive = [r for r in ranked if r.direction == POSITIVE][:n_positive]
    negative = [r for r in ranked if r.direction == NEGATIVE][:n_negative]
    return positive, negative
