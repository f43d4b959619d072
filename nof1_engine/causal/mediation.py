"""
Mediator-adjusted effect estimation.

Fixed causal structure per (nutrient, outcome) pair:

    nutrient ──────────────► outcome        (direct)
    nutrient ─► mediator ─► outcome         (indirect)

On z-scored series:
    direct   = slope(nutrient, outcome)
    indirect = slope(nutrient, mediator) * slope(mediator, outcome)
    total    = direct + w * indirect

w (MEDIATION_WEIGHT) is a fixed partial-mediation weight, not fitted.
"""
from dataclasses import dataclass

from nof1_engine.config import MEDIATION_WEIGHT
from nof1_engine.inference.statistics import ArrayLike, regression_slope


@dataclass(frozen=True)
class MediationEstimate:
    """Decomposition of one standardized nutrient -> outcome effect."""
    direct_effect: float
    nutrient_to_mediator: float
    mediator_to_outcome: float
    indirect_effect: float
    mediation_weight: float
    total_effect: float


def estimate_mediation(
    nutrient: ArrayLike,
    mediator: ArrayLike,
    outcome: ArrayLike,
    mediation_weight: float = MEDIATION_WEIGHT,
) -> MediationEstimate:
    """
    Decompose the effect of nutrient on outcome into direct and mediated parts.

    Args:
        nutrient: standardized nutrient series
        mediator: standardized mediator series (same length)
        outcome: standardized outcome series (same length)
        mediation_weight: share of the indirect path added to the total
    """
    direct = regression_slope(nutrient, outcome)
    a = regression_slope(nutrient, mediator)
    b = regression_slope(mediator, outcome)
    indirect = a * b

    return MediationEstimate(
        direct_effect=direct,
        nutrient_to_mediator=a,
        mediator_to_outcome=b,
        indirect_effect=indirect,
        mediation_weight=mediation_weight,
        total_effect=direct + mediation_weight * indirect,
    )


def compute_mediator_adjusted_effect(
    nutrient: ArrayLike,
    mediator: ArrayLike,
    outcome: ArrayLike,
    mediation_weight: float = MEDIATION_WEIGHT,
) -> float:
    """Combined standardized effect: direct + w * indirect."""
    return estimate_mediation(nutrient, mediator, outcome, mediation_weight).total_effect
