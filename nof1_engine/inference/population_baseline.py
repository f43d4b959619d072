"""
Population-baseline (ATE) approximation.

There is no population dataset behind this engine, so the "average
treatment effect" reported next to each ITE is a damped, jittered copy of
the personal effect:

    ate = damping * ite + U(-w, +w)

It is a placeholder and is the only non-deterministic value the engine
produces. The randomness comes from an explicit numpy Generator so that a
fixed seed reproduces every ate_value exactly.
"""
from typing import Optional

import numpy as np

from nof1_engine.config import ATE_DAMPING, ATE_JITTER_HALF_WIDTH, ITE_DECIMALS


class PopulationBaselineEstimator:
    """Draws one ATE approximation per emitted ITE, in call order."""

    def __init__(
        self,
        rng: Optional[np.random.Generator] = None,
        seed: Optional[int] = None,
        damping: float = ATE_DAMPING,
        jitter_half_width: float = ATE_JITTER_HALF_WIDTH,
    ):
        if rng is not None and seed is not None:
            raise ValueError("Pass either rng or seed, not both")
        if jitter_half_width < 0:
            raise ValueError("jitter_half_width must be >= 0")
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.damping = damping
        self.jitter_half_width = jitter_half_width

    def estimate(self, ite_value: float) -> float:
        jitter = self.rng.uniform(-self.jitter_half_width, self.jitter_half_width)
        return round(float(self.damping * ite_value + jitter), ITE_DECIMALS)
