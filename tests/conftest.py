"""
Shared builders for daily records.

`make_records` returns full-schema records in which every series is held
constant unless overridden, so a test controls exactly which nutrient and
outcome vary.
"""
from datetime import date, timedelta

import pytest

from nof1_engine.data_prep.timeline_builder import DailyRecord
from nof1_engine.data_prep.variable_catalog import NUTRIENTS, OUTCOMES

BASE_NUTRITION = {key: 10.0 for key in NUTRIENTS}
BASE_OUTCOMES = {key: 50.0 for key in OUTCOMES}


def make_records(n_days, nutrition=None, outcomes=None, start=date(2024, 3, 4)):
    """
    Args:
        n_days: number of study days
        nutrition: {nutrient_key: [value per day]} overrides
        outcomes: {outcome_key: [value per day]} overrides
    """
    nutrition = nutrition or {}
    outcomes = outcomes or {}
    records = []
    for i in range(n_days):
        n = dict(BASE_NUTRITION)
        o = dict(BASE_OUTCOMES)
        for k, series in nutrition.items():
            n[k] = float(series[i])
        for k, series in outcomes.items():
            o[k] = float(series[i])
        records.append(DailyRecord(date=start + timedelta(days=i), nutrition=n, outcomes=o))
    return records


def make_raw_record(day=0, **overrides):
    """A record in its JSON shape (health_outcomes block), for boundary tests."""
    raw = {
        "date": (date(2024, 3, 4) + timedelta(days=day)).isoformat(),
        "nutrition": dict(BASE_NUTRITION),
        "health_outcomes": dict(BASE_OUTCOMES),
    }
    raw.update(overrides)
    return raw


@pytest.fixture
def linear_records():
    """Omega-3 [1,2,3] vs deep sleep [2,4,6]; everything else constant."""
    return make_records(
        3,
        nutrition={"omega3_g": [1, 2, 3]},
        outcomes={"deep_sleep_min": [2, 4, 6]},
    )


@pytest.fixture
def noisy_records():
    """Two weeks with several nutrients and outcomes moving together and apart."""
    caffeine = [180, 320, 95, 240, 360, 120, 270, 150, 300, 110, 200, 340, 90, 260]
    magnesium = [340, 250, 410, 310, 230, 385, 280, 360, 265, 400, 330, 240, 420, 300]
    omega3 = [1.2, 0.4, 2.1, 0.9, 0.3, 1.8, 0.7, 1.5, 0.6, 1.9, 1.1, 0.5, 2.2, 0.8]
    fiber = [24, 17, 29, 21, 15, 27, 19, 22, 26, 18, 25, 16, 28, 20]
    deep = [82, 61, 94, 74, 55, 90, 68, 84, 63, 92, 77, 58, 96, 70]
    rem = [96, 78, 104, 90, 71, 99, 84, 93, 80, 101, 92, 75, 106, 88]
    hrv = [52, 41, 58, 48, 37, 56, 44, 51, 43, 57, 50, 39, 60, 46]
    eff = [89, 82, 92, 86, 79, 91, 84, 88, 83, 92, 87, 80, 93, 85]
    score = [81, 68, 87, 76, 62, 85, 72, 80, 70, 86, 78, 64, 88, 74]
    ready = [80, 66, 86, 75, 59, 84, 70, 79, 68, 85, 77, 61, 87, 72]
    return make_records(
        14,
        nutrition={
            "caffeine_mg": caffeine,
            "magnesium_mg": magnesium,
            "omega3_g": omega3,
            "fiber_g": fiber,
        },
        outcomes={
            "deep_sleep_min": deep,
            "rem_sleep_min": rem,
            "hrv_ms": hrv,
            "sleep_efficiency_pct": eff,
            "overall_sleep_score": score,
            "readiness_score": ready,
        },
    )
