"""
Food recommendations from a personal profile.

  query -> health goal (outcome key)
        -> actionable effects for that outcome (|ITE| > 0.5)
        -> nutrient search tags
        -> foods from the injected repository

This is the hand-off to the conversational layer; prompt building and the
language-model call live outside this package.
"""
import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from nof1_engine.config import (
    ACTIONABLE_ITE_THRESHOLD,
    DEFAULT_HEALTH_GOAL,
    FOOD_SEARCH_TOP_K,
    TOP_K_PER_OUTCOME,
)
from nof1_engine.inference.effect_engine import ITEResult
from nof1_engine.knowledge.food_repository import FoodItem, FoodRepository, nutrient_search_tags
from nof1_engine.output.profile_generator import ProfileResult

# Checked in order; first match wins.
HEALTH_GOAL_PATTERNS = [
    ("deep_sleep_min", [r"deep sleep", r"deep-sleep", r"slow[- ]wave"]),
    ("rem_sleep_min", [r"\brem\b", r"dream"]),
    ("hrv_ms", [r"\bhrv\b", r"heart rate variability", r"\bheart\b"]),
    ("overall_sleep_score", [r"sleep score", r"sleep quality"]),
    ("sleep_efficiency_pct", [r"sleep efficiency"]),
    ("readiness_score", [r"readiness", r"recovery", r"condition"]),
]


def extract_health_goal(query: str, default: str = DEFAULT_HEALTH_GOAL) -> str:
    """Map a free-text question to the outcome key it is about."""
    lower = (query or "").lower()
    for outcome_key, patterns in HEALTH_GOAL_PATTERNS:
        if any(re.search(p, lower) for p in patterns):
            return outcome_key
    return default


def select_actionable_effects(
    profile: ProfileResult,
    outcome_key: str,
    threshold: float = ACTIONABLE_ITE_THRESHOLD,
    limit: int = TOP_K_PER_OUTCOME,
) -> List[ITEResult]:
    """Top effects for one outcome whose |ite_value| exceeds the threshold."""
    candidates = profile.top_nutrients_for_outcome.get(outcome_key, [])
    return [r for r in candidates if abs(r.ite_value) > threshold][:limit]


@dataclass
class FoodRecommendation:
    """Everything the conversational layer needs to answer one question."""
    health_goal: str
    effects: List[ITEResult] = field(default_factory=list)
    search_tags: List[str] = field(default_factory=list)
    foods: List[FoodItem] = field(default_factory=list)

    def to_dict(self) -> Dict:
        return {
            "health_goal": self.health_goal,
            "effects": [e.to_dict() for e in self.effects],
            "search_tags": list(self.search_tags),
            "foods": [f.name for f in self.foods],
        }


def recommend_foods(
    profile: ProfileResult,
    query: str,
    repository: Optional[FoodRepository] = None,
    top_k: int = FOOD_SEARCH_TOP_K,
) -> FoodRecommendation:
    if repository is None:
        repository = FoodRepository()
    goal = extract_health_goal(query)
    effects = select_actionable_effects(profile, goal)

    tags = []
    for effect in effects:
        tags.extend(nutrient_search_tags(effect.nutrient))

    foods = repository.search(tags, top_k=top_k) if tags else []
    return FoodRecommendation(health_goal=goal, effects=effects, search_tags=tags, foods=foods)
