"""
Food knowledge repository.

A small read-only catalog of foods with per-100g nutrient amounts and
search tags, used to turn "this nutrient helps your sleep" into concrete
foods. The catalog is passed around as a FoodRepository instance so a
different (or versioned) catalog can be swapped in without touching the
estimation code.
"""
import math
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from nof1_engine.config import FOOD_SEARCH_TOP_K

TAG_MATCH_WEIGHT = 3.0
NUTRIENT_MATCH_WEIGHT = 0.5


@dataclass(frozen=True)
class FoodItem:
    """One food with nutrient content per 100 g."""
    name: str
    energy_kcal_per_100g: float
    key_nutrients: Dict[str, float] = field(default_factory=dict)
    tags: Tuple[str, ...] = ()
    description: str = ""


DEFAULT_FOODS: Tuple[FoodItem, ...] = (
    FoodItem(
        name="Almonds",
        energy_kcal_per_100g=579,
        key_nutrients={"vitamin_e_mg": 25.6, "magnesium_mg": 270, "protein_g": 21.2,
                       "fiber_g": 12.5, "omega3_g": 0.003},
        tags=("nuts", "vitamin e", "magnesium"),
        description="Rich in vitamin E and magnesium; supports sleep quality",
    ),
    FoodItem(
        name="Salmon",
        energy_kcal_per_100g=208,
        key_nutrients={"omega3_g": 2.26, "protein_g": 20.4, "vitamin_d_iu": 570, "vitamin_b6_mg": 0.8},
        tags=("fish", "omega3", "protein"),
        description="High-protein fish rich in omega-3 and vitamin D",
    ),
    FoodItem(
        name="Tofu",
        energy_kcal_per_100g=76,
        key_nutrients={"protein_g": 8.1, "valine_mg": 480, "calcium_mg": 350,
                       "iron_mg": 5.4, "magnesium_mg": 30},
        tags=("legumes", "protein", "valine"),
        description="Plant protein rich in valine and essential amino acids",
    ),
    FoodItem(
        name="Spinach",
        energy_kcal_per_100g=23,
        key_nutrients={"magnesium_mg": 79, "iron_mg": 2.7, "vitamin_b6_mg": 0.2,
                       "potassium_mg": 558, "fiber_g": 2.2},
        tags=("vegetables", "magnesium", "iron"),
        description="Magnesium and iron for sleep and HRV",
    ),
    FoodItem(
        name="Banana",
        energy_kcal_per_100g=89,
        key_nutrients={"tryptophan_mg": 10, "potassium_mg": 358, "vitamin_b6_mg": 0.4, "magnesium_mg": 27},
        tags=("fruit", "tryptophan", "potassium"),
        description="Tryptophan and potassium; serotonin precursor",
    ),
    FoodItem(
        name="Walnuts",
        energy_kcal_per_100g=654,
        key_nutrients={"omega3_g": 9.08, "melatonin_mcg": 3.5, "vitamin_e_mg": 0.7, "magnesium_mg": 158},
        tags=("nuts", "omega3", "melatonin"),
        description="Contains melatonin and omega-3",
    ),
    FoodItem(
        name="Eggs",
        energy_kcal_per_100g=155,
        key_nutrients={"protein_g": 12.6, "methionine_mg": 392, "vitamin_d_iu": 82,
                       "zinc_mg": 1.3, "tryptophan_mg": 167},
        tags=("protein", "methionine", "tryptophan"),
        description="Methionine and tryptophan for sleep hormone synthesis",
    ),
    FoodItem(
        name="Oats",
        energy_kcal_per_100g=389,
        key_nutrients={"fiber_g": 10.6, "magnesium_mg": 177, "vitamin_b1_mg": 0.76,
                       "zinc_mg": 3.97, "iron_mg": 4.7},
        tags=("grains", "fiber", "magnesium"),
        description="Fiber and magnesium; steady blood sugar overnight",
    ),
    FoodItem(
        name="Turkey",
        energy_kcal_per_100g=189,
        key_nutrients={"tryptophan_mg": 287, "protein_g": 29.3, "methionine_mg": 762, "zinc_mg": 4.5},
        tags=("meat", "tryptophan", "protein"),
        description="High tryptophan content promotes melatonin synthesis",
    ),
    FoodItem(
        name="Kiwi",
        energy_kcal_per_100g=61,
        key_nutrients={"vitamin_c_mg": 92.7, "serotonin_mcg": 5.8, "potassium_mg": 312, "fiber_g": 3.0},
        tags=("fruit", "vitamin c", "serotonin"),
        description="Contains serotonin; shortened sleep onset in clinical trials",
    ),
    FoodItem(
        name="Pumpkin Seeds",
        energy_kcal_per_100g=559,
        key_nutrients={"magnesium_mg": 592, "zinc_mg": 7.81, "tryptophan_mg": 578, "iron_mg": 8.82},
        tags=("seeds", "magnesium", "zinc"),
        description="Among the highest magnesium and zinc contents",
    ),
    FoodItem(
        name="Sweet Potato",
        energy_kcal_per_100g=86,
        key_nutrients={"potassium_mg": 337, "vitamin_b6_mg": 0.3, "magnesium_mg": 25, "fiber_g": 3.0},
        tags=("vegetables", "potassium", "fiber"),
        description="Potassium for muscle relaxation",
    ),
    FoodItem(
        name="Tuna",
        energy_kcal_per_100g=144,
        key_nutrients={"vitamin_b6_mg": 1.05, "omega3_g": 0.28, "protein_g": 29.9, "vitamin_d_iu": 269},
        tags=("fish", "vitamin b6", "protein"),
        description="Vitamin B6 supports the serotonin pathway",
    ),
    FoodItem(
        name="Chamomile Tea",
        energy_kcal_per_100g=1,
        key_nutrients={"apigenin_mg": 28, "magnesium_mg": 2.0},
        tags=("beverages", "apigenin", "sleep aid"),
        description="Apigenin binds GABA receptors; mild calming effect",
    ),
    FoodItem(
        name="Greek Yogurt",
        energy_kcal_per_100g=59,
        key_nutrients={"protein_g": 10.3, "calcium_mg": 111, "tryptophan_mg": 35, "vitamin_b12_mcg": 0.75},
        tags=("dairy", "protein", "calcium"),
        description="A small bedtime serving supplies tryptophan",
    ),
)


NUTRIENT_SEARCH_TAGS: Dict[str, List[str]] = {
    "omega3_g": ["omega3", "fish", "nuts"],
    "vitamin_e_mg": ["vitamin e", "vitamin_e", "nuts"],
    "vitamin_d_iu": ["vitamin d", "vitamin_d", "fish", "eggs"],
    "magnesium_mg": ["magnesium", "seeds", "nuts"],
    "protein_g": ["protein", "meat", "fish"],
    "vitamin_b1_mg": ["vitamin b1", "thiamine", "grains"],
    "tryptophan_mg": ["tryptophan", "meat"],
    "methionine_mg": ["methionine", "eggs"],
    "valine_mg": ["valine", "legumes"],
    "iron_mg": ["iron", "vegetables"],
    "fiber_g": ["fiber", "vegetables", "grains"],
    "zinc_mg": ["zinc", "seeds"],
    "potassium_mg": ["potassium", "fruit"],
}


def nutrient_search_tags(nutrient_key: str) -> List[str]:
    """Free-text search tags for a nutrient; the key itself if none are curated."""
    return list(NUTRIENT_SEARCH_TAGS.get(nutrient_key, [nutrient_key]))


def _compact(text: str) -> str:
    return text.lower().replace("_", "").replace(" ", "")


class FoodRepository:
    """Read-only food catalog with tag/nutrient search."""

    def __init__(self, foods: Optional[Iterable[FoodItem]] = None):
        self._foods: Tuple[FoodItem, ...] = tuple(DEFAULT_FOODS if foods is None else foods)

    def __len__(self) -> int:
        return len(self._foods)

    def all(self) -> Tuple[FoodItem, ...]:
        return self._foods

    def get(self, name: str) -> Optional[FoodItem]:
        for food in self._foods:
            if food.name.lower() == name.lower():
                return food
        return None

    def score(self, food: FoodItem, search_terms: Sequence[str]) -> float:
        """
        Tag overlap plus nutrient content.
          +3.0 when a tag contains the term or the term contains a tag
          +0.5 * log(1 + amount) for the first nutrient key containing the term
        """
        score = 0.0
        for term in search_terms:
            t = term.lower()
            if any(tag.lower() in t or t in tag.lower() for tag in food.tags):
                score += TAG_MATCH_WEIGHT

            compact = _compact(term)
            if not compact:
                continue
            for key, amount in food.key_nutrients.items():
                if compact in _compact(key):
                    score += math.log1p(amount) * NUTRIENT_MATCH_WEIGHT
                    break
        return score

    def search(self, search_terms: Sequence[str], top_k: int = FOOD_SEARCH_TOP_K) -> List[FoodItem]:
        """Foods with a positive score, best first (catalog order on ties)."""
        scored = [(food, self.score(food, search_terms)) for food in self._foods]
        scored = [(f, s) for f, s in scored if s > 0]
        scored.sort(key=lambda fs: fs[1], reverse=True)
        return [f for f, _ in scored[:top_k]]
