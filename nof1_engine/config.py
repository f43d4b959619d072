"""
N-of-1 Nutrition Engine — Configuration
Paths, constants, and estimation settings.
"""
from pathlib import Path

# ── Base paths ──────────────────────────────────────────────────
BASE_DIR = Path(__file__).resolve().parent.parent
DATA_DIR = BASE_DIR / "data"
OUTPUT_DIR = BASE_DIR / "output_data"

# ── Data files ──────────────────────────────────────────────────
SAMPLE_RECORDS_PATH = DATA_DIR / "sample_daily_records.json"
PROFILE_JSON_NAME = "personal_profile.json"

# ── Statistical floor ───────────────────────────────────────────
MIN_RECORDS = 3              # Fewer study days cannot support an estimate
VARIANCE_EPS = 1e-12         # std <= eps * max(1, |mean|) counts as constant

# ── Mediation ───────────────────────────────────────────────────
MEDIATOR_KEY = "sleep_efficiency_pct"
MEDIATION_WEIGHT = 0.3       # Share of the indirect path credited to the total

# ── Confidence & filtering ─────────────────────────────────────
MIN_CORRELATION = 0.20       # |r| below this is not reported
MAX_CONFIDENCE = 0.99
DIRECTION_THRESHOLD = 0.5    # Absolute, in outcome units

# ── Population baseline (ATE placeholder) ──────────────────────
ATE_DAMPING = 0.7
ATE_JITTER_HALF_WIDTH = 1.0  # Uniform jitter on [-w, +w]
DEFAULT_SEED = 42

# ── Ranking & summary ──────────────────────────────────────────
TOP_K_PER_OUTCOME = 5
HEADLINE_POSITIVE = 3
HEADLINE_NEGATIVE = 2

# ── Output precision ───────────────────────────────────────────
ITE_DECIMALS = 4
CONFIDENCE_DECIMALS = 3

# ── Downstream consumers ───────────────────────────────────────
ACTIONABLE_ITE_THRESHOLD = 0.5
FOOD_SEARCH_TOP_K = 5
DEFAULT_HEALTH_GOAL = "overall_sleep_score"
