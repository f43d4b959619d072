"""
Personal profile digest.
Fixed-template text built from the headline effects.
"""
from typing import Sequence

from nof1_engine.inference.effect_engine import ITEResult

SUMMARY_TEMPLATE = (
    "Your {n_days}-day N-of-1 data analysis:\n"
    "✅ Beneficial nutrients: {positive}\n"
    "⚠️ Nutrients to watch: {negative}"
)
NONE_DETECTED = "none detected"


def format_headline(result: ITEResult) -> str:
    return f"{result.nutrient_label} (ITE: {result.ite_value:+.2f})"


def _join(results: Sequence[ITEResult]) -> str:
    if not results:
        return NONE_DETECTED
    return ", ".join(format_headline(r) for r in results)


def build_personal_summary(
    top_positive: Sequence[ITEResult],
    top_negative: Sequence[ITEResult],
    n_days: int,
) -> str:
    return SUMMARY_TEMPLATE.format(
        n_days=n_days,
        positive=_join(top_positive),
        negative=_join(top_negative),
    )
