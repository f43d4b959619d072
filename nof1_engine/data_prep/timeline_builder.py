"""
Daily timeline builder.

Turns the ordered sequence of DailyRecords into a single DataFrame:
one row per study day, one column per nutrient and outcome key.

Row i is day i for every column. Rows are never re-sorted, so a nutrient
series and an outcome series pulled from the same timeline stay aligned.
"""
import math
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Dict, Mapping, Optional, Sequence, Union

import numpy as np
import pandas as pd

from nof1_engine.data_prep.variable_catalog import NUTRIENTS, OUTCOMES
from nof1_engine.safety.guards import RecordValidationError, UnknownVariableError


@dataclass(frozen=True)
class DailyRecord:
    """One study day: what was eaten and what was measured."""
    date: date
    nutrition: Dict[str, float]
    outcomes: Dict[str, float]

    def __post_init__(self):
        _validate_block(self.nutrition, NUTRIENTS, "nutrient", None, non_negative=True)
        _validate_block(self.outcomes, OUTCOMES, "outcome", None, non_negative=False)

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any], index: Optional[int] = None) -> "DailyRecord":
        """
        Build a validated record from its JSON shape.

        Accepts either "outcomes" or "health_outcomes" for the outcome block.
        Every catalog key must be present; unknown keys are rejected.
        """
        if "date" not in raw:
            raise RecordValidationError("missing 'date'", index)
        nutrition = raw.get("nutrition")
        outcomes = raw.get("outcomes", raw.get("health_outcomes"))
        if not isinstance(nutrition, Mapping):
            raise RecordValidationError("missing 'nutrition' block", index)
        if not isinstance(outcomes, Mapping):
            raise RecordValidationError("missing 'outcomes' block", index)

        return cls(
            date=_parse_date(raw["date"], index),
            nutrition=_validate_block(nutrition, NUTRIENTS, "nutrient", index, non_negative=True),
            outcomes=_validate_block(outcomes, OUTCOMES, "outcome", index, non_negative=False),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "date": self.date.isoformat(),
            "nutrition": dict(self.nutrition),
            "outcomes": dict(self.outcomes),
        }


def _parse_date(value: Any, index: Optional[int] = None) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return pd.Timestamp(str(value)).date()
    except (ValueError, TypeError):
        raise RecordValidationError(f"unparseable date {value!r}", index)


def _validate_block(
    block: Mapping[str, Any],
    catalog: Mapping[str, Any],
    kind: str,
    index: Optional[int],
    non_negative: bool,
) -> Dict[str, float]:
    unknown = set(block) - set(catalog)
    if unknown:
        raise UnknownVariableError(kind, unknown)

    missing = [k for k in catalog if k not in block]
    if missing:
        raise RecordValidationError(f"missing {kind} key(s): {', '.join(missing)}", index)

    values = {}
    for key in catalog:
        try:
            val = float(block[key])
        except (TypeError, ValueError):
            raise RecordValidationError(f"{key}={block[key]!r} is not a number", index)
        if not math.isfinite(val):
            raise RecordValidationError(f"{key} is not finite", index)
        if non_negative and val < 0:
            raise RecordValidationError(f"{key}={val} is negative", index)
        values[key] = val
    return values


def coerce_records(records: Sequence[Union[DailyRecord, Mapping[str, Any]]]) -> list:
    """Accept DailyRecords or raw dicts; validate the dicts."""
    coerced = []
    for i, rec in enumerate(records):
        if isinstance(rec, DailyRecord):
            coerced.append(rec)
        else:
            coerced.append(DailyRecord.from_dict(rec, index=i))
    return coerced


def build_daily_timeline(records: Sequence[DailyRecord]) -> pd.DataFrame:
    """
    Flatten records into a wide daily timeline.

    Returns:
        DataFrame with columns [date, <nutrient keys>, <outcome keys>],
        rows in input order (index 0..n-1).
    """
    rows = []
    for rec in records:
        row = {"date": pd.Timestamp(rec.date)}
        row.update(rec.nutrition)
        row.update(rec.outcomes)
        rows.append(row)

    columns = ["date"] + list(NUTRIENTS) + list(OUTCOMES)
    if not rows:
        return pd.DataFrame(columns=columns)

    timeline = pd.DataFrame(rows)
    ordered = [c for c in columns if c in timeline.columns]
    return timeline[ordered].reset_index(drop=True)


def extract_series(timeline: pd.DataFrame, key: str) -> np.ndarray:
    """Pull one variable out of the timeline as a float array (day order preserved)."""
    if key not in timeline.columns:
        raise KeyError(f"{key} not in timeline")
    return timeline[key].to_numpy(dtype=float)
