"""
Daily record loader.
Reads N-of-1 study exports (JSON or flat CSV) into validated DailyRecords.
"""
import json
from pathlib import Path
from typing import List, Optional

import pandas as pd

from nof1_engine.config import SAMPLE_RECORDS_PATH
from nof1_engine.data_prep.timeline_builder import DailyRecord
from nof1_engine.data_prep.variable_catalog import NUTRIENTS, OUTCOMES
from nof1_engine.safety.guards import RecordValidationError, UnknownVariableError


def load_daily_records(path: Optional[Path] = None) -> List[DailyRecord]:
    """
    Load daily records from a JSON export.

    Accepts either a bare list of records or an object with a
    "daily_records" list (the study export format, which may also carry
    a "user" block that is ignored here).
    """
    path = Path(path or SAMPLE_RECORDS_PATH)
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    if isinstance(data, dict):
        raw_records = data.get("daily_records")
        if raw_records is None:
            raise RecordValidationError(f"{path.name} has no 'daily_records' list")
    else:
        raw_records = data

    if not isinstance(raw_records, list):
        raise RecordValidationError(f"{path.name}: 'daily_records' must be a list")

    return [DailyRecord.from_dict(raw, index=i) for i, raw in enumerate(raw_records)]


def load_daily_records_csv(path: Path) -> List[DailyRecord]:
    """
    Load daily records from a flat CSV: one row per day,
    a "date" column plus one column per nutrient and outcome key.
    Row order in the file is kept as study-day order.
    """
    df = pd.read_csv(path)
    if "date" not in df.columns:
        raise RecordValidationError(f"{Path(path).name} has no 'date' column")

    unknown = set(df.columns) - {"date"} - set(NUTRIENTS) - set(OUTCOMES)
    if unknown:
        raise UnknownVariableError("column", unknown)

    records = []
    for i, row in enumerate(df.to_dict(orient="records")):
        raw = {
            "date": row["date"],
            "nutrition": {k: row[k] for k in NUTRIENTS if k in row},
            "outcomes": {k: row[k] for k in OUTCOMES if k in row},
        }
        records.append(DailyRecord.from_dict(raw, index=i))
    return records


def load_records(path: Path) -> List[DailyRecord]:
    """Dispatch on file extension."""
    path = Path(path)
    if path.suffix.lower() == ".csv":
        return load_daily_records_csv(path)
    return load_daily_records(path)


def load_user_name(path: Optional[Path] = None) -> Optional[str]:
    """Read the optional study participant name from a JSON export."""
    path = Path(path or SAMPLE_RECORDS_PATH)
    if path.suffix.lower() == ".csv":
        return None
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if isinstance(data, dict):
        return (data.get("user") or {}).get("name")
    return None
