"""
JSON Serialization Helper - Converts pipeline outputs to JSON-compatible plain data
"""

import dataclasses
import json
import math
from datetime import datetime, date

import numpy as np
import pandas as pd


def serialize_for_json(obj):
    """
    Recursively convert non-JSON-serializable objects to strings or native types.

    Handles:
    - dataclasses (PropertyRecord, AggregateStats, ...) -> dict
    - pandas Timestamp / datetime / date -> ISO format string
    - numpy types -> Python native types
    - sets -> sorted list
    - NaN / infinity -> None
    - dict/list/tuple -> recursively process
    """
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return serialize_for_json(dataclasses.asdict(obj))
    elif isinstance(obj, (pd.Timestamp, datetime)):
        return obj.isoformat()
    elif isinstance(obj, date):
        return obj.isoformat()
    elif isinstance(obj, (np.integer, np.floating)):
        return serialize_for_json(obj.item())
    elif isinstance(obj, np.ndarray):
        return [serialize_for_json(item) for item in obj.tolist()]
    elif isinstance(obj, dict):
        return {key: serialize_for_json(value) for key, value in obj.items()}
    elif isinstance(obj, (set, frozenset)):
        return [serialize_for_json(item) for item in sorted(obj, key=str)]
    elif isinstance(obj, (list, tuple)):
        return [serialize_for_json(item) for item in obj]
    elif isinstance(obj, float) and not math.isfinite(obj):
        return None
    elif obj is None or isinstance(obj, (str, int, float, bool)):
        return obj
    elif pd.isna(obj):
        return None
    else:
        return obj


def safe_json_dumps(obj, **kwargs):
    """Safely convert object to JSON string, handling all pandas/datetime types"""
    serialized = serialize_for_json(obj)
    return json.dumps(serialized, default=str, ensure_ascii=False, **kwargs)
