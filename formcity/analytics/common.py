"""
Numeric helpers shared by property statistics and JSON responses.
"""
from __future__ import annotations

import math
from typing import Any, Iterable, Optional

import numpy as np
import pandas as pd


def safe_divide(numerator: float, denominator: float, default: float = 0.0) -> float:
    """numerator / denominator, or ``default`` when the divisor is 0/NaN or the result is NaN."""
    if not denominator or pd.isna(denominator):
        return default
    quotient = numerator / denominator
    return quotient if not pd.isna(quotient) else default


def sum_or_zero(values: Iterable[Optional[float]]) -> float:
    """Sum treating missing values as 0."""
    return float(sum(v for v in values if v is not None))


def _native_float(value: float) -> float:
    value = float(value)
    return value if math.isfinite(value) else 0.0


def sanitize_for_json(obj: Any) -> Any:
    """Walk dicts/lists and turn numpy scalars and NaN into plain JSON values.

    Non-finite floats become 0.0; other missing scalars (NaT, pd.NA) become None.
    """
    if isinstance(obj, dict):
        return {str(key): sanitize_for_json(val) for key, val in obj.items() if key is not None}
    if isinstance(obj, (list, tuple)):
        return [sanitize_for_json(item) for item in obj]
    if isinstance(obj, np.bool_):
        return bool(obj)
    if isinstance(obj, np.integer):
        return int(obj)
    if isinstance(obj, (float, np.floating)):
        return _native_float(obj)
    if pd.api.types.is_scalar(obj) and pd.isna(obj):
        return None
    return obj
