from __future__ import annotations
import numpy as np
import pandas as pd

NUMERIC_KINDS = set(list("biuf"))  # bool, int, unsigned, float


def ensure_scores(scores, name: str = "scores") -> np.ndarray:
    """Return `scores` as a numeric ndarray without copying when possible."""
    arr = np.asarray(scores)
    if arr.dtype.kind not in NUMERIC_KINDS:
        raise ValueError(f"{name} must be numeric, got dtype {arr.dtype}")
    return arr


def ensure_quantiles(quantiles) -> np.ndarray:
    q = np.asarray(quantiles, dtype=float)
    if q.ndim != 1 or q.size == 0:
        raise ValueError("quantiles must be a non-empty 1-D sequence")
    if not np.all(np.isfinite(q)) or q[0] < 0.0 or q[-1] > 1.0:
        raise ValueError(f"quantiles must lie in [0, 1], got [{q.min()}, {q.max()}]")
    if np.any(np.diff(q) <= 0):
        raise ValueError("quantiles must be strictly increasing")
    return q


def float_dtype(dtype) -> np.dtype:
    # keep float precision, promote bool/int to float64
    dtype = np.dtype(dtype)
    return dtype if dtype.kind == "f" else np.dtype(np.float64)


def wrap_like(template, values: np.ndarray):
    """Give `values` the pandas container of `template`, if it had one."""
    if isinstance(template, pd.DataFrame):
        return pd.DataFrame(values, index=template.index, columns=template.columns)
    if isinstance(template, pd.Series):
        return pd.Series(values, index=template.index, name=template.name)
    return values
