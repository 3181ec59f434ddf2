# quantile_ensemble/methods/ensemble.py
from __future__ import annotations
from typing import Sequence
import numpy as np
from .base import ensure_scores, float_dtype, wrap_like
from .quantiles import get_quantile_scores
from .registry import DEFAULT_QUANTILES, get_statistic

__all__ = ["combine", "compute_ensemble", "quantile_ensemble"]


def _check_arity(n: int):
    if n < 2:
        raise ValueError(f"an ensemble needs at least 2 score arrays, got {n}")


def _check_shapes(arrays, check_dtype: bool = True):
    ref = arrays[0]
    for j, a in enumerate(arrays[1:], start=1):
        if a.shape != ref.shape:
            raise ValueError(f"scores[{j}] has shape {a.shape}, expected {ref.shape}")
        if check_dtype and a.dtype != ref.dtype:
            raise ValueError(f"scores[{j}] has dtype {a.dtype}, expected {ref.dtype}")


def combine(scores: Sequence, statistic: str = "mean"):
    """
    Fuse same-shaped score arrays position by position.

    The k arrays are stacked along a new trailing axis and that axis is
    reduced with `statistic` ("mean", "median", "max" or "min"). The result
    has the input shape and a floating dtype.
    """
    reducer = get_statistic(statistic)
    items = list(scores)
    _check_arity(len(items))
    arrays = [ensure_scores(s, name=f"scores[{j}]") for j, s in enumerate(items)]
    _check_shapes(arrays)

    dtype = float_dtype(arrays[0].dtype)
    stacked = np.stack(arrays, axis=-1).astype(dtype, copy=False)
    result = np.asarray(reducer(stacked, axis=-1), dtype=dtype)
    return wrap_like(items[0], result)


def compute_ensemble(*scores, ensemble: str = "mean"):
    """
    Compute the mean, median, max or min of the given anomaly score arrays.

    Scores of the different detectors should be comparable, e.g. by passing
    them through `get_quantile_scores` first (or use `quantile_ensemble`).

    >>> compute_ensemble([[1, 2], [3, 4]], [[5, 6], [7, 8]])
    array([[3., 4.],
           [5., 6.]])
    """
    return combine(scores, statistic=ensemble)


def quantile_ensemble(*raw_scores, quantiles=DEFAULT_QUANTILES, ensemble: str = "mean", overflow: str = "zero"):
    """Quantile-score every raw detector output, then fuse them with `ensemble`."""
    get_statistic(ensemble)
    _check_arity(len(raw_scores))
    arrays = [ensure_scores(s, name=f"scores[{j}]") for j, s in enumerate(raw_scores)]
    # raw detectors may emit different dtypes; the quantile scores are all float64
    _check_shapes(arrays, check_dtype=False)

    normalized = [
        get_quantile_scores(s, quantiles, overflow=overflow, name=f"scores[{j}]") for j, s in enumerate(raw_scores)
    ]
    return combine(normalized, statistic=ensemble)
