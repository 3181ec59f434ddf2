# quantile_ensemble/methods/quantiles.py
"""Quantile scoring: relabel raw anomaly scores with empirical quantile levels.

Scores from different detectors live on unrelated scales. Replacing each
score by the quantile level it falls into puts every detector on the same
discrete scale in [0, 1], so their outputs can be fused afterwards
(see `quantile_ensemble.methods.ensemble`).
"""
from __future__ import annotations
import warnings
import numpy as np
from .base import ensure_scores, ensure_quantiles, wrap_like
from .registry import DEFAULT_QUANTILES, OVERFLOW_POLICIES

__all__ = ["quantile_thresholds", "get_quantile_scores", "get_quantile_scores_into"]


def _flat_values(arr: np.ndarray, name: str = "scores") -> np.ndarray:
    flat = arr.ravel()
    if flat.size == 0:
        raise ValueError(f"{name} must contain at least one element")
    if flat.dtype.kind != "f":
        flat = flat.astype(np.float64)
    if not np.isfinite(flat).all():
        raise ValueError(f"{name} must be finite; quantiles are undefined")
    return flat


def quantile_thresholds(scores, quantiles=DEFAULT_QUANTILES) -> np.ndarray:
    """
    Empirical quantiles of the flattened `scores`, one per quantile level.

    Uses the linear-interpolation estimator: the fractional rank q*(L-1) in
    the sorted sample is interpolated between its two neighbouring order
    statistics.
    """
    q = ensure_quantiles(quantiles)
    flat = _flat_values(ensure_scores(scores))
    return np.quantile(flat, q, method="linear")


def _assign_levels(flat: np.ndarray, thresholds: np.ndarray, q: np.ndarray):
    levels = np.zeros(flat.shape, dtype=np.float64)
    matched = flat <= thresholds[0]
    levels[matched] = q[0]
    # scan in order; a later clause overwrites an earlier one
    for i in range(1, len(q)):
        hit = (flat > thresholds[i - 1]) & (flat <= thresholds[i])
        levels[hit] = q[i]
        matched |= hit
    return levels, ~matched


def get_quantile_scores_into(out: np.ndarray, scores, quantiles=DEFAULT_QUANTILES, overflow: str = "zero",
                             name: str = "scores") -> np.ndarray:
    """
    Write the quantile scores of `scores` into the preallocated `out`.

    Each element x gets quantiles[0] if x <= T[0], otherwise quantiles[i]
    for the threshold interval T[i-1] < x <= T[i] it falls into. Elements
    above the last threshold match no interval: with ``overflow="zero"``
    they are written as 0.0 (and a RuntimeWarning is emitted), with
    ``overflow="top"`` they get quantiles[-1]. This only happens when the
    quantile levels stop below 1.0.

    Args:
        out: floating ndarray with the same shape as `scores`; the only
            object mutated.
        scores: N-dimensional numeric array (ndarray, list, pandas object).
        quantiles: strictly increasing levels in [0, 1].
        overflow: "zero" or "top".
        name: label used in error and warning messages.

    Returns:
        out
    """
    arr = ensure_scores(scores, name=name)
    if not isinstance(out, np.ndarray):
        raise ValueError(f"out must be a numpy ndarray, got {type(out).__name__}")
    if out.dtype.kind != "f":
        raise ValueError(f"out must have a floating dtype, got {out.dtype}")
    if out.shape != arr.shape:
        raise ValueError(f"out has shape {out.shape}, {name} has shape {arr.shape}")
    if overflow not in OVERFLOW_POLICIES:
        raise ValueError(f"overflow must be one of {OVERFLOW_POLICIES}, got {overflow!r}")

    q = ensure_quantiles(quantiles)
    flat = _flat_values(arr, name)
    thresholds = np.quantile(flat, q, method="linear")

    if flat.size > 1 and thresholds[0] == thresholds[-1]:
        warnings.warn(f"{name} are constant; every element maps to the lowest quantile level", RuntimeWarning)

    levels, overflowed = _assign_levels(flat, thresholds, q)
    n_over = int(overflowed.sum())
    if n_over:
        if overflow == "top":
            levels[overflowed] = q[-1]
        else:
            warnings.warn(
                f"{n_over} element(s) of {name} exceed the highest threshold ({float(thresholds[-1])!r}) and were set to 0.0",
                RuntimeWarning,
            )

    out[...] = levels.reshape(arr.shape)
    return out


def get_quantile_scores(scores, quantiles=DEFAULT_QUANTILES, overflow: str = "zero", name: str = "scores"):
    """
    Return the quantile levels of an N-dimensional anomaly `scores` array.

    The result has the shape of `scores` and dtype float64; pandas inputs
    come back as the same pandas type with their index/columns.

    >>> get_quantile_scores([0.1, 0.5, 0.9], quantiles=[0.0, 0.5, 1.0])
    array([0. , 0.5, 1. ])
    """
    arr = ensure_scores(scores, name=name)
    out = np.zeros(arr.shape, dtype=np.float64)
    get_quantile_scores_into(out, arr, quantiles, overflow=overflow, name=name)
    return wrap_like(scores, out)
