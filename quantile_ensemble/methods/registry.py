from __future__ import annotations
from typing import Dict, Callable
import numpy as np

# Reducers over the stacking axis; median of an even count averages the middle pair.
STATISTICS: Dict[str, Callable[..., np.ndarray]] = {
"mean": lambda a, axis: np.mean(a, axis=axis),
"median": lambda a, axis: np.median(a, axis=axis),
"max": lambda a, axis: np.max(a, axis=axis),
"min": lambda a, axis: np.min(a, axis=axis),
}


# 0.00, 0.01, ..., 1.00
DEFAULT_QUANTILES = np.round(np.linspace(0.0, 1.0, 101), 2)
DEFAULT_QUANTILES.flags.writeable = False

OVERFLOW_POLICIES = ("zero", "top")


def get_statistic(name: str) -> Callable[..., np.ndarray]:
    if name not in STATISTICS:
        raise ValueError(f"unknown ensemble statistic {name!r}; expected one of {sorted(STATISTICS)}")
    return STATISTICS[name]
