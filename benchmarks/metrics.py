"""Performance metrics for multi-objective optimization benchmarks.

The hypervolume comes from pymoo; the distance-based indicators are the ones
shipped with niche-forge, so every library is measured with the same code.
"""

import numpy as np
from pymoo.indicators.hv import HV

from niche_forge.indicators import igd, igd_plus


def hypervolume(objectives: np.ndarray, ref_point: np.ndarray | None = None) -> float:
    """Volume of objective space dominated by a front and bounded by ref_point.

    Larger is better. It rewards both closeness to the true front and spread
    along it.

    Args:
        objectives: (n, n_obj) objective values of the approximation.
        ref_point: Upper corner of the measured box. Defaults to 1.1 in every
            objective, just beyond the (1, ..., 1) nadir of the ZDT problems.

    Raises:
        ValueError: If objectives is empty or not two-dimensional.
    """
    if objectives.ndim != 2 or len(objectives) == 0:
        raise ValueError(f"objectives must be a non-empty 2D array, got shape {objectives.shape}")

    if ref_point is None:
        ref_point = np.full(objectives.shape[1], 1.1)
    return float(HV(ref_point=ref_point)(objectives))


def front_quality(objectives: np.ndarray, true_front: np.ndarray) -> dict[str, float]:
    """Hypervolume, IGD and IGD+ of a front approximation.

    Args:
        objectives: (n, n_obj) objective values of the approximation.
        true_front: (m, n_obj) sample of the true Pareto front.

    Returns:
        Dictionary with keys "hypervolume", "igd" and "igd_plus".
    """
    return {
        "hypervolume": hypervolume(objectives),
        "igd": igd(objectives, true_front),
        "igd_plus": igd_plus(objectives, true_front),
    }
