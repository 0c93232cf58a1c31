from dataclasses import dataclass
from functools import lru_cache

import numpy as np

from anklesim.simulator.core.muscle.training_data import (
    FORCE_LENGTH__DATA,
    FORCE_VELOCITY__DATA,
    normalize_force_length_data,
)
from anklesim.simulator.core.regression import RegressionModel, fit_regression
from anklesim.utils.types import FLOAT_OR_ARRAY

# Regression hyper-parameters of the CE force-length curve
FORCE_LENGTH__N_CENTERS = 50
FORCE_LENGTH__WIDTH = 0.158
FORCE_LENGTH__RIDGE_LAMBDA = 0.01

# Regression hyper-parameters of the CE force-velocity curve
FORCE_VELOCITY__CENTER_RANGE = (-0.5, 0.0)
FORCE_VELOCITY__N_CENTERS = 6
FORCE_VELOCITY__WIDTH = 0.3
FORCE_VELOCITY__RIDGE_LAMBDA = 0.01


def _like_input(x: np.ndarray, result: np.ndarray) -> FLOAT_OR_ARRAY:
    return float(result) if x.ndim == 0 else result


def force_length_se(lT: FLOAT_OR_ARRAY) -> FLOAT_OR_ARRAY:
    """
    Normalised force-length curve of the series elastic element (tendon).

    Parameters
    ----------
    lT : float | np.ndarray
        Normalised tendon length.

    Returns
    -------
    float | np.ndarray
        Tendon force scale factor. Zero at or below the slack length of 1.
    """
    lT = np.asarray(lT, dtype=float)
    stretch = np.maximum(lT - 1.0, 0.0)
    return _like_input(lT, 10.0 * stretch + 240.0 * stretch**2)


def force_length_pe(lM: FLOAT_OR_ARRAY) -> FLOAT_OR_ARRAY:
    """
    Normalised force-length curve of the parallel elastic element.

    Parameters
    ----------
    lM : float | np.ndarray
        Normalised CE length.

    Returns
    -------
    float | np.ndarray
        Passive force scale factor. Zero at or below the resting length of 1.
    """
    lM = np.asarray(lM, dtype=float)
    stretch = np.maximum(lM - 1.0, 0.0)
    return _like_input(lM, 3.0 * stretch**2 / (0.6 + stretch))


@dataclass(frozen=True)
class ForceCurves:
    """
    Fitted CE force-length and force-velocity curves.

    Instances are immutable and meant to be built once and shared by every
    muscle (see :func:`get_default_force_curves`).

    Parameters
    ----------
    force_length_regression : RegressionModel
        Fitted CE force-length model.
    force_velocity_regression : RegressionModel
        Fitted CE force-velocity model.
    """

    force_length_regression: RegressionModel
    force_velocity_regression: RegressionModel

    def force_length_ce(self, lM: FLOAT_OR_ARRAY) -> FLOAT_OR_ARRAY:
        """CE force-length scale factor at normalised length ``lM``."""
        return self.force_length_regression.evaluate(lM)

    def force_velocity_ce(self, vM: FLOAT_OR_ARRAY) -> FLOAT_OR_ARRAY:
        """CE force-velocity scale factor at normalised velocity ``vM``, never negative."""
        vM = np.asarray(vM, dtype=float)
        return _like_input(
            vM, np.maximum(0.0, self.force_velocity_regression.evaluate(vM))
        )


def build_force_length_regression() -> RegressionModel:
    """
    Fit the CE force-length curve to the Winters et al. (2011) samples.

    Returns
    -------
    RegressionModel
        Model of the normalised force-length curve, peak near (1, 1).
    """
    norm_length, norm_force = normalize_force_length_data(
        FORCE_LENGTH__DATA[:, 0], FORCE_LENGTH__DATA[:, 1]
    )
    centers = np.linspace(norm_length[0], norm_length[-1], FORCE_LENGTH__N_CENTERS)
    return fit_regression(
        norm_length,
        norm_force,
        centers,
        FORCE_LENGTH__WIDTH,
        FORCE_LENGTH__RIDGE_LAMBDA,
        clamp_non_negative=True,
    )


def build_force_velocity_regression() -> RegressionModel:
    """
    Fit the CE force-velocity curve to the Millard et al. (2013) samples.

    Returns
    -------
    RegressionModel
        Model of the normalised force-velocity curve.
    """
    centers = np.linspace(*FORCE_VELOCITY__CENTER_RANGE, FORCE_VELOCITY__N_CENTERS)
    return fit_regression(
        FORCE_VELOCITY__DATA[:, 0],
        FORCE_VELOCITY__DATA[:, 1],
        centers,
        FORCE_VELOCITY__WIDTH,
        FORCE_VELOCITY__RIDGE_LAMBDA,
        clamp_non_negative=True,
    )


def build_force_curves() -> ForceCurves:
    """Fit both CE curves from the baked-in training data."""
    return ForceCurves(
        force_length_regression=build_force_length_regression(),
        force_velocity_regression=build_force_velocity_regression(),
    )


@lru_cache(maxsize=None)
def get_default_force_curves() -> ForceCurves:
    """
    Process-wide CE force curves.

    The curves are fitted on first use and the same instance is returned
    afterwards, so every muscle shares one pair of read-only models.
    """
    return build_force_curves()


def force_length_ce(lM: FLOAT_OR_ARRAY) -> FLOAT_OR_ARRAY:
    """CE force-length scale factor using the default curves."""
    return get_default_force_curves().force_length_ce(lM)


def force_velocity_ce(vM: FLOAT_OR_ARRAY) -> FLOAT_OR_ARRAY:
    """CE force-velocity scale factor using the default curves."""
    return get_default_force_curves().force_velocity_ce(vM)
