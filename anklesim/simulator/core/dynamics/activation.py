"""
Activation policies driving the two ankle muscles.

A policy is any callable ``policy(t, theta) -> (a_soleus, a_tibialis)``. Two
foot-drop control laws exist and they are not equivalent: one switches on the
body angle (:class:`FootDropActivation`), the other follows the phase of a gait
cycle (:class:`GaitCycleActivation`). They are kept as separate strategies.
"""

from dataclasses import dataclass
from typing import Literal, Protocol, runtime_checkable

import numpy as np

from anklesim.simulator.core.regression import RegressionModel, fit_regression
from anklesim.utils.types import beartowertype


@runtime_checkable
class ActivationPolicy(Protocol):
    def __call__(self, t: float, theta: float) -> tuple[float, float]: ...


@dataclass(frozen=True)
class ConstantActivation:
    """
    Fixed activations (uncontrolled model).

    Parameters
    ----------
    soleus : float, default=0.05
        Soleus activation.
    tibialis : float, default=0.4
        Tibialis anterior activation.
    """

    soleus: float = 0.05
    tibialis: float = 0.4

    def __call__(self, t: float, theta: float) -> tuple[float, float]:
        return self.soleus, self.tibialis


@dataclass(frozen=True)
class FootDropActivation:
    """
    Angle-driven foot-drop control law.

    The tibialis anterior is essentially silent. The soleus drive drops to a
    near-zero level once the body angle exceeds ``threshold__rad``.

    Parameters
    ----------
    threshold__rad : float, default=3*pi/4
        Body angle above which the low soleus drive is used.
    soleus_above_threshold : float, default=0.00011
        Soleus activation for ``theta > threshold__rad``.
    soleus_below_threshold : float, default=0.009
        Soleus activation otherwise.
    tibialis : float, default=1e-8
        Tibialis anterior activation.
    """

    threshold__rad: float = 3 * np.pi / 4
    soleus_above_threshold: float = 0.00011
    soleus_below_threshold: float = 0.009
    tibialis: float = 1e-8

    def __call__(self, t: float, theta: float) -> tuple[float, float]:
        if theta > self.threshold__rad:
            return self.soleus_above_threshold, self.tibialis
        return self.soleus_below_threshold, self.tibialis


class GaitCycleActivation:
    """
    Time-driven foot-drop control law following the phase of a gait cycle.

    Activation-vs-phase curves are fitted with :class:`RegressionModel` to
    user-supplied samples. At time ``t`` the phase is
    ``(t mod gait_cycle_period__s) / gait_cycle_period__s`` and each activation is
    the fitted curve at that phase, clipped to [0, 1]. The body angle is ignored.

    Parameters
    ----------
    soleus_samples : np.ndarray
        Array of shape (n, 2) with (phase, activation) pairs for the soleus.
        Phases are fractions of the gait cycle in [0, 1].
    tibialis_samples : np.ndarray
        Same for the tibialis anterior.
    gait_cycle_period__s : float, default=1.0
        Duration of one gait cycle in seconds.
    n_centers : int, default=10
        Number of basis functions, evenly spaced on [0, 1].
    width : float, default=0.1
        Width of the basis functions.
    ridge_lambda : float, default=0.01
        Ridge regularisation strength.

    Raises
    ------
    ValueError
        If the sample arrays are not of shape (n, 2) or the period is not positive.
    """

    @beartowertype
    def __init__(
        self,
        soleus_samples: np.ndarray,
        tibialis_samples: np.ndarray,
        gait_cycle_period__s: float = 1.0,
        n_centers: int = 10,
        width: float = 0.1,
        ridge_lambda: float = 0.01,
    ):
        if gait_cycle_period__s <= 0:
            raise ValueError(
                f"gait_cycle_period__s must be positive, got {gait_cycle_period__s}"
            )
        for name, samples in (("soleus", soleus_samples), ("tibialis", tibialis_samples)):
            if samples.ndim != 2 or samples.shape[1] != 2:
                raise ValueError(
                    f"{name}_samples must have shape (n, 2), got {samples.shape}"
                )

        self.gait_cycle_period__s = float(gait_cycle_period__s)
        centers = np.linspace(0.0, 1.0, n_centers)
        self.soleus_regression = self._fit(soleus_samples, centers, width, ridge_lambda)
        self.tibialis_regression = self._fit(
            tibialis_samples, centers, width, ridge_lambda
        )

    @staticmethod
    def _fit(
        samples: np.ndarray, centers: np.ndarray, width: float, ridge_lambda: float
    ) -> RegressionModel:
        return fit_regression(
            samples[:, 0].astype(float),
            samples[:, 1].astype(float),
            centers,
            width,
            ridge_lambda,
            clamp_non_negative=True,
        )

    def phase(self, t: float) -> float:
        """Fraction of the current gait cycle completed at time ``t``."""
        return (t % self.gait_cycle_period__s) / self.gait_cycle_period__s

    def __call__(self, t: float, theta: float) -> tuple[float, float]:
        phase = self.phase(t)
        return (
            float(np.clip(self.soleus_regression.evaluate(phase), 0.0, 1.0)),
            float(np.clip(self.tibialis_regression.evaluate(phase), 0.0, 1.0)),
        )


def policy_for_control_mode(control_mode: Literal[0, 1]) -> ActivationPolicy:
    """
    Activation policy selected by a control mode.

    Parameters
    ----------
    control_mode : {0, 1}
        0 for fixed activations, 1 for the angle-driven foot-drop law.

    Returns
    -------
    ActivationPolicy
        :class:`ConstantActivation` or :class:`FootDropActivation` with default values.

    Raises
    ------
    ValueError
        If ``control_mode`` is not 0 or 1.
    """
    match control_mode:
        case 0:
            return ConstantActivation()
        case 1:
            return FootDropActivation()
        case _:
            raise ValueError(f"Unknown control_mode: {control_mode}")
