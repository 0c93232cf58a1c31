from typing import Literal

import numpy as np

from anklesim.simulator.core.dynamics.activation import (
    ActivationPolicy,
    policy_for_control_mode,
)
from anklesim.simulator.core.exoskeleton import ExoskeletonSpring
from anklesim.simulator.core.geometry import (
    UPRIGHT__rad,
    gravity_moment,
    soleus_length,
    tibialis_length,
)
from anklesim.simulator.core.integration import integrate
from anklesim.simulator.core.muscle import ForceCurves, HillTypeMuscle
from anklesim.simulator.core.settings import IntegratorSettings, VelocitySolverSettings
from anklesim.utils.exceptions import RootFindDivergenceError
from anklesim.utils.types import BODY_STATE__VECTOR, beartowertype

SOLEUS_MOMENT_ARM__m = 0.05
TIBIALIS_MOMENT_ARM__m = 0.03
ANKLE_INERTIA__kg_m2 = 90.0

SOLEUS_MAX_FORCE__N = 16000.0
TIBIALIS_MAX_FORCE__N = 2000.0
CE_LENGTH_FRACTION = 0.6  # share of the rest muscle-tendon length taken by the CE

# [theta, omega, lce_soleus, lce_tibialis]: upright, at rest, both CEs at rest length
INITIAL_STATE = np.array([UPRIGHT__rad, 0.0, 1.0, 1.0])


class AnkleDynamicsSystem:
    """
    Inverted-pendulum ankle model actuated by the soleus and tibialis anterior.

    The state is ``[theta, omega, lce_soleus, lce_tibialis]``: body angle (rad, up
    from the prone horizontal), angular velocity, and the normalised CE lengths of
    the two muscles. An optional exoskeleton spring acts in parallel with the
    tibialis anterior.

    Parameters
    ----------
    soleus : HillTypeMuscle
        Soleus model.
    tibialis : HillTypeMuscle
        Tibialis anterior model.
    exoskeleton : ExoskeletonSpring
        Passive spring in parallel with the tibialis anterior.
    activation_policy : ActivationPolicy
        Callable ``(t, theta) -> (a_soleus, a_tibialis)``.
    warm_start : bool, default=False
        If True, each velocity solve starts from the previous solution of the same
        muscle. This cuts root finder iterations but makes :meth:`derivative`
        depend on call history, so repeated calls agree only to solver tolerance.
    """

    def __init__(
        self,
        soleus: HillTypeMuscle,
        tibialis: HillTypeMuscle,
        exoskeleton: ExoskeletonSpring,
        activation_policy: ActivationPolicy,
        warm_start: bool = False,
    ):
        self.soleus = soleus
        self.tibialis = tibialis
        self.exoskeleton = exoskeleton
        self.activation_policy = activation_policy
        self.warm_start = warm_start

        self._last_velocities = (0.0, 0.0)

    @classmethod
    @beartowertype
    def build(
        cls,
        control_mode: Literal[0, 1] = 0,
        exo_stiffness: float = 0.0,
        activation_policy: ActivationPolicy | None = None,
        force_curves: ForceCurves | None = None,
        solver_settings: VelocitySolverSettings | None = None,
        warm_start: bool = False,
    ) -> "AnkleDynamicsSystem":
        """
        Assemble the standard two-muscle ankle model.

        Both muscles take their rest muscle-tendon length from the upright posture,
        60 % of it as CE and 40 % as SE.

        Parameters
        ----------
        control_mode : {0, 1}, default=0
            Selects the activation policy (see :func:`policy_for_control_mode`).
            Ignored when ``activation_policy`` is given.
        exo_stiffness : float, default=0.0
            Physical spring constant of the exoskeleton.
        activation_policy : ActivationPolicy, optional
            Explicit activation policy.
        force_curves : ForceCurves, optional
            Shared CE curves. Defaults to the process-wide curves.
        solver_settings : VelocitySolverSettings, optional
            Velocity solver settings for both muscles.
        warm_start : bool, default=False
            See :class:`AnkleDynamicsSystem`.

        Returns
        -------
        AnkleDynamicsSystem
        """
        muscle_kwargs = dict(force_curves=force_curves, solver_settings=solver_settings)
        soleus = HillTypeMuscle.from_muscle_tendon_length(
            SOLEUS_MAX_FORCE__N,
            soleus_length(UPRIGHT__rad),
            CE_LENGTH_FRACTION,
            name="soleus",
            **muscle_kwargs,
        )
        tibialis = HillTypeMuscle.from_muscle_tendon_length(
            TIBIALIS_MAX_FORCE__N,
            tibialis_length(UPRIGHT__rad),
            CE_LENGTH_FRACTION,
            name="tibialis",
            **muscle_kwargs,
        )
        if activation_policy is None:
            activation_policy = policy_for_control_mode(control_mode)

        return cls(
            soleus,
            tibialis,
            ExoskeletonSpring(exo_stiffness),
            activation_policy,
            warm_start=warm_start,
        )

    def derivative(self, t: float, state: np.ndarray) -> np.ndarray:
        """
        Right-hand side of the equations of motion.

        Parameters
        ----------
        t : float
            Time in seconds.
        state : np.ndarray
            ``[theta, omega, lce_soleus, lce_tibialis]``.

        Returns
        -------
        np.ndarray
            ``[omega, angular acceleration, dlce_soleus/dt, dlce_tibialis/dt]``.

        Raises
        ------
        RootFindDivergenceError
            If a CE velocity cannot be solved; the time and state are attached.
        """
        theta, omega, lce_soleus, lce_tibialis = state

        soleus_mt_length = soleus_length(theta)
        tibialis_mt_length = tibialis_length(theta)
        lse_soleus = self.soleus.normalized_length_se(soleus_mt_length, lce_soleus)
        lse_tibialis = self.tibialis.normalized_length_se(
            tibialis_mt_length, lce_tibialis
        )

        a_soleus, a_tibialis = self.activation_policy(t, theta)
        exo_force = self.exoskeleton.force(lce_tibialis)

        torque = (
            self.soleus.force(soleus_mt_length, lce_soleus) * SOLEUS_MOMENT_ARM__m
            - self.tibialis.force(tibialis_mt_length, lce_tibialis)
            * TIBIALIS_MOMENT_ARM__m
            - exo_force * TIBIALIS_MOMENT_ARM__m
            + gravity_moment(theta)
        )

        guess_soleus, guess_tibialis = (
            self._last_velocities if self.warm_start else (0.0, 0.0)
        )
        try:
            dlce_soleus = self.soleus.velocity(
                a_soleus, 0.0, lce_soleus, lse_soleus, guess_soleus
            )
            # the exoskeleton acts in parallel with the tibialis only
            dlce_tibialis = self.tibialis.velocity(
                a_tibialis, exo_force, lce_tibialis, lse_tibialis, guess_tibialis
            )
        except RootFindDivergenceError as e:
            raise RootFindDivergenceError(
                "CE velocity could not be solved",
                time=float(t),
                state=[float(x) for x in state],
                **e.context,
            ) from e

        if self.warm_start:
            self._last_velocities = (dlce_soleus, dlce_tibialis)

        return np.array(
            [omega, torque / ANKLE_INERTIA__kg_m2, dlce_soleus, dlce_tibialis]
        )

    @beartowertype
    def integrate(
        self,
        horizon__s: float,
        initial_state: BODY_STATE__VECTOR | None = None,
        integrator_settings: IntegratorSettings | None = None,
    ):
        """
        Integrate the model from ``t=0`` to ``t=horizon__s``.

        Parameters
        ----------
        horizon__s : float
            Simulated duration in seconds.
        initial_state : np.ndarray, optional
            Initial state. Defaults to :data:`INITIAL_STATE`.
        integrator_settings : IntegratorSettings, optional
            ODE solver settings.

        Returns
        -------
        scipy.integrate.OdeResult
            Solver output with accepted times ``t`` and states ``y`` (4 x n).

        Raises
        ------
        IntegrationFailureError
            If the solver stops before the horizon.
        RootFindDivergenceError
            If a CE velocity cannot be solved along the way.
        """
        if initial_state is None:
            initial_state = INITIAL_STATE
        self._last_velocities = (0.0, 0.0)
        return integrate(
            self.derivative, horizon__s, initial_state, integrator_settings
        )
