from typing import Any

import seaborn as sns
from matplotlib.axes import Axes

from anklesim.simulator import SimulationResult


def plot_body_angle(
    result: SimulationResult,
    ax: Axes,
    apply_default_formatting: bool = True,
    **kwargs: Any,
) -> Axes:
    """
    Plot the body angle over time.

    Parameters
    ----------
    result : SimulationResult
        Output of :func:`anklesim.simulator.simulate`.
    ax : Axes
        The axes to plot on.
    apply_default_formatting : bool, optional
        Whether to apply default formatting to the plot, by default True
    **kwargs : Any
        Additional keyword arguments to pass to the plot function. Only used if apply_default_formatting is False.

    Returns
    -------
    Axes
        The axes with the plot.
    """
    if apply_default_formatting:
        ax.plot(result.time, result.theta, "black")
        ax.set_xlabel("Time (s)")
        ax.set_ylabel("Body Angle (rad)")
        sns.despine(ax=ax, top=True, right=True, trim=True, offset=0)
    else:
        ax.plot(result.time, result.theta, **kwargs)

    return ax


def plot_ankle_torques(
    result: SimulationResult,
    ax: Axes,
    apply_default_formatting: bool = True,
    **kwargs: Any,
) -> Axes:
    """
    Plot the soleus, tibialis + exoskeleton and gravity moments about the ankle.

    Parameters
    ----------
    result : SimulationResult
        Output of :func:`anklesim.simulator.simulate`.
    ax : Axes
        The axes to plot on.
    apply_default_formatting : bool, optional
        Whether to apply default formatting to the plot, by default True
    **kwargs : Any
        Additional keyword arguments to pass to the plot function. Only used if apply_default_formatting is False.

    Returns
    -------
    Axes
        The axes with the plot.
    """
    torques = [
        (result.soleus_torque, "r", "soleus"),
        (result.tibialis_exo_torque, "g", "tibialis+exo"),
        (result.gravity_torque, "k", "gravity"),
    ]

    for torque, color, label in torques:
        if apply_default_formatting:
            ax.plot(result.time, torque, color, label=label)
        else:
            ax.plot(result.time, torque, label=label, **kwargs)

    if apply_default_formatting:
        ax.set_xlabel("Time (s)")
        ax.set_ylabel("Torques (Nm)")
        ax.legend()
        sns.despine(ax=ax, top=True, right=True, trim=True, offset=0)

    return ax
