from typing import Any

import numpy as np
import seaborn as sns
from matplotlib.axes import Axes

from anklesim.simulator import ExoskeletonSpring, ForceCurves, get_default_force_curves
from anklesim.simulator.core.muscle import force_length_pe, force_length_se


def plot_force_curves(
    ax: Axes,
    force_curves: ForceCurves | None = None,
    exo_stiffness: float | None = None,
    apply_default_formatting: bool = True,
    **kwargs: Any,
) -> Axes:
    """
    Plot the CE, PE and SE force-length curves.

    Parameters
    ----------
    ax : Axes
        The axes to plot on.
    force_curves : ForceCurves, optional
        Fitted CE curves. Defaults to the process-wide curves.
    exo_stiffness : float, optional
        If given, also plot the force of an exoskeleton spring with this
        physical spring constant.
    apply_default_formatting : bool, optional
        Whether to apply default formatting to the plot, by default True
    **kwargs : Any
        Additional keyword arguments to pass to the plot function. Only used if apply_default_formatting is False.

    Returns
    -------
    Axes
        The axes with the plot.
    """
    if force_curves is None:
        force_curves = get_default_force_curves()

    lM = np.arange(0, 1.8, 0.01)
    lT = np.arange(0, 1.07, 0.01)

    curves = [
        (lM, force_curves.force_length_ce(lM), "r", "CE"),
        (lM, force_length_pe(lM), "g", "PE"),
        (lT, force_length_se(lT), "b", "SE"),
    ]
    if exo_stiffness is not None:
        exoskeleton = ExoskeletonSpring(exo_stiffness)
        curves.append((lM, exoskeleton.force(lM), "y", "Exoskeleton"))

    for x, y, color, label in curves:
        if apply_default_formatting:
            ax.plot(x, y, color, label=label)
        else:
            ax.plot(x, y, label=label, **kwargs)

    if apply_default_formatting:
        ax.set_xlim(0, 2)
        ax.set_ylim(0, 1.1)
        ax.set_xlabel("Normalized length")
        ax.set_ylabel("Force scale factor")
        ax.legend(loc="upper left")
        sns.despine(ax=ax, top=True, right=True, trim=False, offset=0)

    return ax


def plot_force_velocity_curve(
    ax: Axes,
    force_curves: ForceCurves | None = None,
    apply_default_formatting: bool = True,
    **kwargs: Any,
) -> Axes:
    """
    Plot the CE force-velocity curve.
    """
    if force_curves is None:
        force_curves = get_default_force_curves()

    vM = np.arange(-1.2, 1.2, 0.01)

    if apply_default_formatting:
        ax.plot(vM, force_curves.force_velocity_ce(vM), "k")
        ax.set_xlim(-1.5, 1.5)
        ax.set_ylim(0, 1.5)
        ax.set_xlabel("Normalized CE velocity")
        ax.set_ylabel("Force scale factor")
        sns.despine(ax=ax, top=True, right=True, trim=False, offset=0)
    else:
        ax.plot(vM, force_curves.force_velocity_ce(vM), **kwargs)

    return ax
