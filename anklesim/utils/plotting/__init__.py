from anklesim.utils.plotting.force_curves import (
    plot_force_curves,
    plot_force_velocity_curve,
)
from anklesim.utils.plotting.simulation import plot_ankle_torques, plot_body_angle

__all__ = [
    "plot_force_curves",
    "plot_force_velocity_curve",
    "plot_ankle_torques",
    "plot_body_angle",
]
