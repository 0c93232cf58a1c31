import matplotlib.pyplot as plt
import pytest

from anklesim.simulator import simulate
from anklesim.utils.plotting import (
    plot_ankle_torques,
    plot_body_angle,
    plot_force_curves,
    plot_force_velocity_curve,
)


@pytest.fixture(scope="module")
def result():
    return simulate(horizon__s=0.2)


@pytest.fixture
def ax():
    fig, ax = plt.subplots()
    yield ax
    plt.close(fig)


def test_plot_force_curves(ax):
    plot_force_curves(ax)

    assert len(ax.get_lines()) == 3
    assert ax.get_xlabel() == "Normalized length"


def test_plot_force_curves_with_exoskeleton(ax):
    plot_force_curves(ax, exo_stiffness=100.0)

    assert [line.get_label() for line in ax.get_lines()] == [
        "CE",
        "PE",
        "SE",
        "Exoskeleton",
    ]


def test_plot_force_velocity_curve_with_custom_style(ax):
    plot_force_velocity_curve(ax, apply_default_formatting=False, color="red")

    assert len(ax.get_lines()) == 1
    assert ax.get_xlabel() == ""


def test_plot_body_angle(ax, result):
    plot_body_angle(result, ax)

    assert len(ax.get_lines()[0].get_xdata()) == len(result)


def test_plot_ankle_torques(ax, result):
    plot_ankle_torques(result, ax)

    assert len(ax.get_lines()) == 3
    assert ax.get_ylabel() == "Torques (Nm)"
