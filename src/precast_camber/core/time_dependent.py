"""
Long-time camber by the PCI multiplier method.

The elastic release components are scaled by stage multipliers
(PCI Design Handbook Table 5.8.2):

    erection camber = Δp·C_p,erect - Δsw·C_sw,erect
    final camber    = Δp·C_p,final - Δsw·C_sw,final - Δll

Written in terms of the net release camber (Δp - Δsw):

    creep factor     = C_p,final
    shrinkage factor = C_sw,final - C_p,final
    final camber     = (Δp - Δsw)·creep - Δsw·shrinkage - Δll

Live load is a short-term service load and is applied once, unmultiplied.
"""

from dataclasses import dataclass
from typing import Optional

from precast_camber.config import MultiplierSet


@dataclass(frozen=True)
class TimeDependentResult:
    """Projected camber at erection and in service."""
    erection_camber: float  # in
    final_camber: float  # in
    long_term_deflection: float  # in, downward magnitude at service
    creep_factor: float
    shrinkage_factor: float
    recommended_camber: float  # in, target form camber


def creep_and_shrinkage_factors(multipliers: MultiplierSet) -> tuple:
    """(creep factor, shrinkage factor) from the final-stage multipliers."""
    creep = multipliers.final.prestress
    shrinkage = multipliers.final.self_weight - multipliers.final.prestress
    return creep, shrinkage


def project(
    initial_camber: float,
    net_initial_camber: float,
    dead_load_deflection: float,
    live_load_deflection: Optional[float],
    multipliers: MultiplierSet,
) -> TimeDependentResult:
    """
    Project release camber to erection and final (service) camber.

    Args:
        initial_camber: Δp at release (in, upward)
        net_initial_camber: Δp - Δsw at release (in)
        dead_load_deflection: Δsw at release (in, downward magnitude)
        live_load_deflection: Δll at service, or None
        multipliers: Erection and final multipliers for the member

    Returns:
        TimeDependentResult
    """
    creep, shrinkage = creep_and_shrinkage_factors(multipliers)
    live = live_load_deflection or 0.0

    final_camber = net_initial_camber * creep - dead_load_deflection * shrinkage - live
    long_term_deflection = dead_load_deflection * (creep + shrinkage) + live
    erection_camber = (
        initial_camber * multipliers.erection.prestress
        - dead_load_deflection * multipliers.erection.self_weight
    )

    return TimeDependentResult(
        erection_camber=erection_camber,
        final_camber=final_camber,
        long_term_deflection=long_term_deflection,
        creep_factor=creep,
        shrinkage_factor=shrinkage,
        recommended_camber=initial_camber,
    )
