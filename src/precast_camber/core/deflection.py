"""
Instantaneous deflections of a simply supported member.

Formulas (consistent units: lb, in, psi):
- Camber from straight strands, constant eccentricity:
      Δp = P·e·L² / (8·Ec·I)            (upward, positive)
- Uniform load:
      Δw = 5·w·L⁴ / (384·Ec·I)          (downward, reported as a magnitude)
"""

from dataclasses import dataclass
from typing import Optional

from precast_camber.utils.constants import INCHES_PER_FOOT, LB_PER_KIP


@dataclass(frozen=True)
class DeflectionComponents:
    """Elastic components at one concrete modulus."""
    camber_from_prestress: float  # in, upward
    dead_load_deflection: float  # in, downward magnitude
    live_load_deflection: Optional[float]  # in, downward magnitude

    @property
    def net_camber(self) -> float:
        return self.camber_from_prestress - self.dead_load_deflection


def prestress_camber(force_kips: float, eccentricity: float, span_ft: float,
                     ec_psi: float, inertia: float) -> float:
    """Δp = P·e·L² / (8·Ec·I), inches."""
    length = span_ft * INCHES_PER_FOOT
    return force_kips * LB_PER_KIP * eccentricity * length ** 2 / (8.0 * ec_psi * inertia)


def uniform_load_deflection(load_plf: float, span_ft: float,
                            ec_psi: float, inertia: float) -> float:
    """Δ = 5·w·L⁴ / (384·Ec·I), inches, for w in lb/ft."""
    length = span_ft * INCHES_PER_FOOT
    w = load_plf / INCHES_PER_FOOT
    return 5.0 * w * length ** 4 / (384.0 * ec_psi * inertia)


def deflections(
    force_kips: float,
    eccentricity: float,
    span_ft: float,
    inertia: float,
    ec_psi: float,
    dead_load: float,
    live_load: Optional[float] = None,
) -> DeflectionComponents:
    """
    Superpose prestress camber, self-weight and live load deflection.

    All components use the single modulus *ec_psi*; the engine calls this
    with the release modulus for camber and self weight.
    """
    return DeflectionComponents(
        camber_from_prestress=prestress_camber(force_kips, eccentricity, span_ft, ec_psi, inertia),
        dead_load_deflection=uniform_load_deflection(dead_load, span_ft, ec_psi, inertia),
        live_load_deflection=(
            None if live_load is None
            else uniform_load_deflection(live_load, span_ft, ec_psi, inertia)
        ),
    )
