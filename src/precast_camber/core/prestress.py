"""
Prestress force and eccentricity of the active strands.

Sign convention:
- eccentricity e = yb - ȳ, positive when the strand centroid is below the
  section's neutral axis (bottom strands, upward camber)
- top strands sit above the neutral axis, so their e is negative and their
  moment P·e subtracts from the bottom strands' moment
"""

from dataclasses import dataclass

from .strand_geometry import ActiveStrandSet


@dataclass(frozen=True)
class PrestressForce:
    """Effective prestress after release of the casting-bed jacks."""
    total_force: float  # P (kips)
    eccentricity: float  # e (in)
    strand_count: int = 0

    @property
    def moment(self) -> float:
        """Prestress moment P·e (kip-in)."""
        return self.total_force * self.eccentricity


NO_PRESTRESS = PrestressForce(total_force=0.0, eccentricity=0.0, strand_count=0)


def force(
    active: ActiveStrandSet,
    pulling_force_percent: float,
    centroid_height: float,
) -> PrestressForce:
    """
    Prestress force from the active strands of one pattern.

    P = Σ (breaking strength of each strand's grade × pulling force % / 100)
    e = yb - ȳ

    Args:
        active: Active strand set from the geometry resolver
        pulling_force_percent: Jacking force as % of minimum breaking strength
        centroid_height: Section neutral axis height yb (in)

    Returns:
        PrestressForce (zero force for an empty set)
    """
    if active.is_empty:
        return NO_PRESTRESS

    fraction = pulling_force_percent / 100.0
    total = sum(strand.breaking_strength * fraction for strand in active.strands)
    return PrestressForce(
        total_force=total,
        eccentricity=centroid_height - active.area_weighted_centroid_y,
        strand_count=active.count,
    )


def combine(bottom: PrestressForce, top: PrestressForce) -> PrestressForce:
    """
    Superpose bottom and top strand contributions.

    P = Pb + Pt
    M = Pb·eb + Pt·et
    e = M / P
    """
    total = bottom.total_force + top.total_force
    if total == 0:
        return NO_PRESTRESS
    moment = bottom.moment + top.moment
    return PrestressForce(
        total_force=total,
        eccentricity=moment / total,
        strand_count=bottom.strand_count + top.strand_count,
    )
