"""Elastic modulus of concrete from compressive strength.

``Ec = coefficient * fc ** exponent`` (psi).  The coefficient and exponent
come from the engine's design code; with the ACI 318 normalweight values
(57000, 0.5) this is the familiar ``57000 * sqrt(f'c)``.
"""

from __future__ import annotations

from precast_camber.codes.base_code import DesignCode


def elastic_modulus(fc_psi: float, coefficient: float, exponent: float) -> float:
    """Return Ec in psi for a compressive strength *fc_psi* in psi.

    Parameters
    ----------
    fc_psi : float
        Concrete compressive strength, psi.  Must be positive (checked by the
        validator before the engine calls this).
    coefficient, exponent : float
        Empirical formula parameters.

    Returns
    -------
    float
        Modulus of elasticity, psi.
    """
    return coefficient * fc_psi ** exponent


class ElasticModulusCalculator:
    """Ec at release and at 28 days using a code's formula parameters."""

    def __init__(self, code: DesignCode):
        self.coefficient, self.exponent = code.get_elastic_modulus_parameters()

    def __call__(self, fc_psi: float) -> float:
        return elastic_modulus(fc_psi, self.coefficient, self.exponent)

    def release_and_service(self, release_psi: float, final_psi: float) -> tuple[float, float]:
        """(Eci, Ec) for release strength f'ci and 28-day strength f'c."""
        return self(release_psi), self(final_psi)
