"""
Output data models for camber calculation results.
"""

from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CalculationStep(BaseModel):
    """Single calculation step for transparency."""
    model_config = ConfigDict(frozen=True)

    step_number: int
    description: str
    formula: str
    substitution: str
    result: float
    unit: str
    code_reference: Optional[str] = None


class CamberResults(BaseModel):
    """Camber prediction for one member.

    Deflections are in inches (camber upward positive, load deflections as
    positive downward magnitudes), moduli in psi, forces in kips.
    """
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    initial_camber: float
    net_initial_camber: float
    erection_camber: float
    final_camber: float
    recommended_camber: float
    dead_load_deflection: float
    live_load_deflection: Optional[float] = None
    long_term_deflection: float

    release_modulus_of_elasticity: float
    modulus_of_elasticity: float
    creep_factor: float
    shrinkage_factor: float

    prestress_force: float = 0.0
    eccentricity: float = 0.0
    active_strand_count: int = 0

    code_name: str = ""
    calculation_steps: List[CalculationStep] = Field(default_factory=list)

    def to_record(self) -> Dict[str, Any]:
        """camelCase dict in the shape the history store persists."""
        return self.model_dump(mode="json", by_alias=True, exclude={"calculation_steps"})

    @property
    def summary(self) -> str:
        """One-line summary for lists and logs."""
        return (
            f"Recommended camber {self.recommended_camber:.3f} in | "
            f"final {self.final_camber:.3f} in | "
            f"P = {self.prestress_force:.1f} k, e = {self.eccentricity:.2f} in"
        )


class CamberValidationError(ValueError):
    """Raised by :meth:`CamberOutcome.raise_for_errors` for rejected inputs."""

    def __init__(self, errors: Tuple[str, ...]):
        self.errors = tuple(errors)
        bullet_list = "\n  - ".join(self.errors)
        super().__init__(
            f"Camber inputs failed validation with {len(self.errors)} error(s):\n"
            f"  - {bullet_list}"
        )


class CamberOutcome(BaseModel):
    """Either a full set of results or the list of validation violations."""
    model_config = ConfigDict(frozen=True)

    results: Optional[CamberResults] = None
    errors: Tuple[str, ...] = ()

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def raise_for_errors(self) -> CamberResults:
        """Return the results, or raise :class:`CamberValidationError`."""
        if self.errors:
            raise CamberValidationError(self.errors)
        return self.results
