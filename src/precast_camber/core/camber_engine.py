"""
Camber prediction orchestrator for pretensioned precast members.

Coordinates the calculation workflow:
1. Input validation (all violations collected)
2. Elastic modulus at release and at 28 days
3. Active strands of the bottom and top patterns (cut-width subsetting)
4. Prestress force and eccentricity by moment superposition
5. Instantaneous camber and load deflections
6. Erection and final camber by the PCI multiplier method
"""

from typing import List, Optional, Tuple

from loguru import logger

from precast_camber.codes.base_code import DesignCode
from precast_camber.codes.pci import PCIHandbook
from precast_camber.config import load_strand_library
from precast_camber.models.inputs import CamberInputs
from precast_camber.models.outputs import CalculationStep, CamberOutcome, CamberResults
from precast_camber.models.strands import StrandLibrary, StrandPattern
from . import strand_geometry
from .deflection import deflections, uniform_load_deflection
from .elastic_modulus import ElasticModulusCalculator
from .prestress import NO_PRESTRESS, PrestressForce, combine, force
from .time_dependent import project
from .validator import validate


class CamberEngine:
    """
    Main calculation engine for precast camber.

    The design code (Ec formula, multipliers, cut tolerance) and the strand
    library are fixed at construction; ``calculate`` is pure and safe to call
    from several threads.
    """

    def __init__(self, code: DesignCode = None, library: StrandLibrary = None):
        self.code = code or PCIHandbook.from_tables()
        self.library = library or load_strand_library()
        self.modulus = ElasticModulusCalculator(self.code)
        self.tolerance = self.code.get_cut_width_tolerance()

    def validate(self, inputs: CamberInputs) -> List[str]:
        """Validation violations for *inputs* (empty when valid)."""
        return validate(inputs, self.library, self.tolerance)

    def calculate(self, inputs: CamberInputs) -> CamberOutcome:
        """
        Execute the complete camber calculation.

        Args:
            inputs: CamberInputs with member, loads and strand patterns

        Returns:
            CamberOutcome holding either CamberResults or the violation list
        """
        errors = self.validate(inputs)
        if errors:
            logger.info("Camber inputs rejected with {} error(s)", len(errors))
            for message in errors:
                logger.debug("  - {}", message)
            return CamberOutcome(errors=tuple(errors))

        steps: List[CalculationStep] = []
        code_ref = self.code.code_name

        # Concrete moduli
        eci, ec = self.modulus.release_and_service(
            inputs.release_strength, inputs.concrete_strength
        )
        coef, exp = self.code.get_elastic_modulus_parameters()
        steps.append(CalculationStep(
            step_number=len(steps) + 1,
            description="Modulus of elasticity at release (Eci)",
            formula=f"Eci = {coef:g} × f'ci^{exp:g}",
            substitution=f"= {coef:g} × {inputs.release_strength:g}^{exp:g}",
            result=round(eci, 0),
            unit="psi",
            code_reference=code_ref,
        ))
        steps.append(CalculationStep(
            step_number=len(steps) + 1,
            description="Modulus of elasticity at 28 days (Ec)",
            formula=f"Ec = {coef:g} × f'c^{exp:g}",
            substitution=f"= {coef:g} × {inputs.concrete_strength:g}^{exp:g}",
            result=round(ec, 0),
            unit="psi",
            code_reference=code_ref,
        ))

        # Prestress
        prestress = self._prestress(inputs, steps)
        logger.debug(
            "P = {:.2f} k, e = {:.3f} in, {} active strands",
            prestress.total_force, prestress.eccentricity, prestress.strand_count,
        )

        # Instantaneous deflections at release
        components = deflections(
            prestress.total_force,
            prestress.eccentricity,
            inputs.span,
            inputs.moment_of_inertia,
            eci,
            inputs.dead_load,
        )
        initial = components.camber_from_prestress
        dead = components.dead_load_deflection
        net_initial = initial - dead

        steps.append(CalculationStep(
            step_number=len(steps) + 1,
            description="Camber from prestress at release",
            formula="Δp = P·e·L² / (8·Eci·I)",
            substitution=(
                f"= {prestress.total_force:.2f}k × {prestress.eccentricity:.3f} × "
                f"({inputs.span_inches:.1f})² / (8 × {eci:.0f} × {inputs.moment_of_inertia:g})"
            ),
            result=round(initial, 3),
            unit="in",
            code_reference=code_ref,
        ))
        steps.append(CalculationStep(
            step_number=len(steps) + 1,
            description="Self-weight deflection at release",
            formula="Δsw = 5·w·L⁴ / (384·Eci·I)",
            substitution=(
                f"= 5 × {inputs.dead_load:g}/12 × ({inputs.span_inches:.1f})⁴ / "
                f"(384 × {eci:.0f} × {inputs.moment_of_inertia:g})"
            ),
            result=round(dead, 3),
            unit="in",
            code_reference=code_ref,
        ))
        steps.append(CalculationStep(
            step_number=len(steps) + 1,
            description="Net camber at release",
            formula="Δnet = Δp - Δsw",
            substitution=f"= {initial:.3f} - {dead:.3f}",
            result=round(net_initial, 3),
            unit="in",
        ))

        # Live load is a service load on the mature member
        live: Optional[float] = None
        if inputs.live_load is not None:
            live = uniform_load_deflection(
                inputs.live_load, inputs.span, ec, inputs.moment_of_inertia
            )
            steps.append(CalculationStep(
                step_number=len(steps) + 1,
                description="Live load deflection",
                formula="Δll = 5·wl·L⁴ / (384·Ec·I)",
                substitution=(
                    f"= 5 × {inputs.live_load:g}/12 × ({inputs.span_inches:.1f})⁴ / "
                    f"(384 × {ec:.0f} × {inputs.moment_of_inertia:g})"
                ),
                result=round(live, 3),
                unit="in",
                code_reference=code_ref,
            ))

        # Long-time camber
        multipliers = self.code.get_multipliers(inputs.composite_topping)
        projected = project(initial, net_initial, dead, live, multipliers)
        steps.append(CalculationStep(
            step_number=len(steps) + 1,
            description="Camber at erection",
            formula="Δerect = Δp·Cp - Δsw·Csw",
            substitution=(
                f"= {initial:.3f} × {multipliers.erection.prestress:g} - "
                f"{dead:.3f} × {multipliers.erection.self_weight:g}"
            ),
            result=round(projected.erection_camber, 3),
            unit="in",
            code_reference=f"{code_ref}, long-time multipliers",
        ))
        steps.append(CalculationStep(
            step_number=len(steps) + 1,
            description="Final camber in service",
            formula="Δfinal = Δnet·Ccreep - Δsw·Cshrink - Δll",
            substitution=(
                f"= {net_initial:.3f} × {projected.creep_factor:g} - "
                f"{dead:.3f} × {projected.shrinkage_factor:g} - {live or 0.0:.3f}"
            ),
            result=round(projected.final_camber, 3),
            unit="in",
            code_reference=f"{code_ref}, long-time multipliers",
        ))

        results = CamberResults(
            initial_camber=initial,
            net_initial_camber=net_initial,
            erection_camber=projected.erection_camber,
            final_camber=projected.final_camber,
            recommended_camber=projected.recommended_camber,
            dead_load_deflection=dead,
            live_load_deflection=live,
            long_term_deflection=projected.long_term_deflection,
            release_modulus_of_elasticity=eci,
            modulus_of_elasticity=ec,
            creep_factor=projected.creep_factor,
            shrinkage_factor=projected.shrinkage_factor,
            prestress_force=prestress.total_force,
            eccentricity=prestress.eccentricity,
            active_strand_count=prestress.strand_count,
            code_name=self.code.code_name,
            calculation_steps=steps,
        )
        logger.info(results.summary)
        return CamberOutcome(results=results)

    def _prestress(self, inputs: CamberInputs, steps: List[CalculationStep]) -> PrestressForce:
        """Combined bottom and top strand prestress for validated inputs."""
        if not inputs.has_strands:
            return NO_PRESTRESS

        bottom, bottom_ybar = self._pattern_force(inputs, inputs.strand_pattern)
        top, top_ybar = self._pattern_force(inputs, inputs.top_strand_pattern)

        for label, part, ybar in (("bottom", bottom, bottom_ybar), ("top", top, top_ybar)):
            if ybar is None:
                continue
            steps.append(CalculationStep(
                step_number=len(steps) + 1,
                description=f"Prestress force, {label} strands ({part.strand_count} active)",
                formula="P = Σ fpu·Aps × pull %",
                substitution=f"e = yb - ȳ = {inputs.centroid_height:g} - {ybar:.3f}",
                result=round(part.total_force, 2),
                unit="kips",
            ))

        combined = combine(bottom, top)
        if top.strand_count:
            steps.append(CalculationStep(
                step_number=len(steps) + 1,
                description="Combined eccentricity",
                formula="e = (Pb·eb + Pt·et) / (Pb + Pt)",
                substitution=(
                    f"= ({bottom.total_force:.2f}×{bottom.eccentricity:.3f} + "
                    f"{top.total_force:.2f}×{top.eccentricity:.3f}) / {combined.total_force:.2f}"
                ),
                result=round(combined.eccentricity, 3),
                unit="in",
            ))
        return combined

    def _pattern_force(
        self, inputs: CamberInputs, pattern: Optional[StrandPattern]
    ) -> Tuple[PrestressForce, Optional[float]]:
        if pattern is None:
            return NO_PRESTRESS, None
        active = strand_geometry.resolve(
            pattern,
            self.library,
            inputs.product_width,
            inputs.offcut_side,
            self.tolerance,
            full_width=strand_geometry.casting_width(
                inputs.strand_pattern, inputs.top_strand_pattern
            ),
        )
        if active.is_empty:
            logger.debug(active.reason)
            return NO_PRESTRESS, None
        return (
            force(active, pattern.pulling_force_percent, inputs.centroid_height),
            active.area_weighted_centroid_y,
        )


def calculate_camber(
    inputs: CamberInputs,
    code: DesignCode = None,
    library: StrandLibrary = None,
) -> CamberOutcome:
    """Convenience wrapper: build an engine and run one calculation."""
    return CamberEngine(code, library).calculate(inputs)
