"""
Input validation for camber calculations.

Every check runs, so the user sees the complete correction list at once.
Messages are plain sentences ready to show on the calculator form.
"""

from typing import List

from precast_camber.models.inputs import CamberInputs
from precast_camber.models.strands import StrandLibrary, StrandPattern
from precast_camber.utils.constants import OFFCUT_SIDE_REQUIRED
from . import strand_geometry


def _check_pattern(
    pattern: StrandPattern,
    library: StrandLibrary,
    is_top: bool,
    errors: List[str],
) -> bool:
    """Append problems with one strand pattern to *errors*; True when usable."""
    label = "Top strand pattern" if is_top else "Strand pattern"

    if not pattern.coordinates:
        errors.append(
            f"{label} {pattern.pattern_id} has no strand coordinates; "
            f"eccentricity cannot be determined."
        )
        return False

    grade_errors = strand_geometry.grade_problems(pattern, library)
    errors.extend(grade_errors)
    return not grade_errors


def validate(
    inputs: CamberInputs,
    library: StrandLibrary,
    tolerance: float = 0.01,
) -> List[str]:
    """
    Check *inputs* against the calculation's domain constraints.

    Args:
        inputs: Member and strand inputs
        library: Strand grade table used to resolve patterns
        tolerance: Cut-width tolerance (in)

    Returns:
        Human-readable violations; an empty list means the inputs are valid
    """
    errors: List[str] = []

    if inputs.span <= 0:
        errors.append("Span must be greater than zero.")
    if inputs.release_strength <= 0:
        errors.append("Release strength (f'ci) must be greater than zero.")
    if inputs.concrete_strength <= 0:
        errors.append("28-day strength (f'c) must be greater than zero.")
    if inputs.concrete_strength <= inputs.release_strength:
        errors.append(
            "28-day strength (f'c) must be greater than release strength (f'ci)."
        )
    if inputs.moment_of_inertia <= 0:
        errors.append("Moment of inertia must be greater than zero.")
    if inputs.dead_load < 0:
        errors.append("Dead load cannot be negative.")
    if inputs.live_load is not None and inputs.live_load < 0:
        errors.append("Live load cannot be negative.")

    if inputs.product_width is not None and inputs.product_width <= 0:
        errors.append("Product width must be greater than zero.")
    if inputs.centroid_height is not None and inputs.centroid_height <= 0:
        errors.append("Section centroid height must be greater than zero.")
    if inputs.has_strands and inputs.centroid_height is None:
        errors.append("Enter the section centroid height (yb) to use a strand pattern.")

    bottom_ok = True
    if inputs.strand_pattern is not None:
        bottom_ok = _check_pattern(inputs.strand_pattern, library, False, errors)
    if inputs.top_strand_pattern is not None:
        _check_pattern(inputs.top_strand_pattern, library, True, errors)

    if inputs.product_width is not None and inputs.product_width <= 0:
        return _unique(errors)

    # One saw line for both patterns, set by the bottom pattern's casting width
    full_width = strand_geometry.casting_width(
        inputs.strand_pattern, inputs.top_strand_pattern
    )
    cut = strand_geometry.is_cut_width(full_width, inputs.product_width, tolerance)
    if cut and inputs.offcut_side is None:
        errors.append(OFFCUT_SIDE_REQUIRED)
        return _unique(errors)

    # A top pattern may lose every strand to the offcut
    if inputs.strand_pattern is not None and bottom_ok:
        active = strand_geometry.resolve(
            inputs.strand_pattern, library, inputs.product_width,
            inputs.offcut_side, tolerance, full_width=full_width,
        )
        if active.is_empty:
            errors.append(active.reason)

    return _unique(errors)


def _unique(errors: List[str]) -> List[str]:
    seen = set()
    ordered = []
    for message in errors:
        if message not in seen:
            seen.add(message)
            ordered.append(message)
    return ordered
