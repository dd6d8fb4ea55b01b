"""
Active strand resolution for full-width and cut-width products.

A cut-width product is sawn from a full-width casting.  Strands outside the
retained width are cut off with the offcut and carry no prestress, so the
force and the strand centroid used downstream depend on which strands remain.

Conventions:
- x is measured from the left edge, y from the bottom (inches)
- full width = largest strand x of the bottom pattern; a top pattern is cut
  on the same saw line
- L1 (left removed):  strand active iff x >= full_width - product_width
- L2 (right removed): strand active iff x <= product_width
- A strand exactly on the saw line stays active
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np
from loguru import logger

from precast_camber.models.inputs import OffcutSide
from precast_camber.models.strands import (
    StrandCoordinate, StrandGrade, StrandLibrary, StrandPattern, StrandSize
)
from precast_camber.utils.tables import ConfigurationError


@dataclass(frozen=True)
class ActiveStrand:
    """One strand retained in the product, with its library grade."""
    size: StrandSize
    grade: StrandGrade
    x: float
    y: float
    order: int

    @property
    def area(self) -> float:
        return self.grade.area

    @property
    def breaking_strength(self) -> float:
        return self.grade.breaking_strength


@dataclass(frozen=True)
class ActiveStrandSet:
    """Strands that remain active after geometry subsetting."""
    strands: Tuple[ActiveStrand, ...]
    area_weighted_centroid_y: Optional[float]  # ȳ (in), None when empty
    total_area: float  # in²
    full_width: Optional[float]  # in
    is_cut: bool
    reason: Optional[str] = None  # why the set is empty

    @property
    def count(self) -> int:
        return len(self.strands)

    @property
    def is_empty(self) -> bool:
        return not self.strands

    @classmethod
    def empty(cls, reason: str, full_width: Optional[float] = None,
              is_cut: bool = False) -> "ActiveStrandSet":
        return cls(
            strands=(),
            area_weighted_centroid_y=None,
            total_area=0.0,
            full_width=full_width,
            is_cut=is_cut,
            reason=reason,
        )


def pattern_full_width(pattern: StrandPattern) -> Optional[float]:
    """Full geometric width of a pattern (largest strand x), if positioned."""
    return pattern.full_width


def casting_width(
    bottom: Optional[StrandPattern],
    top: Optional[StrandPattern] = None,
) -> Optional[float]:
    """Width of the casting both patterns were pulled in.

    The bottom pattern defines the bed width; the top pattern only stands in
    when no bottom pattern is given.  Both patterns share this one saw line.
    """
    for pattern in (bottom, top):
        if pattern is not None and pattern.coordinates:
            return pattern.full_width
    return None


def is_cut_width(
    full_width: Optional[float],
    product_width: Optional[float],
    tolerance: float,
) -> bool:
    """True when the product is narrower than the pattern by more than *tolerance*."""
    if full_width is None or product_width is None:
        return False
    return full_width - product_width > tolerance


def grade_problems(pattern: StrandPattern, library: StrandLibrary) -> List[str]:
    """Sizes or grades used by *pattern* that the strand library cannot supply."""
    problems = []
    for size in StrandSize:
        if pattern.counts_by_size.get(size, 0) == 0:
            continue
        if library.first_grade(size) is None:
            problems.append(
                f'No strand grade is configured for {size.value}" strands '
                f"(pattern {pattern.pattern_id})."
            )
            continue
        for label in pattern.grade_counts.get(size, {}):
            if library.lookup(size, label) is None:
                problems.append(
                    f'Strand grade {label} is not defined for {size.value}" strands '
                    f"(pattern {pattern.pattern_id})."
                )
    return problems


def _assign_grades(
    pattern: StrandPattern, library: StrandLibrary
) -> List[Tuple[StrandCoordinate, StrandGrade]]:
    """Pair every coordinate with its strand grade.

    Within one size, strands in ``order`` sequence take grades in the order the
    pattern lists them; a size with no grade breakdown uses the library's
    first grade for that size.
    """
    assigned = []
    for size in StrandSize:
        coords = sorted(
            (c for c in pattern.coordinates if c.size == size),
            key=lambda c: c.order,
        )
        if not coords:
            continue

        sequence = [
            label
            for label, n in pattern.grade_counts.get(size, {}).items()
            for _ in range(n)
        ]
        fallback = library.first_grade(size)

        for i, coord in enumerate(coords):
            grade = library.lookup(size, sequence[i]) if i < len(sequence) else fallback
            if grade is None:
                raise ConfigurationError(
                    f'Strand library has no grade for {size.value}" strand '
                    f"{sequence[i] if i < len(sequence) else '(default)'}"
                )
            assigned.append((coord, grade))
    return assigned


def _is_active(x: float, full_width: float, product_width: float,
               offcut_side: OffcutSide) -> bool:
    if offcut_side is OffcutSide.L1:
        return x >= full_width - product_width
    return x <= product_width


def resolve(
    pattern: StrandPattern,
    library: StrandLibrary,
    product_width: Optional[float] = None,
    offcut_side: Optional[OffcutSide] = None,
    tolerance: float = 0.01,
    full_width: Optional[float] = None,
) -> ActiveStrandSet:
    """
    Determine the active strands of *pattern* and their centroid.

    Args:
        pattern: Strand pattern snapshot (must carry coordinates)
        library: Strand grade table for area and breaking strength
        product_width: Finished product width in inches (None = full width)
        offcut_side: Which side was sawn off (required to subset a cut product)
        tolerance: Width difference (in) below which the product is not cut
        full_width: Casting width to cut from (defaults to this pattern's widest
            strand; pass the bottom pattern's width for a top pattern)

    Returns:
        ActiveStrandSet; empty (with a reason) instead of dividing by zero
    """
    if not pattern.coordinates:
        return ActiveStrandSet.empty(
            f"Pattern {pattern.pattern_id} has no strand coordinates."
        )

    if full_width is None:
        full_width = pattern.full_width
    cut = is_cut_width(full_width, product_width, tolerance)
    assigned = _assign_grades(pattern, library)

    if cut and offcut_side is not None:
        side = OffcutSide(offcut_side)
        assigned = [
            (coord, grade) for coord, grade in assigned
            if _is_active(coord.x, full_width, product_width, side)
        ]

    if not assigned:
        return ActiveStrandSet.empty(
            f"No strands remain in pattern {pattern.pattern_id} after removing the "
            f"{OffcutSide(offcut_side).description.split()[0]} offcut.",
            full_width=full_width,
            is_cut=cut,
        )

    strands = tuple(
        ActiveStrand(size=coord.size, grade=grade, x=coord.x, y=coord.y, order=coord.order)
        for coord, grade in assigned
    )
    areas = np.array([s.area for s in strands])
    ys = np.array([s.y for s in strands])
    total_area = float(areas.sum())
    centroid = float(np.dot(areas, ys) / total_area)

    logger.debug(
        "Pattern {}: {}/{} strands active, As = {:.3f} in², ȳ = {:.3f} in",
        pattern.pattern_id, len(strands), len(pattern.coordinates), total_area, centroid,
    )
    return ActiveStrandSet(
        strands=strands,
        area_weighted_centroid_y=centroid,
        total_area=total_area,
        full_width=full_width,
        is_cut=cut,
    )
